"""Sequential check runner."""

import logging
from collections.abc import Callable, Iterable

from gateway_posture.errors import FactUnavailable

from .types import Check, CheckCategory, CheckResult, CheckStatus, Outcome, Report

logger = logging.getLogger(__name__)


class PostureChecker:
    """Ordered catalog of checks evaluated one after another.

    Registration order is execution order and reporting order. Labels are not
    required to be unique.
    """

    def __init__(self) -> None:
        self._checks: list[Check] = []

    @property
    def checks(self) -> tuple[Check, ...]:
        return tuple(self._checks)

    def register_check(
        self,
        label: str,
        evaluate: Callable[[], Outcome],
        category: CheckCategory = CheckCategory.RUNTIME,
    ) -> Check:
        """Append a check to the catalog and return it."""
        check = Check(label=label, evaluate=evaluate, category=category)
        self._checks.append(check)
        return check

    def run(self, categories: Iterable[CheckCategory] | None = None) -> Report:
        """Evaluate every registered check in order.

        Args:
            categories: Only run checks in these categories (None = all)

        Returns:
            Report with one result per evaluated check
        """
        wanted = set(categories) if categories is not None else None
        results = [
            run_check(check)
            for check in self._checks
            if wanted is None or check.category in wanted
        ]
        return Report(tuple(results))


def run_check(check: Check) -> CheckResult:
    """Evaluate one check, turning any raised error into a failure."""
    try:
        outcome = check.evaluate()
    except FactUnavailable as exc:
        logger.debug("%s: fact unavailable: %s", check.label, exc)
        outcome = Outcome(CheckStatus.FAIL, _describe(exc))
    except Exception as exc:
        logger.warning(
            "Check %r raised %s: %s", check.label, type(exc).__name__, exc
        )
        outcome = Outcome(CheckStatus.FAIL, _describe(exc))
    else:
        if not isinstance(outcome, Outcome):
            outcome = Outcome(
                CheckStatus.FAIL, f"check returned {type(outcome).__name__}"
            )

    logger.debug("%s: %s %s", check.label, outcome.status.name, outcome.message)
    return CheckResult(
        name=check.label,
        status=outcome.status,
        message=outcome.message,
        remediation=outcome.remediation,
        category=check.category,
    )


def _describe(exc: Exception) -> str:
    text = str(exc).strip()
    return text or type(exc).__name__
