"""Verification check types."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class CheckStatus(Enum):
    """Status of a verification check."""

    PASS = "pass"
    FAIL = "fail"
    WARN = "warn"
    SKIP = "skip"


class CheckCategory(Enum):
    """Kind of fact a check inspects."""

    FILESYSTEM = "filesystem"
    CONFIG = "config"
    RUNTIME = "runtime"


@dataclass(frozen=True)
class Outcome:
    """What a single check evaluation resolved to."""

    status: CheckStatus
    message: str = ""
    remediation: str | None = None


def passed(message: str = "") -> Outcome:
    return Outcome(CheckStatus.PASS, message)


def failed(message: str = "", remediation: str | None = None) -> Outcome:
    return Outcome(CheckStatus.FAIL, message, remediation)


def warned(message: str = "") -> Outcome:
    return Outcome(CheckStatus.WARN, message)


def skipped(message: str = "") -> Outcome:
    return Outcome(CheckStatus.SKIP, message)


@dataclass(frozen=True)
class Check:
    """A named, independently evaluable verification predicate."""

    label: str
    evaluate: Callable[[], Outcome]
    category: CheckCategory = CheckCategory.RUNTIME


@dataclass(frozen=True)
class CheckResult:
    """Result of a single verification check."""

    name: str
    status: CheckStatus
    message: str = ""
    remediation: str | None = None
    category: CheckCategory = CheckCategory.RUNTIME


@dataclass(frozen=True)
class Report:
    """Ordered results of one verification run."""

    results: tuple[CheckResult, ...] = ()

    def _count(self, status: CheckStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def pass_count(self) -> int:
        return self._count(CheckStatus.PASS)

    @property
    def fail_count(self) -> int:
        return self._count(CheckStatus.FAIL)

    @property
    def warn_count(self) -> int:
        return self._count(CheckStatus.WARN)

    @property
    def skip_count(self) -> int:
        return self._count(CheckStatus.SKIP)

    @property
    def overall_success(self) -> bool:
        """True when no check failed; warnings and skips do not count."""
        return self.fail_count == 0

    @property
    def exit_code(self) -> int:
        return 0 if self.overall_success else 1

    def get(self, name: str) -> CheckResult | None:
        """Return the first result with this name, if any."""
        for result in self.results:
            if result.name == name:
                return result
        return None
