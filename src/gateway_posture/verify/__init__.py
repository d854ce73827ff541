"""Security posture verification framework."""

from collections.abc import Iterable

from gateway_posture.facts import (
    ConfigFacts,
    ContainerFacts,
    DockerCompose,
    FilesystemFacts,
    JsonConfigFile,
    LocalFilesystem,
)
from gateway_posture.settings import Settings

from .gateway import is_wildcard, register_checks
from .runner import PostureChecker
from .types import CheckCategory, CheckResult, CheckStatus, Outcome, Report

__all__ = [
    "CheckCategory",
    "CheckResult",
    "CheckStatus",
    "Outcome",
    "PostureChecker",
    "Report",
    "build_checker",
    "is_wildcard",
    "run_all_checks",
]


def build_checker(
    settings: Settings,
    fs: FilesystemFacts | None = None,
    config: ConfigFacts | None = None,
    runtime: ContainerFacts | None = None,
) -> PostureChecker:
    """Build the gateway catalog, using local providers for anything not given."""
    return register_checks(
        PostureChecker(),
        settings,
        fs or LocalFilesystem(),
        config or JsonConfigFile(settings.config_path),
        runtime or DockerCompose(settings.compose_files),
    )


def run_all_checks(
    settings: Settings,
    categories: Iterable[CheckCategory] | None = None,
    **providers,
) -> Report:
    """Run verification checks for the deployment described by settings."""
    return build_checker(settings, **providers).run(categories)
