import json
import logging
from pathlib import Path

import click

from gateway_posture import __version__
from gateway_posture.log import setup_logging
from gateway_posture.settings import DEFAULT_STATE_DIR, Settings
from gateway_posture.verify import CheckCategory

CATEGORY_NAMES = [c.value for c in CheckCategory]


def _settings(
    state_dir: Path, project_dir: Path, compose_files: tuple[Path, ...]
) -> Settings:
    return Settings(
        state_dir=state_dir,
        project_dir=project_dir,
        compose_files=compose_files,
    )


def deployment_options(fn):
    fn = click.option(
        "--compose-file",
        "compose_files",
        multiple=True,
        type=click.Path(path_type=Path),
        help="Compose file (repeatable; default: base + secure overlay)",
    )(fn)
    fn = click.option(
        "--project-dir",
        envvar="OPENCLAW_PROJECT_DIR",
        default=".",
        show_default=True,
        type=click.Path(file_okay=False, path_type=Path),
        help="Directory holding the compose files",
    )(fn)
    fn = click.option(
        "--state-dir",
        envvar="OPENCLAW_STATE_DIR",
        default=str(DEFAULT_STATE_DIR),
        show_default=True,
        type=click.Path(path_type=Path),
        help="Gateway state directory",
    )(fn)
    return fn


@click.group()
@click.version_option(__version__, prog_name="gateway-posture")
def main():
    """Security posture checks for a self-hosted gateway."""
    pass


@main.command()
@deployment_options
@click.option(
    "--category",
    "categories",
    multiple=True,
    type=click.Choice(CATEGORY_NAMES),
    help="Only run checks in this category (repeatable)",
)
@click.option(
    "--verbose", "-v", is_flag=True, help="Show remediation hints for failures"
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--debug", is_flag=True, help="Log every command and check outcome")
def verify(
    state_dir: Path,
    project_dir: Path,
    compose_files: tuple[Path, ...],
    categories: tuple[str, ...],
    verbose: bool,
    as_json: bool,
    debug: bool,
):
    """Verify filesystem, config and container hardening."""
    from gateway_posture.ui import render_report, report_to_dict
    from gateway_posture.verify import run_all_checks

    setup_logging(logging.DEBUG if debug else logging.WARNING)
    settings = _settings(state_dir, project_dir, compose_files)
    selected = [CheckCategory(c) for c in categories] or None

    report = run_all_checks(settings, selected)

    if as_json:
        click.echo(json.dumps(report_to_dict(report, settings), indent=2))
    else:
        render_report(report, verbose=verbose)

    raise SystemExit(report.exit_code)


@main.command()
@deployment_options
def checks(state_dir: Path, project_dir: Path, compose_files: tuple[Path, ...]):
    """List the verification catalog without running it."""
    from gateway_posture.verify import build_checker

    settings = _settings(state_dir, project_dir, compose_files)
    for check in build_checker(settings).checks:
        click.echo(f"{check.category.value:<10} {check.label}")


if __name__ == "__main__":
    main()
