"""Rich rendering of a verification report."""

from rich.console import Console
from rich.text import Text

from gateway_posture.settings import Settings
from gateway_posture.verify import CheckStatus, Report

STATUS_TAGS = {
    CheckStatus.PASS: ("[PASS]", "green bold"),
    CheckStatus.FAIL: ("[FAIL]", "red bold"),
    CheckStatus.WARN: ("[WARN]", "yellow bold"),
    CheckStatus.SKIP: ("[SKIP]", "dim"),
}


def summary_line(report: Report) -> str:
    line = (
        f"Summary: PASS={report.pass_count} "
        f"FAIL={report.fail_count} WARN={report.warn_count}"
    )
    if report.skip_count > 0:
        line += f" SKIP={report.skip_count}"
    return line


def render_report(
    report: Report, verbose: bool = False, console: Console | None = None
) -> None:
    console = console or Console(highlight=False, soft_wrap=True)

    for check in report.results:
        tag, style = STATUS_TAGS[check.status]
        line = Text.assemble((tag, style), " ", check.name)
        if check.message:
            line.append(f": {check.message}")
        if verbose and check.remediation and check.status == CheckStatus.FAIL:
            line.append(f" ({check.remediation})", style="dim")
        console.print(line)

    console.print()
    style = "green bold" if report.overall_success else "red bold"
    console.print(Text(summary_line(report), style=style))


def report_to_dict(report: Report, settings: Settings) -> dict:
    return {
        "settings": {
            "state_dir": str(settings.state_dir),
            "config_path": str(settings.config_path),
            "compose_files": [str(p) for p in settings.compose_files],
            "gateway_service": settings.gateway_service,
        },
        "checks": [
            {
                "name": c.name,
                "category": c.category.value,
                "status": c.status.value,
                "message": c.message,
                "remediation": c.remediation,
            }
            for c in report.results
        ],
        "summary": {
            "pass": report.pass_count,
            "fail": report.fail_count,
            "warn": report.warn_count,
            "skip": report.skip_count,
            "success": report.overall_success,
        },
    }
