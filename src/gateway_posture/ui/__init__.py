"""Terminal output for verification reports."""

from .report import render_report, report_to_dict, summary_line

__all__ = ["render_report", "report_to_dict", "summary_line"]
