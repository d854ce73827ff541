"""Logging setup."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int = logging.WARNING) -> None:
    """Send log records to stderr so stdout carries only the report."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("gateway_posture")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
