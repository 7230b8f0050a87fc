"""Define utility functions to simplify logging to the CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()
"""Console shared by every rich-rendered output of the package."""


def configure_logging(level: int | str = logging.INFO) -> None:
    """Route the package's log records through a rich handler at the given level.

    :param level: Minimum severity of records emitted by the package loggers
    """
    package_logger = logging.getLogger("cartesian_motion")
    package_logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)
