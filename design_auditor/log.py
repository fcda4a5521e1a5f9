"""
Logging Setup

The library logs through loguru. The CLI routes those records to a rich
console so log lines and progress output share one terminal.
"""

import sys
from typing import Optional

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "INFO", console: Optional[Console] = None) -> None:
    """
    Replace loguru's default sink with a RichHandler.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...)
        console: Console to render on; defaults to a stderr console
    """
    console = console or Console(file=sys.stderr)

    logger.remove()
    logger.add(
        RichHandler(console=console, show_path=False, markup=False, rich_tracebacks=True),
        level=level,
        format="{message}",
        backtrace=False,
        diagnose=False,
    )
