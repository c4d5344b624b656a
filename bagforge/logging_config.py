"""
Logging setup for the command line.

Library modules only create loggers; handlers are installed here, once,
by the application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(
    *,
    level: int | str = logging.WARNING,
    rich_output: bool = True,
    stream: Any = None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level (default WARNING).
        rich_output: Use rich's handler instead of a plain formatter.
        stream: Output stream (default stderr).
    """
    if stream is None:
        stream = sys.stderr

    if rich_output:
        handler: logging.Handler = RichHandler(
            console=Console(file=stream),
            show_path=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()
    root.addHandler(handler)
