"""Logging configuration for dottrack."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

# Diagnostics go to stderr so command output stays pipeable.
err_console = Console(stderr=True, emoji=False)


def setup_logging(verbose: bool = False) -> None:
    """Route ``dottrack`` loggers through a Rich handler.

    Transfer lines are logged at INFO and shown by default; manifest
    bookkeeping is logged at DEBUG and only shown with ``verbose``.
    """

    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger("dottrack")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = RichHandler(
        console=err_console,
        show_time=verbose,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    logger.debug("Logging initialized (verbose=%s)", verbose)
