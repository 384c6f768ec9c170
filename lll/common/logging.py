"""Centralized logging configuration for the lll tool.

Loguru is the only logging facade. ``configure_logging()`` is called once by
the CLI; library modules just do ``from loguru import logger``.

All log output goes to stderr so stdout stays machine-readable (the reduced
basis is the only thing printed there).

Usage:
    >>> from lll.common.logging import configure_logging
    >>> from loguru import logger
    >>> configure_logging(verbose=True)
    >>> logger.debug("Reducing basis", rows=3)
"""

from __future__ import annotations

import sys

from loguru import logger


def configure_logging(verbose: bool = False) -> None:
    """Configure the global loguru logger.

    Args:
        verbose: If True, enable DEBUG level; if False, use WARNING level so
            normal runs print nothing besides the result.

    Note:
        Idempotent; each call replaces the previously installed sink.
    """
    logger.remove()  # Remove default handler

    log_format = (
        "<level>{level: <7}</level>| "
        "<dim><cyan>{file}:{line}</cyan></dim> | "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stderr,
        format=log_format,
        level="DEBUG" if verbose else "WARNING",
        colorize=None,
        backtrace=verbose,
        diagnose=verbose,
    )

    logger.level("DEBUG", color="<dim><white>")
    logger.level("ERROR", color="<fg #ff0000><bold>")
    logger.level("WARNING", color="<fg #ffff00><bold>")
