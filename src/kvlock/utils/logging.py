"""Logging helpers with consistent formatting."""

from __future__ import annotations

import logging
import sys

from rich.logging import RichHandler

from kvlock.utils.env import get_bool_env


def get_logger(name: str, level: int = logging.INFO, *, rich: bool | None = None) -> logging.Logger:
    """Configure and return a logger.

    ``rich`` defaults to the ``KVLOCK_RICH_LOGS`` environment flag (on unless disabled).
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    if rich is None:
        rich = get_bool_env("KVLOCK_RICH_LOGS", default=True)

    if rich:
        handler: logging.Handler = RichHandler(
            level=level,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            show_time=True,
            show_path=False,
        )
        formatter = logging.Formatter("%(name)s: %(message)s")
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        formatter = logging.Formatter(
            "%(asctime)s %(name)s [%(threadName)s] %(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.propagate = False
    return logger
