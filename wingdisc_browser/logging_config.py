from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "WINGDISC_BROWSER_LOG_FORMAT"
LOG_FORMATS = ("json", "plain")

_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"


def build_formatter(format_mode: str) -> logging.Formatter:
    """JSON records for anything but "plain"."""
    if format_mode == "plain":
        return logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    return jsonlogger.JsonFormatter(_FIELDS)


def configure_logging(
        level: int = logging.INFO,
        force_format: Optional[str] = None,
) -> None:
    """
    Install a single stream handler on the root logger.

    The format is taken from force_format, else from $WINGDISC_BROWSER_LOG_FORMAT,
    else "json". Structured fields passed via `extra=` end up as JSON keys.
    Calling this again swaps the handler instead of stacking a second one.
    """
    format_mode = (force_format or os.getenv(LOG_FORMAT_ENV, "json")).lower()

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(format_mode))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)
