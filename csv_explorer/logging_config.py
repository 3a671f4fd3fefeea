from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

ENV_LOG_FORMAT = "CSV_EXPLORER_LOG_FORMAT"
ENV_LOG_LEVEL = "CSV_EXPLORER_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Per-request chatter from the HTTP client and the dev server
NOISY_LOGGERS = ("httpx", "httpcore", "werkzeug")


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = os.getenv(ENV_LOG_LEVEL, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def build_formatter(format_mode: str) -> logging.Formatter:
    """
    "plain" -> human-readable single line, anything else -> one JSON object per
    record with the `extra={...}` fields as top-level keys.
    """
    if format_mode == "plain":
        return logging.Formatter(PLAIN_FORMAT)
    return jsonlogger.JsonFormatter(LOG_FORMAT)


def configure_logging(
        level: Union[int, str, None] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Install a single stderr handler on the root logger.

    Format is taken from force_format if given, else from CSV_EXPLORER_LOG_FORMAT
    ("json" by default). Level is taken from the argument, else from
    CSV_EXPLORER_LOG_LEVEL ("INFO" by default). HTTP client and dev server
    loggers are held at WARNING unless the root level is DEBUG.
    """
    format_mode = (force_format or os.getenv(ENV_LOG_FORMAT, "json")).lower()
    root_level = _resolve_level(level)

    root = logging.getLogger()
    root.setLevel(root_level)

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(format_mode))

    root.handlers.clear()
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING)
