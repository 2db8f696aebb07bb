"""
Logging setup for Digital Hub.

Every module logs through a named logger:

    from core.logging import get_logger
    logger = get_logger(__name__)

Handlers are attached to the root logger once, on first import. Level comes
from LOG_LEVEL; on Vercel (VERCEL=1) the timestamp is dropped because the
platform adds its own.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "aiogram")

_LOG_INJECTION_CHARS = {"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""}


def _level_from_env() -> int:
    return getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)


def configure_logging(level: int | None = None, force: bool = False) -> None:
    """
    Attach a stdout handler to the root logger.

    Does nothing when the root logger already has handlers (pytest, uvicorn)
    unless ``force`` is set.
    """
    root = logging.getLogger()
    if root.handlers and not force:
        return

    level = level if level is not None else _level_from_env()
    fmt = LOG_FORMAT_SIMPLE if os.environ.get("VERCEL") == "1" else LOG_FORMAT

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))

    if force:
        root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _escape(value: str) -> str:
    """Neutralize control characters that could forge log lines (CWE-117)."""
    for char, replacement in _LOG_INJECTION_CHARS.items():
        value = value.replace(char, replacement)
    return value


def sanitize_id_for_logging(id_value: str | None) -> str:
    """Session and order ids are client-supplied: log only an escaped 8-char prefix."""
    if not id_value:
        return "N/A"
    return _escape(str(id_value))[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Escape and cap free text (payment references, item names) before logging."""
    if not value:
        return "N/A"
    safe_value = _escape(str(value))
    if len(safe_value) > max_length:
        return safe_value[:max_length] + "..."
    return safe_value


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
