"""
Logging setup for the toolkit.

Modules log through logging.getLogger(__name__) and only record operation
names and lengths. RedactingFilter is a second line of defence that masks
anything resembling key material before it reaches a handler.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Final, Optional, Pattern

from .config import ToolkitSettings

LOGGER_NAME: Final[str] = "envelope_toolkit"

_SENSITIVE_PATTERNS: Final[list[tuple[str, Pattern[str]]]] = [
    ("key", re.compile(r'(?i)(private[_-]?key|secret|key)\s*[=:]\s*["\']?[^\s"\',]+["\']?')),
    # Hex runs of 32+ chars (keys, tags, envelopes)
    ("hex", re.compile(r'(?i)\b[a-f0-9]{32,}\b')),
    # Base64 runs of 40+ chars (RSA ciphertexts, PEM bodies)
    ("base64", re.compile(r'[A-Za-z0-9+/]{40,}={0,2}')),
]

_REDACTED_TEXT: Final[str] = "[REDACTED]"


class RedactingFilter(logging.Filter):
    """Mask secrets in log messages and string arguments. Never drops records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self._sanitize(record.msg)

        if isinstance(record.args, dict):
            record.args = {
                k: self._sanitize(v) if isinstance(v, str) else v
                for k, v in record.args.items()
            }
        elif isinstance(record.args, tuple):
            record.args = tuple(
                self._sanitize(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )

        return True

    @staticmethod
    def _sanitize(text: str) -> str:
        for name, pattern in _SENSITIVE_PATTERNS:
            text = pattern.sub(f"{name}={_REDACTED_TEXT}", text)
        return text


def configure_logging(
    level: Optional[str | int] = None,
    settings: Optional[ToolkitSettings] = None,
) -> logging.Logger:
    """
    Attach a stderr handler with RedactingFilter to the toolkit logger.

    Level resolution: explicit level, then settings, then ToolkitSettings
    loaded from the environment. Calling it again only updates the level.
    """
    if level is None:
        settings = settings or ToolkitSettings.from_env()
        level = settings.log_level_number
    elif isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(getattr(h, "_envelope_toolkit", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        ))
        handler.addFilter(RedactingFilter())
        handler._envelope_toolkit = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
