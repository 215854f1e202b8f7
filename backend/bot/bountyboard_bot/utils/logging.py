"""Logger factory and event helpers for the bounty board.

Every module asks for ``get_logger(__name__)``. The first call configures the
root handler (level from ``LOG_LEVEL``) and registers :class:`BoardLogger`, so
board code can write one-line ``event=... key=value`` records that are easy to
grep across loads, renders and stale drops.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Optional, cast

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DEFAULT_LEVEL = logging.INFO

_LOGGER_CLASS_CONFIGURED = False
_LOGGING_CONFIGURED = False


def _resolve_level() -> int:
    raw = os.getenv("LOG_LEVEL", "").strip().upper()
    if not raw:
        return DEFAULT_LEVEL
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else DEFAULT_LEVEL


def _ensure_logging_configured() -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(level=_resolve_level(), format=DEFAULT_FORMAT)
    _LOGGING_CONFIGURED = True


def format_fields(fields: Mapping[str, Any]) -> str:
    """Render ``key=value`` pairs in insertion order; values with spaces are quoted."""

    parts = []
    for key, value in fields.items():
        text = str(value)
        if not text or any(ch.isspace() for ch in text):
            text = repr(text)
        parts.append(f"{key}={text}")
    return " ".join(parts)


class BoardLogger(logging.Logger):
    """``logging.Logger`` with event helpers for board state transitions."""

    def structured(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        if fields:
            self.log(level, "event=%s %s", event, format_fields(fields))
        else:
            self.log(level, "event=%s", event)

    def board_event(
        self,
        event: str,
        category: str,
        *,
        token: Optional[int] = None,
        level: int = logging.INFO,
        **fields: Any,
    ) -> None:
        """Log a board transition, always leading with its category and request token."""

        context: dict[str, Any] = {"category": category}
        if token is not None:
            context["token"] = token
        context.update(fields)
        self.structured(event, level, **context)


def _ensure_logger_class() -> None:
    global _LOGGER_CLASS_CONFIGURED
    if _LOGGER_CLASS_CONFIGURED:
        return
    logging.setLoggerClass(BoardLogger)
    _LOGGER_CLASS_CONFIGURED = True


def get_logger(name: str) -> BoardLogger:
    """Return the :class:`BoardLogger` for ``name``, configuring logging on first use."""

    _ensure_logger_class()
    _ensure_logging_configured()
    logger = logging.getLogger(name)
    if not isinstance(logger, BoardLogger):
        # Loggers created before the class was registered.
        logger.__class__ = BoardLogger
    return cast(BoardLogger, logger)


__all__ = ["BoardLogger", "DEFAULT_FORMAT", "format_fields", "get_logger"]
