"""
Process-wide logging setup for EventLens.

Every module asks for its logger through get_logger(__name__). The first call
attaches one stream handler to the root logger; later calls only refresh the
level, so EVENTLENS_LOG_LEVEL changes made after import (tests, .env loading)
take effect on the next logger lookup.
"""

from __future__ import annotations

import logging
import threading
from typing import Final

from eventlens.infrastructure.settings import get_log_level

_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

_handler: logging.Handler | None = None
_handler_lock = threading.Lock()


def _level_from_settings() -> int:
    level = logging.getLevelName(get_log_level())
    # getLevelName returns a "Level X" string for unknown names
    return level if isinstance(level, int) else logging.INFO


def _ensure_handler(level: int) -> None:
    global _handler
    root = logging.getLogger()
    with _handler_lock:
        if _handler is None:
            _handler = logging.StreamHandler()
            _handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
            root.addHandler(_handler)
    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger writing through the shared EventLens handler.

    Side Effects:
        - Attaches a StreamHandler to the root logger on first call
        - Sets root and named logger level from EVENTLENS_LOG_LEVEL
    """
    level = _level_from_settings()
    _ensure_handler(level)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger
