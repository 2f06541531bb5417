"""Module logger factory writing to ``log.txt`` beside the package."""

from __future__ import annotations

import logging
import os
from pathlib import Path

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_LOG_PATH = Path(__file__).resolve().parents[2] / "log.txt"


def get_logger(name: str) -> logging.Logger:
    """Return ``name``'s logger with the shared file handler attached once."""

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = os.getenv("MENTOR_CLIENT_LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level, logging.INFO))
    try:
        _LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(_LOG_PATH, encoding="utf-8")
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    except OSError:
        handler = logging.NullHandler()
    logger.addHandler(handler)
    return logger


__all__ = ["get_logger"]
