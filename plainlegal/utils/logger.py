"""Package-wide logger (``from plainlegal.utils.logger import logger``)."""
from __future__ import annotations
import logging
import os

_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


def get_logger(name: str = "plainlegal") -> logging.Logger:
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        log.addHandler(handler)
        log.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    return log


def set_level(level: str) -> None:
    logger.setLevel(level.upper())


logger = get_logger()
