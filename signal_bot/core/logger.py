"""
Logging for the signal engine.

Everything logs under the "signal_bot" namespace (strategy, replay, data.csv).
Timestamps are UTC so log lines line up with candle open times.
"""

from __future__ import annotations
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "signal_bot"
LOG_FORMAT = "%(asctime)sZ | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# marks handlers owned by setup_logging so a re-run only swaps its own
_OWNED = "_signal_bot_handler"


def get_logger(component: str = "") -> logging.Logger:
    """Logger for a component, e.g. get_logger("replay") -> signal_bot.replay."""
    return logging.getLogger(f"{LOGGER_NAME}.{component}" if component else LOGGER_NAME)


def _level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def _formatter() -> logging.Formatter:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    formatter.converter = time.gmtime
    return formatter


def setup_logging(
    level: Union[str, int] = "INFO",
    log_dir: Optional[Path] = None,
    log_file: Optional[str] = None,
    console: bool = True,
) -> logging.Logger:
    """
    Attach console and/or file handlers to the signal_bot logger.
    Calling it again replaces (and closes) the handlers from the previous call;
    handlers added by anything else are left alone.
    """
    logger = get_logger()
    logger.setLevel(_level(level))
    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stdout))
    if log_dir and log_file:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path / log_file, encoding="utf-8"))

    formatter = _formatter()
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)
    return logger
