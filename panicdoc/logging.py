"""Logging utilities for panicdoc commands."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import IO, Optional

_LOGGER_NAME = "panicdoc"
_LEVEL_ENV_VAR = "PANICDOC_LOG"

COLOR_CHOICES = ("auto", "always", "never")

_LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
_RESET = "\033[0m"


class ColorFormatter(logging.Formatter):
    """Formatter that wraps the level name in ANSI colour codes."""

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        original = record.levelname
        record.levelname = f"{color}{original}{_RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the panicdoc hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def use_color(color: str, stream: Optional[IO[str]] = None) -> bool:
    """Decide whether ANSI colours should be emitted for ``stream``."""
    if color == "always":
        return True
    if color == "never":
        return False
    if os.environ.get("NO_COLOR"):
        return False
    target = stream if stream is not None else sys.stderr
    isatty = getattr(target, "isatty", None)
    return bool(isatty and isatty())


def _level_from_env(default: int) -> int:
    configured = os.environ.get(_LEVEL_ENV_VAR)
    if not configured:
        return default
    level = logging.getLevelName(configured.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(
    *,
    verbose: bool = False,
    color: str = "auto",
    log_file: Path | None = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Configure the panicdoc logger with console output and optional file sink."""
    level = _level_from_env(logging.DEBUG if verbose else logging.INFO)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(stream)
    stream_handler.setLevel(level)
    fmt = "[panicdoc] %(levelname)s %(message)s"
    if use_color(color, stream_handler.stream):
        stream_handler.setFormatter(ColorFormatter(fmt))
    else:
        stream_handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["COLOR_CHOICES", "ColorFormatter", "configure_logging", "get_logger", "use_color"]
