# ai_logger.py
"""
Color-friendly logging for the SINAICA client: console + optional rotating file.

Usage:
    from src.utils.ai_logger import sinaicaLogger, get_logger, configure_logger

    sinaicaLogger.info("Catalog loaded")
    log = get_logger("api")          # -> "sinaica.api"
    log.debug("details...")

Env overrides:
    SINAICA_LOG_LEVEL=INFO
    SINAICA_LOG_FILE=/path/to/sinaica.log
    SINAICA_LOG_NO_COLOR=1
"""

# pylint: disable=W0603

from __future__ import annotations

import os
import sys
from typing import Optional, TextIO
import logging
import logging.handlers
import colorama

BASE_NAME = "sinaica"

__CONFIGURED = False

# ########################################################################
# Color support
# ########################################################################


_RESET = "\x1b[0m"
_BOLD = "\x1b[1m"

LEVEL_STYLE = {
    logging.DEBUG: "\x1b[36m",              # cyan
    logging.INFO: "\x1b[92m",               # light green
    logging.WARNING: "\x1b[33m",            # yellow
    logging.ERROR: "\x1b[31m",              # red
    logging.CRITICAL: _BOLD + "\x1b[31m",
}

DEFAULT_FMT = (
    "Process:%(process)d||%(asctime)s-%(levelname)s "
    "[%(name)s:%(funcName)s():%(lineno)d]: %(message)s"
)
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _stream_supports_color(stream: object) -> bool:
    """Return True if stream is a TTY."""
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (ValueError, OSError):
        # closed or detached stream
        return False


# ########################################################################
# Formatter
# ########################################################################


class ColorFormatter(logging.Formatter):
    """
    Highlights the level name and message with ANSI colors.
    Plain text when color is disabled or the stream is not a terminal.
    """

    def __init__(
                self,
                fmt: Optional[str] = None,
                datefmt: Optional[str] = None,
                use_color: Optional[bool] = None,
                stream: Optional[object] = None
                ):
        super().__init__(fmt or DEFAULT_FMT, datefmt or DEFAULT_DATEFMT)
        if use_color is None:
            use_color = _stream_supports_color(stream or sys.stdout)
        if use_color and sys.platform.startswith("win"):
            colorama.just_fix_windows_console()
        self.use_color = bool(use_color)

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)

        style = LEVEL_STYLE.get(record.levelno, "")
        levelname, msg, args = record.levelname, record.msg, record.args
        record.levelname = f"{style}{levelname}{_RESET}"
        record.msg = f"{style}{record.getMessage()}{_RESET}"
        record.args = None
        try:
            return super().format(record)
        finally:
            record.levelname, record.msg, record.args = levelname, msg, args


# ########################################################################
# Configuration
# ########################################################################


def _resolve_level(level: Optional[int | str]) -> int:
    if level is None:
        level = os.getenv("SINAICA_LOG_LEVEL") or "INFO"
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def configure_logger(
                    name: str = BASE_NAME,
                    level: Optional[int | str] = None,
                    use_color: Optional[bool] = None,
                    filename: Optional[str] = None,
                    max_bytes: int = 5 * 1024 * 1024,
                    backup_count: int = 3,
                    stream: Optional[TextIO] = None,
                ) -> logging.Logger:
    """
    Configure and return a logger.

    Args:
        name: Logger name.
        level: Logging level or name. Defaults to env SINAICA_LOG_LEVEL or INFO.
        use_color: Force color on/off. Defaults to auto-detect.
        stream: Console stream. Defaults to stdout.
        filename: Rotating log file. Defaults to env SINAICA_LOG_FILE (none if unset).
        max_bytes: Rotation size.
        backup_count: Number of rotated backups to keep.
    """
    global __CONFIGURED

    level = _resolve_level(level)
    if filename is None:
        filename = os.getenv("SINAICA_LOG_FILE")
    if use_color is None and os.getenv("SINAICA_LOG_NO_COLOR"):
        use_color = False

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Reconfiguring replaces handlers instead of stacking them
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    stream = stream or sys.stdout
    console = logging.StreamHandler(stream=stream)
    console.setLevel(level)
    console.setFormatter(ColorFormatter(use_color=use_color, stream=stream))
    logger.addHandler(console)

    if filename:
        folder = os.path.dirname(filename)
        if folder:
            os.makedirs(folder, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
                                                            filename,
                                                            maxBytes=max_bytes,
                                                            backupCount=backup_count,
                                                            encoding="utf-8"
                                                            )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(DEFAULT_FMT, datefmt=DEFAULT_DATEFMT))
        logger.addHandler(file_handler)

    logger.propagate = False

    __CONFIGURED = True

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a child of the `sinaica` logger; configures it once if needed.
    """
    if not __CONFIGURED:
        configure_logger(BASE_NAME)
    return logging.getLogger(BASE_NAME if not name else f"{BASE_NAME}.{name}")


sinaicaLogger = get_logger()
