# app/utils/logger_utils.py

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path

from app.core.constants import (
    LOG_BACKUP_COUNT,
    LOG_DIR_NAME,
    LOG_FILE_PREFIX,
    LOG_MAX_BYTES,
    LOGGER_NAME,
)

CONSOLE_DATE_FORMAT = "%H:%M:%S"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
FILE_LINE_FORMAT = "{asctime} | {levelname:<8} | {module}:{funcName}:{lineno} - {message}"


class LogColors:
    RESET = "\x1b[0m"
    DIM = "\x1b[2m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    RED = "\x1b[31m"
    BOLD_RED = "\x1b[31;1m"
    CYAN = "\x1b[36m"


class ColoredFormatter(logging.Formatter):
    """
    Console formatter: `<time> | <level> | <module:func:line> - <message>`,
    with the level and message colored by severity.
    """

    LEVEL_COLORS = {
        logging.DEBUG: LogColors.DIM,
        logging.INFO: LogColors.GREEN,
        logging.WARNING: LogColors.YELLOW,
        logging.ERROR: LogColors.RED,
        logging.CRITICAL: LogColors.BOLD_RED,
    }

    def __init__(self, datefmt=CONSOLE_DATE_FORMAT):
        super().__init__(datefmt=datefmt)

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno, LogColors.RESET)
        where = f"{record.module}:{record.funcName}:{record.lineno}"

        line = (
            f"{self.formatTime(record, self.datefmt)} | "
            f"{color}{record.levelname:<8}{LogColors.RESET} | "
            f"{LogColors.CYAN}{where}{LogColors.RESET} - "
            f"{color}{record.getMessage()}{LogColors.RESET}"
        )

        if record.exc_info:
            if not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)
            line += f"\n{LogColors.RED}{record.exc_text}{LogColors.RESET}"
        return line


_logger_instance: logging.Logger | None = None
_custom_log_dir: Path | None = None


def set_log_directory(log_dir):
    """Sets where the log file goes. Only takes effect before the logger is first used."""
    global _custom_log_dir
    _custom_log_dir = Path(log_dir)


def get_logger() -> logging.Logger:
    """The shared application logger, created on first use."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = setup_logger(_custom_log_dir)
    return _logger_instance


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(ColoredFormatter())
    return handler


def _file_handler(log_dir: Path) -> logging.Handler:
    # One file per session, rotated if a session logs a lot
    stamp = datetime.now().strftime("%Y%m%d_%H-%M-%S")
    handler = logging.handlers.RotatingFileHandler(
        log_dir / f"{LOG_FILE_PREFIX}_{stamp}.log",
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=FILE_LINE_FORMAT, datefmt=FILE_DATE_FORMAT, style="{"))
    return handler


def setup_logger(log_dir=None) -> logging.Logger:
    """
    Builds the application logger with a colored console handler and a
    rotating file handler. Calling it again replaces the handlers.
    """
    log_dir = Path(log_dir) if log_dir is not None else Path(__file__).resolve().parents[2] / LOG_DIR_NAME
    log_dir.mkdir(parents=True, exist_ok=True)

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(logging.DEBUG)
    app_logger.propagate = False

    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    app_logger.addHandler(_console_handler())
    app_logger.addHandler(_file_handler(log_dir))
    return app_logger


def reconfigure_logger(log_dir) -> logging.Logger:
    """Points the logger at `log_dir`. Called from main.py once the app folder is known."""
    global _logger_instance
    set_log_directory(log_dir)
    _logger_instance = setup_logger(_custom_log_dir)
    return _logger_instance


class LoggerProxy:
    """Module-level stand-in for the logger so importing it never creates log files."""

    def __getattr__(self, name):
        return getattr(get_logger(), name)


logger = LoggerProxy()
__all__ = ["logger", "reconfigure_logger", "set_log_directory", "get_logger"]
