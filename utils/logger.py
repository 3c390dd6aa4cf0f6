"""
Logging configuration for the application.
"""
import logging
import sys

from config import Config


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colored log levels."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _resolve_level(raw: str, default: int = logging.INFO) -> int:
    """Resolve a LOG_LEVEL value (name or number) into a logging level."""
    raw = (raw or "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def setup_logger(name: str, level: int | None = None) -> logging.Logger:
    """
    Set up a logger writing colored records to stdout.

    Args:
        name: Logger name
        level: Logging level, defaults to Config.LOG_LEVEL

    Returns:
        Configured logger instance
    """
    if level is None:
        level = _resolve_level(Config.LOG_LEVEL)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    logger.addHandler(handler)
    return logger


app_logger = setup_logger("resume_chat")
