"""
Unified logging module for clipnote.
Supports dual output: console (for container logs) and Logtail (for centralized logging).
"""
import json
import logging
import os
import sys
from typing import Dict

# Logtail is an optional extra; console logging works without it.
try:
    from logtail import LogtailHandler
    LOGTAIL_AVAILABLE = True
except ImportError:
    LOGTAIL_AVAILABLE = False
    LogtailHandler = None


class StructuredFormatter(logging.Formatter):
    """Formatter that renders dict messages as JSON for Logtail."""

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            log_data = {
                "message": record.msg.get("message", ""),
                "level": record.levelname,
                "module": record.module,
                "timestamp": self.formatTime(record, self.datefmt),
            }
            log_data.update({k: v for k, v in record.msg.items() if k != "message"})
            return json.dumps(log_data, default=str)
        return super().format(record)


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output."""

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


_loggers: Dict[str, logging.Logger] = {}


def _resolve_level() -> int:
    name = os.getenv("CLIPNOTE_LOG_LEVEL", "INFO").strip().upper()
    return getattr(logging, name, logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger with console and Logtail handlers.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    if name in _loggers:
        return _loggers[name]

    level = _resolve_level()
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        _loggers[name] = logger
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(ConsoleFormatter())
    logger.addHandler(console_handler)

    logtail_token = os.getenv("LOGTAIL_SOURCE_TOKEN")
    logtail_host = os.getenv("LOGTAIL_INGEST_HOST", "in.logtail.com")

    if LOGTAIL_AVAILABLE and logtail_token:
        try:
            logtail_handler = LogtailHandler(source_token=logtail_token, host=logtail_host)
            logtail_handler.setLevel(level)
            logtail_handler.setFormatter(StructuredFormatter())
            logger.addHandler(logtail_handler)
            logger.info({"event": "logger_init", "module": name, "logtail_enabled": True})
        except Exception as e:
            logger.warning("Failed to initialize Logtail handler: %s. Using console logging only.", e)
    elif logtail_token:
        logger.debug("logtail-python not available. Install with: pip install logtail-python")

    _loggers[name] = logger
    return logger
