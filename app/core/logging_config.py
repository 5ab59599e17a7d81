"""
Logging setup for the JobPortal API.

Console plus a rotating file under LOG_DIR. Request bodies that end up in
log lines go through sanitize_log_data() first.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

LOG_FILE_NAME = "jobportal.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that are noisy at INFO
QUIET_LOGGERS = ("uvicorn", "uvicorn.access", "httpx", "httpcore", "sqlalchemy.engine", "alembic")

REDACTED = "***REDACTED***"
SENSITIVE_KEYS = ("password", "token", "secret", "authorization", "api_key", "database_url")


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = "logs"):
    """
    Configure the root logger.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (unknown values fall back to INFO)
        log_dir: Directory for jobportal.log; None or "" logs to the console only
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(_handler(logging.StreamHandler(sys.stdout), level, CONSOLE_FORMAT))

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path / LOG_FILE_NAME,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
        )
        root.addHandler(_handler(file_handler, level, FILE_FORMAT))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def sanitize_log_data(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Copy of `data` with secret-looking values redacted, nested dicts included.
    """
    sanitized = {}
    for key, value in (data or {}).items():
        if any(sensitive in str(key).lower() for sensitive in SENSITIVE_KEYS):
            sanitized[key] = REDACTED
        elif isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)
        else:
            sanitized[key] = value
    return sanitized
