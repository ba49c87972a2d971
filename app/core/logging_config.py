"""
Logging configuration for the Job Board API.

Everything goes to stdout. With a log directory configured, the full stream
is also written to `jobboard.log`, and access denials plus application status
changes are copied to `audit.log` so decisions can be reviewed on their own.
Both files rotate.
"""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from app.core import config

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers whose records also land in audit.log
AUDIT_LOGGERS = (
    "app.core.authorization",
    "app.services.application_service",
    "app.services.job_service",
)

QUIET_LOGGERS = ("uvicorn", "uvicorn.access", "sqlalchemy.engine")

SENSITIVE_KEYS = ("password", "token", "secret", "key", "authorization", "database_url")
REDACTED = "***REDACTED***"


def _rotating_handler(path: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = None):
    """
    Configure application logging.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        log_dir: Directory for jobboard.log and audit.log. Defaults to
            LOG_DIR; an empty value keeps logging on stdout only.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    log_dir = config.LOG_DIR if log_dir is None else log_dir

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(console_handler)

    for name in AUDIT_LOGGERS:
        audit_logger = logging.getLogger(name)
        for handler in audit_logger.handlers[:]:
            audit_logger.removeHandler(handler)
            handler.close()

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        root.addHandler(_rotating_handler(directory / "jobboard.log", level))

        # Audit records keep INFO even when the root level is raised
        audit_handler = _rotating_handler(directory / "audit.log", logging.INFO)
        for name in AUDIT_LOGGERS:
            audit_logger = logging.getLogger(name)
            audit_logger.setLevel(logging.INFO)
            audit_logger.addHandler(audit_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _is_sensitive(key: Any) -> bool:
    return isinstance(key, str) and any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS)


def sanitize_log_data(data: dict) -> dict:
    """
    Copy of `data` with credential values redacted, nested dicts and lists included.

    The input is not modified.
    """
    sanitized = {}
    for key, value in data.items():
        if _is_sensitive(key):
            sanitized[key] = REDACTED
        elif isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)
        elif isinstance(value, list):
            sanitized[key] = [sanitize_log_data(item) if isinstance(item, dict) else item for item in value]
        else:
            sanitized[key] = value
    return sanitized
