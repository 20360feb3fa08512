"""Logging setup for the Huddle backend.

All loggers live under the "huddle" parent logger, which owns the
handlers: a console handler always, plus a rotating file per
setup_logging() name outside of tests. Module loggers only propagate.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from huddle.settings import settings

LOG_FORMAT = "[%(asctime)s.%(msecs)03d][%(levelname)s][%(filename)s:%(lineno)d]: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "huddle"


def _formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def _ensure_app_logger_configured() -> logging.Logger:
    """Attach the console handler to the parent logger once."""
    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if any(getattr(h, "_huddle_console", False) for h in app_logger.handlers):
        return app_logger

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_formatter())
    console_handler._huddle_console = True
    app_logger.addHandler(console_handler)
    app_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    # uvicorn configures the root logger; keep our records out of it
    app_logger.propagate = False
    return app_logger


def setup_logging(log_name: str = "api") -> logging.Logger:
    """
    Configure logging for a process and return its logger.

    Outside the test environment, records of every huddle.* logger are
    also written to {logs_root}/{log_name}.log, rotated at
    settings.log_max_bytes.
    """
    app_logger = _ensure_app_logger_configured()

    log_dir = None if settings.is_test() else _get_logs_root()
    if log_dir is not None:
        log_file = str(log_dir / f"{log_name}.log")
        already_attached = any(
            isinstance(h, RotatingFileHandler) and h.baseFilename == log_file for h in app_logger.handlers
        )
        if not already_attached:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(_formatter())
            app_logger.addHandler(file_handler)
            app_logger.info(f"Logging to {log_file}")

    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{log_name}")


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, moved under the huddle.* namespace if needed."""
    _ensure_app_logger_configured()

    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def _get_logs_root() -> Path | None:
    """Logs root from settings, or None if it cannot be created."""
    logs_root = settings.get_logs_root()
    try:
        logs_root.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return logs_root


_ensure_app_logger_configured()
