"""
Logging setup for the AvaTax sync service.

Modules log through ``get_logger(__name__)`` and pass context as keyword
arguments. Context keys that name credentials are masked before a record is
emitted, so a stray ``license_key=...`` never reaches a handler.
"""
import logging
import logging.config
import json
import sys
from typing import Dict, Any, List, Optional
from pathlib import Path

from app.utils.time import utc_now

# Loggers that get the same handlers as the application namespace, with their level
_THIRD_PARTY_LEVELS = {
    "uvicorn": "INFO",
    "aiohttp.client": "WARNING",
    "sqlalchemy.engine": "WARNING",
}

_SECRET_KEY_MARKERS = ("license_key", "password", "token", "authorization")
_MASK = "***"


def _mask_secrets(context: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: _MASK if any(marker in key.lower() for marker in _SECRET_KEY_MARKERS) else value
        for key, value in context.items()
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line; structured context is merged at top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": utc_now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        payload.update(getattr(record, "context", None) or {})
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class StructuredLogger:
    """Thin wrapper that turns keyword arguments into record context."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _emit(self, level: int, message: str, exc_info: bool = False, **context):
        if not self.logger.isEnabledFor(level):
            return
        cleaned = _mask_secrets({k: v for k, v in context.items() if v is not None})
        self.logger.log(level, message, exc_info=exc_info, extra={"context": cleaned})

    def debug(self, message: str, **context):
        self._emit(logging.DEBUG, message, **context)

    def info(self, message: str, **context):
        self._emit(logging.INFO, message, **context)

    def warning(self, message: str, **context):
        self._emit(logging.WARNING, message, **context)

    def error(self, message: str, **context):
        self._emit(logging.ERROR, message, **context)


def _handler_configs(log_level: str, log_file: Optional[str], enable_console: bool) -> Dict[str, Dict[str, Any]]:
    handlers: Dict[str, Dict[str, Any]] = {}
    if enable_console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "stream": sys.stdout,
            "formatter": "plain",
            "level": log_level,
        }
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file,
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
            "formatter": "json",
            "level": log_level,
        }
    return handlers


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    enable_console: bool = True
) -> None:
    """
    Configure the ``app`` logger tree plus the third-party loggers we care about.

    Args:
        log_level: Level for application loggers and all handlers
        log_file: Rotating JSON log file; None disables file output
        enable_console: Plain-text output on stdout
    """
    handlers = _handler_configs(log_level, log_file, enable_console)
    names: List[str] = list(handlers)

    loggers: Dict[str, Dict[str, Any]] = {
        "app": {"level": log_level, "handlers": names, "propagate": False},
    }
    for name, level in _THIRD_PARTY_LEVELS.items():
        loggers[name] = {"level": level, "handlers": names, "propagate": False}

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JSONFormatter},
            "plain": {
                "format": "%(asctime)s %(levelname)-7s %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": loggers,
        "root": {"level": "WARNING", "handlers": names},
    })


def get_logger(name: str) -> StructuredLogger:
    """Structured logger under the ``app`` namespace (``app.*`` names pass through)."""
    if name == "app" or name.startswith("app."):
        return StructuredLogger(name)
    return StructuredLogger(f"app.{name}")


def log_business_event(
    event_type: str,
    details: Dict[str, Any],
    request_id: Optional[str] = None
) -> None:
    """
    Audit-log a business event such as ``config_saved`` or ``invoice_enqueued``.

    Args:
        event_type: Event name
        details: Event fields, logged as context
        request_id: Request ID for tracing, when called from a request
    """
    get_logger("audit").info(
        f"Business event: {event_type}",
        event_type=event_type,
        request_id=request_id,
        **details
    )


def log_performance(
    operation: str,
    duration_ms: float,
    additional_data: Optional[Dict[str, Any]] = None
) -> None:
    """Log how long an operation took, in milliseconds."""
    get_logger("performance").info(
        f"Performance: {operation}",
        operation=operation,
        duration_ms=round(duration_ms, 2),
        **(additional_data or {})
    )
