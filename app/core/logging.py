"""
Logging Utilities

``get_logger`` returns a stdlib logger adapter that stamps the current
request and actor onto every record. ``get_business_logger`` returns a
structlog logger for occupancy events (``tenant_vacated``, ``bed_deleted``)
rendered through the same stdlib handlers.
"""

import logging
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from contextvars import ContextVar

import structlog

from app.config.settings import settings

# Set by the request-id middleware and the actor dependency
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
actor_id: ContextVar[Optional[str]] = ContextVar('actor_id', default=None)


def _request_context() -> Dict[str, str]:
    context = {}
    req_id = request_id.get()
    if req_id:
        context['request_id'] = req_id
    uid = actor_id.get()
    if uid:
        context['actor_id'] = uid
    return context


def add_request_context(logger, method_name, event_dict):
    """structlog processor: request context, timestamp and environment"""
    for key, value in _request_context().items():
        event_dict.setdefault(key, value)
    event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
    event_dict['environment'] = settings.ENVIRONMENT
    return event_dict


_structlog_configured = False


def configure_structlog() -> None:
    """Route structlog through the stdlib logging tree; runs once"""
    global _structlog_configured
    if _structlog_configured:
        return

    processors = [
        add_request_context,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
    ]
    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer(default=str))
    else:
        processors.append(structlog.processors.KeyValueRenderer(key_order=['event']))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _structlog_configured = True


class LoggerAdapter:
    """Stdlib logger with bound fields and request context in ``extra``"""

    def __init__(self, logger: logging.Logger, context: Optional[Dict[str, Any]] = None):
        self.logger = logger
        self._context: Dict[str, Any] = dict(context or {})

    def bind(self, **fields: Any) -> "LoggerAdapter":
        return LoggerAdapter(self.logger, {**self._context, **fields})

    def _log(self, level: int, message: str, *args, **kwargs):
        extra = {**_request_context(), **self._context, **(kwargs.get('extra') or {})}
        kwargs['extra'] = extra
        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    return LoggerAdapter(logging.getLogger(name or 'app'))


def get_business_logger(name: str = "app.business"):
    """
    Structured logger for business events.

    Usage:
        get_business_logger().info("bed_deleted", bed_id=bed.id)
    """
    configure_structlog()
    return structlog.get_logger(name)


__all__ = [
    'get_logger',
    'get_business_logger',
    'configure_structlog',
    'LoggerAdapter',
    'request_id',
    'actor_id',
]
