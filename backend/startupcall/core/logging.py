from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from startupcall.core.config import settings

# RequestIdMiddleware already emits one line per request.
_QUIET_LOGGERS = ("uvicorn.access",)


def _add_service(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", settings.service_name)
    event_dict.setdefault("env", settings.env.value)
    return event_dict


def configure_logging() -> None:
    """
    Route stdlib logging and structlog through one pipeline.

    Every line carries the service name, env, ISO UTC timestamp, level and the
    request/actor context bound by the middleware. Rendered as JSON unless
    ``log_json`` is off.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer = structlog.processors.JSONRenderer() if settings.log_json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _add_service,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
