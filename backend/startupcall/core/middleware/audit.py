"""Request-scoped context shared by logging and the audit trail.

Values live in structlog's contextvars, so every log line emitted while a
request is handled carries them. Handlers running in the threadpool do not
see values bound after they start; services pass the actor explicitly when
writing audit events.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog
from structlog import contextvars


def bind_request(request_id: str, *, method: str | None = None, path: str | None = None) -> None:
    contextvars.clear_contextvars()
    contextvars.bind_contextvars(request_id=request_id)
    if method is not None:
        contextvars.bind_contextvars(method=method, path=path)


def set_actor(actor_id: str, roles: Iterable[str]) -> None:
    contextvars.bind_contextvars(actor_id=actor_id, actor_roles=sorted(roles))


def clear_context() -> None:
    contextvars.clear_contextvars()


def _bound(key: str) -> Any:
    return contextvars.get_contextvars().get(key)


def get_request_id() -> str | None:
    value = _bound("request_id")
    return str(value) if value is not None else None


def get_actor_id() -> str | None:
    value = _bound("actor_id")
    return str(value) if value is not None else None


def get_actor_roles() -> list[str]:
    roles = _bound("actor_roles")
    return [str(r) for r in roles] if isinstance(roles, list) else []


def get_logger(**initial: Any) -> Any:
    return structlog.get_logger(**initial)
