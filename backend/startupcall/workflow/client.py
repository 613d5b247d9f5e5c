from __future__ import annotations

import json
from typing import Any, Protocol

import requests
from pydantic_core import to_jsonable_python

from startupcall.core.config import settings
from startupcall.core.middleware.audit import get_logger

logger = get_logger()

STARTUP_NOT_FOUND = "Startup not found"
STARTUP_FORBIDDEN = "You do not have permission to view this startup"
STARTUP_LOAD_FAILED = "Failed to load startup"


class ApiError(Exception):
    """An API call failed. ``status_code`` is None when no response arrived."""

    def __init__(self, message: str, *, status_code: int | None = None, detail: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class FetchFailed(ApiError):
    pass


class MutationFailed(ApiError):
    pass


class HttpTransport(Protocol):
    def request(self, method: str, url: str, **kwargs: Any) -> Any: ...


def _detail_of(response: Any) -> Any:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("detail") or body.get("message") or body.get("error")
    return None


def _message_of(detail: Any, fallback: str) -> str:
    if isinstance(detail, str) and detail:
        return detail
    return fallback


class StartupCallClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        http: HttpTransport | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (settings.api_base_url if base_url is None else base_url).rstrip("/")
        self.http = http if http is not None else requests.Session()
        self.headers = dict(headers or {})
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds

    @classmethod
    def for_actor(cls, actor_id: str, roles: list[str], **kwargs: Any) -> StartupCallClient:
        """Client that authenticates through the dev actor header (non-prod only)."""
        headers = {settings.dev_actor_header: json.dumps({"actor_id": actor_id, "roles": roles})}
        headers.update(kwargs.pop("headers", None) or {})
        return cls(headers=headers, **kwargs)

    def _request(self, method: str, path: str, *, payload: Any, error_cls: type[ApiError], fallback: str) -> Any:
        url = f"{self.base_url}{path}"
        body = to_jsonable_python(payload) if payload is not None else None
        try:
            response = self.http.request(method, url, json=body, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("api.transport_error", method=method, path=path, error=str(e))
            raise error_cls(fallback, detail=str(e)) from e

        if response.status_code >= 400:
            detail = _detail_of(response)
            logger.info("api.error", method=method, path=path, status_code=response.status_code)
            raise error_cls(_message_of(detail, fallback), status_code=response.status_code, detail=detail)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def get(self, path: str) -> Any:
        return self._request("GET", path, payload=None, error_cls=FetchFailed, fallback="Failed to load data")

    def post(self, path: str, payload: Any) -> Any:
        return self._request("POST", path, payload=payload, error_cls=MutationFailed, fallback="Failed to save")

    def put(self, path: str, payload: Any) -> Any:
        return self._request("PUT", path, payload=payload, error_cls=MutationFailed, fallback="Failed to save")

    def patch(self, path: str, payload: Any) -> Any:
        return self._request("PATCH", path, payload=payload, error_cls=MutationFailed, fallback="Failed to update")

    def delete(self, path: str) -> Any:
        return self._request("DELETE", path, payload=None, error_cls=MutationFailed, fallback="Failed to delete")

    def load_startup(self, startup_id: str) -> dict[str, Any]:
        """Fetch one startup; errors carry fixed messages keyed by status."""
        try:
            return self.get(f"/api/startups/{startup_id}")
        except FetchFailed as e:
            if e.status_code == 404:
                message = STARTUP_NOT_FOUND
            elif e.status_code == 403:
                message = STARTUP_FORBIDDEN
            else:
                message = STARTUP_LOAD_FAILED
            raise FetchFailed(message, status_code=e.status_code, detail=e.detail) from e
