from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from startupcall.core.middleware.audit import get_logger
from startupcall.workflow.client import ApiError, StartupCallClient
from startupcall.workflow.query_cache import QueryCache
from startupcall.workflow.roles import RoleFlags

logger = get_logger()

PERMISSION_DENIED = "You do not have permission to perform this action"


class Panel:
    """
    Content of one startup tab.

    A panel reads the startup record and role flags but never changes them.
    It owns its query cache: reads are lazy, seeded from data embedded in the
    startup record when present, and a successful mutation invalidates the
    panel's own key. Failures land in ``error`` instead of propagating.
    """

    tab_id: ClassVar[str]
    resource: ClassVar[str]
    embedded_key: ClassVar[str | None] = None

    def __init__(
        self,
        client: StartupCallClient,
        startup: Mapping[str, Any],
        roles: RoleFlags,
        *,
        viewer_id: str | None = None,
        cache: QueryCache | None = None,
    ) -> None:
        self.client = client
        self.startup: Mapping[str, Any] = MappingProxyType(dict(startup))
        self.roles = roles
        self.viewer_id = viewer_id
        self.cache = cache if cache is not None else QueryCache()
        self.error: str | None = None
        # Set when a mutation changed the startup record itself; the owning view reloads.
        self.startup_changed = False

    @property
    def startup_id(self) -> str:
        return str(self.startup["id"])

    @property
    def status(self) -> str:
        return str(self.startup["status"])

    @property
    def base_path(self) -> str:
        return f"/api/startups/{self.startup_id}"

    def key(self, resource: str | None = None) -> tuple[str, str]:
        return (resource or self.resource, self.startup_id)

    def path(self, resource: str | None = None) -> str:
        return f"{self.base_path}/{resource or self.resource}"

    def _fetch(self, resource: str | None = None) -> Any:
        value = self.client.get(self.path(resource))
        # A fresh answer from the server supersedes an earlier failed read.
        self.error = None
        return value

    def load(self, resource: str | None = None, *, initial: Any = None) -> Any:
        try:
            return self.cache.get_or_fetch(self.key(resource), lambda: self._fetch(resource), initial=initial)
        except ApiError as e:
            self.error = str(e)
            return None

    def items(self) -> list[dict[str, Any]]:
        initial = self.startup.get(self.embedded_key) if self.embedded_key else None
        return list(self.load(initial=initial) or [])

    def refresh(self) -> None:
        self.cache.invalidate(self.key())

    def _deny(self) -> None:
        self.error = PERMISSION_DENIED
        return None

    def _mutate(self, method: str, path: str, payload: Any = None, *, resource: str | None = None) -> Any:
        """
        Send a mutation, wait for the server, then drop the cached query.

        Returns the server's JSON body, ``True`` when the server answers with
        no body (deletes), or ``None`` on failure with ``error`` set.
        """
        try:
            if method == "DELETE":
                result = self.client.delete(path)
            else:
                result = getattr(self.client, method.lower())(path, payload)
        except ApiError as e:
            logger.info("panel.mutation_failed", tab=self.tab_id, method=method, status_code=e.status_code)
            self.error = str(e)
            return None
        self.error = None
        self.cache.invalidate(self.key(resource))
        return result if result is not None else True

    def render(self) -> dict[str, Any]:
        return {"tab": self.tab_id, "items": self.items(), "error": self.error}
