from __future__ import annotations

from typing import Any

from startupcall.core.security.auth import Actor
from startupcall.workflow.client import ApiError, StartupCallClient
from startupcall.workflow.dispatch import open_panel
from startupcall.workflow.panels import Panel
from startupcall.workflow.roles import NO_ROLES, RoleFlags, resolve_roles
from startupcall.workflow.tabs import TabSpec, resolve_active_tab, visible_tabs


class StartupView:
    """
    The tabbed page for one startup.

    Loads the record, resolves the viewer's roles, filters the tab table and
    hands the active tab to its panel. Panels are kept per tab so their
    caches survive switching back and forth; they are dropped whenever the
    record is reloaded, which happens after a panel reports it changed the
    startup itself (edit or status change).
    """

    def __init__(self, client: StartupCallClient, startup_id: str, viewer: Actor | None = None) -> None:
        self.client = client
        self.startup_id = startup_id
        self.viewer = viewer
        self.startup: dict[str, Any] | None = None
        self.error: str | None = None
        self.active_tab: str | None = None
        self._panels: dict[str, Panel] = {}

    def load(self) -> dict[str, Any] | None:
        self._panels.clear()
        try:
            self.startup = self.client.load_startup(self.startup_id)
        except ApiError as e:
            self.startup = None
            self.error = str(e)
            return None
        self.error = None
        return self.startup

    @property
    def roles(self) -> RoleFlags:
        if self.startup is None:
            return NO_ROLES
        return resolve_roles(self.viewer, self.startup)

    def _sync(self) -> None:
        """Reload the record after a panel changed it, so tabs and panels see the new status."""
        if any(panel.startup_changed for panel in self._panels.values()):
            self.load()

    def tabs(self) -> list[TabSpec]:
        self._sync()
        if self.startup is None:
            return []
        return visible_tabs(self.startup["status"], self.roles)

    def select(self, tab_id: str | None) -> Panel | None:
        self._sync()
        if self.startup is None:
            return None
        self.active_tab = resolve_active_tab(tab_id, self.tabs())
        panel = self._panels.get(self.active_tab)
        if panel is None:
            panel = open_panel(
                self.active_tab,
                self.client,
                self.startup,
                self.roles,
                viewer_id=self.viewer.actor_id if self.viewer else None,
            )
            self._panels[self.active_tab] = panel
        return panel

    def render(self, tab_id: str | None = None) -> dict[str, Any]:
        if self.startup is None and self.error is None:
            self.load()
        self._sync()
        if self.startup is None:
            return {"error": self.error, "tabs": [], "active_tab": None, "panel": None}
        panel = self.select(tab_id if tab_id is not None else self.active_tab)
        return {
            "error": None,
            "tabs": [{"id": t.id, "label": t.label} for t in self.tabs()],
            "active_tab": self.active_tab,
            "panel": panel.render() if panel else None,
        }
