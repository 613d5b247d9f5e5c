from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from startupcall.workflow.client import StartupCallClient
from startupcall.workflow.panels import (
    DiscussionPanel,
    DocumentsPanel,
    FinancialsPanel,
    MilestonesPanel,
    OverviewPanel,
    Panel,
    ReviewsPanel,
    TasksPanel,
    TeamPanel,
)
from startupcall.workflow.query_cache import QueryCache
from startupcall.workflow.roles import RoleFlags
from startupcall.workflow.tabs import TABS

PANELS: dict[str, type[Panel]] = {
    "overview": OverviewPanel,
    "reviews": ReviewsPanel,
    "milestones": MilestonesPanel,
    "tasks": TasksPanel,
    "financials": FinancialsPanel,
    "team": TeamPanel,
    "documents": DocumentsPanel,
    "discussion": DiscussionPanel,
}


def panel_class(tab_id: str | None) -> type[Panel]:
    """Unknown ids get the first tab's panel."""
    return PANELS.get(tab_id or "", PANELS[TABS[0].id])


def open_panel(
    tab_id: str | None,
    client: StartupCallClient,
    startup: Mapping[str, Any],
    roles: RoleFlags,
    *,
    viewer_id: str | None = None,
    cache: QueryCache | None = None,
) -> Panel:
    return panel_class(tab_id)(client, startup, roles, viewer_id=viewer_id, cache=cache)
