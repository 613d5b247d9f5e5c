from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from startupcall.shared.enums import StartupStatus
from startupcall.workflow.roles import RoleFlags


Predicate = Callable[[StartupStatus, RoleFlags], bool]


@dataclass(frozen=True)
class TabSpec:
    id: str
    label: str
    visible: Predicate


def _always(status: StartupStatus, roles: RoleFlags) -> bool:
    return True


def _past_draft_or_owner(status: StartupStatus, roles: RoleFlags) -> bool:
    return status != StartupStatus.DRAFT or roles.is_founder or roles.is_admin


def _accepted_or_owner(status: StartupStatus, roles: RoleFlags) -> bool:
    return status == StartupStatus.ACCEPTED or roles.is_founder or roles.is_admin


def _accepted_and_funder(status: StartupStatus, roles: RoleFlags) -> bool:
    return status == StartupStatus.ACCEPTED and (roles.is_founder or roles.is_admin or roles.is_sponsor)


def _past_draft(status: StartupStatus, roles: RoleFlags) -> bool:
    return status != StartupStatus.DRAFT


TABS: tuple[TabSpec, ...] = (
    TabSpec("overview", "Overview", _always),
    TabSpec("reviews", "Reviews", _past_draft_or_owner),
    TabSpec("milestones", "Milestones", _accepted_or_owner),
    TabSpec("tasks", "Tasks", _accepted_or_owner),
    TabSpec("financials", "Financials", _accepted_and_funder),
    TabSpec("team", "Team", _past_draft_or_owner),
    TabSpec("documents", "Documents", _past_draft_or_owner),
    TabSpec("discussion", "Discussion", _past_draft),
)

DEFAULT_TAB = TABS[0].id


def visible_tabs(status: StartupStatus | str, roles: RoleFlags) -> list[TabSpec]:
    """Evaluate the table top to bottom. Called on every render; never cached."""
    current = StartupStatus(status)
    return [tab for tab in TABS if tab.visible(current, roles)]


def resolve_active_tab(requested: str | None, visible: list[TabSpec]) -> str:
    """Keep the requested tab if it is visible, otherwise fall back to the first visible one."""
    if requested and any(tab.id == requested for tab in visible):
        return requested
    return visible[0].id if visible else DEFAULT_TAB
