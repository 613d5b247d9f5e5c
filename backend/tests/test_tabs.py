from __future__ import annotations

import itertools

import pytest

from startupcall.shared.enums import StartupStatus
from startupcall.workflow.roles import NO_ROLES, RoleFlags
from startupcall.workflow.tabs import TABS, resolve_active_tab, visible_tabs

ALL_ROLE_FLAGS = [
    RoleFlags(is_founder=f, is_admin=a, is_reviewer=r, is_sponsor=s)
    for f, a, r, s in itertools.product([False, True], repeat=4)
]


def _expected(status: StartupStatus, roles: RoleFlags) -> list[str]:
    owner = roles.is_founder or roles.is_admin
    accepted = status == StartupStatus.ACCEPTED
    past_draft = status != StartupStatus.DRAFT
    table = [
        ("overview", True),
        ("reviews", past_draft or owner),
        ("milestones", accepted or owner),
        ("tasks", accepted or owner),
        ("financials", accepted and (owner or roles.is_sponsor)),
        ("team", past_draft or owner),
        ("documents", past_draft or owner),
        ("discussion", past_draft),
    ]
    return [tab_id for tab_id, shown in table if shown]


@pytest.mark.parametrize("status", list(StartupStatus))
@pytest.mark.parametrize("roles", ALL_ROLE_FLAGS)
def test_visible_tabs_match_table(status: StartupStatus, roles: RoleFlags):
    assert [t.id for t in visible_tabs(status, roles)] == _expected(status, roles)


def test_table_order_and_labels():
    assert [(t.id, t.label) for t in TABS] == [
        ("overview", "Overview"),
        ("reviews", "Reviews"),
        ("milestones", "Milestones"),
        ("tasks", "Tasks"),
        ("financials", "Financials"),
        ("team", "Team"),
        ("documents", "Documents"),
        ("discussion", "Discussion"),
    ]


def test_draft_stranger_sees_only_overview():
    visible = visible_tabs("DRAFT", NO_ROLES)
    assert [t.id for t in visible] == ["overview"]
    assert resolve_active_tab("financials", visible) == "overview"


def test_accepted_sponsor_sees_financials():
    visible = visible_tabs(StartupStatus.ACCEPTED, RoleFlags(is_sponsor=True))
    assert "financials" in [t.id for t in visible]
    assert resolve_active_tab("financials", visible) == "financials"


def test_rejected_sponsor_loses_financials_and_falls_back():
    visible = visible_tabs(StartupStatus.REJECTED, RoleFlags(is_sponsor=True))
    assert "financials" not in [t.id for t in visible]
    assert resolve_active_tab("financials", visible) == "overview"


def test_unknown_or_missing_selection_falls_back_to_first():
    visible = visible_tabs(StartupStatus.SUBMITTED, NO_ROLES)
    assert resolve_active_tab(None, visible) == "overview"
    assert resolve_active_tab("bogus", visible) == "overview"
    assert resolve_active_tab("discussion", visible) == "discussion"
