from __future__ import annotations

from decimal import Decimal

from fastapi.testclient import TestClient

from conftest import ADMIN, FOUNDER, OTHER_FOUNDER, REVIEWER, SECOND_REVIEWER, SPONSOR
from startupcall.core.security.auth import Actor
from startupcall.shared.enums import Role
from startupcall.workflow.client import StartupCallClient
from startupcall.workflow.dispatch import open_panel, panel_class
from startupcall.workflow.panels import MilestonesPanel, OverviewPanel, ReviewsPanel
from startupcall.workflow.panels.base import PERMISSION_DENIED
from startupcall.workflow.panels.documents import format_size
from startupcall.workflow.roles import RoleFlags
from startupcall.workflow.view import StartupView


class CountingTransport:
    def __init__(self, client: TestClient) -> None:
        self.client = client
        self.calls: list[tuple[str, str]] = []

    def request(self, method: str, url: str, **kwargs):
        self.calls.append((method, url))
        return self.client.request(method, url, **kwargs)


def _actor(who: tuple[str, list[str]]) -> Actor:
    return Actor(who[0], tuple(Role(r) for r in who[1]))


def _view(client: TestClient, startup_id: str, who: tuple[str, list[str]]) -> StartupView:
    api = StartupCallClient.for_actor(*who, base_url="", http=client)
    return StartupView(api, startup_id, viewer=_actor(who))


def test_stranger_on_draft_gets_fixed_error(client: TestClient, make_startup):
    startup_id = make_startup()["id"]
    page = _view(client, startup_id, REVIEWER).render("overview")
    assert page["error"] == "You do not have permission to view this startup"
    assert page["tabs"] == []
    assert page["panel"] is None


def test_founder_submits_from_overview(client: TestClient, make_startup):
    startup_id = make_startup()["id"]
    view = _view(client, startup_id, FOUNDER)

    page = view.render("discussion")
    assert [t["id"] for t in page["tabs"]] == ["overview", "reviews", "milestones", "tasks", "team", "documents"]
    assert page["active_tab"] == "overview"
    assert page["panel"]["status_choices"] == ["SUBMITTED"]
    assert page["panel"]["can_submit"] is True

    overview = view.select("overview")
    assert isinstance(overview, OverviewPanel)
    assert overview.submit()["status"] == "SUBMITTED"
    assert overview.error is None
    assert overview.render()["status"] == "SUBMITTED"
    assert overview.status_choices() == []
    assert "discussion" in [t.id for t in view.tabs()]


def test_reviewer_flow_refetches_after_mutation(client: TestClient, make_startup):
    startup_id = make_startup("SUBMITTED")["id"]
    transport = CountingTransport(client)
    api = StartupCallClient.for_actor(*REVIEWER, base_url="", http=transport)
    view = StartupView(api, startup_id, viewer=_actor(REVIEWER))
    view.load()

    panel = view.select("reviews")
    assert isinstance(panel, ReviewsPanel)
    before = panel.render()
    assert before["items"] == []
    assert before["can_create"] is True
    # Embedded reviews seeded the cache: no list call yet.
    assert ("GET", f"/api/startups/{startup_id}/reviews") not in transport.calls

    created = panel.create(
        {"innovation_score": 9, "market_score": 8, "team_score": 8, "execution_score": 9, "feedback": "Strong"}
    )
    assert created["score"] == 8.5
    after = panel.render()
    assert ("GET", f"/api/startups/{startup_id}/reviews") in transport.calls
    assert len(after["items"]) == 1
    assert after["has_reviewed"] is True
    assert after["can_create"] is False
    assert after["average_score"] == 8.5


def test_financials_panel_balance(client: TestClient, make_startup):
    startup_id = make_startup("ACCEPTED")["id"]

    sponsor_view = _view(client, startup_id, SPONSOR)
    sponsor_view.load()
    assert "financials" in [t.id for t in sponsor_view.tabs()]
    sponsor_panel = sponsor_view.select("financials")
    assert sponsor_panel.add_sponsorship({"amount": Decimal("2000.00"), "notes": "Round A"}) is not None
    assert sponsor_panel.add_expense({"amount": "5", "category": "x", "description": "y"}) is None
    assert sponsor_panel.error == "You do not have permission to perform this action"

    founder_view = _view(client, startup_id, FOUNDER)
    founder_view.load()
    panel = founder_view.select("financials")
    assert panel.render()["balance"] == Decimal("2000.00")

    panel.add_expense({"amount": Decimal("450.25"), "category": "Cloud", "description": "GPUs"})
    panel.add_expense({"amount": Decimal("49.75"), "category": "Travel", "description": "Demo day"})
    rendered = panel.render()
    assert rendered["error"] is None
    assert rendered["balance"] == Decimal("1500.00")
    assert rendered["expenses_by_category"] == {"Cloud": Decimal("450.25"), "Travel": Decimal("49.75")}

    travel = next(e for e in rendered["expenses"] if e["category"] == "Travel")
    panel.delete_expense(travel["id"])
    assert panel.render()["balance"] == Decimal("1549.75")


def test_tasks_panel_orders_and_gates_status(client: TestClient, make_startup):
    startup_id = make_startup("ACCEPTED")["id"]
    view = _view(client, startup_id, FOUNDER)
    view.load()
    panel = view.select("tasks")
    panel.create({"title": "docs", "description": "d", "priority": "LOW", "due_date": "2026-01-01"})
    panel.create({"title": "auth", "description": "d", "priority": "HIGH", "due_date": "2026-05-01"})
    panel.create(
        {"title": "deploy", "description": "d", "priority": "HIGH", "due_date": "2026-02-01", "assignee_actor_id": "reviewer-1"}
    )
    assert [t["title"] for t in panel.render()["items"]] == ["deploy", "auth", "docs"]

    outsider = _view(client, startup_id, REVIEWER)
    outsider.load()
    rows = outsider.select("tasks").render()["items"]
    assert rows[0]["status_choices"] == ["TODO", "IN_PROGRESS", "COMPLETED", "BLOCKED"]
    assert rows[1]["status_choices"] == []
    assert rows[0]["can_edit"] is False


def test_discussion_panel_threads(client: TestClient, make_startup):
    startup_id = make_startup("SUBMITTED")["id"]
    view = _view(client, startup_id, REVIEWER)
    view.load()
    panel = view.select("discussion")

    first = panel.post("First!")
    second = panel.post("Second")
    panel.reply(first["id"], "Reply to first")

    threads = panel.render()["threads"]
    assert [t["content"] for t in threads] == ["Second", "First!"]
    assert [r["content"] for r in threads[1]["replies"]] == ["Reply to first"]
    assert threads[0]["can_delete"] is True

    founder_panel = _view(client, startup_id, FOUNDER)
    founder_panel.load()
    dpanel = founder_panel.select("discussion")
    assert dpanel.delete(second) is None
    assert dpanel.error == "You do not have permission to perform this action"


def test_server_rejection_lands_in_panel_error(client: TestClient, make_startup):
    startup = make_startup("ACCEPTED")
    api = StartupCallClient.for_actor(*OTHER_FOUNDER, base_url="", http=client)
    # Flags claim ownership; the server disagrees.
    panel = MilestonesPanel(api, startup, RoleFlags(is_founder=True), viewer_id=OTHER_FOUNDER[0])
    assert panel.items() == []

    result = panel.create({"title": "MVP", "description": "x", "due_date": "2026-07-01"})
    assert result is None
    assert panel.error == "Only the founder or an admin can manage milestones"
    assert panel.render()["error"] == "Only the founder or an admin can manage milestones"


def test_team_and_documents_panels(client: TestClient, make_startup):
    startup = make_startup("SUBMITTED")
    view = _view(client, startup["id"], FOUNDER)
    view.load()

    team = view.select("team")
    team.add({"name": "Founder", "email": "f@acme.test", "role": "CEO", "user_actor_id": "founder-1"})
    team.add({"name": "Dana", "email": "d@acme.test", "role": "CTO"})
    rows = {m["name"]: m for m in team.render()["items"]}
    assert rows["Founder"]["can_delete"] is False
    assert rows["Dana"]["can_delete"] is True
    assert team.remove(rows["Founder"]) is None

    docs = view.select("documents")
    docs.add({"name": "deck.pdf", "size_bytes": 1536, "url": "https://files.test/deck.pdf"})
    [doc] = docs.render()["items"]
    assert doc["size"] == "1.5 KB"
    assert doc["can_delete"] is True


def test_admin_status_choices_follow_lifecycle(client: TestClient, make_startup):
    startup_id = make_startup("UNDER_REVIEW")["id"]
    view = _view(client, startup_id, ADMIN)
    view.load()
    overview = view.select(None)
    assert overview.status_choices() == ["ACCEPTED", "REJECTED"]
    assert overview.change_status("ACCEPTED", "Great fit")["status"] == "ACCEPTED"
    assert overview.status_choices() == ["COMPLETED"]


def test_dispatch_falls_back_to_first_tab():
    assert panel_class("nope") is OverviewPanel
    assert panel_class(None) is OverviewPanel
    panel = open_panel("reviews", StartupCallClient(base_url=""), {"id": "s", "status": "DRAFT"}, RoleFlags())
    assert isinstance(panel, ReviewsPanel)


def test_format_size():
    assert format_size(512) == "512 B"
    assert format_size(2048) == "2.0 KB"
    assert format_size(5 * 1024 * 1024) == "5.0 MB"


class FailFirstGet:
    """Answers the first GET of ``path`` with the app's 404, then behaves normally."""

    def __init__(self, client: TestClient, path: str) -> None:
        self.client = client
        self.path = path
        self.failed = False

    def request(self, method: str, url: str, **kwargs):
        if method == "GET" and url == self.path and not self.failed:
            self.failed = True
            return self.client.request(method, "/api/no-such-route", **kwargs)
        return self.client.request(method, url, **kwargs)


def test_status_change_reevaluates_tabs(client: TestClient, make_startup):
    startup_id = make_startup("UNDER_REVIEW")["id"]
    view = _view(client, startup_id, ADMIN)

    page = view.render("financials")
    assert "financials" not in [t["id"] for t in page["tabs"]]
    assert page["active_tab"] == "overview"

    assert view.select("overview").change_status("ACCEPTED")["status"] == "ACCEPTED"

    page = view.render("financials")
    assert "financials" in [t["id"] for t in page["tabs"]]
    assert page["active_tab"] == "financials"
    assert view.select("milestones").status == "ACCEPTED"


def test_successful_refetch_clears_earlier_error(client: TestClient, make_startup):
    startup_id = make_startup("ACCEPTED")["id"]
    transport = FailFirstGet(client, f"/api/startups/{startup_id}/milestones")
    api = StartupCallClient.for_actor(*FOUNDER, base_url="", http=transport)
    view = StartupView(api, startup_id, viewer=_actor(FOUNDER))
    view.load()
    panel = view.select("milestones")
    panel.create({"title": "MVP", "description": "x", "due_date": "2026-07-01"})

    first = panel.render()
    assert first["error"] == "Not Found"
    assert first["items"] == []

    panel.refresh()
    second = panel.render()
    assert second["error"] is None
    assert [m["title"] for m in second["items"]] == ["MVP"]


def test_review_edits_are_gated_to_author(client: TestClient, make_startup):
    startup_id = make_startup("UNDER_REVIEW")["id"]
    author = _view(client, startup_id, REVIEWER)
    author.load()
    author.select("reviews").create(
        {"innovation_score": 6, "market_score": 6, "team_score": 6, "execution_score": 6, "feedback": "Ok"}
    )

    other = _view(client, startup_id, SECOND_REVIEWER)
    other.load()
    panel = other.select("reviews")
    [review] = panel.items()
    assert panel.update(review, {**review, "feedback": "Hijacked"}) is None
    assert panel.delete(review) is None
    assert panel.error == PERMISSION_DENIED

    own = author.select("reviews")
    payload = {"innovation_score": 8, "market_score": 8, "team_score": 8, "execution_score": 8, "feedback": "Better"}
    assert own.update(review, payload)["score"] == 8.0
    assert own.delete(review) is True
    assert own.render()["items"] == []


def test_sponsorship_delete_is_gated_to_owner(client: TestClient, make_startup):
    startup_id = make_startup("ACCEPTED")["id"]
    sponsor = _view(client, startup_id, SPONSOR)
    sponsor.load()
    sponsor_panel = sponsor.select("financials")
    sponsor_panel.add_sponsorship({"amount": Decimal("300.00")})

    founder = _view(client, startup_id, FOUNDER)
    founder.load()
    founder_panel = founder.select("financials")
    [row] = founder_panel.render()["sponsorships"]
    assert row["can_delete"] is False
    assert founder_panel.delete_sponsorship(row) is None
    assert founder_panel.error == PERMISSION_DENIED

    assert sponsor_panel.delete_sponsorship(row) is True
    assert sponsor_panel.render()["balance"] == Decimal("0")
