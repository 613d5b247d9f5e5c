from __future__ import annotations

from decimal import Decimal

from fastapi.testclient import TestClient

from conftest import ADMIN, FOUNDER, REVIEWER, SPONSOR, as_

SCORES = {"innovation_score": 6, "market_score": 6, "team_score": 6, "execution_score": 6, "feedback": "ok"}


def test_stats_are_keyed_by_role(client: TestClient, make_startup):
    draft = make_startup()
    reviewed = make_startup("SUBMITTED", name="Reviewed")
    make_startup("SUBMITTED", name="Waiting")
    accepted = make_startup("ACCEPTED", name="Funded")

    client.post(f"/api/startups/{reviewed['id']}/reviews", json=SCORES, headers=as_(REVIEWER))
    client.post(f"/api/startups/{accepted['id']}/sponsorships", json={"amount": "750"}, headers=as_(SPONSOR))

    founder = client.get("/api/dashboard/stats", headers=as_(FOUNDER)).json()
    assert set(founder) == {"ENTREPRENEUR", "USER"}
    assert founder["ENTREPRENEUR"]["total_startups"] == 4
    assert founder["ENTREPRENEUR"]["in_review"] == 2
    assert founder["ENTREPRENEUR"]["accepted"] == 1
    assert founder["ENTREPRENEUR"]["reviews_received"] == 1
    assert founder["USER"]["public_startups"] == 3

    reviewer = client.get("/api/dashboard/stats", headers=as_(REVIEWER)).json()["REVIEWER"]
    assert reviewer["completed_reviews"] == 1
    assert reviewer["pending_reviews"] == 1
    assert reviewer["average_score"] == 6.0
    assert reviewer["reviews_this_month"] == 1

    sponsor = client.get("/api/dashboard/stats", headers=as_(SPONSOR)).json()["SPONSOR"]
    assert sponsor["sponsored_startups"] == 1
    assert Decimal(sponsor["total_funded"]) == Decimal("750")

    admin = client.get("/api/dashboard/stats", headers=as_(ADMIN)).json()["ADMIN"]
    assert admin["total_startups"] == 4
    assert admin["total_reviews"] == 1
    assert admin["startups_by_status"]["DRAFT"] == 1
    assert admin["startups_by_status"]["UNDER_REVIEW"] == 1
    assert draft["status"] == "DRAFT"


def test_stats_require_actor(client: TestClient):
    assert client.get("/api/dashboard/stats").status_code == 401
