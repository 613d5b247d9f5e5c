from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import ADMIN, FOUNDER, REVIEWER, SECOND_REVIEWER, SPONSOR, as_

SCORES = {"innovation_score": 8, "market_score": 7, "team_score": 9, "execution_score": 7, "feedback": "Solid team"}


def test_first_review_moves_submitted_to_under_review(client: TestClient, make_startup):
    startup_id = make_startup("SUBMITTED")["id"]

    r = client.post(f"/api/startups/{startup_id}/reviews", json=SCORES, headers=as_(REVIEWER))
    assert r.status_code == 201, r.text
    assert r.json()["score"] == 7.8

    startup = client.get(f"/api/startups/{startup_id}", headers=as_(FOUNDER)).json()
    assert startup["status"] == "UNDER_REVIEW"
    assert len(startup["reviews"]) == 1

    history = client.get(f"/api/startups/{startup_id}/status-history", headers=as_(FOUNDER)).json()
    assert history[-1]["to_status"] == "UNDER_REVIEW"
    assert history[-1]["changed_by"] == "reviewer-1"

    r = client.post(f"/api/startups/{startup_id}/reviews", json=SCORES, headers=as_(SECOND_REVIEWER))
    assert r.status_code == 201
    assert client.get(f"/api/startups/{startup_id}", headers=as_(FOUNDER)).json()["status"] == "UNDER_REVIEW"


def test_one_review_per_reviewer(client: TestClient, make_startup):
    startup_id = make_startup("UNDER_REVIEW")["id"]
    assert client.post(f"/api/startups/{startup_id}/reviews", json=SCORES, headers=as_(REVIEWER)).status_code == 201

    r = client.post(f"/api/startups/{startup_id}/reviews", json=SCORES, headers=as_(REVIEWER))
    assert r.status_code == 400
    assert r.json()["detail"] == "You have already reviewed this startup"


def test_only_reviewers_or_admin_review(client: TestClient, make_startup):
    startup_id = make_startup("UNDER_REVIEW")["id"]
    assert client.post(f"/api/startups/{startup_id}/reviews", json=SCORES, headers=as_(SPONSOR)).status_code == 403
    assert client.post(f"/api/startups/{startup_id}/reviews", json=SCORES, headers=as_(ADMIN)).status_code == 201


def test_reviews_closed_outside_review_window(client: TestClient, make_startup):
    startup_id = make_startup("ACCEPTED")["id"]
    r = client.post(f"/api/startups/{startup_id}/reviews", json=SCORES, headers=as_(REVIEWER))
    assert r.status_code == 400


def test_score_bounds_are_validated(client: TestClient, make_startup):
    startup_id = make_startup("UNDER_REVIEW")["id"]
    r = client.post(
        f"/api/startups/{startup_id}/reviews", json={**SCORES, "market_score": 11}, headers=as_(REVIEWER)
    )
    assert r.status_code == 422


def test_update_and_delete_own_review(client: TestClient, make_startup):
    startup_id = make_startup("UNDER_REVIEW")["id"]
    review_id = client.post(f"/api/startups/{startup_id}/reviews", json=SCORES, headers=as_(REVIEWER)).json()["id"]

    updated = {**SCORES, "innovation_score": 10, "market_score": 10, "team_score": 10, "execution_score": 10}
    assert client.put(
        f"/api/startups/{startup_id}/reviews/{review_id}", json=updated, headers=as_(SECOND_REVIEWER)
    ).status_code == 403

    r = client.put(f"/api/startups/{startup_id}/reviews/{review_id}", json=updated, headers=as_(REVIEWER))
    assert r.status_code == 200
    assert r.json()["score"] == 10.0

    assert client.get(f"/api/startups/{startup_id}/reviews/{review_id}", headers=as_(FOUNDER)).status_code == 200
    assert client.delete(f"/api/startups/{startup_id}/reviews/{review_id}", headers=as_(REVIEWER)).status_code == 204
    assert client.get(f"/api/startups/{startup_id}/reviews", headers=as_(FOUNDER)).json() == []
