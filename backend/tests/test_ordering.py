from __future__ import annotations

import datetime as dt
from decimal import Decimal

from startupcall.domain.startups.services.ordering import (
    average_score,
    expenses_by_category,
    financial_balance,
    milestone_progress,
    overall_score,
    partition_comments,
    sort_tasks,
)


def _task(title: str, status: str = "TODO", priority: str = "MEDIUM", due: str | None = None) -> dict:
    return {"title": title, "status": status, "priority": priority, "due_date": due}


def test_tasks_incomplete_first_then_priority_then_due_date():
    tasks = [
        _task("done-high", status="COMPLETED", priority="HIGH", due="2026-01-01"),
        _task("low", priority="LOW", due="2026-01-01"),
        _task("medium-late", priority="MEDIUM", due="2026-03-01"),
        _task("medium-early", priority="MEDIUM", due="2026-02-01"),
        _task("high-no-due", priority="HIGH"),
        _task("high", priority="HIGH", due="2026-05-01"),
        _task("blocked-high", status="BLOCKED", priority="HIGH", due="2026-04-01"),
    ]
    assert [t["title"] for t in sort_tasks(tasks)] == [
        "blocked-high",
        "high",
        "high-no-due",
        "medium-early",
        "medium-late",
        "low",
        "done-high",
    ]


def test_task_sort_is_stable_for_ties():
    tasks = [_task("a", due="2026-01-01"), _task("b", due="2026-01-01"), _task("c", due="2026-01-01")]
    assert [t["title"] for t in sort_tasks(tasks)] == ["a", "b", "c"]


def test_balance_tracks_single_add_and_delete():
    sponsorships = [{"amount": "1000.00"}, {"amount": "250.50"}]
    expenses = [{"amount": "300.25", "category": "Cloud"}]
    assert financial_balance(sponsorships, expenses) == Decimal("950.25")

    expenses.append({"amount": "50", "category": "Cloud"})
    assert financial_balance(sponsorships, expenses) == Decimal("900.25")

    sponsorships.pop(0)
    assert financial_balance(sponsorships, expenses) == Decimal("-99.75")

    assert financial_balance([], []) == Decimal("0")


def test_expenses_grouped_by_category():
    expenses = [
        {"amount": "10", "category": "Travel"},
        {"amount": "5.5", "category": "Cloud"},
        {"amount": "2.5", "category": "Travel"},
    ]
    assert expenses_by_category(expenses) == {"Travel": Decimal("12.5"), "Cloud": Decimal("5.5")}


def _comment(cid: str, minute: int, parent: str | None = None) -> dict:
    created = dt.datetime(2026, 1, 1, 12, minute, tzinfo=dt.timezone.utc).isoformat()
    return {"id": cid, "parent_id": parent, "created_at": created}


def test_comment_partition_roots_newest_first_replies_oldest_first():
    comments = [
        _comment("r1", 0),
        _comment("r2", 10),
        _comment("r1-b", 20, parent="r1"),
        _comment("r1-a", 5, parent="r1"),
        _comment("r2-a", 15, parent="r2"),
        _comment("orphan", 30, parent="missing"),
    ]
    threads = partition_comments(comments)
    assert [(root["id"], [r["id"] for r in replies]) for root, replies in threads] == [
        ("r2", ["r2-a"]),
        ("r1", ["r1-a", "r1-b"]),
    ]


def test_comment_partition_accepts_naive_timestamps():
    comments = [
        {"id": "a", "parent_id": None, "created_at": "2026-01-01T10:00:00"},
        {"id": "b", "parent_id": None, "created_at": "2026-01-01T11:00:00+00:00"},
    ]
    assert [root["id"] for root, _ in partition_comments(comments)] == ["b", "a"]


def test_scores_and_progress():
    assert overall_score(7, 8, 9, 8) == 8.0
    assert overall_score(7, 8, 8, 8) == 7.8
    assert average_score([]) is None
    assert average_score([{"score": 7.5}, {"score": 8.0}]) == 7.8
    assert milestone_progress([]) == 0
    assert milestone_progress([{"status": "COMPLETED"}, {"status": "PENDING"}, {"status": "DELAYED"}]) == 33
