"""Ordering and aggregation rules shared by the API and the workflow panels.

All helpers accept either ORM objects or plain mappings (decoded JSON), so the
same rules apply on both sides of the wire.
"""

from __future__ import annotations

import datetime as dt
from collections import defaultdict
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from startupcall.shared.enums import MilestoneStatus, TaskPriority, TaskStatus

PRIORITY_RANK: dict[str, int] = {
    TaskPriority.HIGH.value: 0,
    TaskPriority.MEDIUM.value: 1,
    TaskPriority.LOW.value: 2,
}


def _field(item: Any, name: str, default: Any = None) -> Any:
    if isinstance(item, Mapping):
        return item.get(name, default)
    return getattr(item, name, default)


def _as_date(value: Any) -> dt.date | None:
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(str(value)[:10])


def as_datetime(value: Any) -> dt.datetime:
    if isinstance(value, dt.datetime):
        parsed = value
    else:
        parsed = dt.datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def as_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def task_sort_key(task: Any) -> tuple[int, int, int, dt.date]:
    completed = 1 if _field(task, "status") == TaskStatus.COMPLETED.value else 0
    rank = PRIORITY_RANK.get(str(_field(task, "priority")), len(PRIORITY_RANK))
    due = _as_date(_field(task, "due_date"))
    # Missing due dates sort last within their priority.
    return (completed, rank, 1 if due is None else 0, due or dt.date.max)


def sort_tasks(tasks: Iterable[Any]) -> list[Any]:
    """Incomplete before completed, then HIGH/MEDIUM/LOW, then earliest due date."""
    return sorted(tasks, key=task_sort_key)


def sum_amounts(items: Iterable[Any]) -> Decimal:
    return sum((as_decimal(_field(i, "amount")) for i in items), Decimal("0"))


def financial_balance(sponsorships: Iterable[Any], expenses: Iterable[Any]) -> Decimal:
    return sum_amounts(sponsorships) - sum_amounts(expenses)


def expenses_by_category(expenses: Iterable[Any]) -> dict[str, Decimal]:
    out: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for e in expenses:
        out[str(_field(e, "category"))] += as_decimal(_field(e, "amount"))
    return dict(out)


def partition_comments(comments: Iterable[Any]) -> list[tuple[Any, list[Any]]]:
    """
    Split a flat comment list into (root, replies) pairs.

    Roots have no parent and come newest first. A reply is attached to the
    root whose id equals its parent id, oldest first. Replies pointing at an
    unknown parent are dropped.
    """
    items = list(comments)
    roots = [c for c in items if not _field(c, "parent_id")]
    roots.sort(key=lambda c: as_datetime(_field(c, "created_at")), reverse=True)

    replies: dict[str, list[Any]] = defaultdict(list)
    for c in items:
        parent = _field(c, "parent_id")
        if parent:
            replies[str(parent)].append(c)

    out: list[tuple[Any, list[Any]]] = []
    for root in roots:
        children = replies.get(str(_field(root, "id")), [])
        children.sort(key=lambda c: as_datetime(_field(c, "created_at")))
        out.append((root, children))
    return out


def overall_score(innovation: int, market: int, team: int, execution: int) -> float:
    return round((innovation + market + team + execution) / 4, 1)


def average_score(reviews: Iterable[Any]) -> float | None:
    scores = [float(_field(r, "score")) for r in reviews]
    if not scores:
        return None
    return round(sum(scores) / len(scores), 1)


def milestone_progress(milestones: Iterable[Any]) -> int:
    items = list(milestones)
    if not items:
        return 0
    done = sum(1 for m in items if _field(m, "status") == MilestoneStatus.COMPLETED.value)
    return round(done / len(items) * 100)
