from __future__ import annotations

from typing import Any

from startupcall.domain.startups.services import lifecycle
from startupcall.domain.startups.services.ordering import average_score, overall_score
from startupcall.workflow.panels.base import Panel

SCORE_FIELDS = ("innovation_score", "market_score", "team_score", "execution_score")


class ReviewsPanel(Panel):
    tab_id = "reviews"
    resource = "reviews"
    embedded_key = "reviews"

    def has_reviewed(self, reviews: list[dict[str, Any]] | None = None) -> bool:
        if self.viewer_id is None:
            return False
        rows = self.items() if reviews is None else reviews
        return any(r.get("reviewer_actor_id") == self.viewer_id for r in rows)

    def can_create(self, reviews: list[dict[str, Any]] | None = None) -> bool:
        if not (self.roles.is_reviewer or self.roles.is_admin):
            return False
        if self.status not in {s.value for s in lifecycle.REVIEWABLE}:
            return False
        return not self.has_reviewed(reviews)

    def can_modify(self, review: dict[str, Any]) -> bool:
        return self.roles.is_admin or (self.viewer_id is not None and review.get("reviewer_actor_id") == self.viewer_id)

    @staticmethod
    def preview_score(payload: dict[str, Any]) -> float:
        return overall_score(*(int(payload[f]) for f in SCORE_FIELDS))

    def create(self, payload: dict[str, Any]) -> Any:
        if not self.can_create():
            return self._deny()
        return self._mutate("POST", self.path(), payload)

    def update(self, review: dict[str, Any], payload: dict[str, Any]) -> Any:
        if not self.can_modify(review):
            return self._deny()
        return self._mutate("PUT", f"{self.path()}/{review['id']}", payload)

    def delete(self, review: dict[str, Any]) -> Any:
        if not self.can_modify(review):
            return self._deny()
        return self._mutate("DELETE", f"{self.path()}/{review['id']}")

    def render(self) -> dict[str, Any]:
        reviews = self.items()
        return {
            "tab": self.tab_id,
            "error": self.error,
            "items": [{**r, "can_edit": self.can_modify(r), "can_delete": self.can_modify(r)} for r in reviews],
            "average_score": average_score(reviews),
            "has_reviewed": self.has_reviewed(reviews),
            "can_create": self.can_create(reviews),
        }
