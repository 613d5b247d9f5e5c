from __future__ import annotations

from typing import Any

from startupcall.domain.startups.services import lifecycle
from startupcall.domain.startups.services.ordering import as_datetime, average_score, milestone_progress, sum_amounts
from startupcall.shared.enums import StartupStatus
from startupcall.shared.utils import utcnow
from startupcall.workflow.client import ApiError
from startupcall.workflow.panels.base import Panel


class OverviewPanel(Panel):
    tab_id = "overview"
    resource = "startup"

    def _fetch_record(self) -> dict[str, Any]:
        record = self.client.load_startup(self.startup_id)
        self.error = None
        return record

    def record(self) -> dict[str, Any]:
        try:
            return self.cache.get_or_fetch(self.key(), self._fetch_record, initial=dict(self.startup))
        except ApiError as e:
            self.error = str(e)
            return dict(self.startup)

    def status_choices(self) -> list[str]:
        current = str(self.record().get("status") or self.status)
        if self.roles.is_admin:
            return sorted(s.value for s in lifecycle.allowed_targets(current))
        if self.roles.is_founder and current == StartupStatus.DRAFT.value:
            return [StartupStatus.SUBMITTED.value]
        return []

    def _mutate_record(self, method: str, path: str, payload: dict[str, Any]) -> Any:
        result = self._mutate(method, path, payload)
        if result is not None:
            self.startup_changed = True
        return result

    def update(self, payload: dict[str, Any]) -> Any:
        if not self.roles.can_manage:
            return self._deny()
        return self._mutate_record("PUT", self.base_path, payload)

    def change_status(self, target: str, rationale: str | None = None) -> Any:
        if target not in self.status_choices():
            return self._deny()
        return self._mutate_record("PATCH", f"{self.base_path}/status", {"status": target, "rationale": rationale})

    def submit(self) -> Any:
        return self.change_status(StartupStatus.SUBMITTED.value)

    def render(self) -> dict[str, Any]:
        record = self.record()
        created = record.get("created_at")
        days = (utcnow() - as_datetime(created)).days if created else 0
        return {
            "tab": self.tab_id,
            "error": self.error,
            "name": record.get("name"),
            "description": record.get("description"),
            "pitch": record.get("pitch"),
            "website": record.get("website"),
            "industries": list(record.get("industries") or []),
            "funding_stage": record.get("funding_stage"),
            "status": record.get("status"),
            "average_score": average_score(record.get("reviews") or []),
            "review_count": len(record.get("reviews") or []),
            "total_funding": sum_amounts(record.get("sponsorships") or []),
            "milestone_progress": milestone_progress(record.get("milestones") or []),
            "days_since_creation": max(days, 0),
            "can_edit": self.roles.can_manage,
            "can_submit": self.roles.can_manage and record.get("status") == StartupStatus.DRAFT.value,
            "status_choices": self.status_choices(),
        }

