from __future__ import annotations

from typing import Any

from startupcall.domain.startups.services.ordering import milestone_progress
from startupcall.shared.enums import MilestoneStatus
from startupcall.workflow.panels.base import Panel


class MilestonesPanel(Panel):
    tab_id = "milestones"
    resource = "milestones"
    embedded_key = "milestones"

    def status_choices(self) -> list[str]:
        return [s.value for s in MilestoneStatus] if self.roles.can_manage else []

    def create(self, payload: dict[str, Any]) -> Any:
        if not self.roles.can_manage:
            return self._deny()
        return self._mutate("POST", self.path(), payload)

    def update(self, milestone_id: str, payload: dict[str, Any]) -> Any:
        if not self.roles.can_manage:
            return self._deny()
        return self._mutate("PUT", f"{self.path()}/{milestone_id}", payload)

    def set_status(self, milestone_id: str, status: str) -> Any:
        if status not in self.status_choices():
            return self._deny()
        return self._mutate("PATCH", f"{self.path()}/{milestone_id}", {"status": status})

    def delete(self, milestone_id: str) -> Any:
        if not self.roles.can_manage:
            return self._deny()
        return self._mutate("DELETE", f"{self.path()}/{milestone_id}")

    def render(self) -> dict[str, Any]:
        milestones = self.items()
        manage = self.roles.can_manage
        return {
            "tab": self.tab_id,
            "error": self.error,
            "items": [{**m, "can_edit": manage, "can_delete": manage} for m in milestones],
            "progress": milestone_progress(milestones),
            "can_create": manage,
            "status_choices": self.status_choices(),
        }
