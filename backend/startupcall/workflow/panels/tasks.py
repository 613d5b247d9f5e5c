from __future__ import annotations

from typing import Any

from startupcall.domain.startups.services.ordering import sort_tasks
from startupcall.shared.enums import TaskPriority, TaskStatus
from startupcall.workflow.panels.base import Panel


class TasksPanel(Panel):
    tab_id = "tasks"
    resource = "tasks"

    def _is_assignee(self, task: dict[str, Any]) -> bool:
        return self.viewer_id is not None and task.get("assignee_actor_id") == self.viewer_id

    def status_choices(self, task: dict[str, Any]) -> list[str]:
        if self.roles.can_manage or self._is_assignee(task):
            return [s.value for s in TaskStatus]
        return []

    def items(self) -> list[dict[str, Any]]:
        return sort_tasks(super().items())

    def create(self, payload: dict[str, Any]) -> Any:
        if not self.roles.can_manage:
            return self._deny()
        return self._mutate("POST", self.path(), {"priority": TaskPriority.MEDIUM.value, **payload})

    def update(self, task_id: str, payload: dict[str, Any]) -> Any:
        if not self.roles.can_manage:
            return self._deny()
        return self._mutate("PUT", f"{self.path()}/{task_id}", payload)

    def set_status(self, task_id: str, status: str) -> Any:
        return self._mutate("PATCH", f"{self.path()}/{task_id}", {"status": status})

    def delete(self, task_id: str) -> Any:
        if not self.roles.can_manage:
            return self._deny()
        return self._mutate("DELETE", f"{self.path()}/{task_id}")

    def render(self) -> dict[str, Any]:
        manage = self.roles.can_manage
        rows = [
            {**t, "status_choices": self.status_choices(t), "can_edit": manage, "can_delete": manage}
            for t in self.items()
        ]
        return {
            "tab": self.tab_id,
            "error": self.error,
            "items": rows,
            "can_create": manage,
            "priorities": [p.value for p in TaskPriority],
        }
