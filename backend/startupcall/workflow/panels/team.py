from __future__ import annotations

from typing import Any

from startupcall.workflow.panels.base import Panel


class TeamPanel(Panel):
    tab_id = "team"
    resource = "team"
    embedded_key = "team_members"

    def is_founder_member(self, member: dict[str, Any]) -> bool:
        founder = self.startup.get("founder_actor_id")
        return founder is not None and member.get("user_actor_id") == founder

    def can_remove(self, member: dict[str, Any]) -> bool:
        return self.roles.can_manage and not self.is_founder_member(member)

    def add(self, payload: dict[str, Any]) -> Any:
        if not self.roles.can_manage:
            return self._deny()
        return self._mutate("POST", self.path(), payload)

    def update(self, member_id: str, payload: dict[str, Any]) -> Any:
        if not self.roles.can_manage:
            return self._deny()
        return self._mutate("PUT", f"{self.path()}/{member_id}", payload)

    def remove(self, member: dict[str, Any]) -> Any:
        if not self.can_remove(member):
            return self._deny()
        return self._mutate("DELETE", f"{self.path()}/{member['id']}")

    def render(self) -> dict[str, Any]:
        rows = [
            {
                **m,
                "is_founder": self.is_founder_member(m),
                "can_edit": self.roles.can_manage,
                "can_delete": self.can_remove(m),
            }
            for m in self.items()
        ]
        return {"tab": self.tab_id, "error": self.error, "items": rows, "can_create": self.roles.can_manage}
