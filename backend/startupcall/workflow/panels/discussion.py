from __future__ import annotations

from typing import Any

from startupcall.domain.startups.services.ordering import partition_comments
from startupcall.workflow.panels.base import Panel


class DiscussionPanel(Panel):
    tab_id = "discussion"
    resource = "comments"
    embedded_key = "comments"

    def can_delete(self, comment: dict[str, Any]) -> bool:
        return self.roles.is_admin or (self.viewer_id is not None and comment.get("author_actor_id") == self.viewer_id)

    def threads(self) -> list[tuple[dict[str, Any], list[dict[str, Any]]]]:
        return partition_comments(self.items())

    def post(self, content: str) -> Any:
        if self.viewer_id is None:
            return self._deny()
        return self._mutate("POST", self.path(), {"content": content})

    def reply(self, parent_id: str, content: str) -> Any:
        if self.viewer_id is None:
            return self._deny()
        return self._mutate("POST", self.path(), {"content": content, "parent_id": parent_id})

    def delete(self, comment: dict[str, Any]) -> Any:
        if not self.can_delete(comment):
            return self._deny()
        return self._mutate("DELETE", f"{self.path()}/{comment['id']}")

    def render(self) -> dict[str, Any]:
        threads = [
            {
                **root,
                "can_delete": self.can_delete(root),
                "can_reply": self.viewer_id is not None,
                "replies": [{**r, "can_delete": self.can_delete(r)} for r in replies],
            }
            for root, replies in self.threads()
        ]
        return {
            "tab": self.tab_id,
            "error": self.error,
            "threads": threads,
            "can_comment": self.viewer_id is not None,
        }
