from __future__ import annotations

from typing import Any

from startupcall.workflow.panels.base import Panel


def format_size(size_bytes: int) -> str:
    """Human-readable size: 512 B, 1.5 KB, 2.0 MB."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = size_bytes / 1024
    for unit in ("KB", "MB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


class DocumentsPanel(Panel):
    tab_id = "documents"
    resource = "documents"

    def _on_team(self) -> bool:
        if self.viewer_id is None:
            return False
        return any(m.get("user_actor_id") == self.viewer_id for m in self.startup.get("team_members") or [])

    @property
    def can_upload(self) -> bool:
        return self.roles.can_manage or self._on_team()

    def can_delete(self, document: dict[str, Any]) -> bool:
        return self.roles.can_manage or (self.viewer_id is not None and document.get("uploaded_by") == self.viewer_id)

    def add(self, payload: dict[str, Any]) -> Any:
        if not self.can_upload:
            return self._deny()
        return self._mutate("POST", self.path(), payload)

    def delete(self, document: dict[str, Any]) -> Any:
        if not self.can_delete(document):
            return self._deny()
        return self._mutate("DELETE", f"{self.path()}/{document['id']}")

    def render(self) -> dict[str, Any]:
        rows = [
            {**d, "size": format_size(int(d.get("size_bytes") or 0)), "can_delete": self.can_delete(d)}
            for d in self.items()
        ]
        return {"tab": self.tab_id, "error": self.error, "items": rows, "can_create": self.can_upload}
