from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from startupcall.core.security.auth import Actor
from startupcall.shared.enums import Role


@dataclass(frozen=True)
class RoleFlags:
    is_founder: bool = False
    is_admin: bool = False
    is_reviewer: bool = False
    is_sponsor: bool = False

    @property
    def can_manage(self) -> bool:
        """Founder or admin: the owners of a startup's working data."""
        return self.is_founder or self.is_admin


NO_ROLES = RoleFlags()


def _founder_of(startup: Any) -> str | None:
    if isinstance(startup, Mapping):
        value = startup.get("founder_actor_id")
    else:
        value = getattr(startup, "founder_actor_id", None)
    return str(value) if value is not None else None


def resolve_roles(viewer: Actor | None, startup: Any) -> RoleFlags:
    """Derive the viewer's role flags for one startup. No viewer means no roles."""
    if viewer is None:
        return NO_ROLES
    founder = _founder_of(startup)
    return RoleFlags(
        is_founder=founder is not None and founder == viewer.actor_id,
        is_admin=viewer.has_role(Role.ADMIN),
        is_reviewer=viewer.has_role(Role.REVIEWER),
        is_sponsor=viewer.has_role(Role.SPONSOR),
    )
