from __future__ import annotations

from collections.abc import Callable, Iterable

import jwt
from fastapi import Depends, HTTPException, Request, status

from startupcall.core.middleware.audit import get_logger, set_actor
from startupcall.core.security.auth import Actor, actor_from_request
from startupcall.shared.enums import Role

logger = get_logger()


def get_actor(request: Request) -> Actor:
    try:
        actor = actor_from_request(request)
    except (NotImplementedError, PermissionError, KeyError, ValueError, jwt.PyJWTError) as e:
        logger.info("auth.rejected", reason=type(e).__name__)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    set_actor(actor.actor_id, [r.value for r in actor.roles])
    return actor


def require_roles(required: Iterable[Role]) -> Callable[[Actor], Actor]:
    required_set = set(required)

    def _dep(actor: Actor = Depends(get_actor)) -> Actor:
        actor_roles = set(actor.roles)
        if Role.ADMIN in actor_roles:
            return actor
        if not actor_roles.intersection(required_set):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return actor

    return _dep
