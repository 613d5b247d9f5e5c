from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import jwt
from jwt import PyJWKClient
from sqlalchemy import select
from starlette.requests import Request

from startupcall.core.config import settings
from startupcall.core.db.models import User
from startupcall.core.db.session import get_session_local
from startupcall.shared.enums import Role


@dataclass(frozen=True)
class Actor:
    actor_id: str
    roles: tuple[Role, ...]

    @property
    def id(self) -> str:
        return self.actor_id

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

    def has_role(self, role: Role) -> bool:
        return role in self.roles


def _parse_dev_actor_header(raw: str) -> Actor:
    """
    DEV ONLY: X-DEV-ACTOR header payload as JSON.

    Example:
      {"actor_id":"dev-user","roles":["ADMIN"]}
    """
    payload = json.loads(raw)
    actor_id = str(payload["actor_id"])
    roles = tuple(Role(r) for r in payload.get("roles", []))
    return Actor(actor_id=actor_id, roles=roles)


def _get_bearer_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if not auth:
        return None
    if not auth.lower().startswith("bearer "):
        return None
    return auth.split(" ", 1)[1].strip()


def _verify_session_jwt(token: str) -> dict[str, Any]:
    """Verify a session token issued by the external identity provider."""
    if not settings.oidc_jwks_url:
        raise NotImplementedError("OIDC JWKS URL is not configured")
    jwk_client = PyJWKClient(str(settings.oidc_jwks_url))
    signing_key = jwk_client.get_signing_key_from_jwt(token)

    options = {"verify_aud": bool(settings.oidc_audience), "verify_iss": bool(settings.oidc_issuer)}
    return jwt.decode(
        token,
        signing_key.key,
        algorithms=["RS256"],
        audience=settings.oidc_audience,
        issuer=settings.oidc_issuer,
        options=options,
    )


def _extract_claim_roles(claims: dict[str, Any]) -> set[Role]:
    role_values = claims.get("roles") or []
    if isinstance(role_values, str):
        role_values = [role_values]
    single = claims.get("role")
    if single:
        role_values = [*role_values, single]

    out: set[Role] = set()
    for value in role_values:
        try:
            out.add(Role(str(value).upper()))
        except ValueError:
            continue
    return out


def _load_user_roles(actor_id: str, email: str | None) -> set[Role]:
    session = get_session_local()()
    try:
        user = session.execute(select(User).where(User.external_id == actor_id)).scalar_one_or_none()
        if user is None and email:
            user = session.execute(select(User).where(User.email == email)).scalar_one_or_none()
        if user is None or not user.is_active:
            return set()
        try:
            return {Role(user.role)}
        except ValueError:
            return set()
    finally:
        session.close()


def actor_from_request(request: Request) -> Actor:
    if settings.dev_auth_enabled:
        raw = request.headers.get(settings.dev_actor_header)
        if raw:
            return _parse_dev_actor_header(raw)

    token = _get_bearer_token(request)
    if not token:
        raise PermissionError("Missing bearer token")

    claims = _verify_session_jwt(token)

    actor_id = str(claims.get("sub") or claims.get("oid") or "unknown")
    email = claims.get("email") or claims.get("preferred_username")

    effective_roles = _extract_claim_roles(claims).union(
        _load_user_roles(actor_id=actor_id, email=str(email) if email else None)
    )
    if not effective_roles:
        effective_roles = {Role.ENTREPRENEUR}

    return Actor(
        actor_id=actor_id,
        roles=tuple(sorted(effective_roles, key=lambda value: value.value)),
    )
