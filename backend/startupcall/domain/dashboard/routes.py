from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from startupcall.core.db.session import get_db
from startupcall.core.security.auth import Actor
from startupcall.core.security.dependencies import get_actor
from startupcall.domain.dashboard import service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats")
def dashboard_stats(db: Session = Depends(get_db), actor: Actor = Depends(get_actor)) -> dict[str, Any]:
    return service.dashboard_stats(db, actor=actor)
