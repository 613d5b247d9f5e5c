from __future__ import annotations

import datetime as dt
from decimal import Decimal

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.orm import Session

from startupcall.core.config import settings
from startupcall.core.db.models import User
from startupcall.core.db.session import get_db
from startupcall.core.logging import configure_logging
from startupcall.core.middleware.audit import set_actor
from startupcall.core.middleware.request_id import RequestIdMiddleware
from startupcall.domain.dashboard.routes import router as dashboard_router
from startupcall.domain.public.models import Announcement, Event, SponsorshipOpportunity
from startupcall.domain.public.routes import router as public_router
from startupcall.domain.startups.routes.comments import router as comments_router
from startupcall.domain.startups.routes.documents import router as documents_router
from startupcall.domain.startups.routes.financials import router as financials_router
from startupcall.domain.startups.routes.milestones import router as milestones_router
from startupcall.domain.startups.routes.reviews import router as reviews_router
from startupcall.domain.startups.routes.startups import router as startups_router
from startupcall.domain.startups.routes.tasks import router as tasks_router
from startupcall.domain.startups.routes.team import router as team_router
from startupcall.shared.enums import AnnouncementStatus, Env, OpportunityStatus, Role
from startupcall.shared.utils import utcnow


class DevSeedUser(BaseModel):
    external_id: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320)
    display_name: str = Field(min_length=2, max_length=200)
    role: Role


class DevSeedRequest(BaseModel):
    users: list[DevSeedUser] = Field(
        default_factory=lambda: [
            DevSeedUser(external_id="dev-admin", email="admin@local", display_name="Dev Admin", role=Role.ADMIN),
            DevSeedUser(external_id="dev-founder", email="founder@local", display_name="Dev Founder", role=Role.ENTREPRENEUR),
            DevSeedUser(external_id="dev-reviewer", email="reviewer@local", display_name="Dev Reviewer", role=Role.REVIEWER),
            DevSeedUser(external_id="dev-sponsor", email="sponsor@local", display_name="Dev Sponsor", role=Role.SPONSOR),
        ]
    )
    with_public_content: bool = True


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Startup Call - Backend", version="0.1.0")
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["admin"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/admin/dev/seed", tags=["admin"])
    def dev_seed(payload: DevSeedRequest, db: Session = Depends(get_db)) -> dict:
        if settings.env != Env.dev:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

        # bootstrap actor (no auth required for first seed in dev)
        set_actor("dev-seed", [Role.ADMIN.value])

        headers: dict[str, dict] = {}
        for u in payload.users:
            existing = db.execute(select(User).where(User.external_id == u.external_id)).scalar_one_or_none()
            if existing is None:
                db.add(
                    User(
                        external_id=u.external_id,
                        email=u.email,
                        display_name=u.display_name,
                        role=u.role.value,
                        is_active=True,
                        created_by="dev-seed",
                        updated_by="dev-seed",
                    )
                )
            headers[u.role.value] = {"actor_id": u.external_id, "roles": [u.role.value]}

        if payload.with_public_content:
            now = utcnow()
            db.add(
                SponsorshipOpportunity(
                    title="Seed Round Partner",
                    description="Back the current cohort of accepted startups.",
                    benefits=["Logo placement", "Demo day seat"],
                    min_amount=Decimal("5000"),
                    max_amount=Decimal("50000"),
                    status=OpportunityStatus.OPEN.value,
                    deadline=now + dt.timedelta(days=30),
                    created_by="dev-seed",
                    updated_by="dev-seed",
                )
            )
            db.add(
                Event(
                    title="Demo Day",
                    description="Accepted startups pitch to sponsors.",
                    event_type="PITCH",
                    start_date=now + dt.timedelta(days=14),
                    created_by="dev-seed",
                    updated_by="dev-seed",
                )
            )
            db.add(
                Announcement(
                    title="Applications open",
                    content="The new startup call is accepting submissions.",
                    status=AnnouncementStatus.ACTIVE.value,
                    created_by="dev-seed",
                    updated_by="dev-seed",
                )
            )
        db.commit()

        return {
            "dev_actor_header_name": settings.dev_actor_header,
            "dev_actor_header_values": headers,
            "note": "Send one of these payloads as JSON in the dev actor header (env=dev only).",
        }

    for router in (
        startups_router,
        reviews_router,
        milestones_router,
        tasks_router,
        financials_router,
        team_router,
        documents_router,
        comments_router,
        dashboard_router,
        public_router,
    ):
        app.include_router(router, prefix="/api")

    return app


app = create_app()
