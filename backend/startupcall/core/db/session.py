from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache
import importlib

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from startupcall.core.config import settings
from startupcall.core.db.base import Base

MODEL_MODULES = [
    "startupcall.core.db.models",
    "startupcall.domain.startups.models.startups",
    "startupcall.domain.startups.models.reviews",
    "startupcall.domain.startups.models.milestones",
    "startupcall.domain.startups.models.tasks",
    "startupcall.domain.startups.models.financials",
    "startupcall.domain.startups.models.team",
    "startupcall.domain.startups.models.documents",
    "startupcall.domain.startups.models.comments",
    "startupcall.domain.public.models",
]


def import_model_modules() -> None:
    for module_name in MODEL_MODULES:
        importlib.import_module(module_name)


@lru_cache(maxsize=1)
def get_engine():
    # Lazy init so importing the app never needs a reachable database.
    url = make_url(settings.database_url)
    connect_args = {"check_same_thread": False} if url.get_backend_name() == "sqlite" else {}
    engine = create_engine(url, pool_pre_ping=True, echo=settings.db_echo, connect_args=connect_args)
    import_model_modules()
    Base.metadata.create_all(bind=engine)
    return engine


def get_session_local() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, class_=Session)


def get_db() -> Generator[Session, None, None]:
    db = get_session_local()()
    try:
        yield db
    finally:
        db.close()
