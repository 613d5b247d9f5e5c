from __future__ import annotations

import logging
import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import ArgumentError

# Run from `backend/`: make `startupcall` importable without an install.
sys.path.append(os.path.abspath(os.getcwd()))

from startupcall.core.config import settings  # noqa: E402
from startupcall.core.db.base import Base  # noqa: E402
from startupcall.core.db.session import import_model_modules  # noqa: E402

import_model_modules()

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")
target_metadata = Base.metadata


def get_url() -> str:
    """First parseable url out of: settings (env/.env), DATABASE_URL, alembic.ini."""
    candidates = [settings.database_url, os.getenv("DATABASE_URL"), config.get_main_option("sqlalchemy.url")]
    for raw in candidates:
        if not raw:
            continue
        url = raw.strip()
        try:
            make_url(url)
        except ArgumentError:
            logger.warning("skipping unparseable database url (prefix=%r)", url[:24])
            continue
        return url
    raise RuntimeError("No usable database url for migrations")


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite cannot ALTER most constraints in place.
        render_as_batch=make_url(get_url()).get_backend_name() == "sqlite",
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(url=get_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = get_url()
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
