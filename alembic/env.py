"""
alembic.env

Migration runner for the wallet user store (`wallet_users`).

Run by the `alembic` CLI only; the API creates tables itself in dev/test. The
database URL comes from ICPW_DATABASE_URL or the service settings, with the
async driver stripped because migrations run on a blocking connection.
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from icp_wallet.db import models  # noqa: F401  # registers wallet_users on Base.metadata
from icp_wallet.db.base import Base
from icp_wallet.settings import Settings

ASYNC_DRIVERS = ("+aiosqlite", "+asyncpg")

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def sync_database_url() -> str:
    url = os.environ.get("ICPW_DATABASE_URL") or Settings().database_url
    for driver in ASYNC_DRIVERS:
        url = url.replace(driver, "")
    return url


def run_offline() -> None:
    context.configure(
        url=sync_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = sync_database_url()
    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        # SQLite cannot ALTER most columns in place; batch mode rebuilds the table.
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
