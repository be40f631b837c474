"""Alembic environment for the mahasiswas schema.

Online migrations run on an async engine (asyncpg in production); offline mode
renders SQL. The URL is DATABASE_URL when set, passed through the same
postgresql:// rewrite the app uses, else sqlalchemy.url from alembic.ini.
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from app.config import asyncpg_url
from app.db.base import Base
import app.models  # noqa: F401  registers Mahasiswa on Base.metadata

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    url = os.environ.get("DATABASE_URL")
    if url:
        return asyncpg_url(url)
    return config.get_main_option("sqlalchemy.url")


def _configure(**kwargs) -> None:
    # compare_type: catches String length changes on the mahasiswa columns
    context.configure(
        target_metadata=target_metadata, compare_type=True, **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(
        url=_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_sync_migrations(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _database_url()
    engine = async_engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(_run_sync_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
