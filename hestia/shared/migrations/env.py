# pylint: skip-file
# ruff: noqa
"""
Alembic Environment

Migrates the onboarding schema: profiles, artisans and gallery_images.

The URL is taken from ``settings.DATABASE_URL`` so alembic.ini never holds
credentials. Online runs go through the async engine (asyncpg in
deployments); SQLite URLs switch alembic to batch mode because SQLite
cannot ALTER most column properties in place.

    alembic upgrade head                  # apply
    alembic upgrade head --sql > up.sql   # offline, emit SQL only
    alembic revision --autogenerate -m "add artisan tags index"

alembic.context / alembic.op are runtime proxies, hence the lint pragmas.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from hestia.config.settings import settings
from hestia.shared.models import Artisan, GalleryImage, Profile
from hestia.shared.models.base import Base

# Tables owned by this service; autogenerate ignores anything else it finds
ONBOARDING_TABLES = frozenset(
    model.__tablename__ for model in (Profile, Artisan, GalleryImage)
)

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def include_name(name, type_, parent_names) -> bool:
    """Limit autogenerate to the onboarding tables."""
    if type_ == "table":
        return name in ONBOARDING_TABLES
    return True


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        include_name=include_name,
        compare_type=True,
        compare_server_default=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the migration SQL without a database connection."""
    url = config.get_main_option("sqlalchemy.url")
    _configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    _configure(
        connection=connection,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Open a throwaway async engine and run the migrations on one connection."""
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    try:
        async with engine.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
