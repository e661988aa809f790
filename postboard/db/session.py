from __future__ import annotations

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from postboard.config import POSTGRES_URL
from .base import Base  # noqa: F401
from . import models_post, models_user  # noqa: F401

MIGRATIONS_LOCATION = "postboard:migrations"


# ───────────────────────── engine & session factory ─────────────────────────
engine = create_async_engine(POSTGRES_URL, echo=False)
async_session = async_sessionmaker(engine, expire_on_commit=False)


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """FastAPI dependency: the factory resolvers open their sessions from."""
    return async_session


# ───────────────────────── migrations ───────────────────────────────────────
def alembic_config(connection: Connection | None = None) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", MIGRATIONS_LOCATION)
    if connection is not None:
        # env.py migrates on this connection instead of opening its own
        cfg.attributes["connection"] = connection
    return cfg


def run_migrations(connection: Connection) -> None:
    command.upgrade(alembic_config(connection), "head")


async def init_models() -> None:
    """
    Brings the schema up to the latest Alembic revision. Already applied
    revisions are skipped, so this runs on every startup.
    """
    async with engine.begin() as conn:
        # alembic is synchronous, so it goes through run_sync
        await conn.run_sync(run_migrations)
