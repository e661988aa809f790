"""
Persistence helpers for User rows.

Writes translate SQLAlchemy failures into the application's error types:
a unique-index violation on the username becomes UsernameTakenError, anything
else becomes PersistenceError.
"""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.db.models_user import User
from postboard.errors import PersistenceError, UsernameTakenError

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNIQUE_VIOLATION:
        return True
    message = str(orig).lower()
    return "unique" in message or "already exists" in message


async def get_by_id(user_id: int, db: AsyncSession) -> User | None:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalars().first()


async def get_by_username(username: str, db: AsyncSession) -> User | None:
    res = await db.execute(select(User).where(User.username == username))
    return res.scalars().first()


async def create_user(username: str, password_hash: str, db: AsyncSession) -> User:
    user = User(username=username, password=password_hash)
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        if _is_unique_violation(exc):
            logger.info("Username %s is already taken", username)
            raise UsernameTakenError(username) from exc
        logger.exception("Could not insert user %s", username)
        raise PersistenceError("Could not insert user") from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Could not insert user %s", username)
        raise PersistenceError("Could not insert user") from exc

    await db.refresh(user)
    return user
