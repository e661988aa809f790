from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.db.models_post import Post
from postboard.errors import PersistenceError

logger = logging.getLogger(__name__)


async def _commit(db: AsyncSession, action: str) -> None:
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Could not %s post", action)
        raise PersistenceError(f"Could not {action} post") from exc


async def list_posts(db: AsyncSession) -> list[Post]:
    res = await db.execute(select(Post).order_by(Post.id))
    return list(res.scalars().all())


async def get_post(post_id: int, db: AsyncSession) -> Post | None:
    res = await db.execute(select(Post).where(Post.id == post_id))
    return res.scalar_one_or_none()


async def insert_post(title: str, creator_id: int, db: AsyncSession) -> Post:
    post = Post(title=title, creator_id=creator_id)
    db.add(post)
    await _commit(db, "insert")
    await db.refresh(post)
    return post


async def update_title(post: Post, title: str, db: AsyncSession) -> Post:
    post.title = title
    await _commit(db, "update")
    # updated_at is generated by the database
    await db.refresh(post)
    return post


async def delete_post(post: Post, db: AsyncSession) -> None:
    await db.delete(post)
    await _commit(db, "delete")
