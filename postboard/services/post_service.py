"""
CRUD over posts.

Reads are public. Writes need an authenticated session, and update/delete only
touch posts created by the session's user; anything else behaves as if the
post did not exist.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from postboard.auth.sessions import RequestSession
from postboard.db import post_store
from postboard.db.models_post import Post
from postboard.errors import NotAuthenticatedError

logger = logging.getLogger(__name__)


def require_user(session: RequestSession) -> int:
    if session.user_id is None:
        raise NotAuthenticatedError()
    return session.user_id


async def list_posts(db: AsyncSession) -> List[Post]:
    return await post_store.list_posts(db)


async def get_post(db: AsyncSession, post_id: int) -> Optional[Post]:
    return await post_store.get_post(post_id, db)


async def create_post(db: AsyncSession, title: str, creator_id: int) -> Post:
    post = await post_store.insert_post(title, creator_id, db)
    logger.info("User %d created post %d", creator_id, post.id)
    return post


async def _owned_post(db: AsyncSession, post_id: int, user_id: int) -> Optional[Post]:
    post = await post_store.get_post(post_id, db)
    if post is None:
        return None
    if post.creator_id != user_id:
        logger.warning("User %d tried to modify post %d owned by %d", user_id, post_id, post.creator_id)
        return None
    return post


async def update_post(db: AsyncSession, post_id: int, title: Optional[str], user_id: int) -> Optional[Post]:
    post = await _owned_post(db, post_id, user_id)
    if post is None:
        return None
    if title is None:
        return post
    return await post_store.update_title(post, title, db)


async def delete_post(db: AsyncSession, post_id: int, user_id: int) -> bool:
    post = await _owned_post(db, post_id, user_id)
    if post is None:
        return False
    await post_store.delete_post(post, db)
    logger.info("User %d deleted post %d", user_id, post_id)
    return True
