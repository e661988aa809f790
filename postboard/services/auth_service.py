"""
Register, login and "who am I" on top of the user store and the session store.

Input problems come back as field errors inside UserResult. Only failures the
service cannot explain (PersistenceError) are raised.
"""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from postboard.auth.auth_util import hash_password, verify_password
from postboard.auth.sessions import RequestSession
from postboard.db import user_store
from postboard.db.models_user import User
from postboard.errors import UsernameTakenError
from postboard.schemas.schemas_user import UsernamePasswordInput, UserResult, validate_register

logger = logging.getLogger(__name__)

USERNAME_TAKEN_MSG = "Username has already been taken."
USERNAME_NOT_FOUND_MSG = "Username Not Found."
PASSWORD_INCORRECT_MSG = "Password Is Incorrect"


async def register(db: AsyncSession, session: RequestSession, options: UsernamePasswordInput) -> UserResult:
    errors = validate_register(options)
    if errors:
        return UserResult(errors=errors)

    try:
        user = await user_store.create_user(options.username, hash_password(options.password), db)
    except UsernameTakenError:
        return UserResult.failure("username", USERNAME_TAKEN_MSG)

    await session.establish(user.id)
    logger.info("Registered user %s (id=%d)", user.username, user.id)
    return UserResult(user=user)


async def login(db: AsyncSession, session: RequestSession, options: UsernamePasswordInput) -> UserResult:
    user = await user_store.get_by_username(options.username, db)
    if user is None:
        return UserResult.failure("username", USERNAME_NOT_FOUND_MSG)

    if not verify_password(options.password, user.password):
        logger.info("Failed login for user %s", user.username)
        return UserResult.failure("password", PASSWORD_INCORRECT_MSG)

    await session.establish(user.id)
    logger.info("User %s logged in", user.username)
    return UserResult(user=user)


async def me(db: AsyncSession, session: RequestSession) -> User | None:
    if session.user_id is None:
        return None
    return await user_store.get_by_id(session.user_id, db)
