"""
Per-request view of the session cookie.

``load_session`` is called once per request; it resolves the ``qid`` cookie to
a RequestSession. Services call ``RequestSession.establish`` after a successful
register or login, which writes the store and sets the cookie on the response.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request, Response

from postboard.auth.auth_util import new_session_id, sign_session_id, unsign_session_id
from postboard.auth.session_store import SessionData, SessionStore
from postboard.config import COOKIE_NAME, COOKIE_SAMESITE, COOKIE_SECURE, SESSION_MAX_AGE

logger = logging.getLogger(__name__)


def set_session_cookie(response: Response, session_id: str) -> None:
    response.set_cookie(
        key=COOKIE_NAME,
        value=sign_session_id(session_id),
        max_age=SESSION_MAX_AGE,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite=COOKIE_SAMESITE,
    )


class RequestSession:
    def __init__(
        self,
        store: SessionStore,
        session_id: Optional[str] = None,
        user_id: Optional[int] = None,
        response: Optional[Response] = None,
    ):
        self.store = store
        self.session_id = session_id
        self.user_id = user_id
        self.response = response

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    async def establish(self, user_id: int) -> None:
        """
        Binds a fresh session id to ``user_id``, persisting it and issuing the cookie.
        An id the browser already presented is never reused for a new login.
        """
        self.session_id = new_session_id()
        await self.store.set(self.session_id, SessionData(user_id=user_id))
        self.user_id = user_id
        if self.response is not None:
            set_session_cookie(self.response, self.session_id)


async def load_session(request: Request, response: Response, store: SessionStore) -> RequestSession:
    session_id = unsign_session_id(request.cookies.get(COOKIE_NAME))
    if session_id is None:
        return RequestSession(store, response=response)

    data = await store.get(session_id)
    if data is None:
        logger.debug("Session cookie present but no stored session")
        return RequestSession(store, session_id=session_id, response=response)

    return RequestSession(store, session_id=session_id, user_id=data.user_id, response=response)
