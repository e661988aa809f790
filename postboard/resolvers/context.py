from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from strawberry.fastapi import BaseContext

from postboard.auth.session_store import SessionStore, get_session_store
from postboard.auth.sessions import RequestSession, load_session
from postboard.db.session import get_sessionmaker


class Context(BaseContext):
    """Everything a resolver may touch for one request."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession], session: RequestSession):
        super().__init__()
        self.sessionmaker = sessionmaker
        self.session = session

    def db(self) -> AsyncSession:
        """
        Opens a new AsyncSession. Sibling fields of a query resolve concurrently
        and an AsyncSession must not be shared between them, so every resolver
        uses its own: ``async with info.context.db() as db: ...``
        """
        return self.sessionmaker()


async def get_context(
    request: Request,
    response: Response,
    sessionmaker: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
    store: SessionStore = Depends(get_session_store),
) -> Context:
    session = await load_session(request, response, store)
    return Context(sessionmaker=sessionmaker, session=session)
