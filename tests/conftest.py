import os

# Must be set before postboard.config is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SESSION_BACKEND", "memory")
os.environ.setdefault("SESSION_SECRET", "test-secret")

from typing import Any, Dict, Optional

import httpx
import pytest
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from postboard.auth import auth_util
from postboard.auth.session_store import MemorySessionStore, get_session_store
from postboard.auth.sessions import RequestSession
from postboard.db import Base, get_sessionmaker
from postboard.main import app

# ======================================================================
#  1. DATABASE / SESSION FIXTURES
# ======================================================================


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    """Cheap bcrypt rounds keep the suite fast; hashes stay real bcrypt."""
    monkeypatch.setattr(
        auth_util,
        "CRYPT_CONTEXT",
        CryptContext(schemes=["bcrypt"], default="bcrypt", bcrypt__rounds=4, truncate_error=True),
    )


@pytest.fixture
async def engine(tmp_path):
    # A file, not :memory:, so that concurrent sessions get their own connections.
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'postboard.db'}",
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def sessionmaker(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(sessionmaker):
    async with sessionmaker() as session:
        yield session


@pytest.fixture
def session_store():
    return MemorySessionStore()


@pytest.fixture
def request_session(session_store):
    return RequestSession(session_store)


# ======================================================================
#  2. IN-PROCESS GRAPHQL CLIENT
# ======================================================================

REGISTER_MUTATION = """
mutation Register($options: UsernamePasswordInput!) {
  register(options: $options) {
    errors { field message }
    user { id username }
  }
}
"""

LOGIN_MUTATION = """
mutation Login($options: UsernamePasswordInput!) {
  login(options: $options) {
    errors { field message }
    user { id username }
  }
}
"""

ME_QUERY = "query { me { id username } }"


class GraphQLTestClient:
    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = await self.http.post("/graphql", json={"query": query, "variables": variables or {}})
        assert response.status_code == 200, f"Unexpected status {response.status_code}: {response.text}"
        return response.json()

    async def register(self, username: str, password: str) -> Dict[str, Any]:
        body = await self.execute(REGISTER_MUTATION, {"options": {"username": username, "password": password}})
        return body["data"]["register"]

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        body = await self.execute(LOGIN_MUTATION, {"options": {"username": username, "password": password}})
        return body["data"]["login"]

    async def me(self) -> Optional[Dict[str, Any]]:
        body = await self.execute(ME_QUERY)
        return body["data"]["me"]


@pytest.fixture
async def http_client(sessionmaker, session_store):
    app.dependency_overrides[get_sessionmaker] = lambda: sessionmaker
    app.dependency_overrides[get_session_store] = lambda: session_store

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def gql(http_client):
    return GraphQLTestClient(http_client)


@pytest.fixture
async def other_gql(http_client):
    """A second browser: same app, separate cookie jar."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield GraphQLTestClient(client)
