"""
Server-side session storage.

A session maps an opaque session id to the id of the logged in user. The
production backend keeps sessions in Redis under ``sess:<id>`` with a fixed
TTL; reads never refresh that TTL. The memory backend keeps the same contract
inside the process and is meant for development and tests.
"""
from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional, Tuple

import redis.asyncio as redis

from postboard.config import REDIS_URL, SESSION_BACKEND, SESSION_MAX_AGE

logger = logging.getLogger(__name__)

KEY_PREFIX = "sess:"


@dataclass
class SessionData:
    user_id: int

    def to_json(self) -> str:
        return json.dumps({"userId": self.user_id})

    @classmethod
    def from_json(cls, raw: str | bytes) -> Optional["SessionData"]:
        try:
            payload = json.loads(raw)
        except ValueError:
            return None
        user_id = payload.get("userId") if isinstance(payload, dict) else None
        if not isinstance(user_id, int):
            return None
        return cls(user_id=user_id)


class SessionStore(ABC):
    """Key/value storage of session id -> SessionData with a fixed expiry."""

    def __init__(self, ttl: int = SESSION_MAX_AGE):
        self.ttl = ttl

    @abstractmethod
    async def get(self, session_id: str) -> SessionData | None:
        raise NotImplementedError

    @abstractmethod
    async def set(self, session_id: str, data: SessionData) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        return None


class RedisSessionStore(SessionStore):
    def __init__(self, client: redis.Redis, ttl: int = SESSION_MAX_AGE):
        super().__init__(ttl)
        self.redis = client

    @classmethod
    def from_url(cls, url: str, ttl: int = SESSION_MAX_AGE) -> "RedisSessionStore":
        return cls(redis.from_url(url), ttl)

    async def get(self, session_id: str) -> SessionData | None:
        raw = await self.redis.get(KEY_PREFIX + session_id)
        if raw is None:
            return None
        data = SessionData.from_json(raw)
        if data is None:
            logger.warning("Discarding malformed session payload for %s", session_id[:8])
        return data

    async def set(self, session_id: str, data: SessionData) -> None:
        await self.redis.set(KEY_PREFIX + session_id, data.to_json(), ex=self.ttl)

    async def close(self) -> None:
        await self.redis.aclose()


class MemorySessionStore(SessionStore):
    def __init__(self, ttl: int = SESSION_MAX_AGE):
        super().__init__(ttl)
        self._sessions: Dict[str, Tuple[float, str]] = {}

    async def get(self, session_id: str) -> SessionData | None:
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        expires_at, raw = entry
        if expires_at <= time.monotonic():
            del self._sessions[session_id]
            return None
        return SessionData.from_json(raw)

    async def set(self, session_id: str, data: SessionData) -> None:
        now = time.monotonic()
        self._purge_expired(now)
        self._sessions[session_id] = (now + self.ttl, data.to_json())

    def _purge_expired(self, now: float) -> None:
        expired = [sid for sid, (expires_at, _) in self._sessions.items() if expires_at <= now]
        for sid in expired:
            del self._sessions[sid]


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """FastAPI dependency: the process-wide session store."""
    if SESSION_BACKEND == "memory":
        logger.info("Using in-memory session store")
        return MemorySessionStore()
    if SESSION_BACKEND != "redis":
        raise RuntimeError(f"Unknown SESSION_BACKEND: {SESSION_BACKEND}")
    return RedisSessionStore.from_url(REDIS_URL)
