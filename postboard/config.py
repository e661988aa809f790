# postboard/config.py
from __future__ import annotations
import os
from urllib.parse import quote_plus


def _build_pg_url() -> str:
    if url := os.getenv("DATABASE_URL"):
        # Heroku commonly provides postgres://, but SQLAlchemy asyncpg expects
        # postgresql+asyncpg://
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    user = os.getenv("DB_USER")
    password = os.getenv("DB_PASSWORD")
    host = os.getenv("DB_HOST")
    port = os.getenv("DB_PORT")
    name = os.getenv("DB_NAME")

    missing = [k for k, v in {
        "DB_USER": user,
        "DB_PASSWORD": password,
        "DB_HOST": host,
        "DB_PORT": port,
        "DB_NAME": name,
    }.items() if not v]

    if missing:
        raise RuntimeError(f"Missing environment variables: {', '.join(missing)}")

    return f"postgresql+asyncpg://{user}:{quote_plus(password)}@{host}:{port}/{name}"


def _get_session_secret() -> str:
    secret = os.getenv("SESSION_SECRET")
    if secret:
        return secret
    if IS_PROD:
        raise RuntimeError("Missing environment variables: SESSION_SECRET")
    return "postboard-dev-secret"


IS_PROD: bool = os.getenv("APP_ENV", "development").lower() == "production"

POSTGRES_URL: str = _build_pg_url()

REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
SESSION_BACKEND: str = os.getenv("SESSION_BACKEND", "redis").strip().lower()
SESSION_SECRET: str = _get_session_secret()

COOKIE_NAME = "qid"
COOKIE_SECURE: bool = IS_PROD
COOKIE_SAMESITE = "lax"
# ten years, in seconds
SESSION_MAX_AGE = 60 * 60 * 24 * 365 * 10

HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "4000"))
