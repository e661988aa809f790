# postboard/main.py
"""
FastAPI backend serving the Postboard GraphQL API (users, sessions and posts).
"""
from __future__ import annotations
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from postboard.auth.session_store import get_session_store
from postboard.config import HOST, PORT
from postboard.db.session import init_models
from postboard.resolvers import schema

# ───────────────────────── logging ──────────────────────────────────────────
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def _get_allowed_origins() -> list[str]:
    default_origins = [
        "http://localhost:3000",
    ]
    configured_origins = os.getenv("CORS_ORIGINS", "")
    origins = [
        origin.strip()
        for origin in configured_origins.split(",")
        if origin.strip()
    ]
    for origin in default_origins:
        if origin not in origins:
            origins.append(origin)
    return origins


# ───────────────────────── FastAPI app ──────────────────────────────────────
app = FastAPI(title="Postboard GraphQL API")
app.include_router(schema.router, prefix="/graphql")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ───────────────────────── lifecycle ────────────────────────────────────────
@app.on_event("startup")
async def on_startup() -> None:
    """Makes sure all tables exist."""
    await init_models()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await get_session_store().close()


# ───────────────────────── routes ───────────────────────────────────────────
@app.get("/", response_class=PlainTextResponse)
async def health() -> str:
    return "hello world"


# ───────────────────────── dev entrypoint ───────────────────────────────────
if __name__ == "__main__":
    import uvicorn

    logger.info("Server Started On http://localhost:%d", PORT)
    uvicorn.run("postboard.main:app", host=HOST, port=PORT, reload=True)
