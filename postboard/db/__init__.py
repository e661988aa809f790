# postboard/db/__init__.py
"""
Re-exports for convenient imports:

    from postboard.db import Base, engine, async_session, get_sessionmaker
"""
from .base import Base            # noqa: F401
from .models_user import User     # noqa: F401
from .models_post import Post     # noqa: F401
from .session import engine, async_session, get_sessionmaker   # noqa: F401
