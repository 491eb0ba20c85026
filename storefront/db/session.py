"""
Async SQLAlchemy engine & session factory builders.

The app factory owns the engine; nothing here is created at import time.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


def build_engine(database_url: str) -> AsyncEngine:
    engine_args: dict[str, Any] = {
        "echo": False,
        "pool_pre_ping": True,
    }

    if "postgresql" in database_url:
        engine_args.update(
            {
                "pool_size": 20,
                "max_overflow": 10,
                "pool_recycle": 300,
            }
        )
    elif database_url.startswith("sqlite") and ":memory:" in database_url:
        # An in-memory database only exists inside its one connection
        engine_args.update(
            {
                "connect_args": {"check_same_thread": False},
                "poolclass": StaticPool,
            }
        )

    return create_async_engine(database_url, **engine_args)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
