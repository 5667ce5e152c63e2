"""Async engine and session factory for the database-backed store."""
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine, relaxing SQLite's thread check like the app server needs."""

    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite+") else {}
    return create_async_engine(database_url, future=True, echo=False, connect_args=connect_args)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory whose objects stay usable after commit."""

    return async_sessionmaker(engine, expire_on_commit=False)
