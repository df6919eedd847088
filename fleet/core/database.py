"""
Database configuration and session management.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from sqlalchemy import event
from typing import AsyncGenerator

from fleet.core.config import settings

def _enable_sqlite_pragmas(dbapi_connection, connection_record):
    """Match PostgreSQL semantics for LIKE and foreign keys on SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA case_sensitive_like = ON")
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()

def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for PostgreSQL (asyncpg) or SQLite (aiosqlite)."""
    
    if database_url.startswith("sqlite"):
        engine_kwargs = {"connect_args": {"check_same_thread": False}}
        # An in-memory database lives only as long as its single connection
        if ":memory:" in database_url or database_url.rstrip("/").endswith("aiosqlite:"):
            engine_kwargs["poolclass"] = StaticPool
        engine = create_async_engine(database_url, echo=echo, **engine_kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_pragmas)
        return engine
    
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
    )

def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False
    )

# Create async engine
engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

# Create async session factory
AsyncSessionLocal = build_session_factory(engine)

# Create base class for models
Base = declarative_base()

# Dependency to get database session
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
