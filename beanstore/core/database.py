"""
Database configuration and session management
Uses SQLAlchemy with async support

Nothing here is created at import time: the engine and session factory are
built once by the application lifespan and kept on ``app.state``.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from fastapi import Request
import logging

from .config import Settings

logger = logging.getLogger(__name__)

def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database"""
    if settings.is_sqlite:
        # SQLite doesn't support connection pooling parameters
        return create_async_engine(
            settings.database_url_async,
            echo=settings.DATABASE_ECHO,
            poolclass=NullPool,
        )

    if settings.ENVIRONMENT == "test":
        return create_async_engine(
            settings.database_url_async,
            echo=settings.DATABASE_ECHO,
            poolclass=NullPool,
        )

    # PostgreSQL and other databases support pooling
    return create_async_engine(
        settings.database_url_async,
        echo=settings.DATABASE_ECHO,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_timeout=settings.DATABASE_POOL_TIMEOUT,
        pool_pre_ping=True,  # Verify connections before use
    )

def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create the session factory handed to request handlers and scripts"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

# Database dependency
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Create and yield database session
    Ensures proper cleanup after use
    """
    session_factory: async_sessionmaker = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

@asynccontextmanager
async def session_scope(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for database sessions
    Useful for scripts and tests
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

async def init_db(engine: AsyncEngine) -> None:
    """Initialize database tables"""
    from beanstore.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created successfully")

async def close_db(engine: AsyncEngine) -> None:
    """Close database connections"""
    await engine.dispose()
    logger.info("Database connections closed")
