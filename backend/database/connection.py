"""
Database Connection Manager
The engine is created lazily so the JSON backend never opens a connection
"""
import asyncio
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from .config import TrackerSettings

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()

# Driver-level failures (refused connection, timeout) are not wrapped by SQLAlchemy
DATABASE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)

_engine: Optional[AsyncEngine] = None
_async_session_maker: Optional[async_sessionmaker[AsyncSession]] = None


def get_engine(settings: TrackerSettings) -> AsyncEngine:
    """Get or create the database engine"""
    global _engine

    if _engine is None:
        options = {"pool_pre_ping": settings.pool_pre_ping, "echo": False}
        if settings.use_null_pool:
            options["poolclass"] = NullPool
        else:
            options.update(
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
                pool_recycle=settings.pool_recycle,
            )
        try:
            _engine = create_async_engine(settings.database_url, **options)
            logger.info("Database engine created successfully")
        except Exception as e:
            logger.error(f"Failed to create database engine: {e}")
            raise

    return _engine


def get_session_maker(settings: TrackerSettings) -> async_sessionmaker[AsyncSession]:
    """Get or create the session maker"""
    global _async_session_maker

    if _async_session_maker is None:
        _async_session_maker = async_sessionmaker(
            get_engine(settings),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    return _async_session_maker


async def init_db(settings: TrackerSettings) -> None:
    """
    Create all tables defined in models.
    Called during application startup when the SQL backend is selected.
    """
    engine = get_engine(settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("✅ Database tables initialized successfully")
    except Exception as e:
        logger.error(f"❌ Failed to initialize database tables: {e}")
        raise


async def close_db() -> None:
    """Close the connection pool when the application shuts down."""
    global _engine, _async_session_maker
    if _engine is not None:
        await _engine.dispose()
        logger.info("✅ Database connection pool closed")
    _engine = None
    _async_session_maker = None
