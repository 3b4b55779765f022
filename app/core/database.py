# app/core/database.py
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from .config import settings
import logging
from typing import AsyncGenerator

logger = logging.getLogger(__name__)

# Fixed-size pool: requests wait for a free connection instead of opening new ones
engine_kwargs = {
    "echo": False,
    "future": True,
    "pool_size": settings.DB_POOL_SIZE,
    "max_overflow": 0,
    "pool_timeout": 30,       # Seconds to wait for a free connection
    "pool_pre_ping": True,    # Check connection before using
    "pool_recycle": 300,      # Recycle connections after 5 minutes
}

if settings.is_sqlite:
    # SQLite runs on a single shared connection; an in-memory database lives as long as it does
    engine_kwargs = {
        "echo": False,
        "future": True,
        "poolclass": StaticPool,
    }
    logger.info("Configured engine for SQLite (static connection pool)")

engine = create_async_engine(
    settings.DATABASE_URL,
    **engine_kwargs
)

# AsyncSession factory using async_sessionmaker
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
)

# Base class for all models
Base = declarative_base()

# Dependency to get DB session with proper exception handling
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    session = AsyncSessionLocal()
    try:
        yield session
    except Exception as e:
        # Nothing from a failed request is committed
        logger.error(f"Database session error: {str(e)}")
        await session.rollback()
        raise
    finally:
        await session.close()
        logger.debug("Database session closed")
