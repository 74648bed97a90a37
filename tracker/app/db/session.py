"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy with async support (aiosqlite locally, asyncpg for PostgreSQL).
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from tracker.app.core.config import settings


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.
    
    Pool sizing only applies to server databases; SQLite picks its own pool.
    """
    engine_kwargs = {"echo": echo}
    if make_url(database_url).get_backend_name() != "sqlite":
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = settings.db_max_overflow
    return create_async_engine(database_url, **engine_kwargs)


# Create async engine
engine = build_engine(settings.database_url, echo=settings.db_echo)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# Create declarative base for models
Base = declarative_base()


async def init_models(bind: AsyncEngine = engine) -> None:
    """Create all tables registered on Base (idempotent)."""
    # Import models to ensure they are registered with Base
    from tracker.app.models.parcel import ParcelRecord  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    """
    FastAPI dependency for database sessions.
    
    Yields an async database session and ensures it's properly closed.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
