from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from typing import Optional
import os

from plotdesk.core.config import settings

# Create base class for models
Base = declarative_base()


def get_database_url(db_url: Optional[str] = None) -> str:
    """Get properly formatted database URL"""
    db_url = db_url or settings.DATABASE_URL
    if db_url.startswith("postgresql://"):
        db_url = db_url.replace("postgresql://", "postgresql+asyncpg://")
    return db_url


def build_engine(db_url: Optional[str] = None) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Connection pooling strategy:
    - SQLite: NullPool (required for thread safety)
    - PostgreSQL Development: NullPool (simpler debugging)
    - PostgreSQL Production: QueuePool with connection limits

    Environment variables:
    - DB_POOL_SIZE: Maximum pool size (default: 10)
    - DB_MAX_OVERFLOW: Extra connections allowed (default: 20)
    - DB_POOL_TIMEOUT: Seconds to wait for connection (default: 30)
    - DB_POOL_RECYCLE: Seconds before connection is recycled (default: 1800)
    """
    db_url = get_database_url(db_url)

    if "sqlite" in db_url:
        return create_async_engine(
            db_url,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False},
            poolclass=NullPool,
        )

    if settings.DEBUG or settings.ENVIRONMENT == "development":
        return create_async_engine(
            db_url,
            echo=settings.DB_ECHO,
            poolclass=NullPool,
        )

    return create_async_engine(
        db_url,
        echo=settings.DB_ECHO,
        pool_size=int(os.getenv('DB_POOL_SIZE', '10')),
        max_overflow=int(os.getenv('DB_MAX_OVERFLOW', '20')),
        pool_timeout=int(os.getenv('DB_POOL_TIMEOUT', '30')),
        pool_recycle=int(os.getenv('DB_POOL_RECYCLE', '1800')),  # 30 minutes
        pool_pre_ping=True,  # Verify connections before use
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to engine"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables"""
    import plotdesk.models  # noqa: F401  Import models so metadata knows about them

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
