"""Async SQLAlchemy engine, session factory and database client.

The engine is created once per process and connects lazily: no connection is
opened until the first session executes a statement.
"""

from collections.abc import AsyncGenerator
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import settings
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def _engine_options(database_url: str) -> Dict[str, Any]:
    """Pool options for the configured backend.

    SQLite (used in tests) runs on a static pool that rejects sizing options.
    """
    options: Dict[str, Any] = {"echo": settings.database_echo}
    if database_url.startswith("sqlite"):
        return options

    options.update(
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
    )
    if database_url.startswith("postgresql+asyncpg"):
        # Disable prepared statement cache for PgBouncer compatibility
        options["connect_args"] = {"statement_cache_size": 0}
    return options


engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for getting async database session.

    Yields:
        AsyncSession: Database session
    """
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


class DatabaseClient:
    """Database client with connection and schema management."""

    def __init__(self, engine: AsyncEngine):
        """Initialize database client.

        Args:
            engine: SQLAlchemy async engine
        """
        self.engine = engine
        self._connected = False

    async def connect(self) -> bool:
        """Test database connection."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            self._connected = True
            LOGGER.info("Database connection successful")
            return True

        except Exception:
            self._connected = False
            LOGGER.error("Database connection failed", exc_info=True)
            raise

    async def disconnect(self) -> None:
        """Close database connection."""
        await self.engine.dispose()
        self._connected = False
        LOGGER.info("Database connection closed")

    async def create_tables(self) -> None:
        """Create all tables that don't exist yet, leaving existing ones untouched."""
        # Registers every model on Base.metadata
        from app.database import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        LOGGER.info("Database tables created/verified successfully")

    async def health_check(self) -> dict:
        """Check database health."""
        try:
            async with self.engine.connect() as conn:
                val = await conn.scalar(text("SELECT 1"))

            self._connected = True
            return {
                "status": "healthy",
                "connected": True,
                "latency_test": "passed" if val == 1 else "failed",
            }

        except Exception as e:
            self._connected = False
            LOGGER.error("Database health check failed", extra={"error": str(e)})
            return {
                "status": "unhealthy",
                "connected": False,
                "error": str(e),
            }

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._connected


# Global database client instance
db_client = DatabaseClient(engine)


async def init_database(create_tables: bool = True) -> None:
    """Initialize database connection and optionally create missing tables.

    Args:
        create_tables: Whether to create missing tables on startup
    """
    LOGGER.info("Initializing database connection...")
    await db_client.connect()

    if create_tables:
        await db_client.create_tables()

    LOGGER.info("Database initialization completed")


async def close_database() -> None:
    """Close database connection."""
    try:
        await db_client.disconnect()
    except Exception as e:
        LOGGER.error("Error closing database", exc_info=True, extra={"error": str(e)})
