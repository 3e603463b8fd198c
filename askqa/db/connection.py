import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from askqa.core.config import Settings
from askqa.core.exceptions import DatabaseConnectionError
from askqa.core.logging import get_logger

logger = get_logger(__name__)

ASYNC_DRIVERS = {
    'postgresql': 'postgresql+asyncpg',
    'postgres': 'postgresql+asyncpg',
    'postgresql+psycopg2': 'postgresql+asyncpg',
}


def _async_url(url: URL) -> URL:
    drivername = ASYNC_DRIVERS.get(url.drivername)
    return url.set(drivername=drivername) if drivername else url


class Database:
    """Owns the async engine; hands out one connection per request."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        url = _async_url(settings.database_url)
        connect_args = {}
        if url.drivername == 'postgresql+asyncpg' and 'ssl' not in url.query:
            connect_args['ssl'] = settings.DB_SSLMODE

        engine = create_async_engine(
            url,
            echo=False,
            pool_pre_ping=True,
            pool_size=10,
            max_overflow=20,
            connect_args=connect_args,
        )
        logger.info(f"Database engine created for {url.render_as_string(hide_password=True)}")
        return cls(engine)

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[AsyncConnection]:
        """Yield a pooled connection; it is returned to the pool on every exit path."""
        try:
            conn = await self.engine.connect()
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            logger.error(f"Database connection failed: {e}")
            raise DatabaseConnectionError(f"failed to connect to database: {e}") from e

        try:
            yield conn
        finally:
            await conn.close()

    async def dispose(self):
        """Close database connections"""
        await self.engine.dispose()
        logger.info("Database connections closed")
