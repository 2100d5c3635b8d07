"""
Database lifecycle.

``Database`` owns the async engine and session factory. The application opens
one in its lifespan and stores it on ``app.state``; request handlers reach it
through ``app.api.deps`` rather than importing a module-level engine.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.config import Settings

logger = logging.getLogger("employee_registry.db")


class Database:
    def __init__(self, url: str, echo: bool = False, pool_size: int = 10, max_overflow: int = 20):
        self.url = url
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            echo=settings.SQLALCHEMY_ECHO,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def connect(self) -> None:
        if self._engine is not None:
            return

        if self.url.startswith("sqlite"):
            # SQLite has no server-side pool; an in-memory database must also
            # share one connection or each session would see an empty schema.
            engine_kwargs = {
                "connect_args": {"check_same_thread": False},
                "poolclass": StaticPool,
            }
        else:
            # - pool_pre_ping: Verify connections are alive before use (prevents stale connections)
            # - pool_recycle: Recycle connections after 1 hour to prevent DB-side timeouts
            engine_kwargs = {
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_pre_ping": True,
                "pool_recycle": 3600,
                "pool_timeout": 30,
            }

        self._engine = create_async_engine(self.url, echo=self.echo, **engine_kwargs)
        self._sessionmaker = async_sessionmaker(self._engine, class_=AsyncSession, expire_on_commit=False)
        logger.info("Database engine created for %s", self._engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        if self._engine is None:
            return
        logger.info("Closing database connections...")
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Database connections closed")

    async def create_all(self) -> None:
        """Create every table known to the ORM metadata."""
        from app.db.base import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        from app.db.base import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected; call connect() first")
        async with self._sessionmaker() as session:
            yield session

    async def check_connection(self) -> bool:
        """
        Verify database connectivity. Used by health checks.
        Returns True if connection is successful, False otherwise.
        """
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database health check failed: %s", e)
            return False
