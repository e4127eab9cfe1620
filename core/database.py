"""
Database engine lifecycle and session management with SQLAlchemy async
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
)
from core.config import Settings, settings
import logging

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the pooled async engine.

    Lifecycle:
    - connect() on application startup
    - session() for a scoped checkout per request
    - disconnect() on shutdown, returning every pooled connection
    """

    def __init__(self, config: Settings = settings):
        self.config = config
        self.engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker] = None

    def connect(self) -> AsyncEngine:
        """Create the engine and session factory (no connection is opened yet)"""
        if self.engine is not None:
            return self.engine

        self.engine = create_async_engine(
            self.config.DATABASE_URL,
            echo=False,
            pool_size=self.config.DB_POOL_SIZE,
            max_overflow=self.config.DB_MAX_OVERFLOW,
            pool_timeout=self.config.DB_POOL_TIMEOUT_SECONDS,
            pool_pre_ping=True,
        )
        self._session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )
        logger.info(
            f"Database engine created (pool_size={self.config.DB_POOL_SIZE}, "
            f"pool_timeout={self.config.DB_POOL_TIMEOUT_SECONDS}s)"
        )
        return self.engine

    async def disconnect(self):
        """Dispose the engine and release pooled connections"""
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self._session_maker = None
        logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Check out one session for the duration of the block"""
        if self._session_maker is None:
            self.connect()
        async with self._session_maker() as session:
            yield session


database = Database()
