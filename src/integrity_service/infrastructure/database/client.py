"""
Database Client

Async SQLAlchemy database connection and session management.
"""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from integrity_service.config.settings import settings
from integrity_service.infrastructure.database.models import Base

logger = logging.getLogger(__name__)


class DatabaseClient:
    """Database client for managing async connections"""

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.database_url
        self.engine = None
        self.session_maker = None

    async def verify_connection(self):
        """Verify database connection before table creation"""
        if not self.engine:
            raise RuntimeError("Engine not initialized. Call initialize() first.")

        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection verified")

    async def initialize(self):
        """Initialize database engine and create tables"""
        logger.info(f"Initializing database: {self.database_url}")

        # Create async engine
        engine_kwargs = {"echo": False}
        if self.database_url.startswith("sqlite"):
            engine_kwargs["poolclass"] = NullPool
        self.engine = create_async_engine(self.database_url, **engine_kwargs)

        # Create session maker
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        await self.verify_connection()

        # Note: Alembic migrations are the primary schema path for deployments
        # create_all() is kept for non-Docker setups and tests
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Database initialized successfully")

    async def close(self):
        """Close database connections"""
        if self.engine:
            await self.engine.dispose()
            logger.info("Database connections closed")

    def get_session_maker(self) -> async_sessionmaker:
        """Get the session factory handed to the stores"""
        if not self.session_maker:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self.session_maker

    async def health_check(self) -> bool:
        """Check database health"""
        try:
            async with self.get_session_maker()() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False


# Global database client instance
db_client = DatabaseClient()
