"""
Database connection pool and session management using SQLAlchemy async mode.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    async_sessionmaker,
    AsyncEngine,
)
from sqlalchemy.orm import DeclarativeBase

from clubmanager.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class Database:
    """
    Owns the engine (and therefore the connection pool) plus the session factory.

    One instance is created per application and attached to ``app.state.db``;
    request handlers get sessions from it through ``get_db_session``.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.sessionmaker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """
        Build a bounded pool from settings.

        At most ``pool_size + max_overflow`` connections are open at once.
        Further checkouts queue for up to ``pool_timeout`` seconds and then fail.
        """
        engine = create_async_engine(
            settings.database_url,
            echo=settings.sql_echo,
            future=True,
            pool_pre_ping=True,  # Verify connections before using them
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
        )
        return cls(engine)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def init_database(database: Database) -> None:
    """Initialize the database by creating all tables."""
    # Import models to register them with Base.metadata
    from clubmanager.database import models  # noqa: F401

    async with database.engine.begin() as conn:
        def create_tables(sync_conn):
            Base.metadata.create_all(bind=sync_conn, checkfirst=True)
        await conn.run_sync(create_tables)


def get_database(request: Request) -> Database:
    database: Optional[Database] = getattr(request.app.state, "db", None)
    if database is None:
        raise RuntimeError("Database has not been configured on the application")
    return database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI to get database session.

    Usage in FastAPI routes:
        async def my_route(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    database = get_database(request)
    async with database.sessionmaker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
