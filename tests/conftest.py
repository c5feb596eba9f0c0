"""
Shared pytest configuration for backend tests.

Uses an in-memory SQLite database (aiosqlite) so the suite needs no running
server. A StaticPool keeps every session on the same connection, otherwise each
checkout would see its own empty in-memory database.
"""

import os

os.environ.setdefault("ENV", "test")  # disables login rate limiting

import httpx
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from clubmanager.api.main import create_app
from clubmanager.config import Settings
from clubmanager.database.db import Base, Database


@pytest_asyncio.fixture
async def database():
    """Fresh in-memory database per test."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        # Ensure models are imported so Base.metadata includes all tables
        from clubmanager.database import models  # noqa: F401

        await conn.run_sync(Base.metadata.create_all)

    db = Database(engine)
    yield db
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.sessionmaker() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest_asyncio.fixture
async def client(database):
    """HTTP client bound to an app that uses the test database."""
    settings = Settings(database_url="sqlite+aiosqlite:///:memory:", seed_defaults=False)
    app = create_app(database=database, settings=settings)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c

