#!/usr/bin/env python3
"""
Initialize default database values.
Run on startup to seed the stadium list and the initial admin account.
"""

import asyncio
import logging

from sqlalchemy import select

from clubmanager.config import Settings
from clubmanager.database.db import Database, init_database
from clubmanager.database.models import Stadium, UserRole
from clubmanager.services import auth_service, user_service
from clubmanager.utils.constants import DEFAULT_STADIUMS

logger = logging.getLogger(__name__)


async def seed_stadiums(session) -> int:
    """Insert any default stadium that is missing. Returns the number added."""
    result = await session.execute(select(Stadium.stadium_name))
    existing = set(result.scalars().all())

    added = 0
    for name, city in DEFAULT_STADIUMS:
        if name not in existing:
            session.add(Stadium(stadium_name=name, city=city))
            added += 1
    await session.commit()
    return added


async def seed_admin_user(session, username: str, password: str) -> bool:
    """Create the admin account if it does not exist yet. Returns True if created."""
    if not password:
        logger.warning("ADMIN_PASSWORD is not set; skipping admin user seed")
        return False
    if await user_service.get_user_by_username(session, username):
        return False
    await user_service.create_user(
        session, username, auth_service.hash_password(password), role=UserRole.ADMIN
    )
    return True


async def init_defaults(database: Database, settings: Settings):
    """Initialize default database values."""
    logger.info("Initializing default database values...")

    async with database.sessionmaker() as session:
        added = await seed_stadiums(session)
        if added:
            logger.info(f"✓ Seeded {added} stadiums")
        else:
            logger.info("✓ Stadiums already seeded")

        if await seed_admin_user(session, settings.admin_username, settings.admin_password):
            logger.info(f"✓ Created admin user: {settings.admin_username}")

    logger.info("✓ Default values initialized")


async def _main():
    settings = Settings.from_env()
    database = Database.from_settings(settings)
    try:
        await init_database(database)
        await init_defaults(database, settings)
    finally:
        await database.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(_main())
