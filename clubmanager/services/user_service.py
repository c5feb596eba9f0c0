"""
User service layer for user database operations.
"""

from typing import Optional, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from clubmanager.database.models import User, UserRole
from clubmanager.services import auth_service
import logging

logger = logging.getLogger(__name__)


async def create_user(
    session: AsyncSession, username: str, password_hash: str, role: UserRole = UserRole.MANAGER
) -> int:
    """
    Create a new user account.

    Args:
        session: Database session
        username: Unique login name
        password_hash: Required hashed password
        role: Admin or Manager

    Returns:
        User ID of the created user

    Raises:
        ValueError: If the username is already taken
    """
    result = await session.execute(select(User.user_id).where(User.username == username))
    if result.scalar_one_or_none():
        raise ValueError(f"Username {username} is already registered")

    new_user = User(username=username, password_hash=password_hash, role=role)
    session.add(new_user)
    await session.flush()
    user_id = new_user.user_id
    await session.commit()

    return user_id


async def get_user_by_username(session: AsyncSession, username: str) -> Optional[Dict]:
    result = await session.execute(select(User).where(User.username == username))
    user = result.scalar_one_or_none()
    if not user:
        return None
    return {
        "user_id": user.user_id,
        "username": user.username,
        "password_hash": user.password_hash,
        "role": user.role,
    }


async def authenticate(session: AsyncSession, username: str, password: str) -> Optional[Dict]:
    """
    Check credentials.

    Returns:
        Public user fields (no hash) on success, None on any mismatch
    """
    user = await get_user_by_username(session, username)
    if not user or not auth_service.verify_password(password, user["password_hash"]):
        logger.info(f"Failed login attempt for username '{username}'")
        return None
    return {"user_id": user["user_id"], "username": user["username"], "role": user["role"]}
