"""Authentication route handlers."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from clubmanager.api.routes import limiter, service_error, INVALID_CREDENTIALS_RESPONSE
from clubmanager.database.db import get_db_session
from clubmanager.models.schemas import LoginRequest, UserResponse
from clubmanager.services import user_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/api/auth/login", response_model=UserResponse)
@limiter.limit("10/minute")
async def login(
    request: Request,
    credentials: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
):
    """Check a username/password pair and return the user's id, name and role."""
    try:
        user = await user_service.authenticate(session, credentials.username, credentials.password)
    except Exception as e:
        raise service_error(e, "Server error during login")
    if not user:
        raise INVALID_CREDENTIALS_RESPONSE
    return UserResponse(**user)
