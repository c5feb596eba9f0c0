"""Health check route handler."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from clubmanager.database.db import get_db_session
from clubmanager.utils.datetime_utils import utcnow

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/health")
async def health_check(session: AsyncSession = Depends(get_db_session)):
    """
    Health check endpoint. Runs a trivial query to prove the pool can hand out
    a working connection.

    Returns:
        dict: Service status
    """
    try:
        await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="DB connection failed")
    return {"status": "healthy", "db": "connected", "checked_at": utcnow().isoformat()}
