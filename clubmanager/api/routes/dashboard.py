"""Dashboard route handler."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clubmanager.api.routes import service_error
from clubmanager.database.db import get_db_session
from clubmanager.services import data_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/dashboard")
async def get_dashboard(session: AsyncSession = Depends(get_db_session)):
    """
    Totals plus the next five and the last five matches.

    Returns:
        {
            "stats": {"total_players", "total_clubs", "total_trophies", "total_matches"},
            "upcoming": [{match_id, formatted_date, home_team, away_team}],
            "recent": [{match_id, formatted_date, home_team, away_team, home_score, away_score}]
        }
    """
    try:
        return await data_service.get_dashboard(session)
    except Exception as e:
        raise service_error(e, "Failed to load dashboard data")
