"""Match CRUD and stadium lookup route handlers."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from clubmanager.api.routes import service_error, not_found
from clubmanager.database.db import get_db_session
from clubmanager.models.schemas import MatchRequest, CreateMatchResponse, MessageResponse
from clubmanager.services import data_service
from clubmanager.services.validation import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/matches")
async def list_matches(session: AsyncSession = Depends(get_db_session)):
    """All matches with club and stadium names, newest first."""
    try:
        return await data_service.list_matches(session)
    except Exception as e:
        raise service_error(e, "Failed to fetch matches")


# Registered before /api/matches/{match_id}
@router.get("/api/matches/stadiums")
async def list_stadiums(session: AsyncSession = Depends(get_db_session)):
    try:
        return await data_service.list_stadiums(session)
    except Exception as e:
        raise service_error(e, "Failed to fetch stadiums")


@router.get("/api/matches/{match_id}")
async def get_match(match_id: int, session: AsyncSession = Depends(get_db_session)):
    """Raw match data for the edit form."""
    try:
        match = await data_service.get_match(session, match_id)
    except Exception as e:
        raise service_error(e, "Failed to fetch match details")
    if match is None:
        raise not_found("Match")
    return match


@router.post("/api/matches", status_code=201, response_model=CreateMatchResponse)
async def create_match(request: MatchRequest, session: AsyncSession = Depends(get_db_session)):
    """
    Create a new match.

    Request body:
        {
            "match_type": "League",
            "match_date": "2026-11-02",
            "home_club_id": 1,
            "away_club_id": 2,    // must differ from home_club_id
            "home_score": 0,      // optional, default 0
            "away_score": 0,      // optional, default 0
            "stadium_id": 3
        }
    """
    try:
        match_id = await data_service.create_match(session, request.model_dump())
        return CreateMatchResponse(message="Match created successfully", match_id=match_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise service_error(e, "Failed to create match")


@router.put("/api/matches/{match_id}", response_model=MessageResponse)
async def update_match(
    match_id: int, request: MatchRequest, session: AsyncSession = Depends(get_db_session)
):
    try:
        updated = await data_service.update_match(session, match_id, request.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise service_error(e, "Failed to update match")
    if not updated:
        raise not_found("Match")
    return MessageResponse(message="Match updated successfully")


@router.delete("/api/matches/{match_id}", response_model=MessageResponse)
async def delete_match(match_id: int, session: AsyncSession = Depends(get_db_session)):
    try:
        deleted = await data_service.delete_match(session, match_id)
    except Exception as e:
        raise service_error(e, "Failed to delete match")
    if not deleted:
        raise not_found("Match")
    return MessageResponse(message="Match deleted successfully")
