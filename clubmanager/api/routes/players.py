"""Player roster, search and CRUD route handlers."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from clubmanager.api.routes import service_error, not_found
from clubmanager.database.db import get_db_session
from clubmanager.models.schemas import PlayerRequest, CreatePlayerResponse, MessageResponse
from clubmanager.services import data_service, player_search
from clubmanager.services.validation import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/players")
async def list_players(session: AsyncSession = Depends(get_db_session)):
    """Roster view: every player with club name and computed age."""
    try:
        return await data_service.list_players(session)
    except Exception as e:
        raise service_error(e, "Failed to fetch players")


@router.get("/api/players/search")
async def search_players(
    name: Optional[str] = None,
    nameMatchType: Optional[str] = None,
    position: Optional[str] = None,
    club_id: Optional[str] = None,
    minAge: Optional[str] = None,
    maxAge: Optional[str] = None,
    minSalary: Optional[str] = None,
    minTrophies: Optional[str] = None,
    session: AsyncSession = Depends(get_db_session),
):
    """
    Advanced scouting search.

    Query params (all optional, empty values are ignored): name,
    nameMatchType (contains|startsWith|endsWith|exact), position, club_id,
    minAge, maxAge, minSalary, minTrophies.

    Results are ordered by salary (highest first), then age (youngest first).
    """
    filters = player_search.PlayerSearchFilters(
        name=name,
        nameMatchType=nameMatchType,
        position=position,
        club_id=club_id,
        minAge=minAge,
        maxAge=maxAge,
        minSalary=minSalary,
        minTrophies=minTrophies,
    )
    try:
        return await player_search.search_players(session, filters)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise service_error(e, "Failed to search players")


@router.get("/api/players/{player_id}")
async def get_player(player_id: int, session: AsyncSession = Depends(get_db_session)):
    """Raw player data for the edit form (dob as YYYY-MM-DD)."""
    try:
        player = await data_service.get_player(session, player_id)
    except Exception as e:
        raise service_error(e, "Failed to fetch player details")
    if player is None:
        raise not_found("Player")
    return player


@router.post("/api/players", status_code=201, response_model=CreatePlayerResponse)
async def create_player(request: PlayerRequest, session: AsyncSession = Depends(get_db_session)):
    """
    Create a new player. Players must be at least 15 years old.

    Request body:
        {
            "f_name": "John",
            "l_name": "Smith",
            "dob": "2004-03-12",
            "position": "Forward",
            "city": "Leeds",      // optional
            "state": "Yorkshire", // optional
            "pincode": "LS1",     // optional
            "club_id": 2          // optional, null or "" for a free agent
        }
    """
    try:
        player_id = await data_service.create_player(session, request.model_dump())
        return CreatePlayerResponse(message="Player created successfully", player_id=player_id)
    except ValidationError as e:
        logger.info(f"Rejected player create: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise service_error(e, "Failed to create player")


@router.put("/api/players/{player_id}", response_model=MessageResponse)
async def update_player(
    player_id: int, request: PlayerRequest, session: AsyncSession = Depends(get_db_session)
):
    try:
        updated = await data_service.update_player(session, player_id, request.model_dump())
    except ValidationError as e:
        logger.info(f"Rejected player update: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise service_error(e, "Failed to update player")
    if not updated:
        raise not_found("Player")
    return MessageResponse(message="Player updated successfully")


@router.delete("/api/players/{player_id}", response_model=MessageResponse)
async def delete_player(player_id: int, session: AsyncSession = Depends(get_db_session)):
    """Delete a player. Their contracts are removed with them."""
    try:
        deleted = await data_service.delete_player(session, player_id)
    except Exception as e:
        raise service_error(e, "Failed to delete player")
    if not deleted:
        raise not_found("Player")
    return MessageResponse(message="Player deleted successfully")
