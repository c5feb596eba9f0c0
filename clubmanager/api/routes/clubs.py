"""Club CRUD route handlers."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from clubmanager.api.routes import service_error, not_found
from clubmanager.database.db import get_db_session
from clubmanager.models.schemas import ClubRequest, CreateClubResponse, MessageResponse
from clubmanager.services import data_service
from clubmanager.services.validation import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/clubs")
async def list_clubs(session: AsyncSession = Depends(get_db_session)):
    """Get all clubs ordered by name."""
    try:
        return await data_service.list_clubs(session)
    except Exception as e:
        raise service_error(e, "Failed to fetch clubs")


@router.get("/api/clubs/{club_id}")
async def get_club(club_id: int, session: AsyncSession = Depends(get_db_session)):
    try:
        club = await data_service.get_club(session, club_id)
    except Exception as e:
        raise service_error(e, "Failed to fetch club")
    if club is None:
        raise not_found("Club")
    return club


@router.post("/api/clubs", status_code=201, response_model=CreateClubResponse)
async def create_club(request: ClubRequest, session: AsyncSession = Depends(get_db_session)):
    """
    Create a new club.

    Request body:
        {
            "club_name": "Northside FC",
            "founded_year": 1901,         // optional
            "owner_name": "Jane Doe",     // optional
            "club_email": "info@nfc.com", // optional, unique
            "total_trophies": 3           // optional, default 0
        }
    """
    try:
        club_id = await data_service.create_club(session, request.model_dump())
        return CreateClubResponse(message="Club created successfully", club_id=club_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise service_error(e, "Failed to create club")


@router.put("/api/clubs/{club_id}", response_model=MessageResponse)
async def update_club(
    club_id: int, request: ClubRequest, session: AsyncSession = Depends(get_db_session)
):
    try:
        updated = await data_service.update_club(session, club_id, request.update_values())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise service_error(e, "Failed to update club")
    if not updated:
        raise not_found("Club")
    return MessageResponse(message="Club updated successfully")


@router.delete("/api/clubs/{club_id}", response_model=MessageResponse)
async def delete_club(club_id: int, session: AsyncSession = Depends(get_db_session)):
    try:
        deleted = await data_service.delete_club(session, club_id)
    except Exception as e:
        raise service_error(e, "Failed to delete club")
    if not deleted:
        raise not_found("Club")
    return MessageResponse(message="Club deleted successfully")
