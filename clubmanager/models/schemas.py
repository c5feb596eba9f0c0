"""
Pydantic models for API request/response validation.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from clubmanager.database.models import PlayerPosition, MatchType, UserRole


def _blank_to_none(value):
    """HTML forms send "" for an unselected dropdown."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class MessageResponse(BaseModel):
    message: str


class ClubRequest(BaseModel):
    """Request to create or update a club."""

    club_name: str = Field(min_length=1, max_length=100)
    founded_year: Optional[int] = Field(default=None, ge=1800, le=2100)
    owner_name: Optional[str] = Field(default=None, max_length=100)
    club_email: Optional[str] = Field(default=None, max_length=255)
    total_trophies: int = Field(default=0, ge=0)

    @field_validator("founded_year", "owner_name", "club_email", mode="before")
    @classmethod
    def blank_optional_fields(cls, value):
        return _blank_to_none(value)

    def update_values(self) -> dict:
        """Columns to rewrite on update. Trophies are kept when the body leaves them out."""
        values = self.model_dump()
        if "total_trophies" not in self.model_fields_set:
            values.pop("total_trophies")
        return values


class CreateClubResponse(BaseModel):
    message: str
    club_id: int


class PlayerRequest(BaseModel):
    """Request to create or update a player. ``club_id`` empty/None means free agent."""

    f_name: str = Field(min_length=1, max_length=50)
    l_name: str = Field(min_length=1, max_length=50)
    dob: date
    position: PlayerPosition
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    club_id: Optional[int] = None

    @field_validator("city", "state", "pincode", "club_id", mode="before")
    @classmethod
    def blank_optional_fields(cls, value):
        return _blank_to_none(value)


class CreatePlayerResponse(BaseModel):
    message: str
    player_id: int


class ContractRequest(BaseModel):
    """Request to create a contract."""

    start_date: date
    end_date: date
    salary: float = Field(ge=0)
    player_id: int
    club_id: int


class CreateContractResponse(BaseModel):
    message: str
    contract_id: int


class MatchRequest(BaseModel):
    """Request to create or update a match."""

    match_type: MatchType
    match_date: date
    home_club_id: int
    away_club_id: int
    home_score: Optional[int] = Field(default=0, ge=0)
    away_score: Optional[int] = Field(default=0, ge=0)
    stadium_id: int

    @field_validator("home_score", "away_score", mode="before")
    @classmethod
    def default_score(cls, value):
        """Missing or blank scores are stored as 0."""
        value = _blank_to_none(value)
        return 0 if value is None else value


class CreateMatchResponse(BaseModel):
    message: str
    match_id: int


class LoginRequest(BaseModel):
    """Request to login with username and password."""

    username: str
    password: str


class UserResponse(BaseModel):
    user_id: int
    username: str
    role: UserRole
