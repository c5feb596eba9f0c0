"""
SQLAlchemy ORM models for the club management system.
"""

import enum
from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    Numeric,
    Enum,
    ForeignKey,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship
from clubmanager.database.db import Base


class PlayerPosition(str, enum.Enum):
    """Playing position enum."""

    FORWARD = "Forward"
    MIDFIELDER = "Midfielder"
    DEFENDER = "Defender"
    GOALKEEPER = "Goalkeeper"


class MatchType(str, enum.Enum):
    """Competition a match belongs to."""

    LEAGUE = "League"
    CHAMPIONS_LEAGUE = "Champions League"
    FRIENDLY = "Friendly"


class UserRole(str, enum.Enum):
    """User role enum."""

    ADMIN = "Admin"
    MANAGER = "Manager"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Club(Base):
    """Football clubs."""

    __tablename__ = "club"

    club_id = Column(Integer, primary_key=True, autoincrement=True)
    club_name = Column(String(100), nullable=False, unique=True)
    founded_year = Column(Integer, nullable=True)
    owner_name = Column(String(100), nullable=True)
    club_email = Column(String(255), nullable=True, unique=True)
    total_trophies = Column(Integer, nullable=False, default=0, server_default="0")

    # Relationships
    players = relationship("Player", back_populates="club", passive_deletes=True)
    contracts = relationship("Contract", back_populates="club")

    __table_args__ = (
        CheckConstraint("total_trophies >= 0", name="ck_club_trophies_non_negative"),
    )


class Player(Base):
    """Registered players. A player without a club is a free agent."""

    __tablename__ = "player"

    player_id = Column(Integer, primary_key=True, autoincrement=True)
    f_name = Column(String(50), nullable=False)
    l_name = Column(String(50), nullable=False)
    dob = Column(Date, nullable=False)
    position = Column(
        Enum(PlayerPosition, name="player_position", values_callable=_enum_values),
        nullable=False,
    )
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    pincode = Column(String(20), nullable=True)
    club_id = Column(Integer, ForeignKey("club.club_id", ondelete="SET NULL"), nullable=True)

    # Relationships
    club = relationship("Club", back_populates="players")
    contracts = relationship("Contract", back_populates="player", passive_deletes=True)

    __table_args__ = (Index("idx_player_club_id", "club_id"),)


class Contract(Base):
    """Employment contract linking one player to one club."""

    __tablename__ = "contract"

    contract_id = Column(Integer, primary_key=True, autoincrement=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    salary = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    player_id = Column(
        Integer, ForeignKey("player.player_id", ondelete="CASCADE"), nullable=False
    )
    club_id = Column(Integer, ForeignKey("club.club_id"), nullable=False)

    # Relationships
    player = relationship("Player", back_populates="contracts")
    club = relationship("Club", back_populates="contracts")

    __table_args__ = (
        Index("idx_contract_player_id", "player_id"),
        Index("idx_contract_club_id", "club_id"),
    )


class Stadium(Base):
    """Match venues."""

    __tablename__ = "stadium"

    stadium_id = Column(Integer, primary_key=True, autoincrement=True)
    stadium_name = Column(String(100), nullable=False, unique=True)
    city = Column(String(100), nullable=True)


class Match(Base):
    """Fixtures and results between two clubs."""

    __tablename__ = "matches"

    match_id = Column(Integer, primary_key=True, autoincrement=True)
    match_type = Column(
        Enum(MatchType, name="match_type", values_callable=_enum_values),
        nullable=False,
    )
    match_date = Column(Date, nullable=False)
    home_club_id = Column(Integer, ForeignKey("club.club_id"), nullable=False)
    away_club_id = Column(Integer, ForeignKey("club.club_id"), nullable=False)
    home_score = Column(Integer, nullable=False, default=0, server_default="0")
    away_score = Column(Integer, nullable=False, default=0, server_default="0")
    stadium_id = Column(Integer, ForeignKey("stadium.stadium_id"), nullable=False)

    # Relationships
    home_club = relationship("Club", foreign_keys=[home_club_id], lazy="select")
    away_club = relationship("Club", foreign_keys=[away_club_id], lazy="select")
    stadium = relationship("Stadium", lazy="select")

    __table_args__ = (
        CheckConstraint("home_club_id <> away_club_id", name="ck_matches_distinct_clubs"),
        Index("idx_matches_match_date", "match_date"),
    )


class User(Base):
    """Application users (login only)."""

    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=_enum_values),
        nullable=False,
        default=UserRole.MANAGER,
    )
