"""
Data service layer for database operations.
Handles all CRUD operations for clubs, players, contracts, matches and the dashboard.

Functions return plain dicts (dates already formatted) or ``None`` when the
addressed row does not exist. Writes run the named validation rules before
issuing their single statement.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from clubmanager.database.models import Club, Stadium
from clubmanager.services import queries
from clubmanager.services.validation import (
    raise_for_failures,
    player_minimum_age,
    distinct_match_clubs,
    unique_club_fields,
)
from clubmanager.utils.datetime_utils import format_iso_date, format_long_date

logger = logging.getLogger(__name__)


#
# Helper functions
#

def club_to_dict(club: Club) -> Dict[str, Any]:
    return {
        "club_id": club.club_id,
        "club_name": club.club_name,
        "founded_year": club.founded_year,
        "owner_name": club.owner_name,
        "club_email": club.club_email,
        "total_trophies": club.total_trophies,
    }


def stadium_to_dict(stadium: Stadium) -> Dict[str, Any]:
    return {
        "stadium_id": stadium.stadium_id,
        "stadium_name": stadium.stadium_name,
        "city": stadium.city,
    }


def _format_dates(row: Dict[str, Any], *fields: str) -> Dict[str, Any]:
    for field in fields:
        row[field] = format_iso_date(row[field])
    return row


async def _execute_write(session: AsyncSession, statement) -> int:
    """Execute an UPDATE/DELETE and return the number of affected rows."""
    result = await session.execute(statement)
    await session.commit()
    return result.rowcount


async def _execute_insert(session: AsyncSession, statement) -> int:
    """Execute an INSERT ... RETURNING and return the generated id."""
    result = await session.execute(statement)
    new_id = result.scalar_one()
    await session.commit()
    return new_id


#
# Clubs
#

async def list_clubs(session: AsyncSession) -> List[Dict]:
    result = await session.execute(queries.list_clubs_query())
    return [club_to_dict(club) for club in result.scalars().all()]


async def get_club(session: AsyncSession, club_id: int) -> Optional[Dict]:
    result = await session.execute(queries.get_club_query(club_id))
    club = result.scalar_one_or_none()
    return club_to_dict(club) if club else None


async def create_club(session: AsyncSession, values: Dict[str, Any]) -> int:
    """
    Create a club.

    Raises:
        ValidationError: If the name or email is already taken
    """
    raise_for_failures(
        await unique_club_fields(session, values["club_name"], values.get("club_email"))
    )
    club_id = await _execute_insert(session, queries.insert_club_statement(values))
    logger.info(f"Created club {club_id} ({values['club_name']})")
    return club_id


async def update_club(session: AsyncSession, club_id: int, values: Dict[str, Any]) -> bool:
    """Rewrite the given columns of a club. Returns False if the club does not exist."""
    raise_for_failures(
        await unique_club_fields(
            session, values["club_name"], values.get("club_email"), exclude_club_id=club_id
        )
    )
    return await _execute_write(session, queries.update_club_statement(club_id, values)) > 0


async def delete_club(session: AsyncSession, club_id: int) -> bool:
    return await _execute_write(session, queries.delete_club_statement(club_id)) > 0


#
# Players
#

async def list_players(session: AsyncSession) -> List[Dict]:
    """Roster view: every player with club name and computed age."""
    result = await session.execute(queries.roster_query())
    return [dict(row) for row in result.mappings().all()]


async def get_player(session: AsyncSession, player_id: int) -> Optional[Dict]:
    result = await session.execute(queries.get_player_query(player_id))
    row = result.mappings().first()
    if row is None:
        return None
    return _format_dates(dict(row), "dob")


async def create_player(
    session: AsyncSession, values: Dict[str, Any], today: Optional[date] = None
) -> int:
    """
    Create a player.

    Raises:
        ValidationError: If the player is younger than the minimum age
    """
    raise_for_failures(player_minimum_age(values["dob"], today))
    player_id = await _execute_insert(session, queries.insert_player_statement(values))
    logger.info(f"Created player {player_id}")
    return player_id


async def update_player(
    session: AsyncSession, player_id: int, values: Dict[str, Any], today: Optional[date] = None
) -> bool:
    raise_for_failures(player_minimum_age(values["dob"], today))
    return await _execute_write(session, queries.update_player_statement(player_id, values)) > 0


async def delete_player(session: AsyncSession, player_id: int) -> bool:
    return await _execute_write(session, queries.delete_player_statement(player_id)) > 0


#
# Contracts
#

def _contract_row(row) -> Dict[str, Any]:
    contract = _format_dates(dict(row), "start_date", "end_date")
    contract["salary"] = float(contract["salary"])
    return contract


async def list_contracts(session: AsyncSession) -> List[Dict]:
    result = await session.execute(queries.contracts_with_names_query())
    return [_contract_row(row) for row in result.mappings().all()]


async def get_contract(session: AsyncSession, contract_id: int) -> Optional[Dict]:
    result = await session.execute(queries.get_contract_query(contract_id))
    row = result.mappings().first()
    return _contract_row(row) if row else None


async def create_contract(session: AsyncSession, values: Dict[str, Any]) -> int:
    # end_date before start_date is stored as given
    contract_id = await _execute_insert(session, queries.insert_contract_statement(values))
    logger.info(f"Created contract {contract_id} for player {values['player_id']}")
    return contract_id


async def delete_contract(session: AsyncSession, contract_id: int) -> bool:
    return await _execute_write(session, queries.delete_contract_statement(contract_id)) > 0


#
# Matches
#

async def list_matches(session: AsyncSession) -> List[Dict]:
    result = await session.execute(queries.matches_with_clubs_query())
    return [_format_dates(dict(row), "match_date") for row in result.mappings().all()]


async def get_match(session: AsyncSession, match_id: int) -> Optional[Dict]:
    result = await session.execute(queries.get_match_query(match_id))
    row = result.mappings().first()
    return _format_dates(dict(row), "match_date") if row else None


async def create_match(session: AsyncSession, values: Dict[str, Any]) -> int:
    """
    Create a match.

    Raises:
        ValidationError: If home and away clubs are the same (nothing is executed)
    """
    raise_for_failures(distinct_match_clubs(values["home_club_id"], values["away_club_id"]))
    match_id = await _execute_insert(session, queries.insert_match_statement(values))
    logger.info(f"Created match {match_id}")
    return match_id


async def update_match(session: AsyncSession, match_id: int, values: Dict[str, Any]) -> bool:
    raise_for_failures(distinct_match_clubs(values["home_club_id"], values["away_club_id"]))
    return await _execute_write(session, queries.update_match_statement(match_id, values)) > 0


async def delete_match(session: AsyncSession, match_id: int) -> bool:
    return await _execute_write(session, queries.delete_match_statement(match_id)) > 0


async def list_stadiums(session: AsyncSession) -> List[Dict]:
    result = await session.execute(queries.list_stadiums_query())
    return [stadium_to_dict(stadium) for stadium in result.scalars().all()]


#
# Dashboard
#

def _dashboard_match_row(row, with_scores: bool) -> Dict[str, Any]:
    item = {
        "match_id": row["match_id"],
        "formatted_date": format_long_date(row["match_date"]),
        "home_team": row["home_team"],
        "away_team": row["away_team"],
    }
    if with_scores:
        item["home_score"] = row["home_score"]
        item["away_score"] = row["away_score"]
    return item


async def get_dashboard(session: AsyncSession, today: Optional[date] = None) -> Dict[str, Any]:
    """
    Aggregate counts plus the next and most recent matches.

    Returns:
        Dict with ``stats``, ``upcoming`` and ``recent``
    """
    today = today or date.today()

    stats_row = (await session.execute(queries.dashboard_stats_query())).mappings().one()
    upcoming = (await session.execute(queries.upcoming_matches_query(today))).mappings().all()
    recent = (await session.execute(queries.recent_matches_query(today))).mappings().all()

    return {
        "stats": {
            "total_players": stats_row["total_players"],
            "total_clubs": stats_row["total_clubs"],
            "total_trophies": int(stats_row["total_trophies"] or 0),
            "total_matches": stats_row["total_matches"],
        },
        "upcoming": [_dashboard_match_row(row, with_scores=False) for row in upcoming],
        "recent": [_dashboard_match_row(row, with_scores=True) for row in recent],
    }
