"""
Parameterized query templates.

One statement per simple CRUD operation plus the joined reads used by the
roster, contracts, matches and dashboard endpoints. Every value is a bound
parameter; nothing is interpolated into SQL text.
"""

from datetime import date
from typing import Any, Dict

from sqlalchemy import select, insert, update, delete, func, Integer
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import aliased
from sqlalchemy.sql.functions import FunctionElement

from clubmanager.database.models import Club, Player, Contract, Match, Stadium
from clubmanager.utils.constants import FREE_AGENT_LABEL, DASHBOARD_MATCH_LIMIT


#
# Computed columns
#

class years_since(FunctionElement):
    """Whole years elapsed between a date column and the current date."""

    type = Integer()
    name = "years_since"
    inherit_cache = True


@compiles(years_since)
def _years_since_default(element, compiler, **kw):
    (dob,) = list(element.clauses)
    return "CAST(EXTRACT(YEAR FROM AGE(CURRENT_DATE, %s)) AS INTEGER)" % compiler.process(dob, **kw)


@compiles(years_since, "mysql")
def _years_since_mysql(element, compiler, **kw):
    (dob,) = list(element.clauses)
    return "TIMESTAMPDIFF(YEAR, %s, CURDATE())" % compiler.process(dob, **kw)


@compiles(years_since, "sqlite")
def _years_since_sqlite(element, compiler, **kw):
    (dob,) = list(element.clauses)
    d = compiler.process(dob, **kw)
    return (
        f"(CAST(strftime('%Y', 'now') AS INTEGER) - CAST(strftime('%Y', {d}) AS INTEGER)"
        f" - (strftime('%m-%d', 'now') < strftime('%m-%d', {d})))"
    )


def player_full_name():
    return (Player.f_name + " " + Player.l_name)


def player_age():
    return years_since(Player.dob)


#
# Clubs
#

def list_clubs_query():
    return select(Club).order_by(Club.club_name.asc())


def get_club_query(club_id: int):
    return select(Club).where(Club.club_id == club_id)


def insert_club_statement(values: Dict[str, Any]):
    return insert(Club).values(**values).returning(Club.club_id)


def update_club_statement(club_id: int, values: Dict[str, Any]):
    return update(Club).where(Club.club_id == club_id).values(**values)


def delete_club_statement(club_id: int):
    return delete(Club).where(Club.club_id == club_id)


#
# Players
#

def roster_query():
    """Player roster: club name and age computed at query time."""
    return (
        select(
            Player.player_id,
            player_full_name().label("full_name"),
            Player.position,
            player_age().label("age_calculated"),
            Player.club_id,
            func.coalesce(Club.club_name, FREE_AGENT_LABEL).label("club_name"),
        )
        .select_from(Player)
        .outerjoin(Club, Player.club_id == Club.club_id)
        .order_by(Player.l_name.asc(), Player.f_name.asc(), Player.player_id.asc())
    )


def get_player_query(player_id: int):
    """Raw player row in the shape the edit form expects."""
    return select(
        Player.player_id,
        Player.f_name,
        Player.l_name,
        Player.dob,
        Player.position,
        Player.city,
        Player.state,
        Player.pincode,
        Player.club_id,
    ).where(Player.player_id == player_id)


def insert_player_statement(values: Dict[str, Any]):
    return insert(Player).values(**values).returning(Player.player_id)


def update_player_statement(player_id: int, values: Dict[str, Any]):
    return update(Player).where(Player.player_id == player_id).values(**values)


def delete_player_statement(player_id: int):
    return delete(Player).where(Player.player_id == player_id)


#
# Contracts
#

def contracts_with_names_query():
    return (
        select(
            Contract.contract_id,
            Contract.start_date,
            Contract.end_date,
            Contract.salary,
            Player.player_id,
            player_full_name().label("player_name"),
            Club.club_id,
            Club.club_name,
        )
        .select_from(Contract)
        .join(Player, Contract.player_id == Player.player_id)
        .join(Club, Contract.club_id == Club.club_id)
        .order_by(Contract.salary.desc(), Contract.contract_id.asc())
    )


def get_contract_query(contract_id: int):
    return contracts_with_names_query().where(Contract.contract_id == contract_id)


def insert_contract_statement(values: Dict[str, Any]):
    return insert(Contract).values(**values).returning(Contract.contract_id)


def delete_contract_statement(contract_id: int):
    return delete(Contract).where(Contract.contract_id == contract_id)


#
# Matches and stadiums
#

def matches_with_clubs_query():
    home = aliased(Club, name="home")
    away = aliased(Club, name="away")
    return (
        select(
            Match.match_id,
            Match.match_type,
            Match.match_date,
            home.club_name.label("home_team"),
            away.club_name.label("away_team"),
            Match.home_score,
            Match.away_score,
            Stadium.stadium_name,
        )
        .select_from(Match)
        .join(home, Match.home_club_id == home.club_id)
        .join(away, Match.away_club_id == away.club_id)
        .join(Stadium, Match.stadium_id == Stadium.stadium_id)
        .order_by(Match.match_date.desc(), Match.match_id.desc())
    )


def get_match_query(match_id: int):
    """Raw match row in the shape the edit form expects."""
    return select(
        Match.match_id,
        Match.match_type,
        Match.match_date,
        Match.home_club_id,
        Match.away_club_id,
        Match.home_score,
        Match.away_score,
        Match.stadium_id,
    ).where(Match.match_id == match_id)


def insert_match_statement(values: Dict[str, Any]):
    return insert(Match).values(**values).returning(Match.match_id)


def update_match_statement(match_id: int, values: Dict[str, Any]):
    return update(Match).where(Match.match_id == match_id).values(**values)


def delete_match_statement(match_id: int):
    return delete(Match).where(Match.match_id == match_id)


def list_stadiums_query():
    return select(Stadium).order_by(Stadium.stadium_name.asc())


#
# Dashboard
#

def dashboard_stats_query():
    """Four independent aggregates in a single round trip."""
    return select(
        select(func.count()).select_from(Player).scalar_subquery().label("total_players"),
        select(func.count()).select_from(Club).scalar_subquery().label("total_clubs"),
        select(func.coalesce(func.sum(Club.total_trophies), 0))
        .scalar_subquery()
        .label("total_trophies"),
        select(func.count()).select_from(Match).scalar_subquery().label("total_matches"),
    )


def _dashboard_matches_base():
    home = aliased(Club, name="home")
    away = aliased(Club, name="away")
    return (
        select(
            Match.match_id,
            Match.match_date,
            home.club_name.label("home_team"),
            away.club_name.label("away_team"),
            Match.home_score,
            Match.away_score,
        )
        .select_from(Match)
        .join(home, Match.home_club_id == home.club_id)
        .join(away, Match.away_club_id == away.club_id)
    )


def upcoming_matches_query(today: date, limit: int = DASHBOARD_MATCH_LIMIT):
    return (
        _dashboard_matches_base()
        .where(Match.match_date >= today)
        .order_by(Match.match_date.asc(), Match.match_id.asc())
        .limit(limit)
    )


def recent_matches_query(today: date, limit: int = DASHBOARD_MATCH_LIMIT):
    return (
        _dashboard_matches_base()
        .where(Match.match_date < today)
        .order_by(Match.match_date.desc(), Match.match_id.desc())
        .limit(limit)
    )
