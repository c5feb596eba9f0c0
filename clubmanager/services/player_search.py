"""
Advanced player search.

Filters arrive as optional strings (straight from the query string). Each
present filter becomes one ``Predicate`` triple; the triples are built in a
fixed order so bound parameters always appear in the same positions, then
folded into ``WHERE true AND ...`` on the base player/club/contract join.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import select, func, true
from sqlalchemy.ext.asyncio import AsyncSession

from clubmanager.database.models import Club, Player, Contract, PlayerPosition
from clubmanager.services.queries import player_full_name, player_age
from clubmanager.services.validation import ValidationError, ValidationFailure
from clubmanager.utils.constants import FREE_AGENT_LABEL

logger = logging.getLogger(__name__)

NAME_MATCH_TYPES = ("contains", "startsWith", "endsWith", "exact")
DEFAULT_NAME_MATCH_TYPE = "contains"


def _escape_like(value: str) -> str:
    """Escape LIKE-special characters (%, _) so they match literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _normalize(value: Optional[Any]) -> Optional[str]:
    """Strip text input; empty values count as absent."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass
class PlayerSearchFilters:
    name: Optional[str] = None
    nameMatchType: Optional[str] = None
    position: Optional[str] = None
    club_id: Optional[str] = None
    minAge: Optional[str] = None
    maxAge: Optional[str] = None
    minSalary: Optional[str] = None
    minTrophies: Optional[str] = None


@dataclass(frozen=True)
class Predicate:
    column: Any
    operator: str
    value: Any

    def to_clause(self):
        if self.operator == "=":
            return self.column == self.value
        if self.operator == ">=":
            return self.column >= self.value
        if self.operator == "<=":
            return self.column <= self.value
        if self.operator == "ilike":
            return self.column.ilike(self.value, escape="\\")
        raise ValueError(f"Unsupported operator: {self.operator}")


def _parse_number(field: str, raw: str, parse: Callable[[str], Any]):
    try:
        return parse(raw)
    except (ValueError, InvalidOperation):
        raise ValidationError([ValidationFailure(field, f"'{raw}' is not a valid number")])


def _parse_decimal(raw: str) -> Decimal:
    value = Decimal(raw)
    if not value.is_finite():
        raise InvalidOperation(raw)
    return value


def _name_predicate(name: str, match_type: Optional[str]) -> Predicate:
    if match_type not in NAME_MATCH_TYPES:
        match_type = DEFAULT_NAME_MATCH_TYPE

    full_name = player_full_name()
    if match_type == "exact":
        return Predicate(full_name, "=", name)

    escaped = _escape_like(name)
    if match_type == "startsWith":
        pattern = f"{escaped}%"
    elif match_type == "endsWith":
        pattern = f"%{escaped}"
    else:
        pattern = f"%{escaped}%"
    return Predicate(full_name, "ilike", pattern)


def build_predicates(filters: PlayerSearchFilters) -> List[Predicate]:
    """
    Translate the present filters into predicates.

    Order is fixed: name, position, club, minAge, maxAge, minSalary, minTrophies.

    Raises:
        ValidationError: If a numeric filter does not parse
    """
    predicates: List[Predicate] = []

    name = _normalize(filters.name)
    if name:
        predicates.append(_name_predicate(name, _normalize(filters.nameMatchType)))

    position = _normalize(filters.position)
    if position:
        if position not in {p.value for p in PlayerPosition}:
            raise ValidationError([ValidationFailure("position", f"Unknown position '{position}'")])
        predicates.append(Predicate(Player.position, "=", position))

    club_id = _normalize(filters.club_id)
    if club_id:
        predicates.append(Predicate(Player.club_id, "=", _parse_number("club_id", club_id, int)))

    min_age = _normalize(filters.minAge)
    if min_age:
        predicates.append(Predicate(player_age(), ">=", _parse_number("minAge", min_age, int)))

    max_age = _normalize(filters.maxAge)
    if max_age:
        predicates.append(Predicate(player_age(), "<=", _parse_number("maxAge", max_age, int)))

    min_salary = _normalize(filters.minSalary)
    if min_salary:
        predicates.append(
            Predicate(Contract.salary, ">=", float(_parse_number("minSalary", min_salary, _parse_decimal)))
        )

    min_trophies = _normalize(filters.minTrophies)
    if min_trophies:
        predicates.append(
            Predicate(Club.total_trophies, ">=", _parse_number("minTrophies", min_trophies, int))
        )

    return predicates


def current_contracts_subquery(today: date):
    """
    One contract id per player: the newest contract running on ``today``.

    Expired and future contracts are ignored, so a player joins at most one row.
    """
    return (
        select(
            Contract.player_id.label("player_id"),
            func.max(Contract.contract_id).label("contract_id"),
        )
        .where(Contract.start_date <= today, Contract.end_date >= today)
        .group_by(Contract.player_id)
        .subquery("current_contract")
    )


def base_search_query(today: Optional[date] = None):
    current = current_contracts_subquery(today or date.today())
    salary = func.coalesce(Contract.salary, 0)
    age = player_age()
    return (
        select(
            Player.player_id,
            player_full_name().label("full_name"),
            age.label("age"),
            Player.position,
            func.coalesce(Club.club_name, FREE_AGENT_LABEL).label("club_name"),
            func.coalesce(Club.total_trophies, 0).label("club_trophies"),
            salary.label("salary"),
        )
        .select_from(Player)
        .outerjoin(Club, Player.club_id == Club.club_id)
        .outerjoin(current, current.c.player_id == Player.player_id)
        .outerjoin(Contract, Contract.contract_id == current.c.contract_id)
        .where(true())
    )


def build_search_query(filters: PlayerSearchFilters, today: Optional[date] = None):
    """Fold the predicates into the base query and apply the fixed ordering."""
    query = base_search_query(today)
    for predicate in build_predicates(filters):
        query = query.where(predicate.to_clause())
    return query.order_by(
        func.coalesce(Contract.salary, 0).desc(),
        player_age().asc(),
        Player.player_id.asc(),
    )


async def search_players(
    session: AsyncSession, filters: PlayerSearchFilters, today: Optional[date] = None
) -> List[Dict]:
    """
    Run the advanced player search.

    Salary comes from the player's current contract (0 when there is none).

    Returns:
        List of dicts with player_id, full_name, age, position, club_name,
        club_trophies and salary, ordered by salary desc then age asc.
    """
    query = build_search_query(filters, today)
    result = await session.execute(query)
    rows = result.mappings().all()
    logger.debug(f"Player search returned {len(rows)} rows")
    return [
        {
            "player_id": row["player_id"],
            "full_name": row["full_name"],
            "age": row["age"],
            "position": row["position"],
            "club_name": row["club_name"],
            "club_trophies": row["club_trophies"],
            "salary": float(row["salary"]),
        }
        for row in rows
    ]
