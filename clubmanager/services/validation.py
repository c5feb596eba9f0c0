"""
Named validation rules for writes.

Each rule returns ``None`` when the input is acceptable or a
``ValidationFailure`` describing the offending field. Services collect the
failures and raise ``ValidationError`` before any statement reaches the store.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import select, or_
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clubmanager.database.models import Club
from clubmanager.utils.constants import MIN_PLAYER_AGE
from clubmanager.utils.datetime_utils import age_on

# SQLSTATE codes raised by store-side triggers (PostgreSQL RAISE EXCEPTION,
# MySQL SIGNAL) and by integrity constraints (class 23).
_TRIGGER_SQLSTATES = {"P0001", "45000"}


@dataclass(frozen=True)
class ValidationFailure:
    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class ValidationError(ValueError):
    """Raised when one or more validation rules reject a write."""

    def __init__(self, failures: Iterable[ValidationFailure]):
        self.failures: List[ValidationFailure] = list(failures)
        super().__init__("; ".join(str(f) for f in self.failures))


def raise_for_failures(*results: Optional[ValidationFailure]) -> None:
    failures = [r for r in results if r is not None]
    if failures:
        raise ValidationError(failures)


def player_minimum_age(dob: date, today: Optional[date] = None) -> Optional[ValidationFailure]:
    """Players must be at least MIN_PLAYER_AGE years old."""
    today = today or date.today()
    if age_on(dob, today) < MIN_PLAYER_AGE:
        return ValidationFailure(
            "dob", f"Player must be at least {MIN_PLAYER_AGE} years old"
        )
    return None


def distinct_match_clubs(home_club_id: int, away_club_id: int) -> Optional[ValidationFailure]:
    if home_club_id == away_club_id:
        return ValidationFailure("away_club_id", "Home and Away teams must be different.")
    return None


async def unique_club_fields(
    session: AsyncSession,
    club_name: str,
    club_email: Optional[str],
    exclude_club_id: Optional[int] = None,
) -> Optional[ValidationFailure]:
    """No other club may share the name or email."""
    conditions = [Club.club_name == club_name]
    if club_email:
        conditions.append(Club.club_email == club_email)
    query = select(Club.club_name, Club.club_email).where(or_(*conditions))
    if exclude_club_id is not None:
        query = query.where(Club.club_id != exclude_club_id)

    row = (await session.execute(query.limit(1))).first()
    if row is None:
        return None
    if row.club_name == club_name:
        return ValidationFailure("club_name", f"A club named '{club_name}' already exists")
    return ValidationFailure("club_email", f"A club with email '{club_email}' already exists")


def is_store_validation_error(exc: Exception) -> bool:
    """
    True when the store rejected a statement because of the data it carried
    (constraint violation or trigger), as opposed to an infrastructure failure.
    """
    if isinstance(exc, IntegrityError):
        return True
    if isinstance(exc, DBAPIError):
        orig = exc.orig
        sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
        if sqlstate:
            return sqlstate in _TRIGGER_SQLSTATES or str(sqlstate).startswith("23")
    return False


def store_error_message(exc: DBAPIError) -> str:
    """Short, client-safe description of a store-side rejection."""
    orig = getattr(exc, "orig", None)
    message = str(orig) if orig is not None else str(exc)
    # Drivers prefix with the exception class and append the statement on later lines
    return message.splitlines()[0].split(": ", 1)[-1] if message else "Rejected by database"
