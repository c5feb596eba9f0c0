"""
Seed helpers shared by the test modules.

Each helper inserts one row through the given session, commits and returns the
refreshed ORM object.
"""

from datetime import date, timedelta

from clubmanager.database.models import Club, Player, Contract, Stadium, Match


def dob_for_age(years: int) -> date:
    """A birth date that makes the player exactly ``years`` old today (40 days past birthday)."""
    today = date.today()
    try:
        anniversary = today.replace(year=today.year - years)
    except ValueError:
        # Feb 29
        anniversary = today.replace(year=today.year - years, day=28)
    return anniversary - timedelta(days=40)


async def _save(session, obj):
    session.add(obj)
    await session.commit()
    await session.refresh(obj)
    return obj


async def add_club(session, name, trophies=0, email=None):
    club = Club(
        club_name=name,
        founded_year=1900,
        owner_name=f"{name} Owner",
        club_email=email,
        total_trophies=trophies,
    )
    return await _save(session, club)


async def add_player(session, first, last, age, position="Forward", club=None):
    player = Player(
        f_name=first,
        l_name=last,
        dob=dob_for_age(age),
        position=position,
        club_id=club.club_id if club else None,
    )
    return await _save(session, player)


async def add_contract(session, player, club, salary, start=None, end=None):
    """Contract running today unless explicit dates are given."""
    today = date.today()
    contract = Contract(
        player_id=player.player_id,
        club_id=club.club_id,
        salary=salary,
        start_date=start or today - timedelta(days=365),
        end_date=end or today + timedelta(days=730),
    )
    return await _save(session, contract)


async def add_stadium(session, name="Test Park", city="Testville"):
    return await _save(session, Stadium(stadium_name=name, city=city))


async def add_match(session, home, away, stadium, match_date, home_score=0, away_score=0):
    match = Match(
        match_type="League",
        match_date=match_date,
        home_club_id=home.club_id,
        away_club_id=away.club_id,
        home_score=home_score,
        away_score=away_score,
        stadium_id=stadium.stadium_id,
    )
    return await _save(session, match)
