"""
Tests for data_service CRUD operations, joined reads and the dashboard.
"""
import pytest
from datetime import date, timedelta
from sqlalchemy import select

from clubmanager.database.models import Contract, Player
from clubmanager.services import data_service
from clubmanager.services.validation import ValidationError
from tests.helpers import add_club, add_player, add_contract, add_stadium, add_match, dob_for_age


def club_values(**overrides):
    values = {
        "club_name": "Harbour City",
        "founded_year": 1921,
        "owner_name": "R. Owner",
        "club_email": "office@harbour.example",
        "total_trophies": 4,
    }
    values.update(overrides)
    return values


def player_values(**overrides):
    values = {
        "f_name": "Sam",
        "l_name": "Striker",
        "dob": dob_for_age(21),
        "position": "Forward",
        "city": "Leeds",
        "state": "Yorkshire",
        "pincode": "LS1",
        "club_id": None,
    }
    values.update(overrides)
    return values


# ============================================================================
# Clubs
# ============================================================================


@pytest.mark.asyncio
async def test_create_and_get_club(db_session):
    club_id = await data_service.create_club(db_session, club_values())

    assert club_id > 0
    club = await data_service.get_club(db_session, club_id)
    assert club == {"club_id": club_id, **club_values()}


@pytest.mark.asyncio
async def test_list_clubs_ordered_by_name(db_session):
    await add_club(db_session, "Zebra Town")
    await add_club(db_session, "Alpha United")
    await add_club(db_session, "Midtown")

    clubs = await data_service.list_clubs(db_session)
    assert [c["club_name"] for c in clubs] == ["Alpha United", "Midtown", "Zebra Town"]


@pytest.mark.asyncio
async def test_create_club_duplicate_name_rejected(db_session):
    await data_service.create_club(db_session, club_values())

    with pytest.raises(ValidationError) as exc_info:
        await data_service.create_club(db_session, club_values(club_email="other@x.example"))
    assert exc_info.value.failures[0].field == "club_name"


@pytest.mark.asyncio
async def test_create_club_duplicate_email_rejected(db_session):
    await data_service.create_club(db_session, club_values())

    with pytest.raises(ValidationError) as exc_info:
        await data_service.create_club(db_session, club_values(club_name="Different"))
    assert exc_info.value.failures[0].field == "club_email"


@pytest.mark.asyncio
async def test_update_club_rewrites_every_column_and_is_idempotent(db_session):
    club_id = await data_service.create_club(db_session, club_values())
    new_values = club_values(owner_name=None, total_trophies=9, founded_year=None)

    assert await data_service.update_club(db_session, club_id, new_values) is True
    first = await data_service.get_club(db_session, club_id)
    assert await data_service.update_club(db_session, club_id, new_values) is True
    second = await data_service.get_club(db_session, club_id)

    assert first == second == {"club_id": club_id, **new_values}


@pytest.mark.asyncio
async def test_update_club_keeps_own_name(db_session):
    club_id = await data_service.create_club(db_session, club_values())
    assert await data_service.update_club(db_session, club_id, club_values(total_trophies=5))


@pytest.mark.asyncio
async def test_update_and_delete_missing_club(db_session):
    assert await data_service.update_club(db_session, 999, club_values()) is False
    assert await data_service.delete_club(db_session, 999) is False
    assert await data_service.get_club(db_session, 999) is None


@pytest.mark.asyncio
async def test_delete_club_detaches_players(db_session):
    club = await add_club(db_session, "Doomed FC")
    player = await add_player(db_session, "Left", "Behind", 24, club=club)

    assert await data_service.delete_club(db_session, club.club_id) is True
    row = await data_service.get_player(db_session, player.player_id)
    assert row["club_id"] is None


# ============================================================================
# Players
# ============================================================================


@pytest.mark.asyncio
async def test_create_player_and_get_raw_row(db_session):
    club = await add_club(db_session, "Home FC")
    values = player_values(club_id=club.club_id)
    player_id = await data_service.create_player(db_session, values)

    row = await data_service.get_player(db_session, player_id)
    assert row["player_id"] == player_id
    assert row["dob"] == values["dob"].isoformat()
    assert row["position"] == "Forward"
    assert row["club_id"] == club.club_id


@pytest.mark.asyncio
async def test_create_player_under_minimum_age_rejected(db_session):
    with pytest.raises(ValidationError) as exc_info:
        await data_service.create_player(db_session, player_values(dob=dob_for_age(14)))
    assert exc_info.value.failures[0].field == "dob"

    result = await db_session.execute(select(Player))
    assert result.scalars().all() == []


@pytest.mark.asyncio
async def test_minimum_age_boundary_uses_today(db_session):
    today = date(2026, 10, 19)
    await data_service.create_player(db_session, player_values(dob=date(2011, 10, 19)), today=today)
    with pytest.raises(ValidationError):
        await data_service.create_player(
            db_session, player_values(dob=date(2011, 10, 20)), today=today
        )


@pytest.mark.asyncio
async def test_update_player_under_minimum_age_rejected(db_session):
    player = await add_player(db_session, "Grown", "Up", 20)
    with pytest.raises(ValidationError):
        await data_service.update_player(
            db_session, player.player_id, player_values(dob=dob_for_age(10))
        )


@pytest.mark.asyncio
async def test_update_player_is_idempotent(db_session):
    player = await add_player(db_session, "Same", "Again", 25)
    values = player_values(f_name="Changed", city=None)

    assert await data_service.update_player(db_session, player.player_id, values) is True
    first = await data_service.get_player(db_session, player.player_id)
    assert await data_service.update_player(db_session, player.player_id, values) is True
    second = await data_service.get_player(db_session, player.player_id)

    assert first == second
    assert first["f_name"] == "Changed"
    assert first["city"] is None


@pytest.mark.asyncio
async def test_roster_computes_age_and_club_name(db_session):
    club = await add_club(db_session, "Roster FC")
    await add_player(db_session, "Club", "Man", 23, club=club)
    await add_player(db_session, "No", "Club", 30)

    roster = {r["full_name"]: r for r in await data_service.list_players(db_session)}
    assert roster["Club Man"]["age_calculated"] == 23
    assert roster["Club Man"]["club_name"] == "Roster FC"
    assert roster["No Club"]["club_name"] == "Free Agent"
    assert roster["No Club"]["club_id"] is None


@pytest.mark.asyncio
async def test_delete_player_removes_contracts(db_session):
    club = await add_club(db_session, "Employer")
    player = await add_player(db_session, "Short", "Stay", 27, club=club)
    await add_contract(db_session, player, club, 1000)

    assert await data_service.delete_player(db_session, player.player_id) is True
    assert await data_service.get_player(db_session, player.player_id) is None
    result = await db_session.execute(select(Contract))
    assert result.scalars().all() == []


@pytest.mark.asyncio
async def test_delete_missing_player(db_session):
    assert await data_service.delete_player(db_session, 12345) is False


# ============================================================================
# Contracts
# ============================================================================


@pytest.mark.asyncio
async def test_contracts_with_names_ordered_by_salary(db_session):
    club = await add_club(db_session, "Payroll FC")
    low = await add_player(db_session, "Low", "Paid", 22, club=club)
    high = await add_player(db_session, "High", "Paid", 29, club=club)
    await add_contract(db_session, low, club, 1500)
    await add_contract(
        db_session, high, club, 75000, start=date(2025, 7, 1), end=date(2028, 6, 30)
    )

    contracts = await data_service.list_contracts(db_session)
    assert [c["player_name"] for c in contracts] == ["High Paid", "Low Paid"]
    assert contracts[0]["club_name"] == "Payroll FC"
    assert contracts[0]["salary"] == 75000
    assert contracts[0]["start_date"] == "2025-07-01"
    assert contracts[0]["end_date"] == "2028-06-30"


@pytest.mark.asyncio
async def test_create_contract_allows_end_before_start(db_session):
    club = await add_club(db_session, "Lenient FC")
    player = await add_player(db_session, "Odd", "Dates", 25, club=club)

    contract_id = await data_service.create_contract(
        db_session,
        {
            "start_date": date(2027, 1, 1),
            "end_date": date(2026, 1, 1),
            "salary": 2000,
            "player_id": player.player_id,
            "club_id": club.club_id,
        },
    )
    contract = await data_service.get_contract(db_session, contract_id)
    assert contract["end_date"] == "2026-01-01"


@pytest.mark.asyncio
async def test_delete_contract(db_session):
    club = await add_club(db_session, "Exit FC")
    player = await add_player(db_session, "Leaving", "Soon", 25, club=club)
    contract = await add_contract(db_session, player, club, 3000)

    assert await data_service.delete_contract(db_session, contract.contract_id) is True
    assert await data_service.get_contract(db_session, contract.contract_id) is None
    assert await data_service.delete_contract(db_session, contract.contract_id) is False


# ============================================================================
# Matches
# ============================================================================


class ExplodingSession:
    """Session stand-in that fails the test if any statement is executed."""

    async def execute(self, *args, **kwargs):
        raise AssertionError("statement reached the store")

    async def commit(self):
        raise AssertionError("commit reached the store")


def match_values(home_id, away_id, stadium_id, **overrides):
    values = {
        "match_type": "Friendly",
        "match_date": date(2026, 5, 1),
        "home_club_id": home_id,
        "away_club_id": away_id,
        "home_score": 2,
        "away_score": 1,
        "stadium_id": stadium_id,
    }
    values.update(overrides)
    return values


@pytest.mark.asyncio
async def test_create_match_same_clubs_never_reaches_store():
    with pytest.raises(ValidationError) as exc_info:
        await data_service.create_match(ExplodingSession(), match_values(3, 3, 1))
    assert "different" in str(exc_info.value)


@pytest.mark.asyncio
async def test_update_match_same_clubs_never_reaches_store():
    with pytest.raises(ValidationError):
        await data_service.update_match(ExplodingSession(), 1, match_values(5, 5, 1))


@pytest.mark.asyncio
async def test_match_crud_and_joined_listing(db_session):
    home = await add_club(db_session, "Home Side")
    away = await add_club(db_session, "Away Side")
    stadium = await add_stadium(db_session, "Grand Arena")

    match_id = await data_service.create_match(
        db_session, match_values(home.club_id, away.club_id, stadium.stadium_id)
    )
    raw = await data_service.get_match(db_session, match_id)
    assert raw["match_date"] == "2026-05-01"
    assert raw["home_club_id"] == home.club_id

    older_id = await data_service.create_match(
        db_session,
        match_values(away.club_id, home.club_id, stadium.stadium_id, match_date=date(2025, 1, 1)),
    )
    matches = await data_service.list_matches(db_session)
    assert [m["match_id"] for m in matches] == [match_id, older_id]
    assert matches[0]["home_team"] == "Home Side"
    assert matches[0]["away_team"] == "Away Side"
    assert matches[0]["stadium_name"] == "Grand Arena"
    assert matches[0]["match_type"] == "Friendly"

    updated = match_values(
        home.club_id, away.club_id, stadium.stadium_id, home_score=0, away_score=0
    )
    assert await data_service.update_match(db_session, match_id, updated) is True
    assert (await data_service.get_match(db_session, match_id))["home_score"] == 0

    assert await data_service.delete_match(db_session, match_id) is True
    assert await data_service.get_match(db_session, match_id) is None


@pytest.mark.asyncio
async def test_list_stadiums(db_session):
    await add_stadium(db_session, "Zeta Ground")
    await add_stadium(db_session, "Alpha Park")

    stadiums = await data_service.list_stadiums(db_session)
    assert [s["stadium_name"] for s in stadiums] == ["Alpha Park", "Zeta Ground"]


# ============================================================================
# Dashboard
# ============================================================================


@pytest.mark.asyncio
async def test_dashboard_counts_match_tables(db_session):
    club_a = await add_club(db_session, "Dash A", trophies=3)
    club_b = await add_club(db_session, "Dash B", trophies=10)
    stadium = await add_stadium(db_session)
    for i in range(3):
        await add_player(db_session, f"P{i}", "Dash", 20 + i, club=club_a)
    await add_match(db_session, club_a, club_b, stadium, date(2026, 1, 1))

    dashboard = await data_service.get_dashboard(db_session)
    roster = await data_service.list_players(db_session)

    assert dashboard["stats"] == {
        "total_players": len(roster),
        "total_clubs": 2,
        "total_trophies": 13,
        "total_matches": 1,
    }


@pytest.mark.asyncio
async def test_dashboard_empty_database(db_session):
    dashboard = await data_service.get_dashboard(db_session)
    assert dashboard == {
        "stats": {"total_players": 0, "total_clubs": 0, "total_trophies": 0, "total_matches": 0},
        "upcoming": [],
        "recent": [],
    }


@pytest.mark.asyncio
async def test_dashboard_upcoming_and_recent_split_on_today(db_session):
    today = date(2026, 10, 19)
    home = await add_club(db_session, "Upcoming Home")
    away = await add_club(db_session, "Upcoming Away")
    stadium = await add_stadium(db_session)

    future_ids = []
    for days in (30, 0, 10, 20, 40, 50, 60):
        m = await add_match(db_session, home, away, stadium, today + timedelta(days=days))
        future_ids.append((days, m.match_id))
    past_ids = []
    for days in (1, 3, 2):
        m = await add_match(db_session, home, away, stadium, today - timedelta(days=days), 3, 1)
        past_ids.append((days, m.match_id))

    dashboard = await data_service.get_dashboard(db_session, today=today)

    expected_upcoming = [mid for _, mid in sorted(future_ids)][:5]
    assert [m["match_id"] for m in dashboard["upcoming"]] == expected_upcoming
    assert dashboard["upcoming"][0]["formatted_date"] == "October 19, 2026"
    assert "home_score" not in dashboard["upcoming"][0]

    expected_recent = [mid for _, mid in sorted(past_ids)]
    assert [m["match_id"] for m in dashboard["recent"]] == expected_recent
    assert dashboard["recent"][0]["formatted_date"] == "October 18, 2026"
    assert dashboard["recent"][0]["home_score"] == 3
    assert dashboard["recent"][0]["away_score"] == 1
