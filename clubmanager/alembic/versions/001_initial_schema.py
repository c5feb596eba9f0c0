"""initial_schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

Create club, player, contract, stadium, matches and users tables, the
player_roster_view, and the minimum-age trigger on player.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

player_position = sa.Enum(
    "Forward", "Midfielder", "Defender", "Goalkeeper", name="player_position"
)
match_type = sa.Enum("League", "Champions League", "Friendly", name="match_type")
user_role = sa.Enum("Admin", "Manager", name="user_role")

ROSTER_VIEW = """
CREATE OR REPLACE VIEW player_roster_view AS
SELECT p.player_id,
       p.f_name || ' ' || p.l_name AS full_name,
       p.position,
       CAST(EXTRACT(YEAR FROM AGE(CURRENT_DATE, p.dob)) AS INTEGER) AS age_calculated,
       p.club_id,
       COALESCE(c.club_name, 'Free Agent') AS club_name
FROM player p
LEFT JOIN club c ON p.club_id = c.club_id
"""

AGE_CHECK_FUNCTION = """
CREATE OR REPLACE FUNCTION check_player_min_age() RETURNS trigger AS $$
BEGIN
    IF EXTRACT(YEAR FROM AGE(CURRENT_DATE, NEW.dob)) < 15 THEN
        RAISE EXCEPTION 'Player must be at least 15 years old';
    END IF;
    RETURN NEW;
END;
$$ LANGUAGE plpgsql
"""

AGE_CHECK_TRIGGER = """
CREATE TRIGGER trg_player_min_age
BEFORE INSERT OR UPDATE OF dob ON player
FOR EACH ROW EXECUTE FUNCTION check_player_min_age()
"""


def upgrade() -> None:
    op.create_table(
        "club",
        sa.Column("club_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("club_name", sa.String(100), nullable=False),
        sa.Column("founded_year", sa.Integer(), nullable=True),
        sa.Column("owner_name", sa.String(100), nullable=True),
        sa.Column("club_email", sa.String(255), nullable=True),
        sa.Column("total_trophies", sa.Integer(), server_default="0", nullable=False),
        sa.PrimaryKeyConstraint("club_id"),
        sa.UniqueConstraint("club_name"),
        sa.UniqueConstraint("club_email"),
        sa.CheckConstraint("total_trophies >= 0", name="ck_club_trophies_non_negative"),
    )

    op.create_table(
        "stadium",
        sa.Column("stadium_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("stadium_name", sa.String(100), nullable=False),
        sa.Column("city", sa.String(100), nullable=True),
        sa.PrimaryKeyConstraint("stadium_id"),
        sa.UniqueConstraint("stadium_name"),
    )

    op.create_table(
        "player",
        sa.Column("player_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("f_name", sa.String(50), nullable=False),
        sa.Column("l_name", sa.String(50), nullable=False),
        sa.Column("dob", sa.Date(), nullable=False),
        sa.Column("position", player_position, nullable=False),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("state", sa.String(100), nullable=True),
        sa.Column("pincode", sa.String(20), nullable=True),
        sa.Column("club_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["club_id"], ["club.club_id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("player_id"),
    )
    op.create_index("idx_player_club_id", "player", ["club_id"])

    op.create_table(
        "contract",
        sa.Column("contract_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("salary", sa.Numeric(12, 2), nullable=False),
        sa.Column("player_id", sa.Integer(), nullable=False),
        sa.Column("club_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["player_id"], ["player.player_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["club_id"], ["club.club_id"]),
        sa.PrimaryKeyConstraint("contract_id"),
    )
    op.create_index("idx_contract_player_id", "contract", ["player_id"])
    op.create_index("idx_contract_club_id", "contract", ["club_id"])

    op.create_table(
        "matches",
        sa.Column("match_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("match_type", match_type, nullable=False),
        sa.Column("match_date", sa.Date(), nullable=False),
        sa.Column("home_club_id", sa.Integer(), nullable=False),
        sa.Column("away_club_id", sa.Integer(), nullable=False),
        sa.Column("home_score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("away_score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("stadium_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["home_club_id"], ["club.club_id"]),
        sa.ForeignKeyConstraint(["away_club_id"], ["club.club_id"]),
        sa.ForeignKeyConstraint(["stadium_id"], ["stadium.stadium_id"]),
        sa.PrimaryKeyConstraint("match_id"),
        sa.CheckConstraint("home_club_id <> away_club_id", name="ck_matches_distinct_clubs"),
    )
    op.create_index("idx_matches_match_date", "matches", ["match_date"])

    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("username"),
    )

    if op.get_bind().dialect.name == "postgresql":
        op.execute(ROSTER_VIEW)
        op.execute(AGE_CHECK_FUNCTION)
        op.execute(AGE_CHECK_TRIGGER)


def downgrade() -> None:
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP TRIGGER IF EXISTS trg_player_min_age ON player")
        op.execute("DROP FUNCTION IF EXISTS check_player_min_age()")
        op.execute("DROP VIEW IF EXISTS player_roster_view")

    op.drop_table("users")
    op.drop_index("idx_matches_match_date", table_name="matches")
    op.drop_table("matches")
    op.drop_index("idx_contract_club_id", table_name="contract")
    op.drop_index("idx_contract_player_id", table_name="contract")
    op.drop_table("contract")
    op.drop_index("idx_player_club_id", table_name="player")
    op.drop_table("player")
    op.drop_table("stadium")
    op.drop_table("club")

    bind = op.get_bind()
    user_role.drop(bind, checkfirst=True)
    match_type.drop(bind, checkfirst=True)
    player_position.drop(bind, checkfirst=True)
