"""Add ranking and match tables.

Revision ID: 002
Revises: 001
Create Date: 2026-10-05

Rankings hold one ELO/Race record per member per club.
Matches are an append-only log of reported results.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # ============================================
    # Create rankings table
    # ============================================
    op.create_table(
        "rankings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("clubs.id"), nullable=False, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=False, index=True),
        # Skill rating
        sa.Column("elo_score", sa.Integer(), nullable=False, server_default="1200"),
        # The Race
        sa.Column("monthly_race_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "last_reset_date",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        # Running statistics
        sa.Column("total_matches", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("wins", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("win_rate", sa.Float(), nullable=False, server_default="0"),
        # Timestamps
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        # One ranking per member per club
        sa.UniqueConstraint("tenant_id", "user_id", name="uq_ranking_tenant_user"),
    )
    op.create_index("ix_rankings_tenant_elo", "rankings", ["tenant_id", "elo_score"])
    op.create_index("ix_rankings_tenant_race", "rankings", ["tenant_id", "monthly_race_points"])

    # ============================================
    # Create matches table
    # ============================================
    op.create_table(
        "matches",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("clubs.id"), nullable=False, index=True),
        sa.Column("winner_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=False, index=True),
        sa.Column("loser_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=False, index=True),
        sa.Column("score", sa.String(100), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        # Race flags
        sa.Column("is_tournament", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_off_peak", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "is_matchmaking_challenge", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("metadata", JSONB(), nullable=False, server_default="{}"),
        # Timestamps
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_matches_tenant_date", "matches", ["tenant_id", "date"])


def downgrade() -> None:
    op.drop_index("ix_matches_tenant_date", table_name="matches")
    op.drop_table("matches")
    op.drop_index("ix_rankings_tenant_race", table_name="rankings")
    op.drop_index("ix_rankings_tenant_elo", table_name="rankings")
    op.drop_table("rankings")
