"""Add club and member tables.

Revision ID: 001
Revises:
Create Date: 2026-10-05

Clubs are tenants, one per Telegram group chat.
Members are per-club player identities used for leaderboard display.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
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
    ]


def upgrade() -> None:
    # ============================================
    # Create clubs table
    # ============================================
    op.create_table(
        "clubs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("telegram_chat_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_clubs_telegram_chat_id", "clubs", ["telegram_chat_id"], unique=True)

    # ============================================
    # Create members table
    # ============================================
    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("telegram_user_id", sa.BigInteger(), nullable=False, index=True),
        sa.Column("club_id", sa.Integer(), sa.ForeignKey("clubs.id"), nullable=False, index=True),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("avatar_url", sa.String(500), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("telegram_user_id", "club_id", name="uq_member_user_club"),
    )


def downgrade() -> None:
    op.drop_table("members")
    op.drop_index("ix_clubs_telegram_chat_id", table_name="clubs")
    op.drop_table("clubs")
