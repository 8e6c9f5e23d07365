"""Match model - append-only log of recorded results."""

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin

MAX_SCORE_LENGTH = 100


class Match(Base, TimestampMixin):
    """A recorded match result.

    Rows are written once and never updated. Rankings are not linked back to
    matches, so nothing cascades between the two tables.
    """

    __tablename__ = "matches"
    __table_args__ = (Index("ix_matches_tenant_date", "tenant_id", "date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clubs.id"), nullable=False, index=True
    )
    winner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("members.id"), nullable=False, index=True
    )
    loser_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("members.id"), nullable=False, index=True
    )

    score: Mapped[str] = mapped_column(
        String(MAX_SCORE_LENGTH), nullable=False
    )  # e.g. "6-2, 6-4", not validated, cut to length
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Flags that feed the Race points
    is_tournament: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_off_peak: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_matchmaking_challenge: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Opaque caller data ("metadata" is reserved on declarative classes)
    match_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSONB, nullable=False, default=dict
    )

    def __repr__(self) -> str:
        return f"<Match(id={self.id}, winner={self.winner_id}, loser={self.loser_id}, score={self.score})>"
