"""Ranking model - per-club rating record of a member."""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, utcnow

DEFAULT_ELO_SCORE = 1200


class Ranking(Base, TimestampMixin):
    """ELO rating and monthly Race points of one member in one club.

    Created lazily on the member's first match. Counters only grow, except
    monthly_race_points which the monthly reset sets back to 0.
    """

    __tablename__ = "rankings"
    __table_args__ = (
        UniqueConstraint("tenant_id", "user_id", name="uq_ranking_tenant_user"),
        Index("ix_rankings_tenant_elo", "tenant_id", "elo_score"),
        Index("ix_rankings_tenant_race", "tenant_id", "monthly_race_points"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clubs.id"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("members.id"), nullable=False, index=True
    )

    # Skill rating (unbounded)
    elo_score: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_ELO_SCORE)

    # The Race
    monthly_race_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_reset_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    # Running statistics
    total_matches: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    win_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)  # 0-100

    def __repr__(self) -> str:
        return (
            f"<Ranking(tenant={self.tenant_id}, user={self.user_id}, "
            f"elo={self.elo_score}, race={self.monthly_race_points})>"
        )
