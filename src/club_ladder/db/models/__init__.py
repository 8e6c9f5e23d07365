"""Database models."""

from .base import Base, TimestampMixin
from .clubs import Club
from .enums import RankingType
from .matches import Match
from .members import Member
from .rankings import DEFAULT_ELO_SCORE, Ranking

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Enums
    "RankingType",
    # Clubs
    "Club",
    "Member",
    # Ranking
    "DEFAULT_ELO_SCORE",
    "Ranking",
    "Match",
]
