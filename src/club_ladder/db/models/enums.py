"""Enums for ranking models."""

from enum import Enum


class RankingType(str, Enum):
    """Which counter a leaderboard is ordered by."""

    ELO = "elo"  # Skill rating, never reset
    RACE = "race"  # Monthly race points, zeroed by the monthly reset
