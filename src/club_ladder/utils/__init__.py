"""Utility modules."""

from .rating import (
    DEFAULT_PARAMETERS,
    EloUpdate,
    RacePoints,
    RatingParameters,
    calculate_elo_update,
    calculate_expected_score,
    calculate_race_points,
    calculate_win_rate,
    round_half_away,
)

__all__ = [
    "DEFAULT_PARAMETERS",
    "EloUpdate",
    "RacePoints",
    "RatingParameters",
    "calculate_elo_update",
    "calculate_expected_score",
    "calculate_race_points",
    "calculate_win_rate",
    "round_half_away",
]
