"""Elo rating and Race points calculations."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import Settings


@dataclass(frozen=True)
class RatingParameters:
    """Tunable constants for both ranking systems."""

    initial_elo: int = 1200
    k_factor: int = 32
    scale_factor: float = 400.0

    race_base_points: int = 10
    win_bonus: int = 15
    off_peak_bonus: int = 5
    challenge_bonus: int = 20
    tournament_multiplier: float = 2.5
    friendly_multiplier: float = 1.0

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RatingParameters":
        """Build parameters from application settings."""
        return cls(
            initial_elo=settings.elo_initial_rating,
            k_factor=settings.elo_k_factor,
            scale_factor=settings.elo_scale_factor,
            race_base_points=settings.race_base_points,
            win_bonus=settings.race_win_bonus,
            off_peak_bonus=settings.race_off_peak_bonus,
            challenge_bonus=settings.race_challenge_bonus,
            tournament_multiplier=settings.race_tournament_multiplier,
        )


DEFAULT_PARAMETERS = RatingParameters()


@dataclass(frozen=True)
class EloUpdate:
    """Rating deltas produced by one match."""

    winner_gain: int
    loser_gain: int


@dataclass(frozen=True)
class RacePoints:
    """Race points for one side of a match."""

    total: int
    breakdown: str


def round_half_away(value: float, places: int = 0) -> float | int:
    """Round half away from zero (62.5 -> 63, -16.5 -> -17).

    The builtin round() rounds half to even, which would turn a tournament
    win of 62.5 points into 62.

    Args:
        value: Number to round
        places: Decimal places to keep (0 returns an int)

    Returns:
        Rounded value, int when places is 0
    """
    exponent = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)
    if places == 0:
        return int(rounded)
    return float(rounded)


def calculate_expected_score(rating_a: int, rating_b: int, scale_factor: float = 400.0) -> float:
    """Calculate expected score for player A against player B.

    Uses the standard Elo formula:
    E_A = 1 / (1 + 10^((R_B - R_A) / 400))

    Args:
        rating_a: Player A's current rating
        rating_b: Player B's current rating
        scale_factor: Rating difference that means 10x expected performance

    Returns:
        Expected score (0.0 to 1.0) for player A
    """
    return 1.0 / (1.0 + 10 ** ((rating_b - rating_a) / scale_factor))


def calculate_elo_update(
    winner_elo: int,
    loser_elo: int,
    params: RatingParameters = DEFAULT_PARAMETERS,
) -> EloUpdate:
    """Calculate rating deltas after a match.

    Each side is rounded on its own, so winner_gain + loser_gain can be
    off zero by one point.

    Args:
        winner_elo: Winner's rating before the match
        loser_elo: Loser's rating before the match
        params: Rating constants (K-factor, scale)

    Returns:
        EloUpdate with a positive winner gain and a negative loser gain
    """
    winner_expected = calculate_expected_score(winner_elo, loser_elo, params.scale_factor)
    loser_expected = calculate_expected_score(loser_elo, winner_elo, params.scale_factor)

    # Winner gets score of 1, loser gets 0
    winner_gain = round_half_away(params.k_factor * (1.0 - winner_expected))
    loser_gain = round_half_away(params.k_factor * (0.0 - loser_expected))

    return EloUpdate(winner_gain=winner_gain, loser_gain=loser_gain)


def calculate_race_points(
    is_winner: bool,
    is_tournament: bool,
    is_off_peak: bool = False,
    is_matchmaking_challenge: bool = False,
    params: RatingParameters = DEFAULT_PARAMETERS,
) -> RacePoints:
    """Calculate Race points earned by one player in a match.

    total = round((base + bonuses) * multiplier), where the bonuses are
    independent of each other and the multiplier depends only on whether
    the match was part of a tournament.

    Args:
        is_winner: Whether this player won
        is_tournament: Tournament match (multiplied) or friendly
        is_off_peak: Played during off-peak hours
        is_matchmaking_challenge: Match came from a matchmaking challenge
        params: Race constants

    Returns:
        RacePoints with the total and a human readable breakdown
    """
    bonus = 0
    terms = [f"Base {params.race_base_points}"]

    if is_winner:
        bonus += params.win_bonus
        terms.append(f"Win {params.win_bonus}")
    if is_off_peak:
        bonus += params.off_peak_bonus
        terms.append(f"OffPeak {params.off_peak_bonus}")
    if is_matchmaking_challenge:
        bonus += params.challenge_bonus
        terms.append(f"Challenge {params.challenge_bonus}")

    if is_tournament:
        multiplier = params.tournament_multiplier
        multiplier_label = f"Tournament {multiplier}"
    else:
        multiplier = params.friendly_multiplier
        multiplier_label = f"Friendly {multiplier}"

    total = round_half_away((params.race_base_points + bonus) * multiplier)
    breakdown = f"({' + '.join(terms)}) * {multiplier_label}"

    return RacePoints(total=total, breakdown=breakdown)


def calculate_win_rate(wins: int, total_matches: int) -> float:
    """Win percentage rounded to 2 decimals (0.0 when no matches)."""
    if total_matches <= 0:
        return 0.0
    return round_half_away(wins / total_matches * 100, places=2)
