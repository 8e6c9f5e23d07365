"""Tests for the Elo and Race point calculations."""

import pytest

from club_ladder.config import Settings
from club_ladder.utils.rating import (
    EloUpdate,
    RatingParameters,
    calculate_elo_update,
    calculate_expected_score,
    calculate_race_points,
    calculate_win_rate,
    round_half_away,
)


class TestExpectedScore:
    """Tests for expected score calculation."""

    def test_equal_ratings(self):
        """Equal ratings should give 0.5 expected score."""
        score = calculate_expected_score(1200, 1200)
        assert score == pytest.approx(0.5, abs=0.001)

    def test_higher_rated_player(self):
        """Higher rated player should have >0.5 expected score."""
        score = calculate_expected_score(1400, 1200)
        assert 0.5 < score < 1.0

    def test_400_rating_difference(self):
        """400 point difference gives ~0.91 expected score."""
        score = calculate_expected_score(1600, 1200)
        assert score == pytest.approx(0.909, abs=0.01)

    def test_symmetry(self):
        """Expected scores should sum to 1."""
        score_a = calculate_expected_score(1300, 1100)
        score_b = calculate_expected_score(1100, 1300)
        assert score_a + score_b == pytest.approx(1.0, abs=0.001)


class TestEloUpdate:
    """Tests for ELO delta calculation."""

    def test_equal_ratings(self):
        """Two 1200 players: winner +16, loser -16."""
        result = calculate_elo_update(1200, 1200)
        assert result == EloUpdate(winner_gain=16, loser_gain=-16)

    def test_upset_winner_gains_more(self):
        """Lower rated winner should gain more than in an even match."""
        result = calculate_elo_update(1000, 1400)
        assert result.winner_gain > 16
        assert result.loser_gain < -16

    def test_favorite_wins_gains_less(self):
        """Higher rated winner should gain less than in an even match."""
        result = calculate_elo_update(1400, 1000)
        assert 0 < result.winner_gain < 16
        assert -16 < result.loser_gain < 0

    def test_sides_rounded_independently(self):
        """Gains are rounded per side, the sum stays within one point of zero."""
        for winner, loser in [(1200, 1000), (1216, 1184), (1531, 1187), (900, 2100)]:
            result = calculate_elo_update(winner, loser)
            assert abs(result.winner_gain + result.loser_gain) <= 1

    def test_lopsided_match_moves_nothing(self):
        """A huge favourite winning moves neither rating (no minimum change)."""
        result = calculate_elo_update(3000, 100)
        assert result.winner_gain == 0
        assert result.loser_gain == 0

    def test_k_factor_from_parameters(self):
        """K-factor comes from the injected parameters."""
        result = calculate_elo_update(1200, 1200, RatingParameters(k_factor=16))
        assert result == EloUpdate(winner_gain=8, loser_gain=-8)


class TestRacePoints:
    """Tests for Race point calculation."""

    def test_friendly_winner(self):
        """Friendly win: 10 base + 15 win."""
        result = calculate_race_points(is_winner=True, is_tournament=False)
        assert result.total == 25
        assert result.breakdown == "(Base 10 + Win 15) * Friendly 1.0"

    def test_friendly_loser(self):
        """Friendly loss still earns the base points."""
        result = calculate_race_points(is_winner=False, is_tournament=False)
        assert result.total == 10
        assert result.breakdown == "(Base 10) * Friendly 1.0"

    def test_tournament_winner_rounds_half_up(self):
        """25 * 2.5 = 62.5 rounds to 63."""
        result = calculate_race_points(is_winner=True, is_tournament=True)
        assert result.total == 63

    def test_tournament_off_peak_loser(self):
        """(10 + 5) * 2.5 = 37.5 rounds to 38."""
        result = calculate_race_points(is_winner=False, is_tournament=True, is_off_peak=True)
        assert result.total == 38
        assert result.breakdown == "(Base 10 + OffPeak 5) * Tournament 2.5"

    def test_tournament_off_peak_winner(self):
        """(10 + 15 + 5) * 2.5 = 75."""
        result = calculate_race_points(is_winner=True, is_tournament=True, is_off_peak=True)
        assert result.total == 75

    def test_all_bonuses(self):
        """Bonuses add up independently of each other."""
        result = calculate_race_points(
            is_winner=True,
            is_tournament=False,
            is_off_peak=True,
            is_matchmaking_challenge=True,
        )
        assert result.total == 50
        assert result.breakdown == "(Base 10 + Win 15 + OffPeak 5 + Challenge 20) * Friendly 1.0"

    def test_challenge_loser_in_tournament(self):
        """(10 + 20) * 2.5 = 75."""
        result = calculate_race_points(
            is_winner=False,
            is_tournament=True,
            is_matchmaking_challenge=True,
        )
        assert result.total == 75

    def test_custom_parameters(self):
        """Constants come from the injected parameters."""
        params = RatingParameters(race_base_points=4, win_bonus=6, tournament_multiplier=3.0)
        result = calculate_race_points(is_winner=True, is_tournament=True, params=params)
        assert result.total == 30
        assert result.breakdown == "(Base 4 + Win 6) * Tournament 3.0"


class TestRounding:
    """Tests for half-away-from-zero rounding."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(62.5, 63), (37.5, 38), (0.5, 1), (-0.5, -1), (-16.5, -17), (2.4, 2), (-2.4, -2)],
    )
    def test_integer_rounding(self, value, expected):
        assert round_half_away(value) == expected

    def test_decimal_places(self):
        assert round_half_away(66.665, places=2) == 66.67
        assert round_half_away(33.333333, places=2) == 33.33


class TestWinRate:
    """Tests for win rate calculation."""

    def test_no_matches(self):
        assert calculate_win_rate(0, 0) == 0.0

    def test_two_thirds(self):
        assert calculate_win_rate(2, 3) == 66.67

    def test_all_won(self):
        assert calculate_win_rate(5, 5) == 100.0


class TestRatingParameters:
    """Tests for building parameters from settings."""

    def test_defaults_match_settings_defaults(self):
        settings = Settings(bot_token="test", database_url="sqlite+aiosqlite://")
        assert RatingParameters.from_settings(settings) == RatingParameters()

    def test_from_settings_overrides(self):
        settings = Settings(
            bot_token="test",
            database_url="sqlite+aiosqlite://",
            elo_k_factor=24,
            race_tournament_multiplier=2.0,
        )
        params = RatingParameters.from_settings(settings)
        assert params.k_factor == 24
        assert params.tournament_multiplier == 2.0
