"""Tests for bot argument parsing and message formatting."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.types import Message

from club_ladder.bot.formatting import (
    format_heads_of_series,
    format_leaderboard,
    format_match_list,
    format_ranking,
    format_recorded_match,
    parse_result_args,
)
from club_ladder.bot.utils import (
    GENERIC_ERROR_MESSAGE,
    RANKING_UPDATE_ERROR_MESSAGE,
    error_message_for,
    parse_limit,
    safe_handler,
)
from club_ladder.db.models import Match, Ranking, RankingType
from club_ladder.exceptions import RankingUpdateError
from club_ladder.types import (
    EloDelta,
    MatchProcessResult,
    RaceDelta,
    RankingDelta,
    RankingWithDetails,
    RecordedMatch,
)


def row(position: int, name: str, elo: int, race: int) -> RankingWithDetails:
    return RankingWithDetails(
        user_id=position,
        user_name=name,
        elo_score=elo,
        monthly_race_points=race,
        total_matches=3,
        win_rate=66.67,
        position=position,
        tenant_id=1,
    )


class TestParseResultArgs:
    """Tests for /won argument parsing."""

    def test_score_only(self):
        parsed = parse_result_args("/won 6-4 6-3")
        assert parsed.score == "6-4 6-3"
        assert not parsed.is_tournament
        assert not parsed.is_off_peak
        assert not parsed.is_matchmaking_challenge

    def test_flags_anywhere(self):
        parsed = parse_result_args("/won #Tournament 6-4, 3-6, 7-5 offpeak")
        assert parsed.score == "6-4, 3-6, 7-5"
        assert parsed.is_tournament
        assert parsed.is_off_peak

    def test_challenge_flag(self):
        parsed = parse_result_args("/won 6-0 6-0 matchmaking")
        assert parsed.is_matchmaking_challenge
        assert parsed.score == "6-0 6-0"

    @pytest.mark.parametrize("text", [None, "", "/won", "/won tournament offpeak"])
    def test_missing_score(self, text):
        assert parse_result_args(text) is None


class TestParseLimit:
    """Tests for optional count arguments."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("/elo", 10),
            ("/elo 5", 5),
            ("/elo 500", 50),
            ("/elo zero", 10),
            ("/elo -3", 10),
            (None, 10),
        ],
    )
    def test_parse_limit(self, text, expected):
        assert parse_limit(text, default=10, maximum=50) == expected


class TestFormatting:
    """Tests for the text sent back to the chat."""

    def test_elo_leaderboard(self):
        text = format_leaderboard([row(1, "Alice", 1250, 30), row(4, "Bob", 1190, 75)], RankingType.ELO)

        assert "<b>ELO Ranking</b>" in text
        assert "🥇 Alice - <b>1250</b>" in text
        assert "4. Bob - <b>1190</b>" in text
        assert "66.67% won" in text

    def test_race_leaderboard(self):
        text = format_leaderboard([row(1, "Carol", 1190, 75)], RankingType.RACE)

        assert "The Race (this month)" in text
        assert "<b>75 pts</b>" in text

    def test_empty_leaderboard(self):
        assert "No matches recorded yet" in format_leaderboard([], RankingType.ELO)

    def test_names_are_escaped(self):
        text = format_leaderboard([row(1, "<script>", 1200, 0)], RankingType.ELO)
        assert "&lt;script&gt;" in text

    def test_recorded_match(self):
        match = Match(score="6-4 6-3", is_tournament=True, is_off_peak=True, is_matchmaking_challenge=False)
        changes = MatchProcessResult(
            winner=RankingDelta(
                elo=EloDelta(prev=1200, new=1216, gain=16),
                race=RaceDelta(prev=0, new=75, gain=75, details="(Base 10 + Win 15 + OffPeak 5) * Tournament 2.5"),
            ),
            loser=RankingDelta(
                elo=EloDelta(prev=1200, new=1184, gain=-16),
                race=RaceDelta(prev=0, new=38, gain=38, details="(Base 10 + OffPeak 5) * Tournament 2.5"),
            ),
        )

        text = format_recorded_match(RecordedMatch(match=match, ranking_changes=changes), "Alice", "Bob")

        assert "[Tournament, Off-peak]" in text
        assert "ELO: 1200 → 1216 (+16)" in text
        assert "ELO: 1200 → 1184 (-16)" in text
        assert "Race: 0 → 38 (+38)" in text

    def test_heads_of_series(self):
        rankings = [Ranking(user_id=5, elo_score=1400), Ranking(user_id=9, elo_score=1300)]

        text = format_heads_of_series(rankings, {5: "Alice"})

        assert "Seed 1: Alice (1400)" in text
        assert "Seed 2: Unknown player (1300)" in text

    def test_ranking_card(self):
        ranking = Ranking(elo_score=1216, monthly_race_points=25, total_matches=1, wins=1, win_rate=100.0)

        text = format_ranking(ranking, "Alice")

        assert "ELO: <b>1216</b>" in text
        assert "Matches: 1 (1 won, 100%)" in text
        assert "No matches played yet" in format_ranking(None, "Alice")

    def test_match_list(self):
        match = Match(
            winner_id=1,
            loser_id=2,
            score="7-5 6-4",
            date=datetime(2024, 5, 1, 18, 0),
            is_tournament=False,
        )

        text = format_match_list([match], {1: "Alice", 2: "Bob"}, "Latest matches")

        assert "2024-05-01 Alice def. Bob 7-5 6-4" in text


class TestSafeHandler:
    """Tests for handler error replies."""

    def test_error_messages(self):
        assert error_message_for(RankingUpdateError(1, [2])) == RANKING_UPDATE_ERROR_MESSAGE
        assert error_message_for(ValueError("boom")) == GENERIC_ERROR_MESSAGE

    async def test_failed_handler_replies(self):
        message = MagicMock(spec=Message)
        message.from_user = None
        message.chat = MagicMock(id=123)
        message.reply = AsyncMock()

        @safe_handler
        async def handler(msg: Message) -> None:
            raise RankingUpdateError(1, [2])

        assert await handler(message) is None
        message.reply.assert_awaited_once_with(RANKING_UPDATE_ERROR_MESSAGE)

    async def test_successful_handler_passes_through(self):
        @safe_handler
        async def handler(value: int) -> int:
            return value * 2

        assert await handler(21) == 42
