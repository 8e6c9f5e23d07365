"""Tests for MatchRecorder and the assembled ranking services."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from club_ladder.db.models import Club, Match, Member, RankingType
from club_ladder.db.models.matches import MAX_SCORE_LENGTH
from club_ladder.exceptions import RankingUpdateError
from club_ladder.services import MatchRecorder, create_ranking_services
from club_ladder.types import MatchResultData, RecordMatchInput


def match_input(tenant_id: int = 1, winner_id: int = 10, loser_id: int = 20, **kwargs) -> RecordMatchInput:
    return RecordMatchInput(
        tenant_id=tenant_id,
        winner_id=winner_id,
        loser_id=loser_id,
        score=kwargs.pop("score", "6-2 6-4"),
        is_tournament=kwargs.pop("is_tournament", False),
        is_off_peak=kwargs.pop("is_off_peak", False),
        **kwargs,
    )


class TestRecordResultWithMocks:
    """Unit tests for the save-then-process flow."""

    async def test_saves_before_processing(self):
        calls = []
        match_store = AsyncMock()
        match_store.save.side_effect = lambda match: calls.append("save") or match
        processor = MagicMock()
        processor.process = AsyncMock(side_effect=lambda data: calls.append("process") or "changes")
        recorder = MatchRecorder(match_store, processor)

        recorded = await recorder.record_result(
            match_input(is_tournament=True, is_matchmaking_challenge=True, metadata={"court": 2})
        )

        assert calls == ["save", "process"]
        saved: Match = match_store.save.await_args.args[0]
        assert saved.tenant_id == 1
        assert saved.winner_id == 10
        assert saved.loser_id == 20
        assert saved.score == "6-2 6-4"
        assert saved.is_tournament is True
        assert saved.is_off_peak is False
        assert saved.is_matchmaking_challenge is True
        assert saved.match_metadata == {"court": 2}
        assert saved.date is not None
        assert recorded.match is saved
        assert recorded.ranking_changes == "changes"

    async def test_long_score_is_cut_to_column_length(self):
        match_store = AsyncMock()
        match_store.save.side_effect = lambda match: match
        processor = MagicMock()
        processor.process = AsyncMock()
        recorder = MatchRecorder(match_store, processor)

        recorded = await recorder.record_result(match_input(score="6-4 " * 25 + "7"))

        assert len(recorded.match.score) == MAX_SCORE_LENGTH
        assert recorded.match.score.startswith("6-4 6-4")

    async def test_processor_receives_match_flags(self):
        match_store = AsyncMock()
        match_store.save.side_effect = lambda match: match
        processor = MagicMock()
        processor.process = AsyncMock()
        recorder = MatchRecorder(match_store, processor)

        await recorder.record_result(match_input(is_off_peak=True))

        processor.process.assert_awaited_once_with(
            MatchResultData(
                tenant_id=1,
                winner_id=10,
                loser_id=20,
                is_tournament=False,
                is_off_peak=True,
                is_matchmaking_challenge=False,
            )
        )

    async def test_save_failure_skips_processing(self):
        match_store = AsyncMock()
        match_store.save.side_effect = RuntimeError("disk full")
        processor = MagicMock()
        processor.process = AsyncMock()
        recorder = MatchRecorder(match_store, processor)

        with pytest.raises(RuntimeError, match="disk full"):
            await recorder.record_result(match_input())

        processor.process.assert_not_awaited()

    async def test_processing_failure_keeps_match(self):
        """The saved match is not rolled back when rankings fail to update."""
        match_store = AsyncMock()
        match_store.save.side_effect = lambda match: match
        processor = MagicMock()
        processor.process = AsyncMock(side_effect=RankingUpdateError(1, [20]))
        recorder = MatchRecorder(match_store, processor)

        with pytest.raises(RankingUpdateError):
            await recorder.record_result(match_input())

        match_store.save.assert_awaited_once()
        match_store.delete.assert_not_called()


class TestRecordResultIntegration:
    """Recording matches through the SQL-backed services."""

    async def test_record_and_read_back(
        self, session_factory, club: Club, alice: Member, bob: Member
    ):
        services = create_ranking_services(session_factory)

        recorded = await services.recorder.record_result(
            match_input(tenant_id=club.id, winner_id=alice.id, loser_id=bob.id, score="6-3 7-5")
        )

        assert recorded.match.id is not None
        assert recorded.ranking_changes.winner.elo.new == 1216
        assert recorded.ranking_changes.loser.elo.new == 1184

        found = await services.recorder.get_match(recorded.match.id)
        assert found.score == "6-3 7-5"

        recent = await services.recorder.get_recent_matches(club.id)
        assert [m.id for m in recent] == [recorded.match.id]

        history = await services.recorder.get_player_matches(club.id, bob.id)
        assert [m.id for m in history] == [recorded.match.id]

        rows = await services.queries.get_rankings(club.id, RankingType.ELO)
        assert [(r.user_name, r.elo_score) for r in rows] == [("Alice", 1216), ("Bob", 1184)]

    async def test_failed_update_leaves_match(
        self, session_factory, club: Club, alice: Member, bob: Member
    ):
        services = create_ranking_services(session_factory)
        ranking_store = services.queries.ranking_store
        ranking_store.apply_result = AsyncMock(return_value=None)

        with pytest.raises(RankingUpdateError) as exc_info:
            await services.recorder.record_result(
                match_input(tenant_id=club.id, winner_id=alice.id, loser_id=bob.id)
            )

        assert sorted(exc_info.value.user_ids) == sorted([alice.id, bob.id])
        matches = await services.recorder.get_recent_matches(club.id)
        assert len(matches) == 1
