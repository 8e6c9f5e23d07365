"""Match recording - saves a result and updates rankings."""

import logging

from ..db.models.base import utcnow
from ..db.models.matches import MAX_SCORE_LENGTH, Match
from ..stores.base import MatchStore
from ..types import RecordedMatch, RecordMatchInput
from .processing import MatchResultProcessor

logger = logging.getLogger(__name__)


class MatchRecorder:
    """Service for recording match results."""

    def __init__(self, match_store: MatchStore, processor: MatchResultProcessor) -> None:
        self.match_store = match_store
        self.processor = processor

    async def record_result(self, match_input: RecordMatchInput) -> RecordedMatch:
        """Save a match and apply it to both players' rankings.

        The score is stored as given, cut to the column length. The two
        steps are independent: if the ranking update fails, the
        saved match stays and the error propagates.

        Args:
            match_input: Reported result

        Returns:
            RecordedMatch with the saved match and the ranking changes
        """
        logger.info(
            f"Recording match in club {match_input.tenant_id}: "
            f"{match_input.winner_id} beat {match_input.loser_id} ({match_input.score})"
        )

        match = Match(
            tenant_id=match_input.tenant_id,
            winner_id=match_input.winner_id,
            loser_id=match_input.loser_id,
            score=match_input.score[:MAX_SCORE_LENGTH],
            date=utcnow(),
            is_tournament=match_input.is_tournament,
            is_off_peak=match_input.is_off_peak,
            is_matchmaking_challenge=match_input.is_matchmaking_challenge,
            match_metadata=dict(match_input.metadata),
        )
        saved_match = await self.match_store.save(match)

        ranking_changes = await self.processor.process(match_input.to_match_result())

        return RecordedMatch(match=saved_match, ranking_changes=ranking_changes)

    async def get_match(self, match_id: int) -> Match | None:
        """Get a match by ID."""
        return await self.match_store.find_by_id(match_id)

    async def get_recent_matches(self, tenant_id: int, limit: int = 20) -> list[Match]:
        """Get the latest matches of a club."""
        return await self.match_store.find_by_tenant(tenant_id, limit)

    async def get_player_matches(
        self,
        tenant_id: int,
        user_id: int,
        limit: int | None = None,
    ) -> list[Match]:
        """Get the matches a member played in a club."""
        return await self.match_store.find_by_user(tenant_id, user_id, limit)
