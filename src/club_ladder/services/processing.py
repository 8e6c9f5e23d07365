"""Match result processing - applies a result to both players' rankings."""

import asyncio
import logging

from ..db.models.base import utcnow
from ..db.models.rankings import Ranking
from ..exceptions import RankingUpdateError
from ..stores.base import RankingStore
from ..types import EloDelta, MatchProcessResult, MatchResultData, RaceDelta, RankingDelta
from ..utils.rating import (
    DEFAULT_PARAMETERS,
    RacePoints,
    RatingParameters,
    calculate_elo_update,
    calculate_race_points,
)

logger = logging.getLogger(__name__)


class MatchResultProcessor:
    """Computes and stores the ELO and Race changes caused by a match."""

    def __init__(
        self,
        ranking_store: RankingStore,
        params: RatingParameters = DEFAULT_PARAMETERS,
    ) -> None:
        self.ranking_store = ranking_store
        self.params = params

    async def process(self, match_data: MatchResultData) -> MatchProcessResult:
        """Update the winner's and loser's rankings for one match.

        Both rankings are fetched (or created) concurrently, the deltas are
        computed from the pre-match values, then both results are applied.

        Args:
            match_data: Club, players and match flags

        Returns:
            MatchProcessResult with before/after values for both players

        Raises:
            RankingUpdateError: If a ranking vanished before it was updated.
                A match saved before calling this is left in place.
        """
        logger.info(
            f"Processing match result in club {match_data.tenant_id}: "
            f"winner {match_data.winner_id}, loser {match_data.loser_id}"
        )

        try:
            winner_ranking, loser_ranking = await asyncio.gather(
                self._get_or_create_ranking(match_data.tenant_id, match_data.winner_id),
                self._get_or_create_ranking(match_data.tenant_id, match_data.loser_id),
            )

            elo_update = calculate_elo_update(
                winner_ranking.elo_score, loser_ranking.elo_score, self.params
            )
            winner_race = self._race_points(match_data, is_winner=True)
            loser_race = self._race_points(match_data, is_winner=False)

            updated_winner, updated_loser = await asyncio.gather(
                self.ranking_store.apply_result(
                    winner_ranking.id, elo_update.winner_gain, winner_race.total, won=True
                ),
                self.ranking_store.apply_result(
                    loser_ranking.id, elo_update.loser_gain, loser_race.total, won=False
                ),
            )

            if updated_winner is None or updated_loser is None:
                missing = [
                    ranking.user_id
                    for ranking, updated in (
                        (winner_ranking, updated_winner),
                        (loser_ranking, updated_loser),
                    )
                    if updated is None
                ]
                raise RankingUpdateError(match_data.tenant_id, missing)
        except Exception as e:
            logger.exception(f"Failed to process match result in club {match_data.tenant_id}: {e}")
            raise

        return MatchProcessResult(
            winner=self._delta(winner_ranking, updated_winner, elo_update.winner_gain, winner_race),
            loser=self._delta(loser_ranking, updated_loser, elo_update.loser_gain, loser_race),
        )

    async def _get_or_create_ranking(self, tenant_id: int, user_id: int) -> Ranking:
        """Get a member's ranking, creating it with default values if absent."""
        ranking = await self.ranking_store.find_by_user_and_tenant(tenant_id, user_id)
        if ranking is not None:
            return ranking

        logger.info(f"Creating ranking for user {user_id} in club {tenant_id}")
        return await self.ranking_store.create(
            Ranking(
                tenant_id=tenant_id,
                user_id=user_id,
                elo_score=self.params.initial_elo,
                monthly_race_points=0,
                total_matches=0,
                wins=0,
                win_rate=0.0,
                last_reset_date=utcnow(),
            )
        )

    def _race_points(self, match_data: MatchResultData, is_winner: bool) -> RacePoints:
        return calculate_race_points(
            is_winner=is_winner,
            is_tournament=match_data.is_tournament,
            is_off_peak=match_data.is_off_peak,
            is_matchmaking_challenge=match_data.is_matchmaking_challenge,
            params=self.params,
        )

    @staticmethod
    def _delta(before: Ranking, after: Ranking, elo_gain: int, race: RacePoints) -> RankingDelta:
        return RankingDelta(
            elo=EloDelta(prev=before.elo_score, new=after.elo_score, gain=elo_gain),
            race=RaceDelta(
                prev=before.monthly_race_points,
                new=after.monthly_race_points,
                gain=race.total,
                details=race.breakdown,
            ),
        )
