"""Ranking queries - leaderboards, seeding and the monthly reset."""

import logging

from ..db.models.enums import RankingType
from ..db.models.rankings import Ranking
from ..stores.base import RankingStore
from ..types import RankingWithDetails

logger = logging.getLogger(__name__)

DEFAULT_LEADERBOARD_LIMIT = 50


class RankingQueryService:
    """Read-only ranking queries plus the administrative Race reset."""

    def __init__(self, ranking_store: RankingStore) -> None:
        self.ranking_store = ranking_store

    async def get_rankings(
        self,
        tenant_id: int,
        ranking_type: RankingType,
        limit: int = DEFAULT_LEADERBOARD_LIMIT,
    ) -> list[RankingWithDetails]:
        """Get a club leaderboard ordered by ELO or Race points."""
        logger.info(f"Getting {ranking_type.value} rankings for club {tenant_id} (limit {limit})")
        return await self.ranking_store.get_rankings_with_users(tenant_id, ranking_type, limit)

    async def get_heads_of_series(self, tenant_id: int, count: int) -> list[Ranking]:
        """Get the top members by ELO, used to seed tournaments."""
        logger.info(f"Getting {count} heads of series for club {tenant_id}")
        return await self.ranking_store.get_top_by_elo(tenant_id, count)

    async def get_player_ranking(self, tenant_id: int, user_id: int) -> Ranking | None:
        """Get a single member's ranking, None if they have not played yet."""
        return await self.ranking_store.find_by_user_and_tenant(tenant_id, user_id)

    async def reset_monthly_race(self, tenant_id: int | None = None) -> None:
        """Zero the Race points of a club, or of all clubs when tenant_id is None."""
        scope = f"club {tenant_id}" if tenant_id is not None else "all clubs"
        logger.info(f"Resetting monthly race for {scope}")
        try:
            reset_count = await self.ranking_store.reset_monthly_race(tenant_id)
        except Exception as e:
            logger.exception(f"Monthly race reset failed for {scope}: {e}")
            raise
        logger.info(f"Monthly race reset for {scope} completed ({reset_count} rankings)")
