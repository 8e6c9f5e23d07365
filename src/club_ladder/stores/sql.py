"""SQLAlchemy implementations of the ranking and match stores.

Every call opens its own session and commits before returning, so two
calls never share a transaction. Returned instances are detached but fully
loaded (the session factory must use expire_on_commit=False).
"""

import logging
from typing import Any

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..db.models.base import utcnow
from ..db.models.enums import RankingType
from ..db.models.matches import Match
from ..db.models.members import Member
from ..db.models.rankings import DEFAULT_ELO_SCORE, Ranking
from ..types import RankingWithDetails
from ..utils.rating import calculate_win_rate

logger = logging.getLogger(__name__)

UNKNOWN_USER_NAME = "Unknown player"


class SqlRankingStore:
    """Ranking persistence backed by the rankings table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def find_by_user_and_tenant(self, tenant_id: int, user_id: int) -> Ranking | None:
        """Get the ranking of a member in a club, if it exists."""
        async with self.session_factory() as session:
            return await self._find(session, tenant_id, user_id)

    async def create(self, ranking: Ranking) -> Ranking:
        """Insert a new ranking, filling in default counters.

        If another request created the same (tenant, user) ranking first,
        the existing row is returned instead.

        Args:
            ranking: Transient Ranking with at least tenant_id and user_id

        Returns:
            The persisted Ranking
        """
        if ranking.elo_score is None:
            ranking.elo_score = DEFAULT_ELO_SCORE
        if ranking.monthly_race_points is None:
            ranking.monthly_race_points = 0
        if ranking.total_matches is None:
            ranking.total_matches = 0
        if ranking.wins is None:
            ranking.wins = 0
        if ranking.win_rate is None:
            ranking.win_rate = 0.0
        if ranking.last_reset_date is None:
            ranking.last_reset_date = utcnow()

        async with self.session_factory() as session:
            session.add(ranking)
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                existing = await self._find(session, ranking.tenant_id, ranking.user_id)
                if existing is None:
                    raise
                logger.info(
                    f"Ranking for user {ranking.user_id} in club {ranking.tenant_id} "
                    "was created concurrently, using existing row"
                )
                return existing

        logger.debug(f"Created ranking for user {ranking.user_id} in club {ranking.tenant_id}")
        return ranking

    async def update(self, ranking_id: int, **fields: Any) -> Ranking | None:
        """Set the given fields on a ranking.

        Returns:
            Updated Ranking, or None if it no longer exists
        """
        async with self.session_factory() as session:
            ranking = await session.get(Ranking, ranking_id)
            if ranking is None:
                return None

            for name, value in fields.items():
                setattr(ranking, name, value)

            await session.commit()
            return ranking

    async def apply_result(
        self,
        ranking_id: int,
        elo_gain: int,
        race_gain: int,
        won: bool,
    ) -> Ranking | None:
        """Add one match result to a ranking's counters.

        The counters are incremented in a single UPDATE relative to their
        stored values, so concurrent results for the same member are never
        lost. The win rate is then recomputed from the stored counters.

        Args:
            ranking_id: Ranking to update
            elo_gain: ELO delta (negative for the loser)
            race_gain: Race points earned
            won: Whether to count the match as a win

        Returns:
            Updated Ranking, or None if it no longer exists
        """
        async with self.session_factory() as session:
            stmt = (
                update(Ranking)
                .where(Ranking.id == ranking_id)
                .values(
                    elo_score=Ranking.elo_score + elo_gain,
                    monthly_race_points=Ranking.monthly_race_points + race_gain,
                    total_matches=Ranking.total_matches + 1,
                    wins=Ranking.wins + (1 if won else 0),
                )
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(stmt)
            if result.rowcount == 0:
                await session.rollback()
                return None

            ranking = await session.get(Ranking, ranking_id)
            if ranking is None:
                await session.rollback()
                return None

            ranking.win_rate = calculate_win_rate(ranking.wins, ranking.total_matches)
            await session.commit()
            return ranking

    async def get_top_by_elo(self, tenant_id: int, limit: int) -> list[Ranking]:
        """Get the highest rated members of a club (ties by user id)."""
        async with self.session_factory() as session:
            stmt = (
                select(Ranking)
                .where(Ranking.tenant_id == tenant_id)
                .order_by(Ranking.elo_score.desc(), Ranking.user_id.asc())
                .limit(limit)
            )
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get_rankings_with_users(
        self,
        tenant_id: int,
        ranking_type: RankingType,
        limit: int,
    ) -> list[RankingWithDetails]:
        """Get a club leaderboard with member names and avatars.

        Args:
            tenant_id: Club to rank
            ranking_type: ELO orders by elo_score, RACE by monthly_race_points
            limit: Maximum number of rows

        Returns:
            Rows ordered best first, ties by user id, with 1-based positions
        """
        sort_column = (
            Ranking.elo_score if ranking_type == RankingType.ELO else Ranking.monthly_race_points
        )

        async with self.session_factory() as session:
            stmt = (
                select(Ranking, Member.display_name, Member.avatar_url)
                .outerjoin(Member, Member.id == Ranking.user_id)
                .where(Ranking.tenant_id == tenant_id)
                .order_by(sort_column.desc(), Ranking.user_id.asc())
                .limit(limit)
            )
            result = await session.execute(stmt)
            rows = result.all()

        return [
            RankingWithDetails(
                user_id=ranking.user_id,
                user_name=display_name or UNKNOWN_USER_NAME,
                user_avatar=avatar_url,
                elo_score=ranking.elo_score,
                monthly_race_points=ranking.monthly_race_points,
                total_matches=ranking.total_matches,
                win_rate=ranking.win_rate,
                position=position,
                tenant_id=ranking.tenant_id,
                last_reset_date=ranking.last_reset_date,
            )
            for position, (ranking, display_name, avatar_url) in enumerate(rows, 1)
        ]

    async def reset_monthly_race(self, tenant_id: int | None = None) -> int:
        """Zero the Race points of one club, or of every club.

        Returns:
            Number of rankings reset
        """
        stmt = update(Ranking).values(monthly_race_points=0, last_reset_date=utcnow())
        if tenant_id is not None:
            stmt = stmt.where(Ranking.tenant_id == tenant_id)

        async with self.session_factory() as session:
            result = await session.execute(stmt.execution_options(synchronize_session=False))
            await session.commit()
            return result.rowcount

    @staticmethod
    async def _find(session: AsyncSession, tenant_id: int, user_id: int) -> Ranking | None:
        stmt = select(Ranking).where(
            Ranking.tenant_id == tenant_id,
            Ranking.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


class SqlMatchStore:
    """Match persistence backed by the matches table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def save(self, match: Match) -> Match:
        """Insert a match."""
        if match.match_metadata is None:
            match.match_metadata = {}

        async with self.session_factory() as session:
            session.add(match)
            await session.commit()
            return match

    async def find_by_id(self, match_id: int) -> Match | None:
        """Get a match by ID."""
        async with self.session_factory() as session:
            return await session.get(Match, match_id)

    async def find_by_tenant(self, tenant_id: int, limit: int = 20) -> list[Match]:
        """Get the most recent matches of a club, newest first."""
        async with self.session_factory() as session:
            stmt = (
                select(Match)
                .where(Match.tenant_id == tenant_id)
                .order_by(Match.date.desc(), Match.id.desc())
                .limit(limit)
            )
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def find_by_user(
        self,
        tenant_id: int,
        user_id: int,
        limit: int | None = None,
    ) -> list[Match]:
        """Get the matches a member won or lost in a club, newest first."""
        async with self.session_factory() as session:
            stmt = (
                select(Match)
                .where(
                    Match.tenant_id == tenant_id,
                    or_(Match.winner_id == user_id, Match.loser_id == user_id),
                )
                .order_by(Match.date.desc(), Match.id.desc())
            )
            if limit is not None:
                stmt = stmt.limit(limit)
            result = await session.execute(stmt)
            return list(result.scalars().all())
