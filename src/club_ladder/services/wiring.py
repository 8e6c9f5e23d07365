"""Assembles the ranking services on top of the SQL stores."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..stores.sql import SqlMatchStore, SqlRankingStore
from ..utils.rating import DEFAULT_PARAMETERS, RatingParameters
from .matches import MatchRecorder
from .processing import MatchResultProcessor
from .rankings import RankingQueryService


@dataclass
class RankingServices:
    """The services a caller needs to record matches and read rankings."""

    recorder: MatchRecorder
    queries: RankingQueryService


def create_ranking_services(
    session_factory: async_sessionmaker[AsyncSession],
    params: RatingParameters = DEFAULT_PARAMETERS,
) -> RankingServices:
    """Create services sharing one pair of SQL stores."""
    ranking_store = SqlRankingStore(session_factory)
    match_store = SqlMatchStore(session_factory)
    processor = MatchResultProcessor(ranking_store, params)

    return RankingServices(
        recorder=MatchRecorder(match_store, processor),
        queries=RankingQueryService(ranking_store),
    )
