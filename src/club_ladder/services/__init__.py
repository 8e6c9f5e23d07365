"""Service layer for match recording and rankings."""

from .clubs import ClubService
from .matches import MatchRecorder
from .processing import MatchResultProcessor
from .rankings import RankingQueryService
from .wiring import RankingServices, create_ranking_services

__all__ = [
    "ClubService",
    "MatchRecorder",
    "MatchResultProcessor",
    "RankingQueryService",
    "RankingServices",
    "create_ranking_services",
]
