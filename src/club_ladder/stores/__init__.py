"""Ranking and match persistence."""

from .base import MatchStore, RankingStore
from .sql import SqlMatchStore, SqlRankingStore

__all__ = [
    "MatchStore",
    "RankingStore",
    "SqlMatchStore",
    "SqlRankingStore",
]
