"""Persistence contracts for rankings and matches."""

from typing import Any, Protocol, runtime_checkable

from ..db.models.enums import RankingType
from ..db.models.matches import Match
from ..db.models.rankings import Ranking
from ..types import RankingWithDetails


@runtime_checkable
class RankingStore(Protocol):
    """Per-club, per-member rating records."""

    async def find_by_user_and_tenant(self, tenant_id: int, user_id: int) -> Ranking | None: ...

    async def create(self, ranking: Ranking) -> Ranking: ...

    async def update(self, ranking_id: int, **fields: Any) -> Ranking | None: ...

    async def apply_result(
        self,
        ranking_id: int,
        elo_gain: int,
        race_gain: int,
        won: bool,
    ) -> Ranking | None: ...

    async def get_top_by_elo(self, tenant_id: int, limit: int) -> list[Ranking]: ...

    async def get_rankings_with_users(
        self,
        tenant_id: int,
        ranking_type: RankingType,
        limit: int,
    ) -> list[RankingWithDetails]: ...

    async def reset_monthly_race(self, tenant_id: int | None = None) -> int: ...


@runtime_checkable
class MatchStore(Protocol):
    """Append-only log of match results."""

    async def save(self, match: Match) -> Match: ...

    async def find_by_id(self, match_id: int) -> Match | None: ...

    async def find_by_tenant(self, tenant_id: int, limit: int = 20) -> list[Match]: ...

    async def find_by_user(
        self,
        tenant_id: int,
        user_id: int,
        limit: int | None = None,
    ) -> list[Match]: ...


__all__ = ["MatchStore", "RankingStore"]
