"""Data types passed in and out of the ranking services."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .db.models.matches import Match


@dataclass
class MatchResultData:
    """Outcome of a match, as needed to update rankings."""

    tenant_id: int
    winner_id: int
    loser_id: int
    is_tournament: bool
    is_off_peak: bool = False
    is_matchmaking_challenge: bool = False


@dataclass
class RecordMatchInput:
    """A match result reported by a caller."""

    tenant_id: int
    winner_id: int
    loser_id: int
    score: str
    is_tournament: bool
    is_off_peak: bool
    is_matchmaking_challenge: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_match_result(self) -> MatchResultData:
        """Project onto the fields the ranking update needs."""
        return MatchResultData(
            tenant_id=self.tenant_id,
            winner_id=self.winner_id,
            loser_id=self.loser_id,
            is_tournament=self.is_tournament,
            is_off_peak=self.is_off_peak,
            is_matchmaking_challenge=self.is_matchmaking_challenge,
        )


@dataclass
class EloDelta:
    """ELO before and after a match."""

    prev: int
    new: int
    gain: int


@dataclass
class RaceDelta:
    """Race points before and after a match."""

    prev: int
    new: int
    gain: int
    details: str


@dataclass
class RankingDelta:
    """Everything that changed for one player."""

    elo: EloDelta
    race: RaceDelta


@dataclass
class MatchProcessResult:
    """Ranking changes for both sides of a match."""

    winner: RankingDelta
    loser: RankingDelta


@dataclass
class RecordedMatch:
    """A saved match together with the ranking changes it caused."""

    match: Match
    ranking_changes: MatchProcessResult


@dataclass
class RankingWithDetails:
    """A leaderboard row: ranking counters plus display identity."""

    user_id: int
    user_name: str
    elo_score: int
    monthly_race_points: int
    total_matches: int
    win_rate: float
    position: int
    tenant_id: int
    last_reset_date: datetime | None = None
    user_avatar: str | None = None
