"""Text formatting and argument parsing for ranking commands."""

import html
from dataclasses import dataclass

from ..db.models.enums import RankingType
from ..db.models.matches import Match
from ..db.models.rankings import Ranking
from ..types import RankingDelta, RankingWithDetails, RecordedMatch

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}

# Words accepted after the score in /won, mapped to the flag they set
TOURNAMENT_FLAGS = {"tournament", "tourney"}
OFF_PEAK_FLAGS = {"offpeak", "off-peak", "off_peak"}
CHALLENGE_FLAGS = {"challenge", "matchmaking"}


@dataclass
class ParsedResult:
    """Arguments of a /won command."""

    score: str
    is_tournament: bool = False
    is_off_peak: bool = False
    is_matchmaking_challenge: bool = False


def parse_result_args(text: str | None) -> ParsedResult | None:
    """Parse "/won <score> [tournament] [offpeak] [challenge]".

    Flag words may appear anywhere and may carry a leading '#'. Everything
    else is kept, in order, as the score text.

    Returns:
        ParsedResult, or None when no score was given
    """
    if not text:
        return None

    parts = text.split(maxsplit=1)
    if len(parts) < 2:
        return None

    result = ParsedResult(score="")
    score_tokens = []

    for token in parts[1].split():
        word = token.lstrip("#").lower()
        if word in TOURNAMENT_FLAGS:
            result.is_tournament = True
        elif word in OFF_PEAK_FLAGS:
            result.is_off_peak = True
        elif word in CHALLENGE_FLAGS:
            result.is_matchmaking_challenge = True
        else:
            score_tokens.append(token)

    if not score_tokens:
        return None

    result.score = " ".join(score_tokens)
    return result


def _signed(value: int) -> str:
    return f"+{value}" if value >= 0 else str(value)


def format_delta(name: str, delta: RankingDelta) -> list[str]:
    """Format one player's ELO and Race change."""
    return [
        f"<b>{html.escape(name)}</b>",
        f"   ELO: {delta.elo.prev} → {delta.elo.new} ({_signed(delta.elo.gain)})",
        f"   Race: {delta.race.prev} → {delta.race.new} ({_signed(delta.race.gain)})",
        f"   <i>{html.escape(delta.race.details)}</i>",
    ]


def format_recorded_match(recorded: RecordedMatch, winner_name: str, loser_name: str) -> str:
    """Format the reply to a successfully recorded match."""
    match = recorded.match
    tags = []
    if match.is_tournament:
        tags.append("Tournament")
    if match.is_off_peak:
        tags.append("Off-peak")
    if match.is_matchmaking_challenge:
        tags.append("Challenge")

    header = f"<b>🎾 Match recorded</b> - {html.escape(match.score)}"
    if tags:
        header += f" [{', '.join(tags)}]"

    lines = [header, ""]
    lines.extend(format_delta(f"🏆 {winner_name}", recorded.ranking_changes.winner))
    lines.extend(format_delta(loser_name, recorded.ranking_changes.loser))
    return "\n".join(lines)


def format_leaderboard(rows: list[RankingWithDetails], ranking_type: RankingType) -> str:
    """Format a leaderboard sorted by ELO or Race points."""
    if ranking_type == RankingType.ELO:
        title = "ELO Ranking"
    else:
        title = "The Race (this month)"

    if not rows:
        return f"<b>{title}</b>\n\nNo matches recorded yet! Use /won to report one."

    lines = [f"<b>{title}</b>", ""]
    for row in rows:
        prefix = MEDALS.get(row.position, f"{row.position}.")
        value = row.elo_score if ranking_type == RankingType.ELO else row.monthly_race_points
        unit = "" if ranking_type == RankingType.ELO else " pts"
        lines.append(
            f"{prefix} {html.escape(row.user_name)} - <b>{value}{unit}</b> "
            f"({row.total_matches} played, {row.win_rate:g}% won)"
        )
    return "\n".join(lines)


def format_heads_of_series(rankings: list[Ranking], names: dict[int, str]) -> str:
    """Format tournament seeds."""
    if not rankings:
        return "No ranked players yet."

    lines = ["<b>Heads of series</b>", ""]
    for seed, ranking in enumerate(rankings, 1):
        name = names.get(ranking.user_id, "Unknown player")
        lines.append(f"Seed {seed}: {html.escape(name)} ({ranking.elo_score})")
    return "\n".join(lines)


def format_ranking(ranking: Ranking | None, name: str) -> str:
    """Format a single member's ranking card."""
    if ranking is None:
        return f"<b>{html.escape(name)}</b>\n\nNo matches played yet."

    return "\n".join(
        [
            f"<b>{html.escape(name)}</b>",
            "",
            f"ELO: <b>{ranking.elo_score}</b>",
            f"Race points this month: <b>{ranking.monthly_race_points}</b>",
            f"Matches: {ranking.total_matches} ({ranking.wins} won, {ranking.win_rate:g}%)",
        ]
    )


def format_match_list(matches: list[Match], names: dict[int, str], title: str) -> str:
    """Format a list of matches, newest first."""
    if not matches:
        return f"<b>{html.escape(title)}</b>\n\nNo matches yet."

    lines = [f"<b>{html.escape(title)}</b>", ""]
    for match in matches:
        winner = html.escape(names.get(match.winner_id, "Unknown player"))
        loser = html.escape(names.get(match.loser_id, "Unknown player"))
        marker = " 🏟" if match.is_tournament else ""
        lines.append(
            f"{match.date:%Y-%m-%d} {winner} def. {loser} {html.escape(match.score)}{marker}"
        )
    return "\n".join(lines)
