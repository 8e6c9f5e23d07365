"""Ranking handlers - /elo, /race, /seeds, /rank."""

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from ...config import get_settings
from ...db.engine import async_session_factory
from ...db.models.enums import RankingType
from ...services.clubs import ClubService
from ...services.wiring import RankingServices
from ..formatting import format_heads_of_series, format_leaderboard, format_ranking
from ..utils import log_command, parse_limit, safe_handler, validate_message_user
from .common import resolve_sender

router = Router(name="rankings")


async def _send_leaderboard(message: Message, services: RankingServices, ranking_type: RankingType) -> None:
    settings = get_settings()
    limit = parse_limit(message.text, settings.leaderboard_default_limit, settings.leaderboard_max_limit)

    async with async_session_factory() as session:
        club, _ = await resolve_sender(session, message)
        await session.commit()

    rows = await services.queries.get_rankings(club.id, ranking_type, limit)
    await message.answer(format_leaderboard(rows, ranking_type))


@router.message(Command("elo"))
@safe_handler
@log_command("/elo")
async def cmd_elo(message: Message, services: RankingServices) -> None:
    """Handle /elo command - leaderboard by ELO."""
    if not validate_message_user(message):
        await message.answer("Could not identify user.")
        return

    await _send_leaderboard(message, services, RankingType.ELO)


@router.message(Command("race"))
@safe_handler
@log_command("/race")
async def cmd_race(message: Message, services: RankingServices) -> None:
    """Handle /race command - leaderboard by monthly Race points."""
    if not validate_message_user(message):
        await message.answer("Could not identify user.")
        return

    await _send_leaderboard(message, services, RankingType.RACE)


@router.message(Command("seeds"))
@safe_handler
@log_command("/seeds")
async def cmd_seeds(message: Message, services: RankingServices) -> None:
    """Handle /seeds command - top players by ELO for tournament seeding."""
    if not validate_message_user(message):
        await message.answer("Could not identify user.")
        return

    settings = get_settings()
    count = parse_limit(message.text, default=4, maximum=settings.leaderboard_max_limit)

    async with async_session_factory() as session:
        club, _ = await resolve_sender(session, message)
        await session.commit()

        seeds = await services.queries.get_heads_of_series(club.id, count)
        names = await ClubService(session).get_display_names([r.user_id for r in seeds])

    await message.answer(format_heads_of_series(seeds, names))


@router.message(Command("rank"))
@safe_handler
@log_command("/rank")
async def cmd_rank(message: Message, services: RankingServices) -> None:
    """Handle /rank command - the sender's own ranking."""
    if not validate_message_user(message):
        await message.answer("Could not identify user.")
        return

    async with async_session_factory() as session:
        club, member = await resolve_sender(session, message)
        await session.commit()

    ranking = await services.queries.get_player_ranking(club.id, member.id)
    await message.answer(format_ranking(ranking, member.display_name))
