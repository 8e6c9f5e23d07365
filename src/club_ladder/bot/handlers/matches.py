"""Match handlers - /won, /matches, /history."""

import logging

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from ...db.engine import async_session_factory
from ...services.clubs import ClubService
from ...services.wiring import RankingServices
from ...types import RecordMatchInput
from ..formatting import format_match_list, format_recorded_match, parse_result_args
from ..utils import get_display_name, log_command, safe_handler, validate_message_user, validate_reply_message
from .common import resolve_sender

logger = logging.getLogger(__name__)

router = Router(name="matches")

RECENT_MATCHES_LIMIT = 10


@router.message(Command("won"))
@safe_handler
@log_command("/won")
async def cmd_won(message: Message, services: RankingServices) -> None:
    """Handle /won command - the sender beat the author of the replied message.

    Usage: /won <score> [tournament] [offpeak] [challenge]
    """
    if not validate_message_user(message):
        await message.answer("Could not identify user.")
        return

    if not validate_reply_message(message):
        await message.answer("Reply to your opponent's message with /won &lt;score&gt; to report a win.")
        return

    winner_user = message.from_user
    loser_user = message.reply_to_message.from_user

    if winner_user.id == loser_user.id:
        await message.answer("You can't beat yourself!")
        return

    if loser_user.is_bot:
        await message.answer("Matches against bots don't count.")
        return

    parsed = parse_result_args(message.text)
    if parsed is None:
        await message.answer(
            "<b>Usage:</b> /won &lt;score&gt; [tournament] [offpeak] [challenge]\n\n"
            "<b>Example:</b> /won 6-4, 3-6, 7-5 tournament"
        )
        return

    async with async_session_factory() as session:
        club, winner = await resolve_sender(session, message)
        loser = await ClubService(session).get_or_create_member(
            club_id=club.id,
            telegram_user_id=loser_user.id,
            display_name=get_display_name(loser_user),
        )
        await session.commit()

    recorded = await services.recorder.record_result(
        RecordMatchInput(
            tenant_id=club.id,
            winner_id=winner.id,
            loser_id=loser.id,
            score=parsed.score,
            is_tournament=parsed.is_tournament,
            is_off_peak=parsed.is_off_peak,
            is_matchmaking_challenge=parsed.is_matchmaking_challenge,
            metadata={"telegram_message_id": message.message_id},
        )
    )

    await message.answer(format_recorded_match(recorded, winner.display_name, loser.display_name))


@router.message(Command("matches"))
@safe_handler
@log_command("/matches")
async def cmd_matches(message: Message, services: RankingServices) -> None:
    """Handle /matches command - latest matches in the club."""
    if not validate_message_user(message):
        await message.answer("Could not identify user.")
        return

    async with async_session_factory() as session:
        club, _ = await resolve_sender(session, message)
        await session.commit()

        matches = await services.recorder.get_recent_matches(club.id, RECENT_MATCHES_LIMIT)
        member_ids = [m.winner_id for m in matches] + [m.loser_id for m in matches]
        names = await ClubService(session).get_display_names(member_ids)

    await message.answer(format_match_list(matches, names, "Latest matches"))


@router.message(Command("history"))
@safe_handler
@log_command("/history")
async def cmd_history(message: Message, services: RankingServices) -> None:
    """Handle /history command - the sender's own matches."""
    if not validate_message_user(message):
        await message.answer("Could not identify user.")
        return

    async with async_session_factory() as session:
        club, member = await resolve_sender(session, message)
        await session.commit()

        matches = await services.recorder.get_player_matches(club.id, member.id, RECENT_MATCHES_LIMIT)
        member_ids = [m.winner_id for m in matches] + [m.loser_id for m in matches]
        names = await ClubService(session).get_display_names(member_ids)

    await message.answer(format_match_list(matches, names, f"Matches of {member.display_name}"))
