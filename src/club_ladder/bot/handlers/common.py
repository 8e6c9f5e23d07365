"""Common bot handlers - /start, /help commands."""

import logging

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from ...db.models.clubs import Club
from ...db.models.members import Member
from ...services.clubs import ClubService
from ..utils import get_chat_title, get_display_name, log_command, safe_handler

logger = logging.getLogger(__name__)

router = Router(name="common")


async def resolve_sender(session: AsyncSession, message: Message) -> tuple[Club, Member]:
    """Get or create the club of the chat and the member who sent the message."""
    club_service = ClubService(session)
    club = await club_service.get_or_create_club(message.chat.id, get_chat_title(message))
    member = await club_service.get_or_create_member(
        club_id=club.id,
        telegram_user_id=message.from_user.id,
        display_name=get_display_name(message.from_user),
    )
    return club, member


@router.message(Command("start"))
@safe_handler
@log_command("/start")
async def cmd_start(message: Message) -> None:
    """Handle /start command."""
    await message.answer(
        "<b>Welcome to the Club Ladder!</b>\n\n"
        "Every match you report moves two rankings:\n"
        " <b>ELO</b> - your skill rating, starts at 1200\n"
        " <b>The Race</b> - monthly points for playing, reset every month\n\n"
        "<b>Quick Start:</b>\n"
        " Reply to your opponent's message with <code>/won 6-3 6-4</code> after beating them\n"
        " Use /elo and /race to see the leaderboards\n\n"
        "Use /help for all commands."
    )


@router.message(Command("help"))
@safe_handler
@log_command("/help")
async def cmd_help(message: Message) -> None:
    """Handle /help command."""
    await message.answer(
        "<b>Club Ladder Help</b>\n\n"
        "<b>Reporting results</b>\n"
        "<code>/won &lt;score&gt; [tournament] [offpeak] [challenge]</code>\n"
        "<i>Reply to the loser's message. Example: /won 6-2, 7-5 offpeak</i>\n\n"
        "<b>Race points</b>\n"
        "Base 10, +15 for a win, +5 off-peak, +20 matchmaking challenge.\n"
        "Tournament matches count x2.5.\n\n"
        "<b>Rankings</b>\n"
        "/elo [n] - Top players by ELO\n"
        "/race [n] - Top players in this month's Race\n"
        "/seeds &lt;n&gt; - Heads of series for a tournament\n"
        "/rank - Your own ranking\n\n"
        "<b>Matches</b>\n"
        "/matches - Latest matches in this club\n"
        "/history - Your matches\n\n"
        "<b>Admins</b>\n"
        "/reset_race - Reset this month's Race for the club"
    )
