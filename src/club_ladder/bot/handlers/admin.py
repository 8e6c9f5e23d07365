"""Admin handlers - monthly Race reset."""

import logging

from aiogram import Bot, F, Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, InlineKeyboardButton, InlineKeyboardMarkup, Message

from ...config import get_settings
from ...db.engine import async_session_factory
from ...services.clubs import ClubService
from ...services.wiring import RankingServices
from ..utils import (
    get_chat_title,
    log_callback,
    log_command,
    safe_handler,
    validate_callback_message,
    validate_message_user,
)

logger = logging.getLogger(__name__)

router = Router(name="admin")


# Callback data prefixes
CONFIRM_RESET = "race_reset_confirm:"
CANCEL_RESET = "race_reset_cancel:"


async def is_admin(user_id: int, chat_id: int, bot: Bot) -> bool:
    """Check if user is an admin (bot owner or chat admin).

    Args:
        user_id: Telegram user ID
        chat_id: Telegram chat ID
        bot: Bot instance for API calls

    Returns:
        True if user is admin, False otherwise
    """
    settings = get_settings()

    if user_id in settings.get_admin_user_ids():
        return True

    try:
        chat_admins = await bot.get_chat_administrators(chat_id)
        return any(admin.user.id == user_id for admin in chat_admins)
    except Exception:
        # Private chats have no administrators, only bot owners pass
        return False


def get_reset_keyboard(chat_id: int) -> InlineKeyboardMarkup:
    """Create confirmation keyboard for the Race reset."""
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(
                    text="Reset Race",
                    callback_data=f"{CONFIRM_RESET}{chat_id}",
                ),
                InlineKeyboardButton(
                    text="Cancel",
                    callback_data=f"{CANCEL_RESET}{chat_id}",
                ),
            ]
        ]
    )


@router.message(Command("reset_race"))
@safe_handler
@log_command("/reset_race")
async def cmd_reset_race(message: Message, bot: Bot) -> None:
    """Handle /reset_race command - ask for confirmation before resetting."""
    if not validate_message_user(message):
        await message.answer("Could not identify user.")
        return

    if not await is_admin(message.from_user.id, message.chat.id, bot):
        await message.answer("Only chat administrators can reset the Race.")
        return

    await message.answer(
        "<b>Reset this month's Race?</b>\n\n"
        "Every player's Race points in this club go back to 0. ELO ratings are not affected.",
        reply_markup=get_reset_keyboard(message.chat.id),
    )


@router.callback_query(F.data.startswith(CONFIRM_RESET))
@safe_handler
@log_callback("confirm_race_reset")
async def callback_confirm_reset(callback: CallbackQuery, bot: Bot, services: RankingServices) -> None:
    """Reset the Race after an admin confirmed."""
    if not validate_callback_message(callback):
        await callback.answer("Message not found.")
        return

    chat_id = int(callback.data.removeprefix(CONFIRM_RESET))
    if callback.message.chat.id != chat_id:
        await callback.answer("This button belongs to another chat.", show_alert=True)
        return

    if not await is_admin(callback.from_user.id, chat_id, bot):
        await callback.answer("Only chat administrators can reset the Race.", show_alert=True)
        return

    async with async_session_factory() as session:
        club = await ClubService(session).get_or_create_club(chat_id, get_chat_title(callback.message))
        await session.commit()

    await services.queries.reset_monthly_race(club.id)

    await callback.message.edit_text("<b>The Race has been reset.</b> Good luck this month!")
    await callback.answer()


@router.callback_query(F.data.startswith(CANCEL_RESET))
@safe_handler
@log_callback("cancel_race_reset")
async def callback_cancel_reset(callback: CallbackQuery) -> None:
    """Dismiss the reset confirmation."""
    if validate_callback_message(callback):
        await callback.message.edit_text("Race reset cancelled.")
    await callback.answer()
