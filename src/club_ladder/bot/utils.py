"""Bot utilities - error handling, logging, and validation helpers."""

import functools
import logging
from typing import Any, Callable

from aiogram import types
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import CallbackQuery, Message

from ..exceptions import RankingUpdateError

logger = logging.getLogger("club_ladder.bot")

GENERIC_ERROR_MESSAGE = "Something went wrong while processing your request. Please try again later."
RANKING_UPDATE_ERROR_MESSAGE = (
    "The match was saved, but the rankings could not be updated. Please ask an admin to check it."
)


def error_message_for(error: Exception) -> str:
    """Text shown to the user when a handler fails with the given error."""
    if isinstance(error, RankingUpdateError):
        return RANKING_UPDATE_ERROR_MESSAGE
    return GENERIC_ERROR_MESSAGE


def _update_origin(update: Message | CallbackQuery | None) -> tuple[int | None, int | None]:
    """(user_id, chat_id) of a message or callback, for log context."""
    if isinstance(update, Message):
        return (update.from_user.id if update.from_user else None), update.chat.id
    if isinstance(update, CallbackQuery):
        return update.from_user.id, (update.message.chat.id if update.message else None)
    return None, None


def safe_handler(func: Callable) -> Callable:
    """Decorator to wrap handlers with error handling.

    Catches all exceptions, logs them, and replies with a short error message.
    Works with both Message and CallbackQuery handlers.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        update = next((arg for arg in args if isinstance(arg, (Message, CallbackQuery))), None)

        try:
            return await func(*args, **kwargs)
        except TelegramBadRequest as e:
            # Old inline buttons (e.g. a stale reset confirmation)
            if "query is too old" in str(e).lower():
                logger.debug(f"Ignoring old callback query in {func.__name__}")
                return None
            raise
        except Exception as e:
            user_id, chat_id = _update_origin(update)
            logger.exception(
                f"Handler error in {func.__name__}: {e}",
                extra={"user_id": user_id, "chat_id": chat_id, "handler": func.__name__},
            )

            error_msg = error_message_for(e)
            try:
                if isinstance(update, Message):
                    await update.reply(error_msg)
                elif isinstance(update, CallbackQuery):
                    await update.answer(error_msg, show_alert=True)
            except Exception:
                logger.exception(f"Failed to send error message to user {user_id}")

            return None

    return wrapper

def log_command(command: str) -> Callable:
    """Decorator to log command usage.

    Args:
        command: The command name (e.g., "/won", "/elo")
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            message = next((arg for arg in args if isinstance(arg, Message)), None)
            if message is not None:
                user_id, chat_id = _update_origin(message)
                logger.info(f"Command {command} from user {user_id} in chat {chat_id}: {message.text!r}")

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def log_callback(action: str) -> Callable:
    """Decorator to log callback query actions."""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            callback = next((arg for arg in args if isinstance(arg, CallbackQuery)), None)
            if callback is not None:
                user_id, chat_id = _update_origin(callback)
                logger.info(f"Callback {action} from user {user_id} in chat {chat_id}")

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def validate_message_user(message: Message) -> bool:
    """Check if message has valid from_user."""
    return message.from_user is not None and message.from_user.id is not None


def validate_callback_message(callback: CallbackQuery) -> bool:
    """Check if callback query has valid message."""
    return callback.message is not None


def validate_reply_message(message: Message) -> bool:
    """Check if message is a valid reply with target user.

    Args:
        message: The Telegram message

    Returns:
        True if reply_to_message exists with valid from_user
    """
    return (
        message.reply_to_message is not None
        and message.reply_to_message.from_user is not None
        and message.reply_to_message.from_user.id is not None
    )


def get_display_name(user: types.User | None) -> str:
    """Get display name for a Telegram user.

    Returns:
        Display name (full name or username or "Unknown")
    """
    if user is None:
        return "Unknown"

    if user.full_name:
        return user.full_name
    if user.username:
        return f"@{user.username}"
    return f"User {user.id}"


def get_chat_title(message: Message) -> str:
    """Club name for a chat: the group title, or the user's name in private chats."""
    if message.chat.title:
        return message.chat.title
    return get_display_name(message.from_user)


def parse_limit(text: str | None, default: int, maximum: int) -> int:
    """Parse an optional positive count argument from a command.

    Falls back to the default for missing or invalid values and caps the
    result at the maximum.
    """
    if not text:
        return default

    parts = text.split(maxsplit=1)
    if len(parts) < 2:
        return default

    try:
        value = int(parts[1].strip())
    except ValueError:
        return default

    if value <= 0:
        return default
    return min(value, maximum)
