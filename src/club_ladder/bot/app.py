"""Bot application setup and dispatcher."""

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from club_ladder.config import get_settings
from club_ladder.services.wiring import RankingServices, create_ranking_services
from club_ladder.utils.rating import RatingParameters


def create_bot() -> Bot:
    """Create and configure the Telegram bot instance."""
    settings = get_settings()
    return Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )


def create_services() -> RankingServices:
    """Create the ranking services on the application database."""
    from club_ladder.db.engine import async_session_factory

    params = RatingParameters.from_settings(get_settings())
    return create_ranking_services(async_session_factory, params)


def create_dispatcher(services: RankingServices | None = None) -> Dispatcher:
    """Create and configure the dispatcher with routers.

    The ranking services are passed to handlers as the ``services`` argument.
    """
    from club_ladder.bot.handlers import admin_router, common_router, matches_router, rankings_router

    dp = Dispatcher(services=services or create_services())
    dp.include_router(common_router)
    dp.include_router(matches_router)
    dp.include_router(rankings_router)
    dp.include_router(admin_router)
    return dp
