"""Entry point for running the Club Ladder bot."""

import asyncio
import logging
import sys

from club_ladder.bot.app import create_bot, create_dispatcher
from club_ladder.config import get_settings
from club_ladder.utils.rating import RatingParameters

logger = logging.getLogger("club_ladder")


async def main() -> None:
    """Configure logging and poll Telegram until interrupted."""
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # aiogram logs every update at INFO
    logging.getLogger("aiogram.event").setLevel(logging.WARNING)

    params = RatingParameters.from_settings(settings)
    logger.info(
        f"Rating parameters: initial ELO {params.initial_elo}, K {params.k_factor}, "
        f"tournament x{params.tournament_multiplier}"
    )

    bot = create_bot()
    dp = create_dispatcher()

    logger.info("Starting Club Ladder bot...")

    try:
        await dp.start_polling(bot)
    finally:
        await bot.session.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(0)
