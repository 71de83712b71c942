"""Telegram bot lifecycle — aiogram 3.x polling mode.

Starts the bot in polling mode as an asyncio task alongside the API.
Only runs if telegram_bot_token is configured.
"""

from loguru import logger

_bot_instance = None
_dp_instance = None


def get_bot():
    """Get or create the aiogram Bot singleton."""
    global _bot_instance
    if _bot_instance is None:
        from aiogram import Bot

        from config.settings import settings

        if not settings.telegram_bot_token:
            raise RuntimeError("TELEGRAM_BOT_TOKEN not configured")
        _bot_instance = Bot(token=settings.telegram_bot_token)
    return _bot_instance


def get_dispatcher():
    """Get or create the Dispatcher singleton with handlers registered."""
    global _dp_instance
    if _dp_instance is None:
        from aiogram import Dispatcher

        from scanner.bot.handlers import router

        _dp_instance = Dispatcher()
        _dp_instance.include_router(router)
    return _dp_instance


async def run_bot() -> None:
    """Start the Telegram bot in polling mode.

    Runs indefinitely as an asyncio task launched from the entry point.
    """
    try:
        bot = get_bot()
        dp = get_dispatcher()
        logger.info("[BOT] Starting Telegram bot (polling mode)")
        await dp.start_polling(bot, close_bot_session=False)
    except RuntimeError as e:
        logger.warning(f"[BOT] Cannot start: {e}")


async def stop_bot() -> None:
    """Gracefully stop the bot."""
    global _bot_instance
    if _bot_instance:
        await _bot_instance.session.close()
        _bot_instance = None
