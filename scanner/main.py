"""Entry point: scanner HTTP API plus optional Telegram bot."""

import asyncio
import signal

from loguru import logger

from config.settings import settings
from scanner.api.server import run_api_server
from scanner.bot.bot import run_bot, stop_bot
from scanner.core.pipeline import close_scanner
from scanner.utils.logger import setup_logger


async def main() -> None:
    setup_logger(level=settings.log_level, json_logs=settings.json_logs)
    logger.info("Starting token safety scanner...")

    # Graceful shutdown on SIGINT/SIGTERM
    loop = asyncio.get_running_loop()
    shutdown_event = asyncio.Event()

    def _signal_handler() -> None:
        logger.info("Shutdown signal received")
        shutdown_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _signal_handler)

    tasks = [asyncio.create_task(run_api_server())]
    if settings.enable_bot and settings.telegram_bot_token:
        tasks.append(asyncio.create_task(run_bot()))
    else:
        logger.info("[BOT] No TELEGRAM_BOT_TOKEN found, skipping bot setup")

    # Wait for the API to exit or a shutdown signal
    done, pending = await asyncio.wait(
        [tasks[0], asyncio.create_task(shutdown_event.wait())],
        return_when=asyncio.FIRST_COMPLETED,
    )

    for task in [*pending, *tasks[1:]]:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    await stop_bot()
    await close_scanner()
    logger.info("Shutdown complete")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
