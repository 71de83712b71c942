"""Telegram bot handlers: network picker, address scan, help."""

import asyncio

from aiogram import F, Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message
from loguru import logger

from config.settings import settings
from scanner.bot.formatters import (
    BAD_ADDRESS_TEXT,
    HELP_TEXT,
    NO_NETWORK_TEXT,
    SELECT_NETWORK_TEXT,
    WELCOME_TEXT,
    format_network_selected,
    format_scan_error,
    format_scan_report,
    format_scanning,
)
from scanner.bot.keyboards import (
    NETWORK_CALLBACK_PREFIX,
    SCAN_NEW_CALLBACK,
    network_keyboard,
    result_keyboard,
    retry_keyboard,
)
from scanner.bot.sessions import SessionStore
from scanner.core.errors import InvalidNetworkError
from scanner.core.pipeline import get_scanner
from scanner.models.token import Network

router = Router()
sessions = SessionStore(ttl_sec=settings.bot_session_ttl_sec)

MIN_ADDRESS_LEN = 32


@router.message(Command("start"))
async def cmd_start(message: Message) -> None:
    await message.answer(WELCOME_TEXT, parse_mode="HTML", reply_markup=network_keyboard())


@router.message(Command("scan"))
async def cmd_scan(message: Message) -> None:
    await message.answer(SELECT_NETWORK_TEXT, parse_mode="HTML", reply_markup=network_keyboard())


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await message.answer(HELP_TEXT, parse_mode="HTML")


@router.callback_query(F.data.startswith(NETWORK_CALLBACK_PREFIX))
async def on_network_selected(callback: CallbackQuery) -> None:
    """Remember the chosen network for this chat, then ask for an address."""
    try:
        network = Network.parse(callback.data.removeprefix(NETWORK_CALLBACK_PREFIX))
    except InvalidNetworkError:
        await callback.answer("Unsupported network")
        return

    chat_id = callback.message.chat.id
    sessions.set_network(chat_id, network)
    await callback.answer()
    await callback.message.answer(format_network_selected(network), parse_mode="HTML")


@router.callback_query(F.data == SCAN_NEW_CALLBACK)
async def on_scan_new(callback: CallbackQuery) -> None:
    await callback.answer()
    await callback.message.answer(
        SELECT_NETWORK_TEXT, parse_mode="HTML", reply_markup=network_keyboard()
    )


@router.message(F.text & ~F.text.startswith("/"))
async def on_address(message: Message) -> None:
    """Scan the pasted address on the network chosen earlier."""
    chat_id = message.chat.id
    network = sessions.get_network(chat_id)
    if network is None:
        await message.answer(NO_NETWORK_TEXT, parse_mode="HTML")
        return

    address = message.text.strip()
    if len(address) < MIN_ADDRESS_LEN:
        await message.answer(BAD_ADDRESS_TEXT, parse_mode="HTML")
        return

    progress = await message.answer(format_scanning(network, address), parse_mode="HTML")
    logger.info(f"[BOT] Scan {network.value} {address[:10]} for chat {chat_id}")

    scanner = get_scanner()
    scan_outcome, market = await asyncio.gather(
        scanner.scan(network, address),
        scanner.market_data(address),
        return_exceptions=True,
    )

    try:
        await progress.delete()
    except TelegramBadRequest as e:
        logger.debug(f"[BOT] Could not delete progress message: {e}")

    if isinstance(scan_outcome, Exception):
        logger.warning(f"[BOT] Scan failed for {address[:10]}: {scan_outcome}")
        await message.answer(
            format_scan_error(scan_outcome, network),
            parse_mode="HTML",
            reply_markup=retry_keyboard(network),
        )
        return

    main_pair = None
    if not isinstance(market, Exception) and market.ok and market.value:
        main_pair = market.value[0]

    await message.answer(
        format_scan_report(scan_outcome, main_pair),
        parse_mode="HTML",
        reply_markup=result_keyboard(
            scan_outcome.explorer_url, main_pair.url if main_pair else None
        ),
        disable_web_page_preview=True,
    )
    sessions.clear(chat_id)
