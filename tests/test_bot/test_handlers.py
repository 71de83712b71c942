"""Tests for bot handlers with stubbed Telegram objects."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from scanner.bot import handlers
from scanner.bot.keyboards import network_keyboard
from scanner.bot.sessions import SessionStore
from scanner.models.token import Network
from scanner.providers.result import Lookup

USDT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"


def _message(text: str, chat_id: int = 42) -> MagicMock:
    progress = MagicMock()
    progress.delete = AsyncMock()
    message = MagicMock()
    message.text = text
    message.chat.id = chat_id
    message.answer = AsyncMock(return_value=progress)
    return message


@pytest.fixture(autouse=True)
def clean_sessions():
    handlers.sessions.clear(42)
    yield
    handlers.sessions.clear(42)


def test_network_keyboard_layout() -> None:
    rows = network_keyboard().inline_keyboard
    assert [[b.callback_data for b in row] for row in rows] == [
        ["network_ethereum", "network_bsc"],
        ["network_polygon", "network_solana"],
    ]


@pytest.mark.asyncio
async def test_network_selection_stored() -> None:
    callback = MagicMock()
    callback.data = "network_bsc"
    callback.answer = AsyncMock()
    callback.message.chat.id = 42
    callback.message.answer = AsyncMock()

    await handlers.on_network_selected(callback)

    assert handlers.sessions.get_network(42) is Network.BSC
    assert "BSC Network Selected" in callback.message.answer.call_args.args[0]


@pytest.mark.asyncio
async def test_network_selection_drops_abandoned_chats(monkeypatch) -> None:
    now = [0.0]
    store = SessionStore(ttl_sec=900, clock=lambda: now[0])
    monkeypatch.setattr(handlers, "sessions", store)
    for chat_id in (1, 2, 3):
        store.set_network(chat_id, Network.ETHEREUM)

    now[0] = 901.0
    callback = MagicMock()
    callback.data = "network_solana"
    callback.answer = AsyncMock()
    callback.message.chat.id = 42
    callback.message.answer = AsyncMock()

    await handlers.on_network_selected(callback)

    assert len(store) == 1
    assert store.get_network(42) is Network.SOLANA


@pytest.mark.asyncio
async def test_unknown_network_callback() -> None:
    callback = MagicMock()
    callback.data = "network_tron"
    callback.answer = AsyncMock()
    callback.message.chat.id = 42

    await handlers.on_network_selected(callback)

    callback.answer.assert_awaited_once_with("Unsupported network")
    assert handlers.sessions.get_network(42) is None


@pytest.mark.asyncio
async def test_address_without_network() -> None:
    message = _message(USDT)
    await handlers.on_address(message)
    assert "select a network first" in message.answer.call_args.args[0]


@pytest.mark.asyncio
async def test_short_address_rejected() -> None:
    handlers.sessions.set_network(42, Network.ETHEREUM)
    message = _message("0x1234")
    await handlers.on_address(message)
    assert "Invalid address format" in message.answer.call_args.args[0]


@pytest.mark.asyncio
async def test_scan_report_sent(scanner) -> None:
    handlers.sessions.set_network(42, Network.ETHEREUM)
    message = _message(f"  {USDT}  ")

    with patch.object(handlers, "get_scanner", return_value=scanner):
        await handlers.on_address(message)

    report = message.answer.call_args.args[0]
    assert "Tether USD (USDT)" in report
    assert "100/100" in report
    keyboard = message.answer.call_args.kwargs["reply_markup"]
    assert keyboard.inline_keyboard[0][0].url == f"https://etherscan.io/token/{USDT}"
    assert keyboard.inline_keyboard[-1][0].callback_data == "scan_new"
    # Session is consumed by a successful scan
    assert handlers.sessions.get_network(42) is None


@pytest.mark.asyncio
async def test_scan_failure_offers_retry(scanner, providers) -> None:
    providers.goplus.get_signals = AsyncMock(return_value=Lookup.not_found())
    handlers.sessions.set_network(42, Network.POLYGON)
    message = _message(USDT)

    with patch.object(handlers, "get_scanner", return_value=scanner):
        await handlers.on_address(message)

    assert "Token Not Found" in message.answer.call_args.args[0]
    keyboard = message.answer.call_args.kwargs["reply_markup"]
    assert keyboard.inline_keyboard[0][0].callback_data == "network_polygon"
    assert handlers.sessions.get_network(42) is Network.POLYGON
