"""Inline keyboards for network selection and scan results."""

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from scanner.models.token import Network

NETWORK_EMOJI = {
    Network.ETHEREUM: "🔷",
    Network.BSC: "🟡",
    Network.POLYGON: "🟣",
    Network.SOLANA: "🟢",
}
NETWORK_LABELS = {
    Network.ETHEREUM: "Ethereum",
    Network.BSC: "BSC",
    Network.POLYGON: "Polygon",
    Network.SOLANA: "Solana",
}

NETWORK_CALLBACK_PREFIX = "network_"
SCAN_NEW_CALLBACK = "scan_new"


def _network_button(network: Network) -> InlineKeyboardButton:
    return InlineKeyboardButton(
        text=f"{NETWORK_EMOJI[network]} {NETWORK_LABELS[network]}",
        callback_data=f"{NETWORK_CALLBACK_PREFIX}{network.value}",
    )


def network_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [_network_button(Network.ETHEREUM), _network_button(Network.BSC)],
        [_network_button(Network.POLYGON), _network_button(Network.SOLANA)],
    ])


def result_keyboard(explorer_url: str, pair_url: str | None = None) -> InlineKeyboardMarkup:
    rows = [[InlineKeyboardButton(text="🔍 View on Explorer", url=explorer_url)]]
    if pair_url:
        rows.append([InlineKeyboardButton(text="📊 View DEX Chart", url=pair_url)])
    rows.append([InlineKeyboardButton(text="🔄 Scan Another Token", callback_data=SCAN_NEW_CALLBACK)])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def retry_keyboard(network: Network) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(
            text="🔄 Try Again",
            callback_data=f"{NETWORK_CALLBACK_PREFIX}{network.value}",
        )],
        [InlineKeyboardButton(text="🏠 Select Network", callback_data=SCAN_NEW_CALLBACK)],
    ])
