"""Format scan results into Telegram HTML messages."""

import html
from decimal import Decimal

from scanner.bot.keyboards import NETWORK_EMOJI
from scanner.core.errors import (
    InvalidAddressError,
    InvalidNetworkError,
    SecurityDataUnavailableError,
)
from scanner.models.token import UNKNOWN, HolderRisk, Network, RiskLevel, ScanResult
from scanner.providers.dexscreener.models import DexScreenerPair

DIVIDER = "━━━━━━━━━━━━━━━━━━━━"
MAX_RISKS_SHOWN = 4

LEVEL_EMOJI = {
    RiskLevel.SAFE: "✅",
    RiskLevel.WARNING: "⚠️",
    RiskLevel.DANGER: "🚨",
}
HOLDER_EMOJI = {
    HolderRisk.HIGH: "🚨",
    HolderRisk.MEDIUM: "⚠️",
    HolderRisk.LOW: "✅",
}

WELCOME_TEXT = (
    "🛡️ <b>Token Safety Scanner Bot</b>\n\n"
    "✨ <b>Professional Token Analysis</b>\n"
    f"{DIVIDER}\n\n"
    "🔍 <b>We Check:</b>\n"
    "• Real-time Price &amp; Market Data\n"
    "• Honeypot Detection\n"
    "• Holder Concentration Risk\n"
    "• Ownership &amp; Renouncement\n"
    "• Contract Verification\n"
    "• Tax Rates &amp; Liquidity\n\n"
    "👇 <b>Select Network to Scan:</b>"
)

SELECT_NETWORK_TEXT = (
    f"🌐 <b>Select Blockchain Network</b>\n{DIVIDER}\n\nChoose the network:"
)

HELP_TEXT = (
    "📖 <b>HOW TO USE</b>\n"
    f"{DIVIDER}\n\n"
    "1️⃣ Send /scan or /start\n"
    "2️⃣ Click network button\n"
    "3️⃣ Paste contract address\n"
    "4️⃣ Get instant analysis!\n\n"
    "🌐 <b>SUPPORTED NETWORKS</b>\n"
    "• 🔷 Ethereum\n"
    "• 🟡 Binance Smart Chain\n"
    "• 🟣 Polygon\n"
    "• 🟢 Solana\n\n"
    "🔍 <b>WE ANALYZE</b>\n"
    "• 💰 Real-time Price\n"
    "• 📊 24h Volume &amp; Liquidity\n"
    "• 🛡️ Honeypot Detection\n"
    "• 👥 Holder Concentration\n"
    "• 🔒 Ownership Status\n"
    "• ✅ Contract Verification\n"
    "• 💸 Buy/Sell Tax Rates"
)

NO_NETWORK_TEXT = "⚠️ <b>Please select a network first!</b>\n\nUse /scan to start."
BAD_ADDRESS_TEXT = "❌ <b>Invalid address format</b>\n\nPlease send a valid contract address."


def _to_float(value: str | float | Decimal | None) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def format_number(value: str | float | Decimal | None) -> str:
    """Compact number: 1.23B / 4.56M / 7.89K, more decimals for small values."""
    n = _to_float(value)
    if not n:
        return "0"
    if n >= 1e9:
        return f"{n / 1e9:.2f}B"
    if n >= 1e6:
        return f"{n / 1e6:.2f}M"
    if n >= 1e3:
        return f"{n / 1e3:.2f}K"
    if n < 0.000001:
        return f"{n:.2e}"
    if n < 0.01:
        return f"{n:.6f}"
    if n < 1:
        return f"{n:.4f}"
    return f"{n:.2f}"


def format_price(value: str | float | Decimal | None) -> str:
    p = _to_float(value)
    if not p:
        return "N/A"
    if p < 0.000001:
        return f"${p:.2e}"
    if p < 0.01:
        return f"${p:.8f}"
    if p < 1:
        return f"${p:.6f}"
    if p < 100:
        return f"${p:.4f}"
    return f"${p:.2f}"


def format_percentage(value: str | float | Decimal | None) -> str:
    p = _to_float(value)
    if p is None:
        return "N/A"
    sign = "📈" if p >= 0 else "📉"
    return f"{sign} {p:+.2f}%"


def format_network_selected(network: Network) -> str:
    return (
        f"{NETWORK_EMOJI[network]} <b>{network.value.upper()} Network Selected</b>\n"
        f"{DIVIDER}\n\n"
        "📋 <b>Send Token Contract Address</b>\n\n"
        "✏️ Example:\n"
        "<code>0xdAC17F958D2ee523a2206206994597C13D831ec7</code>"
    )


def format_scanning(network: Network, address: str) -> str:
    short = html.escape(f"{address[:10]}...{address[-8:]}")
    return (
        f"🔍 <b>Scanning Token...</b>\n{DIVIDER}\n\n"
        f"Network: <b>{network.value.upper()}</b>\n"
        f"Address: <code>{short}</code>\n\n"
        "⏳ Analyzing security &amp; fetching market data..."
    )


def _market_section(pair: DexScreenerPair) -> list[str]:
    lines = ["💰 <b>MARKET DATA</b>", f"Price: <b>{format_price(pair.priceUsd)}</b>"]
    if pair.priceChange and pair.priceChange.h24 is not None:
        lines.append(f"24h Change: {format_percentage(pair.priceChange.h24)}")
    if pair.liquidity and pair.liquidity.usd:
        lines.append(f"Liquidity: <b>${format_number(pair.liquidity.usd)}</b>")
    if pair.volume and pair.volume.h24:
        lines.append(f"24h Volume: <b>${format_number(pair.volume.h24)}</b>")
    lines.append("")
    return lines


def format_scan_report(result: ScanResult, main_pair: DexScreenerPair | None = None) -> str:
    """Full scan report: market block (if any), score, holders, top risks."""
    assessment = result.assessment
    name = html.escape(result.profile.name)
    symbol = html.escape(result.profile.symbol)

    lines = [f"{LEVEL_EMOJI[assessment.level]} <b>{name} ({symbol})</b>", DIVIDER, ""]

    if main_pair is not None:
        lines.extend(_market_section(main_pair))

    lines.append("🛡️ <b>SECURITY ANALYSIS</b>")
    lines.append(f"Network: <b>{result.network.value.upper()}</b>")
    lines.append(
        f"Risk Score: <b>{assessment.score}/100</b> (<b>{assessment.level.value.upper()}</b>)"
    )

    holders = result.holder_analysis
    if holders.available:
        emoji = HOLDER_EMOJI.get(holders.risk, "✅")
        lines.append(f"{emoji} Top 10 Holders: <b>{holders.top10_percentage}%</b>")

    if assessment.risks:
        lines.append("")
        lines.append("⚠️ <b>KEY RISKS:</b>")
        for risk in assessment.risks[:MAX_RISKS_SHOWN]:
            lines.append(f"• {html.escape(risk)}")

    lines.append("")
    lines.append(DIVIDER)
    return "\n".join(lines)


def format_scan_error(error: Exception, network: Network) -> str:
    """User-facing failure message by error kind."""
    lines = ["❌ <b>Scan Failed</b>", DIVIDER, ""]

    if isinstance(error, (InvalidAddressError, InvalidNetworkError)):
        lines.append("❗ <b>Invalid Request</b>\n")
        lines.append(f"• Check address is valid for <b>{network.value.upper()}</b>")
        lines.append("• Verify token exists on this network")
    elif isinstance(error, SecurityDataUnavailableError):
        lines.append("⚠️ <b>Token Not Found</b>\n")
        if error.profile is not None and error.profile.name != UNKNOWN:
            lines.append(f"Found <b>{html.escape(error.profile.name)}</b> but no security data.\n")
        lines.append("This token may not be:")
        lines.append("• Listed on DEX yet")
        lines.append("• Deployed on this network")
    elif isinstance(error, TimeoutError):
        lines.append("⏱️ <b>Request Timeout</b>\n")
        lines.append("Server response took too long.\nPlease try again.")
    else:
        lines.append("🔧 <b>Server Error</b>\n")
        lines.append("Our servers are busy.\nTry again in a moment.")

    return "\n".join(lines)
