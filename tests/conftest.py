"""Shared test fixtures — provider stubs and sample records."""

from unittest.mock import AsyncMock

import pytest

from scanner.core.pipeline import TokenScanner
from scanner.core.reconcile import Providers
from scanner.models.token import HolderEntry, SecuritySignals, VerificationStatus
from scanner.providers.dexscreener.models import DexScreenerPair
from scanner.providers.explorer.models import TokenMetadata
from scanner.providers.result import Lookup
from scanner.providers.solana.mint import MintAccount

USDT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
BONK = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"
MINT_AUTHORITY = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"


def make_pair(name: str, symbol: str, liquidity: float, **extra) -> DexScreenerPair:
    return DexScreenerPair.model_validate({
        "chainId": extra.pop("chainId", "solana"),
        "dexId": "raydium",
        "pairAddress": f"pair_{symbol}_{liquidity}",
        "baseToken": {"address": BONK, "name": name, "symbol": symbol},
        "quoteToken": {"address": "So11111111111111111111111111111111111111112", "symbol": "SOL"},
        "priceUsd": "0.00002",
        "liquidity": {"usd": liquidity},
        "volume": {"h24": 150000},
        "priceChange": {"h24": -3.5},
        "url": f"https://dexscreener.com/solana/pair_{symbol}",
        **extra,
    })


@pytest.fixture
def evm_signals() -> SecuritySignals:
    return SecuritySignals(
        owner_address="0x0000000000000000000000000000000000000000",
        token_name="Tether USD",
        token_symbol="USDT",
        holder_count=5000,
        lp_total_supply=1200.0,
        holders=(
            HolderEntry(address="0xaaa", balance="100", percent=0.05),
            HolderEntry(address="0xbbb", balance="50", percent=0.03),
        ),
    )


@pytest.fixture
def token_metadata() -> TokenMetadata:
    return TokenMetadata(
        name="Tether USD", symbol="USDT", decimals=6, total_supply="1000000000"
    )


@pytest.fixture
def providers(token_metadata, evm_signals) -> Providers:
    """Providers where every lookup succeeds with sample data."""
    explorer = AsyncMock()
    explorer.get_token_info = AsyncMock(return_value=Lookup.found(token_metadata))
    explorer.get_verification = AsyncMock(return_value=Lookup.found(
        VerificationStatus(verified=True, contract_name="TetherToken", license="None")
    ))
    goplus = AsyncMock()
    goplus.get_signals = AsyncMock(return_value=Lookup.found(evm_signals))
    dexscreener = AsyncMock()
    dexscreener.get_top_pairs = AsyncMock(return_value=Lookup.found([
        make_pair("Bonk", "Bonk", 900000.0),
        make_pair("Bonk Wrapped", "wBONK", 1000.0),
    ]))
    solana = AsyncMock()
    solana.get_mint_account = AsyncMock(return_value=Lookup.found(
        MintAccount(supply="88000000000000000", decimals=5)
    ))
    return Providers(explorer=explorer, goplus=goplus, dexscreener=dexscreener, solana=solana)


@pytest.fixture
def scanner(providers) -> TokenScanner:
    return TokenScanner(providers)
