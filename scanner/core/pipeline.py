"""Scan orchestration — validate, reconcile, analyze holders, score.

Each scan walks a fixed sequence of states:

    UNVALIDATED -> VALIDATED -> PROFILE_RESOLVED
        -> SIGNALS_RESOLVED -> SCORED
        -> FAILED_NO_SECURITY_DATA (EVM only, terminal)
"""

from enum import Enum

from loguru import logger

from scanner.core.errors import (
    InternalFailureError,
    ScanError,
    SecurityDataUnavailableError,
)
from scanner.core.holders import analyze_holders
from scanner.core.reconcile import Providers, reconcile
from scanner.core.scoring import compute_risk
from scanner.core.validator import require_valid_address
from scanner.models.token import Network, ScanResult
from scanner.providers.dexscreener.client import DexScreenerClient
from scanner.providers.dexscreener.models import DexScreenerPair
from scanner.providers.explorer.client import ExplorerClient
from scanner.providers.goplus.client import GoPlusClient
from scanner.providers.result import Lookup
from scanner.providers.solana.mint import SolanaRpcClient

EXPLORER_URLS = {
    Network.ETHEREUM: "https://etherscan.io/token/{address}",
    Network.BSC: "https://bscscan.com/token/{address}",
    Network.POLYGON: "https://polygonscan.com/token/{address}",
    Network.SOLANA: "https://solscan.io/token/{address}",
}


class ScanState(str, Enum):
    UNVALIDATED = "unvalidated"
    VALIDATED = "validated"
    PROFILE_RESOLVED = "profile_resolved"
    SIGNALS_RESOLVED = "signals_resolved"
    FAILED_NO_SECURITY_DATA = "failed_no_security_data"
    SCORED = "scored"


def explorer_url(network: Network, address: str) -> str:
    return EXPLORER_URLS[network].format(address=address)


class ScanRun:
    """State tracker for a single scan."""

    def __init__(self, network: str, address: str) -> None:
        self.network = network
        self.address = address
        self.state = ScanState.UNVALIDATED
        self.history: list[ScanState] = [self.state]

    def advance(self, state: ScanState) -> None:
        self.state = state
        self.history.append(state)
        logger.debug(f"[SCAN] {self.address[:10]} -> {state.value}")


class TokenScanner:
    """Entry point for token scans. Providers are long-lived and shared."""

    def __init__(self, providers: Providers) -> None:
        self.providers = providers

    async def close(self) -> None:
        await self.providers.close()

    async def scan(self, network: str | Network, address: str) -> ScanResult:
        run = ScanRun(str(getattr(network, "value", network)), address)
        return await self.run(run)

    async def run(self, run: ScanRun) -> ScanResult:
        net = Network.parse(run.network)
        address = require_valid_address(net, run.address)
        run.advance(ScanState.VALIDATED)
        logger.info(f"[SCAN] [{net.value.upper()}] {address[:8]}...")

        try:
            merged = await reconcile(self.providers, net, address)
        except SecurityDataUnavailableError:
            run.advance(ScanState.FAILED_NO_SECURITY_DATA)
            raise
        except ScanError:
            raise
        except Exception as e:
            logger.exception(f"[SCAN] Unexpected failure for {address[:10]}")
            raise InternalFailureError(str(e) or type(e).__name__) from e

        run.advance(ScanState.PROFILE_RESOLVED)
        run.advance(ScanState.SIGNALS_RESOLVED)

        holder_analysis = analyze_holders(merged.signals.holders)
        assessment = compute_risk(merged.signals, merged.verification, holder_analysis)
        run.advance(ScanState.SCORED)
        logger.info(
            f"[SCAN] Risk: {assessment.level.value.upper()} ({assessment.score}/100) "
            f"for {address[:10]}"
        )

        return ScanResult(
            network=net,
            address=address,
            profile=merged.profile,
            signals=merged.signals,
            verification=merged.verification,
            holder_analysis=holder_analysis,
            assessment=assessment,
            explorer_url=explorer_url(net, address),
        )

    async def market_data(self, address: str) -> Lookup[list[DexScreenerPair]]:
        return await self.providers.dexscreener.get_top_pairs(address)


_scanner_instance: TokenScanner | None = None


def build_providers() -> Providers:
    return Providers(
        explorer=ExplorerClient(),
        goplus=GoPlusClient(),
        dexscreener=DexScreenerClient(),
        solana=SolanaRpcClient(),
    )


def get_scanner() -> TokenScanner:
    """Get or create the process-wide scanner with its provider clients."""
    global _scanner_instance
    if _scanner_instance is None:
        _scanner_instance = TokenScanner(build_providers())
    return _scanner_instance


async def close_scanner() -> None:
    global _scanner_instance
    if _scanner_instance is not None:
        await _scanner_instance.close()
        _scanner_instance = None
