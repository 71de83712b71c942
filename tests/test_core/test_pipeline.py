"""Tests for scan orchestration — states, errors, end-to-end verdicts."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from scanner.core import pipeline
from scanner.core.errors import (
    InternalFailureError,
    InvalidAddressError,
    InvalidNetworkError,
    SecurityDataUnavailableError,
)
from scanner.core.pipeline import ScanRun, ScanState, TokenScanner, explorer_url
from scanner.models.token import HolderRisk, Network, RiskLevel, SecuritySignals
from scanner.providers.result import Lookup
from scanner.providers.solana.mint import SolanaRpcClient

USDT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
BONK = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"


class TestScan:
    @pytest.mark.asyncio
    async def test_evm_scan(self, scanner: TokenScanner) -> None:
        result = await scanner.scan("ethereum", USDT)

        assert result.network is Network.ETHEREUM
        assert result.profile.name == "Tether USD"
        assert result.holder_analysis.available is True
        assert result.holder_analysis.top10_percentage == 8.0
        assert result.holder_analysis.risk is HolderRisk.LOW
        assert result.assessment.score == 100
        assert result.assessment.level is RiskLevel.SAFE
        assert result.explorer_url == f"https://etherscan.io/token/{USDT}"

    @pytest.mark.asyncio
    async def test_accepts_network_enum(self, scanner: TokenScanner) -> None:
        result = await scanner.scan(Network.BSC, USDT)
        assert result.explorer_url == f"https://bscscan.com/token/{USDT}"

    @pytest.mark.asyncio
    async def test_score_always_in_range(self, scanner: TokenScanner, providers) -> None:
        providers.goplus.get_signals = AsyncMock(return_value=Lookup.found(SecuritySignals(
            honeypot=True, mintable=True, blacklistable=True, proxy=True,
            can_reclaim_ownership=True, buy_tax=0.9, sell_tax=0.9,
            holder_count=3, lp_total_supply=0.0,
        )))
        result = await scanner.scan("polygon", USDT)

        assert 0 <= result.assessment.score <= 100
        assert result.assessment.level is RiskLevel.DANGER

    @pytest.mark.asyncio
    async def test_solana_fallback_has_no_holder_data(self, scanner, providers) -> None:
        providers.goplus.get_signals = AsyncMock(return_value=Lookup.not_found())

        result = await scanner.scan("solana", BONK)

        assert result.verification is None
        assert result.holder_analysis.available is False
        assert result.holder_analysis.risk is HolderRisk.UNKNOWN
        assert result.assessment.score == 100
        assert result.explorer_url == f"https://solscan.io/token/{BONK}"

    @pytest.mark.asyncio
    async def test_solana_bad_rpc_reply_scores_unverified_owner(self, scanner, providers) -> None:
        resp = MagicMock(status_code=200)
        resp.json.return_value = {"jsonrpc": "2.0", "error": "rate limited", "id": 1}
        rpc = SolanaRpcClient("http://localhost:8899")
        rpc._client = AsyncMock()
        rpc._client.post = AsyncMock(return_value=resp)
        providers.solana = rpc
        providers.goplus.get_signals = AsyncMock(return_value=Lookup.not_found())

        result = await scanner.scan("solana", BONK)

        assert result.signals.ownership_unverified is True
        assert result.assessment.score == 95
        assert "LOW: Ownership status could not be verified" in result.assessment.risks


class TestScanErrors:
    @pytest.mark.asyncio
    async def test_unsupported_network(self, scanner, providers) -> None:
        with pytest.raises(InvalidNetworkError):
            await scanner.scan("avalanche", USDT)
        providers.explorer.get_token_info.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_address_short_circuits(self, scanner, providers) -> None:
        with pytest.raises(InvalidAddressError):
            await scanner.scan("ethereum", "0x1234")
        providers.explorer.get_token_info.assert_not_awaited()
        providers.goplus.get_signals.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_evm_address_on_solana_rejected(self, scanner) -> None:
        with pytest.raises(InvalidAddressError):
            await scanner.scan("solana", USDT)

    @pytest.mark.asyncio
    async def test_security_data_unavailable(self, scanner, providers) -> None:
        providers.goplus.get_signals = AsyncMock(return_value=Lookup.not_found())
        run = ScanRun("bsc", USDT)

        with pytest.raises(SecurityDataUnavailableError) as exc_info:
            await scanner.run(run)

        assert exc_info.value.profile.symbol == "USDT"
        assert run.state is ScanState.FAILED_NO_SECURITY_DATA

    @pytest.mark.asyncio
    async def test_unexpected_exception_wrapped(self, scanner, providers) -> None:
        providers.goplus.get_signals = AsyncMock(side_effect=KeyError("result"))

        with pytest.raises(InternalFailureError) as exc_info:
            await scanner.scan("ethereum", USDT)

        assert "result" in exc_info.value.message


class TestScanStates:
    @pytest.mark.asyncio
    async def test_success_walks_all_states(self, scanner) -> None:
        run = ScanRun("ethereum", USDT)
        await scanner.run(run)

        assert run.history == [
            ScanState.UNVALIDATED,
            ScanState.VALIDATED,
            ScanState.PROFILE_RESOLVED,
            ScanState.SIGNALS_RESOLVED,
            ScanState.SCORED,
        ]

    @pytest.mark.asyncio
    async def test_invalid_address_stays_unvalidated(self, scanner) -> None:
        run = ScanRun("ethereum", "bogus")
        with pytest.raises(InvalidAddressError):
            await scanner.run(run)
        assert run.state is ScanState.UNVALIDATED


def test_explorer_urls() -> None:
    assert explorer_url(Network.POLYGON, USDT) == f"https://polygonscan.com/token/{USDT}"
    assert explorer_url(Network.SOLANA, BONK) == f"https://solscan.io/token/{BONK}"


@pytest.mark.asyncio
async def test_market_data_delegates_to_dexscreener(scanner, providers) -> None:
    lookup = await scanner.market_data(BONK)
    assert lookup.ok
    providers.dexscreener.get_top_pairs.assert_awaited_once_with(BONK)


@pytest.mark.asyncio
async def test_scanner_singleton_lifecycle(monkeypatch, providers) -> None:
    monkeypatch.setattr(pipeline, "build_providers", lambda: providers)
    monkeypatch.setattr(pipeline, "_scanner_instance", None)

    first = pipeline.get_scanner()
    assert pipeline.get_scanner() is first

    providers.close = AsyncMock()
    await pipeline.close_scanner()
    providers.close.assert_awaited_once()
    assert pipeline._scanner_instance is None
