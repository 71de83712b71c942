"""Tests for the Etherscan-family explorer client."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from scanner.models.token import Network
from scanner.providers.explorer.client import ExplorerClient, _parse_decimals
from scanner.providers.result import LookupStatus

USDT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"


def _client(payload: dict, status_code: int = 200) -> ExplorerClient:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    client = ExplorerClient(max_rps=100.0)
    client._client = AsyncMock()
    client._client.get = AsyncMock(return_value=resp)
    return client


class TestTokenInfo:
    @pytest.mark.asyncio
    async def test_metadata_parsed(self) -> None:
        client = _client({
            "status": "1",
            "message": "OK",
            "result": [{
                "contractAddress": USDT,
                "tokenName": "Tether USD",
                "symbol": "USDT",
                "divisor": "6",
                "totalSupply": "39823315849942740",
            }],
        })

        lookup = await client.get_token_info(Network.ETHEREUM, USDT)

        assert lookup.ok
        assert lookup.value.name == "Tether USD"
        assert lookup.value.decimals == 6
        assert lookup.value.total_supply == "39823315849942740"
        params = client._client.get.call_args.kwargs["params"]
        assert params["module"] == "token"
        assert params["action"] == "tokeninfo"
        assert params["contractaddress"] == USDT

    @pytest.mark.asyncio
    async def test_uses_network_endpoint(self) -> None:
        client = _client({"status": "0", "result": []})
        await client.get_token_info(Network.BSC, USDT)
        assert client._client.get.call_args.args[0] == "https://api.bscscan.com/api"

    @pytest.mark.asyncio
    async def test_error_status_is_not_found(self) -> None:
        client = _client({"status": "0", "message": "NOTOK", "result": "Invalid API Key"})
        lookup = await client.get_token_info(Network.ETHEREUM, USDT)
        assert lookup.status is LookupStatus.NOT_FOUND

    @pytest.mark.asyncio
    async def test_http_failure(self) -> None:
        client = _client({}, status_code=503)
        lookup = await client.get_token_info(Network.POLYGON, USDT)
        assert lookup.status is LookupStatus.ERROR

    @pytest.mark.asyncio
    async def test_solana_not_supported(self) -> None:
        client = _client({})
        lookup = await client.get_token_info(Network.SOLANA, "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263")
        assert lookup.status is LookupStatus.NOT_FOUND
        client._client.get.assert_not_awaited()


class TestVerification:
    @pytest.mark.asyncio
    async def test_verified_contract(self) -> None:
        client = _client({
            "status": "1",
            "result": [{
                "SourceCode": "pragma solidity ^0.4.17;",
                "ContractName": "TetherToken",
                "CompilerVersion": "v0.4.18+commit.9cf6e910",
                "OptimizationUsed": "0",
                "LicenseType": "",
            }],
        })

        lookup = await client.get_verification(Network.ETHEREUM, USDT)

        assert lookup.ok
        assert lookup.value.verified is True
        assert lookup.value.contract_name == "TetherToken"
        assert lookup.value.optimization is False
        assert lookup.value.license == "None"

    @pytest.mark.asyncio
    async def test_unverified_contract(self) -> None:
        client = _client({
            "status": "1",
            "result": [{"SourceCode": "", "ContractName": "", "ABI": "Contract source code not verified"}],
        })

        lookup = await client.get_verification(Network.ETHEREUM, USDT)

        assert lookup.ok
        assert lookup.value.verified is False
        assert lookup.value.contract_name is None


def test_parse_decimals() -> None:
    assert _parse_decimals("6", 18) == 6
    assert _parse_decimals(None, 18) == 18
    assert _parse_decimals("abc", 18) == 18
    assert _parse_decimals("-1", 9) == 9
