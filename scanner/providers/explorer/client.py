"""Etherscan-family explorer client — token metadata and source verification."""

import asyncio

import httpx
from loguru import logger
from pydantic import ValidationError

from config.settings import settings
from scanner.models.token import UNKNOWN, Network, VerificationStatus
from scanner.providers.explorer.models import (
    ExplorerEnvelope,
    ExplorerSourceCode,
    ExplorerTokenInfo,
    TokenMetadata,
)
from scanner.providers.rate_limiter import RateLimiter
from scanner.providers.result import Lookup

EXPLORER_APIS = {
    Network.ETHEREUM: "https://api.etherscan.io/api",
    Network.BSC: "https://api.bscscan.com/api",
    Network.POLYGON: "https://api.polygonscan.com/api",
}
MAX_RETRIES = 2
RETRY_DELAYS = [1.0, 2.0]


class ExplorerClient:
    """Async client for Etherscan, BscScan and PolygonScan (same API shape)."""

    def __init__(self, *, timeout: float | None = None, max_rps: float | None = None) -> None:
        self._rate_limiter = RateLimiter(max_rps or settings.explorer_max_rps)
        self._client = httpx.AsyncClient(
            timeout=timeout or settings.explorer_timeout_sec,
            headers={"User-Agent": settings.user_agent},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _query(self, network: Network, params: dict[str, str]) -> Lookup[dict]:
        """Run one explorer query, returning the first result row."""
        url = EXPLORER_APIS[network]
        params = {**params, "apikey": settings.explorer_api_key(network.value)}

        for attempt in range(MAX_RETRIES + 1):
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.get(url, params=params)

                if resp.status_code == 429:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[EXPLORER] {network.value} rate limited, waiting {delay}s")
                    await asyncio.sleep(delay)
                    continue
                if resp.status_code != 200:
                    return Lookup.failed(f"HTTP {resp.status_code}")

                row = ExplorerEnvelope.model_validate(resp.json()).first_result
                if row is None:
                    return Lookup.not_found()
                return Lookup.found(row)

            except httpx.TimeoutException as e:
                logger.warning(f"[EXPLORER] {network.value} timeout: {e}")
                return Lookup.timeout(e)
            except httpx.ConnectError as e:
                if attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    await asyncio.sleep(delay)
                else:
                    logger.warning(f"[EXPLORER] {network.value} unreachable: {e}")
                    return Lookup.failed(e)
            except (httpx.HTTPError, ValidationError, ValueError) as e:
                logger.warning(f"[EXPLORER] {network.value} bad response: {e}")
                return Lookup.failed(e)

        return Lookup.failed("rate limited")

    async def get_token_info(self, network: Network, address: str) -> Lookup[TokenMetadata]:
        if network not in EXPLORER_APIS:
            return Lookup.not_found()

        logger.debug(f"[EXPLORER] Fetching token info from {network.value} explorer")
        lookup = await self._query(network, {
            "module": "token",
            "action": "tokeninfo",
            "contractaddress": address,
        })
        if not lookup.ok:
            return lookup

        try:
            info = ExplorerTokenInfo.model_validate(lookup.value)
        except ValidationError as e:
            return Lookup.failed(e)

        metadata = TokenMetadata(
            name=info.tokenName or info.name or UNKNOWN,
            symbol=info.symbol or UNKNOWN,
            decimals=_parse_decimals(info.divisor or info.decimals, network.default_decimals),
            total_supply=info.totalSupply or "0",
            contract_creator=info.contractCreator,
        )
        logger.info(f"[EXPLORER] Token: {metadata.name} ({metadata.symbol})")
        return Lookup.found(metadata)

    async def get_verification(self, network: Network, address: str) -> Lookup[VerificationStatus]:
        if network not in EXPLORER_APIS:
            return Lookup.not_found()

        lookup = await self._query(network, {
            "module": "contract",
            "action": "getsourcecode",
            "address": address,
        })
        if not lookup.ok:
            return lookup

        try:
            source = ExplorerSourceCode.model_validate(lookup.value)
        except ValidationError as e:
            return Lookup.failed(e)

        verified = bool(source.SourceCode)
        if verified:
            logger.debug(f"[EXPLORER] {address[:10]} contract verified")
        return Lookup.found(VerificationStatus(
            verified=verified,
            contract_name=source.ContractName or None,
            compiler_version=source.CompilerVersion or None,
            optimization=source.OptimizationUsed == "1",
            license=source.LicenseType or "None",
        ))


def _parse_decimals(raw: str | None, default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value >= 0 else default
