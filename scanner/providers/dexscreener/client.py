import asyncio

import httpx
from loguru import logger
from pydantic import ValidationError

from config.settings import settings
from scanner.providers.dexscreener.models import DexScreenerPair
from scanner.providers.rate_limiter import RateLimiter
from scanner.providers.result import Lookup

BASE_URL = "https://api.dexscreener.com"
MAX_RETRIES = 2
RETRY_DELAYS = [1.0, 2.0]


class DexScreenerClient:
    """Async REST client for DexScreener public API (no auth required)."""

    def __init__(self, *, timeout: float | None = None, max_rps: float | None = None) -> None:
        self._client = httpx.AsyncClient(
            base_url=BASE_URL,
            timeout=timeout or settings.dexscreener_timeout_sec,
            headers={"Accept": "application/json", "User-Agent": settings.user_agent},
        )
        self._rate_limiter = RateLimiter(max_rps or settings.dexscreener_max_rps)

    async def _get(self, path: str) -> httpx.Response:
        """GET with retry on 429 and connect errors. Timeouts are not retried."""
        for attempt in range(MAX_RETRIES):
            await self._rate_limiter.acquire()
            try:
                response = await self._client.get(path)
                if response.status_code == 429:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    retry_after = response.headers.get("Retry-After")
                    if retry_after:
                        delay = max(float(retry_after), delay)
                    logger.debug(f"[DEXSCREENER] 429 rate limited, retrying in {delay}s")
                    await asyncio.sleep(delay)
                    continue
                response.raise_for_status()
                return response
            except httpx.ConnectError as e:
                delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                logger.debug(f"[DEXSCREENER] {type(e).__name__}, retrying in {delay}s")
                await asyncio.sleep(delay)
        # Final attempt — no retry
        await self._rate_limiter.acquire()
        response = await self._client.get(path)
        response.raise_for_status()
        return response

    async def get_top_pairs(self, token_address: str) -> Lookup[list[DexScreenerPair]]:
        """All pairs for a token across chains, deepest liquidity first.

        Sort is stable, so equal liquidity keeps provider order.
        """
        try:
            response = await self._get(f"/latest/dex/tokens/{token_address}")
            data = response.json()
            raw_pairs = data.get("pairs") if isinstance(data, dict) else data
            if not raw_pairs:
                return Lookup.not_found()
            pairs = [DexScreenerPair.model_validate(p) for p in raw_pairs]
        except httpx.TimeoutException as e:
            logger.warning(f"[DEXSCREENER] Timeout for {token_address[:12]}: {e}")
            return Lookup.timeout(e)
        except (httpx.HTTPError, ValidationError, ValueError) as e:
            logger.warning(f"[DEXSCREENER] Failed for {token_address[:12]}: {e}")
            return Lookup.failed(e)

        pairs.sort(key=lambda p: p.liquidity_usd, reverse=True)
        return Lookup.found(pairs)

    async def close(self) -> None:
        await self._client.aclose()
