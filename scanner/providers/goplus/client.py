"""GoPlus Security API client — token security heuristics for EVM and Solana."""

import asyncio
from typing import Any

import httpx
from loguru import logger

from config.settings import settings
from scanner.models.token import HolderEntry, Network, SecuritySignals
from scanner.providers.rate_limiter import RateLimiter
from scanner.providers.result import Lookup

MAX_RETRIES = 2
RETRY_DELAYS = [1.0, 3.0]


class GoPlusClient:
    """Async HTTP client for GoPlus Security API (free, no key)."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        max_rps: float | None = None,
    ) -> None:
        self._base_url = (base_url or settings.goplus_base_url).rstrip("/")
        self._rate_limiter = RateLimiter(max_rps or settings.goplus_max_rps)
        self._client = httpx.AsyncClient(
            timeout=timeout or settings.goplus_timeout_sec,
            headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    def _endpoint(self, network: Network, address: str) -> tuple[str, str]:
        """Return (url, result key). EVM records are keyed by lower-cased address."""
        if network.is_evm:
            key = address.lower()
            return f"{self._base_url}/token_security/{network.chain_id}?contract_addresses={key}", key
        return f"{self._base_url}/solana/token_security?contract_addresses={address}", address

    async def get_signals(self, network: Network, address: str) -> Lookup[SecuritySignals]:
        """Fetch the security record for a token."""
        url, key = self._endpoint(network, address)

        for attempt in range(MAX_RETRIES + 1):
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.get(url)

                if resp.status_code == 429:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[GOPLUS] Rate limited, waiting {delay}s")
                    await asyncio.sleep(delay)
                    continue

                if resp.status_code != 200:
                    logger.debug(f"[GOPLUS] HTTP {resp.status_code} for {address[:12]}")
                    return Lookup.failed(f"HTTP {resp.status_code}")

                record = _extract_record(resp.json(), key)
                if record is None:
                    logger.debug(f"[GOPLUS] No record for {address[:12]} on {network.value}")
                    return Lookup.not_found()
                if network.is_evm:
                    return Lookup.found(_parse_evm_record(record))
                return Lookup.found(_parse_solana_record(record))

            except httpx.TimeoutException as e:
                logger.warning(f"[GOPLUS] Timeout for {address[:12]}: {e}")
                return Lookup.timeout(e)
            except httpx.ConnectError as e:
                if attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[GOPLUS] {type(e).__name__}, retry in {delay}s")
                    await asyncio.sleep(delay)
                else:
                    logger.warning(f"[GOPLUS] Failed after retries for {address[:12]}: {e}")
                    return Lookup.failed(e)
            except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
                logger.warning(f"[GOPLUS] Bad response for {address[:12]}: {e}")
                return Lookup.failed(e)

        return Lookup.failed("rate limited")


def _parse_bool(val: Any) -> bool:
    """Parse GoPlus '0'/'1' flag. Missing means not set."""
    if isinstance(val, bool):
        return val
    if val is None or val == "":
        return False
    return str(val) == "1"


def _parse_float(val: Any) -> float | None:
    if val is None or val == "":
        return None
    try:
        return float(val)
    except (ValueError, TypeError):
        return None


def _parse_int(val: Any) -> int | None:
    number = _parse_float(val)
    return int(number) if number is not None else None


def _parse_tax(val: Any) -> float:
    """GoPlus reports taxes as fractions (0.05 = 5%)."""
    return _parse_float(val) or 0.0


def _parse_owner(val: Any) -> str | None:
    if not val:
        return None
    return str(val)


def _parse_holders(raw: Any) -> tuple[HolderEntry, ...]:
    if not isinstance(raw, list):
        return ()
    holders = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("address"):
            continue
        holders.append(HolderEntry(
            address=item["address"],
            balance=str(item.get("balance") or "0"),
            percent=_parse_float(item.get("percent")) or 0.0,
            tag=item.get("tag") or None,
            is_contract=_parse_bool(item.get("is_contract")),
            is_locked=_parse_bool(item.get("is_locked")),
        ))
    return tuple(holders)


def _extract_record(data: dict, key: str) -> dict | None:
    result = data.get("result") or {}
    if not isinstance(result, dict):
        return None
    record = result.get(key) or result.get(key.lower())
    return record if isinstance(record, dict) and record else None


def _parse_evm_record(record: dict) -> SecuritySignals:
    return SecuritySignals(
        honeypot=_parse_bool(record.get("is_honeypot")),
        mintable=_parse_bool(record.get("is_mintable")),
        blacklistable=_parse_bool(record.get("is_blacklisted")),
        proxy=_parse_bool(record.get("is_proxy")),
        can_reclaim_ownership=_parse_bool(record.get("can_take_back_ownership")),
        whitelisted=_parse_bool(record.get("is_whitelisted")),
        trading_cooldown=_parse_bool(record.get("trading_cooldown")),
        tax_modifiable=_parse_bool(record.get("slippage_modifiable")),
        can_burn=_parse_bool(record.get("can_burn")),
        buy_tax=_parse_tax(record.get("buy_tax")),
        sell_tax=_parse_tax(record.get("sell_tax")),
        owner_address=_parse_owner(record.get("owner_address")),
        token_name=record.get("token_name") or None,
        token_symbol=record.get("token_symbol") or None,
        holder_count=_parse_int(record.get("holder_count")),
        lp_total_supply=_parse_float(record.get("lp_total_supply")),
        lp_holder_count=_parse_int(record.get("lp_holder_count")),
        holders=_parse_holders(record.get("holders")),
    )


def _authority_status(block: Any) -> tuple[bool, str | None]:
    """Solana records nest capabilities as {"status": "1", "authority": [...]}."""
    if not isinstance(block, dict):
        return False, None
    active = _parse_bool(block.get("status"))
    owner = None
    authorities = block.get("authority") or []
    if active and isinstance(authorities, list) and authorities:
        first = authorities[0]
        owner = first.get("address") if isinstance(first, dict) else str(first)
    return active, owner


def _parse_solana_record(record: dict) -> SecuritySignals:
    mintable, mint_owner = _authority_status(record.get("mintable"))
    freezable, _ = _authority_status(record.get("freezable"))
    metadata = record.get("metadata") or {}
    return SecuritySignals(
        mintable=mintable,
        blacklistable=freezable,
        owner_address=mint_owner,
        token_name=metadata.get("name") or None,
        token_symbol=metadata.get("symbol") or None,
        holder_count=_parse_int(record.get("holder_count")),
        holders=_parse_holders(record.get("holders")),
    )
