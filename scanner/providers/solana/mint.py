"""Direct on-chain SPL mint account reader.

Fetches the raw mint account via Solana RPC ``getAccountInfo`` and decodes
mint/freeze authorities, supply and decimals from the fixed layout.
"""

import base64
import struct
from dataclasses import dataclass

import base58
import httpx
from loguru import logger

from config.settings import settings
from scanner.providers.result import Lookup

# SPL Token mint layout: 82 bytes
# [0:36]   mintAuthorityOption (4) + mintAuthority (32)
# [36:44]  supply (u64)
# [44:45]  decimals (u8)
# [45:46]  isInitialized (bool)
# [46:82]  freezeAuthorityOption (4) + freezeAuthority (32)
SPL_MINT_SIZE = 82

# System program address, used by some mints as an explicit "none"
NULL_ADDRESS = "11111111111111111111111111111111"


class MintDecodeError(ValueError):
    pass


@dataclass(frozen=True)
class MintAccount:
    supply: str
    decimals: int
    mint_authority: str | None = None  # None = renounced
    freeze_authority: str | None = None  # None = cannot freeze

    @property
    def mint_authority_active(self) -> bool:
        return self.mint_authority is not None

    @property
    def freeze_authority_active(self) -> bool:
        return self.freeze_authority is not None


class SolanaRpcClient:
    """JSON-RPC client for mint account reads."""

    def __init__(self, rpc_url: str | None = None, *, timeout: float | None = None) -> None:
        self._rpc_url = rpc_url or settings.solana_rpc_url
        self._client = httpx.AsyncClient(timeout=timeout or settings.solana_rpc_timeout_sec)

    async def close(self) -> None:
        await self._client.aclose()

    async def get_mint_account(self, mint_address: str) -> Lookup[MintAccount]:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "getAccountInfo",
            "params": [
                mint_address,
                {"encoding": "base64", "commitment": "confirmed"},
            ],
        }

        try:
            resp = await self._client.post(self._rpc_url, json=payload)
            if resp.status_code != 200:
                return Lookup.failed(f"RPC HTTP {resp.status_code}")

            data = resp.json()
            if not isinstance(data, dict):
                return Lookup.failed(f"Unexpected RPC body: {type(data).__name__}")

            error = data.get("error")
            if error:
                message = error.get("message", error) if isinstance(error, dict) else error
                return Lookup.failed(str(message))

            result = data.get("result")
            if result is None:
                return Lookup.not_found()
            if not isinstance(result, dict):
                return Lookup.failed(f"Unexpected RPC result: {result!r:.40}")

            value = result.get("value")
            if not value:
                return Lookup.not_found()
            if not isinstance(value, dict):
                return Lookup.failed("Unexpected account value")

            raw_data = value.get("data") or []
            if not isinstance(raw_data, list) or not raw_data:
                return Lookup.failed("No account data")

            return Lookup.found(decode_mint(base64.b64decode(raw_data[0])))

        except httpx.TimeoutException as e:
            logger.warning(f"[SOLANA] RPC timeout for {mint_address[:12]}: {e}")
            return Lookup.timeout(e)
        except (
            httpx.HTTPError, MintDecodeError, ValueError,
            AttributeError, TypeError, KeyError,
        ) as e:
            logger.warning(f"[SOLANA] Mint read failed for {mint_address[:12]}: {e}")
            return Lookup.failed(e)


def _read_authority(raw: bytes, offset: int) -> str | None:
    """Decode a COption<Pubkey>: 4-byte tag then 32-byte key."""
    option = struct.unpack_from("<I", raw, offset)[0]
    if option != 1:
        return None
    authority = base58.b58encode(raw[offset + 4:offset + 36]).decode("ascii")
    return None if authority == NULL_ADDRESS else authority


def decode_mint(raw: bytes) -> MintAccount:
    """Decode raw mint account bytes (SPL Token, Token2022 prefix compatible)."""
    if len(raw) < SPL_MINT_SIZE:
        raise MintDecodeError(f"Data too short: {len(raw)} bytes")

    supply = struct.unpack_from("<Q", raw, 36)[0]
    return MintAccount(
        supply=str(supply),
        decimals=raw[44],
        mint_authority=_read_authority(raw, 0),
        freeze_authority=_read_authority(raw, 46),
    )
