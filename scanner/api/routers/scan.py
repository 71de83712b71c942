"""Token scan endpoints — full risk scan and DEX market summary."""

from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from config.settings import settings
from scanner.api.dependencies import get_scanner
from scanner.api.limiter import limiter
from scanner.api.schemas import market_response, scan_response, token_info_out
from scanner.core.errors import (
    InternalFailureError,
    InvalidAddressError,
    InvalidNetworkError,
    SecurityDataUnavailableError,
)
from scanner.core.pipeline import TokenScanner
from scanner.core.validator import detect_network_family
from scanner.providers.result import LookupStatus

router = APIRouter(prefix="/api", tags=["scan"])


def _error(code: int, error: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=code, content={"error": error, **extra})


@router.get("/check-token/{network}/{address}")
@limiter.limit(settings.api_rate_limit)
async def check_token(
    request: Request,
    network: str,
    address: str,
    scanner: TokenScanner = Depends(get_scanner),
) -> Any:
    """Validate, reconcile providers and score one token."""
    try:
        result = await scanner.scan(network, address)
    except InvalidNetworkError:
        return _error(status.HTTP_400_BAD_REQUEST, "Unsupported network")
    except InvalidAddressError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except SecurityDataUnavailableError as e:
        extra = {}
        if e.profile is not None:
            extra["tokenInfo"] = token_info_out(e.profile).model_dump()
        return _error(status.HTTP_404_NOT_FOUND, str(e), **extra)
    except InternalFailureError as e:
        logger.error(f"[API] Scan failed for {address[:10]} on {network}: {e.message}")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            message=e.message,
        )

    return scan_response(result).model_dump()


@router.get("/token-info/{address}")
@limiter.limit(settings.api_rate_limit)
async def token_info(
    request: Request,
    address: str,
    scanner: TokenScanner = Depends(get_scanner),
) -> Any:
    """DexScreener market data across chains, deepest pools first."""
    if detect_network_family(address) is None:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid token address")

    lookup = await scanner.market_data(address)
    if lookup.status is LookupStatus.NOT_FOUND or (lookup.ok and not lookup.value):
        return _error(status.HTTP_404_NOT_FOUND, "No trading pairs found")
    if not lookup.ok:
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch market data",
            message=lookup.error,
        )

    return market_response(lookup.value)
