"""Scan failures surfaced to callers (HTTP route, bot handler)."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scanner.models.token import TokenProfile


class ScanError(Exception):
    pass


class InvalidNetworkError(ScanError):
    """Network key is not one of the supported chains."""

    def __init__(self, network: str) -> None:
        super().__init__(f"Unsupported network: {network}")
        self.network = network


class InvalidAddressError(ScanError):
    """Address failed syntactic validation for its network."""

    def __init__(self, network: str, address: str) -> None:
        super().__init__(f"Invalid {network} token address format")
        self.network = network
        self.address = address


class SecurityDataUnavailableError(ScanError):
    """EVM scan where GoPlus has no record — no verdict can be computed.

    Carries whatever profile the explorer resolved so callers can still
    show the token name.
    """

    def __init__(self, profile: TokenProfile | None = None) -> None:
        super().__init__("Unable to fetch security data")
        self.profile = profile


class InternalFailureError(ScanError):
    """Unexpected exception raised while scanning."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
