"""Token scan domain types — profile, signals, holder analysis, verdict."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from scanner.core.errors import InvalidNetworkError

UNKNOWN = "Unknown"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Owner could not be read from chain state (RPC failed or timed out).
# Not renounced, not a real address — scoring applies a reduced penalty.
OWNER_UNVERIFIED = "<unverified>"


class Network(str, Enum):
    ETHEREUM = "ethereum"
    BSC = "bsc"
    POLYGON = "polygon"
    SOLANA = "solana"

    @classmethod
    def parse(cls, raw: str) -> Network:
        try:
            return cls(raw)
        except ValueError:
            raise InvalidNetworkError(raw) from None

    @property
    def is_evm(self) -> bool:
        return self is not Network.SOLANA

    @property
    def default_decimals(self) -> int:
        return 18 if self.is_evm else 9

    @property
    def chain_id(self) -> str:
        return _CHAIN_IDS[self]


_CHAIN_IDS = {
    Network.ETHEREUM: "1",
    Network.BSC: "56",
    Network.POLYGON: "137",
    Network.SOLANA: "solana",
}


class HolderRisk(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    UNKNOWN = "unknown"


class RiskLevel(str, Enum):
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"


@dataclass
class TokenProfile:
    """Canonical token description, filled field-by-field during reconciliation."""

    name: str = UNKNOWN
    symbol: str = UNKNOWN
    decimals: int = 18
    total_supply: str = "0"
    verified: bool = False
    owner_address: str | None = None

    @classmethod
    def initial(cls, network: Network) -> TokenProfile:
        return cls(decimals=network.default_decimals)


@dataclass(frozen=True)
class HolderEntry:
    address: str
    balance: str = "0"
    percent: float = 0.0  # fraction of supply as reported by the provider
    tag: str | None = None
    is_contract: bool = False
    is_locked: bool = False


@dataclass(frozen=True)
class SecuritySignals:
    """Normalized security flags for one token.

    Built from a GoPlus record, or synthesized from Solana chain state when
    GoPlus has no record. Tax values are fractions (0.1 = 10%).
    """

    honeypot: bool = False
    mintable: bool = False
    blacklistable: bool = False
    proxy: bool = False
    can_reclaim_ownership: bool = False
    whitelisted: bool = False
    trading_cooldown: bool = False
    tax_modifiable: bool = False
    can_burn: bool = False
    buy_tax: float = 0.0
    sell_tax: float = 0.0
    owner_address: str | None = None
    token_name: str | None = None
    token_symbol: str | None = None
    holder_count: int | None = None
    lp_total_supply: float | None = None
    lp_holder_count: int | None = None
    holders: tuple[HolderEntry, ...] = ()
    source: str = "goplus"

    @property
    def ownership_unverified(self) -> bool:
        return self.owner_address == OWNER_UNVERIFIED

    @property
    def ownership_renounced(self) -> bool:
        return self.owner_address is None or self.owner_address == ZERO_ADDRESS

    @property
    def has_owner(self) -> bool:
        """Owner is a real address (not renounced, not the unverified sentinel)."""
        return not self.ownership_renounced and not self.ownership_unverified


@dataclass(frozen=True)
class VerificationStatus:
    verified: bool = False
    contract_name: str | None = None
    compiler_version: str | None = None
    optimization: bool = False
    license: str | None = None


@dataclass(frozen=True)
class HolderDetail:
    address: str
    balance: str
    percent: float  # percentage, 4-decimal display value
    tag: str


@dataclass(frozen=True)
class HolderAnalysis:
    available: bool
    top10_percentage: float = 0.0  # 0-100 scale
    risk: HolderRisk = HolderRisk.UNKNOWN
    message: str = "Holder data not available"
    top10_holders: tuple[HolderDetail, ...] = ()

    @property
    def is_concentrated(self) -> bool:
        return self.risk in (HolderRisk.MEDIUM, HolderRisk.HIGH)


@dataclass(frozen=True)
class RiskAssessment:
    score: int
    level: RiskLevel
    risks: tuple[str, ...] = ()


@dataclass
class ScanResult:
    network: Network
    address: str
    profile: TokenProfile
    signals: SecuritySignals
    verification: VerificationStatus | None
    holder_analysis: HolderAnalysis
    assessment: RiskAssessment
    explorer_url: str
    scanned_at: datetime = field(default_factory=lambda: datetime.now(UTC))
