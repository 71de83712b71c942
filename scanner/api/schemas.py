"""Response shapes for the scan API.

Keys are camelCase and stable: the Telegram bot and external front-ends
read them directly.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from scanner.models.token import (
    OWNER_UNVERIFIED,
    HolderAnalysis,
    HolderEntry,
    Network,
    RiskAssessment,
    ScanResult,
    SecuritySignals,
    TokenProfile,
    VerificationStatus,
)
from scanner.providers.dexscreener.models import DexScreenerPair

API_VERSION = "1.3.0"
MAX_MARKET_PAIRS = 5


class ServiceInfo(BaseModel):
    message: str
    version: str
    status: str
    endpoints: dict[str, str]
    networks: list[str]


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str
    networks: list[str]


class TokenInfoOut(BaseModel):
    name: str
    symbol: str
    decimals: int
    totalSupply: str
    verified: bool
    ownerAddress: str | None = None


class HolderOut(BaseModel):
    address: str
    balance: str
    percent: float
    tag: str | None = None
    isContract: bool = False
    isLocked: bool = False


class SecurityOut(BaseModel):
    isHoneypot: bool
    canSell: bool
    tradingCooldown: bool
    buyTax: str
    sellTax: str
    canModifyTax: bool
    ownerAddress: str | None
    isOwnershipRenounced: bool
    ownershipUnverified: bool
    canTakeBackOwnership: bool
    isMintable: bool
    canBurn: bool
    totalSupply: str
    hasBlacklist: bool
    canBlacklist: bool
    hasWhitelist: bool
    isProxy: bool
    isUpgradeable: bool
    liquidityTotal: float | None
    lpHolderCount: int | None
    holderCount: int | None
    topHolders: list[HolderOut]
    source: str


class ConcentrationHolderOut(BaseModel):
    address: str
    balance: str
    percent: float
    tag: str


class HolderConcentrationOut(BaseModel):
    available: bool
    top10Percentage: float
    isConcentrated: bool
    risk: str
    message: str
    top10Holders: list[ConcentrationHolderOut]


class VerificationOut(BaseModel):
    verified: bool
    contractName: str | None = None
    compilerVersion: str | None = None
    optimization: bool | None = None
    license: str | None = None


class RiskAssessmentOut(BaseModel):
    score: int
    level: str
    risks: list[str]


class ScanResponse(BaseModel):
    address: str
    network: str
    chainId: str
    tokenInfo: TokenInfoOut
    security: SecurityOut
    holderConcentration: HolderConcentrationOut
    verification: VerificationOut
    riskAssessment: RiskAssessmentOut
    timestamp: str
    explorerUrl: str


def _tax(value: float) -> str:
    if not value:
        return "0%"
    return f"{value * 100:.2f}%"


def token_info_out(profile: TokenProfile) -> TokenInfoOut:
    return TokenInfoOut(
        name=profile.name,
        symbol=profile.symbol,
        decimals=profile.decimals,
        totalSupply=profile.total_supply,
        verified=profile.verified,
        ownerAddress=None if profile.owner_address == OWNER_UNVERIFIED else profile.owner_address,
    )


def _holder_out(entry: HolderEntry) -> HolderOut:
    return HolderOut(
        address=entry.address,
        balance=entry.balance,
        percent=entry.percent,
        tag=entry.tag,
        isContract=entry.is_contract,
        isLocked=entry.is_locked,
    )


def security_out(signals: SecuritySignals, profile: TokenProfile) -> SecurityOut:
    owner = None if signals.ownership_unverified else (signals.owner_address or profile.owner_address)
    return SecurityOut(
        isHoneypot=signals.honeypot,
        canSell=not signals.honeypot,
        tradingCooldown=signals.trading_cooldown,
        buyTax=_tax(signals.buy_tax),
        sellTax=_tax(signals.sell_tax),
        canModifyTax=signals.tax_modifiable,
        ownerAddress=owner,
        isOwnershipRenounced=signals.ownership_renounced,
        ownershipUnverified=signals.ownership_unverified,
        canTakeBackOwnership=signals.can_reclaim_ownership,
        isMintable=signals.mintable,
        canBurn=signals.can_burn,
        totalSupply=profile.total_supply,
        hasBlacklist=signals.blacklistable,
        canBlacklist=signals.blacklistable,
        hasWhitelist=signals.whitelisted,
        isProxy=signals.proxy,
        isUpgradeable=signals.proxy,
        liquidityTotal=signals.lp_total_supply,
        lpHolderCount=signals.lp_holder_count,
        holderCount=signals.holder_count,
        topHolders=[_holder_out(h) for h in signals.holders],
        source=signals.source,
    )


def holder_concentration_out(analysis: HolderAnalysis) -> HolderConcentrationOut:
    return HolderConcentrationOut(
        available=analysis.available,
        top10Percentage=analysis.top10_percentage,
        isConcentrated=analysis.is_concentrated,
        risk=analysis.risk.value,
        message=analysis.message,
        top10Holders=[
            ConcentrationHolderOut(
                address=h.address, balance=h.balance, percent=h.percent, tag=h.tag
            )
            for h in analysis.top10_holders
        ],
    )


def verification_out(verification: VerificationStatus | None) -> VerificationOut:
    # Networks without source verification still report a plain "not verified"
    if verification is None:
        return VerificationOut(verified=False)
    return VerificationOut(
        verified=verification.verified,
        contractName=verification.contract_name,
        compilerVersion=verification.compiler_version,
        optimization=verification.optimization,
        license=verification.license,
    )


def risk_out(assessment: RiskAssessment) -> RiskAssessmentOut:
    return RiskAssessmentOut(
        score=assessment.score,
        level=assessment.level.value,
        risks=list(assessment.risks),
    )


def scan_response(result: ScanResult) -> ScanResponse:
    return ScanResponse(
        address=result.address,
        network=result.network.value,
        chainId=result.network.chain_id,
        tokenInfo=token_info_out(result.profile),
        security=security_out(result.signals, result.profile),
        holderConcentration=holder_concentration_out(result.holder_analysis),
        verification=verification_out(result.verification),
        riskAssessment=risk_out(result.assessment),
        timestamp=result.scanned_at.isoformat(),
        explorerUrl=result.explorer_url,
    )


def _num(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


def market_response(pairs: list[DexScreenerPair]) -> dict[str, Any]:
    """Top pairs plus a ``mainPair`` summary. ``pairs`` must be sorted by liquidity."""
    main = pairs[0]
    return {
        "pairs": [
            p.model_dump(
                mode="json",
                include={
                    "chainId", "dexId", "pairAddress", "baseToken", "quoteToken",
                    "priceUsd", "liquidity", "volume", "priceChange", "url",
                },
            )
            for p in pairs[:MAX_MARKET_PAIRS]
        ],
        "mainPair": {
            "symbol": main.baseToken.symbol if main.baseToken else None,
            "priceUsd": main.priceUsd,
            "liquidity": _num(main.liquidity.usd) if main.liquidity else None,
            "volume24h": _num(main.volume.h24) if main.volume else None,
            "priceChange24h": _num(main.priceChange.h24) if main.priceChange else None,
            "pairUrl": main.url,
        },
    }


def service_info() -> ServiceInfo:
    return ServiceInfo(
        message="Token Safety Scanner API",
        version=API_VERSION,
        status="running",
        endpoints={
            "health": "/health",
            "checkToken": "/api/check-token/{network}/{address}",
            "tokenInfo": "/api/token-info/{address}",
        },
        networks=[n.value for n in Network],
    )


def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(UTC).isoformat(),
        version=API_VERSION,
        networks=[n.value for n in Network],
    )
