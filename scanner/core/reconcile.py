"""Merge explorer, GoPlus, DexScreener and chain-state lookups into one profile.

Precedence per network family:

EVM:    explorer metadata + explorer verification (concurrent)
        -> GoPlus (fills Unknown name/symbol only; miss is terminal)
Solana: GoPlus -> on miss, DexScreener + mint account (concurrent)
        synthesized into security signals.
"""

import asyncio
from dataclasses import dataclass

from loguru import logger

from scanner.core.errors import SecurityDataUnavailableError
from scanner.models.token import (
    OWNER_UNVERIFIED,
    UNKNOWN,
    Network,
    SecuritySignals,
    TokenProfile,
    VerificationStatus,
)
from scanner.providers.dexscreener.client import DexScreenerClient
from scanner.providers.explorer.client import ExplorerClient
from scanner.providers.goplus.client import GoPlusClient
from scanner.providers.solana.mint import SolanaRpcClient

SYNTH_NAME = "Unknown Token"
SYNTH_SYMBOL = "UNKNOWN"


@dataclass
class Providers:
    explorer: ExplorerClient
    goplus: GoPlusClient
    dexscreener: DexScreenerClient
    solana: SolanaRpcClient

    async def close(self) -> None:
        await asyncio.gather(
            self.explorer.close(),
            self.goplus.close(),
            self.dexscreener.close(),
            self.solana.close(),
        )


@dataclass
class Reconciliation:
    profile: TokenProfile
    verification: VerificationStatus | None
    signals: SecuritySignals


async def resolve_evm_profile(
    providers: Providers, network: Network, address: str
) -> tuple[TokenProfile, VerificationStatus]:
    """Explorer stage. Verification defaults to unverified on any miss."""
    profile = TokenProfile.initial(network)
    info, verification = await asyncio.gather(
        providers.explorer.get_token_info(network, address),
        providers.explorer.get_verification(network, address),
    )

    if info.ok:
        meta = info.value
        profile.name = meta.name
        profile.symbol = meta.symbol
        profile.decimals = meta.decimals
        profile.total_supply = meta.total_supply
        profile.verified = meta.verified
    else:
        logger.debug(f"[RECONCILE] Explorer metadata {info.status.value}: {info.error}")

    status = verification.value if verification.ok else VerificationStatus(verified=False)
    if not verification.ok:
        logger.debug(f"[RECONCILE] Explorer verification {verification.status.value}: {verification.error}")
    # Source-code check is authoritative over the metadata flag
    profile.verified = status.verified
    return profile, status


def apply_goplus_names(profile: TokenProfile, signals: SecuritySignals) -> None:
    """GoPlus only fills fields still at the Unknown sentinel."""
    if profile.name == UNKNOWN and signals.token_name:
        profile.name = signals.token_name
    if profile.symbol == UNKNOWN and signals.token_symbol:
        profile.symbol = signals.token_symbol


async def synthesize_solana_signals(
    providers: Providers, profile: TokenProfile, address: str
) -> SecuritySignals:
    """Build signals from DexScreener names and the on-chain mint record.

    Holder data has no free source here, so the holder list stays empty.
    """
    pairs, mint = await asyncio.gather(
        providers.dexscreener.get_top_pairs(address),
        providers.solana.get_mint_account(address),
    )

    if pairs.ok and pairs.value:
        base = pairs.value[0].baseToken
        profile.name = (base.name if base else None) or SYNTH_NAME
        profile.symbol = (base.symbol if base else None) or SYNTH_SYMBOL
    else:
        logger.debug(f"[RECONCILE] DexScreener {pairs.status.value} for {address[:12]}")

    if mint.ok:
        account = mint.value
        owner = account.mint_authority
        mintable = account.mint_authority_active
        freezable = account.freeze_authority_active
        profile.total_supply = account.supply
        profile.decimals = account.decimals
    else:
        logger.warning(f"[RECONCILE] Mint account {mint.status.value} for {address[:12]}: {mint.error}")
        owner = OWNER_UNVERIFIED
        mintable = False
        freezable = False

    profile.owner_address = owner
    return SecuritySignals(
        mintable=mintable,
        blacklistable=freezable,
        owner_address=owner,
        token_name=profile.name,
        token_symbol=profile.symbol,
        source="chain_state",
    )


async def reconcile(providers: Providers, network: Network, address: str) -> Reconciliation:
    """Resolve profile, verification and signals for one token.

    Raises SecurityDataUnavailableError for EVM tokens GoPlus does not know.
    """
    verification: VerificationStatus | None = None
    if network.is_evm:
        profile, verification = await resolve_evm_profile(providers, network, address)
    else:
        profile = TokenProfile.initial(network)

    lookup = await providers.goplus.get_signals(network, address)
    if lookup.ok:
        signals = lookup.value
        apply_goplus_names(profile, signals)
        if signals.has_owner and profile.owner_address is None:
            profile.owner_address = signals.owner_address
    elif network.is_evm:
        logger.info(f"[RECONCILE] GoPlus {lookup.status.value} for {address[:10]} on {network.value}")
        raise SecurityDataUnavailableError(profile)
    else:
        logger.info(f"[RECONCILE] GoPlus {lookup.status.value} for {address[:12]}, using chain state")
        signals = await synthesize_solana_signals(providers, profile, address)

    return Reconciliation(profile=profile, verification=verification, signals=signals)
