"""Top-10 holder concentration analysis.

Providers report per-holder ``percent`` either as a fraction of supply
(0.18) or already scaled (18.0). The aggregate is normalized with a fixed
``< 1`` threshold, which matches the historical provider output shape.
"""

from collections.abc import Sequence

from loguru import logger

from scanner.models.token import HolderAnalysis, HolderDetail, HolderEntry, HolderRisk

TOP_N = 10
# Shared with scoring: risk bands and penalties must move together
HIGH_CONCENTRATION_PCT = 50.0
MEDIUM_CONCENTRATION_PCT = 15.0

UNAVAILABLE = HolderAnalysis(available=False)


def normalize_top_percentage(total: float) -> float:
    """Sum below 1 means the provider reported fractions."""
    if total < 1:
        return total * 100
    return total


def classify_concentration(top10_pct: float) -> HolderRisk:
    if top10_pct > HIGH_CONCENTRATION_PCT:
        return HolderRisk.HIGH
    if top10_pct > MEDIUM_CONCENTRATION_PCT:
        return HolderRisk.MEDIUM
    return HolderRisk.LOW


def _message(risk: HolderRisk, pct: float) -> str:
    if risk is HolderRisk.HIGH:
        return f"DANGER: Top 10 holders control {pct:.2f}% of supply"
    if risk is HolderRisk.MEDIUM:
        return f"WARNING: Top 10 holders control {pct:.2f}% of supply"
    return f"SAFE: Top 10 holders control only {pct:.2f}% of supply"


def _detail(entry: HolderEntry) -> HolderDetail:
    # Display rescale is unconditional, unlike the aggregate
    return HolderDetail(
        address=entry.address,
        balance=entry.balance,
        percent=round(entry.percent * 100, 4),
        tag=entry.tag or "Unknown",
    )


def analyze_holders(holders: Sequence[HolderEntry] | None) -> HolderAnalysis:
    """Compute concentration risk from a ranked holder list.

    Empty or missing input is reported as unavailable, never as 0%.
    """
    if not holders:
        return UNAVAILABLE

    top = list(holders[:TOP_N])
    total = sum(h.percent for h in top)
    pct = normalize_top_percentage(total)
    risk = classify_concentration(pct)
    message = _message(risk, pct)
    logger.debug(f"[HOLDERS] {message}")

    return HolderAnalysis(
        available=True,
        top10_percentage=round(pct, 2),
        risk=risk,
        message=message,
        top10_holders=tuple(_detail(h) for h in top),
    )
