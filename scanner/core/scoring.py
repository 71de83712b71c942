"""Risk scoring — deterministic 0-100 verdict from reconciled signals.

Starts at 100 and applies independent deductions. Statements are emitted
in evaluation order (display contract), each prefixed with its severity.
No I/O, no state: same inputs always give the same assessment.
"""

from scanner.models.token import (
    HolderAnalysis,
    HolderRisk,
    RiskAssessment,
    RiskLevel,
    SecuritySignals,
    VerificationStatus,
)

MAX_SCORE = 100
SAFE_THRESHOLD = 80
WARNING_THRESHOLD = 50

HIGH_TAX = 0.10  # fraction
LOW_HOLDER_COUNT = 100
MIN_LP_SUPPLY = 1.0

# Honeypot plus another major deduction always lands in danger
HONEYPOT_CEILING = 60
HONEYPOT_COMBINED_CEILING = WARNING_THRESHOLD - 1
MAJOR_PENALTY = 10


def level_for(score: int) -> RiskLevel:
    if score >= SAFE_THRESHOLD:
        return RiskLevel.SAFE
    if score >= WARNING_THRESHOLD:
        return RiskLevel.WARNING
    return RiskLevel.DANGER


def compute_risk(
    signals: SecuritySignals,
    verification: VerificationStatus | None,
    holders: HolderAnalysis,
) -> RiskAssessment:
    """Score a token.

    ``verification`` is None on networks without source verification
    (Solana): no bonus and no penalty. ``holders.available`` False skips
    the concentration deduction entirely.
    """
    score = MAX_SCORE
    risks: list[str] = []
    major_hits = 0

    def deduct(points: int, statement: str) -> None:
        nonlocal score, major_hits
        score -= points
        risks.append(statement)
        if points >= MAJOR_PENALTY:
            major_hits += 1

    # --- Contract capabilities ---
    if signals.honeypot:
        score -= 40
        risks.append("CRITICAL: Honeypot detected")

    if signals.mintable:
        deduct(15, "HIGH: Mint function active")

    if signals.has_owner:
        deduct(10, "MEDIUM: Ownership not renounced")
    elif signals.ownership_unverified:
        deduct(5, "LOW: Ownership status could not be verified")

    if signals.can_reclaim_ownership:
        deduct(15, "HIGH: Owner can reclaim ownership")

    if signals.blacklistable:
        deduct(20, "HIGH: Blacklist enabled")

    # --- Taxes ---
    if signals.buy_tax > HIGH_TAX or signals.sell_tax > HIGH_TAX:
        deduct(
            10,
            f"MEDIUM: High tax - Buy: {signals.buy_tax * 100:.1f}%, "
            f"Sell: {signals.sell_tax * 100:.1f}%",
        )

    if signals.proxy:
        deduct(10, "MEDIUM: Proxy contract")

    # --- Holder concentration ---
    if holders.available:
        if holders.risk is HolderRisk.HIGH:
            deduct(25, f"HIGH: {holders.message}")
        elif holders.risk is HolderRisk.MEDIUM:
            deduct(15, f"MEDIUM: {holders.message}")

    # --- Source verification ---
    if verification is not None:
        if verification.verified:
            if not signals.honeypot:
                score = min(MAX_SCORE, score + 5)
        else:
            deduct(5, "LOW: Contract not verified")

    # --- Market depth ---
    if signals.holder_count is not None and signals.holder_count < LOW_HOLDER_COUNT:
        deduct(5, "LOW: Low holder count")

    if signals.lp_total_supply is not None and signals.lp_total_supply < MIN_LP_SUPPLY:
        deduct(15, "HIGH: Very low liquidity")

    if signals.honeypot:
        ceiling = HONEYPOT_COMBINED_CEILING if major_hits else HONEYPOT_CEILING
        if score > ceiling:
            risks.append(f"CRITICAL: Honeypot caps score at {ceiling}")
            score = ceiling

    score = max(0, score)
    return RiskAssessment(score=score, level=level_for(score), risks=tuple(risks))
