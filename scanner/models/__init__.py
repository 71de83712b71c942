from scanner.models.token import (
    OWNER_UNVERIFIED,
    UNKNOWN,
    ZERO_ADDRESS,
    HolderAnalysis,
    HolderDetail,
    HolderEntry,
    HolderRisk,
    Network,
    RiskAssessment,
    RiskLevel,
    ScanResult,
    SecuritySignals,
    TokenProfile,
    VerificationStatus,
)

__all__ = [
    "OWNER_UNVERIFIED",
    "UNKNOWN",
    "ZERO_ADDRESS",
    "Network",
    "TokenProfile",
    "HolderEntry",
    "SecuritySignals",
    "VerificationStatus",
    "HolderDetail",
    "HolderAnalysis",
    "HolderRisk",
    "RiskAssessment",
    "RiskLevel",
    "ScanResult",
]
