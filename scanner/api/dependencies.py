"""FastAPI dependency injection — shared token scanner."""

from __future__ import annotations

from scanner.core.pipeline import TokenScanner
from scanner.core.pipeline import get_scanner as _get_scanner


def get_scanner() -> TokenScanner:
    """Return the process-wide scanner (overridden in tests)."""
    return _get_scanner()
