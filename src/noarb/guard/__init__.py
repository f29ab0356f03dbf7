"""Guard — no-arbitrage band calculator и enforcer.

- band_calculator: (spot fee, условные рынки) → (floor, ceiling)
- band_enforcer: assert_in_band / check_in_band / NoArbBandGuard
- transaction: all-or-nothing граница вокруг сделки
"""

from .band_calculator import (
    BandBreakdown,
    MarketTerms,
    NoMarketsProvided,
    compute_band,
    compute_band_breakdown,
)
from .band_enforcer import (
    BandGuardConfig,
    BandGuardResult,
    MarketFamilyMismatch,
    NoArbBandGuard,
    NoArbBandViolation,
    assert_in_band,
    check_in_band,
)
from .transaction import band_transaction

__all__ = [
    "BandBreakdown",
    "MarketTerms",
    "NoMarketsProvided",
    "compute_band",
    "compute_band_breakdown",
    "BandGuardConfig",
    "BandGuardResult",
    "MarketFamilyMismatch",
    "NoArbBandGuard",
    "NoArbBandViolation",
    "assert_in_band",
    "check_in_band",
    "band_transaction",
]
