"""
noarb — no-arbitrage band engine for quantum-liquidity markets.

Спот рынок и N условных рынков делят ликвидность виртуально; движок
вычисляет допустимый ценовой коридор спота и проверяет, что цена в нём.
"""

from noarb.guard import (
    BandBreakdown,
    BandGuardConfig,
    BandGuardResult,
    MarketFamilyMismatch,
    NoArbBandGuard,
    NoArbBandViolation,
    NoMarketsProvided,
    assert_in_band,
    band_transaction,
    check_in_band,
    compute_band,
    compute_band_breakdown,
)

__all__ = [
    "BandBreakdown",
    "BandGuardConfig",
    "BandGuardResult",
    "MarketFamilyMismatch",
    "NoArbBandGuard",
    "NoArbBandViolation",
    "NoMarketsProvided",
    "assert_in_band",
    "band_transaction",
    "check_in_band",
    "compute_band",
    "compute_band_breakdown",
]
