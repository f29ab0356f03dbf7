"""
Contract Validation Module

Модуль для валидации JSON снапшотов рынков noarb.
"""

from .validators import (
    BandSnapshotValidator,
    ConditionalMarketViewValidator,
    ContractValidator,
    SchemaLoader,
    SpotMarketViewValidator,
    load_band_snapshot,
    validate_band_snapshot,
    validate_conditional_market_view,
    validate_spot_market_view,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SpotMarketViewValidator",
    "ConditionalMarketViewValidator",
    "BandSnapshotValidator",
    # Functions
    "validate_spot_market_view",
    "validate_conditional_market_view",
    "validate_band_snapshot",
    "load_band_snapshot",
]
