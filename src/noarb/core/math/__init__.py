"""
Core math modules для noarb

Целочисленные fixed-point примитивы с гарантией воспроизводимости.
"""

from noarb.core.math.fixed_point import (
    # Envelopes
    U16_MAX,
    U64_MAX,
    U128_MAX,
    # Scales
    PRICE_SCALE,
    TOTAL_FEE_SCALE,
    # Saturating operations
    mul_div_down,
    saturating_add,
    saturating_sub,
    # Fee / price helpers
    one_minus_fee,
    price_from_reserves,
    # Validation
    validate_uint,
)

__all__ = [
    # Envelopes
    "U16_MAX",
    "U64_MAX",
    "U128_MAX",
    # Scales
    "PRICE_SCALE",
    "TOTAL_FEE_SCALE",
    # Saturating operations
    "mul_div_down",
    "saturating_add",
    "saturating_sub",
    # Fee / price helpers
    "one_minus_fee",
    "price_from_reserves",
    # Validation
    "validate_uint",
]
