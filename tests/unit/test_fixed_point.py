"""
Тесты для модуля Fixed-Point Primitives

Проверяет:
1. Saturating mul-div (усечение, деление на ноль, насыщение)
2. Saturating add/sub
3. Fee-дроби и цену по резервам
4. Валидацию беззнаковых целых
"""

import pytest

from noarb.core.math.fixed_point import (
    PRICE_SCALE,
    TOTAL_FEE_SCALE,
    U16_MAX,
    U64_MAX,
    U128_MAX,
    mul_div_down,
    one_minus_fee,
    price_from_reserves,
    saturating_add,
    saturating_sub,
    validate_uint,
)


# =============================================================================
# ТЕСТЫ КОНСТАНТ
# =============================================================================


class TestConstants:
    """Шкалы и envelope"""

    def test_scales(self) -> None:
        assert TOTAL_FEE_SCALE == 10_000
        assert PRICE_SCALE == 1_000_000_000_000

    def test_envelopes(self) -> None:
        assert U16_MAX == 65_535
        assert U64_MAX == 18_446_744_073_709_551_615
        assert U128_MAX == 340_282_366_920_938_463_463_374_607_431_768_211_455


# =============================================================================
# ТЕСТЫ MUL-DIV
# =============================================================================


class TestMulDivDown:
    """Тесты для mul_div_down"""

    def test_exact_division(self) -> None:
        assert mul_div_down(2 * 10**15, 9_970, 10_000) == 1_994_000_000_000_000

    def test_truncates_toward_zero(self) -> None:
        """Дробная часть отбрасывается, без округления вверх"""
        assert mul_div_down(2, 1, 3) == 0
        assert mul_div_down(5, 1, 3) == 1
        assert mul_div_down(2 * 10**15, 10_000, 9_970) == 2_006_018_054_162_487

    def test_zero_denominator_returns_sentinel(self) -> None:
        assert mul_div_down(1, 1, 0) == U128_MAX
        assert mul_div_down(0, 0, 0) == U128_MAX

    def test_zero_denominator_custom_fallback(self) -> None:
        assert mul_div_down(1, 1, 0, fallback=7) == 7

    def test_result_saturates_at_u128(self) -> None:
        assert mul_div_down(U128_MAX, 10_000, 9_970) == U128_MAX
        assert mul_div_down(U128_MAX, U128_MAX, 1) == U128_MAX

    def test_wide_intermediate_does_not_saturate(self) -> None:
        """Промежуточное произведение шире u128, но результат помещается"""
        assert mul_div_down(U128_MAX, 9_970, 10_000) == (U128_MAX * 9_970) // 10_000

    def test_custom_cap(self) -> None:
        assert mul_div_down(100, 100, 1, cap=1_000) == 1_000


# =============================================================================
# ТЕСТЫ SATURATING ADD/SUB
# =============================================================================


class TestSaturatingArithmetic:
    """Тесты для saturating_add / saturating_sub"""

    def test_add_below_cap(self) -> None:
        assert saturating_add(1, 2) == 3

    def test_add_saturates(self) -> None:
        assert saturating_add(U128_MAX, 1) == U128_MAX
        assert saturating_add(U128_MAX, U128_MAX) == U128_MAX

    def test_add_exactly_cap(self) -> None:
        assert saturating_add(U128_MAX - 1, 1) == U128_MAX

    def test_sub_positive(self) -> None:
        assert saturating_sub(10_000, 30) == 9_970

    def test_sub_floors_at_zero(self) -> None:
        assert saturating_sub(10_000, 10_000) == 0
        assert saturating_sub(10_000, 65_535) == 0


# =============================================================================
# ТЕСТЫ FEE / PRICE
# =============================================================================


class TestFeeAndPrice:
    """Тесты для one_minus_fee и price_from_reserves"""

    def test_one_minus_fee(self) -> None:
        assert one_minus_fee(0) == 10_000
        assert one_minus_fee(30) == 9_970
        assert one_minus_fee(9_999) == 1

    def test_one_minus_fee_at_or_above_full_fee(self) -> None:
        """Fee >= 100% даёт 0, не отрицательное значение"""
        assert one_minus_fee(10_000) == 0
        assert one_minus_fee(U16_MAX) == 0

    def test_price_from_reserves(self) -> None:
        assert price_from_reserves(1_000, 2_000_000) == 2 * 10**15
        assert price_from_reserves(1_000, 2_000) == 2 * 10**12
        assert price_from_reserves(3, 1) == 333_333_333_333

    def test_price_zero_asset_reserve(self) -> None:
        assert price_from_reserves(0, 2_000) == 0
        assert price_from_reserves(0, 0) == 0

    def test_price_extreme_reserves_fit_u128(self) -> None:
        price = price_from_reserves(1, U64_MAX)
        assert price == U64_MAX * PRICE_SCALE
        assert price < U128_MAX


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidateUint:
    """Тесты для validate_uint"""

    def test_valid_values(self) -> None:
        validate_uint(0, "x")
        validate_uint(U128_MAX, "x")
        validate_uint(U16_MAX, "fee", U16_MAX)

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="fee must be non-negative"):
            validate_uint(-1, "fee")

    def test_above_width_raises(self) -> None:
        with pytest.raises(ValueError, match="reserve must be <="):
            validate_uint(U64_MAX + 1, "reserve", U64_MAX)

    def test_float_rejected(self) -> None:
        with pytest.raises(ValueError, match="must be an integer"):
            validate_uint(1.0, "price")  # type: ignore[arg-type]

    def test_bool_rejected(self) -> None:
        with pytest.raises(ValueError, match="must be an integer"):
            validate_uint(True, "price")
