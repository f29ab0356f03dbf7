"""
Fixed-Point Primitives — Integer Safe Math

Модуль обеспечивает детерминированную целочисленную арифметику для band engine:
- Saturating mul-div в 128-битном envelope (деление на ноль → sentinel)
- Saturating add/sub
- Fee-дроби в basis points без перехода во float
- Валидация беззнаковых целых по ширине типа

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Float не используется нигде (результаты bit-exact между пересчётами)
2. Деление всегда усекающее (floor для неотрицательных операндов)
3. Деление на ноль никогда не бросает исключение (возвращается fallback)
4. Результат никогда не превышает U128_MAX (насыщение, не overflow)
"""

from typing import Final

# =============================================================================
# ЧИСЛОВЫЕ ENVELOPE
# =============================================================================

U16_MAX: Final[int] = (1 << 16) - 1
U64_MAX: Final[int] = (1 << 64) - 1
U128_MAX: Final[int] = (1 << 128) - 1

# =============================================================================
# ОБЩИЕ ШКАЛЫ (должны совпадать с каждым читаемым рынком)
# =============================================================================

# 10000 bps = 100%
TOTAL_FEE_SCALE: Final[int] = 10_000

# Цена: stable units за 1 asset unit, умноженная на 1e12
PRICE_SCALE: Final[int] = 10**12


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_uint(value: int, name: str, max_value: int = U128_MAX) -> None:
    """
    Валидация, что значение является беззнаковым целым в пределах ширины типа.

    bool отклоняется явно: в Python это подкласс int, но как reserve или fee
    он всегда означает ошибку вызывающего кода.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        max_value: Верхняя граница включительно (default: U128_MAX)

    Raises:
        ValueError: Если value не int, отрицательное или больше max_value
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    if value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")


# =============================================================================
# SATURATING ОПЕРАЦИИ
# =============================================================================


def saturating_add(a: int, b: int, cap: int = U128_MAX) -> int:
    """
    Сложение с насыщением на cap.

    Examples:
        >>> saturating_add(1, 2)
        3
        >>> saturating_add(U128_MAX, 1) == U128_MAX
        True
    """
    total = a + b
    if total > cap:
        return cap
    return total


def saturating_sub(a: int, b: int) -> int:
    """
    Вычитание с насыщением на нуле (беззнаковая семантика).

    Examples:
        >>> saturating_sub(10_000, 30)
        9970
        >>> saturating_sub(10_000, 12_000)
        0
    """
    if b >= a:
        return 0
    return a - b


def mul_div_down(
    a: int,
    b: int,
    denominator: int,
    fallback: int = U128_MAX,
    cap: int = U128_MAX,
) -> int:
    """
    (a * b) // denominator с усечением и насыщением.

    Промежуточное произведение вычисляется без ограничения ширины (шире,
    чем удвоенная ширина reserve), поэтому overflow возможен только
    в результате, и он насыщается на cap.

    Args:
        a: Первый множитель (>= 0)
        b: Второй множитель (>= 0)
        denominator: Делитель (>= 0)
        fallback: Результат при denominator == 0 (default: U128_MAX)
        cap: Верхняя граница результата (default: U128_MAX)

    Returns:
        min(a * b // denominator, cap) или fallback при делении на ноль

    Examples:
        >>> mul_div_down(2 * 10**15, 9_970, 10_000)
        1994000000000000
        >>> mul_div_down(7, 1, 0) == U128_MAX
        True
    """
    if denominator == 0:
        return fallback

    result = (a * b) // denominator
    if result > cap:
        return cap
    return result


# =============================================================================
# FEE-ДРОБИ
# =============================================================================


def one_minus_fee(fee_bps: int, scale: int = TOTAL_FEE_SCALE) -> int:
    """
    Числитель дроби (1 - fee) в шкале basis points.

    Fee >= 100% даёт 0, а не отрицательное значение: дальнейшее деление
    на этот множитель уходит в saturating sentinel.

    Examples:
        >>> one_minus_fee(30)
        9970
        >>> one_minus_fee(10_000)
        0
    """
    return saturating_sub(scale, fee_bps)


def price_from_reserves(asset_reserve: int, stable_reserve: int) -> int:
    """
    Цена stable/asset в шкале PRICE_SCALE по резервам пула.

    Пустой asset резерв даёт цену 0 (а не деление на ноль).

    Examples:
        >>> price_from_reserves(1_000, 2_000)
        2000000000000
        >>> price_from_reserves(0, 2_000)
        0
    """
    if asset_reserve == 0:
        return 0
    return mul_div_down(stable_reserve, PRICE_SCALE, asset_reserve)
