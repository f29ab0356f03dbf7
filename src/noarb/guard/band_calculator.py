"""
Band Calculator — No-Arbitrage Price Band

Вычисляет коридор [floor, ceiling] цены спота, внутри которого нет
прибыльного round-trip через условные рынки.

Формулы (все деления усекающие, шкала fee = 10000, шкала цены = 1e12):
    p_i          = s_i * 1e12 // a_i            (0 при a_i == 0)
    term_floor_i = p_i * (10000 - f_i) // 10000
    term_ceil_i  = p_i * 10000 // (10000 - f_i) (U128_MAX при f_i >= 10000)
    floor        = min_i(term_floor_i) * (10000 - f_s) // 10000
    ceiling      = sum_i(term_ceil_i) * 10000 // (10000 - f_s)

floor: купить asset на споте, сминтить complete set, продать токены
исходов. Атакующему достаточно самого дешёвого выхода, поэтому min.
ceiling: обратный путь требует покупки в каждом условном рынке, поэтому sum.

ИНВАРИАНТЫ:
1. Пустой набор рынков → NoMarketsProvided
2. Fee >= 100% не бросает исключение: граница насыщается на U128_MAX
3. Float не используется; результат bit-exact
4. Band не кэшируется: каждый вызов считает заново по переданному снапшоту
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from noarb.core.domain.market_views import ConditionalMarketView
from noarb.core.domain.pools import ConditionalSource, read_conditional
from noarb.core.math.fixed_point import (
    TOTAL_FEE_SCALE,
    U16_MAX,
    U128_MAX,
    mul_div_down,
    one_minus_fee,
    saturating_add,
    validate_uint,
)

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class NoMarketsProvided(Exception):
    """
    Нарушение предусловия: band запрошен по пустому набору условных рынков.

    Ошибка вызывающего кода; операция, в рамках которой вызван движок,
    должна быть прервана целиком.
    """
    pass


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class MarketTerms:
    """Вклад одного условного рынка в band."""

    implied_price: int
    floor_term: int
    ceiling_term: int

    # True если fee >= 100% и ceiling_term = U128_MAX
    ceiling_saturated: bool


@dataclass(frozen=True)
class BandBreakdown:
    """Band с промежуточными значениями для диагностики."""

    floor: int
    ceiling: int

    spot_fee_bps: int
    min_floor_term: int
    sum_ceiling_term: int

    # Рынок, определяющий floor (первый при равенстве)
    limiting_market_index: int

    terms: tuple[MarketTerms, ...]

    @property
    def ceiling_saturated(self) -> bool:
        return self.ceiling == U128_MAX

    def contains(self, price: int) -> bool:
        """floor <= price <= ceiling (обе границы включительно)."""
        return self.floor <= price <= self.ceiling


# =============================================================================
# CALCULATOR
# =============================================================================


def _market_terms(market: ConditionalMarketView) -> MarketTerms:
    price = market.implied_price
    remaining = one_minus_fee(market.fee_rate_bps)

    floor_term = mul_div_down(price, remaining, TOTAL_FEE_SCALE)
    # remaining == 0 → деление на ноль → U128_MAX
    ceiling_term = mul_div_down(price, TOTAL_FEE_SCALE, remaining)

    return MarketTerms(
        implied_price=price,
        floor_term=floor_term,
        ceiling_term=ceiling_term,
        ceiling_saturated=remaining == 0,
    )


def compute_band_breakdown(
    spot_fee_bps: int,
    markets: Iterable[ConditionalSource],
) -> BandBreakdown:
    """
    Вычисление band с разбивкой по рынкам.

    Args:
        spot_fee_bps: Комиссия спот пула (bps, u16)
        markets: Условные рынки: ConditionalMarketView, кортежи
            (asset_reserve, stable_reserve, fee_rate_bps) или accessors

    Returns:
        BandBreakdown с floor/ceiling и вкладом каждого рынка

    Raises:
        NoMarketsProvided: Если markets пуст
        ValueError: Если spot_fee_bps вне u16
    """
    markets = tuple(markets)
    if not markets:
        raise NoMarketsProvided("cannot compute no-arb band over zero conditional markets")

    validate_uint(spot_fee_bps, "spot_fee_bps", U16_MAX)

    views = [read_conditional(market, outcome_index=i) for i, market in enumerate(markets)]
    terms = tuple(_market_terms(view) for view in views)

    min_floor_term = terms[0].floor_term
    limiting_market_index = 0
    sum_ceiling_term = 0

    for i, term in enumerate(terms):
        if term.floor_term < min_floor_term:
            min_floor_term = term.floor_term
            limiting_market_index = i
        sum_ceiling_term = saturating_add(sum_ceiling_term, term.ceiling_term)

    spot_remaining = one_minus_fee(spot_fee_bps)

    floor = mul_div_down(min_floor_term, spot_remaining, TOTAL_FEE_SCALE)
    ceiling = mul_div_down(sum_ceiling_term, TOTAL_FEE_SCALE, spot_remaining)

    if ceiling == U128_MAX:
        logger.debug(
            "no-arb ceiling saturated: spot_fee_bps=%d sum_ceiling_term=%d",
            spot_fee_bps,
            sum_ceiling_term,
        )

    return BandBreakdown(
        floor=floor,
        ceiling=ceiling,
        spot_fee_bps=spot_fee_bps,
        min_floor_term=min_floor_term,
        sum_ceiling_term=sum_ceiling_term,
        limiting_market_index=limiting_market_index,
        terms=terms,
    )


def compute_band(
    spot_fee_bps: int,
    markets: Iterable[ConditionalSource],
) -> tuple[int, int]:
    """
    Вычисление no-arbitrage band (floor, ceiling).

    Examples:
        >>> compute_band(0, [(1_000, 1_000, 0), (1_000, 1_200, 0)])
        (1000000000000, 2200000000000)

    Raises:
        NoMarketsProvided: Если markets пуст
    """
    breakdown = compute_band_breakdown(spot_fee_bps, markets)
    return breakdown.floor, breakdown.ceiling
