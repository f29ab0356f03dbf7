"""
Band Enforcer — проверка цены спота против no-arbitrage band

Вызывается swap pipeline ровно один раз, последним шагом перед commit
сделки. Гарантирует только одно: состояние в момент вызова не допускает
арбитража. О состоянии после вызова ничего не утверждается.

Точки входа:
- assert_in_band: бросает NoArbBandViolation при нарушении
- check_in_band: никогда не бросает нарушение, возвращает
  (in_band, price, floor, ceiling) для симуляторов и мониторинга
- NoArbBandGuard: gate-обёртка с конфигурацией и диагностикой

Нарушение фатально для всей охватывающей операции (включая исходную
сделку); откат выполняет вызывающий код, см. noarb.guard.transaction.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from noarb.core.domain.market_views import ConditionalMarketView, SpotMarketView
from noarb.core.domain.pools import (
    ConditionalSource,
    SpotSource,
    read_conditionals,
    read_spot,
)
from noarb.guard.band_calculator import (
    BandBreakdown,
    NoMarketsProvided,
    compute_band_breakdown,
)

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class NoArbBandViolation(Exception):
    """
    Нарушение post-condition: цена спота вне [floor, ceiling].

    Означает, что корректирующая сделка pipeline (если была) не
    восстановила согласованность цен. Охватывающая атомарная операция
    должна быть отменена целиком, без повторных попыток.
    """

    def __init__(self, price: int, floor: int, ceiling: int):
        self.price = price
        self.floor = floor
        self.ceiling = ceiling
        side = "below floor" if price < floor else "above ceiling"
        super().__init__(
            f"No-arb band violation: spot price {price} is {side} "
            f"(floor={floor}, ceiling={ceiling})"
        )


class MarketFamilyMismatch(ValueError):
    """Снапшот смешивает рынки разных пар asset/stable."""
    pass


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class BandGuardConfig:
    """Конфигурация NoArbBandGuard.

    Шкалы (fee 10000, цена 1e12) не настраиваются: они обязаны совпадать
    с каждым читаемым рынком.
    """

    # Помеченные рынки снапшота должны иметь family_id спота (None не сравнивается)
    require_same_family: bool = True


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class BandGuardResult:
    """Результат проверки band."""

    in_band: bool
    block_reason: str

    price: int
    floor: int
    ceiling: int

    breakdown: BandBreakdown

    # Детали
    details: str

    @property
    def margin_below(self) -> int:
        """price - floor (отрицательное при нарушении снизу)."""
        return self.price - self.floor

    @property
    def margin_above(self) -> int:
        """ceiling - price (отрицательное при нарушении сверху)."""
        return self.ceiling - self.price

    def as_tuple(self) -> tuple[bool, int, int, int]:
        return (self.in_band, self.price, self.floor, self.ceiling)


# =============================================================================
# GUARD
# =============================================================================


class NoArbBandGuard:
    """Gate: цена спота должна лежать в no-arbitrage band.

    Порядок:
    1. Свежий снапшот спота и всех условных рынков (accessors читаются сейчас)
    2. Проверка family_id (если включена)
    3. Вычисление band по снапшоту
    4. Сравнение floor <= price <= ceiling (включительно)

    Состояния нет: результат есть чистая функция снапшота.
    """

    def __init__(self, config: BandGuardConfig | None = None):
        """
        Args:
            config: конфигурация guard (опционально, используется default)
        """
        self.config = config or BandGuardConfig()

    def evaluate(
        self,
        spot_market: SpotSource,
        markets: Iterable[ConditionalSource],
    ) -> BandGuardResult:
        """Проверка band без исключения при нарушении.

        Args:
            spot_market: SpotMarketView или accessor спот пула
            markets: условные рынки (views, кортежи или accessors)

        Returns:
            BandGuardResult

        Raises:
            NoMarketsProvided: если markets пуст
            MarketFamilyMismatch: если рынки из разных семейств
        """
        markets = tuple(markets)
        if not markets:
            raise NoMarketsProvided("cannot check no-arb band over zero conditional markets")

        spot = read_spot(spot_market)
        conditionals = read_conditionals(markets)

        if self.config.require_same_family:
            self._check_family(spot, conditionals)

        breakdown = compute_band_breakdown(spot.fee_rate_bps, conditionals)
        price = spot.spot_price
        in_band = breakdown.contains(price)

        if in_band:
            block_reason = ""
            details = (
                f"PASS: price={price} in [{breakdown.floor}, {breakdown.ceiling}], "
                f"margin_below={price - breakdown.floor}, "
                f"margin_above={breakdown.ceiling - price}, "
                f"markets={len(conditionals)}, "
                f"limiting_market={breakdown.limiting_market_index}"
            )
        elif price < breakdown.floor:
            block_reason = f"price_below_floor: {price} < {breakdown.floor}"
            details = block_reason
        else:
            block_reason = f"price_above_ceiling: {price} > {breakdown.ceiling}"
            details = block_reason

        return BandGuardResult(
            in_band=in_band,
            block_reason=block_reason,
            price=price,
            floor=breakdown.floor,
            ceiling=breakdown.ceiling,
            breakdown=breakdown,
            details=details,
        )

    def enforce(
        self,
        spot_market: SpotSource,
        markets: Iterable[ConditionalSource],
    ) -> BandGuardResult:
        """Проверка band; нарушение прерывает операцию.

        Raises:
            NoArbBandViolation: если price вне [floor, ceiling]
            NoMarketsProvided: если markets пуст
            MarketFamilyMismatch: если рынки из разных семейств
        """
        result = self.evaluate(spot_market, markets)

        if not result.in_band:
            logger.warning(
                "no-arb band violated: %s (price=%d floor=%d ceiling=%d)",
                result.block_reason,
                result.price,
                result.floor,
                result.ceiling,
            )
            raise NoArbBandViolation(result.price, result.floor, result.ceiling)

        logger.debug("no-arb band check: %s", result.details)
        return result

    @staticmethod
    def _check_family(
        spot: SpotMarketView,
        conditionals: list[ConditionalMarketView],
    ) -> None:
        if spot.family_id is None:
            return
        for market in conditionals:
            if market.family_id is not None and market.family_id != spot.family_id:
                raise MarketFamilyMismatch(
                    f"conditional market {market.outcome_index} belongs to family "
                    f"{market.family_id!r}, spot market to {spot.family_id!r}"
                )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def assert_in_band(
    spot_market: SpotSource,
    markets: Iterable[ConditionalSource],
) -> None:
    """
    Проверка floor <= price <= ceiling для текущего снапшота.

    Raises:
        NoArbBandViolation: Если цена вне band
        NoMarketsProvided: Если markets пуст
        MarketFamilyMismatch: Если помеченный рынок из другого семейства
    """
    NoArbBandGuard().enforce(spot_market, markets)


def check_in_band(
    spot_market: SpotSource,
    markets: Iterable[ConditionalSource],
) -> tuple[bool, int, int, int]:
    """
    Диагностическая проверка band без исключения при нарушении.

    Returns:
        (in_band, price, floor, ceiling); in_band совпадает с отсутствием
        исключения у assert_in_band на том же снапшоте

    Raises:
        NoMarketsProvided: Если markets пуст
        MarketFamilyMismatch: Если помеченный рынок из другого семейства
    """
    return NoArbBandGuard().evaluate(spot_market, markets).as_tuple()
