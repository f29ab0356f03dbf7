"""
Pool Accessors — read-only контракты внешних пулов

Движок не владеет пулами: он читает резервы и комиссии через эти
протоколы в момент вызова и превращает их в immutable снапшоты.
Чтение всегда свежее; ничего не кэшируется между вызовами.
"""

from typing import Iterable, Optional, Protocol, Union, runtime_checkable

from noarb.core.domain.market_views import ConditionalMarketView, SpotMarketView


# =============================================================================
# PROTOCOLS
# =============================================================================


@runtime_checkable
class SpotPool(Protocol):
    """Спот пул: комиссия и текущая цена (scale 1e12, stable за asset)."""

    def fee_rate_bps(self) -> int: ...

    def current_price(self) -> int: ...


@runtime_checkable
class ConditionalPool(Protocol):
    """Условный пул одного исхода: резервы и комиссия."""

    def reserves(self) -> tuple[int, int]: ...

    def fee_rate_bps(self) -> int: ...


SpotSource = Union[SpotMarketView, SpotPool]
ConditionalSource = Union[ConditionalMarketView, tuple[int, int, int], ConditionalPool]


# =============================================================================
# SNAPSHOT READERS
# =============================================================================


def read_spot(source: SpotSource) -> SpotMarketView:
    """
    Снапшот спот рынка из view или accessor.

    Raises:
        TypeError: Если source не view и не реализует SpotPool
        pydantic.ValidationError: Если accessor вернул невалидные значения
    """
    if isinstance(source, SpotMarketView):
        return source

    if not isinstance(source, SpotPool):
        raise TypeError(f"unsupported spot market source: {type(source).__name__}")

    return SpotMarketView(
        fee_rate_bps=source.fee_rate_bps(),
        spot_price=source.current_price(),
        family_id=getattr(source, "family_id", None),
    )


def read_conditional(
    source: ConditionalSource,
    outcome_index: Optional[int] = None,
) -> ConditionalMarketView:
    """
    Снапшот условного рынка из view, кортежа (a, s, f) или accessor.

    Raises:
        TypeError: Если source не поддерживается
        ValueError: Если кортеж не из трёх элементов
        pydantic.ValidationError: Если значения вне u64/u16
    """
    if isinstance(source, ConditionalMarketView):
        return source

    if isinstance(source, tuple):
        if len(source) != 3:
            raise ValueError(
                "conditional market tuple must be "
                f"(asset_reserve, stable_reserve, fee_rate_bps), got {len(source)} items"
            )
        asset_reserve, stable_reserve, fee_rate_bps = source
        return ConditionalMarketView(
            asset_reserve=asset_reserve,
            stable_reserve=stable_reserve,
            fee_rate_bps=fee_rate_bps,
            outcome_index=outcome_index,
        )

    if not isinstance(source, ConditionalPool):
        raise TypeError(f"unsupported conditional market source: {type(source).__name__}")

    asset_reserve, stable_reserve = source.reserves()
    return ConditionalMarketView(
        asset_reserve=asset_reserve,
        stable_reserve=stable_reserve,
        fee_rate_bps=source.fee_rate_bps(),
        outcome_index=outcome_index,
        family_id=getattr(source, "family_id", None),
    )


def read_conditionals(sources: Iterable[ConditionalSource]) -> list[ConditionalMarketView]:
    """Снапшоты всех условных рынков; индекс исхода = позиция в списке."""
    return [read_conditional(source, outcome_index=i) for i, source in enumerate(sources)]
