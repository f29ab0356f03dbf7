"""
Market Views — Снапшоты спот и условных рынков

Immutable Pydantic модели, представляющие состояние рынков в момент вызова.
Полная совместимость с JSON Schema (noarb/core/contracts/schema/*.json).

Снапшоты никогда не хранятся движком: они создаются заново при каждом
вызове, потому что band валиден только для точного набора резервов.
"""

from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from noarb.core.math.fixed_point import (
    U16_MAX,
    U64_MAX,
    U128_MAX,
    price_from_reserves,
    validate_uint,
)


# =============================================================================
# SPOT MARKET
# =============================================================================


class SpotMarketView(BaseModel):
    """
    Снапшот спот рынка (asset против stable).

    spot_price: stable units за asset unit в шкале PRICE_SCALE (1e12).
    fee_rate_bps вне [0, TOTAL_FEE_SCALE) допускается: калькулятор
    насыщает соответствующую границу band.
    """

    fee_rate_bps: int = Field(..., strict=True, description="Комиссия спот пула (bps, u16)")
    spot_price: int = Field(..., strict=True, description="Цена спота (scale 1e12, u128)")
    family_id: Optional[str] = Field(
        None, min_length=1, description="Идентификатор пары asset/stable (nullable)"
    )

    model_config = {"frozen": True}

    @field_validator("fee_rate_bps")
    @classmethod
    def validate_fee_rate_bps(cls, v: int) -> int:
        validate_uint(v, "fee_rate_bps", U16_MAX)
        return v

    @field_validator("spot_price")
    @classmethod
    def validate_spot_price(cls, v: int) -> int:
        validate_uint(v, "spot_price", U128_MAX)
        return v

    @classmethod
    def from_reserves(
        cls,
        asset_reserve: int,
        stable_reserve: int,
        fee_rate_bps: int,
        family_id: Optional[str] = None,
    ) -> "SpotMarketView":
        """
        Снапшот спот пула по его резервам.

        spot_price = stable_reserve * 1e12 // asset_reserve (0 при пустом asset).

        Raises:
            ValueError: Если резерв выходит за u64
        """
        validate_uint(asset_reserve, "asset_reserve", U64_MAX)
        validate_uint(stable_reserve, "stable_reserve", U64_MAX)
        return cls(
            fee_rate_bps=fee_rate_bps,
            spot_price=price_from_reserves(asset_reserve, stable_reserve),
            family_id=family_id,
        )


# =============================================================================
# CONDITIONAL MARKET
# =============================================================================


class ConditionalMarketView(BaseModel):
    """
    Снапшот условного рынка одного исхода governance решения.
    """

    asset_reserve: int = Field(..., strict=True, description="Резерв outcome asset (u64)")
    stable_reserve: int = Field(..., strict=True, description="Резерв outcome stable (u64)")
    fee_rate_bps: int = Field(..., strict=True, description="Комиссия пула (bps, u16)")
    outcome_index: Optional[int] = Field(
        None, ge=0, description="Индекс исхода (nullable)"
    )
    family_id: Optional[str] = Field(
        None, min_length=1, description="Идентификатор пары asset/stable (nullable)"
    )

    model_config = {"frozen": True}

    @field_validator("asset_reserve", "stable_reserve")
    @classmethod
    def validate_reserve(cls, v: int, info: ValidationInfo) -> int:
        validate_uint(v, info.field_name, U64_MAX)
        return v

    @field_validator("fee_rate_bps")
    @classmethod
    def validate_fee_rate_bps(cls, v: int) -> int:
        validate_uint(v, "fee_rate_bps", U16_MAX)
        return v

    @property
    def implied_price(self) -> int:
        """Цена stable/asset в шкале 1e12 (0 при пустом asset резерве)."""
        return price_from_reserves(self.asset_reserve, self.stable_reserve)

    def as_tuple(self) -> tuple[int, int, int]:
        """(asset_reserve, stable_reserve, fee_rate_bps)."""
        return (self.asset_reserve, self.stable_reserve, self.fee_rate_bps)


# =============================================================================
# SNAPSHOT
# =============================================================================


class BandSnapshot(BaseModel):
    """
    Полный снапшот для одного вычисления band: спот + все условные рынки.

    Используется симуляторами и мониторингом, получающими состояние
    рынков как JSON payload (см. noarb.core.contracts.load_band_snapshot).
    """

    spot: SpotMarketView = Field(..., description="Спот рынок")
    conditionals: tuple[ConditionalMarketView, ...] = Field(
        ..., min_length=1, description="Условные рынки (по одному на исход, минимум один)"
    )

    model_config = {"frozen": True}
