"""Property-based тесты для no-arbitrage band (hypothesis)

Свойства:
- fee в [0, 9999] и положительные резервы → floor <= ceiling
- нулевые комиссии → floor = min(p_i), ceiling = sum(p_i)
- N одинаковых рынков → floor не зависит от N
- check_in_band.in_band ⇔ assert_in_band не бросает исключение
- band детерминирован и не зависит от формы входа (view / tuple)
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from noarb.core.domain.market_views import ConditionalMarketView, SpotMarketView
from noarb.core.math.fixed_point import PRICE_SCALE, U64_MAX, U128_MAX
from noarb.guard.band_calculator import compute_band
from noarb.guard.band_enforcer import NoArbBandViolation, assert_in_band, check_in_band


def _fee_strategy() -> st.SearchStrategy[int]:
    return st.integers(min_value=0, max_value=9_999)


def _market_strategy(fee: st.SearchStrategy[int]) -> st.SearchStrategy[tuple[int, int, int]]:
    return st.tuples(
        st.integers(min_value=1, max_value=U64_MAX),
        st.integers(min_value=1, max_value=U64_MAX),
        fee,
    )


def _markets_strategy(fee: st.SearchStrategy[int]) -> st.SearchStrategy[list[tuple[int, int, int]]]:
    return st.lists(_market_strategy(fee), min_size=1, max_size=8)


@settings(deadline=None, max_examples=200)
@given(spot_fee=_fee_strategy(), markets=_markets_strategy(_fee_strategy()))
def test_floor_never_exceeds_ceiling(spot_fee: int, markets: list[tuple[int, int, int]]) -> None:
    floor, ceiling = compute_band(spot_fee, markets)
    assert floor <= ceiling
    assert 0 <= floor
    assert ceiling <= U128_MAX


@settings(deadline=None, max_examples=200)
@given(markets=_markets_strategy(st.just(0)))
def test_zero_fees_floor_min_ceiling_sum(markets: list[tuple[int, int, int]]) -> None:
    prices = [(s * PRICE_SCALE) // a for a, s, _ in markets]

    floor, ceiling = compute_band(0, markets)

    assert floor == min(prices)
    assert ceiling == sum(prices)


@settings(deadline=None, max_examples=100)
@given(
    spot_fee=_fee_strategy(),
    market=_market_strategy(_fee_strategy()),
    n_markets=st.integers(min_value=1, max_value=12),
)
def test_identical_markets_floor_independent_of_n(
    spot_fee: int, market: tuple[int, int, int], n_markets: int
) -> None:
    floor_one, ceiling_one = compute_band(spot_fee, [market])
    floor_n, ceiling_n = compute_band(spot_fee, [market] * n_markets)

    assert floor_n == floor_one
    assert ceiling_n >= ceiling_one


@settings(deadline=None, max_examples=200)
@given(
    spot_fee=_fee_strategy(),
    markets=_markets_strategy(_fee_strategy()),
    data=st.data(),
)
def test_check_consistent_with_assert(
    spot_fee: int, markets: list[tuple[int, int, int]], data: st.DataObject
) -> None:
    floor, ceiling = compute_band(spot_fee, markets)
    price = data.draw(
        st.sampled_from(
            [
                max(floor - 1, 0),
                floor,
                ceiling,
                min(ceiling + 1, U128_MAX),
            ]
        )
        | st.integers(min_value=0, max_value=U128_MAX)
    )
    spot = SpotMarketView(fee_rate_bps=spot_fee, spot_price=price)

    in_band, checked_price, checked_floor, checked_ceiling = check_in_band(spot, markets)

    try:
        assert_in_band(spot, markets)
        raised = False
    except NoArbBandViolation:
        raised = True

    assert in_band is not raised
    assert in_band == (floor <= price <= ceiling)
    assert (checked_price, checked_floor, checked_ceiling) == (price, floor, ceiling)


@settings(deadline=None, max_examples=100)
@given(spot_fee=st.integers(min_value=0, max_value=65_535), markets=_markets_strategy(st.integers(0, 65_535)))
def test_views_and_tuples_give_same_band(spot_fee: int, markets: list[tuple[int, int, int]]) -> None:
    views = [
        ConditionalMarketView(asset_reserve=a, stable_reserve=s, fee_rate_bps=f)
        for a, s, f in markets
    ]
    assert compute_band(spot_fee, markets) == compute_band(spot_fee, views)
