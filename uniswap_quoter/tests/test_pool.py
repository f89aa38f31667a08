"""
Pool State tests

Snapshot validation and the swap loop across initialized ticks.
"""

from dataclasses import replace

import pytest

from ..constants import MIN_TICK, MIN_SQRT_RATIO
from ..data.tick_data_store import TickDataStore
from ..data.types import Currency, Tick
from ..exceptions import InsufficientLiquidity, InvalidAmount, InvalidPoolState, PriceOutOfRange
from ..math.tick_math import get_sqrt_ratio_at_tick
from ..pool import PoolState
from .conftest import CHAIN_ID, LIQUIDITY, SQRT_PRICE_X96, TICK, make_pool

CONCENTRATED = 10 ** 22


def make_two_position_pool(native, token):
    """Full-range position plus a concentrated one over [160980, 161400]"""
    ticks = TickDataStore(
        [
            Tick(-887220, LIQUIDITY, LIQUIDITY),
            Tick(887220, LIQUIDITY, -LIQUIDITY),
            Tick(160980, CONCENTRATED, CONCENTRATED),
            Tick(161400, CONCENTRATED, -CONCENTRATED),
        ],
        tick_spacing=60,
    )
    return PoolState(
        currency0=native,
        currency1=token,
        fee=3000,
        tick_spacing=60,
        sqrt_price_x96=SQRT_PRICE_X96,
        liquidity=LIQUIDITY + CONCENTRATED,
        tick=TICK,
        ticks=ticks,
    )


class TestFromFullRange:
    """PoolState.from_full_range tests"""

    def test_currency_order(self, native, token):
        pool = PoolState.from_full_range(token, native, 3000, 60, SQRT_PRICE_X96, LIQUIDITY, TICK)
        assert pool.currency0.is_native
        assert pool.currency1.equals(token)

    def test_full_range_ticks(self, pool):
        assert [t.tick_idx for t in pool.ticks] == [-887220, 887220]
        assert pool.ticks.get_tick(-887220).liquidity_net == LIQUIDITY
        assert pool.ticks.get_tick(887220).liquidity_net == -LIQUIDITY

    def test_zero_liquidity_has_no_ticks(self, native, token):
        pool = make_pool(native, token, liquidity=0)
        assert len(pool.ticks) == 0

    def test_mid_price(self, pool):
        assert pool.mid_price == pytest.approx(9999984.577685067)


class TestValidation:
    """PoolState invariant tests"""

    def test_fee_too_large(self, native, token):
        with pytest.raises(InvalidPoolState):
            make_pool(native, token, fee=1_000_000)

    def test_tick_does_not_match_price(self, native, token):
        with pytest.raises(InvalidPoolState):
            PoolState.from_full_range(native, token, 3000, 60, SQRT_PRICE_X96, LIQUIDITY, TICK + 1)

    def test_price_on_upper_tick_boundary(self, native, token):
        """A downward crossing leaves the price exactly on sqrt(tick + 1)"""
        pool = PoolState.from_full_range(
            native, token, 3000, 60, get_sqrt_ratio_at_tick(TICK), LIQUIDITY, TICK - 1
        )
        assert pool.tick == TICK - 1

    def test_liquidity_must_match_ticks(self, pool):
        with pytest.raises(InvalidPoolState):
            replace(pool, liquidity=LIQUIDITY + 1)

    def test_currencies_on_different_chains(self, native):
        other = Currency(chain_id=1, address="0x7db8A8D1E9483115b9e8028d610e3C365c649f6a")
        with pytest.raises(InvalidPoolState):
            PoolState.from_full_range(native, other, 3000, 60, SQRT_PRICE_X96, LIQUIDITY, TICK)

    def test_identical_currencies(self, native):
        with pytest.raises(InvalidPoolState):
            PoolState.from_full_range(native, Currency.native(CHAIN_ID), 3000, 60, SQRT_PRICE_X96, LIQUIDITY, TICK)

    def test_spacing_mismatch(self, pool):
        with pytest.raises(InvalidPoolState):
            replace(pool, tick_spacing=10)


class TestSwap:
    """PoolState.swap tests"""

    def test_exact_output_single_step(self, pool):
        result = pool.swap(zero_for_one=True, amount_specified=-10 ** 24)

        assert result.amount_specified_remaining == 0
        assert result.amount_calculated == 111445638425664157
        assert result.sqrt_price_x96 == 225487091021344676020609419268119
        assert result.tick == 159081
        assert result.liquidity == LIQUIDITY
        assert result.steps == 1
        assert not result.exact_input
        assert result.amount0 == 111445638425664157
        assert result.amount1 == -10 ** 24

    def test_exact_input_crosses_word_boundary(self, pool):
        result = pool.swap(zero_for_one=True, amount_specified=10 ** 18)

        assert result.amount_calculated == -4992481033526295848721357
        assert result.tick == 147355
        assert result.steps == 2
        assert result.amount0 == 10 ** 18
        assert result.amount1 == -4992481033526295848721357

    def test_zero_amount(self, pool):
        with pytest.raises(InvalidAmount):
            pool.swap(zero_for_one=True, amount_specified=0)

    def test_price_limit_stops_swap(self, pool):
        limit = get_sqrt_ratio_at_tick(161000)
        result = pool.swap(zero_for_one=True, amount_specified=10 ** 18, sqrt_price_limit_x96=limit)

        assert result.sqrt_price_x96 == limit
        assert result.tick == 161000
        assert result.amount_specified_remaining == 990477116068229104
        assert result.amount_calculated == -94050065402402774178216

    def test_price_limit_not_reached(self, pool):
        limit = get_sqrt_ratio_at_tick(161000)
        result = pool.swap(zero_for_one=True, amount_specified=10 ** 15, sqrt_price_limit_x96=limit)

        assert result.amount_specified_remaining == 0
        assert result.amount_calculated == -9960054449665695263086
        assert result.tick == 161169

    @pytest.mark.parametrize("zero_for_one,offset", [(True, 1), (False, -1)])
    def test_price_limit_on_wrong_side(self, pool, zero_for_one, offset):
        with pytest.raises(PriceOutOfRange):
            pool.swap(zero_for_one, 10 ** 18, pool.sqrt_price_x96 + offset)

    def test_price_already_at_bound(self, native, token):
        pool = PoolState.from_full_range(native, token, 3000, 60, MIN_SQRT_RATIO + 1, 0, MIN_TICK)
        with pytest.raises(InsufficientLiquidity):
            pool.swap(zero_for_one=True, amount_specified=10 ** 18)

    def test_crosses_initialized_tick_downward(self, native, token):
        pool = make_two_position_pool(native, token)
        result = pool.swap(zero_for_one=True, amount_specified=-10 ** 24)

        assert result.amount_calculated == 105492357956936026
        assert result.tick == 159799
        assert result.liquidity == LIQUIDITY
        assert result.steps == 2

    def test_crosses_initialized_tick_upward(self, native, token):
        pool = make_two_position_pool(native, token)
        result = pool.swap(zero_for_one=False, amount_specified=10 ** 24)

        assert result.amount_calculated == -95242309571272681
        assert result.tick == 162470
        assert result.liquidity == LIQUIDITY
        assert result.steps == 2

    def test_zero_liquidity_runs_to_bound(self, native, token):
        pool = make_pool(native, token, liquidity=0)
        result = pool.swap(zero_for_one=True, amount_specified=10 ** 18)

        assert result.amount_specified_remaining == 10 ** 18
        assert result.amount_calculated == 0
        assert result.sqrt_price_x96 == MIN_SQRT_RATIO + 1
        assert result.tick == MIN_TICK

    def test_snapshot_is_not_modified(self, pool):
        pool.swap(zero_for_one=True, amount_specified=10 ** 18)
        assert pool.sqrt_price_x96 == SQRT_PRICE_X96
        assert pool.tick == TICK
        assert pool.liquidity == LIQUIDITY


class TestGetAmounts:
    """get_output_amount / get_input_amount tests"""

    def test_get_input_amount(self, pool, token):
        amount_in, pool_after = pool.get_input_amount(token, 10 ** 24)
        assert amount_in == 111445638425664157
        assert pool_after.tick == 159081
        assert pool_after.sqrt_price_x96 == 225487091021344676020609419268119

    def test_get_output_amount(self, pool, token):
        amount_out, pool_after = pool.get_output_amount(token, 10 ** 24)
        assert amount_out == 90661216532311864
        assert pool_after.tick == 163089

    def test_limit_hit_is_insufficient_liquidity(self, pool, native):
        limit = get_sqrt_ratio_at_tick(161000)
        with pytest.raises(InsufficientLiquidity):
            pool.get_output_amount(native, 10 ** 18, limit)

    def test_reserves_exhausted(self, pool, native):
        # native reserves of the full-range position are 999999999999999999
        with pytest.raises(InsufficientLiquidity):
            pool.get_input_amount(native, 10 ** 18)

    def test_foreign_currency(self, pool):
        other = Currency(chain_id=CHAIN_ID, address="0x1111111111111111111111111111111111111111")
        with pytest.raises(InvalidAmount):
            pool.get_input_amount(other, 10 ** 18)
