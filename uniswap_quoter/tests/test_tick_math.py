"""
Tick Math tests

Known on-chain values plus round-trip and monotonicity over sampled ticks.
"""

import pytest

from ..math.tick_math import (
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    nearest_usable_tick,
)
from ..constants import MIN_TICK, MAX_TICK, MIN_SQRT_RATIO, MAX_SQRT_RATIO, Q96
from ..exceptions import TickOutOfRange, PriceOutOfRange


class TestGetSqrtRatioAtTick:
    """get_sqrt_ratio_at_tick tests"""

    @pytest.mark.parametrize("tick,expected", [
        (MIN_TICK, 4295128739),
        (MIN_TICK + 1, 4295343490),
        (-1, 79224201403219477170569942574),
        (0, Q96),
        (1, 79232123823359799118286999568),
        (60, 79466191966197645195421774833),
        (161189, 250541255178517414234103244537599),
        (MAX_TICK - 1, 1461373636630004318706518188784493106690254656249),
        (MAX_TICK, 1461446703485210103287273052203988822378723970342),
    ])
    def test_known_values(self, tick, expected):
        assert get_sqrt_ratio_at_tick(tick) == expected

    def test_bounds_match_constants(self):
        assert get_sqrt_ratio_at_tick(MIN_TICK) == MIN_SQRT_RATIO
        assert get_sqrt_ratio_at_tick(MAX_TICK) == MAX_SQRT_RATIO

    @pytest.mark.parametrize("tick", [MIN_TICK - 1, MAX_TICK + 1])
    def test_out_of_range(self, tick):
        with pytest.raises(TickOutOfRange):
            get_sqrt_ratio_at_tick(tick)

    def test_out_of_range_is_value_error(self):
        with pytest.raises(ValueError):
            get_sqrt_ratio_at_tick(MAX_TICK + 1)

    def test_strictly_increasing(self):
        previous = get_sqrt_ratio_at_tick(-1000)
        for tick in range(-963, 1000, 37):
            current = get_sqrt_ratio_at_tick(tick)
            assert current > previous
            previous = current


class TestGetTickAtSqrtRatio:
    """get_tick_at_sqrt_ratio tests"""

    def test_bounds(self):
        assert get_tick_at_sqrt_ratio(MIN_SQRT_RATIO) == MIN_TICK
        assert get_tick_at_sqrt_ratio(MAX_SQRT_RATIO - 1) == MAX_TICK - 1

    def test_known_price(self):
        assert get_tick_at_sqrt_ratio(Q96) == 0
        assert get_tick_at_sqrt_ratio(250541255178517414234103244537599) == 161189

    @pytest.mark.parametrize("sqrt_price", [MIN_SQRT_RATIO - 1, MAX_SQRT_RATIO, 0])
    def test_out_of_range(self, sqrt_price):
        with pytest.raises(PriceOutOfRange):
            get_tick_at_sqrt_ratio(sqrt_price)

    @pytest.mark.parametrize("tick", [
        MIN_TICK, -500000, -50000, -887, -1, 0, 1, 60, 887, 161189, 500000, MAX_TICK - 1
    ])
    def test_round_trip(self, tick):
        """Every price in [sqrt(t), sqrt(t+1)) maps back to t"""
        lower = get_sqrt_ratio_at_tick(tick)
        upper = get_sqrt_ratio_at_tick(tick + 1)
        assert get_tick_at_sqrt_ratio(lower) == tick
        assert get_tick_at_sqrt_ratio(upper - 1) == tick
        assert get_tick_at_sqrt_ratio((lower + upper) // 2) == tick


class TestNearestUsableTick:
    """nearest_usable_tick tests"""

    @pytest.mark.parametrize("tick,spacing,expected", [
        (MIN_TICK, 60, -887220),
        (MAX_TICK, 60, 887220),
        (MIN_TICK, 200, -887200),
        (MAX_TICK, 200, 887200),
        (MAX_TICK, 1, MAX_TICK),
        (0, 60, 0),
        (29, 60, 0),
        (30, 60, 60),
        (-30, 60, 0),
        (-31, 60, -60),
        (5, 10, 10),
        (-5, 10, 0),
        (-6, 10, -10),
    ])
    def test_values(self, tick, spacing, expected):
        assert nearest_usable_tick(tick, spacing) == expected

    def test_non_positive_spacing(self):
        with pytest.raises(ValueError):
            nearest_usable_tick(0, 0)

    def test_tick_out_of_range(self):
        with pytest.raises(TickOutOfRange):
            nearest_usable_tick(MAX_TICK + 1, 60)
