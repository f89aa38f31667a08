"""
Sqrt Price Math tests

Vectors from the SqrtPriceMath contract test suite.
"""

import pytest

from ..math.sqrt_price_math import (
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
    sqrt_price_x96_to_price,
)
from ..constants import Q96, MAX_UINT256
from ..exceptions import InsufficientLiquidity, PriceOutOfRange
from .test_liquidity_math import encode_price_sqrt

E18 = 10 ** 18


class TestNextSqrtPriceFromInput:
    """get_next_sqrt_price_from_input tests"""

    def test_zero_price(self):
        with pytest.raises(PriceOutOfRange):
            get_next_sqrt_price_from_input(0, 1, E18 // 10, False)

    def test_zero_liquidity(self):
        with pytest.raises(InsufficientLiquidity):
            get_next_sqrt_price_from_input(1, 0, E18 // 10, True)

    def test_zero_amount_returns_input_price(self):
        price = encode_price_sqrt(1, 1)
        assert get_next_sqrt_price_from_input(price, E18 // 10, 0, True) == price
        assert get_next_sqrt_price_from_input(price, E18 // 10, 0, False) == price

    def test_input_of_token1(self):
        price = get_next_sqrt_price_from_input(encode_price_sqrt(1, 1), E18, E18 // 10, False)
        assert price == 87150978765690771352898345369

    def test_input_of_token0(self):
        price = get_next_sqrt_price_from_input(encode_price_sqrt(1, 1), E18, E18 // 10, True)
        assert price == 72025602285694852357767227579

    def test_input_above_uint96(self):
        price = get_next_sqrt_price_from_input(encode_price_sqrt(1, 1), 10 * E18, 2 ** 100, True)
        assert price == 624999999995069620

    def test_large_input_returns_one(self):
        assert get_next_sqrt_price_from_input(encode_price_sqrt(1, 1), 1, MAX_UINT256 // 2, True) == 1


class TestNextSqrtPriceFromOutput:
    """get_next_sqrt_price_from_output tests"""

    PRICE = 20282409603651670423947251286016

    def test_output_of_exact_token0_reserves(self):
        with pytest.raises(InsufficientLiquidity):
            get_next_sqrt_price_from_output(self.PRICE, 1024, 4, False)

    def test_output_just_below_token1_reserves(self):
        assert get_next_sqrt_price_from_output(self.PRICE, 1024, 262143, True) == 77371252455336267181195264

    def test_output_of_exact_token1_reserves(self):
        with pytest.raises(InsufficientLiquidity):
            get_next_sqrt_price_from_output(self.PRICE, 1024, 262144, True)

    def test_output_of_token0(self):
        price = get_next_sqrt_price_from_output(encode_price_sqrt(1, 1), E18, E18 // 10, False)
        assert price == 88031291682515930659493278152

    def test_output_of_token1(self):
        price = get_next_sqrt_price_from_output(encode_price_sqrt(1, 1), E18, E18 // 10, True)
        assert price == 71305346262837903834189555302

    def test_zero_liquidity(self):
        with pytest.raises(InsufficientLiquidity):
            get_next_sqrt_price_from_output(self.PRICE, 0, 1, True)


class TestSqrtPriceToPrice:
    """sqrt_price_x96_to_price tests"""

    def test_unit_price(self):
        assert sqrt_price_x96_to_price(Q96) == pytest.approx(1.0)

    def test_decimals_adjustment(self):
        # 1 token0 (18 decimals) = 1 token1 (6 decimals) at a raw price of 1e-12
        sqrt_price = encode_price_sqrt(1, 10 ** 12)
        assert sqrt_price_x96_to_price(sqrt_price, 18, 6) == pytest.approx(1.0, rel=1e-9)
