"""
Shared fixtures: the Sepolia native/token pool with one full-range position
"""

import pytest

from ..data.types import Currency
from ..pool import PoolState

CHAIN_ID = 11155111
TOKEN_ADDRESS = "0x7db8A8D1E9483115b9e8028d610e3C365c649f6a"

TICK = 161189
LIQUIDITY = 3162275221685340688940
SQRT_PRICE_X96 = 250541255178517414234103244537599


@pytest.fixture
def native():
    return Currency.native(CHAIN_ID)


@pytest.fixture
def token():
    return Currency(chain_id=CHAIN_ID, address=TOKEN_ADDRESS, decimals=18, symbol="TKN")


def make_pool(native, token, fee=3000, liquidity=LIQUIDITY):
    return PoolState.from_full_range(
        native, token,
        fee=fee,
        tick_spacing=60,
        sqrt_price_x96=SQRT_PRICE_X96,
        liquidity=liquidity,
        tick=TICK,
    )


@pytest.fixture
def pool(native, token):
    return make_pool(native, token)
