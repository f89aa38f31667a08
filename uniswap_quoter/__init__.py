"""
Concentrated Liquidity Swap Quoter

Exact-input and exact-output quotes for a single concentrated-liquidity pool
snapshot, computed with integer-exact ports of the on-chain math.
"""

__version__ = "0.1.0"

from .constants import Q96, Q128, MIN_TICK, MAX_TICK, MIN_SQRT_RATIO, MAX_SQRT_RATIO, ADDRESS_ZERO
from .data import Currency, Tick, TickDataStore
from .exceptions import (
    QuoterError,
    InvalidAmount,
    TickOutOfRange,
    PriceOutOfRange,
    InvalidPoolState,
    LiquidityAddOverflow,
    LiquiditySubOverflow,
    Overflow,
    DivisionByZero,
    InsufficientLiquidity,
)
from .pool import PoolState, SwapResult
from .quoter import Quote, quote, quote_exact_input, quote_exact_output, encode_uint256
