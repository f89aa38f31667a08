"""
Quoter - exact-input / exact-output quotes against one pool

Validates the request, runs the pool's swap loop on a private copy of its
state and returns the other side of the trade. encode_uint256 produces the
32-byte ABI word callers exchange across processes.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from eth_abi import encode

from .constants import MAX_UINT256
from .data.types import Currency
from .exceptions import InsufficientLiquidity, InvalidAmount, Overflow
from .pool import PoolState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Quote:
    """A computed quote and the pool snapshot it would leave behind"""
    amount: int  # the side not specified by the caller
    exact_input: bool
    zero_for_one: bool
    pool_after: PoolState


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(f"amount must be an integer: {amount!r}")
    if amount <= 0:
        raise InvalidAmount(f"amount must be positive: {amount}")


def quote(
    pool: PoolState,
    currency: Currency,
    amount: int,
    exact_input: bool,
    sqrt_price_limit_x96: Optional[int] = None
) -> Quote:
    """Quote a single swap

    Args:
        pool: pool snapshot (not modified)
        currency: the specified side (input for exact input, output otherwise)
        amount: specified amount in the smallest unit
        exact_input: True when amount is paid in, False when it is received
        sqrt_price_limit_x96: optional price the swap may not pass

    Returns:
        Quote with the computed opposite amount

    Raises:
        InvalidAmount: non-positive amount or currency not in the pool
        InsufficientLiquidity: the pool cannot fill the amount
    """
    _check_amount(amount)

    if exact_input:
        computed, pool_after = pool.get_output_amount(currency, amount, sqrt_price_limit_x96)
        zero_for_one = currency.equals(pool.currency0)
        # an input swallowed entirely by the fee legitimately yields zero
        if computed < 0:
            raise InsufficientLiquidity(
                f"exact input of {amount} produced a negative output {computed}"
            )
    else:
        computed, pool_after = pool.get_input_amount(currency, amount, sqrt_price_limit_x96)
        zero_for_one = currency.equals(pool.currency1)
        if computed <= 0:
            raise InsufficientLiquidity(
                f"exact output of {amount} produced a non-positive input {computed}"
            )

    logger.info(
        "quote %s: %d %s -> %d (tick %d -> %d)",
        "exact input" if exact_input else "exact output",
        amount, currency.symbol or currency.address, computed,
        pool.tick, pool_after.tick,
    )
    return Quote(
        amount=computed,
        exact_input=exact_input,
        zero_for_one=zero_for_one,
        pool_after=pool_after,
    )


def quote_exact_output(
    pool: PoolState,
    output_currency: Currency,
    output_amount: int,
    sqrt_price_limit_x96: Optional[int] = None
) -> int:
    """Input amount (fee included) required to receive exactly output_amount"""
    return quote(pool, output_currency, output_amount, False, sqrt_price_limit_x96).amount


def quote_exact_input(
    pool: PoolState,
    input_currency: Currency,
    input_amount: int,
    sqrt_price_limit_x96: Optional[int] = None
) -> int:
    """Output amount received for paying exactly input_amount"""
    return quote(pool, input_currency, input_amount, True, sqrt_price_limit_x96).amount


def encode_uint256(amount: int) -> bytes:
    """ABI-encode an amount as one 32-byte big-endian uint256 word"""
    if amount < 0 or amount > MAX_UINT256:
        raise Overflow(f"amount is outside the uint256 range: {amount}")
    return encode(["uint256"], [amount])
