"""
Sqrt Price Math - price movement for a given token amount

Prices are stored as sqrtPriceX96 = sqrt(price) * 2^96. Moving the price by a
token0 amount rounds up, by a token1 amount rounds down, so the pool always
receives at least what the price move implies.

References:
- Uniswap V3 Core: contracts/libraries/SqrtPriceMath.sol
"""

from ..constants import Q96, MAX_UINT160, MAX_UINT256
from ..exceptions import InsufficientLiquidity, Overflow, PriceOutOfRange
from .fixed_point96 import RESOLUTION, mul_div, mul_div_rounding_up, div_rounding_up


def sqrt_price_x96_to_price(
    sqrt_price_x96: int,
    decimal0: int = 18,
    decimal1: int = 18
) -> float:
    """Convert sqrtPriceX96 to a human-readable price (token1 per token0)

    Display only; never feed the result back into quoting.
    """
    sqrt_price = sqrt_price_x96 / Q96
    return sqrt_price ** 2 * (10 ** (decimal0 - decimal1))


def get_next_sqrt_price_from_input(
    sqrt_price_x96: int,
    liquidity: int,
    amount_in: int,
    zero_for_one: bool
) -> int:
    """sqrtPriceX96 after adding amount_in of the input token

    Args:
        sqrt_price_x96: starting sqrtPriceX96
        liquidity: active liquidity
        amount_in: amount of token0 (zero_for_one) or token1 added
        zero_for_one: swap direction

    Returns:
        new sqrtPriceX96
    """
    _check_price_and_liquidity(sqrt_price_x96, liquidity)

    if zero_for_one:
        return _next_sqrt_price_from_amount0_rounding_up(
            sqrt_price_x96, liquidity, amount_in, add=True
        )
    return _next_sqrt_price_from_amount1_rounding_down(
        sqrt_price_x96, liquidity, amount_in, add=True
    )


def get_next_sqrt_price_from_output(
    sqrt_price_x96: int,
    liquidity: int,
    amount_out: int,
    zero_for_one: bool
) -> int:
    """sqrtPriceX96 after removing amount_out of the output token

    Args:
        sqrt_price_x96: starting sqrtPriceX96
        liquidity: active liquidity
        amount_out: amount of token1 (zero_for_one) or token0 removed
        zero_for_one: swap direction

    Returns:
        new sqrtPriceX96
    """
    _check_price_and_liquidity(sqrt_price_x96, liquidity)

    if zero_for_one:
        return _next_sqrt_price_from_amount1_rounding_down(
            sqrt_price_x96, liquidity, amount_out, add=False
        )
    return _next_sqrt_price_from_amount0_rounding_up(
        sqrt_price_x96, liquidity, amount_out, add=False
    )


def _check_price_and_liquidity(sqrt_price_x96: int, liquidity: int) -> None:
    if sqrt_price_x96 <= 0:
        raise PriceOutOfRange("sqrtPriceX96 must be positive")
    if liquidity <= 0:
        raise InsufficientLiquidity("price cannot move without liquidity")


def _next_sqrt_price_from_amount0_rounding_up(
    sqrt_price_x96: int,
    liquidity: int,
    amount: int,
    add: bool
) -> int:
    if amount == 0:
        return sqrt_price_x96

    numerator1 = liquidity << RESOLUTION
    product = amount * sqrt_price_x96

    if add:
        # fast path unless the product or denominator would overflow uint256
        if product <= MAX_UINT256:
            denominator = numerator1 + product
            if denominator <= MAX_UINT256:
                return mul_div_rounding_up(numerator1, sqrt_price_x96, denominator)

        return div_rounding_up(numerator1, numerator1 // sqrt_price_x96 + amount)

    if product > MAX_UINT256 or numerator1 <= product:
        raise InsufficientLiquidity(
            f"output amount {amount} exceeds token0 reserves at this price"
        )
    return mul_div_rounding_up(numerator1, sqrt_price_x96, numerator1 - product)


def _next_sqrt_price_from_amount1_rounding_down(
    sqrt_price_x96: int,
    liquidity: int,
    amount: int,
    add: bool
) -> int:
    if add:
        if amount <= MAX_UINT160:
            quotient = (amount << RESOLUTION) // liquidity
        else:
            quotient = mul_div(amount, Q96, liquidity)

        result = sqrt_price_x96 + quotient
        if result > MAX_UINT160:
            raise Overflow(f"sqrtPriceX96 exceeds uint160: {result}")
        return result

    quotient = mul_div_rounding_up(amount, Q96, liquidity)
    if sqrt_price_x96 <= quotient:
        raise InsufficientLiquidity(
            f"output amount {amount} exceeds token1 reserves at this price"
        )
    return sqrt_price_x96 - quotient
