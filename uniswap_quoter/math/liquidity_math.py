"""
Liquidity Math - liquidity bookkeeping and token amount deltas

References:
- Uniswap V3 Core: contracts/libraries/LiquidityMath.sol
- Uniswap V3 Core: contracts/libraries/SqrtPriceMath.sol (amount deltas)
- Whitepaper Section 6.2.1: Concentrated Liquidity

Formulas:
    Δx = L * (√P_b - √P_a) / (√P_a * √P_b)   # token0
    Δy = L * (√P_b - √P_a)                    # token1
"""

from ..constants import Q96, MAX_UINT128
from ..exceptions import LiquidityAddOverflow, LiquiditySubOverflow, PriceOutOfRange
from .fixed_point96 import RESOLUTION, mul_div, mul_div_rounding_up, div_rounding_up


def add_delta(liquidity: int, delta: int) -> int:
    """Apply a signed liquidity delta

    Args:
        liquidity: current liquidity (uint128)
        delta: signed change (liquidityNet, possibly negated)

    Returns:
        new liquidity

    Raises:
        LiquiditySubOverflow: result would be negative
        LiquidityAddOverflow: result would exceed uint128
    """
    if delta < 0:
        if -delta > liquidity:
            raise LiquiditySubOverflow(
                f"cannot remove {-delta} from liquidity {liquidity}"
            )
        return liquidity + delta

    result = liquidity + delta
    if result > MAX_UINT128:
        raise LiquidityAddOverflow(
            f"liquidity {liquidity} + {delta} exceeds uint128"
        )
    return result


def get_amount0_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool
) -> int:
    """token0 amount between two sqrt prices

    Args:
        sqrt_ratio_a_x96: one sqrtPriceX96 bound
        sqrt_ratio_b_x96: the other sqrtPriceX96 bound
        liquidity: active liquidity
        round_up: True rounds up (amounts owed to the pool)

    Returns:
        amount0 in the smallest unit
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_a_x96 <= 0:
        raise PriceOutOfRange("sqrt price bound must be positive")

    numerator1 = liquidity << RESOLUTION
    numerator2 = sqrt_ratio_b_x96 - sqrt_ratio_a_x96

    if round_up:
        return div_rounding_up(
            mul_div_rounding_up(numerator1, numerator2, sqrt_ratio_b_x96),
            sqrt_ratio_a_x96
        )
    return mul_div(numerator1, numerator2, sqrt_ratio_b_x96) // sqrt_ratio_a_x96


def get_amount1_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool
) -> int:
    """token1 amount between two sqrt prices

    Args:
        sqrt_ratio_a_x96: one sqrtPriceX96 bound
        sqrt_ratio_b_x96: the other sqrtPriceX96 bound
        liquidity: active liquidity
        round_up: True rounds up (amounts owed to the pool)

    Returns:
        amount1 in the smallest unit
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    return mul_div(
        liquidity,
        sqrt_ratio_b_x96 - sqrt_ratio_a_x96,
        Q96,
        round_up=round_up
    )
