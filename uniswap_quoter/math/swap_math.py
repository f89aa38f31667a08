"""
Swap Math - a single swap step inside one liquidity range

References:
- Uniswap V3 Core: contracts/libraries/SwapMath.sol
- Whitepaper Section 6.2.3: Swapping Within a Single Tick

Sign convention for amount_remaining:
    >= 0  exact input (amount still to be paid in, fee included)
    <  0  exact output (amount still to be received)
"""

from typing import Tuple

from ..constants import MAX_FEE
from .fixed_point96 import mul_div, mul_div_rounding_up
from .liquidity_math import get_amount0_delta, get_amount1_delta
from .sqrt_price_math import (
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
)


def compute_swap_step(
    sqrt_ratio_current_x96: int,
    sqrt_ratio_target_x96: int,
    liquidity: int,
    amount_remaining: int,
    fee_pips: int
) -> Tuple[int, int, int, int]:
    """Swap as far as the target price or the remaining amount allows

    Args:
        sqrt_ratio_current_x96: current sqrtPriceX96
        sqrt_ratio_target_x96: price the step may not pass
        liquidity: active liquidity in this range
        amount_remaining: signed remaining amount (see module docstring)
        fee_pips: fee in pips (3000 = 0.30%)

    Returns:
        (sqrt_ratio_next_x96, amount_in, amount_out, fee_amount)
        amount_in excludes the fee; inputs round up, outputs round down.
    """
    zero_for_one = sqrt_ratio_current_x96 >= sqrt_ratio_target_x96
    exact_in = amount_remaining >= 0

    amount_in = 0
    amount_out = 0

    if exact_in:
        amount_remaining_less_fee = mul_div(amount_remaining, MAX_FEE - fee_pips, MAX_FEE)
        if zero_for_one:
            amount_in = get_amount0_delta(sqrt_ratio_target_x96, sqrt_ratio_current_x96, liquidity, True)
        else:
            amount_in = get_amount1_delta(sqrt_ratio_current_x96, sqrt_ratio_target_x96, liquidity, True)

        if amount_remaining_less_fee >= amount_in:
            sqrt_ratio_next_x96 = sqrt_ratio_target_x96
        else:
            sqrt_ratio_next_x96 = get_next_sqrt_price_from_input(
                sqrt_ratio_current_x96, liquidity, amount_remaining_less_fee, zero_for_one
            )
    else:
        if zero_for_one:
            amount_out = get_amount1_delta(sqrt_ratio_target_x96, sqrt_ratio_current_x96, liquidity, False)
        else:
            amount_out = get_amount0_delta(sqrt_ratio_current_x96, sqrt_ratio_target_x96, liquidity, False)

        if -amount_remaining >= amount_out:
            sqrt_ratio_next_x96 = sqrt_ratio_target_x96
        else:
            sqrt_ratio_next_x96 = get_next_sqrt_price_from_output(
                sqrt_ratio_current_x96, liquidity, -amount_remaining, zero_for_one
            )

    reached_target = sqrt_ratio_target_x96 == sqrt_ratio_next_x96

    # recompute whichever side was not fixed by reaching the target
    if zero_for_one:
        if not (reached_target and exact_in):
            amount_in = get_amount0_delta(sqrt_ratio_next_x96, sqrt_ratio_current_x96, liquidity, True)
        if not (reached_target and not exact_in):
            amount_out = get_amount1_delta(sqrt_ratio_next_x96, sqrt_ratio_current_x96, liquidity, False)
    else:
        if not (reached_target and exact_in):
            amount_in = get_amount1_delta(sqrt_ratio_current_x96, sqrt_ratio_next_x96, liquidity, True)
        if not (reached_target and not exact_in):
            amount_out = get_amount0_delta(sqrt_ratio_current_x96, sqrt_ratio_next_x96, liquidity, False)

    # never hand out more than was asked for
    if not exact_in and amount_out > -amount_remaining:
        amount_out = -amount_remaining

    if exact_in and not reached_target:
        # the step consumed everything; whatever is not input is fee
        fee_amount = amount_remaining - amount_in
    else:
        fee_amount = mul_div_rounding_up(amount_in, fee_pips, MAX_FEE - fee_pips)

    return sqrt_ratio_next_x96, amount_in, amount_out, fee_amount
