"""
Math layer for the swap quoter

Integer-exact ports of the on-chain libraries:
- fixed_point96: Q64.96 encoding and full-width mul_div
- tick_math: tick <-> sqrtPriceX96
- liquidity_math: liquidity deltas and token amounts between prices
- sqrt_price_math: price after adding/removing a token amount
- swap_math: one swap step within a liquidity range
"""

from .fixed_point96 import (
    Q96,
    RESOLUTION,
    mul_div,
    mul_div_rounding_up,
    div_rounding_up,
)
from .tick_math import (
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    nearest_usable_tick,
)
from .liquidity_math import (
    add_delta,
    get_amount0_delta,
    get_amount1_delta,
)
from .sqrt_price_math import (
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
    sqrt_price_x96_to_price,
)
from .swap_math import compute_swap_step
