"""
Tick Math - tick <-> sqrtPriceX96 conversion

Integer-only port of the on-chain TickMath library, so results match the
contract bit for bit.

References:
- Uniswap V3 Core: contracts/libraries/TickMath.sol
- Whitepaper Section 6.1: Ticks and Tick Spacing

Formulas:
    price = 1.0001^tick
    sqrtPriceX96 = sqrt(price) * 2^96
"""

from ..constants import (
    MIN_TICK,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
    MAX_UINT256,
)
from ..exceptions import TickOutOfRange, PriceOutOfRange


# 1/sqrt(1.0001)^(2^i) in Q128.128, for bits 1..19 of |tick|
_BIT_COEFFICIENTS = (
    0xfff97272373d413259a46990580e213a,
    0xfff2e50f5f656932ef12357cf3c7fdcc,
    0xffe5caca7e10e4e61c3624eaa0941cd0,
    0xffcb9843d60f6159c9db58835c926644,
    0xff973b41fa98c081472e6896dfb254c0,
    0xff2ea16466c96a3843ec78b326b52861,
    0xfe5dee046a99a2a811c461f1969c3053,
    0xfcbe86c7900a88aedcffc83b479aa3a4,
    0xf987a7253ac413176f2b074cf7815e54,
    0xf3392b0822b70005940c7a398e4b70f3,
    0xe7159475a2c29b7443b29c7fa6e889d9,
    0xd097f3bdfd2022b8845ad8f792aa5825,
    0xa9f746462d870fdf8a65dc1f90e061e5,
    0x70d869a156d2a1b890bb3df62baf32f7,
    0x31be135f97d08fd981231505542fcfa6,
    0x9aa508b5b7a84e1c677de54f3e99bc9,
    0x5d6af8dedb81196699c329225ee604,
    0x2216e584f5fa1ea926041bedfe98,
    0x48a170391f7dc42444e8fa2,
)

_RATIO_ONE = 0x100000000000000000000000000000000
_RATIO_BIT_0 = 0xfffcb933bd6fad37aa2d162d1a594001

# log_sqrt10001 conversion and error bounds (Q128)
_LOG_SQRT10001_MULTIPLIER = 255738958999603826347141
_TICK_LOW_ERROR = 3402992956809132418596140100660247210
_TICK_HIGH_ERROR = 291339464771989622907027621153398088495


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """Compute sqrtPriceX96 for a tick

    Multiplies one Q128 coefficient per set bit of |tick|, takes the
    reciprocal for positive ticks and rounds up into Q64.96.

    Args:
        tick: tick index (-887272 ~ 887272)

    Returns:
        sqrtPriceX96 (Q64.96)

    Raises:
        TickOutOfRange: tick outside [MIN_TICK, MAX_TICK]
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise TickOutOfRange(
            f"tick {tick} is outside the valid range [{MIN_TICK}, {MAX_TICK}]"
        )

    abs_tick = abs(tick)
    ratio = _RATIO_BIT_0 if abs_tick & 0x1 else _RATIO_ONE

    for bit, coefficient in enumerate(_BIT_COEFFICIENTS, start=1):
        if abs_tick & (1 << bit):
            ratio = (ratio * coefficient) >> 128

    if tick > 0:
        ratio = MAX_UINT256 // ratio

    # Q128.128 -> Q64.96, rounding up
    return (ratio >> 32) + (1 if ratio & 0xFFFFFFFF else 0)


def get_tick_at_sqrt_ratio(sqrt_price_x96: int) -> int:
    """Compute the greatest tick whose sqrt price is <= sqrt_price_x96

    Args:
        sqrt_price_x96: sqrtPriceX96 (Q64.96)

    Returns:
        tick index

    Raises:
        PriceOutOfRange: sqrt_price_x96 outside [MIN_SQRT_RATIO, MAX_SQRT_RATIO)
    """
    if sqrt_price_x96 < MIN_SQRT_RATIO or sqrt_price_x96 >= MAX_SQRT_RATIO:
        raise PriceOutOfRange(
            f"sqrtPriceX96 {sqrt_price_x96} is outside "
            f"[{MIN_SQRT_RATIO}, {MAX_SQRT_RATIO})"
        )

    ratio = sqrt_price_x96 << 32
    msb = ratio.bit_length() - 1

    # normalise to a 128-bit mantissa
    if msb >= 128:
        r = ratio >> (msb - 127)
    else:
        r = ratio << (127 - msb)

    log_2 = (msb - 128) << 64
    for shift in range(63, 49, -1):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << shift
        r >>= f

    log_sqrt10001 = log_2 * _LOG_SQRT10001_MULTIPLIER

    tick_low = (log_sqrt10001 - _TICK_LOW_ERROR) >> 128
    tick_high = (log_sqrt10001 + _TICK_HIGH_ERROR) >> 128

    if tick_low == tick_high:
        return tick_low
    if get_sqrt_ratio_at_tick(tick_high) <= sqrt_price_x96:
        return tick_high
    return tick_low


def nearest_usable_tick(tick: int, tick_spacing: int) -> int:
    """Round a tick to the nearest multiple of tick_spacing inside the tick bounds

    Halfway values round up. A result that would fall outside
    [MIN_TICK, MAX_TICK] is moved one spacing back inside.

    Args:
        tick: tick to round
        tick_spacing: pool tick spacing (e.g. 60 for the 0.3% tier)

    Returns:
        usable tick
    """
    if tick_spacing <= 0:
        raise ValueError(f"tick_spacing must be positive: {tick_spacing}")
    if tick < MIN_TICK or tick > MAX_TICK:
        raise TickOutOfRange(
            f"tick {tick} is outside the valid range [{MIN_TICK}, {MAX_TICK}]"
        )

    rounded = ((2 * tick + tick_spacing) // (2 * tick_spacing)) * tick_spacing
    if rounded < MIN_TICK:
        return rounded + tick_spacing
    if rounded > MAX_TICK:
        return rounded - tick_spacing
    return rounded
