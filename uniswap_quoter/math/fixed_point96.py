"""
FixedPoint96 - Q64.96 fixed-point arithmetic

sqrt prices are stored as sqrtPriceX96 = sqrt(price) * 2^96. Every
multiplication that could exceed 256 bits on-chain goes through mul_div, which
keeps the full-width intermediate and checks only the final result.

References:
- Uniswap V3 Core: contracts/libraries/FixedPoint96.sol
- Uniswap V3 Core: contracts/libraries/FullMath.sol
"""

from ..constants import Q96, MAX_UINT256
from ..exceptions import DivisionByZero, Overflow


RESOLUTION: int = 96


def _check_uint256(name: str, value: int) -> None:
    if value < 0 or value > MAX_UINT256:
        raise Overflow(f"{name} is outside the uint256 range: {value}")


def mul_div(a: int, b: int, denominator: int, round_up: bool = False) -> int:
    """(a * b) / denominator with full-width intermediate

    Args:
        a: multiplicand (uint256)
        b: multiplier (uint256)
        denominator: divisor (uint256, non-zero)
        round_up: True for ceiling, False for floor

    Returns:
        The quotient, rounded as requested

    Raises:
        DivisionByZero: denominator is zero
        Overflow: an operand or the result does not fit in uint256
    """
    _check_uint256("a", a)
    _check_uint256("b", b)
    _check_uint256("denominator", denominator)
    if denominator == 0:
        raise DivisionByZero("mul_div denominator is zero")

    result, remainder = divmod(a * b, denominator)
    if round_up and remainder > 0:
        result += 1

    if result > MAX_UINT256:
        raise Overflow(f"mul_div result exceeds uint256: {result}")
    return result


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """ceil((a * b) / denominator)"""
    return mul_div(a, b, denominator, round_up=True)


def div_rounding_up(x: int, y: int) -> int:
    """ceil(x / y) for unsigned x, y"""
    if y == 0:
        raise DivisionByZero("div_rounding_up divisor is zero")
    quotient, remainder = divmod(x, y)
    return quotient + (1 if remainder > 0 else 0)


__all__ = [
    "Q96",
    "RESOLUTION",
    "mul_div",
    "mul_div_rounding_up",
    "div_rounding_up",
]
