"""
Quoter errors

Every failure is deterministic and derived from the inputs, so none of these
are retryable. Each error also derives from the closest builtin so callers
that only know about ValueError / ArithmeticError still catch them.
"""


class QuoterError(Exception):
    """Base class for all quoting failures"""
    pass


class InvalidAmount(QuoterError, ValueError):
    """Requested amount is zero, negative, or names a currency the pool does not hold"""
    pass


class TickOutOfRange(QuoterError, ValueError):
    """Tick index outside [MIN_TICK, MAX_TICK]"""
    pass


class PriceOutOfRange(QuoterError, ValueError):
    """sqrtPriceX96 outside [MIN_SQRT_RATIO, MAX_SQRT_RATIO)"""
    pass


class InvalidPoolState(QuoterError, ValueError):
    """Pool or tick data violates a structural invariant"""
    pass


class LiquidityAddOverflow(QuoterError, ArithmeticError):
    """Liquidity delta pushed liquidity above uint128"""
    pass


class LiquiditySubOverflow(QuoterError, ArithmeticError):
    """Liquidity delta pushed liquidity below zero"""
    pass


class Overflow(QuoterError, ArithmeticError):
    """Operand or result outside the fixed integer width"""
    pass


class DivisionByZero(QuoterError, ZeroDivisionError):
    """mul_div / div_rounding_up called with a zero denominator"""
    pass


class InsufficientLiquidity(QuoterError):
    """The pool cannot fill the requested amount before the price leaves its valid range"""
    pass
