"""
Protocol constants for the swap quoter

Fixed-point encoding, tick/price bounds and fee units shared by every module:
- Q96: sqrt price encoding (2^96)
- MIN_TICK / MAX_TICK: tick index range
- MIN_SQRT_RATIO / MAX_SQRT_RATIO: sqrtPriceX96 range
- MAX_FEE: fee denominator (fees are quoted in pips, 1e-6)
"""

# Fixed-point encoding
Q96: int = 2 ** 96
Q128: int = 2 ** 128

# Integer widths
MAX_UINT128: int = 2 ** 128 - 1
MAX_UINT160: int = 2 ** 160 - 1
MAX_UINT256: int = 2 ** 256 - 1

# Tick range
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# sqrtPriceX96 at MIN_TICK and MAX_TICK
MIN_SQRT_RATIO: int = 4295128739
MAX_SQRT_RATIO: int = 1461446703485210103287273052203988822378723970342

# Fees are in pips: 3000 = 0.30%
MAX_FEE: int = 1_000_000

# Ticks per bitmap word
TICKS_PER_WORD: int = 256

# Address used for the chain's native currency
ADDRESS_ZERO: str = "0x0000000000000000000000000000000000000000"
