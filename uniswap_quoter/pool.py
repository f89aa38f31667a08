"""
Pool State - single-pool snapshot and the swap simulation loop

A PoolState is an immutable snapshot (price, tick, active liquidity, fee, tick
data). swap() walks the price across initialized ticks one step at a time
using a private SwapState, and never writes back to the snapshot.

References:
- Uniswap V3 Core: contracts/UniswapV3Pool.sol (swap)
- Whitepaper Section 6.3: Tick-Indexed State
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .constants import (
    MIN_TICK,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
    MAX_UINT128,
    MAX_FEE,
    TICKS_PER_WORD,
)
from .data.tick_data_store import TickDataStore
from .data.types import Currency, Tick
from .exceptions import (
    InsufficientLiquidity,
    InvalidAmount,
    InvalidPoolState,
    PriceOutOfRange,
)
from .math.liquidity_math import add_delta
from .math.sqrt_price_math import sqrt_price_x96_to_price
from .math.swap_math import compute_swap_step
from .math.tick_math import (
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    nearest_usable_tick,
)

logger = logging.getLogger(__name__)


@dataclass
class SwapState:
    """Mutable loop state, owned by a single swap() call"""
    amount_specified_remaining: int
    amount_calculated: int
    sqrt_price_x96: int
    tick: int
    liquidity: int


@dataclass(frozen=True)
class SwapResult:
    """Outcome of a simulated swap

    amount_calculated is signed from the pool's point of view: positive means
    paid into the pool, negative means paid out.
    """
    zero_for_one: bool
    amount_specified: int
    amount_specified_remaining: int
    amount_calculated: int
    sqrt_price_x96: int
    tick: int
    liquidity: int
    steps: int

    @property
    def exact_input(self) -> bool:
        return self.amount_specified >= 0

    @property
    def amount0(self) -> int:
        """token0 delta of the pool"""
        if self.zero_for_one == self.exact_input:
            return self.amount_specified - self.amount_specified_remaining
        return self.amount_calculated

    @property
    def amount1(self) -> int:
        """token1 delta of the pool"""
        if self.zero_for_one == self.exact_input:
            return self.amount_calculated
        return self.amount_specified - self.amount_specified_remaining


@dataclass(frozen=True)
class PoolState:
    """Concentrated liquidity pool snapshot

    Global State (Whitepaper Section 6.2):
    - sqrt_price_x96: current √price (Q64.96)
    - tick: current tick, the floor tick of sqrt_price_x96
    - liquidity: active liquidity at the current price
    - fee: swap fee in pips (3000 = 0.30%)

    Usage:
        pool = PoolState.from_full_range(eth, token, 3000, 60, sqrt_price_x96, liquidity, tick)
        result = pool.swap(zero_for_one=True, amount_specified=10**18)
    """
    currency0: Currency
    currency1: Currency
    fee: int
    tick_spacing: int
    sqrt_price_x96: int
    liquidity: int
    tick: int
    ticks: TickDataStore = field(repr=False)

    def __post_init__(self):
        if not 0 <= self.fee < MAX_FEE:
            raise InvalidPoolState(f"fee must be in [0, {MAX_FEE}): {self.fee}")
        if self.tick_spacing <= 0:
            raise InvalidPoolState(f"tick_spacing must be positive: {self.tick_spacing}")
        if self.ticks.tick_spacing != self.tick_spacing:
            raise InvalidPoolState(
                f"tick data spacing {self.ticks.tick_spacing} != pool spacing {self.tick_spacing}"
            )
        if self.currency0.chain_id != self.currency1.chain_id:
            raise InvalidPoolState("pool currencies are on different chains")
        if self.currency0.equals(self.currency1):
            raise InvalidPoolState("pool currencies must differ")
        if not self.currency0.sorts_before(self.currency1):
            raise InvalidPoolState("currency0 must sort before currency1")
        if not 0 <= self.liquidity <= MAX_UINT128:
            raise InvalidPoolState(f"liquidity is outside the uint128 range: {self.liquidity}")
        if not MIN_TICK <= self.tick <= MAX_TICK:
            raise InvalidPoolState(f"tick {self.tick} is outside the tick range")

        # the price may sit exactly on the next tick after a downward crossing
        lower = get_sqrt_ratio_at_tick(self.tick)
        upper = get_sqrt_ratio_at_tick(self.tick + 1) if self.tick < MAX_TICK else MAX_SQRT_RATIO
        if not lower <= self.sqrt_price_x96 <= upper:
            raise InvalidPoolState(
                f"sqrtPriceX96 {self.sqrt_price_x96} does not belong to tick {self.tick}"
            )

        active = self.ticks.liquidity_at_or_below(self.tick)
        if active != self.liquidity:
            raise InvalidPoolState(
                f"liquidity {self.liquidity} does not match tick data ({active}) at tick {self.tick}"
            )

    @classmethod
    def from_full_range(
        cls,
        currency_a: Currency,
        currency_b: Currency,
        fee: int,
        tick_spacing: int,
        sqrt_price_x96: int,
        liquidity: int,
        tick: int
    ) -> "PoolState":
        """Pool seeded with a single position covering the whole usable tick range

        Args:
            currency_a, currency_b: pool currencies in any order
            fee: fee in pips
            tick_spacing: tick spacing
            sqrt_price_x96: current sqrtPriceX96
            liquidity: liquidity of the full-range position (= active liquidity)
            tick: current tick

        Returns:
            PoolState with ticks at the lowest and highest usable ticks
        """
        if currency_a.sorts_before(currency_b):
            currency0, currency1 = currency_a, currency_b
        else:
            currency0, currency1 = currency_b, currency_a

        try:
            tick_lower = nearest_usable_tick(MIN_TICK, tick_spacing)
            tick_upper = nearest_usable_tick(MAX_TICK, tick_spacing)
        except ValueError as e:
            raise InvalidPoolState(str(e)) from e

        ticks = TickDataStore(
            [
                Tick(tick_idx=tick_lower, liquidity_gross=liquidity, liquidity_net=liquidity),
                Tick(tick_idx=tick_upper, liquidity_gross=liquidity, liquidity_net=-liquidity),
            ],
            tick_spacing=tick_spacing,
        )

        return cls(
            currency0=currency0,
            currency1=currency1,
            fee=fee,
            tick_spacing=tick_spacing,
            sqrt_price_x96=sqrt_price_x96,
            liquidity=liquidity,
            tick=tick,
            ticks=ticks,
        )

    @property
    def mid_price(self) -> float:
        """Current price of currency0 in currency1, decimals-adjusted (display only)"""
        return sqrt_price_x96_to_price(
            self.sqrt_price_x96,
            self.currency0.decimals,
            self.currency1.decimals
        )

    def involves_currency(self, currency: Currency) -> bool:
        return currency.equals(self.currency0) or currency.equals(self.currency1)

    def _max_steps(self) -> int:
        # one step per initialized tick plus one per bitmap word in range
        words = (
            (MAX_TICK // self.tick_spacing) // TICKS_PER_WORD
            - (MIN_TICK // self.tick_spacing) // TICKS_PER_WORD
            + 1
        )
        return len(self.ticks) + words + 2

    def _resolve_price_limit(self, zero_for_one: bool, sqrt_price_limit_x96: Optional[int]) -> int:
        if sqrt_price_limit_x96 is None:
            limit = MIN_SQRT_RATIO + 1 if zero_for_one else MAX_SQRT_RATIO - 1
            if (zero_for_one and self.sqrt_price_x96 <= limit) or \
                    (not zero_for_one and self.sqrt_price_x96 >= limit):
                raise InsufficientLiquidity("pool price is already at its bound")
            return limit

        if zero_for_one:
            if not MIN_SQRT_RATIO < sqrt_price_limit_x96 < self.sqrt_price_x96:
                raise PriceOutOfRange(
                    f"price limit {sqrt_price_limit_x96} must be in "
                    f"({MIN_SQRT_RATIO}, {self.sqrt_price_x96}) for a zero-for-one swap"
                )
        elif not self.sqrt_price_x96 < sqrt_price_limit_x96 < MAX_SQRT_RATIO:
            raise PriceOutOfRange(
                f"price limit {sqrt_price_limit_x96} must be in "
                f"({self.sqrt_price_x96}, {MAX_SQRT_RATIO}) for a one-for-zero swap"
            )
        return sqrt_price_limit_x96

    def swap(
        self,
        zero_for_one: bool,
        amount_specified: int,
        sqrt_price_limit_x96: Optional[int] = None
    ) -> SwapResult:
        """Simulate a swap against this snapshot

        Args:
            zero_for_one: True swaps token0 in for token1 out
            amount_specified: > 0 exact input, < 0 exact output
            sqrt_price_limit_x96: price the swap may not pass; defaults to
                one unit inside the global bound in the trade direction

        Returns:
            SwapResult; amount_specified_remaining is non-zero when the price
            limit was hit before the amount was filled

        Raises:
            InvalidAmount: amount_specified is zero
            PriceOutOfRange: invalid explicit price limit
            InsufficientLiquidity: price already at its bound, or the step
                bound was exceeded
        """
        if amount_specified == 0:
            raise InvalidAmount("amount_specified must be non-zero")

        exact_input = amount_specified > 0
        limit = self._resolve_price_limit(zero_for_one, sqrt_price_limit_x96)
        max_steps = self._max_steps()

        state = SwapState(
            amount_specified_remaining=amount_specified,
            amount_calculated=0,
            sqrt_price_x96=self.sqrt_price_x96,
            tick=self.tick,
            liquidity=self.liquidity,
        )
        steps = 0

        while state.amount_specified_remaining != 0 and state.sqrt_price_x96 != limit:
            steps += 1
            if steps > max_steps:
                raise InsufficientLiquidity(
                    f"swap did not settle within {max_steps} steps"
                )

            sqrt_price_start_x96 = state.sqrt_price_x96

            tick_next, initialized = self.ticks.next_initialized_tick_within_one_word(
                state.tick, zero_for_one
            )
            # the tick data is not aware of the global tick bounds
            tick_next = max(MIN_TICK, min(MAX_TICK, tick_next))
            sqrt_price_next_x96 = get_sqrt_ratio_at_tick(tick_next)

            if zero_for_one:
                target = max(sqrt_price_next_x96, limit)
            else:
                target = min(sqrt_price_next_x96, limit)

            state.sqrt_price_x96, amount_in, amount_out, fee_amount = compute_swap_step(
                state.sqrt_price_x96,
                target,
                state.liquidity,
                state.amount_specified_remaining,
                self.fee,
            )

            if exact_input:
                state.amount_specified_remaining -= amount_in + fee_amount
                state.amount_calculated -= amount_out
            else:
                state.amount_specified_remaining += amount_out
                state.amount_calculated += amount_in + fee_amount

            logger.debug(
                "step %d: tick_next=%d initialized=%s in=%d out=%d fee=%d remaining=%d",
                steps, tick_next, initialized, amount_in, amount_out, fee_amount,
                state.amount_specified_remaining,
            )

            if state.sqrt_price_x96 == sqrt_price_next_x96:
                if initialized:
                    liquidity_net = self.ticks.get_tick(tick_next).liquidity_net
                    if zero_for_one:
                        liquidity_net = -liquidity_net
                    state.liquidity = add_delta(state.liquidity, liquidity_net)
                state.tick = tick_next - 1 if zero_for_one else tick_next
            elif state.sqrt_price_x96 != sqrt_price_start_x96:
                state.tick = get_tick_at_sqrt_ratio(state.sqrt_price_x96)

        logger.debug(
            "swap done after %d steps: calculated=%d remaining=%d sqrt_price=%d tick=%d",
            steps, state.amount_calculated, state.amount_specified_remaining,
            state.sqrt_price_x96, state.tick,
        )

        return SwapResult(
            zero_for_one=zero_for_one,
            amount_specified=amount_specified,
            amount_specified_remaining=state.amount_specified_remaining,
            amount_calculated=state.amount_calculated,
            sqrt_price_x96=state.sqrt_price_x96,
            tick=state.tick,
            liquidity=state.liquidity,
            steps=steps,
        )

    def after_swap(self, result: SwapResult) -> "PoolState":
        """New snapshot with the post-swap price, tick and liquidity"""
        return replace(
            self,
            sqrt_price_x96=result.sqrt_price_x96,
            tick=result.tick,
            liquidity=result.liquidity,
        )

    def _check_currency(self, currency: Currency) -> None:
        if not self.involves_currency(currency):
            raise InvalidAmount(f"currency {currency.address} is not in this pool")

    def get_output_amount(
        self,
        input_currency: Currency,
        amount_in: int,
        sqrt_price_limit_x96: Optional[int] = None
    ) -> Tuple[int, "PoolState"]:
        """Output for an exact input amount

        Returns:
            (amount_out, pool state after the swap)

        Raises:
            InsufficientLiquidity: the input could not be fully consumed
        """
        self._check_currency(input_currency)
        zero_for_one = input_currency.equals(self.currency0)

        result = self.swap(zero_for_one, amount_in, sqrt_price_limit_x96)
        if result.amount_specified_remaining != 0:
            raise InsufficientLiquidity(
                f"pool can only absorb {amount_in - result.amount_specified_remaining} "
                f"of {amount_in} input"
            )
        return -result.amount_calculated, self.after_swap(result)

    def get_input_amount(
        self,
        output_currency: Currency,
        amount_out: int,
        sqrt_price_limit_x96: Optional[int] = None
    ) -> Tuple[int, "PoolState"]:
        """Input required for an exact output amount

        Returns:
            (amount_in, pool state after the swap)

        Raises:
            InsufficientLiquidity: the output could not be fully delivered
        """
        self._check_currency(output_currency)
        zero_for_one = output_currency.equals(self.currency1)

        result = self.swap(zero_for_one, -amount_out, sqrt_price_limit_x96)
        if result.amount_specified_remaining != 0:
            raise InsufficientLiquidity(
                f"pool can only deliver {amount_out + result.amount_specified_remaining} "
                f"of {amount_out} output"
            )
        return result.amount_calculated, self.after_swap(result)


__all__ = ["PoolState", "SwapState", "SwapResult"]
