"""
Tick Data Store - sorted, read-only tick liquidity

Holds the initialized ticks of one pool in index order and answers "next
initialized tick in direction D from tick I" with a binary search. Searches
are bounded to one 256-spacing bitmap word so the swap loop steps exactly like
the on-chain tick bitmap.

The store is immutable after construction and safe to share between threads.

References:
- Uniswap V3 Core: contracts/libraries/TickBitmap.sol
- Uniswap V3 SDK: src/utils/tickList.ts
"""

from bisect import bisect_right
from typing import Iterable, Iterator, List, Tuple

from ..constants import MIN_TICK, MAX_TICK, TICKS_PER_WORD
from ..exceptions import InvalidPoolState
from .types import Tick


class TickDataStore:
    """Initialized ticks of a pool, sorted by index

    Usage:
        store = TickDataStore([Tick(-887220, L, L), Tick(887220, L, -L)], tick_spacing=60)
        next_tick, initialized = store.next_initialized_tick_within_one_word(161189, lte=False)
    """

    def __init__(self, ticks: Iterable[Tick], tick_spacing: int):
        """
        Args:
            ticks: tick records; uninitialized (zero gross) entries are dropped
            tick_spacing: pool tick spacing

        Raises:
            InvalidPoolState: misaligned, duplicated or out-of-range ticks,
                negative gross liquidity, or liquidity_net not summing to zero
        """
        if tick_spacing <= 0:
            raise InvalidPoolState(f"tick_spacing must be positive: {tick_spacing}")

        self.tick_spacing = tick_spacing

        initialized = sorted(
            (t for t in ticks if t.liquidity_gross != 0),
            key=lambda t: t.tick_idx
        )
        self._validate(initialized, tick_spacing)

        self._ticks: Tuple[Tick, ...] = tuple(initialized)
        self._indices: List[int] = [t.tick_idx for t in initialized]

    @staticmethod
    def _validate(ticks: List[Tick], tick_spacing: int) -> None:
        previous = None
        for t in ticks:
            if t.tick_idx < MIN_TICK or t.tick_idx > MAX_TICK:
                raise InvalidPoolState(f"tick {t.tick_idx} is outside the tick range")
            if t.tick_idx % tick_spacing != 0:
                raise InvalidPoolState(
                    f"tick {t.tick_idx} is not a multiple of tick spacing {tick_spacing}"
                )
            if t.liquidity_gross < 0:
                raise InvalidPoolState(f"tick {t.tick_idx} has negative gross liquidity")
            if previous is not None and previous == t.tick_idx:
                raise InvalidPoolState(f"tick {t.tick_idx} appears more than once")
            previous = t.tick_idx

        if sum(t.liquidity_net for t in ticks) != 0:
            raise InvalidPoolState("liquidity_net over all ticks must sum to zero")

    def __len__(self) -> int:
        return len(self._ticks)

    def __iter__(self) -> Iterator[Tick]:
        return iter(self._ticks)

    def __contains__(self, tick_idx: int) -> bool:
        i = bisect_right(self._indices, tick_idx) - 1
        return i >= 0 and self._indices[i] == tick_idx

    def __repr__(self) -> str:
        return f"TickDataStore(ticks={len(self._ticks)}, tick_spacing={self.tick_spacing})"

    def get_tick(self, tick_idx: int) -> Tick:
        """Stored tick, or an uninitialized record if none exists"""
        i = bisect_right(self._indices, tick_idx) - 1
        if i >= 0 and self._indices[i] == tick_idx:
            return self._ticks[i]
        return Tick(tick_idx=tick_idx, liquidity_gross=0, liquidity_net=0)

    def liquidity_at_or_below(self, tick_idx: int) -> int:
        """Sum of liquidity_net over ticks <= tick_idx (active liquidity at that tick)"""
        end = bisect_right(self._indices, tick_idx)
        return sum(t.liquidity_net for t in self._ticks[:end])

    def _is_below_smallest(self, tick: int) -> bool:
        return not self._indices or tick < self._indices[0]

    def _is_at_or_above_largest(self, tick: int) -> bool:
        return not self._indices or tick >= self._indices[-1]

    def next_initialized_tick(self, tick: int, lte: bool) -> Tick:
        """Nearest initialized tick <= tick (lte) or > tick (not lte)

        Raises:
            ValueError: no initialized tick exists in that direction
        """
        if lte:
            if self._is_below_smallest(tick):
                raise ValueError(f"no initialized tick at or below {tick}")
            return self._ticks[bisect_right(self._indices, tick) - 1]

        if self._is_at_or_above_largest(tick):
            raise ValueError(f"no initialized tick above {tick}")
        return self._ticks[bisect_right(self._indices, tick)]

    def next_initialized_tick_within_one_word(self, tick: int, lte: bool) -> Tuple[int, bool]:
        """Next initialized tick in direction, bounded to one bitmap word

        Searching left (lte) covers ticks <= tick down to the start of the word
        holding tick. Searching right covers ticks > tick up to the end of the
        word holding the next compressed tick.

        Args:
            tick: starting tick
            lte: True searches left (price moving down)

        Returns:
            (next_tick, initialized) where initialized is False when the word
            boundary was returned instead of a stored tick
        """
        compressed = tick // self.tick_spacing

        if lte:
            word_pos = compressed // TICKS_PER_WORD
            minimum = word_pos * TICKS_PER_WORD * self.tick_spacing
            if self._is_below_smallest(tick):
                return minimum, False

            index = self.next_initialized_tick(tick, True).tick_idx
            next_tick = max(minimum, index)
            return next_tick, next_tick == index

        word_pos = (compressed + 1) // TICKS_PER_WORD
        maximum = ((word_pos + 1) * TICKS_PER_WORD - 1) * self.tick_spacing
        if self._is_at_or_above_largest(tick):
            return maximum, False

        index = self.next_initialized_tick(tick, False).tick_idx
        next_tick = min(maximum, index)
        return next_tick, next_tick == index
