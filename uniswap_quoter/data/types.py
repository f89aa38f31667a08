"""
Quoter data types

Currencies and tick records. All numeric fields are int to keep on-chain
precision.
"""

from dataclasses import dataclass
from typing import Optional

from ..constants import ADDRESS_ZERO


@dataclass(frozen=True)
class Currency:
    """A token or the chain's native currency

    The zero address stands for the native currency. Decimals are carried for
    display and are never used by the quoting math.
    """
    chain_id: int
    address: str  # contract address, ADDRESS_ZERO for native
    decimals: int = 18
    symbol: Optional[str] = None

    @classmethod
    def native(cls, chain_id: int, symbol: str = "ETH") -> "Currency":
        return cls(chain_id=chain_id, address=ADDRESS_ZERO, decimals=18, symbol=symbol)

    @property
    def is_native(self) -> bool:
        return self.address.lower() == ADDRESS_ZERO

    def equals(self, other: "Currency") -> bool:
        """Same chain and same address (case-insensitive)"""
        return (
            self.chain_id == other.chain_id
            and self.address.lower() == other.address.lower()
        )

    def sorts_before(self, other: "Currency") -> bool:
        """Pool ordering: native first, then tokens by address"""
        if self.is_native:
            return not other.is_native
        if other.is_native:
            return False
        return self.address.lower() < other.address.lower()

    @classmethod
    def from_dict(cls, data: dict) -> "Currency":
        return cls(
            chain_id=int(data["chainId"]),
            address=data["address"],
            decimals=int(data.get("decimals", 18)),
            symbol=data.get("symbol"),
        )


@dataclass(frozen=True)
class Tick:
    """Tick-indexed liquidity (Whitepaper Section 6.3)

    - tick_idx: tick index
    - liquidity_gross: total liquidity referencing this tick; 0 = uninitialized
    - liquidity_net: ΔL applied when the price crosses the tick upward
    """
    tick_idx: int
    liquidity_gross: int
    liquidity_net: int

    @property
    def initialized(self) -> bool:
        return self.liquidity_gross != 0

    @classmethod
    def from_dict(cls, data: dict) -> "Tick":
        return cls(
            tick_idx=int(data["tickIdx"]),
            liquidity_gross=int(data.get("liquidityGross", 0)),
            liquidity_net=int(data.get("liquidityNet", 0)),
        )
