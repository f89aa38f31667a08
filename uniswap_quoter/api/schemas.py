"""
Request/Response Schemas using Pydantic

QuoteRequest is the ten-field pool + trade descriptor shared by the CLI and
the HTTP API. Big integers may be given as decimal strings.
"""
from typing import Sequence

from pydantic import BaseModel, Field, field_validator, model_validator

from ..config import settings
from ..constants import ADDRESS_ZERO
from ..data.types import Currency
from ..pool import PoolState

ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"

# Positional order used by the command line scripts
QUOTE_FIELDS = (
    "chain_id",
    "currency1_address",
    "currency1_decimals",
    "tick",
    "liquidity",
    "sqrt_ratio_x96",
    "fee",
    "tick_spacing",
    "currency_address",
    "raw_amount",
)


class QuoteRequest(BaseModel):
    """Pool snapshot with one full-range position, plus the specified side of a trade"""
    chain_id: int = Field(default=settings.DEFAULT_CHAIN_ID, description="Chain ID of both currencies", gt=0)
    currency1_address: str = Field(..., description="Token paired with the native currency", pattern=ADDRESS_PATTERN)
    currency1_decimals: int = Field(default=18, description="Token decimals (display only)", ge=0, le=255)
    tick: int = Field(..., description="Current tick")
    liquidity: int = Field(..., description="Active liquidity (full-range position)", ge=0)
    sqrt_ratio_x96: int = Field(..., description="Current sqrtPriceX96", gt=0)
    fee: int = Field(..., description="Fee in pips (3000 = 0.30%)", ge=0, lt=1_000_000)
    tick_spacing: int = Field(..., description="Tick spacing", gt=0)
    currency_address: str = Field(..., description="Specified currency; zero address for native", pattern=ADDRESS_PATTERN)
    raw_amount: int = Field(..., description="Specified amount in the smallest unit")

    class Config:
        json_schema_extra = {
            "example": {
                "chain_id": 11155111,
                "currency1_address": "0x7db8A8D1E9483115b9e8028d610e3C365c649f6a",
                "currency1_decimals": 18,
                "tick": 161189,
                "liquidity": "3162275221685340688940",
                "sqrt_ratio_x96": "250541255178517414234103244537599",
                "fee": 3000,
                "tick_spacing": 60,
                "currency_address": "0x7db8A8D1E9483115b9e8028d610e3C365c649f6a",
                "raw_amount": "1000000000000000000000000"
            }
        }

    @field_validator(
        "chain_id", "currency1_decimals", "tick", "liquidity",
        "sqrt_ratio_x96", "fee", "tick_spacing", "raw_amount",
        mode="before"
    )
    @classmethod
    def parse_decimal_string(cls, value):
        if isinstance(value, str):
            value = value.strip().strip('"')
            try:
                return int(value, 10)
            except ValueError:
                raise ValueError(f"not a base-10 integer: {value!r}") from None
        return value

    @field_validator("currency1_address", "currency_address", mode="before")
    @classmethod
    def strip_address(cls, value):
        if isinstance(value, str):
            return value.strip().strip('"')
        return value

    @model_validator(mode="after")
    def check_specified_currency(self) -> "QuoteRequest":
        if self.currency1_address.lower() == ADDRESS_ZERO:
            raise ValueError("currency1_address must be a token, not the native currency")
        specified = self.currency_address.lower()
        if specified not in (ADDRESS_ZERO, self.currency1_address.lower()):
            raise ValueError(
                f"currency_address {self.currency_address} is neither native nor currency1"
            )
        return self

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "QuoteRequest":
        """Build from the ten positional command line fields"""
        if len(fields) != len(QUOTE_FIELDS):
            raise ValueError(
                f"expected {len(QUOTE_FIELDS)} fields, got {len(fields)}"
            )
        return cls(**dict(zip(QUOTE_FIELDS, fields)))

    def native_currency(self) -> Currency:
        return Currency.native(self.chain_id)

    def token_currency(self) -> Currency:
        return Currency(
            chain_id=self.chain_id,
            address=self.currency1_address,
            decimals=self.currency1_decimals,
        )

    def specified_currency(self) -> Currency:
        """Native when currency_address is the zero address, else the token"""
        if self.currency_address.lower() == ADDRESS_ZERO:
            return self.native_currency()
        return self.token_currency()

    def build_pool(self) -> PoolState:
        """Native/token pool seeded with one full-range position of `liquidity`"""
        return PoolState.from_full_range(
            self.native_currency(),
            self.token_currency(),
            fee=self.fee,
            tick_spacing=self.tick_spacing,
            sqrt_price_x96=self.sqrt_ratio_x96,
            liquidity=self.liquidity,
            tick=self.tick,
        )


class QuoteResponse(BaseModel):
    """Computed side of a quote"""
    amount: str = Field(..., description="Computed amount (decimal string)")
    encoded: str = Field(..., description="amount as a 0x-prefixed 32-byte ABI uint256")
    exact_input: bool = Field(..., description="True when raw_amount was the input")
    zero_for_one: bool = Field(..., description="True when token0 (native) is paid in")
    sqrt_price_x96_after: str = Field(..., description="Pool sqrtPriceX96 after the swap")
    tick_after: int = Field(..., description="Pool tick after the swap")
    mid_price_after: float = Field(..., description="Token per native after the swap (display only)")

    class Config:
        json_schema_extra = {
            "example": {
                "amount": "111445638425664157",
                "encoded": "0x000000000000000000000000000000000000000000000000018bef37ba20da9d",
                "exact_input": False,
                "zero_for_one": True,
                "sqrt_price_x96_after": "225487091021344676020609419268119",
                "tick_after": 159081,
                "mid_price_after": 8099984.73
            }
        }


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")


class ErrorResponse(BaseModel):
    """Error response"""
    detail: str = Field(..., description="Error message")
