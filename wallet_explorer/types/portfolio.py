from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_DECIMALS = 18


class TokenMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: Optional[str] = Field(default=None, description="Full token name")
    symbol: Optional[str] = Field(default=None, description="Token symbol (e.g. USDC)")
    decimal_places: int = Field(
        default=DEFAULT_DECIMALS,
        validation_alias=AliasChoices("decimal_places", "decimalPlaces", "decimals"),
        serialization_alias="decimalPlaces",
        description="Fractional digits implied by the raw integer balance",
    )
    logo_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("logo_url", "logoUrl", "logo"),
        serialization_alias="logoUrl",
        description="Token logo URL",
    )

    @field_validator("decimal_places", mode="before")
    @classmethod
    def _parse_decimals(cls, value: Any) -> int:
        # Providers send ints, decimal strings, hex strings or null
        if value is None or isinstance(value, bool):
            return DEFAULT_DECIMALS
        if isinstance(value, int):
            return value if value >= 0 else DEFAULT_DECIMALS
        text = str(value).strip().lower()
        try:
            if text.startswith("0x"):
                parsed = int(text, 16)
            else:
                # "6.0" and 6.0 are whole numbers too
                number = Decimal(text)
                if not number.is_finite() or number != number.to_integral_value():
                    return DEFAULT_DECIMALS
                parsed = int(number)
        except (ValueError, InvalidOperation):
            return DEFAULT_DECIMALS
        return parsed if parsed >= 0 else DEFAULT_DECIMALS


class TokenPrice(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    currency: str = Field(default="usd", description="Quote currency")
    value: str = Field(default="0", description="Unit price as delivered by the provider")
    last_updated_at: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("last_updated_at", "lastUpdatedAt"),
        serialization_alias="lastUpdatedAt",
    )

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        return "0" if value is None else str(value)


class RawBalanceEntry(BaseModel):
    """A token holding exactly as the upstream balance provider reported it."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    contract_address: Optional[str] = Field(
        default=None,
        alias="contractAddress",
        description="Token contract address (None for the native asset)",
    )
    raw_balance: str = Field(
        default="0",
        alias="rawBalance",
        description="Balance in the smallest unit, hex (0x...) or decimal string",
    )
    metadata: TokenMetadata = Field(default_factory=TokenMetadata)
    prices: List[TokenPrice] = Field(default_factory=list)
    network: Optional[str] = Field(default=None, description="Provider network slug")

    @property
    def usd_price(self) -> Optional[TokenPrice]:
        """Prefer a USD quote; otherwise whatever the provider listed first."""
        for price in self.prices:
            if price.currency.lower() == "usd":
                return price
        return self.prices[0] if self.prices else None


class PageResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    entries: List[RawBalanceEntry] = Field(default_factory=list)
    continuation_token: Optional[str] = Field(default=None, description="pageKey for the next page")


class NormalizedBalance(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contract_address: Optional[str] = Field(default=None, alias="contractAddress")
    raw_balance: str = Field(alias="rawBalance", description="Balance as a decimal integer string")
    decimal_balance: float = Field(alias="decimalBalance")
    price_usd: float = Field(alias="priceUsd")
    value_usd: float = Field(alias="valueUsd")
    metadata: TokenMetadata
