"""MarketGroup, Market - standardized market metadata."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Market(BaseModel):
    """One binary-outcome contract."""

    model_config = ConfigDict(frozen=True)

    question: str = Field(..., min_length=1)
    condition_id: str = Field(..., min_length=1)
    slug: str
    outcomes: list[str] = Field(..., min_length=2, max_length=2)
    # Kept as the source's strings to preserve precision
    outcome_prices: list[str] = Field(..., min_length=2, max_length=2)
    yes_token_id: str = Field(..., min_length=1)
    no_token_id: str = Field(..., min_length=1)
    active: bool
    closed: bool
    volume: float = Field(..., ge=0)
    volume_24h: float = Field(0.0, ge=0)
    volume_1w: float = Field(0.0, ge=0)
    volume_1m: float = Field(0.0, ge=0)
    volume_1y: float = Field(0.0, ge=0)
    liquidity: float = Field(..., ge=0)
    competitive: float = 0.0
    last_trade_price: float = 0.0
    best_bid: float = 0.0
    best_ask: float = 0.0

    @model_validator(mode="after")
    def _distinct_tokens(self) -> Market:
        if self.yes_token_id == self.no_token_id:
            raise ValueError("yes_token_id and no_token_id must differ")
        return self


class MarketGroup(BaseModel):
    """Related markets under one topic (Gamma event)."""

    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    active: bool
    closed: bool
    volume: float = Field(..., ge=0)
    liquidity: float = Field(..., ge=0)
    markets: list[Market] = Field(default_factory=list)

    def find_market(self, selector: str) -> Market | None:
        """Match selector against slug, condition id, or 1-based index."""
        for market in self.markets:
            if selector in (market.slug, market.condition_id):
                return market
        if selector.isdigit():
            idx = int(selector) - 1
            if 0 <= idx < len(self.markets):
                return self.markets[idx]
        return None
