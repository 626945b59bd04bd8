"""Raw Gamma API shapes (camelCase on the wire)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GammaMarketResponse(BaseModel):
    """One market inside a Gamma event. List fields arrive as JSON-encoded strings."""

    model_config = ConfigDict(populate_by_name=True)

    question: str
    condition_id: str = Field(..., alias="conditionId")
    slug: str
    outcomes: str | list[str]
    outcome_prices: str | list[str] = Field(..., alias="outcomePrices")
    clob_token_ids: str | list[str] = Field(..., alias="clobTokenIds")
    active: bool
    closed: bool
    # Gamma omits volume windows and book fields on fresh or illiquid markets
    volume_num: float = Field(0.0, alias="volumeNum")
    volume_24hr: float = Field(0.0, alias="volume24hr")
    volume_1wk: float = Field(0.0, alias="volume1wk")
    volume_1mo: float = Field(0.0, alias="volume1mo")
    volume_1yr: float = Field(0.0, alias="volume1yr")
    liquidity_num: float = Field(0.0, alias="liquidityNum")
    competitive: float = 0.0
    last_trade_price: float = Field(0.0, alias="lastTradePrice")
    best_bid: float = Field(0.0, alias="bestBid")
    best_ask: float = Field(0.0, alias="bestAsk")


class GammaMarketGroupResponse(BaseModel):
    """Gamma event: a group of related markets, fetched by slug."""

    model_config = ConfigDict(populate_by_name=True)

    slug: str
    title: str
    active: bool
    closed: bool
    volume: float = 0.0
    liquidity: float = 0.0
    markets: list[GammaMarketResponse] = Field(default_factory=list)
