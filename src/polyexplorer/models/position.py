"""Position - one trader's stake in one market outcome."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    trader_address: str = Field(..., min_length=1)
    token_id: str
    market_id: str  # condition id
    side: str = Field(..., pattern="^(YES|NO)$")
    shares_held: float = Field(..., ge=0)
    avg_entry_price: float
    first_entry_block: int | None = None
