"""Transaction - one historical trade event."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Transaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    block_number: int = Field(..., ge=0)
    transaction_hash: str
    trader_address: str
    token_id: str
    side: str = Field(..., pattern="^(YES|NO)$")
    action: str = Field(..., pattern="^(BUY|SELL)$")
    shares: float
    usdc_amount: float
    market_id: str
