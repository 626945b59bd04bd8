"""Trader - aggregated performance stats for one address."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Trader(BaseModel):
    model_config = ConfigDict(frozen=True)

    trader_address: str = Field(..., min_length=1)
    total_markets_entered: int = Field(..., ge=0)
    total_markets_resolved: int = Field(..., ge=0)
    total_wins: int = Field(..., ge=0)
    accuracy: float = Field(..., allow_inf_nan=False)
    total_invested: float
    total_returned: float
    roi: float = Field(..., allow_inf_nan=False)

    @model_validator(mode="after")
    def _ordered_counts(self) -> Trader:
        if not self.total_wins <= self.total_markets_resolved <= self.total_markets_entered:
            raise ValueError(
                "expected total_wins <= total_markets_resolved <= total_markets_entered, got "
                f"{self.total_wins}/{self.total_markets_resolved}/{self.total_markets_entered}"
            )
        return self
