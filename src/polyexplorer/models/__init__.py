"""Standardized schema (Pydantic) - MarketGroup, Market, Trader, Position, Transaction."""

from polyexplorer.models.market import Market, MarketGroup
from polyexplorer.models.position import Position
from polyexplorer.models.trader import Trader
from polyexplorer.models.transaction import Transaction

__all__ = [
    "MarketGroup",
    "Market",
    "Trader",
    "Position",
    "Transaction",
]
