"""Data sources behind provider interfaces."""

from polyexplorer.sources.base import (
    MarketMetadataProvider,
    PositionProvider,
    TraderStatsProvider,
    TransactionProvider,
)

__all__ = [
    "MarketMetadataProvider",
    "TraderStatsProvider",
    "PositionProvider",
    "TransactionProvider",
]
