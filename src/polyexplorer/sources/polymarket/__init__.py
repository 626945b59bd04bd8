"""Polymarket Gamma API source."""

from polyexplorer.sources.polymarket.source import PolymarketApiSource

__all__ = ["PolymarketApiSource"]
