"""Provider capability contracts. A source implements only what it supports."""

from __future__ import annotations

from abc import ABC, abstractmethod

from polyexplorer.models import Market, MarketGroup, Position, Trader, Transaction


class MarketMetadataProvider(ABC):
    """Market metadata lookup by slug."""

    @abstractmethod
    async def get_market_group(self, slug: str) -> MarketGroup:
        """Return the group (event) addressed by slug with all its markets."""
        ...

    @abstractmethod
    async def get_market(self, slug: str) -> Market:
        """Return a single market addressed by its own slug."""
        ...


class TraderStatsProvider(ABC):
    """Trader performance stats."""

    @abstractmethod
    async def get_traders(self, min_resolved_markets: int) -> list[Trader]:
        """Traders with at least min_resolved_markets resolved markets."""
        ...

    @abstractmethod
    async def get_traders_by_addresses(self, addresses: list[str]) -> list[Trader]:
        """Stats for the given addresses. Unknown addresses are absent from the result."""
        ...


class PositionProvider(ABC):
    @abstractmethod
    async def get_positions(self, condition_id: str) -> list[Position]:
        """Current positions in the market with this condition id."""
        ...


class TransactionProvider(ABC):
    @abstractmethod
    async def get_recent_transactions(self, condition_id: str, days_back: int) -> list[Transaction]:
        """Trades in the market. days_back is accepted but not applied as a filter."""
        ...
