"""Gamma API-backed metadata provider."""

from __future__ import annotations

from polyexplorer.adapters.http_client import HttpClient
from polyexplorer.models import Market, MarketGroup
from polyexplorer.sources.base import MarketMetadataProvider
from polyexplorer.sources.polymarket.handler import GAMMA_API_URL, PolymarketApiHandler
from polyexplorer.sources.polymarket.standardizer import standardize_market, standardize_market_group


class PolymarketApiSource(MarketMetadataProvider):
    def __init__(self, http_client: HttpClient, base_url: str = GAMMA_API_URL) -> None:
        self.handler = PolymarketApiHandler(http_client, base_url)

    async def get_market_group(self, slug: str) -> MarketGroup:
        raw = await self.handler.fetch_market_group(slug)
        return standardize_market_group(raw)

    async def get_market(self, slug: str) -> Market:
        raw = await self.handler.fetch_market(slug)
        return standardize_market(raw)
