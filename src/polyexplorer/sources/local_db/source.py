"""Local Parquet store: trader stats, positions and transactions."""

from __future__ import annotations

import asyncio
from pathlib import Path

from polyexplorer.adapters.parquet_reader import ParquetReader
from polyexplorer.models import Position, Trader, Transaction
from polyexplorer.sources.base import PositionProvider, TraderStatsProvider, TransactionProvider
from polyexplorer.sources.local_db.handler import (
    POSITIONS_FILE,
    TRADERS_FILE,
    TRANSACTIONS_FILE,
    LocalDbHandler,
)
from polyexplorer.sources.local_db.standardizer import (
    standardize_positions,
    standardize_traders,
    standardize_transactions,
)


class LocalDbSource(TraderStatsProvider, PositionProvider, TransactionProvider):
    """DuckDB scans run in a worker thread so callers can await them."""

    def __init__(
        self,
        data_dir: str | Path,
        traders_file: str = TRADERS_FILE,
        positions_file: str = POSITIONS_FILE,
        transactions_file: str = TRANSACTIONS_FILE,
    ) -> None:
        self.handler = LocalDbHandler(
            ParquetReader(data_dir),
            traders_file=traders_file,
            positions_file=positions_file,
            transactions_file=transactions_file,
        )

    async def get_traders(self, min_resolved_markets: int) -> list[Trader]:
        table = await asyncio.to_thread(self.handler.fetch_traders, min_resolved_markets)
        return standardize_traders(table)

    async def get_traders_by_addresses(self, addresses: list[str]) -> list[Trader]:
        table = await asyncio.to_thread(self.handler.fetch_traders_by_addresses, addresses)
        return standardize_traders(table)

    async def get_positions(self, condition_id: str) -> list[Position]:
        table = await asyncio.to_thread(self.handler.fetch_positions, condition_id)
        return standardize_positions(table)

    async def get_recent_transactions(self, condition_id: str, days_back: int) -> list[Transaction]:
        table = await asyncio.to_thread(
            self.handler.fetch_recent_transactions, condition_id, days_back
        )
        return standardize_transactions(table)
