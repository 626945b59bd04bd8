"""Filtered reads of the traders / positions / transactions tables."""

from __future__ import annotations

import structlog

from polyexplorer.adapters.parquet_reader import ParquetReader, Table
from polyexplorer.errors import MissingColumn

log = structlog.get_logger(__name__)

TRADERS_FILE = "traders.parquet"
POSITIONS_FILE = "positions.parquet"
TRANSACTIONS_FILE = "transactions.parquet"


class LocalDbHandler:
    """Runs one filtered scan per call and returns the raw Table."""

    def __init__(
        self,
        reader: ParquetReader,
        traders_file: str = TRADERS_FILE,
        positions_file: str = POSITIONS_FILE,
        transactions_file: str = TRANSACTIONS_FILE,
    ) -> None:
        self.reader = reader
        self.traders_file = traders_file
        self.positions_file = positions_file
        self.transactions_file = transactions_file

    def _require_column(self, filename: str, column: str) -> None:
        if column not in self.reader.columns(filename):
            raise MissingColumn(column, filename)

    def fetch_traders(self, min_resolved_markets: int) -> Table:
        self._require_column(self.traders_file, "total_markets_resolved")
        return self.reader.read(
            self.traders_file, "total_markets_resolved >= ?", [min_resolved_markets]
        )

    def fetch_traders_by_addresses(self, addresses: list[str]) -> Table:
        if not addresses:
            return Table()
        self._require_column(self.traders_file, "trader_address")
        placeholders = ", ".join("?" for _ in addresses)
        return self.reader.read(
            self.traders_file, f"trader_address IN ({placeholders})", list(addresses)
        )

    def fetch_positions(self, condition_id: str) -> Table:
        self._require_column(self.positions_file, "market_id")
        return self.reader.read(self.positions_file, "market_id = ?", [condition_id])

    def fetch_recent_transactions(self, condition_id: str, days_back: int) -> Table:
        """All transactions for the market. No block-time column exists, so days_back is not applied."""
        self._require_column(self.transactions_file, "market_id")
        log.debug("lookback_not_applied", market_id=condition_id, days_back=days_back)
        return self.reader.read(self.transactions_file, "market_id = ?", [condition_id])
