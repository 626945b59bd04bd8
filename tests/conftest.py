"""Shared fixtures: Gamma payload factories and a Parquet data directory."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import duckdb
import pytest

CONDITION_ID = "0xcond1"

TRADERS_SCHEMA = (
    "trader_address VARCHAR, total_markets_entered UINTEGER, total_markets_resolved UINTEGER, "
    "total_wins UINTEGER, accuracy DOUBLE, total_invested DOUBLE, total_returned DOUBLE, roi DOUBLE"
)
POSITIONS_SCHEMA = (
    "trader_address VARCHAR, token_id VARCHAR, market_id VARCHAR, side VARCHAR, "
    "shares_held DOUBLE, avg_entry_price DOUBLE, first_entry_block UBIGINT"
)
TRANSACTIONS_SCHEMA = (
    "block_number UBIGINT, transaction_hash VARCHAR, trader_address VARCHAR, token_id VARCHAR, "
    "side VARCHAR, action VARCHAR, shares DOUBLE, usdc_amount DOUBLE, market_id VARCHAR"
)

TRADER_ROWS = [
    ("0xaaa", 20, 12, 9, 0.75, 5000.0, 6500.0, 0.3),
    ("0xbbb", 8, 6, 3, 0.5, 1000.0, 900.0, -0.1),
    ("0xccc", 3, 1, 1, 1.0, 50.0, 100.0, 1.0),
]
POSITION_ROWS = [
    ("0xaaa", "111", CONDITION_ID, "YES", 300.0, 0.60, 1000),
    ("0xbbb", "222", CONDITION_ID, "NO", 100.0, 0.30, 1010),
    ("0xddd", "111", CONDITION_ID, "YES", 100.0, 0.40, None),
    ("0xaaa", "333", "0xother", "YES", 10.0, 0.5, 900),
]
TRANSACTION_ROWS = [
    (1000, "0xt1", "0xaaa", "111", "YES", "BUY", 300.0, 180.0, CONDITION_ID),
    (1010, "0xt2", "0xbbb", "222", "NO", "BUY", 150.0, 45.0, CONDITION_ID),
    (1020, "0xt3", "0xbbb", "222", "NO", "SELL", 50.0, 20.0, CONDITION_ID),
    (1030, "0xt4", "0xccc", "333", "YES", "BUY", 5.0, 2.5, "0xother"),
]


def write_parquet(path: Path, schema: str, rows: list[tuple[Any, ...]]) -> Path:
    """Write rows to a Parquet file with an explicit DuckDB schema."""
    conn = duckdb.connect()
    try:
        conn.execute(f"CREATE TABLE t ({schema})")
        if rows:
            placeholders = ", ".join("?" for _ in rows[0])
            conn.executemany(f"INSERT INTO t VALUES ({placeholders})", [list(r) for r in rows])
        conn.execute(f"COPY t TO '{path}' (FORMAT PARQUET)")
    finally:
        conn.close()
    return path


@pytest.fixture
def parquet_writer():
    return write_parquet


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    write_parquet(tmp_path / "traders.parquet", TRADERS_SCHEMA, TRADER_ROWS)
    write_parquet(tmp_path / "positions.parquet", POSITIONS_SCHEMA, POSITION_ROWS)
    write_parquet(tmp_path / "transactions.parquet", TRANSACTIONS_SCHEMA, TRANSACTION_ROWS)
    return tmp_path


_MARKET_PAYLOAD: dict[str, Any] = {
    "question": "Will it rain tomorrow?",
    "conditionId": CONDITION_ID,
    "slug": "will-it-rain-tomorrow",
    "outcomes": '["Yes","No"]',
    "outcomePrices": '["0.65","0.35"]',
    "clobTokenIds": '["111","222"]',
    "active": True,
    "closed": False,
    "volumeNum": 1000.0,
    "volume24hr": 50.0,
    "volume1wk": 200.0,
    "volume1mo": 600.0,
    "volume1yr": 1000.0,
    "liquidityNum": 250.0,
    "competitive": 0.9,
    "lastTradePrice": 0.64,
    "bestBid": 0.63,
    "bestAsk": 0.66,
}


@pytest.fixture
def market_payload():
    """Factory for one Gamma market dict; keyword overrides use wire (camelCase) names."""

    def make(**overrides: Any) -> dict[str, Any]:
        payload = copy.deepcopy(_MARKET_PAYLOAD)
        payload.update(overrides)
        return payload

    return make


@pytest.fixture
def group_payload(market_payload):
    """Factory for a Gamma event dict wrapping the given markets."""

    def make(markets: list[dict[str, Any]] | None = None, **overrides: Any) -> dict[str, Any]:
        payload = {
            "slug": "weather-event",
            "title": "Weather",
            "active": True,
            "closed": False,
            "volume": 1500.0,
            "liquidity": 300.0,
            "markets": markets if markets is not None else [market_payload()],
        }
        payload.update(overrides)
        return payload

    return make
