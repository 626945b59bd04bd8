"""Parquet tables -> standardized Trader / Position / Transaction lists."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ValidationError

from polyexplorer.adapters.parquet_reader import Table
from polyexplorer.errors import EmptyRequiredField, MissingColumn, ValidationFailed
from polyexplorer.models import Position, Trader, Transaction

ModelT = TypeVar("ModelT", bound=BaseModel)

TRADER_COLUMNS = (
    "trader_address",
    "total_markets_entered",
    "total_markets_resolved",
    "total_wins",
    "accuracy",
    "total_invested",
    "total_returned",
    "roi",
)
POSITION_COLUMNS = (
    "trader_address",
    "token_id",
    "market_id",
    "side",
    "shares_held",
    "avg_entry_price",
)
TRANSACTION_COLUMNS = (
    "block_number",
    "transaction_hash",
    "trader_address",
    "token_id",
    "side",
    "action",
    "shares",
    "usdc_amount",
    "market_id",
)


def _standardize_rows(
    table: Table,
    table_name: str,
    model: type[ModelT],
    required: tuple[str, ...],
    optional: tuple[str, ...] = (),
    entity_id: Callable[[dict[str, Any]], str] | None = None,
) -> list[ModelT]:
    """Validate each row into model. An empty table is an empty result; any bad row fails all."""
    if table.height == 0:
        return []
    for column in required:
        if not table.has_column(column):
            raise MissingColumn(column, table_name)

    entity_type = model.__name__
    out: list[ModelT] = []
    for i, record in enumerate(table.records()):
        ident = entity_id(record) if entity_id else f"row {i}"
        for column in required:
            if record.get(column) is None:
                raise EmptyRequiredField(column, entity_type, ident)
        values = {c: record[c] for c in required}
        for column in optional:
            if table.has_column(column):
                values[column] = record[column]
        try:
            out.append(model.model_validate(values))
        except ValidationError as e:
            raise ValidationFailed(entity_type, ident, str(e)) from e
    return out


def standardize_traders(table: Table) -> list[Trader]:
    traders = _standardize_rows(
        table,
        "traders",
        Trader,
        TRADER_COLUMNS,
        entity_id=lambda r: str(r.get("trader_address") or "?"),
    )
    # trader_address is the key within one result set
    seen: set[str] = set()
    for t in traders:
        if t.trader_address in seen:
            raise ValidationFailed("Trader", t.trader_address, "duplicate trader_address")
        seen.add(t.trader_address)
    return traders


def standardize_positions(table: Table) -> list[Position]:
    # first_entry_block is optional
    return _standardize_rows(
        table,
        "positions",
        Position,
        POSITION_COLUMNS,
        optional=("first_entry_block",),
        entity_id=lambda r: f"{r.get('trader_address') or '?'}:{r.get('token_id') or '?'}",
    )


def standardize_transactions(table: Table) -> list[Transaction]:
    return _standardize_rows(
        table,
        "transactions",
        Transaction,
        TRANSACTION_COLUMNS,
        entity_id=lambda r: str(r.get("transaction_hash") or "?"),
    )
