"""Read Parquet tables from a data directory via DuckDB."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Sequence

import duckdb
import structlog

from polyexplorer.errors import FileNotFound, FileReadError

log = structlog.get_logger(__name__)


@dataclass
class Table:
    """Column names plus rows, as returned by a Parquet read."""

    columns: list[str] = field(default_factory=list)
    rows: list[tuple[Any, ...]] = field(default_factory=list)

    @property
    def height(self) -> int:
        return len(self.rows)

    def has_column(self, name: str) -> bool:
        return name in self.columns

    def records(self) -> Iterator[dict[str, Any]]:
        for row in self.rows:
            yield dict(zip(self.columns, row))


def _sql_path(path: Path) -> str:
    return str(path).replace("\\", "\\\\").replace("'", "''")


class ParquetReader:
    """Resolves table file names against data_dir and runs filtered scans."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)

    def path(self, filename: str) -> Path:
        return self.data_dir / filename

    def exists(self, filename: str) -> bool:
        return self.path(filename).exists()

    def _execute(self, filename: str, sql: str, params: Sequence[Any]) -> duckdb.DuckDBPyConnection:
        path = self.path(filename)
        if not self.exists(filename):
            raise FileNotFound(str(path))
        conn = duckdb.connect()
        try:
            return conn.execute(sql.format(source=f"read_parquet('{_sql_path(path)}')"), list(params))
        except duckdb.Error as e:
            conn.close()
            raise FileReadError(str(path), str(e)) from e

    def columns(self, filename: str) -> list[str]:
        """Return the column names of a table without reading rows."""
        cur = self._execute(filename, "SELECT * FROM {source} LIMIT 0", ())
        try:
            return [d[0] for d in cur.description]
        finally:
            cur.close()

    def read(self, filename: str, where: str | None = None, params: Sequence[Any] = ()) -> Table:
        """Read a table, optionally filtered by a SQL predicate with ? placeholders."""
        sql = "SELECT * FROM {source}"
        if where:
            sql += f" WHERE {where}"
        cur = self._execute(filename, sql, params)
        try:
            rows = cur.fetchall()
            columns = [d[0] for d in cur.description]
        except duckdb.Error as e:
            raise FileReadError(str(self.path(filename)), str(e)) from e
        finally:
            cur.close()
        log.debug("parquet_read", file=filename, rows=len(rows))
        return Table(columns=columns, rows=rows)
