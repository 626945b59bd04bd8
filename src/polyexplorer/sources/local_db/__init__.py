"""Local Parquet store source."""

from polyexplorer.sources.local_db.source import LocalDbSource

__all__ = ["LocalDbSource"]
