"""Raw transport adapters - HTTP JSON fetch and Parquet table reads."""

from polyexplorer.adapters.http_client import HttpClient
from polyexplorer.adapters.parquet_reader import ParquetReader, Table

__all__ = ["HttpClient", "ParquetReader", "Table"]
