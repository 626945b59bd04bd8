"""Polymarket Explorer - standardized market, trader and position data from API and Parquet sources."""

__version__ = "0.1.0"
