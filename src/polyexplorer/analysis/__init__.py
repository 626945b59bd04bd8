"""In-memory joins and summaries over standardized entities."""

from polyexplorer.analysis.holders import (
    FlowSummary,
    HolderRow,
    MarketAnalysis,
    SideSummary,
    analyze_holders,
    summarize_flow,
)

__all__ = [
    "FlowSummary",
    "HolderRow",
    "MarketAnalysis",
    "SideSummary",
    "analyze_holders",
    "summarize_flow",
]
