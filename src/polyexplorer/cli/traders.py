"""Traders subcommand: best traders in the local store."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from polyexplorer.cli.errors import handle_errors
from polyexplorer.cli.output import render, render_traders, write_lines
from polyexplorer.models import Trader
from polyexplorer.sources import TraderStatsProvider
from polyexplorer.sources.local_db import LocalDbSource

app = typer.Typer(help="List top traders by accuracy")


async def top_traders(provider: TraderStatsProvider, min_resolved: int, limit: int) -> list[Trader]:
    traders = await provider.get_traders(min_resolved)
    traders.sort(key=lambda t: (t.accuracy, t.roi), reverse=True)
    return traders[:limit]


@app.callback(invoke_without_command=True)
def traders(
    ctx: typer.Context,
    min_resolved: int | None = typer.Option(
        None, "--min-resolved", help="Minimum resolved markets (overrides config)"
    ),
    limit: int = typer.Option(20, "--limit", "-n", help="Max traders to show"),
    data_dir: Path | None = typer.Option(None, "--data-dir", "-d", help="Parquet data directory"),
) -> None:
    """Rank traders by accuracy, then ROI."""
    if ctx.invoked_subcommand is not None:
        return
    settings = ctx.obj["settings"]
    source = LocalDbSource(data_dir or settings.data_dir, traders_file=settings.traders_file)
    threshold = min_resolved if min_resolved is not None else settings.min_resolved_markets
    with handle_errors():
        ranked = asyncio.run(top_traders(source, threshold, limit))
        write_lines(render("traders", render_traders, ranked))
