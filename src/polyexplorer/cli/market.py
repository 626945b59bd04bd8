"""Market subcommand: metadata only, no local store."""

from __future__ import annotations

import asyncio

import typer

from polyexplorer.adapters.http_client import HttpClient
from polyexplorer.cli.errors import handle_errors
from polyexplorer.cli.output import render, render_market, render_market_group, write_lines
from polyexplorer.sources.polymarket import PolymarketApiSource

app = typer.Typer(help="Show market group metadata from the Gamma API")


@app.callback(invoke_without_command=True)
def market(
    ctx: typer.Context,
    market_slug: str = typer.Option(..., "--market-slug", "-m", help="Market group (event) slug"),
    single: bool = typer.Option(
        False, "--single", help="Treat the slug as a single market instead of a group"
    ),
) -> None:
    """Print the market group and each of its markets."""
    if ctx.invoked_subcommand is not None:
        return
    settings = ctx.obj["settings"]
    api = PolymarketApiSource(
        HttpClient(timeout=settings.http_timeout_sec), base_url=settings.gamma_api_base
    )
    with handle_errors():
        if single:
            m = asyncio.run(api.get_market(market_slug))
            write_lines(render("market", render_market, m))
            return
        group = asyncio.run(api.get_market_group(market_slug))
        lines = render("market group", render_market_group, group)
        for m in group.markets:
            lines += render("market", render_market, m)
        write_lines(lines)
