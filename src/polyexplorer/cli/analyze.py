"""Analyze subcommand: market metadata + holder analysis from the local store."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

import structlog
import typer

from polyexplorer.adapters.http_client import HttpClient
from polyexplorer.analysis import MarketAnalysis, analyze_holders, summarize_flow
from polyexplorer.cli.errors import handle_errors
from polyexplorer.cli.output import (
    header,
    render,
    render_analysis,
    render_market,
    render_market_group,
    write_lines,
)
from polyexplorer.errors import MarketNotFound
from polyexplorer.models import Market, MarketGroup
from polyexplorer.sources import (
    MarketMetadataProvider,
    PositionProvider,
    TraderStatsProvider,
    TransactionProvider,
)
from polyexplorer.sources.local_db import LocalDbSource
from polyexplorer.sources.polymarket import PolymarketApiSource

log = structlog.get_logger(__name__)

app = typer.Typer(help="Analyze one market: metadata, holders, trader stats")


@dataclass
class AnalyzeResult:
    group: MarketGroup
    market: Market
    analysis: MarketAnalysis | None


def select_market(group: MarketGroup, selector: str | None) -> Market:
    """Pick a market from the group; the first one when no selector is given."""
    if selector is None:
        if not group.markets:
            raise MarketNotFound("1", group.slug)
        return group.markets[0]
    market = group.find_market(selector)
    if market is None:
        raise MarketNotFound(selector, group.slug)
    return market


async def run_analyze(
    slug: str,
    metadata: MarketMetadataProvider,
    trader_stats: TraderStatsProvider,
    positions: PositionProvider,
    transactions: TransactionProvider | None = None,
    selector: str | None = None,
    days_back: int = 7,
    top_n: int = 10,
) -> AnalyzeResult:
    """Fetch the group, then positions, trader stats and trades for the chosen market, in order."""
    group = await metadata.get_market_group(slug)
    market = select_market(group, selector)
    log.info("market_selected", slug=market.slug, condition_id=market.condition_id)

    held = await positions.get_positions(market.condition_id)
    if not held:
        return AnalyzeResult(group=group, market=market, analysis=None)

    addresses = list(dict.fromkeys(p.trader_address for p in held))
    traders = await trader_stats.get_traders_by_addresses(addresses)
    analysis = analyze_holders(market, held, traders, top_n=top_n)

    if transactions is not None:
        trades = await transactions.get_recent_transactions(market.condition_id, days_back)
        analysis.flow = summarize_flow(trades)
    return AnalyzeResult(group=group, market=market, analysis=analysis)


@app.callback(invoke_without_command=True)
def analyze(
    ctx: typer.Context,
    market_slug: str = typer.Option(..., "--market-slug", "-m", help="Market group (event) slug"),
    market: str | None = typer.Option(
        None, "--market", help="Market in the group: slug, condition id, or 1-based index"
    ),
    data_dir: Path | None = typer.Option(
        None, "--data-dir", "-d", help="Directory with traders/positions/transactions Parquet files"
    ),
    days: int | None = typer.Option(None, "--days", help="Transaction lookback (days; not yet applied)"),
    top: int | None = typer.Option(None, "--top", "-n", help="Number of top holders to show"),
) -> None:
    """Fetch market metadata and report holder stats from the local store."""
    if ctx.invoked_subcommand is not None:
        return
    settings = ctx.obj["settings"]
    api = PolymarketApiSource(
        HttpClient(timeout=settings.http_timeout_sec), base_url=settings.gamma_api_base
    )
    local_db = LocalDbSource(
        data_dir or settings.data_dir,
        traders_file=settings.traders_file,
        positions_file=settings.positions_file,
        transactions_file=settings.transactions_file,
    )
    with handle_errors():
        write_lines(header(f"Fetching market: {market_slug}"))
        result = asyncio.run(
            run_analyze(
                market_slug,
                metadata=api,
                trader_stats=local_db,
                positions=local_db,
                transactions=local_db,
                selector=market,
                days_back=days if days is not None else settings.lookback_days,
                top_n=top if top is not None else settings.top_holders,
            )
        )
        lines = render("market group", render_market_group, result.group)
        lines += render("market", render_market, result.market)
        lines += render("analysis", render_analysis, result.analysis)
        write_lines(lines)
