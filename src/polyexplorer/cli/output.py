"""Plain-text report rendering. Renderers return lines; write_lines prints them."""

from __future__ import annotations

from typing import Callable, TypeVar

import typer

from polyexplorer.analysis import FlowSummary, MarketAnalysis
from polyexplorer.errors import FormattingFailed, WriteFailed
from polyexplorer.models import Market, MarketGroup, Trader

T = TypeVar("T")

RULE = "=" * 67


def header(title: str) -> list[str]:
    return ["", RULE, title, RULE]


def _pct(price: str) -> str:
    return f"{float(price) * 100:.1f}%"


def _opt(value: float | None, fmt: str = "{:.3f}") -> str:
    return "-" if value is None else fmt.format(value)


def _short(address: str, width: int = 14) -> str:
    return address if len(address) <= width else f"{address[:8]}...{address[-4:]}"


def render_market_group(group: MarketGroup) -> list[str]:
    lines = header("MARKET GROUP")
    lines += [
        f"  Title:         {group.title}",
        f"  Slug:          {group.slug}",
        f"  Active:        {group.active}",
        f"  Closed:        {group.closed}",
        f"  Volume:        ${group.volume:,.2f}",
        f"  Liquidity:     ${group.liquidity:,.2f}",
        f"  Markets:       {len(group.markets)}",
    ]
    for i, m in enumerate(group.markets, start=1):
        prices = " / ".join(
            f"{o} {p} ({_pct(p)})" for o, p in zip(m.outcomes, m.outcome_prices)
        )
        lines.append(f"  {i:>3}. {m.question}")
        lines.append(f"       {prices}  vol ${m.volume:,.0f}  [{m.slug}]")
    return lines


def render_market(market: Market) -> list[str]:
    lines = header("MARKET INFORMATION")
    lines += [
        f"  Question:      {market.question}",
        f"  Slug:          {market.slug}",
        f"  Condition ID:  {market.condition_id}",
        f"  YES Token:     {market.yes_token_id}",
        f"  NO Token:      {market.no_token_id}",
    ]
    for outcome, price in zip(market.outcomes, market.outcome_prices):
        lines.append(f"  {outcome + ':':<15}{price} ({_pct(price)})")
    lines += [
        f"  Active:        {market.active}",
        f"  Closed:        {market.closed}",
        f"  Volume:        ${market.volume:,.2f}  (24h ${market.volume_24h:,.2f}, "
        f"1w ${market.volume_1w:,.2f}, 1m ${market.volume_1m:,.2f}, 1y ${market.volume_1y:,.2f})",
        f"  Liquidity:     ${market.liquidity:,.2f}",
        f"  Competitive:   {market.competitive:.3f}",
        f"  Last trade:    {market.last_trade_price:.3f}",
        f"  Bid / Ask:     {market.best_bid:.3f} / {market.best_ask:.3f}",
    ]
    return lines


def render_analysis(analysis: MarketAnalysis | None) -> list[str]:
    lines = header("HOLDER ANALYSIS")
    if analysis is None:
        lines.append("  No positions recorded for this market in the local store.")
        return lines
    for side, s in analysis.sides.items():
        lines.append(
            f"  {side:<4} holders {s.holders:>5}  shares {s.total_shares:>14,.2f}  "
            f"avg entry {_opt(s.avg_entry_price)}  "
            f"scored {s.scored_holders:>4}  accuracy {_opt(s.weighted_accuracy, '{:.1%}')}"
        )
    lines.append("")
    lines.append(f"  Top {len(analysis.top_holders)} holders:")
    for row in analysis.top_holders:
        if row.trader is not None:
            stats = (
                f"acc {row.trader.accuracy:.1%}  roi {row.trader.roi:+.1%}  "
                f"resolved {row.trader.total_markets_resolved}"
            )
        else:
            stats = "no stats"
        lines.append(
            f"    {_short(row.trader_address):<15} {row.side:<4} {row.shares_held:>14,.2f} "
            f"@ {row.avg_entry_price:.3f}  {stats}"
        )
    if analysis.flow is not None:
        lines += render_flow(analysis.flow)
    return lines


def render_flow(flow: FlowSummary) -> list[str]:
    lines = ["", f"  Trade flow: {flow.transactions} transactions from {flow.traders} traders"]
    for side in ("YES", "NO"):
        lines.append(
            f"    {side:<4} bought {flow.buy_shares[side]:>12,.2f} (${flow.buy_usdc[side]:,.2f})  "
            f"sold {flow.sell_shares[side]:>12,.2f} (${flow.sell_usdc[side]:,.2f})  "
            f"net {flow.net_shares(side):+,.2f}"
        )
    return lines


def render_traders(traders: list[Trader]) -> list[str]:
    lines = header(f"TOP TRADERS ({len(traders)})")
    for t in traders:
        lines.append(
            f"  {t.trader_address:<44} acc {t.accuracy:>6.1%}  "
            f"wins {t.total_wins:>4}/{t.total_markets_resolved:<4} "
            f"roi {t.roi:+7.1%}  invested ${t.total_invested:,.0f}"
        )
    if not traders:
        lines.append("  No traders matched.")
    return lines


def render(data_type: str, renderer: Callable[[T], list[str]], data: T) -> list[str]:
    """Run a renderer, reporting bad values as FormattingFailed."""
    try:
        return renderer(data)
    except (TypeError, ValueError) as e:
        raise FormattingFailed(data_type, str(e)) from e


def write_lines(lines: list[str]) -> None:
    try:
        for line in lines:
            typer.echo(line)
    except OSError as e:
        raise WriteFailed("stdout", str(e)) from e
