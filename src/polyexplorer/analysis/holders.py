"""Holder breakdown for one market: positions joined to trader stats by address."""

from __future__ import annotations

from dataclasses import dataclass, field

from polyexplorer.errors import InsufficientData, InvalidPosition
from polyexplorer.models import Market, Position, Trader, Transaction

SIDES = ("YES", "NO")


@dataclass
class SideSummary:
    """Aggregate of all positions on one side."""

    side: str
    holders: int = 0
    total_shares: float = 0.0
    avg_entry_price: float | None = None  # share-weighted
    scored_holders: int = 0  # holders with trader stats
    weighted_accuracy: float | None = None  # share-weighted over scored holders


@dataclass
class HolderRow:
    trader_address: str
    side: str
    shares_held: float
    avg_entry_price: float
    trader: Trader | None = None


@dataclass
class FlowSummary:
    """BUY/SELL totals per side over a set of transactions."""

    transactions: int = 0
    traders: int = 0
    buy_shares: dict[str, float] = field(default_factory=lambda: dict.fromkeys(SIDES, 0.0))
    sell_shares: dict[str, float] = field(default_factory=lambda: dict.fromkeys(SIDES, 0.0))
    buy_usdc: dict[str, float] = field(default_factory=lambda: dict.fromkeys(SIDES, 0.0))
    sell_usdc: dict[str, float] = field(default_factory=lambda: dict.fromkeys(SIDES, 0.0))

    def net_shares(self, side: str) -> float:
        return self.buy_shares[side] - self.sell_shares[side]


@dataclass
class MarketAnalysis:
    condition_id: str
    sides: dict[str, SideSummary]
    top_holders: list[HolderRow]
    flow: FlowSummary | None = None


def _summarize_side(side: str, positions: list[Position], traders: dict[str, Trader]) -> SideSummary:
    summary = SideSummary(side=side, holders=len({p.trader_address for p in positions}))
    summary.total_shares = sum(p.shares_held for p in positions)
    if summary.total_shares > 0:
        summary.avg_entry_price = (
            sum(p.shares_held * p.avg_entry_price for p in positions) / summary.total_shares
        )
    scored = [p for p in positions if p.trader_address in traders]
    summary.scored_holders = len({p.trader_address for p in scored})
    scored_shares = sum(p.shares_held for p in scored)
    if scored_shares > 0:
        summary.weighted_accuracy = (
            sum(p.shares_held * traders[p.trader_address].accuracy for p in scored) / scored_shares
        )
    return summary


def analyze_holders(
    market: Market,
    positions: list[Position],
    traders: list[Trader],
    top_n: int = 10,
) -> MarketAnalysis:
    """Per-side holder stats and the largest holders, enriched with trader stats when known."""
    if not positions:
        raise InsufficientData("holder", f"no positions for market '{market.slug}'")
    for p in positions:
        if p.market_id != market.condition_id:
            raise InvalidPosition(
                f"{p.trader_address}:{p.token_id}",
                f"belongs to market {p.market_id}, expected {market.condition_id}",
            )

    by_address = {t.trader_address: t for t in traders}
    sides = {
        side: _summarize_side(side, [p for p in positions if p.side == side], by_address)
        for side in SIDES
    }
    ranked = sorted(positions, key=lambda p: p.shares_held, reverse=True)[:top_n]
    top = [
        HolderRow(
            trader_address=p.trader_address,
            side=p.side,
            shares_held=p.shares_held,
            avg_entry_price=p.avg_entry_price,
            trader=by_address.get(p.trader_address),
        )
        for p in ranked
    ]
    return MarketAnalysis(condition_id=market.condition_id, sides=sides, top_holders=top)


def summarize_flow(transactions: list[Transaction]) -> FlowSummary:
    flow = FlowSummary(
        transactions=len(transactions),
        traders=len({t.trader_address for t in transactions}),
    )
    for t in transactions:
        if t.action == "BUY":
            flow.buy_shares[t.side] += t.shares
            flow.buy_usdc[t.side] += t.usdc_amount
        else:
            flow.sell_shares[t.side] += t.shares
            flow.sell_usdc[t.side] += t.usdc_amount
    return flow
