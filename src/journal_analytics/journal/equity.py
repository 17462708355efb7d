"""Equity curve: cumulative closed-trade PnL in chronological order.

Usage::

    for point in build_equity_curve(trades):
        print(point.date, point.equity)

The curve is a generator: it is consumed once and recomputed from the
ledger on every call, never updated incrementally.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable, Iterator

from ..core.models import Trade, closed_trades
from .ordering import chronological


@dataclass(frozen=True)
class EquityPoint:
    """Running equity after one closed trade."""

    trade_id: str
    date: str  # the trade's original date string
    pnl: float
    equity: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_equity_curve(trades: Iterable[Trade]) -> Iterator[EquityPoint]:
    """Yield one point per closed trade, oldest first.

    Same-date trades keep their ledger order.  Trades with an
    unparseable date are left out of the curve.
    """
    equity = 0.0
    for _, trade in chronological(closed_trades(trades)):
        pnl = trade.pnl_or_zero
        equity += pnl
        yield EquityPoint(trade_id=trade.id, date=trade.date, pnl=pnl, equity=equity)


def max_drawdown(points: Iterable[EquityPoint]) -> float:
    """Largest peak-to-trough fall of the curve (a non-negative amount).

    The peak starts at zero equity, so an opening losing streak counts
    as drawdown.
    """
    peak = 0.0
    worst = 0.0
    for point in points:
        peak = max(peak, point.equity)
        worst = max(worst, peak - point.equity)
    return worst
