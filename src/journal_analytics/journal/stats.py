"""Aggregate performance statistics over a trade ledger.

Only closed trades (``outcome != OPEN``) take part.  Every ratio has an
explicit zero-division fallback so an empty or all-open ledger yields
zeros rather than ``NaN`` or ``inf``.

Usage::

    stats = compute_stats(trades)
    print(stats.win_rate, stats.profit_factor)
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Iterable

from ..core.enums import TradeDirection, TradeOutcome
from ..core.models import Trade, closed_trades
from .ordering import by_pnl_desc


@dataclass(frozen=True)
class TradeStats:
    """Dashboard headline numbers."""

    total_trades: int = 0
    wins: int = 0
    losses: int = 0
    break_evens: int = 0
    win_rate: float = 0.0  # percent, 0-100
    total_pnl: float = 0.0
    gross_profit: float = 0.0
    gross_loss: float = 0.0  # magnitude, >= 0
    profit_factor: float = 0.0
    best_trade: float = 0.0
    worst_trade: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0  # magnitude, >= 0
    long_win_rate: float = 0.0
    short_win_rate: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13)."""
    return math.floor(value + 0.5)


def win_rate(trades: list[Trade]) -> float:
    """Percentage of WIN outcomes, 0.0 for an empty list."""
    if not trades:
        return 0.0
    wins = sum(1 for t in trades if t.outcome == TradeOutcome.WIN)
    return wins / len(trades) * 100


def profit_factor(gross_profit: float, gross_loss: float) -> float:
    """Gross profit over gross loss.

    With no losing PnL the ratio is ``gross_profit`` itself rather
    than infinity.
    """
    if gross_loss == 0:
        return gross_profit
    return gross_profit / gross_loss


def compute_stats(trades: Iterable[Trade]) -> TradeStats:
    """Compute headline statistics for the closed trades of a ledger."""
    closed = closed_trades(trades)
    if not closed:
        return TradeStats()

    wins = sum(1 for t in closed if t.outcome == TradeOutcome.WIN)
    losses = sum(1 for t in closed if t.outcome == TradeOutcome.LOSS)
    break_evens = sum(1 for t in closed if t.outcome == TradeOutcome.BREAK_EVEN)

    pnls = [t.pnl_or_zero for t in closed]
    gross_profit = sum((p for p in pnls if p > 0), 0.0)
    gross_loss = abs(sum((p for p in pnls if p < 0), 0.0))

    ranked = by_pnl_desc(closed)

    longs = [t for t in closed if t.direction == TradeDirection.LONG]
    shorts = [t for t in closed if t.direction == TradeDirection.SHORT]

    return TradeStats(
        total_trades=len(closed),
        wins=wins,
        losses=losses,
        break_evens=break_evens,
        win_rate=win_rate(closed),
        total_pnl=sum(pnls),
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        profit_factor=profit_factor(gross_profit, gross_loss),
        best_trade=ranked[0].pnl_or_zero,
        worst_trade=ranked[-1].pnl_or_zero,
        avg_win=gross_profit / wins if wins else 0.0,
        avg_loss=gross_loss / losses if losses else 0.0,
        long_win_rate=win_rate(longs),
        short_win_rate=win_rate(shorts),
    )
