"""What-if eraser: counterfactual equity with selected trades removed.

Replays the closed trades oldest first and keeps two running totals:
the actual equity (every trade) and the simulated equity (only trades
no enabled exclusion rule matches).  The gap between the two final
values quantifies what a behavioural pattern costs.

Usage::

    points = simulate(trades, ExclusionFilters(exclude_fridays=True))
    summary = compute_optimization_stats(points)
    print(summary.delta, summary.pct)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Sequence

from pydantic import BaseModel

from ..core.dates import FRIDAY, journal_weekday
from ..core.models import Trade, closed_trades
from .ordering import chronological

SHORT_DURATION_MINS = 5.0
LATE_ENTRY_HOUR = 14


class ExclusionFilters(BaseModel):
    """Independent toggles; a trade is erased if ANY enabled rule matches."""

    model_config = {"frozen": True}

    exclude_mistakes: bool = False
    exclude_fridays: bool = False
    exclude_short_duration: bool = False
    exclude_after_2pm: bool = False

    @property
    def any_enabled(self) -> bool:
        return (
            self.exclude_mistakes
            or self.exclude_fridays
            or self.exclude_short_duration
            or self.exclude_after_2pm
        )


@dataclass(frozen=True)
class SimPoint:
    date: str
    actual: float
    simulated: float
    excluded: tuple[str, ...] = field(default_factory=tuple)  # matching rules

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["excluded"] = list(self.excluded)
        return d


@dataclass(frozen=True)
class OptimizationStats:
    delta: float = 0.0  # simulated - actual
    pct: float = 0.0  # delta relative to |actual|, percent
    actual: float = 0.0
    sim: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def exclusion_reasons(
    trade: Trade,
    filters: ExclusionFilters,
    *,
    short_duration_mins: float = SHORT_DURATION_MINS,
    late_entry_hour: int = LATE_ENTRY_HOUR,
) -> tuple[str, ...]:
    """Names of the enabled rules that match ``trade``.

    Absent duration counts as 0 minutes and a missing or invalid entry
    time counts as hour 0.
    """
    reasons: list[str] = []
    if filters.exclude_mistakes and trade.has_mistakes:
        reasons.append("mistakes")
    if filters.exclude_fridays:
        d = trade.trade_date
        if d is not None and journal_weekday(d) == FRIDAY:
            reasons.append("fridays")
    if filters.exclude_short_duration:
        if (trade.trade_duration_mins or 0.0) < short_duration_mins:
            reasons.append("short_duration")
    if filters.exclude_after_2pm:
        if (trade.entry_hour or 0) >= late_entry_hour:
            reasons.append("after_2pm")
    return tuple(reasons)


def simulate(
    trades: Iterable[Trade],
    filters: ExclusionFilters,
    *,
    short_duration_mins: float = SHORT_DURATION_MINS,
    late_entry_hour: int = LATE_ENTRY_HOUR,
) -> list[SimPoint]:
    """Walk closed trades oldest first, emitting actual vs simulated equity.

    Trades with an unparseable date are left out of both trajectories.
    """
    actual = 0.0
    simulated = 0.0
    points: list[SimPoint] = []

    for _, trade in chronological(closed_trades(trades)):
        reasons = exclusion_reasons(
            trade,
            filters,
            short_duration_mins=short_duration_mins,
            late_entry_hour=late_entry_hour,
        )
        pnl = trade.pnl_or_zero
        actual += pnl
        if not reasons:
            simulated += pnl
        points.append(SimPoint(
            date=trade.date,
            actual=actual,
            simulated=simulated,
            excluded=reasons,
        ))

    return points


def compute_optimization_stats(points: Sequence[SimPoint]) -> OptimizationStats:
    """Summarise the final simulation point."""
    if not points:
        return OptimizationStats()
    final = points[-1]
    delta = final.simulated - final.actual
    pct = delta / abs(final.actual) * 100 if final.actual != 0 else 0.0
    return OptimizationStats(delta=delta, pct=pct, actual=final.actual, sim=final.simulated)
