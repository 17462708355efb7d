"""Discipline and emotional-stability profile of the trader.

Answers "am I following my system?" from the self-reported fields of
each journal entry: discipline rating (1-5), whether the system was
followed, and the emotional state at entry.

Usage::

    profile = discipline_profile(trades)
    if profile is not None:
        print(profile.status_label, profile.streak)
    for week in weekly_trends(trades):
        print(week.week_start, week.discipline_index)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Iterable, Sequence

from ..core.dates import week_start
from ..core.models import Trade, closed_trades
from .ordering import chronological, newest_first
from .stats import round_half_up, win_rate

DEFAULT_STABLE_EMOTIONS = ("Neutral", "Focused", "Calm")
DISCIPLINED_RATING = 3  # ratings at or below this are offenses
HIGH_DISCIPLINE_RATING = 4
RECENT_OFFENSES = 5

# Minimum discipline index for each label, checked top down
_STATUS_THRESHOLDS: list[tuple[int, str]] = [
    (95, "Zen Master"),
    (85, "Sniper"),
    (70, "Disciplined"),
    (50, "Drifting"),
    (1, "Tilted"),
]


@dataclass(frozen=True)
class DisciplineProfile:
    discipline_index: int  # 0-100, avg rating x 20
    system_adherence: int  # % of trades that followed the system
    emotional_stability: int  # % of trades in a stable emotional state
    streak: int  # consecutive most-recent trades that followed the system
    status_label: str
    cost_of_indiscipline: float  # PnL of low-rated trades
    win_rate_variance: float  # high-discipline win rate minus low-discipline
    recent_offenses: tuple[str, ...] = field(default_factory=tuple)  # trade ids

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["recent_offenses"] = list(self.recent_offenses)
        return d


@dataclass(frozen=True)
class WeeklyTrend:
    week_start: str  # Monday, YYYY-MM-DD
    discipline_index: int
    system_adherence: int
    mental_stability: int
    trade_count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def status_label(discipline_index: int) -> str:
    for threshold, label in _STATUS_THRESHOLDS:
        if discipline_index >= threshold:
            return label
    return "Rookie"


def _pct(part: int, whole: int) -> int:
    return round_half_up(part / whole * 100) if whole else 0


def _discipline_index(trades: Sequence[Trade]) -> int:
    if not trades:
        return 0
    avg = sum((t.discipline_rating or 0) for t in trades) / len(trades)
    return round_half_up(avg * 20)


def _is_offense(trade: Trade, disciplined_rating: int) -> bool:
    rating = trade.discipline_rating
    low = rating is not None and 0 < rating <= disciplined_rating
    return low or not trade.followed_system


def discipline_profile(
    trades: Iterable[Trade],
    *,
    stable_emotions: Sequence[str] = DEFAULT_STABLE_EMOTIONS,
    disciplined_rating: int = DISCIPLINED_RATING,
    recent_offenses: int = RECENT_OFFENSES,
) -> DisciplineProfile | None:
    """Build the profile over closed trades, ``None`` if there are none."""
    closed = closed_trades(trades)
    if not closed:
        return None

    index = _discipline_index(closed)
    followed = sum(1 for t in closed if t.followed_system)
    stable = sum(1 for t in closed if (t.emotional_state or "") in stable_emotions)

    recent = newest_first(closed)
    streak = 0
    for trade in recent:
        if not trade.followed_system:
            break
        streak += 1

    offenses = [t.id for t in recent if _is_offense(t, disciplined_rating)]

    low_rated = [
        t for t in closed
        if t.discipline_rating and t.discipline_rating <= disciplined_rating
    ]
    high = [t for t in closed if (t.discipline_rating or 0) >= HIGH_DISCIPLINE_RATING]
    low = [t for t in closed if (t.discipline_rating or 0) <= disciplined_rating]

    return DisciplineProfile(
        discipline_index=index,
        system_adherence=_pct(followed, len(closed)),
        emotional_stability=_pct(stable, len(closed)),
        streak=streak,
        status_label=status_label(index),
        cost_of_indiscipline=sum((t.pnl_or_zero for t in low_rated), 0.0),
        win_rate_variance=win_rate(high) - win_rate(low),
        recent_offenses=tuple(offenses[:recent_offenses]),
    )


def weekly_trends(
    trades: Iterable[Trade],
    *,
    stable_emotions: Sequence[str] = DEFAULT_STABLE_EMOTIONS,
) -> list[WeeklyTrend]:
    """Per-week discipline, adherence and stability, oldest week first.

    Weeks start on Monday.  Trades with an unparseable date are skipped.
    """
    weeks: dict[date, list[Trade]] = {}
    for d, trade in chronological(closed_trades(trades)):
        monday = week_start(d)
        weeks.setdefault(monday, []).append(trade)

    trends = []
    for monday in sorted(weeks):
        group = weeks[monday]
        trends.append(WeeklyTrend(
            week_start=monday.isoformat(),
            discipline_index=_discipline_index(group),
            system_adherence=_pct(sum(1 for t in group if t.followed_system), len(group)),
            mental_stability=_pct(
                sum(1 for t in group if (t.emotional_state or "") in stable_emotions),
                len(group),
            ),
            trade_count=len(group),
        ))
    return trends
