"""Pattern aggregators: grouped PnL views feeding the charts.

Each function is an independent pure reducer over the ledger.  Besides
the hour / setup / duration / weekday views this module carries the
Edge Lab reducers: mistake cost ("leak detector"), mistake frequency,
the day x hour heatmap, the winner-vs-loser profile, emotion breakdown,
the mood-vs-PnL series, option-type mix and the per-setup playbook.

Setup policy: trades without a (non-blank) ``setup_name`` are dropped
from every setup grouping rather than bucketed as "Unlabeled".
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import asdict, dataclass
from typing import Any, Iterable

from ..core.dates import FRIDAY, MONDAY, WEEKDAY_LABELS, journal_weekday
from ..core.enums import OptionType, TradeOutcome
from ..core.models import Trade, closed_trades
from .ordering import newest_first
from .stats import round_half_up, win_rate

logger = logging.getLogger(__name__)

MARKET_OPEN_HOUR = 9
MARKET_CLOSE_HOUR = 15
TOP_SETUPS = 5
TOP_MISTAKES = 5
DEFAULT_EMOTION = "Neutral"
MOOD_WINDOW = 20
# Substring keywords, matched case-insensitively; positive checked first
_POSITIVE_MOODS = ("calm", "focused", "neutral", "confident")
_NEGATIVE_MOODS = ("nervous", "fear", "fomo", "angry", "revenge", "tilted")


@dataclass(frozen=True)
class HourBucket:
    hour: int
    pnl: float
    trades: int


@dataclass(frozen=True)
class SetupBucket:
    name: str
    pnl: float


@dataclass(frozen=True)
class ScatterPoint:
    trade_id: str
    duration: float
    pnl: float
    date: str
    instrument: str
    size: float  # |pnl|, bubble size


@dataclass(frozen=True)
class DayBucket:
    day: str  # "Mon" .. "Fri"
    pnl: float
    trades: int


@dataclass(frozen=True)
class MistakeCost:
    name: str
    cost: float


@dataclass(frozen=True)
class MistakeCount:
    name: str
    count: int


@dataclass(frozen=True)
class HeatmapCell:
    day: str
    hour: int
    pnl: float
    count: int


@dataclass(frozen=True)
class ProfileMetric:
    metric: str
    winners: float
    losers: float


@dataclass(frozen=True)
class EmotionBucket:
    name: str
    win_rate: int  # rounded percent
    pnl: float
    count: int


@dataclass(frozen=True)
class MoodPoint:
    trade_id: str
    date: str
    pnl: float
    mood: int  # +1 positive, -1 negative, 0 unclassified


@dataclass(frozen=True)
class PlaybookEntry:
    setup_name: str
    count: int
    win_rate: float
    avg_pnl: float
    total_pnl: float


def to_dicts(rows: Iterable[Any]) -> list[dict[str, Any]]:
    """Plain-dict form of a list of result rows."""
    return [asdict(r) for r in rows]


# ------------------------------------------------------------------ #
# Core aggregators                                                     #
# ------------------------------------------------------------------ #

def hourly_pnl(
    trades: Iterable[Trade],
    *,
    open_hour: int = MARKET_OPEN_HOUR,
    close_hour: int = MARKET_CLOSE_HOUR,
) -> list[HourBucket]:
    """PnL per entry hour over the market-hours domain (inclusive).

    Every hour of the domain is returned, empty ones at zero; trades
    with no valid entry time or entering outside market hours are
    skipped.
    """
    pnl: dict[int, float] = defaultdict(float)
    counts: dict[int, int] = defaultdict(int)
    for trade in closed_trades(trades):
        hour = trade.entry_hour
        if hour is None or not open_hour <= hour <= close_hour:
            continue
        pnl[hour] += trade.pnl_or_zero
        counts[hour] += 1
    return [
        HourBucket(hour=h, pnl=pnl[h], trades=counts[h])
        for h in range(open_hour, close_hour + 1)
    ]


def _setup_label(trade: Trade) -> str | None:
    if trade.setup_name is None:
        return None
    name = trade.setup_name.strip()
    return name or None


def setup_pnl(trades: Iterable[Trade], *, top_n: int = TOP_SETUPS) -> list[SetupBucket]:
    """Summed PnL per setup, best first, top ``top_n`` kept."""
    totals: dict[str, float] = {}
    for trade in closed_trades(trades):
        name = _setup_label(trade)
        if name is None:
            continue
        totals[name] = totals.get(name, 0.0) + trade.pnl_or_zero
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [SetupBucket(name=name, pnl=pnl) for name, pnl in ranked[:top_n]]


def duration_scatter(trades: Iterable[Trade]) -> list[ScatterPoint]:
    """One point per closed trade with both a duration and a recorded PnL."""
    return [
        ScatterPoint(
            trade_id=t.id,
            duration=t.trade_duration_mins,
            pnl=t.pnl,
            date=t.date,
            instrument=t.instrument,
            size=abs(t.pnl),
        )
        for t in closed_trades(trades)
        if t.trade_duration_mins is not None and t.pnl is not None
    ]


def day_of_week_pnl(trades: Iterable[Trade]) -> list[DayBucket]:
    """PnL per weekday, Monday to Friday.

    Uses the whole ledger; OPEN trades without PnL contribute 0.
    Weekend trades are bucketed but not reported.
    """
    pnl: dict[int, float] = defaultdict(float)
    counts: dict[int, int] = defaultdict(int)
    for trade in trades:
        d = trade.trade_date
        if d is None:
            logger.debug("Skipping trade %s in weekday buckets: bad date %r", trade.id, trade.date)
            continue
        wd = journal_weekday(d)
        pnl[wd] += trade.pnl_or_zero
        counts[wd] += 1
    return [
        DayBucket(day=WEEKDAY_LABELS[wd], pnl=pnl[wd], trades=counts[wd])
        for wd in range(MONDAY, FRIDAY + 1)
    ]


# ------------------------------------------------------------------ #
# Edge Lab reducers                                                    #
# ------------------------------------------------------------------ #

def mistake_cost(trades: Iterable[Trade], *, top_n: int = TOP_MISTAKES) -> list[MistakeCost]:
    """Loss attributed to each mistake tag.

    Only LOSS trades count.  A loss with several tags is split evenly
    between them.
    """
    costs: dict[str, float] = {}
    for trade in trades:
        if trade.outcome != TradeOutcome.LOSS or not trade.has_mistakes:
            continue
        share = abs(trade.pnl_or_zero) / len(trade.mistakes)
        for tag in trade.mistakes:
            costs[tag] = costs.get(tag, 0.0) + share
    ranked = sorted(costs.items(), key=lambda kv: kv[1], reverse=True)
    return [MistakeCost(name=name, cost=cost) for name, cost in ranked[:top_n]]


def mistake_frequency(trades: Iterable[Trade], *, top_n: int = TOP_MISTAKES) -> list[MistakeCount]:
    """How often each mistake tag appears, most frequent first."""
    counts: Counter[str] = Counter()
    for trade in trades:
        counts.update(trade.mistakes)
    # Counter.most_common keeps first-seen order among equal counts
    return [MistakeCount(name=n, count=c) for n, c in counts.most_common(top_n)]


def time_heatmap(
    trades: Iterable[Trade],
    *,
    open_hour: int = MARKET_OPEN_HOUR,
    close_hour: int = MARKET_CLOSE_HOUR,
) -> list[HeatmapCell]:
    """Monday-Friday x market-hours grid of PnL and trade count.

    Every cell is returned, day-major.
    """
    pnl: dict[tuple[int, int], float] = defaultdict(float)
    counts: dict[tuple[int, int], int] = defaultdict(int)
    for trade in closed_trades(trades):
        d = trade.trade_date
        hour = trade.entry_hour
        if d is None or hour is None:
            continue
        wd = journal_weekday(d)
        if MONDAY <= wd <= FRIDAY and open_hour <= hour <= close_hour:
            pnl[(wd, hour)] += trade.pnl_or_zero
            counts[(wd, hour)] += 1
    return [
        HeatmapCell(day=WEEKDAY_LABELS[wd], hour=h, pnl=pnl[(wd, h)], count=counts[(wd, h)])
        for wd in range(MONDAY, FRIDAY + 1)
        for h in range(open_hour, close_hour + 1)
    ]


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def win_loss_profile(trades: Iterable[Trade]) -> list[ProfileMetric]:
    """Average duration, discipline and size of winners vs losers."""
    trades = list(trades)
    winners = [t for t in trades if t.outcome == TradeOutcome.WIN]
    losers = [t for t in trades if t.outcome == TradeOutcome.LOSS]

    def avg(group: list[Trade], attr: str) -> float:
        return _mean([float(getattr(t, attr) or 0) for t in group])

    return [
        ProfileMetric("Avg Duration (Min)", avg(winners, "trade_duration_mins"), avg(losers, "trade_duration_mins")),
        ProfileMetric("Discipline Score (0-5)", avg(winners, "discipline_rating"), avg(losers, "discipline_rating")),
        ProfileMetric("Quantity Size", avg(winners, "quantity"), avg(losers, "quantity")),
    ]


def emotion_breakdown(trades: Iterable[Trade]) -> list[EmotionBucket]:
    """Closed-trade win rate and PnL per emotional state, best win rate first."""
    groups: dict[str, list[Trade]] = {}
    for trade in closed_trades(trades):
        groups.setdefault(trade.emotional_state or DEFAULT_EMOTION, []).append(trade)
    buckets = [
        EmotionBucket(
            name=name,
            win_rate=round_half_up(win_rate(group)),
            pnl=sum((t.pnl_or_zero for t in group), 0.0),
            count=len(group),
        )
        for name, group in groups.items()
    ]
    return sorted(buckets, key=lambda b: b.win_rate, reverse=True)


def mood_score(emotional_state: str | None) -> int:
    state = (emotional_state or "").lower()
    if any(k in state for k in _POSITIVE_MOODS):
        return 1
    if any(k in state for k in _NEGATIVE_MOODS):
        return -1
    return 0


def mood_pnl(trades: Iterable[Trade], *, window: int = MOOD_WINDOW) -> list[MoodPoint]:
    """Mood score vs PnL for the most recent ``window`` closed trades.

    Only trades with a recorded emotional state take part.  The newest
    ``window`` of them are returned oldest first, ready for a line chart.
    """
    tagged = [t for t in closed_trades(trades) if t.emotional_state]
    recent = newest_first(tagged)[:window]
    return [
        MoodPoint(
            trade_id=t.id,
            date=t.date,
            pnl=t.pnl_or_zero,
            mood=mood_score(t.emotional_state),
        )
        for t in reversed(recent)
    ]


def option_type_mix(trades: Iterable[Trade]) -> dict[str, int]:
    """Closed CE vs PE trade counts; zero counts are omitted."""
    closed = closed_trades(trades)
    mix = {
        OptionType.CE.value: sum(1 for t in closed if t.option_type == OptionType.CE),
        OptionType.PE.value: sum(1 for t in closed if t.option_type == OptionType.PE),
    }
    return {k: v for k, v in mix.items() if v > 0}


def setup_playbook(trades: Iterable[Trade]) -> list[PlaybookEntry]:
    """Per-setup record: count, win rate, average and total PnL."""
    groups: dict[str, list[Trade]] = {}
    for trade in closed_trades(trades):
        name = _setup_label(trade)
        if name is not None:
            groups.setdefault(name, []).append(trade)
    entries = []
    for name, group in groups.items():
        total = sum((t.pnl_or_zero for t in group), 0.0)
        entries.append(PlaybookEntry(
            setup_name=name,
            count=len(group),
            win_rate=win_rate(group),
            avg_pnl=total / len(group),
            total_pnl=total,
        ))
    return sorted(entries, key=lambda e: e.total_pnl, reverse=True)
