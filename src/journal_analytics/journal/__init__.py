"""Trade journal analytics: stats, equity, drill-down and what-if.

Pure functions over a caller-owned ledger of ``Trade`` records.  Every
call recomputes from the ledger snapshot it is given; nothing here
holds state between calls or writes back to the ledger.

Key components
--------------
compute_stats            Win rate, profit factor, best/worst, directional split
build_equity_curve       Chronological cumulative PnL (lazy)
resolve_filter           Drill-down selectors over the ledger, newest first
simulate                 What-if eraser: actual vs counterfactual equity
compute_optimization_stats  Final delta of a what-if run
patterns                 Hour / setup / duration / weekday / mistake reducers
discipline_profile       Discipline, adherence and emotional stability
TradeAnalytics           Settings-bound facade producing the dashboard bundle
"""

from .stats import TradeStats, compute_stats
from .equity import EquityPoint, build_equity_curve, max_drawdown
from .filters import (
    AllClosedSelector,
    BestSelector,
    DateSelector,
    DaySelector,
    DirectionSelector,
    FilterSelector,
    LossesSelector,
    WinsSelector,
    WorstSelector,
    parse_selector,
    resolve_filter,
)
from .whatif import (
    ExclusionFilters,
    OptimizationStats,
    SimPoint,
    compute_optimization_stats,
    exclusion_reasons,
    simulate,
)
from .psychology import DisciplineProfile, WeeklyTrend, discipline_profile, weekly_trends
from .analytics import TradeAnalytics, WhatIfResult

__all__ = [
    "TradeStats",
    "compute_stats",
    "EquityPoint",
    "build_equity_curve",
    "max_drawdown",
    "AllClosedSelector",
    "BestSelector",
    "DateSelector",
    "DaySelector",
    "DirectionSelector",
    "FilterSelector",
    "LossesSelector",
    "WinsSelector",
    "WorstSelector",
    "parse_selector",
    "resolve_filter",
    "ExclusionFilters",
    "OptimizationStats",
    "SimPoint",
    "compute_optimization_stats",
    "exclusion_reasons",
    "simulate",
    "DisciplineProfile",
    "WeeklyTrend",
    "discipline_profile",
    "weekly_trends",
    "TradeAnalytics",
    "WhatIfResult",
]
