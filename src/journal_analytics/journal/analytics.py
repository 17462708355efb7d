"""Settings-bound facade over the analytics functions.

The UI builds one ``TradeAnalytics`` from its settings and calls it on
every render with the current ledger snapshot.  The facade holds no
state besides the settings, so each call recomputes from scratch.

Usage::

    analytics = TradeAnalytics(load_settings("configs/journal.toml"))
    bundle = analytics.dashboard(trades, filters=ExclusionFilters(exclude_mistakes=True))
    json.dumps(bundle)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from ..core.config import AnalyticsSettings
from ..core.models import Trade
from . import patterns as pat
from .equity import EquityPoint, build_equity_curve, max_drawdown
from .filters import resolve_filter
from .psychology import discipline_profile, weekly_trends
from .stats import TradeStats, compute_stats
from .whatif import (
    ExclusionFilters,
    OptimizationStats,
    SimPoint,
    compute_optimization_stats,
    simulate,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WhatIfResult:
    points: list[SimPoint]
    summary: OptimizationStats

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": [p.to_dict() for p in self.points],
            "summary": self.summary.to_dict(),
        }


class TradeAnalytics:
    """Trade ledger analytics with configured thresholds.

    Parameters
    ----------
    settings : AnalyticsSettings | None
        Thresholds for the simulator, pattern and psychology views.
        Defaults to ``AnalyticsSettings()``.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self._settings = settings or AnalyticsSettings()

    @property
    def settings(self) -> AnalyticsSettings:
        return self._settings

    # ------------------------------------------------------------------ #
    # Individual views                                                     #
    # ------------------------------------------------------------------ #

    def stats(self, trades: Sequence[Trade]) -> TradeStats:
        return compute_stats(trades)

    def equity_curve(self, trades: Sequence[Trade]) -> list[EquityPoint]:
        return list(build_equity_curve(trades))

    def filter(
        self,
        trades: Sequence[Trade],
        selector: Any,
    ) -> list[Trade]:
        return resolve_filter(trades, selector)

    def what_if(
        self,
        trades: Sequence[Trade],
        filters: ExclusionFilters | None = None,
    ) -> WhatIfResult:
        """Run the what-if eraser with the configured thresholds."""
        cfg = self._settings.simulator
        points = simulate(
            trades,
            filters or ExclusionFilters(),
            short_duration_mins=cfg.short_duration_mins,
            late_entry_hour=cfg.late_entry_hour,
        )
        return WhatIfResult(points=points, summary=compute_optimization_stats(points))

    def patterns(self, trades: Sequence[Trade]) -> dict[str, Any]:
        """Every pattern aggregator, as plain data."""
        cfg = self._settings.patterns
        hours = {"open_hour": cfg.market_open_hour, "close_hour": cfg.market_close_hour}
        return {
            "hourly_pnl": pat.to_dicts(pat.hourly_pnl(trades, **hours)),
            "setup_pnl": pat.to_dicts(pat.setup_pnl(trades, top_n=cfg.top_setups)),
            "duration_scatter": pat.to_dicts(pat.duration_scatter(trades)),
            "day_of_week_pnl": pat.to_dicts(pat.day_of_week_pnl(trades)),
            "mistake_cost": pat.to_dicts(pat.mistake_cost(trades, top_n=cfg.top_mistakes)),
            "mistake_frequency": pat.to_dicts(pat.mistake_frequency(trades, top_n=cfg.top_mistakes)),
            "time_heatmap": pat.to_dicts(pat.time_heatmap(trades, **hours)),
            "win_loss_profile": pat.to_dicts(pat.win_loss_profile(trades)),
            "emotion_breakdown": pat.to_dicts(pat.emotion_breakdown(trades)),
            "mood_pnl": pat.to_dicts(pat.mood_pnl(trades)),
            "option_type_mix": pat.option_type_mix(trades),
            "setup_playbook": pat.to_dicts(pat.setup_playbook(trades)),
        }

    def psychology(self, trades: Sequence[Trade]) -> dict[str, Any]:
        cfg = self._settings.psychology
        profile = discipline_profile(
            trades,
            stable_emotions=cfg.stable_emotions,
            disciplined_rating=cfg.disciplined_rating,
            recent_offenses=cfg.recent_offenses,
        )
        return {
            "profile": profile.to_dict() if profile is not None else None,
            "weekly": [w.to_dict() for w in weekly_trends(trades, stable_emotions=cfg.stable_emotions)],
        }

    # ------------------------------------------------------------------ #
    # Dashboard bundle                                                     #
    # ------------------------------------------------------------------ #

    def dashboard(
        self,
        trades: Sequence[Trade],
        *,
        filters: ExclusionFilters | None = None,
        selector: Any = None,
    ) -> dict[str, Any]:
        """Assemble every view-model for one render into a JSON-safe dict.

        ``selection`` is ``None`` unless a drill-down ``selector`` is given.
        """
        curve = self.equity_curve(trades)
        what_if = self.what_if(trades, filters)

        selection = None
        if selector is not None:
            selection = [
                t.model_dump(mode="json") for t in self.filter(trades, selector)
            ]

        bundle = {
            "stats": self.stats(trades).to_dict(),
            "equity_curve": [p.to_dict() for p in curve],
            "max_drawdown": max_drawdown(curve),
            "what_if": what_if.to_dict(),
            "patterns": self.patterns(trades),
            "psychology": self.psychology(trades),
            "selection": selection,
        }
        logger.debug(
            "Dashboard built: %d trades, %d curve points, exclusions=%s, selection=%s",
            len(trades),
            len(curve),
            (filters or ExclusionFilters()).any_enabled,
            None if selection is None else len(selection),
        )
        return bundle
