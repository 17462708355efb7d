"""Tests for the what-if eraser: counterfactual equity simulation."""

import pytest
from pydantic import ValidationError

from journal_analytics.core.enums import TradeOutcome
from journal_analytics.journal.whatif import (
    ExclusionFilters,
    OptimizationStats,
    SimPoint,
    compute_optimization_stats,
    exclusion_reasons,
    simulate,
)


class TestNoFilters:
    def test_scenario_c_simulated_tracks_actual(self, mixed_ledger):
        points = simulate(mixed_ledger, ExclusionFilters())
        assert points
        assert all(p.simulated == p.actual for p in points)
        stats = compute_optimization_stats(points)
        assert stats.delta == 0
        assert stats.pct == 0

    def test_open_trades_excluded_from_both_paths(self, mixed_ledger):
        points = simulate(mixed_ledger, ExclusionFilters())
        assert len(points) == 4

    def test_chronological_running_totals(self, make_trade):
        trades = [
            make_trade(date="2024-01-03", pnl=30.0),
            make_trade(date="2024-01-01", pnl=10.0),
            make_trade(date="2024-01-02", pnl=-5.0, outcome=TradeOutcome.LOSS),
        ]
        points = simulate(trades, ExclusionFilters())
        assert [p.date for p in points] == ["2024-01-01", "2024-01-02", "2024-01-03"]
        assert [p.actual for p in points] == [10.0, 5.0, 35.0]


class TestExclusionRules:
    def test_exclude_mistakes(self, make_trade):
        trades = [
            make_trade(date="2024-01-08", pnl=-40.0, outcome=TradeOutcome.LOSS, mistakes=["FOMO"]),
            make_trade(date="2024-01-09", pnl=25.0),
        ]
        points = simulate(trades, ExclusionFilters(exclude_mistakes=True))
        assert [(p.actual, p.simulated) for p in points] == [(-40.0, 0.0), (-15.0, 25.0)]
        assert points[0].excluded == ("mistakes",)
        assert points[1].excluded == ()

    def test_exclude_fridays(self, make_trade):
        trades = [
            make_trade(date="2024-01-12", pnl=-30.0, outcome=TradeOutcome.LOSS),  # Friday
            make_trade(date="2024-01-11", pnl=10.0),  # Thursday
        ]
        points = simulate(trades, ExclusionFilters(exclude_fridays=True))
        assert points[-1].actual == -20.0
        assert points[-1].simulated == 10.0

    def test_exclude_short_duration_threshold(self, make_trade):
        trades = [
            make_trade(date="2024-01-08", trade_duration_mins=4.9, pnl=1.0),
            make_trade(date="2024-01-09", trade_duration_mins=5, pnl=2.0),
            make_trade(date="2024-01-10", trade_duration_mins=None, pnl=4.0),
        ]
        points = simulate(trades, ExclusionFilters(exclude_short_duration=True))
        # 4.9 and absent (treated as 0) are short; exactly 5 is kept
        assert points[-1].simulated == 2.0

    def test_exclude_after_2pm_threshold(self, make_trade):
        trades = [
            make_trade(date="2024-01-08", entry_time="13:59", pnl=1.0),
            make_trade(date="2024-01-09", entry_time="14:00", pnl=2.0),
            make_trade(date="2024-01-10", entry_time=None, pnl=4.0),
            make_trade(date="2024-01-11", entry_time="²:00", pnl=8.0),
        ]
        points = simulate(trades, ExclusionFilters(exclude_after_2pm=True))
        assert points[-1].simulated == 13.0

    def test_configurable_thresholds(self, make_trade):
        trades = [make_trade(date="2024-01-08", entry_time="13:10", trade_duration_mins=8, pnl=5.0)]
        points = simulate(
            trades,
            ExclusionFilters(exclude_after_2pm=True),
            late_entry_hour=13,
        )
        assert points[-1].simulated == 0.0
        points = simulate(
            trades,
            ExclusionFilters(exclude_short_duration=True),
            short_duration_mins=10,
        )
        assert points[-1].simulated == 0.0


class TestOrSemantics:
    def test_single_matching_rule_excludes(self, make_trade):
        trade = make_trade(date="2024-01-12", mistakes=["Revenge"], pnl=-100.0,
                           outcome=TradeOutcome.LOSS)
        points = simulate([trade], ExclusionFilters(exclude_fridays=True, exclude_mistakes=False))
        assert points[0].simulated == 0.0
        assert points[0].actual == -100.0

    def test_reasons_list_every_enabled_match(self, make_trade):
        trade = make_trade(date="2024-01-12", mistakes=["Revenge"], entry_time="14:30",
                           trade_duration_mins=2)
        filters = ExclusionFilters(
            exclude_mistakes=True,
            exclude_fridays=True,
            exclude_short_duration=True,
            exclude_after_2pm=True,
        )
        assert exclusion_reasons(trade, filters) == ("mistakes", "fridays", "short_duration", "after_2pm")

    def test_disabled_rules_never_match(self, make_trade):
        trade = make_trade(date="2024-01-12", mistakes=["Revenge"], entry_time="14:30",
                           trade_duration_mins=2)
        assert exclusion_reasons(trade, ExclusionFilters()) == ()


class TestOptimizationStats:
    def test_empty_is_all_zero(self):
        assert compute_optimization_stats([]) == OptimizationStats(0.0, 0.0, 0.0, 0.0)

    def test_delta_and_pct_from_final_point(self):
        points = [
            SimPoint(date="2024-01-01", actual=-50.0, simulated=0.0),
            SimPoint(date="2024-01-02", actual=-100.0, simulated=20.0),
        ]
        stats = compute_optimization_stats(points)
        assert stats.delta == 120.0
        assert stats.pct == pytest.approx(120.0)
        assert stats.actual == -100.0
        assert stats.sim == 20.0

    def test_zero_actual_gives_zero_pct(self):
        points = [SimPoint(date="2024-01-01", actual=0.0, simulated=35.0)]
        stats = compute_optimization_stats(points)
        assert stats.delta == 35.0
        assert stats.pct == 0.0


class TestStatelessness:
    def test_rerun_gives_identical_result(self, mixed_ledger):
        filters = ExclusionFilters(exclude_mistakes=True)
        assert simulate(mixed_ledger, filters) == simulate(mixed_ledger, filters)

    def test_filters_are_immutable(self):
        filters = ExclusionFilters()
        with pytest.raises(ValidationError):
            filters.exclude_fridays = True

    def test_filters_reject_wrong_shape(self):
        with pytest.raises(ValidationError):
            ExclusionFilters(exclude_fridays="maybe")


class TestMalformedDates:
    def test_bad_date_skipped(self, make_trade):
        trades = [make_trade(date="", pnl=10.0), make_trade(date="2024-01-08", pnl=5.0)]
        points = simulate(trades, ExclusionFilters())
        assert len(points) == 1
        assert points[0].actual == 5.0
