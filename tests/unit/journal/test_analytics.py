"""Tests for the TradeAnalytics facade and its dashboard bundle."""

import json
import logging

import pytest

from journal_analytics.core.config import (
    AnalyticsSettings,
    PatternConfig,
    PsychologyConfig,
    SimulatorConfig,
)
from journal_analytics.journal import ExclusionFilters, TradeAnalytics


@pytest.fixture
def analytics():
    return TradeAnalytics(AnalyticsSettings())


class TestDashboard:
    def test_json_serialisable(self, analytics, mixed_ledger):
        bundle = analytics.dashboard(
            mixed_ledger,
            filters=ExclusionFilters(exclude_mistakes=True),
            selector={"kind": "wins"},
        )
        json.dumps(bundle)
        assert set(bundle) == {
            "stats", "equity_curve", "max_drawdown", "what_if",
            "patterns", "psychology", "selection",
        }

    def test_views_agree(self, analytics, mixed_ledger):
        bundle = analytics.dashboard(mixed_ledger)
        assert bundle["stats"]["total_pnl"] == 60.0
        assert bundle["equity_curve"][-1]["equity"] == 60.0
        assert bundle["what_if"]["summary"]["actual"] == 60.0
        assert bundle["what_if"]["summary"]["delta"] == 0.0
        assert bundle["max_drawdown"] == 120.0

    def test_selection_only_when_requested(self, analytics, mixed_ledger):
        assert analytics.dashboard(mixed_ledger)["selection"] is None
        bundle = analytics.dashboard(mixed_ledger, selector={"kind": "wins"})
        assert [t["id"] for t in bundle["selection"]] == ["m4", "m1"]

    def test_unknown_selector_gives_empty_selection(self, analytics, mixed_ledger):
        bundle = analytics.dashboard(mixed_ledger, selector={"kind": "moon_phase"})
        assert bundle["selection"] == []

    def test_empty_ledger(self, analytics):
        bundle = analytics.dashboard([])
        json.dumps(bundle)
        assert bundle["stats"]["total_trades"] == 0
        assert bundle["equity_curve"] == []
        assert bundle["psychology"]["profile"] is None

    def test_mood_series_included(self, analytics, make_trade):
        trades = [make_trade(emotional_state="Calm", pnl=40.0)]
        patterns = analytics.dashboard(trades)["patterns"]
        assert patterns["mood_pnl"] == [
            {"trade_id": trades[0].id, "date": "2024-01-08", "pnl": 40.0, "mood": 1}
        ]

    def test_logs_through_stdlib_only(self, analytics, mixed_ledger, capsys, caplog):
        caplog.set_level(logging.DEBUG, logger="journal_analytics.journal.analytics")
        analytics.dashboard(mixed_ledger)
        assert capsys.readouterr().out == ""
        assert any("Dashboard built" in r.getMessage() for r in caplog.records)


class TestConfiguredThresholds:
    def test_late_entry_hour(self, mixed_ledger):
        settings = AnalyticsSettings(simulator=SimulatorConfig(late_entry_hour=10))
        result = TradeAnalytics(settings).what_if(
            mixed_ledger, ExclusionFilters(exclude_after_2pm=True)
        )
        # Only m1 (09:20) survives
        assert result.summary.sim == 120.0
        assert result.summary.actual == 60.0
        assert result.summary.delta == 60.0

    def test_top_setups(self, mixed_ledger):
        settings = AnalyticsSettings(patterns=PatternConfig(top_setups=1))
        patterns = TradeAnalytics(settings).patterns(mixed_ledger)
        assert patterns["setup_pnl"] == [{"name": "ORB", "pnl": 80.0}]

    def test_market_hours(self, mixed_ledger):
        settings = AnalyticsSettings(
            patterns=PatternConfig(market_open_hour=10, market_close_hour=11)
        )
        patterns = TradeAnalytics(settings).patterns(mixed_ledger)
        assert [row["hour"] for row in patterns["hourly_pnl"]] == [10, 11]
        assert len(patterns["time_heatmap"]) == 10

    def test_stable_emotions(self, make_trade):
        settings = AnalyticsSettings(psychology=PsychologyConfig(stable_emotions=["Greedy"]))
        trades = [make_trade(emotional_state="Greedy")]
        psych = TradeAnalytics(settings).psychology(trades)
        assert psych["profile"]["emotional_stability"] == 100
        assert psych["weekly"][0]["mental_stability"] == 100

    def test_default_settings(self):
        assert TradeAnalytics().settings.simulator.late_entry_hour == 14
