"""Shared fixtures for the journal-analytics test suite."""

from __future__ import annotations

import itertools
from typing import Any, Callable

import pytest

from journal_analytics.core.enums import TradeDirection, TradeOutcome
from journal_analytics.core.models import Trade

_ids = itertools.count(1)


def build_trade(**overrides: Any) -> Trade:
    """Create a closed winning LONG trade, overriding any field."""
    fields: dict[str, Any] = {
        "id": f"t{next(_ids)}",
        "date": "2024-01-08",  # Monday
        "entry_time": "09:30",
        "direction": TradeDirection.LONG,
        "outcome": TradeOutcome.WIN,
        "pnl": 100.0,
    }
    fields.update(overrides)
    return Trade(**fields)


@pytest.fixture
def make_trade() -> Callable[..., Trade]:
    """Factory fixture: ``make_trade(pnl=-50, outcome=TradeOutcome.LOSS)``."""
    return build_trade


@pytest.fixture
def scenario_a() -> list[Trade]:
    """Three closed trades: +100 WIN, -50 LOSS, +25 WIN."""
    return [
        build_trade(id="a1", date="2024-01-08", pnl=100.0, outcome=TradeOutcome.WIN),
        build_trade(id="a2", date="2024-01-09", pnl=-50.0, outcome=TradeOutcome.LOSS),
        build_trade(id="a3", date="2024-01-10", pnl=25.0, outcome=TradeOutcome.WIN),
    ]


@pytest.fixture
def mixed_ledger() -> list[Trade]:
    """A week of trades: Monday to Friday plus one OPEN trade.

    2024-01-08 is a Monday, 2024-01-12 a Friday.
    """
    return [
        build_trade(id="m1", date="2024-01-08", entry_time="09:20", pnl=120.0,
                    outcome=TradeOutcome.WIN, setup_name="ORB",
                    trade_duration_mins=12, mistakes=[]),
        build_trade(id="m2", date="2024-01-09", entry_time="10:05", pnl=-80.0,
                    outcome=TradeOutcome.LOSS, direction=TradeDirection.SHORT,
                    setup_name="VWAP Reject", trade_duration_mins=3,
                    mistakes=["FOMO"]),
        build_trade(id="m3", date="2024-01-12", entry_time="14:15", pnl=-40.0,
                    outcome=TradeOutcome.LOSS, setup_name="ORB",
                    trade_duration_mins=20, mistakes=["Revenge", "Overtrading"]),
        build_trade(id="m4", date="2024-01-12", entry_time="11:00", pnl=60.0,
                    outcome=TradeOutcome.WIN, direction=TradeDirection.SHORT,
                    setup_name="  ", trade_duration_mins=8),
        build_trade(id="m5", date="2024-01-10", entry_time="13:45", pnl=None,
                    outcome=TradeOutcome.OPEN),
    ]
