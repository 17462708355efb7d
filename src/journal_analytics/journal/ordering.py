"""Stable orderings shared by the analytics modules.

All sorts rely on Python's stable ``sorted`` so trades with equal keys
keep their relative ledger order (``reverse=True`` preserves it too).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from ..core.models import Trade

logger = logging.getLogger(__name__)


def chronological(trades: Iterable[Trade]) -> list[tuple[date, Trade]]:
    """Oldest-first ``(date, trade)`` pairs.

    Trades whose date cannot be parsed are dropped and logged.
    """
    dated: list[tuple[date, Trade]] = []
    for trade in trades:
        d = trade.trade_date
        if d is None:
            logger.debug("Skipping trade %s: unparseable date %r", trade.id, trade.date)
            continue
        dated.append((d, trade))
    return sorted(dated, key=lambda pair: pair[0])


def newest_first(trades: Iterable[Trade]) -> list[Trade]:
    """Display order: descending by date.

    Undated trades are kept but placed after every dated trade.
    """
    trades = list(trades)
    dated = [t for t in trades if t.trade_date is not None]
    undated = [t for t in trades if t.trade_date is None]
    return sorted(dated, key=lambda t: t.trade_date, reverse=True) + undated


def by_pnl_desc(trades: Iterable[Trade]) -> list[Trade]:
    """Descending by PnL (absent PnL = 0); ties keep ledger order."""
    return sorted(trades, key=lambda t: t.pnl_or_zero, reverse=True)
