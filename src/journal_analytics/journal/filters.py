"""Drill-down filters over the trade ledger.

A selector is a small frozen model tagged by ``kind``.  The dashboard
sends either a selector instance or its plain-dict form::

    resolve_filter(trades, DaySelector(weekday=5))
    resolve_filter(trades, {"kind": "day", "weekday": 5})

Results are always newest first.  An unknown ``kind`` (or a dict that
does not validate) resolves to an empty list instead of raising, so a
stale UI selection simply shows nothing.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Mapping, Sequence, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..core.dates import journal_weekday
from ..core.enums import TradeDirection, TradeOutcome
from ..core.models import Trade, closed_trades
from .ordering import by_pnl_desc, newest_first

logger = logging.getLogger(__name__)


class _Selector(BaseModel):
    model_config = {"frozen": True}


class AllClosedSelector(_Selector):
    kind: Literal["all_closed"] = "all_closed"


class WinsSelector(_Selector):
    kind: Literal["wins"] = "wins"


class LossesSelector(_Selector):
    kind: Literal["losses"] = "losses"


class BestSelector(_Selector):
    kind: Literal["best"] = "best"


class WorstSelector(_Selector):
    kind: Literal["worst"] = "worst"


class DaySelector(_Selector):
    kind: Literal["day"] = "day"
    weekday: int = Field(ge=0, le=6)  # 0=Sunday .. 6=Saturday


class DirectionSelector(_Selector):
    kind: Literal["direction"] = "direction"
    direction: TradeDirection


class DateSelector(_Selector):
    kind: Literal["date"] = "date"
    date: str


FilterSelector = Annotated[
    Union[
        AllClosedSelector,
        WinsSelector,
        LossesSelector,
        BestSelector,
        WorstSelector,
        DaySelector,
        DirectionSelector,
        DateSelector,
    ],
    Field(discriminator="kind"),
]

_selector_adapter: TypeAdapter[Any] = TypeAdapter(FilterSelector)


def parse_selector(data: Mapping[str, Any]) -> _Selector | None:
    """Validate a plain-dict selector, ``None`` if it is not recognised."""
    try:
        return _selector_adapter.validate_python(dict(data))
    except ValidationError as exc:
        logger.debug("Unrecognised filter selector %r: %s", dict(data), exc)
        return None


def _extreme(trades: Sequence[Trade], *, best: bool) -> list[Trade]:
    ranked = by_pnl_desc(closed_trades(trades))
    if not ranked:
        return []
    return [ranked[0] if best else ranked[-1]]


def _on_weekday(trade: Trade, weekday: int) -> bool:
    d = trade.trade_date
    return d is not None and journal_weekday(d) == weekday


def resolve_filter(
    trades: Sequence[Trade],
    selector: _Selector | Mapping[str, Any] | None,
) -> list[Trade]:
    """Return the trades matching ``selector``, newest first.

    ``all_closed``, ``wins``, ``losses``, ``best`` and ``worst`` only
    look at closed trades; ``day``, ``direction`` and ``date`` match
    against the whole ledger, OPEN trades included.  ``best`` and
    ``worst`` take the first and last trade of a stable descending PnL
    sort, so ties go to the earlier ledger entry for ``best`` and the
    later one for ``worst``.
    """
    if isinstance(selector, Mapping):
        selector = parse_selector(selector)

    if isinstance(selector, AllClosedSelector):
        matched = closed_trades(trades)
    elif isinstance(selector, WinsSelector):
        matched = [t for t in closed_trades(trades) if t.outcome == TradeOutcome.WIN]
    elif isinstance(selector, LossesSelector):
        matched = [t for t in closed_trades(trades) if t.outcome == TradeOutcome.LOSS]
    elif isinstance(selector, BestSelector):
        matched = _extreme(trades, best=True)
    elif isinstance(selector, WorstSelector):
        matched = _extreme(trades, best=False)
    elif isinstance(selector, DaySelector):
        matched = [t for t in trades if _on_weekday(t, selector.weekday)]
    elif isinstance(selector, DirectionSelector):
        matched = [t for t in trades if t.direction == selector.direction]
    elif isinstance(selector, DateSelector):
        matched = [t for t in trades if t.date == selector.date]
    else:
        logger.debug("No filter branch for selector %r", selector)
        return []

    return newest_first(matched)
