"""Core domain models for the trade journal.

``Trade`` is the canonical journal record.  The ledger itself is owned
by the caller (persistence/import layer); everything in this package
treats it as read-only input.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from .dates import parse_hour, parse_trade_date
from .enums import OptionType, TradeDirection, TradeOutcome
from .errors import DuplicateTradeIdError


class Trade(BaseModel):
    """A single journal entry.

    Field names are snake_case; the camelCase spelling used by the
    journal front-end (``entryTime``, ``tradeDurationMins``...) is
    accepted as an alias so exported records validate unchanged.

    ``date`` is kept as a string and not validated as a calendar date.
    Date-dependent analytics skip records whose date does not parse.
    """

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

    id: str
    date: str
    entry_time: str | None = None  # HH:MM
    exit_time: str | None = None  # HH:MM
    direction: TradeDirection
    outcome: TradeOutcome
    pnl: float | None = None  # None = not recorded, distinct from 0.0

    mistakes: tuple[str, ...] = ()
    trade_duration_mins: float | None = None

    # Classification
    setup_name: str | None = None
    instrument: str = "NIFTY 50"
    strike_price: float | None = None
    option_type: OptionType | None = None
    quantity: float | None = None

    # Psychology
    emotional_state: str | None = None
    discipline_rating: int | None = Field(default=None, ge=0, le=5)
    followed_system: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def date_to_iso_string(cls, v: object) -> object:
        if isinstance(v, date):
            return v.isoformat()[:10]
        return v

    @field_validator("mistakes", mode="before")
    @classmethod
    def drop_blank_mistakes(cls, v: object) -> object:
        if v is None:
            return ()
        if isinstance(v, (set, frozenset)):
            v = sorted(str(m) for m in v)
        if isinstance(v, Iterable) and not isinstance(v, (str, bytes)):
            return tuple(str(m).strip() for m in v if str(m).strip())
        return v

    # ------------------------------------------------------------------ #
    # Derived helpers                                                      #
    # ------------------------------------------------------------------ #

    @property
    def is_closed(self) -> bool:
        """Anything but OPEN counts as closed (WIN, LOSS, BREAK_EVEN, SKIPPED)."""
        return self.outcome != TradeOutcome.OPEN

    @property
    def pnl_or_zero(self) -> float:
        return self.pnl if self.pnl is not None else 0.0

    @property
    def has_mistakes(self) -> bool:
        return len(self.mistakes) > 0

    @property
    def trade_date(self) -> date | None:
        """Parsed ``date``, or ``None`` when the stored value is malformed."""
        return parse_trade_date(self.date)

    @property
    def entry_hour(self) -> int | None:
        return parse_hour(self.entry_time)


def closed_trades(trades: Iterable[Trade]) -> list[Trade]:
    """Filter a ledger down to closed trades, preserving ledger order."""
    return [t for t in trades if t.is_closed]


def check_unique_ids(trades: Sequence[Trade]) -> None:
    """Raise ``DuplicateTradeIdError`` if any id appears twice."""
    seen: set[str] = set()
    for trade in trades:
        if trade.id in seen:
            raise DuplicateTradeIdError(trade.id)
        seen.add(trade.id)
