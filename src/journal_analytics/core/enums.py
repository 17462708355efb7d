"""Enumerations used across the journal analytics package."""

from enum import Enum


class TradeDirection(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"


class TradeOutcome(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"
    BREAK_EVEN = "BREAK_EVEN"
    OPEN = "OPEN"
    SKIPPED = "SKIPPED"


class OptionType(str, Enum):
    CE = "CE"  # Call
    PE = "PE"  # Put
    FUT = "FUT"
    SPOT = "SPOT"
