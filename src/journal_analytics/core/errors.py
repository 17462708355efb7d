"""Custom exception hierarchy for the journal analytics package."""


class JournalAnalyticsError(Exception):
    """Base exception for all journal analytics errors."""


# --- Configuration ---
class ConfigError(JournalAnalyticsError):
    """Invalid or unreadable configuration."""


# --- Ledger ---
class LedgerError(JournalAnalyticsError):
    """Ledger supplied by the caller is structurally inconsistent."""


class DuplicateTradeIdError(LedgerError):
    """Two trades in the same ledger share an id."""

    def __init__(self, trade_id: str):
        self.trade_id = trade_id
        super().__init__(f"Duplicate trade id in ledger: {trade_id!r}")
