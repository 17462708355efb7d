"""Trade journal analytics for discretionary intraday option trading."""

__version__ = "0.1.0"
