"""Bar (OHLCV) data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Bar:
    """Single daily price bar.

    Attributes:
        timestamp: Bar timestamp (start of the trading day, UTC).
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Shares traded.
    """

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: int

    @property
    def timestamp_millis(self) -> int:
        return int(self.timestamp.timestamp() * 1000)
