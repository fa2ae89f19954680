"""Range / resolution tokens understood by the chart API."""

from __future__ import annotations

from enum import Enum


class Interval(Enum):
    """An interval used when requesting periods of quote information.

    The value is the token Yahoo! expects on the wire. ``m`` is minutes,
    ``mo`` is months.
    """

    ONE_MINUTE = "1m"
    TWO_MINUTES = "2m"
    FIVE_MINUTES = "5m"
    FIFTEEN_MINUTES = "15m"
    THIRTY_MINUTES = "30m"
    SIXTY_MINUTES = "60m"
    NINETY_MINUTES = "90m"
    ONE_DAY = "1d"
    FIVE_DAYS = "5d"
    ONE_MONTH = "1mo"
    THREE_MONTHS = "3mo"
    SIX_MONTHS = "6mo"
    ONE_YEAR = "1y"
    TWO_YEARS = "2y"
    FIVE_YEARS = "5y"
    TEN_YEARS = "10y"
    YEAR_TO_DATE = "ytd"
    MAX = "max"

    @property
    def is_intraday(self) -> bool:
        return self in _INTRADAY

    @classmethod
    def parse(cls, token: str) -> Interval:
        """Look up an interval by its wire token (``"6mo"``)."""
        try:
            return cls(token.strip().lower())
        except ValueError:
            valid = ", ".join(i.value for i in cls)
            raise ValueError(f"Unknown interval {token!r}. Valid: {valid}") from None

    def __str__(self) -> str:
        return self.value


_INTRADAY = frozenset({
    Interval.ONE_MINUTE,
    Interval.TWO_MINUTES,
    Interval.FIVE_MINUTES,
    Interval.FIFTEEN_MINUTES,
    Interval.THIRTY_MINUTES,
    Interval.SIXTY_MINUTES,
    Interval.NINETY_MINUTES,
})
