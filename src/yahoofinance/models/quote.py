"""Realtime quote data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TradingSession(Enum):
    """The trading session in which a quote occurred."""

    PRE_MARKET = "pre_market"
    REGULAR = "regular"
    AFTER_HOURS = "after_hours"
    OTHER = "other"

    @classmethod
    def from_wire(cls, value: int) -> TradingSession:
        return _SESSIONS.get(value, cls.OTHER)


class QuoteType(Enum):
    """Kind of instrument a quote belongs to."""

    NONE = "none"
    EQUITY = "equity"
    INDEX = "index"
    ETF = "etf"
    OPTION = "option"
    CURRENCY = "currency"
    CRYPTOCURRENCY = "cryptocurrency"
    FUTURE = "future"
    MUTUAL_FUND = "mutual_fund"
    HEARTBEAT = "heartbeat"
    OTHER = "other"

    @classmethod
    def from_wire(cls, value: int) -> QuoteType:
        return _QUOTE_TYPES.get(value, cls.OTHER)


# Wire values of PricingData.MarketHoursType / PricingData.QuoteType
_SESSIONS = {
    0: TradingSession.PRE_MARKET,
    1: TradingSession.REGULAR,
    2: TradingSession.AFTER_HOURS,
}

_QUOTE_TYPES = {
    0: QuoteType.NONE,
    7: QuoteType.HEARTBEAT,
    8: QuoteType.EQUITY,
    9: QuoteType.INDEX,
    11: QuoteType.MUTUAL_FUND,
    13: QuoteType.OPTION,
    14: QuoteType.CURRENCY,
    18: QuoteType.FUTURE,
    20: QuoteType.ETF,
    41: QuoteType.CRYPTOCURRENCY,
}


@dataclass(frozen=True)
class Quote:
    """A symbol's price at a point in time.

    Attributes:
        symbol: Ticker symbol.
        timestamp: Time of the price update (UTC).
        price: Last traded price.
        volume: Day volume so far.
        session: Pre-market / regular / after-hours.
        quote_type: Instrument kind (equity, index, ...).
        change: Change from the previous close.
        change_percent: Percent change from the previous close.
        day_high: Session high.
        day_low: Session low.
        currency: Quote currency code.
        exchange: Exchange code.
    """

    symbol: str
    timestamp: datetime
    price: float
    volume: int
    session: TradingSession = TradingSession.OTHER
    quote_type: QuoteType = QuoteType.NONE
    change: float | None = None
    change_percent: float | None = None
    day_high: float | None = None
    day_low: float | None = None
    currency: str | None = None
    exchange: str | None = None
