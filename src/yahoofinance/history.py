"""Historical quotes.

Module-level helpers run against a shared, lazily built
:class:`~yahoofinance.client.YahooFinanceClient` configured from the
environment. Build your own client when you need a different configuration.

Quick start::

    from yahoofinance import history, Interval

    for bar in history.retrieve_interval("AAPL", Interval.SIX_MONTHS):
        print(f"Apple hit an intraday high of ${bar.high:.2f} on {bar.timestamp:%b %d %Y}")
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from yahoofinance.errors import YahooFinanceError, YahooFinanceErrorCode
from yahoofinance.interval import Interval
from yahoofinance.models.bar import Bar
from yahoofinance.models.events import Dividend, Split

if TYPE_CHECKING:
    from yahoofinance.chart import ChartData

DEFAULT_INTERVAL = Interval.SIX_MONTHS


def aggregate_bars(data: ChartData) -> list[Bar]:
    """Zip the parallel chart arrays into bars, skipping incomplete days."""
    if not data.has_quotes:
        return []

    columns = (data.opens, data.highs, data.lows, data.closes, data.volumes)
    if not data.timestamps:
        if any(columns):
            raise YahooFinanceError(
                "Yahoo! returned invalid data - no timestamps",
                code=YahooFinanceErrorCode.MISSING_DATA,
            )
        return []

    if any(len(col) != len(data.timestamps) for col in columns):
        raise YahooFinanceError(
            "Yahoo! returned invalid data - dates do not line up with quotes",
            code=YahooFinanceErrorCode.BAD_DATA,
        )

    bars: list[Bar] = []
    for ts, o, h, l, c, v in zip(data.timestamps, *columns):  # noqa: E741
        # skip days where we have incomplete data
        if o is None or h is None or l is None or c is None or v is None:
            continue
        bars.append(Bar(
            timestamp=datetime.fromtimestamp(ts, tz=timezone.utc),
            open=o,
            high=h,
            low=l,
            close=c,
            volume=v,
        ))
    return bars


def retrieve(symbol: str) -> list[Bar]:
    """Retrieve (at most) 6 months of daily OHLCV data ending on the last close."""
    return _client().get_bars(symbol, DEFAULT_INTERVAL)


def retrieve_interval(symbol: str, interval: Interval) -> list[Bar]:
    """Retrieve a configurable amount of daily OHLCV data ending on the last close.

    Fewer bars than the interval spans are returned for recently listed
    symbols. Intraday intervals are rejected.
    """
    return _client().get_bars(symbol, interval)


def retrieve_range(
    symbol: str, start: datetime, end: datetime | None = None,
) -> list[Bar]:
    """Retrieve daily OHLCV data between ``start`` and ``end`` (default: now)."""
    return _client().get_bars_range(symbol, start, end)


def retrieve_events(
    symbol: str, interval: Interval = DEFAULT_INTERVAL,
) -> tuple[list[Dividend], list[Split]]:
    """Retrieve dividends and splits over a named range."""
    return _client().get_events(symbol, interval)


def retrieve_range_events(
    symbol: str, start: datetime, end: datetime | None = None,
) -> tuple[list[Dividend], list[Split]]:
    """Retrieve dividends and splits between ``start`` and ``end``."""
    return _client().get_events_range(symbol, start, end)


def _client():
    from yahoofinance.client import get_default_client

    return get_default_client()
