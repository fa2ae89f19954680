"""yahoofinance — historical and realtime market data from Yahoo! Finance.

Provides:

* historical daily OHLCV bars plus dividends and splits (chart API),
* relatively real-time quotes streamed over a single WebSocket,
* company / fund profiles (industry, sector, address, ...).

Quick start::

    from yahoofinance import history, Interval

    bars = history.retrieve_interval("AAPL", Interval.SIX_MONTHS)

    import asyncio
    from yahoofinance import Streamer

    async def main():
        async for quote in Streamer(["AAPL", "QQQ"]).stream():
            print(quote.symbol, quote.price)

    asyncio.run(main())
"""

from __future__ import annotations

from yahoofinance import history
from yahoofinance.cache import CacheBackend, MemoryCache, NoCache, ParquetCache
from yahoofinance.client import YahooFinanceClient, get_default_client, set_default_client
from yahoofinance.config import YahooFinanceConfig
from yahoofinance.errors import YahooFinanceError, YahooFinanceErrorCode
from yahoofinance.interval import Interval
from yahoofinance.models.bar import Bar
from yahoofinance.models.events import Dividend, Split
from yahoofinance.models.profile import Address, Company, Fund, Profile
from yahoofinance.models.quote import Quote, QuoteType, TradingSession
from yahoofinance.streaming import Streamer

__version__ = "0.1.0"

__all__ = [
    # Client
    "YahooFinanceClient",
    "create_client_from_env",
    "get_default_client",
    "set_default_client",
    "load_profile",
    "history",
    # Streaming
    "Streamer",
    # Config
    "YahooFinanceConfig",
    "Interval",
    # Cache
    "CacheBackend",
    "MemoryCache",
    "NoCache",
    "ParquetCache",
    # Errors
    "YahooFinanceError",
    "YahooFinanceErrorCode",
    # Models
    "Bar",
    "Quote",
    "QuoteType",
    "TradingSession",
    "Dividend",
    "Split",
    "Address",
    "Company",
    "Fund",
    "Profile",
]


def create_client_from_env() -> YahooFinanceClient:
    """Zero-config factory — reads endpoints and cache settings from env vars.

    See :meth:`YahooFinanceConfig.from_env` for the variables consulted.
    """
    return YahooFinanceClient(YahooFinanceConfig.from_env())


def load_profile(symbol: str) -> Profile:
    """Company or fund profile for a symbol, using the shared client."""
    return get_default_client().get_profile(symbol)
