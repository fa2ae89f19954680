"""YahooFinanceClient — central orchestrator: cache -> chart API -> validate -> store."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

import requests

from yahoofinance.cache import CacheBackend, create_cache
from yahoofinance.chart import ChartAPI, ChartData
from yahoofinance.config import YahooFinanceConfig
from yahoofinance.errors import YahooFinanceError, YahooFinanceErrorCode
from yahoofinance.history import DEFAULT_INTERVAL, aggregate_bars
from yahoofinance.interval import Interval
from yahoofinance.models.bar import Bar
from yahoofinance.models.events import Dividend, Split
from yahoofinance.models.profile import Profile
from yahoofinance.profile import ProfileScraper
from yahoofinance.quality import validate_bars
from yahoofinance.streaming import Streamer

LOGGER = logging.getLogger(__name__)


class YahooFinanceClient:
    """Entry point for historical bars, corporate events and profiles.

    Usage::

        client = YahooFinanceClient()
        bars = client.get_bars("AAPL", Interval.ONE_YEAR)
        dividends, splits = client.get_events("AAPL")
    """

    def __init__(
        self,
        config: YahooFinanceConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or YahooFinanceConfig()
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = self.config.user_agent
        self.session = session
        self.chart = ChartAPI(self.config, session=session)
        self.profiles = ProfileScraper(self.config, session=session)
        self.cache: CacheBackend = create_cache(
            self.config.cache_backend,
            self.config.cache_dir,
            self.config.cache_ttl_seconds,
        )

    def __enter__(self) -> YahooFinanceClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    # ----------------------------------------------------------------- bars

    def get_bars(self, symbol: str, interval: Interval = DEFAULT_INTERVAL) -> list[Bar]:
        """Daily bars over a named range ending on the last market close."""
        self._ensure_daily(interval)
        return self._cached_bars(
            symbol,
            interval.value,
            lambda: self.chart.load_daily(symbol, interval),
        )

    def get_bars_range(
        self, symbol: str, start: datetime, end: datetime | None = None,
    ) -> list[Bar]:
        """Daily bars between ``start`` and ``end`` (default: now).

        Naive datetimes are taken to be UTC. Windows ending "now" are not
        cached since their right edge moves.
        """
        period1, period2 = self._epoch_window(start, end)
        load = lambda: self.chart.load_daily_range(symbol, period1, period2)  # noqa: E731
        if end is None:
            return self._fetch_bars(symbol, load)
        return self._cached_bars(symbol, f"{period1}-{period2}", load)

    # --------------------------------------------------------------- events

    def get_events(
        self, symbol: str, interval: Interval = DEFAULT_INTERVAL,
    ) -> tuple[list[Dividend], list[Split]]:
        """Dividends and splits over a named range, oldest first."""
        self._ensure_daily(interval)
        data = self.chart.load_daily(symbol, interval, with_events=True)
        return data.dividends, data.splits

    def get_events_range(
        self, symbol: str, start: datetime, end: datetime | None = None,
    ) -> tuple[list[Dividend], list[Split]]:
        """Dividends and splits between ``start`` and ``end``, oldest first."""
        period1, period2 = self._epoch_window(start, end)
        data = self.chart.load_daily_range(symbol, period1, period2, with_events=True)
        return data.dividends, data.splits

    # -------------------------------------------------------------- profile

    def get_profile(self, symbol: str) -> Profile:
        """Company or fund profile for a symbol."""
        return self.profiles.load(symbol)

    # ------------------------------------------------------------ streaming

    def streamer(self, symbols: Iterable[str]) -> Streamer:
        """A realtime quote streamer sharing this client's configuration."""
        return Streamer(symbols, config=self.config)

    # --------------------------------------------------------------- cache

    def clear_cache(self, symbol: str) -> None:
        self.cache.clear(symbol)

    def clear_all_cache(self) -> None:
        self.cache.clear_all()

    # ------------------------------------------------------------ internal

    def _cached_bars(
        self, symbol: str, window: str, load: Callable[[], ChartData],
    ) -> list[Bar]:
        if self.cache.has_data(symbol, window):
            cached = self.cache.get_bars(symbol, window)
            if cached is not None:
                LOGGER.debug("Cache hit for %s [%s]", symbol, window)
                return cached

        bars = self._fetch_bars(symbol, load)
        self.cache.store_bars(symbol, window, bars)
        return bars

    def _fetch_bars(self, symbol: str, load: Callable[[], ChartData]) -> list[Bar]:
        bars = aggregate_bars(load())
        if self.config.validate:
            result = validate_bars(bars)
            if not result.passed:
                msgs = "; ".join(c.message for c in result.failed_checks)
                raise YahooFinanceError(
                    f"Validation failed for {symbol}: {msgs}",
                    code=YahooFinanceErrorCode.VALIDATION_FAILED,
                    retryable=True,
                )
        LOGGER.debug("Loaded %d bars for %s", len(bars), symbol)
        return bars

    @staticmethod
    def _ensure_daily(interval: Interval) -> None:
        if interval.is_intraday:
            raise YahooFinanceError(
                f"Intraday intervals like {interval.value} are not allowed",
                code=YahooFinanceErrorCode.NO_INTRADAY,
            )

    @staticmethod
    def _epoch_window(start: datetime, end: datetime | None) -> tuple[int, int]:
        start = _as_utc(start)
        end = _as_utc(end) if end is not None else datetime.now(timezone.utc)
        if (end - start).total_seconds() <= 0:
            raise YahooFinanceError(
                "Start date cannot be after the end date",
                code=YahooFinanceErrorCode.INVALID_START_DATE,
            )
        return int(start.timestamp()), int(end.timestamp())


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


_default_client: YahooFinanceClient | None = None
_default_lock = threading.Lock()


def get_default_client() -> YahooFinanceClient:
    """Shared client built from environment variables on first use."""
    global _default_client
    with _default_lock:
        if _default_client is None:
            _default_client = YahooFinanceClient(YahooFinanceConfig.from_env())
        return _default_client


def set_default_client(client: YahooFinanceClient | None) -> None:
    """Replace (or reset, with ``None``) the client used by ``yahoofinance.history``."""
    global _default_client
    with _default_lock:
        _default_client = client
