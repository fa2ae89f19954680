"""Yahoo! Finance client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart"
DEFAULT_QUOTE_URL = "https://finance.yahoo.com"
DEFAULT_STREAM_URL = "wss://streamer.finance.yahoo.com/"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


@dataclass
class YahooFinanceConfig:
    """Configuration for YahooFinanceClient and Streamer.

    Attributes:
        chart_url: Base URL of the v8 chart endpoint (symbol is appended).
        quote_url: Base URL of the quote web pages used for profiles.
        stream_url: WebSocket URL of the realtime streamer.
        timeout: HTTP timeout in seconds.
        user_agent: User-Agent header sent with HTTP requests.
        cache_backend: Cache type — "memory", "parquet", or "none".
        cache_dir: Directory for parquet cache files.
        cache_ttl_seconds: TTL for in-memory cache entries.
        validate: Whether to run quality checks on fetched bars and quotes.
        reconnect_initial: First back-off delay (seconds) after a dropped stream.
        reconnect_max: Upper bound for the back-off delay.
    """

    chart_url: str = DEFAULT_CHART_URL
    quote_url: str = DEFAULT_QUOTE_URL
    stream_url: str = DEFAULT_STREAM_URL
    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT

    cache_backend: str = "memory"
    cache_dir: str = "data/cache"
    cache_ttl_seconds: int = 300
    validate: bool = True

    reconnect_initial: float = 1.0
    reconnect_max: float = 30.0

    @classmethod
    def from_env(cls) -> YahooFinanceConfig:
        """Build a config from environment variables, falling back to defaults.

        Environment variables:
            YAHOO_FINANCE_CHART_URL: Chart endpoint base URL.
            YAHOO_FINANCE_QUOTE_URL: Quote page base URL (profiles).
            YAHOO_FINANCE_STREAM_URL: Streamer WebSocket URL.
            YAHOO_FINANCE_TIMEOUT: HTTP timeout in seconds (default: 10).
            YAHOO_FINANCE_CACHE: Cache backend — "memory", "parquet", "none".
            YAHOO_FINANCE_CACHE_DIR: Cache directory (default: "data/cache").
            YAHOO_FINANCE_CACHE_TTL: Cache TTL in seconds (default: 300).
            YAHOO_FINANCE_VALIDATE: "0"/"false" disables quality checks.
        """
        return cls(
            chart_url=os.getenv("YAHOO_FINANCE_CHART_URL", DEFAULT_CHART_URL),
            quote_url=os.getenv("YAHOO_FINANCE_QUOTE_URL", DEFAULT_QUOTE_URL),
            stream_url=os.getenv("YAHOO_FINANCE_STREAM_URL", DEFAULT_STREAM_URL),
            timeout=float(os.getenv("YAHOO_FINANCE_TIMEOUT", "10")),
            cache_backend=os.getenv("YAHOO_FINANCE_CACHE", "memory"),
            cache_dir=os.getenv("YAHOO_FINANCE_CACHE_DIR", "data/cache"),
            cache_ttl_seconds=int(os.getenv("YAHOO_FINANCE_CACHE_TTL", "300")),
            validate=os.getenv("YAHOO_FINANCE_VALIDATE", "1").strip().lower()
            not in ("0", "false", "no", "off"),
        )
