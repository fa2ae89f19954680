"""Shared fixtures for yahoofinance tests."""

from __future__ import annotations

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from yahoofinance.config import YahooFinanceConfig
from yahoofinance.models.bar import Bar

# 2024-01-16 .. 2024-01-19, 14:30 UTC (market open)
DAY_0 = 1705415400
DAY = 86400


class FakeResponse:
    """Just enough of ``requests.Response`` for the clients."""

    def __init__(self, body: Any = None, status_code: int = 200, url: str = "", text: str | None = None) -> None:
        self.status_code = status_code
        self.url = url
        self.text = text if text is not None else json.dumps(body)

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Records GET calls and replays a canned response."""

    def __init__(self, response: FakeResponse | Exception) -> None:
        self.response = response
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.headers: dict[str, str] = {}

    def get(self, url: str, params: dict[str, Any] | None = None, timeout: float | None = None) -> FakeResponse:
        self.calls.append((url, dict(params or {})))
        if isinstance(self.response, Exception):
            raise self.response
        self.response.url = url
        return self.response

    def close(self) -> None:
        pass


def chart_body(
    symbol: str = "AAPL",
    timestamps: list[int] | None = None,
    quote: dict[str, list] | None = None,
    events: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a chart API response body."""
    if timestamps is None:
        timestamps = [DAY_0 + i * DAY for i in range(4)]
    if quote is None:
        quote = {
            "open": [185.0, 182.2, 181.3, 189.3],
            "high": [187.0, 184.0, 191.9, 191.9],
            "low": [182.4, 181.4, 180.2, 186.8],
            "close": [183.6, 182.7, 188.6, 191.6],
            "volume": [65603000, 68741000, 78005800, 68903000],
        }
    result: dict[str, Any] = {
        "meta": {
            "symbol": symbol,
            "currency": "USD",
            "exchangeName": "NMS",
            "firstTradeDate": 345479400,
            "regularMarketPrice": 191.56,
            "chartPreviousClose": 185.92,
        },
        "timestamp": timestamps,
        "indicators": {"quote": [quote]},
    }
    if events is not None:
        result["events"] = events
    return {"chart": {"result": [result], "error": None}}


NOT_FOUND_BODY = {
    "chart": {
        "result": None,
        "error": {"code": "Not Found", "description": "No data found, symbol may be delisted"},
    }
}


@pytest.fixture
def config() -> YahooFinanceConfig:
    return YahooFinanceConfig(
        chart_url="http://yahoo.test/v8/finance/chart",
        quote_url="http://yahoo.test",
        stream_url="ws://yahoo.test/stream",
        cache_backend="none",
        reconnect_initial=0.0,
        reconnect_max=0.0,
    )


@pytest.fixture
def sample_bars() -> list[Bar]:
    """4 consecutive daily bars."""
    base = datetime(2024, 1, 16, 14, 30, tzinfo=timezone.utc)
    return [
        Bar(
            timestamp=base + timedelta(days=i),
            open=150.0 + i,
            high=152.0 + i,
            low=149.0 + i,
            close=151.0 + i,
            volume=1_000_000 + i * 1000,
        )
        for i in range(4)
    ]
