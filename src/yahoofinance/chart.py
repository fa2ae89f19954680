"""Yahoo! v8 chart endpoint — request construction and response parsing.

The chart endpoint serves daily OHLCV arrays plus optional dividend and
split events for a symbol, either for a named range (``range=6mo``) or for an
explicit epoch window (``period1``/``period2``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import requests

from yahoofinance.config import YahooFinanceConfig
from yahoofinance.errors import YahooFinanceError, YahooFinanceErrorCode
from yahoofinance.interval import Interval
from yahoofinance.models.events import Dividend, Split

LOGGER = logging.getLogger(__name__)


@dataclass
class ChartMeta:
    """Subset of the ``meta`` block we expose."""

    symbol: str
    currency: str | None = None
    exchange: str | None = None
    first_trade_date: datetime | None = None
    current_price: float | None = None
    previous_close: float | None = None


@dataclass
class ChartData:
    """One parsed ``chart.result[0]`` entry.

    The OHLCV lists are parallel to ``timestamps`` and may contain ``None``
    for days Yahoo! has incomplete data for.
    """

    meta: ChartMeta
    timestamps: list[int] = field(default_factory=list)
    opens: list[float | None] = field(default_factory=list)
    highs: list[float | None] = field(default_factory=list)
    lows: list[float | None] = field(default_factory=list)
    closes: list[float | None] = field(default_factory=list)
    volumes: list[int | None] = field(default_factory=list)
    has_quotes: bool = False
    dividends: list[Dividend] = field(default_factory=list)
    splits: list[Split] = field(default_factory=list)


class ChartAPI:
    """Thin wrapper around ``GET {chart_url}/{symbol}``."""

    def __init__(
        self,
        config: YahooFinanceConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or YahooFinanceConfig()
        self.base_url = self.config.chart_url.rstrip("/")
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = self.config.user_agent
        self.session = session

    # --------------------------------------------------------------- loads

    def load_daily(
        self, symbol: str, period: Interval, with_events: bool = False,
    ) -> ChartData:
        """Daily bars for a named range ending on the last market close."""
        params: dict[str, Any] = {"range": period.value, "interval": Interval.ONE_DAY.value}
        if with_events:
            params["events"] = "div|split"
        return self.load(symbol, params)

    def load_daily_range(
        self, symbol: str, start: int, end: int, with_events: bool = False,
    ) -> ChartData:
        """Daily bars between two epoch-second timestamps."""
        params: dict[str, Any] = {
            "period1": start,
            "period2": end,
            "interval": Interval.ONE_DAY.value,
        }
        if with_events:
            params["events"] = "div|split"
        return self.load(symbol, params)

    def load(self, symbol: str, params: dict[str, Any]) -> ChartData:
        url = f"{self.base_url}/{symbol}"
        LOGGER.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.RequestException as exc:
            raise YahooFinanceError(
                f"Yahoo! call to {url} failed: {exc}",
                code=YahooFinanceErrorCode.REQUEST_FAILED,
                retryable=True,
            ) from exc

        payload = self._decode(resp)
        return self.parse(payload)

    # ------------------------------------------------------------- parsing

    @classmethod
    def parse(cls, payload: Any) -> ChartData:
        """Turn a decoded chart response into ``ChartData``."""
        chart = payload.get("chart") if isinstance(payload, dict) else None
        if not isinstance(chart, dict):
            raise YahooFinanceError(
                "Yahoo! returned invalid data - missing 'chart' block",
                code=YahooFinanceErrorCode.BAD_DATA,
            )

        result = chart.get("result")
        if result is None:
            # no result so we'd better have an error
            err = chart.get("error")
            if not err:
                raise YahooFinanceError(
                    "error block exists without values",
                    code=YahooFinanceErrorCode.INTERNAL_LOGIC,
                )
            raise cls._chart_error(err)

        if not result:
            raise YahooFinanceError(
                "Yahoo! call failed. Expected data is missing.",
                code=YahooFinanceErrorCode.UNEXPECTED_RESPONSE,
            )

        try:
            return cls._parse_result(result[0])
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise YahooFinanceError(
                f"Yahoo! returned invalid data - {exc}",
                code=YahooFinanceErrorCode.BAD_DATA,
            ) from exc

    @classmethod
    def _parse_result(cls, data: dict[str, Any]) -> ChartData:
        meta_raw = data.get("meta") or {}
        first_trade = meta_raw.get("firstTradeDate")
        meta = ChartMeta(
            symbol=meta_raw["symbol"],
            currency=meta_raw.get("currency"),
            exchange=meta_raw.get("exchangeName"),
            first_trade_date=_to_datetime(first_trade) if first_trade is not None else None,
            current_price=_opt_float(meta_raw.get("regularMarketPrice")),
            previous_close=_opt_float(meta_raw.get("chartPreviousClose")),
        )

        quotes = (data.get("indicators") or {}).get("quote") or []
        quote = quotes[0] if quotes else {}
        chart = ChartData(
            meta=meta,
            timestamps=[int(t) for t in data.get("timestamp") or []],
            opens=[_opt_float(v) for v in quote.get("open") or []],
            highs=[_opt_float(v) for v in quote.get("high") or []],
            lows=[_opt_float(v) for v in quote.get("low") or []],
            closes=[_opt_float(v) for v in quote.get("close") or []],
            volumes=[int(v) if v is not None else None for v in quote.get("volume") or []],
            has_quotes=bool(quotes),
        )

        events = data.get("events") or {}
        chart.dividends = sorted(
            (
                Dividend(timestamp=_to_datetime(d["date"]), amount=float(d["amount"]))
                for d in (events.get("dividends") or {}).values()
            ),
            key=lambda d: d.timestamp,
        )
        chart.splits = sorted(
            (
                Split(
                    timestamp=_to_datetime(s["date"]),
                    numerator=int(s["numerator"]),
                    denominator=int(s["denominator"]),
                    ratio=s.get("splitRatio") or f"{int(s['numerator'])}:{int(s['denominator'])}",
                )
                for s in (events.get("splits") or {}).values()
            ),
            key=lambda s: s.timestamp,
        )
        return chart

    # ------------------------------------------------------------ internals

    @classmethod
    def _decode(cls, resp: Any) -> Any:
        """Decode JSON, mapping HTTP failures onto error codes.

        Yahoo! answers unknown symbols with a 404 whose body still carries a
        chart error block, so the body is inspected before the status.
        """
        try:
            payload = resp.json()
        except ValueError as exc:
            if not resp.ok:
                raise cls._status_error(resp) from exc
            raise YahooFinanceError(
                f"Yahoo! returned invalid data - {exc}",
                code=YahooFinanceErrorCode.BAD_DATA,
            ) from exc

        if not resp.ok:
            chart = payload.get("chart") if isinstance(payload, dict) else None
            err = chart.get("error") if isinstance(chart, dict) else None
            if err:
                raise cls._chart_error(err)
            raise cls._status_error(resp)
        return payload

    @staticmethod
    def _chart_error(err: Any) -> YahooFinanceError:
        if not isinstance(err, dict):
            err = {"description": str(err)}
        code = err.get("code") or "Unknown"
        description = err.get("description") or ""
        return YahooFinanceError(
            f"Yahoo! chart failed to load {code} - {description}.",
            code=YahooFinanceErrorCode.CHART_FAILED,
        )

    @staticmethod
    def _status_error(resp: Any) -> YahooFinanceError:
        status = resp.status_code
        return YahooFinanceError(
            f"Yahoo! call failed. '{resp.url}' returned a {status} result.",
            code=YahooFinanceErrorCode.CALL_FAILED,
            retryable=status == 429 or status >= 500,
        )


def _to_datetime(epoch_seconds: int | float) -> datetime:
    return datetime.fromtimestamp(int(epoch_seconds), tz=timezone.utc)


def _opt_float(value: Any) -> float | None:
    return float(value) if value is not None else None
