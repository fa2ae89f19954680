"""Relatively real-time price quotes over Yahoo!'s WebSocket streamer."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from datetime import datetime, timezone
from typing import Any, Optional, Union

import websockets
from websockets.exceptions import WebSocketException

from yahoofinance.config import YahooFinanceConfig
from yahoofinance.models.quote import Quote, QuoteType, TradingSession
from yahoofinance.pricing import decode_pricing
from yahoofinance.quality import validate_quote

LOGGER = logging.getLogger(__name__)

QuoteCallback = Callable[[Quote], Union[None, Awaitable[None]]]


class Streamer:
    """Realtime price quote streamer.

    One WebSocket connection carries every subscribed symbol. Quotes can be
    consumed as an async iterator::

        streamer = Streamer(["AAPL", "QQQ", "^DJI", "^IXIC"])
        async for quote in streamer.stream():
            print(f"At {quote.timestamp}, {quote.symbol} is trading for ${quote.price}")

    or dispatched to per-symbol callbacks::

        streamer = Streamer()
        await streamer.subscribe(["AAPL"], lambda quote: print(quote.price))
        await streamer.run()
    """

    def __init__(
        self,
        symbols: Iterable[str] = (),
        *,
        config: YahooFinanceConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config or YahooFinanceConfig()
        self._logger = logger or LOGGER
        self._symbols: dict[str, None] = dict.fromkeys(_normalise(symbols))
        self._callbacks: dict[str, QuoteCallback] = {}
        self._stopped = asyncio.Event()
        self._ws: Any = None

    @property
    def symbols(self) -> tuple[str, ...]:
        return tuple(self._symbols)

    async def subscribe(
        self, symbols: Iterable[str], callback: QuoteCallback | None = None,
    ) -> None:
        """Subscribe to one or more symbols, optionally with a callback for ``run``.

        The first callback registered for a symbol is kept. When the stream is
        already connected the new symbols are subscribed immediately.
        """
        added = []
        for symbol in _normalise(symbols):
            if symbol not in self._symbols:
                self._symbols[symbol] = None
                added.append(symbol)
            if callback is not None:
                self._callbacks.setdefault(symbol, callback)

        if added and self._ws is not None:
            await self._send(self._ws, {"subscribe": added})

    async def unsubscribe(self, symbols: Iterable[str]) -> None:
        removed = [s for s in _normalise(symbols) if s in self._symbols]
        for symbol in removed:
            del self._symbols[symbol]
            self._callbacks.pop(symbol, None)

        if removed and self._ws is not None:
            await self._send(self._ws, {"unsubscribe": removed})

    async def stop(self) -> None:
        """Terminate the stream, closing the socket if one is open."""
        self._stopped.set()
        if self._ws is not None:
            await self._ws.close()

    async def stream(self) -> AsyncIterator[Quote]:
        """Yield quotes for subscribed symbols, reconnecting on errors.

        The iterator ends when ``stop`` is called or the server closes the
        connection cleanly.
        """
        backoff = self._config.reconnect_initial
        url = self._config.stream_url
        while not self._stopped.is_set():
            try:
                async with websockets.connect(url, ping_interval=20, ping_timeout=20) as ws:
                    self._logger.info("Connected to Yahoo! streamer: %s", url)
                    self._ws = ws
                    backoff = self._config.reconnect_initial
                    if self._symbols:
                        await self._send(ws, {"subscribe": list(self._symbols)})
                    async for payload in ws:
                        if self._stopped.is_set():
                            break
                        quote = self._parse_message(payload)
                        if quote is not None:
                            yield quote
                self._logger.info("Yahoo! streamer connection closed")
                return
            except asyncio.CancelledError:
                raise
            except (OSError, asyncio.TimeoutError, WebSocketException) as exc:
                if self._stopped.is_set():
                    break
                self._logger.warning(
                    "Yahoo! stream error (%s), reconnecting in %.1fs", exc, backoff,
                )
                await asyncio.sleep(backoff)
                backoff = min(backoff * 2, self._config.reconnect_max)
            finally:
                self._ws = None

    async def run(self) -> None:
        """Consume the stream, invoking each symbol's callback with its quotes."""
        async for quote in self.stream():
            callback = self._callbacks.get(quote.symbol)
            if callback is None:
                continue
            result = callback(quote)
            if inspect.isawaitable(result):
                await result

    # ------------------------------------------------------------ internals

    async def _send(self, ws: Any, message: dict[str, list[str]]) -> None:
        self._logger.debug("Streamer send: %s", message)
        await ws.send(json.dumps(message))

    def _parse_message(self, payload: str | bytes) -> Optional[Quote]:
        if isinstance(payload, bytes):
            payload = payload.decode("ascii", errors="replace")
        payload = payload.strip()

        try:
            if payload.startswith("{"):
                # newer framing: {"type": "pricing", "message": "<base64>"}
                payload = json.loads(payload).get("message") or ""
            data = decode_pricing(payload)
        except (ValueError, AttributeError) as exc:
            self._logger.debug("Skipping undecodable frame: %s", exc)
            return None

        symbol = data.id.upper()
        if symbol not in self._symbols:
            return None

        try:
            timestamp = datetime.fromtimestamp(data.time / 1000.0, tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as exc:
            self._logger.debug("Skipping frame with bad time %s: %s", data.time, exc)
            return None

        quote = Quote(
            symbol=symbol,
            timestamp=timestamp,
            price=float(data.price),
            volume=int(data.dayVolume),
            session=TradingSession.from_wire(data.marketHours),
            quote_type=QuoteType.from_wire(data.quoteType),
            change=float(data.change) or None,
            change_percent=float(data.changePercent) or None,
            day_high=float(data.dayHigh) or None,
            day_low=float(data.dayLow) or None,
            currency=data.currency or None,
            exchange=data.exchange or None,
        )
        if quote.quote_type is QuoteType.HEARTBEAT:
            return None
        if self._config.validate and not validate_quote(quote):
            self._logger.debug("Dropping invalid quote: %s", quote)
            return None
        return quote


def _normalise(symbols: Iterable[str]) -> list[str]:
    if isinstance(symbols, str):
        symbols = [symbols]
    return [s.strip().upper() for s in symbols if s and s.strip()]
