"""Cache backends for historical bars — Parquet (disk) and Memory (TTL).

Entries are keyed by symbol and a *window* string describing the request:
the range token for named ranges (``"6mo"``) or ``"{period1}-{period2}"``
for explicit epoch windows.
"""

from __future__ import annotations

import logging
import shutil
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from pathlib import Path

import pandas as pd

from yahoofinance.models.bar import Bar

LOGGER = logging.getLogger(__name__)


class CacheBackend(ABC):
    """Abstract cache interface."""

    @abstractmethod
    def get_bars(self, symbol: str, window: str) -> list[Bar] | None:
        """Return cached bars, or None on miss."""
        ...

    @abstractmethod
    def store_bars(self, symbol: str, window: str, bars: list[Bar]) -> None:
        """Store bars in cache."""
        ...

    @abstractmethod
    def has_data(self, symbol: str, window: str) -> bool:
        ...

    @abstractmethod
    def clear(self, symbol: str) -> None:
        ...

    @abstractmethod
    def clear_all(self) -> None:
        ...


class NoCache(CacheBackend):
    """No-op cache — always misses."""

    def get_bars(self, symbol, window):  # type: ignore[override]
        return None

    def store_bars(self, symbol, window, bars):  # type: ignore[override]
        pass

    def has_data(self, symbol, window):  # type: ignore[override]
        return False

    def clear(self, symbol):  # type: ignore[override]
        pass

    def clear_all(self):
        pass


class ParquetCache(CacheBackend):
    """Disk-based cache using Parquet files with Snappy compression.

    Storage layout: ``{base_path}/{SYMBOL}/{window}.parquet``. Files older
    than ``ttl_seconds`` (by mtime) count as misses; ``None`` disables expiry.
    """

    def __init__(self, base_path: Path | str, ttl_seconds: int | None = None) -> None:
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.ttl = ttl_seconds

    def _file_path(self, symbol: str, window: str) -> Path:
        symbol_dir = self.base_path / symbol.upper()
        symbol_dir.mkdir(exist_ok=True)
        return symbol_dir / f"{window}.parquet"

    def _fresh(self, fp: Path) -> bool:
        if not fp.exists():
            return False
        if self.ttl is None:
            return True
        return time.time() - fp.stat().st_mtime <= self.ttl

    def get_bars(self, symbol: str, window: str) -> list[Bar] | None:
        fp = self._file_path(symbol, window)
        if not self._fresh(fp):
            return None

        try:
            df = pd.read_parquet(fp)
        except Exception as exc:
            LOGGER.warning("Discarding unreadable cache file %s: %s", fp, exc)
            return None
        return self._df_to_bars(df)

    def store_bars(self, symbol: str, window: str, bars: list[Bar]) -> None:
        if not bars:
            return
        fp = self._file_path(symbol, window)
        df = self._bars_to_df(bars)
        df.to_parquet(fp, compression="snappy")

    def has_data(self, symbol: str, window: str) -> bool:
        return self._fresh(self._file_path(symbol, window))

    def clear(self, symbol: str) -> None:
        symbol_dir = self.base_path / symbol.upper()
        if symbol_dir.exists():
            shutil.rmtree(symbol_dir)

    def clear_all(self) -> None:
        for d in self.base_path.iterdir():
            if d.is_dir():
                shutil.rmtree(d)

    # ---- helpers ----

    @staticmethod
    def _bars_to_df(bars: list[Bar]) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "timestamp": [b.timestamp for b in bars],
                "open": [b.open for b in bars],
                "high": [b.high for b in bars],
                "low": [b.low for b in bars],
                "close": [b.close for b in bars],
                "volume": [b.volume for b in bars],
            }
        )

    @staticmethod
    def _df_to_bars(df: pd.DataFrame) -> list[Bar]:
        return [
            Bar(
                timestamp=pd.Timestamp(row.timestamp).to_pydatetime(),
                open=float(row.open),
                high=float(row.high),
                low=float(row.low),
                close=float(row.close),
                volume=int(row.volume),
            )
            for row in df.itertuples(index=False)
        ]


class MemoryCache(CacheBackend):
    """In-memory TTL cache with LRU eviction past ``max_entries``."""

    def __init__(self, ttl_seconds: int = 300, max_entries: int = 1000) -> None:
        self.ttl = ttl_seconds
        self.max_entries = max_entries
        self._store: OrderedDict[str, tuple[float, list[Bar]]] = OrderedDict()

    def _key(self, symbol: str, window: str) -> str:
        return f"{symbol.upper()}|{window}"

    def _evict_expired(self) -> None:
        now = time.monotonic()
        expired = [k for k, (ts, _) in self._store.items() if now - ts > self.ttl]
        for k in expired:
            del self._store[k]

    def _evict_lru(self) -> None:
        while len(self._store) > self.max_entries:
            self._store.popitem(last=False)

    def get_bars(self, symbol: str, window: str) -> list[Bar] | None:
        self._evict_expired()
        key = self._key(symbol, window)
        entry = self._store.get(key)
        if entry is None:
            return None
        self._store.move_to_end(key)  # refresh LRU position
        return list(entry[1])

    def store_bars(self, symbol: str, window: str, bars: list[Bar]) -> None:
        key = self._key(symbol, window)
        self._store[key] = (time.monotonic(), list(bars))
        self._store.move_to_end(key)
        self._evict_lru()

    def has_data(self, symbol: str, window: str) -> bool:
        self._evict_expired()
        return self._key(symbol, window) in self._store

    def clear(self, symbol: str) -> None:
        prefix = f"{symbol.upper()}|"
        for k in [k for k in self._store if k.startswith(prefix)]:
            del self._store[k]

    def clear_all(self) -> None:
        self._store.clear()


def create_cache(backend: str, cache_dir: str, ttl_seconds: int) -> CacheBackend:
    """Build the backend named by ``backend`` ("memory", "parquet", "none")."""
    if backend == "parquet":
        return ParquetCache(cache_dir, ttl_seconds=ttl_seconds)
    if backend == "memory":
        return MemoryCache(ttl_seconds=ttl_seconds)
    if backend == "none":
        return NoCache()
    raise ValueError(f"Unknown cache backend: {backend!r}")
