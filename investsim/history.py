"""
history.py - Rolling per-instrument price history for charts

HistoryStore keeps at most `cap` prices per instrument symbol, oldest first.
record_tick() appends every tracked instrument's current price once per tick.

simulate_history() is the stateless backfill used to seed a believable chart
before the first tick: same (terms, length, seed) gives the same array.
"""
from __future__ import annotations
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Union
import zlib

import numpy as np

from .core import HISTORY_CAP, DEFAULT_WINDOW, DEFAULT_BACKFILL_DAYS
from .instruments import Instrument, InstrumentTerms
from .pricing import PriceModelConfig, DEFAULT_PRICE_MODEL, project_prices


InstrumentRef = Union[Instrument, str]


def simulate_history(
    terms: InstrumentTerms,
    length: int,
    seed: Optional[int],
    config: PriceModelConfig = DEFAULT_PRICE_MODEL,
) -> np.ndarray:
    """
    Generate `length` synthetic daily prices for an instrument.

    Only the frozen terms are read; a live Instrument is never consulted,
    so its current_price and days_elapsed cannot change.
    """
    return project_prices(terms.return_model, terms.base_price, terms.annual_rate,
                          length, seed, config)


def _symbol_of(instrument: InstrumentRef) -> str:
    return instrument if isinstance(instrument, str) else instrument.symbol


def history_seed(symbol: str) -> int:
    """Stable per-symbol seed (CRC32), identical across processes."""
    return zlib.crc32(symbol.encode("utf-8"))


class HistoryStore:
    """
    Bounded FIFO price history keyed by instrument symbol.

    Example:
        store = HistoryStore()
        store.track(acme)
        acme.update_price()
        store.record_tick()
        store.get_window("ACME", 30)   # -> [price_day_1]
    """

    def __init__(self, cap: int = HISTORY_CAP):
        if cap <= 0:
            raise ValueError(f"History cap must be positive, got {cap}")
        self.cap = cap
        self._instruments: Dict[str, Instrument] = {}
        self._history: Dict[str, Deque[float]] = {}

    def track(self, instrument: Instrument) -> None:
        """Include an instrument in record_tick()."""
        self._instruments[instrument.symbol] = instrument

    def tracked_symbols(self) -> List[str]:
        return list(self._instruments)

    def record(self, symbol: str, price: float) -> None:
        """Append one price for `symbol`, evicting the oldest beyond the cap."""
        series = self._history.get(symbol)
        if series is None:
            series = deque(maxlen=self.cap)
            self._history[symbol] = series
        series.append(float(price))

    def record_tick(self) -> None:
        for symbol, instrument in self._instruments.items():
            self.record(symbol, instrument.current_price)

    def get_window(self, instrument: InstrumentRef, n: int = DEFAULT_WINDOW) -> List[float]:
        """
        Most recent min(n, len) prices, oldest first.

        `instrument` is an Instrument or its symbol. Unknown instruments and
        non-positive n give an empty list.
        """
        series = self._history.get(_symbol_of(instrument))
        if not series or n <= 0:
            return []
        start = max(0, len(series) - n)
        return list(series)[start:]

    def length(self, instrument: InstrumentRef) -> int:
        series = self._history.get(_symbol_of(instrument))
        return len(series) if series else 0

    def seed_series(self, symbol: str, prices: Iterable[float]) -> None:
        """Replace the history of `symbol` (trimmed to the cap)."""
        self._history[symbol] = deque((float(p) for p in prices), maxlen=self.cap)

    def prefill(self, instruments: Iterable[Instrument], days: int = DEFAULT_BACKFILL_DAYS) -> None:
        """
        Seed each instrument with `days` of simulated history.

        Uses history_seed(symbol) so every game start draws the same backfill.
        """
        for instrument in instruments:
            prices = simulate_history(instrument.terms, days, history_seed(instrument.symbol),
                                      instrument.config)
            self.seed_series(instrument.symbol, prices)

    def clear(self) -> None:
        """Drop all recorded prices. Tracked instruments are kept."""
        self._history.clear()

    def __repr__(self) -> str:
        points = sum(len(s) for s in self._history.values())
        return f"HistoryStore({len(self._history)} symbols, {points} points, cap={self.cap})"
