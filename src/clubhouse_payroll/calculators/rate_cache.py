"""Process-wide cache of credit rates, bucketed by year."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping

from clubhouse_payroll.calculators.types import CreditRate


class _YearBucket:
    """Rates for one year, keyed by position id.

    ``complete`` is set once every rate for the year has been loaded, after
    which a position with no entry is known to have no rates.
    """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.rates: dict[int, tuple[CreditRate, ...]] = {}
        self.complete = False


class RateCache:
    """Credit rates keyed by year, then position id.

    Create one per process and hand it to every ``CreditRateResolver``.
    Entries are never evicted; credit rates are reference data that is re-read
    when the process restarts.

    Each year has its own lock so warming disjoint years never contends.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._years: dict[int, _YearBucket] = {}

    def _bucket(self, year: int) -> _YearBucket:
        with self._lock:
            bucket = self._years.get(year)
            if bucket is None:
                bucket = self._years[year] = _YearBucket()
            return bucket

    def get(self, year: int, position_id: int) -> tuple[CreditRate, ...] | None:
        """Return cached rates, or None when the position was never loaded."""
        bucket = self._bucket(year)
        with bucket.lock:
            rates = bucket.rates.get(position_id)
            if rates is None and bucket.complete:
                return ()
            return rates

    def has(self, year: int, position_id: int) -> bool:
        return self.get(year, position_id) is not None

    def missing(self, year: int, position_ids: Iterable[int]) -> list[int]:
        """Position ids with no cached entry for ``year``, in sorted order."""
        bucket = self._bucket(year)
        with bucket.lock:
            if bucket.complete:
                return []
            return sorted({pid for pid in position_ids if pid not in bucket.rates})

    def merge(self, year: int, entries: Mapping[int, Iterable[CreditRate]]) -> None:
        """Store rates for the given positions, replacing what they had."""
        frozen = {pid: _ordered(rates) for pid, rates in entries.items()}
        bucket = self._bucket(year)
        with bucket.lock:
            bucket.rates.update(frozen)

    def replace_year(self, year: int, entries: Mapping[int, Iterable[CreditRate]]) -> None:
        """Replace the whole year with a complete set of rates."""
        frozen = {pid: _ordered(rates) for pid, rates in entries.items()}
        bucket = self._bucket(year)
        with bucket.lock:
            bucket.rates = frozen
            bucket.complete = True

    def is_year_complete(self, year: int) -> bool:
        bucket = self._bucket(year)
        with bucket.lock:
            return bucket.complete

    def snapshot(self, year: int) -> dict[int, tuple[CreditRate, ...]]:
        """Copy of the cached entries for a year."""
        bucket = self._bucket(year)
        with bucket.lock:
            return dict(bucket.rates)

    def years(self) -> dict[int, int]:
        """Number of cached positions per year, ordered by year."""
        with self._lock:
            buckets = sorted(self._years.items())
        counts: dict[int, int] = {}
        for year, bucket in buckets:
            with bucket.lock:
                counts[year] = len(bucket.rates)
        return counts

    def clear(self) -> None:
        with self._lock:
            self._years.clear()


def _ordered(rates: Iterable[CreditRate]) -> tuple[CreditRate, ...]:
    return tuple(sorted(rates, key=lambda rate: rate.start_time))
