"""Credit rate resolution with a per-year cache."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Collection, Mapping
from typing import TYPE_CHECKING

from clubhouse_payroll.calculators.rate_cache import RateCache
from clubhouse_payroll.calculators.types import CreditRate

if TYPE_CHECKING:
    from clubhouse_payroll.stores import CreditRateStore

logger = logging.getLogger(__name__)


class CreditRateResolver:
    """Looks up the credit rates effective for a position in a given year.

    Lookups go to the cache first and fall back to storage. Results are
    cached even when empty so a position with no rates costs one query per
    process, not one per shift.

    Use ``warm_bulk`` before crediting a batch of shifts to load all the
    needed positions in one query per year.
    """

    def __init__(self, store: CreditRateStore, cache: RateCache):
        self.store = store
        self.cache = cache

    async def rates_for(self, year: int, position_id: int) -> tuple[CreditRate, ...]:
        """Rates for a position in ``year``, ordered by start time."""
        cached = self.cache.get(year, position_id)
        if cached is not None:
            return cached

        logger.debug("Credit rate cache miss for position %s in %s", position_id, year)
        rates = await self.store.fetch_credit_rates(year, [position_id])
        self.cache.merge(year, {position_id: rates})
        return self.cache.get(year, position_id) or ()

    async def rates_for_year(self, year: int) -> list[CreditRate]:
        """Every rate for ``year``, always read from storage."""
        return list(await self.store.fetch_credit_rates(year, None))

    async def warm_year(self, year: int, position_ids: Collection[int]) -> None:
        """Warm a single year. See ``warm_bulk``."""
        await self.warm_bulk({year: position_ids})

    async def warm_bulk(self, bulk_years: Mapping[int, Collection[int]]) -> None:
        """Load rates for many positions across many years.

        ``bulk_years`` maps a year to the position ids needed for it. An
        empty id collection is a special case: it means "load every rate for
        the year", and that year is re-read even if already cached. Callers
        that do not know their positions in advance rely on this.

        For all other years only the positions not yet cached are queried,
        in one query per year. Afterwards every requested (year, position)
        pair has a cache entry, empty if the position has no rates.
        """
        for year, position_ids in bulk_years.items():
            if not position_ids:
                await self._warm_entire_year(year)
                continue

            missing = self.cache.missing(year, position_ids)
            if not missing:
                continue

            logger.debug("Warming credit rates for %s positions in %s", len(missing), year)
            rates = await self.store.fetch_credit_rates(year, missing)
            grouped: dict[int, list[CreditRate]] = {pid: [] for pid in missing}
            for rate in rates:
                grouped.setdefault(rate.position_id, []).append(rate)
            self.cache.merge(year, grouped)

    async def _warm_entire_year(self, year: int) -> None:
        logger.debug("Warming all credit rates for %s", year)
        rates = await self.store.fetch_credit_rates(year, None)
        grouped: dict[int, list[CreditRate]] = defaultdict(list)
        for rate in rates:
            grouped[rate.position_id].append(rate)
        self.cache.replace_year(year, grouped)
