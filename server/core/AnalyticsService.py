"""Analytics service: serves the pre-aggregated summaries of the backend.

General aggregations change slowly and are revalidated every
ANALYTICS_CACHE_TTL seconds; the work-area breakdown depends on the requested
date range and is always fetched fresh.
"""

import time
from typing import Callable

from shared.clients.backend.BackendClientInterface import BackendClientInterface
from shared.clients.backend.models.Aggregations import GeneralAggregations, WorkAreaEarnings
from shared.helper.HelperConfig import HelperConfig


class AnalyticsService:
    def __init__(
        self,
        helper_config: HelperConfig,
        backend_client: BackendClientInterface,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._backend = backend_client
        self._cache_ttl = helper_config.get_number_val("ANALYTICS_CACHE_TTL", default=300)
        self._clock = clock
        self._cached_general: GeneralAggregations | None = None
        self._cached_at: float | None = None

    ##########################################
    ################ CORE ####################
    ##########################################

    async def do_get_general_aggregations(self) -> GeneralAggregations:
        """Return the platform-wide totals, served from cache while still fresh.

        Raises:
            BackendError: If the cache is stale and the backend request fails.
        """
        now = self._clock()
        if self._cached_general is not None and self._cached_at is not None and now - self._cached_at < self._cache_ttl:
            return self._cached_general

        self.logging.debug("General aggregations cache is stale, revalidating...")
        result = await self._backend.do_fetch_general_aggregations()
        self._cached_general = result
        self._cached_at = now
        return result

    async def do_get_work_area_wise(self, start_date: str | None = None, end_date: str | None = None) -> list[WorkAreaEarnings]:
        """Return the per-work-area breakdown for an optional date range (never cached).

        Raises:
            ValidationFailure: If a date is not in YYYY-MM-DD form.
            BackendError: If the backend request fails.
        """
        areas = await self._backend.do_fetch_work_area_wise(start_date=start_date, end_date=end_date)
        self.logging.debug("Fetched %d work areas (start=%s end=%s)", len(areas), start_date, end_date)
        return areas
