"""Tests for AnalyticsService caching."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from server.core.AnalyticsService import AnalyticsService
from shared.clients.backend.models.Aggregations import GeneralAggregations
from shared.models.errors import TimeoutFailure


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def backend():
    client = Mock()
    client.do_fetch_general_aggregations = AsyncMock(side_effect=[GeneralAggregations(total_users=1), GeneralAggregations(total_users=2)])
    client.do_fetch_work_area_wise = AsyncMock(return_value=[])
    return client


class TestAnalyticsService:
    """Test cases for AnalyticsService."""

    def test_general_aggregations_cached_within_ttl(self, helper_config, backend, monkeypatch):
        monkeypatch.setenv("ANALYTICS_CACHE_TTL", "60")
        clock = FakeClock()
        service = AnalyticsService(helper_config=helper_config, backend_client=backend, clock=clock)

        first = asyncio.run(service.do_get_general_aggregations())
        clock.now += 59
        second = asyncio.run(service.do_get_general_aggregations())

        assert first.total_users == second.total_users == 1
        assert backend.do_fetch_general_aggregations.await_count == 1

    def test_general_aggregations_revalidated_after_ttl(self, helper_config, backend, monkeypatch):
        monkeypatch.setenv("ANALYTICS_CACHE_TTL", "60")
        clock = FakeClock()
        service = AnalyticsService(helper_config=helper_config, backend_client=backend, clock=clock)

        asyncio.run(service.do_get_general_aggregations())
        clock.now += 60
        result = asyncio.run(service.do_get_general_aggregations())

        assert result.total_users == 2
        assert backend.do_fetch_general_aggregations.await_count == 2

    def test_failure_is_not_cached(self, helper_config):
        backend = Mock()
        backend.do_fetch_general_aggregations = AsyncMock(side_effect=[TimeoutFailure(), GeneralAggregations(total_users=5)])
        service = AnalyticsService(helper_config=helper_config, backend_client=backend, clock=FakeClock())

        with pytest.raises(TimeoutFailure):
            asyncio.run(service.do_get_general_aggregations())
        assert asyncio.run(service.do_get_general_aggregations()).total_users == 5

    def test_work_area_wise_is_never_cached(self, helper_config, backend):
        service = AnalyticsService(helper_config=helper_config, backend_client=backend, clock=FakeClock())
        asyncio.run(service.do_get_work_area_wise(start_date="2024-01-01"))
        asyncio.run(service.do_get_work_area_wise(start_date="2024-01-01"))
        assert backend.do_fetch_work_area_wise.await_count == 2
