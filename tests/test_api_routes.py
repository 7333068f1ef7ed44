"""Tests for the proxy API routes."""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from server.api_server import create_app
from server.core.AnalyticsService import AnalyticsService
from server.core.AuthGate import AuthGate
from shared.clients.backend.models.Aggregations import GeneralAggregations, WorkAreaEarnings
from shared.clients.backend.models.Page import PageResult
from shared.clients.backend.models.UserRecord import UserRecord
from shared.clients.backend.models.WeeklyEarning import WeeklyEarning
from shared.models.errors import HttpStatusFailure, NetworkFailure, TimeoutFailure, ValidationFailure
from shared.tables.registry import EARNINGS_TABLE, USERS_TABLE


@pytest.fixture
def backend():
    """Fake backend client exposing the request methods the routes use."""
    client = Mock()
    client.do_fetch_page = AsyncMock()
    client.do_delete_item = AsyncMock()
    client.do_fetch_general_aggregations = AsyncMock()
    client.do_fetch_work_area_wise = AsyncMock()
    return client


@pytest.fixture
def api(helper_config, backend):
    app = create_app(lifespan_handler=None)
    app.state.logging = helper_config.get_logger()
    app.state.helper_config = helper_config
    app.state.backend_client = backend
    app.state.auth_gate = AuthGate(helper_config=helper_config, secret="letmein")
    app.state.analytics_service = AnalyticsService(helper_config=helper_config, backend_client=backend)
    with TestClient(app) as client:
        yield client


class TestLogin:
    """Test cases for POST /api/auth/login."""

    def test_correct_password(self, api):
        response = api.post("/api/auth/login", json={"password": "letmein"})
        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_wrong_password(self, api):
        response = api.post("/api/auth/login", json={"password": "nope"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid password"}

    def test_missing_password(self, api):
        response = api.post("/api/auth/login", json={})
        assert response.status_code == 401

    def test_unreadable_body(self, api):
        response = api.post("/api/auth/login", content=b"not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    def test_gate_not_configured(self, helper_config):
        app = create_app(lifespan_handler=None)
        app.state.logging = helper_config.get_logger()
        with TestClient(app) as client:
            response = client.post("/api/auth/login", json={"password": "letmein"})
        assert response.status_code == 503


class TestFlows:
    """Test cases for the user records proxy."""

    def test_list(self, api, backend):
        backend.do_fetch_page.return_value = PageResult(
            items=[UserRecord(id="1", first_name="Asha", work_area="Pune")],
            page=2,
            page_size=10,
            total_item_count=11,
        )

        response = api.get("/api/flows", params={"page": 2, "limit": 10, "work_area": "Pune"})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 11
        assert body["page"] == 2
        assert body["totalPages"] == 2
        assert body["data"][0]["id"] == "1"
        assert body["data"][0]["work_area"] == "Pune"

        table, filters, page, limit = backend.do_fetch_page.await_args.args
        assert table is USERS_TABLE
        assert filters["work_area"] == "Pune"
        assert filters["mobile_number"] == ""
        assert (page, limit) == (2, 10)

    def test_invalid_page_is_rejected(self, api, backend):
        response = api.get("/api/flows", params={"page": 0})
        assert response.status_code == 422
        backend.do_fetch_page.assert_not_awaited()

    def test_validation_failure(self, api, backend):
        backend.do_fetch_page.side_effect = ValidationFailure("Invalid start_date format. Use YYYY-MM-DD")
        response = api.get("/api/flows", params={"start_date": "yesterday"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid start_date format. Use YYYY-MM-DD"}

    def test_backend_failure(self, api, backend):
        backend.do_fetch_page.side_effect = HttpStatusFailure(503)
        response = api.get("/api/flows")
        assert response.status_code == 500
        assert response.json() == {"error": "HTTP error! status: 503"}

    def test_delete(self, api, backend):
        backend.do_delete_item.return_value = {"message": "Flow deleted"}
        response = api.delete("/api/flows/42")
        assert response.status_code == 200
        assert response.json() == {"message": "Flow deleted"}
        backend.do_delete_item.assert_awaited_once_with(USERS_TABLE, "42")

    def test_delete_failure(self, api, backend):
        backend.do_delete_item.side_effect = HttpStatusFailure(404, "Flow not found")
        response = api.delete("/api/flows/42")
        assert response.status_code == 500
        assert response.json() == {"error": "Flow not found"}


class TestWeeklyEarnings:
    """Test cases for the weekly earnings proxy."""

    def test_list(self, api, backend):
        backend.do_fetch_page.return_value = PageResult(
            items=[WeeklyEarning.model_validate({"id": 3, "earnings": None, "work_area": None})],
            page=1,
            page_size=10,
            total_item_count=1,
        )

        response = api.get("/api/weekly-earnings", params={"primary_company": "Zomato", "end_date": "2024-01-31"})

        assert response.status_code == 200
        row = response.json()["data"][0]
        assert row["earnings"] == 0
        assert row["work_area"] == "N/A"
        table, filters, _, _ = backend.do_fetch_page.await_args.args
        assert table is EARNINGS_TABLE
        assert filters["primary_company"] == "Zomato"
        assert filters["end_date"] == "2024-01-31"

    def test_timeout(self, api, backend):
        backend.do_fetch_page.side_effect = TimeoutFailure()
        response = api.get("/api/weekly-earnings")
        assert response.status_code == 408
        assert response.json() == {"error": "Request timeout"}


class TestAnalytics:
    """Test cases for the analytics routes."""

    def test_general_aggregations_are_cached(self, api, backend):
        backend.do_fetch_general_aggregations.return_value = GeneralAggregations(total_users=12, total_earnings=5400.5)

        first = api.get("/api/weekly-earnings-analytics/general-aggregations")
        second = api.get("/api/weekly-earnings-analytics/general-aggregations")

        assert first.status_code == 200
        assert first.json()["total_users"] == 12
        assert second.json() == first.json()
        backend.do_fetch_general_aggregations.assert_awaited_once()

    def test_general_aggregations_timeout(self, api, backend):
        backend.do_fetch_general_aggregations.side_effect = TimeoutFailure()
        response = api.get("/api/weekly-earnings-analytics/general-aggregations")
        assert response.status_code == 408

    def test_work_area_wise(self, api, backend):
        backend.do_fetch_work_area_wise.return_value = [WorkAreaEarnings(work_area="Pune", total_earnings=900)]

        response = api.get("/api/weekly-earnings-analytics/work-area-wise", params={"start_date": "2024-01-01"})

        assert response.status_code == 200
        assert response.json()[0]["work_area"] == "Pune"
        backend.do_fetch_work_area_wise.assert_awaited_once_with(start_date="2024-01-01", end_date=None)

    def test_work_area_wise_invalid_date(self, api, backend):
        backend.do_fetch_work_area_wise.side_effect = ValidationFailure("Invalid end_date format. Use YYYY-MM-DD")
        response = api.get("/api/weekly-earnings-analytics/work-area-wise", params={"end_date": "31-01-2024"})
        assert response.status_code == 400

    def test_work_area_wise_network_failure(self, api, backend):
        backend.do_fetch_work_area_wise.side_effect = NetworkFailure()
        response = api.get("/api/weekly-earnings-analytics/work-area-wise")
        assert response.status_code == 500
        assert response.json() == {"error": "Network error while contacting the backend"}
