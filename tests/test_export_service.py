"""Tests for the table export service and its command line runner."""

import asyncio
import csv
import os

import httpx
import pytest

from services.table_export.ExportService import ExportService
from services.table_export.export_runner import build_parser, parse_filters
from shared.clients.backend.rest.BackendClientRest import BackendClientRest
from shared.models.errors import HttpStatusFailure


def paged_backend(rows, fail_on_page=None):
    """MockTransport handler serving rows in pages of the requested limit."""
    seen = []

    def handler(request):
        page = int(request.url.params["page"])
        limit = int(request.url.params["limit"])
        seen.append(dict(request.url.params))
        if page == fail_on_page:
            return httpx.Response(500, json={"error": "Internal server error"})
        start = (page - 1) * limit
        return httpx.Response(200, json={"data": rows[start:start + limit], "total": len(rows), "page": page})

    return handler, seen


def run_export(helper_config, handler, table, filters, output_dir):
    async def runner():
        client = BackendClientRest(helper_config=helper_config)
        await client.boot(transport=httpx.MockTransport(handler))
        try:
            return await ExportService(helper_config=helper_config, backend_client=client).do_export(table, filters, output_dir)
        finally:
            await client.close()

    return asyncio.run(runner())


USERS = [{"id": i, "first_name": f"User{i}", "mobile_number": f"+91{i:04d}", "work_area": "Pune"} for i in range(1, 6)]


class TestExportService:
    """Test cases for ExportService."""

    def test_export_writes_every_page(self, helper_config, backend_env, monkeypatch, tmp_path):
        monkeypatch.setenv("DASHBOARD_EXPORT_PAGE_SIZE", "2")
        handler, seen = paged_backend(USERS)

        path = run_export(helper_config, handler, "users", {"work_area": "Pune"}, str(tmp_path))

        assert [params["page"] for params in seen] == ["1", "2", "3"]
        assert all(params["limit"] == "2" and params["work_area"] == "Pune" for params in seen)
        assert os.path.basename(path).startswith("user_records_")
        with open(path, encoding="utf-8", newline="") as handle:
            rows = list(csv.reader(handle))
        assert rows[0][0] == "Name"
        assert [row[0] for row in rows[1:]] == [f"User{i}" for i in range(1, 6)]

    def test_failed_page_writes_nothing(self, helper_config, backend_env, monkeypatch, tmp_path):
        monkeypatch.setenv("DASHBOARD_EXPORT_PAGE_SIZE", "2")
        handler, seen = paged_backend(USERS, fail_on_page=2)

        with pytest.raises(HttpStatusFailure):
            run_export(helper_config, handler, "users", {}, str(tmp_path / "exports"))

        assert len(seen) == 2
        assert not (tmp_path / "exports").exists()

    def test_unknown_table(self, helper_config, backend_env, tmp_path):
        handler, _ = paged_backend([])
        with pytest.raises(ValueError, match="Unknown table"):
            run_export(helper_config, handler, "payouts", {}, str(tmp_path))


class TestExportRunner:
    """Test cases for the command line arguments of the export runner."""

    def test_parse_filters(self):
        assert parse_filters(["work_area=Pune", "start_date=2024-01-01", "note=a=b"]) == {
            "work_area": "Pune",
            "start_date": "2024-01-01",
            "note": "a=b",
        }

    def test_parse_filters_rejects_bare_values(self):
        with pytest.raises(ValueError, match="key=value"):
            parse_filters(["Pune"])

    def test_parser_defaults(self):
        args = build_parser().parse_args(["earnings", "work_area=Pune"])
        assert args.table == "earnings"
        assert args.filters == ["work_area=Pune"]
        assert args.output == "exports"
