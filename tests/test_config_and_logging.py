"""Tests for the environment configuration helper and log masking."""

import logging

import pytest

from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import ColorLogger, SecretFilter


class TestHelperConfig:
    """Test cases for HelperConfig."""

    def test_string_is_stripped(self, helper_config, monkeypatch):
        monkeypatch.setenv("DASHBOARD_PASSWORD", "  letmein ")
        assert helper_config.get_string_val("dashboard_password") == "letmein"

    def test_missing_required_value(self, helper_config, monkeypatch):
        monkeypatch.delenv("DASHBOARD_PASSWORD", raising=False)
        with pytest.raises(ValueError, match="DASHBOARD_PASSWORD"):
            helper_config.get_string_val("DASHBOARD_PASSWORD")

    def test_numbers(self, helper_config, monkeypatch):
        monkeypatch.setenv("DASHBOARD_PAGE_SIZE", "25")
        monkeypatch.setenv("DASHBOARD_DEBOUNCE_SECONDS", "0.25")
        assert helper_config.get_number_val("DASHBOARD_PAGE_SIZE", default=10) == 25
        assert helper_config.get_number_val("DASHBOARD_DEBOUNCE_SECONDS", default=0.5) == 0.25

    def test_invalid_number(self, helper_config, monkeypatch):
        monkeypatch.setenv("DASHBOARD_PAGE_SIZE", "ten")
        with pytest.raises(ValueError, match="not a valid number"):
            helper_config.get_number_val("DASHBOARD_PAGE_SIZE", default=10)

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("https://backend.test/", "https://backend.test"),
            ("http://localhost:3000/api", "http://localhost:3000/api"),
        ],
    )
    def test_url(self, helper_config, monkeypatch, raw, expected):
        monkeypatch.setenv("BACKEND_REST_BASE_URL", raw)
        assert helper_config.get_url_val("BACKEND_REST_BASE_URL") == expected

    @pytest.mark.parametrize("raw", ["ftp://backend.test", "backend.test", "https://"])
    def test_invalid_url(self, helper_config, monkeypatch, raw):
        monkeypatch.setenv("BACKEND_REST_BASE_URL", raw)
        with pytest.raises(ValueError, match="not a valid http"):
            helper_config.get_url_val("BACKEND_REST_BASE_URL")


class TestLogging:
    """Test cases for the logging helpers."""

    def test_secret_is_masked(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "login with %s", ("letmein",), None)
        assert SecretFilter("letmein").filter(record)
        assert record.getMessage() == "login with ********"

    def test_filter_without_secret_keeps_message(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "login with %s", ("letmein",), None)
        SecretFilter(None).filter(record)
        assert record.getMessage() == "login with letmein"

    def test_color_logger_passes_color_as_extra(self, caplog):
        logger = ColorLogger(logging.getLogger("earnings_dashboard.tests.color"))
        with caplog.at_level(logging.INFO, logger="earnings_dashboard.tests.color"):
            logger.info("Exported %d rows", 3, color="green")
        assert caplog.records[0].getMessage() == "Exported 3 rows"
        assert caplog.records[0].color == "green"

    def test_helper_config_returns_logger(self):
        logger = logging.getLogger("earnings_dashboard.tests.plain")
        assert HelperConfig(logger=logger).get_logger() is logger
