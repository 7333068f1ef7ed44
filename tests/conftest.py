"""Pytest configuration and fixtures."""

import logging
import os
import tempfile

import pytest

# logging_setup writes its log file below ROOT_DIR; keep it out of the working tree
os.environ.setdefault("ROOT_DIR", tempfile.mkdtemp(prefix="earnings_dashboard_tests_"))

from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import ColorLogger

BACKEND_URL = "https://backend.test"


@pytest.fixture
def helper_config():
    """HelperConfig backed by a ColorLogger without handlers of its own."""
    return HelperConfig(logger=ColorLogger(logging.getLogger("earnings_dashboard.tests")))


@pytest.fixture
def backend_env(monkeypatch):
    """Minimal environment for the REST backend client."""
    monkeypatch.setenv("BACKEND_REST_BASE_URL", BACKEND_URL)
    monkeypatch.delenv("BACKEND_REST_API_KEY", raising=False)
    monkeypatch.delenv("BACKEND_REST_ANALYTICS_TIMEOUT", raising=False)
    monkeypatch.delenv("BACKEND_TIMEOUT", raising=False)
    monkeypatch.delenv("DASHBOARD_EXPORT_PAGE_SIZE", raising=False)
    return BACKEND_URL
