"""Shared pytest fixtures for all tests."""

from datetime import date

import pytest

from job_extractor.logging_config import reset_logging_config_cache
from job_extractor.page import JobPage
from job_extractor.settings import CONFIG_ENV_VAR, clear_settings_cache


@pytest.fixture(autouse=True)
def set_test_environment(monkeypatch):
    """
    Automatically set ENVIRONMENT variable for all tests.

    This keeps setup_logging() from warning about a missing environment
    and makes StructuredLogger output deterministic.
    """
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture(autouse=True)
def reset_caches():
    """Clear cached settings and logging display config around every test."""
    clear_settings_cache()
    reset_logging_config_cache()
    yield
    clear_settings_cache()
    reset_logging_config_cache()


@pytest.fixture
def make_page():
    """
    Build a JobPage from a URL and an HTML snippet.

    Snippets without an <html> element are wrapped in a minimal document,
    with an optional <title>.
    """

    def _make_page(url="https://example.com/jobs/123", body="", title=None, head=""):
        if "<html" in body.lower():
            html = body
        else:
            title_tag = f"<title>{title}</title>" if title is not None else ""
            html = f"<html><head>{title_tag}{head}</head><body>\n{body}\n</body></html>"
        return JobPage(url, html)

    return _make_page


@pytest.fixture
def fixed_today():
    """Deterministic submission date."""
    return date(2024, 3, 15)
