"""Tests for runtime extraction settings."""

import pytest

from job_extractor import constants
from job_extractor.exceptions import ConfigurationError
from job_extractor.settings import (
    DEFAULT_SETTINGS,
    get_company_thresholds,
    get_extraction_settings,
    get_request_timeout,
)


@pytest.fixture
def write_config(tmp_path, monkeypatch):
    """Write a settings file and point the environment at it."""

    def _write(content):
        path = tmp_path / "extraction.yaml"
        path.write_text(content)
        monkeypatch.setenv("JOB_EXTRACTOR_CONFIG", str(path))
        return path

    return _write


class TestDefaults:
    def test_defaults_without_config(self):
        settings = get_extraction_settings()

        assert settings == DEFAULT_SETTINGS
        assert settings["min_company_score"] == constants.MIN_COMPANY_SCORE
        assert settings["max_role_text_length"] == 150

    def test_company_thresholds(self):
        assert get_company_thresholds() == {
            "min_frequency_occurrences": 3,
            "max_frequency_candidates": 10,
            "min_company_score": 40,
        }

    def test_request_timeout(self):
        assert get_request_timeout() == 30


class TestOverrides:
    def test_values_override_defaults(self, write_config):
        write_config("min_company_score: 55\nrequest_timeout_seconds: 10\n")

        settings = get_extraction_settings()

        assert settings["min_company_score"] == 55
        assert settings["request_timeout_seconds"] == 10
        assert settings["min_role_score"] == constants.MIN_ROLE_SCORE

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "other.yaml"
        path.write_text("min_role_length: 5\n")

        assert get_extraction_settings(str(path))["min_role_length"] == 5

    def test_empty_file_keeps_defaults(self, write_config):
        write_config("")
        assert get_extraction_settings() == DEFAULT_SETTINGS

    def test_results_are_cached(self, write_config):
        path = write_config("min_company_score: 55\n")
        assert get_extraction_settings()["min_company_score"] == 55

        path.write_text("min_company_score: 70\n")

        assert get_extraction_settings()["min_company_score"] == 55


class TestInvalidConfig:
    def test_unknown_key(self, write_config):
        write_config("min_company_scor: 55\n")

        with pytest.raises(ConfigurationError, match="min_company_scor"):
            get_extraction_settings()

    def test_non_integer_value(self, write_config):
        write_config("min_company_score: high\n")

        with pytest.raises(ConfigurationError, match="must be an integer"):
            get_extraction_settings()

    def test_boolean_is_not_an_integer(self, write_config):
        write_config("min_company_score: true\n")

        with pytest.raises(ConfigurationError):
            get_extraction_settings()

    def test_not_a_mapping(self, write_config):
        write_config("- 1\n- 2\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            get_extraction_settings()

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("JOB_EXTRACTOR_CONFIG", str(tmp_path / "nope.yaml"))

        with pytest.raises(ConfigurationError, match="Failed to load"):
            get_extraction_settings()

    def test_malformed_yaml(self, write_config):
        write_config("min_company_score: [1, 2\n")

        with pytest.raises(ConfigurationError):
            get_extraction_settings()
