"""Runtime settings loaded from a YAML file with fallback to constants.

This module provides centralized access to the extraction thresholds defined in
constants.py. When the ``JOB_EXTRACTOR_CONFIG`` environment variable names a
YAML file, its values override the defaults. Results are cached.

Usage:
    from job_extractor.settings import get_extraction_settings

    settings = get_extraction_settings()
    threshold = settings["min_company_score"]
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from job_extractor import constants
from job_extractor.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "JOB_EXTRACTOR_CONFIG"

DEFAULT_SETTINGS: Dict[str, int] = {
    "max_role_text_length": constants.MAX_ROLE_TEXT_LENGTH,
    "min_role_score": constants.MIN_ROLE_SCORE,
    "min_frequency_occurrences": constants.MIN_FREQUENCY_OCCURRENCES,
    "max_frequency_candidates": constants.MAX_FREQUENCY_CANDIDATES,
    "min_company_score": constants.MIN_COMPANY_SCORE,
    "min_normalized_salary_confidence": constants.MIN_NORMALIZED_SALARY_CONFIDENCE,
    "min_company_name_length": constants.MIN_COMPANY_NAME_LENGTH,
    "min_role_length": constants.MIN_ROLE_LENGTH,
    "request_timeout_seconds": constants.DEFAULT_REQUEST_TIMEOUT,
}


def _get_config_path() -> Optional[str]:
    """Get settings file path from environment."""
    return os.environ.get(CONFIG_ENV_VAR)


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load settings from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")
    return data


@lru_cache(maxsize=1)
def get_extraction_settings(config_path: Optional[str] = None) -> Dict[str, int]:
    """
    Get extraction settings from the YAML file with fallback to defaults.

    Results are cached for the lifetime of the process.

    Args:
        config_path: Optional settings file path (uses env var if not provided)

    Returns:
        Settings dictionary keyed by snake_case threshold name

    Raises:
        ConfigurationError: If the file is unreadable, has unknown keys, or
            holds non-integer values
    """
    settings = dict(DEFAULT_SETTINGS)

    path = config_path or _get_config_path()
    if not path:
        return settings

    overrides = _load_yaml(Path(path))
    unknown = sorted(set(overrides) - set(DEFAULT_SETTINGS))
    if unknown:
        raise ConfigurationError(f"Unknown settings in {path}: {', '.join(unknown)}")

    for key, value in overrides.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"Setting '{key}' must be an integer, got {value!r}")
        settings[key] = value

    logger.debug(f"Loaded {len(overrides)} extraction setting overrides from {path}")
    return settings


def clear_settings_cache() -> None:
    """Clear cached settings (useful for testing or config reload)."""
    get_extraction_settings.cache_clear()


# Convenience accessors for common settings
def get_company_thresholds(config_path: Optional[str] = None) -> Dict[str, int]:
    """Get company arbitration thresholds."""
    settings = get_extraction_settings(config_path)
    return {
        "min_frequency_occurrences": settings["min_frequency_occurrences"],
        "max_frequency_candidates": settings["max_frequency_candidates"],
        "min_company_score": settings["min_company_score"],
    }


def get_request_timeout(config_path: Optional[str] = None) -> int:
    """Get the HTTP timeout used by the command-line fetcher."""
    return get_extraction_settings(config_path)["request_timeout_seconds"]
