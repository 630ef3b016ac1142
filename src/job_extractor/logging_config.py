"""Logging configuration with JSON output to stdout and an optional file."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Tuple

import yaml

# Global configuration cache
_logging_config: Optional[Dict] = None

DEFAULT_ENVIRONMENT = "development"


def _load_logging_config() -> Dict:
    """
    Load logging display configuration from config/logging.yaml.

    Returns:
        Dict with logging configuration, or default config if file not found.
    """
    global _logging_config

    if _logging_config is not None:
        return _logging_config

    config_path = Path(__file__).parent.parent.parent / "config" / "logging.yaml"

    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                _logging_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            print(
                f"WARNING: Failed to load logging config from {config_path}: {e}",
                file=sys.stderr,
            )
            _logging_config = {}
    else:
        _logging_config = {}

    _logging_config.setdefault("console", {})
    _logging_config["console"].setdefault("max_company_name_length", 80)
    _logging_config["console"].setdefault("max_job_title_length", 60)
    _logging_config["console"].setdefault("max_url_length", 50)

    return _logging_config


def reset_logging_config_cache() -> None:
    """Forget the cached display configuration."""
    global _logging_config
    _logging_config = None


def _truncate(value: str, max_length: int) -> str:
    if max_length <= 0 or len(value) <= max_length:
        return value
    if max_length <= 3:
        return value[:max_length]
    return value[: max_length - 3] + "..."


def format_company_name(company_name: str, max_length: Optional[int] = None) -> Tuple[str, str]:
    """
    Format a company name for logging with both full and display versions.

    Args:
        company_name: The full company name to format.
        max_length: Maximum length for display version. If None, uses config value.

    Returns:
        Tuple of (full_name, display_name)
    """
    if not company_name:
        return "", ""

    full_name = company_name.strip()

    if max_length is None:
        max_length = _load_logging_config()["console"]["max_company_name_length"]

    return full_name, _truncate(full_name, max_length)


def format_job_title(title: str, max_length: Optional[int] = None) -> str:
    """Shorten a job title for console display."""
    if not title:
        return ""
    if max_length is None:
        max_length = _load_logging_config()["console"]["max_job_title_length"]
    return _truncate(title.strip(), max_length)


def format_url(url: str, max_length: Optional[int] = None) -> str:
    """Shorten a URL for console display."""
    if not url:
        return ""
    if max_length is None:
        max_length = _load_logging_config()["console"]["max_url_length"]
    return _truncate(url.strip(), max_length)


# CRITICAL is reported as ERROR
SEVERITY_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARNING",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "ERROR",
}


class JSONFormatter(logging.Formatter):
    """
    Render each record as one JSON line.

    Records emitted through StructuredLogger carry their own category,
    action and details; any other record becomes a ``system``/``log`` entry
    holding the formatted message.
    """

    def __init__(self, environment: str = DEFAULT_ENVIRONMENT):
        super().__init__()
        self.environment = environment

    def _error_fields(self, record: logging.LogRecord) -> Dict[str, Any]:
        exc_type, exc_value, exc_tb = record.exc_info
        return {
            "type": exc_type.__name__ if exc_type else "Exception",
            "message": str(exc_value),
            "stack": self.formatException(record.exc_info) if exc_tb else None,
        }

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: Dict[str, Any] = {
            "severity": SEVERITY_NAMES.get(record.levelno, "INFO"),
            "timestamp": created.isoformat(),
            "environment": self.environment,
            "service": "job-extractor",
            "logger": record.name,
        }

        fields = getattr(record, "structured_fields", None)
        if fields is None:
            fields = {"category": "system", "action": "log", "message": record.getMessage()}
        entry.update(fields)

        if record.exc_info:
            entry["error"] = self._error_fields(record)

        return json.dumps(entry)


def _json_handler(
    handler: logging.Handler, formatter: logging.Formatter, level: int
) -> logging.Handler:
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Send JSON log lines to a console stream and, optionally, a file.

    The command-line tool passes ``stream=sys.stderr`` so that stdout only
    carries the extraction result.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Extra log file; parent directories are created
        stream: Console stream (defaults to stdout)

    Environment Variables:
        LOG_LEVEL: Overrides ``log_level``
        LOG_FILE: Overrides ``log_file``
        ENVIRONMENT: Environment name stamped on every line
    """
    log_level = os.getenv("LOG_LEVEL", log_level).upper()
    log_file = os.getenv("LOG_FILE", log_file)
    level = getattr(logging, log_level, logging.INFO)

    environment = os.getenv("ENVIRONMENT")
    if not environment:
        environment = DEFAULT_ENVIRONMENT
        print(
            f"WARNING: ENVIRONMENT not set, defaulting to '{DEFAULT_ENVIRONMENT}'",
            file=sys.stderr,
        )

    formatter = JSONFormatter(environment=environment)
    handlers = [_json_handler(logging.StreamHandler(stream or sys.stdout), formatter, level)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_json_handler(logging.FileHandler(log_path), formatter, level))

    logging.basicConfig(level=level, handlers=handlers, force=True)

    structured = StructuredLogger(logging.getLogger(__name__))
    structured.extractor_status(
        "logging_configured",
        details={"environment": environment, "level": log_level, "file": log_file},
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


class StructuredLogger:
    """Helper class for structured extraction events with JSON output."""

    def __init__(self, logger: logging.Logger):
        """
        Initialize structured logger.

        Args:
            logger: Base logger instance
        """
        self.logger = logger

    def _log(self, level: str, structured_fields: Dict[str, Any]) -> None:
        log_method = getattr(self.logger, level.lower())
        message = structured_fields.get("message", "")
        log_method(message, extra={"structured_fields": structured_fields})

    def parser_selected(self, site_name: str, url: str, fallback: bool = False) -> None:
        """
        Log which site parser the dispatcher picked.

        Args:
            site_name: Name of the chosen parser
            url: Page URL
            fallback: True when Generic was used without passing its own page check
        """
        structured_fields = {
            "category": "dispatch",
            "action": "fallback" if fallback else "selected",
            "message": f"Using {site_name} parser for {format_url(url)}",
            "details": {"parser": site_name, "url": url},
        }
        self._log("warning" if fallback else "info", structured_fields)

    def field_extracted(self, field: str, value: str, strategy: str) -> None:
        """
        Log a resolved field value at debug level.

        Args:
            field: Field name (company, role, salary)
            value: Resolved value (may be empty)
            strategy: Strategy or parser that produced it
        """
        if field == "company":
            full_value, display = format_company_name(value)
        elif field == "role":
            full_value, display = value, format_job_title(value)
        else:
            full_value, display = value, value

        structured_fields = {
            "category": "extraction",
            "action": "field",
            "message": f"{field} = {display!r} via {strategy}",
            "details": {"field": field, "value": full_value, "strategy": strategy},
        }
        self._log("debug", structured_fields)

    def extraction_completed(
        self, site_name: str, success: bool, warnings: Optional[List[str]] = None
    ) -> None:
        """
        Log the outcome of one page extraction.

        Args:
            site_name: Parser used (None-safe)
            success: Whether dispatch produced a record
            warnings: Advisory validation warnings
        """
        warnings = warnings or []
        structured_fields = {
            "category": "extraction",
            "action": "completed" if success else "failed",
            "message": f"Extraction {'completed' if success else 'failed'} ({site_name})",
            "details": {"parser": site_name, "warnings": warnings},
        }
        level = "info" if success else "error"
        if success and warnings:
            level = "warning"
        self._log(level, structured_fields)

    def extractor_status(self, status: str, details: Optional[Dict] = None) -> None:
        """
        Log extractor lifecycle changes.

        Args:
            status: Status (logging_configured, fetching, ...)
            details: Optional additional details
        """
        structured_fields = {
            "category": "extractor",
            "action": status.lower(),
            "message": f"Extractor {status}",
            "details": details or {},
        }
        self._log("info", structured_fields)


def get_structured_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        StructuredLogger instance.
    """
    return StructuredLogger(logging.getLogger(name))
