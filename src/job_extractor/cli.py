#!/usr/bin/env python3
"""Command-line entry point: extract a job record from a URL or saved HTML file."""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

import requests
from dotenv import load_dotenv

from job_extractor.exceptions import JobExtractorError, PageFetchError
from job_extractor.logging_config import get_logger, setup_logging
from job_extractor.page import JobPage
from job_extractor.parsers.factory import ParserFactory
from job_extractor.settings import get_request_timeout

logger = get_logger(__name__)

# Default headers for requests
DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; JobExtractor/1.0)",
    "Accept": "text/html,application/xhtml+xml,*/*",
}


def fetch_html(url: str, timeout: Optional[int] = None) -> str:
    """
    Download a page.

    Raises:
        PageFetchError: On connection errors, timeouts and non-2xx responses
    """
    timeout = timeout or get_request_timeout()
    try:
        response = requests.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise PageFetchError(url, str(e)) from e
    return response.text


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="job-extract",
        description="Extract company, role and salary from a job posting page",
    )
    parser.add_argument("url", help="URL of the job posting")
    parser.add_argument(
        "--html-file",
        help="Read the page from a saved HTML file instead of downloading it",
    )
    parser.add_argument(
        "--parser",
        dest="site",
        help="Run one site parser directly (e.g. LinkedIn, Greenhouse, Generic)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )
    parser.add_argument(
        "--no-env",
        action="store_true",
        help="Skip loading .env file",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run one extraction and print the result as JSON. Returns the exit status."""
    args = build_arg_parser().parse_args(argv)

    if not args.no_env:
        load_dotenv()

    # Provide a safe default ENVIRONMENT for logging if not supplied
    os.environ.setdefault("ENVIRONMENT", "development")

    # Logs go to stderr so stdout stays valid JSON
    setup_logging(log_level=args.log_level, stream=sys.stderr)

    try:
        if args.html_file:
            html = Path(args.html_file).read_text(encoding="utf-8", errors="replace")
        else:
            html = fetch_html(args.url)
    except (OSError, JobExtractorError) as e:
        logger.error(f"Could not load page: {e}")
        print(json.dumps({"success": False, "error": str(e)}, indent=2))
        return 1

    factory = ParserFactory()
    if args.site:
        result = factory.test_parser(args.site, JobPage(args.url, html))
    else:
        result = factory.extract_job_data(args.url, html=html)

    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
