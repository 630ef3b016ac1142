"""
Parser dispatch and post-extraction validation.

The factory walks the known board parsers in table order, falls back to
the generic parser, runs it and reports soft validation warnings. It is
the only place where extraction errors are caught: a failure becomes an
ExtractionResult with ``success=False`` instead of an exception.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence

from job_extractor.exceptions import ParserNotFoundError
from job_extractor.logging_config import get_structured_logger
from job_extractor.models import ApplicationStatus, ExtractionResult, JobRecord, RejectionReason
from job_extractor.page import JobPage
from job_extractor.parsers.generic import GENERIC_PARSER, GENERIC_SITE_NAME
from job_extractor.parsers.site_parsers import KNOWN_SITE_PARSERS, SiteParser
from job_extractor.settings import get_extraction_settings
from job_extractor.utils.text_utils import contains_any
from job_extractor.utils.url_utils import is_valid_url

logger = logging.getLogger(__name__)
slogger = get_structured_logger(__name__)

PARSERS: Sequence[SiteParser] = (*KNOWN_SITE_PARSERS, GENERIC_PARSER)

SALARY_HINTS = ["$", "k", "hour", "year", "annually", "monthly", "salary", "usd", "eur", "gbp"]

FAILED_EXTRACTION_NOTES = "Manual entry required - extraction failed"
INVALID_PAGE_ERROR = "Page is not recognized as a valid job page"


def empty_job_record(url: str, today: Optional[date] = None) -> JobRecord:
    """Placeholder record returned when extraction fails."""
    fields = {
        "link_to_job_req": url or "",
        "application_status": ApplicationStatus.SUBMITTED_PENDING,
        "rejection_reason": RejectionReason.NOT_APPLICABLE,
        "notes": FAILED_EXTRACTION_NOTES,
    }
    if today is not None:
        fields["date_submitted"] = today.isoformat()
    return JobRecord(**fields)


def validate_job_record(record: JobRecord) -> List[str]:
    """
    Run the advisory checks on an extracted record.

    Warnings never fail an extraction; they tell the user which fields to
    double-check.

    Args:
        record: Extracted record

    Returns:
        Warning messages (empty when everything looks plausible)
    """
    settings = get_extraction_settings()
    min_company_length = settings["min_company_name_length"]
    min_role_length = settings["min_role_length"]
    warnings: List[str] = []

    if len(record.company_name or "") < min_company_length:
        warnings.append("Company name may be incomplete")

    if len(record.role or "") < min_role_length:
        warnings.append("Job title may be incomplete")

    if record.link_to_job_req and not is_valid_url(record.link_to_job_req):
        warnings.append("Job URL may be invalid")

    if record.salary and not contains_any(record.salary, SALARY_HINTS):
        warnings.append("Salary information may be inaccurate")

    return warnings


class ParserFactory:
    """
    Selects a site parser for a page and runs it.

    Usage:
        factory = ParserFactory()
        result = factory.extract_job_data("https://acme.com/jobs/1", html=html)
        if result.success:
            print(result.data.company_name, result.warnings)
    """

    def __init__(self, parsers: Sequence[SiteParser] = PARSERS):
        self.parsers = list(parsers)

    def _generic_parser(self) -> SiteParser:
        for parser in self.parsers:
            if parser.site_name == GENERIC_SITE_NAME:
                return parser
        return GENERIC_PARSER

    def get_parser(self, page: JobPage) -> SiteParser:
        """
        Pick the parser for a page.

        The first known board whose URL pattern matches and whose page
        check passes wins. Otherwise the generic parser is used, even when
        its own page check fails.
        """
        for parser in self.parsers:
            if parser.site_name == GENERIC_SITE_NAME:
                continue
            if parser.matches_url(page.url) and parser.is_valid_job_page(page):
                slogger.parser_selected(parser.site_name, page.url)
                return parser

        generic = self._generic_parser()
        slogger.parser_selected(
            generic.site_name, page.url, fallback=not generic.is_valid_job_page(page)
        )
        return generic

    def extract_job_data(
        self,
        url: str,
        html: Optional[str] = None,
        page: Optional[JobPage] = None,
        today: Optional[date] = None,
    ) -> ExtractionResult:
        """
        Extract a job record from a page.

        Args:
            url: Page URL
            html: Raw page HTML (ignored when ``page`` is given)
            page: Already-built page view
            today: Date recorded as date_submitted (defaults to today)

        Returns:
            ExtractionResult; never raises
        """
        parser_name = None
        try:
            page = page if page is not None else JobPage(url, html)
            parser = self.get_parser(page)
            parser_name = parser.site_name

            record = parser.parse(page, today=today)
            warnings = validate_job_record(record)

            slogger.extraction_completed(parser_name, True, warnings)
            return ExtractionResult(
                success=True, data=record, parser_used=parser_name, warnings=warnings
            )

        except Exception as e:
            logger.error(f"Error extracting job data from {url}: {e}", exc_info=True)
            slogger.extraction_completed(parser_name, False)
            return ExtractionResult(
                success=False,
                data=empty_job_record(url, today),
                parser_used=parser_name,
                error=str(e) or "Unknown error occurred",
            )

    def get_supported_sites(self) -> List[str]:
        """Names of the known job boards (the generic fallback excluded)."""
        return [p.site_name for p in self.parsers if p.site_name != GENERIC_SITE_NAME]

    def get_parser_by_name(self, site_name: str) -> SiteParser:
        """
        Look up a parser by its site name.

        Raises:
            ParserNotFoundError: If no parser has that name
        """
        for parser in self.parsers:
            if parser.site_name == site_name:
                return parser
        raise ParserNotFoundError(site_name)

    def test_parser(
        self, site_name: str, page: JobPage, today: Optional[date] = None
    ) -> ExtractionResult:
        """
        Run one named parser against a page, bypassing dispatch.

        ``success`` reflects the parser's own page check; the parsed record
        is returned either way so selectors can be debugged.
        """
        try:
            parser = self.get_parser_by_name(site_name)
        except ParserNotFoundError as e:
            return ExtractionResult(
                success=False, data=empty_job_record(page.url, today), error=str(e)
            )

        try:
            is_valid = parser.is_valid_job_page(page)
            record = parser.parse(page, today=today)
        except Exception as e:
            logger.error(f"Parser test for {site_name} failed: {e}", exc_info=True)
            return ExtractionResult(
                success=False,
                data=empty_job_record(page.url, today),
                parser_used=site_name,
                error=str(e) or "Parser test failed",
            )

        return ExtractionResult(
            success=is_valid,
            data=record,
            parser_used=parser.site_name,
            warnings=validate_job_record(record),
            error=None if is_valid else INVALID_PAGE_ERROR,
        )


_default_factory = ParserFactory()


def get_parser(page: JobPage) -> SiteParser:
    return _default_factory.get_parser(page)


def extract_job_data(
    url: str,
    html: Optional[str] = None,
    page: Optional[JobPage] = None,
    today: Optional[date] = None,
) -> ExtractionResult:
    """Module-level shortcut for ``ParserFactory().extract_job_data``."""
    return _default_factory.extract_job_data(url, html=html, page=page, today=today)


def get_supported_sites() -> List[str]:
    return _default_factory.get_supported_sites()


def test_parser(site_name: str, page: JobPage, today: Optional[date] = None) -> ExtractionResult:
    return _default_factory.test_parser(site_name, page, today=today)
