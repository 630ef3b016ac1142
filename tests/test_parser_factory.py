"""Tests for parser dispatch and result validation."""

import pytest

from job_extractor.exceptions import ParserNotFoundError
from job_extractor.models import JobRecord
from job_extractor.parsers import factory
from job_extractor.parsers.factory import (
    FAILED_EXTRACTION_NOTES,
    INVALID_PAGE_ERROR,
    ParserFactory,
    empty_job_record,
    validate_job_record,
)
from job_extractor.parsers.generic import GENERIC_PARSER
from job_extractor.parsers.site_parsers import SiteParser

LINKEDIN_URL = "https://www.linkedin.com/jobs/view/3812345678"
LINKEDIN_BODY = """
<h1 class="topcard__title">Senior Software Engineer</h1>
<a class="topcard__org-name-link" href="/company/acme">Acme Corp</a>
"""


def _raise_parse_error(parser, page, today=None):
    raise RuntimeError("selector engine exploded")


@pytest.fixture
def parser_factory():
    return ParserFactory()


class TestGetParser:
    """Test dispatch order and fallback."""

    def test_known_board(self, parser_factory, make_page):
        page = make_page(url=LINKEDIN_URL, body=LINKEDIN_BODY)
        assert parser_factory.get_parser(page).site_name == "LinkedIn"

    def test_known_url_with_unrecognized_page_falls_back(self, parser_factory, make_page):
        page = make_page(url=LINKEDIN_URL, body="<h1>Sign in</h1>")
        assert parser_factory.get_parser(page).site_name == "Generic"

    def test_unknown_site_uses_generic(self, parser_factory, make_page):
        page = make_page(url="https://acme.com/careers/1", body="<h1>Engineer</h1>")
        assert parser_factory.get_parser(page) is GENERIC_PARSER

    def test_table_order_decides(self, make_page):
        first = SiteParser(site_name="First", url_patterns=("acme.com",), content_markers=("h1",))
        second = SiteParser(site_name="Second", url_patterns=("acme.com",), content_markers=("h1",))
        page = make_page(url="https://acme.com/jobs/1", body="<h1>Engineer</h1>")

        chosen = ParserFactory(parsers=[first, second, GENERIC_PARSER]).get_parser(page)

        assert chosen.site_name == "First"


class TestExtractJobData:
    """Test the full dispatch."""

    def test_known_board_success(self, parser_factory, fixed_today):
        html = f"<html><body>{LINKEDIN_BODY}</body></html>"

        result = parser_factory.extract_job_data(LINKEDIN_URL, html=html, today=fixed_today)

        assert result.success
        assert result.parser_used == "LinkedIn"
        assert result.data.company_name == "Acme Corp"
        assert result.data.role == "Senior Software Engineer"
        assert result.data.date_submitted == "2024-03-15"
        assert result.warnings == []
        assert result.error is None

    def test_accepts_prebuilt_page(self, parser_factory, make_page):
        page = make_page(url=LINKEDIN_URL, body=LINKEDIN_BODY)

        result = parser_factory.extract_job_data(LINKEDIN_URL, page=page)

        assert result.parser_used == "LinkedIn"

    def test_soft_warnings_keep_success(self, parser_factory):
        result = parser_factory.extract_job_data(
            "https://example.com/about", html="<p>We make widgets.</p>"
        )

        assert result.success
        assert result.parser_used == "Generic"
        assert result.warnings == ["Company name may be incomplete", "Job title may be incomplete"]

    def test_parser_error_becomes_failed_result(self, make_page, fixed_today):
        broken = SiteParser(
            site_name="Broken",
            url_patterns=("*",),
            validate_page=lambda parser, page: True,
            parse_page=_raise_parse_error,
        )
        parser_factory = ParserFactory(parsers=[broken, GENERIC_PARSER])

        result = parser_factory.extract_job_data(
            "https://acme.com/jobs/1", html="<h1>Engineer</h1>", today=fixed_today
        )

        assert not result.success
        assert result.parser_used == "Broken"
        assert result.error == "selector engine exploded"
        assert result.data.notes == FAILED_EXTRACTION_NOTES
        assert result.data.link_to_job_req == "https://acme.com/jobs/1"
        assert result.data.date_submitted == "2024-03-15"

    def test_empty_html(self, parser_factory):
        result = parser_factory.extract_job_data("https://acme.com/jobs/1", html="")

        assert result.success
        assert result.parser_used == "Generic"

    def test_module_level_shortcut(self):
        result = factory.extract_job_data(LINKEDIN_URL, html=LINKEDIN_BODY)
        assert result.parser_used == "LinkedIn"


class TestValidateJobRecord:
    """Test advisory warnings."""

    def test_plausible_record(self):
        record = JobRecord(
            company_name="Acme",
            role="Engineer",
            salary="$120k/yr",
            link_to_job_req="https://acme.com/jobs/1",
        )
        assert validate_job_record(record) == []

    def test_all_warnings(self):
        record = JobRecord(
            company_name="A", role="QA", salary="Competitive", link_to_job_req="not-a-url"
        )

        assert validate_job_record(record) == [
            "Company name may be incomplete",
            "Job title may be incomplete",
            "Job URL may be invalid",
            "Salary information may be inaccurate",
        ]

    def test_empty_link_is_not_checked(self):
        record = JobRecord(company_name="Acme", role="Engineer", link_to_job_req="")
        assert validate_job_record(record) == []


class TestEmptyJobRecord:
    def test_defaults(self, fixed_today):
        record = empty_job_record("https://acme.com/jobs/1", fixed_today)

        assert record.application_status == "Submitted - Pending Response"
        assert record.rejection_reason == "N/A"
        assert record.notes == FAILED_EXTRACTION_NOTES
        assert record.date_submitted == "2024-03-15"


class TestParserLookup:
    """Test named parser access."""

    def test_supported_sites(self, parser_factory):
        assert parser_factory.get_supported_sites() == [
            "LinkedIn",
            "Indeed",
            "Glassdoor",
            "AngelList",
            "Greenhouse",
            "Lever",
        ]
        assert factory.get_supported_sites() == parser_factory.get_supported_sites()

    def test_get_parser_by_name(self, parser_factory):
        assert parser_factory.get_parser_by_name("Generic") is GENERIC_PARSER

    def test_unknown_name_raises(self, parser_factory):
        with pytest.raises(ParserNotFoundError) as exc_info:
            parser_factory.get_parser_by_name("Monster")
        assert exc_info.value.site_name == "Monster"

    def test_named_parser_on_valid_page(self, parser_factory, make_page):
        page = make_page(url=LINKEDIN_URL, body=LINKEDIN_BODY)

        result = parser_factory.test_parser("LinkedIn", page)

        assert result.success
        assert result.data.company_name == "Acme Corp"

    def test_named_parser_on_invalid_page(self, parser_factory, make_page):
        page = make_page(url="https://acme.com/jobs/1", body=LINKEDIN_BODY)

        result = parser_factory.test_parser("LinkedIn", page)

        assert not result.success
        assert result.error == INVALID_PAGE_ERROR
        assert result.parser_used == "LinkedIn"
        assert result.data.role == "Senior Software Engineer"

    def test_named_parser_unknown(self, parser_factory, make_page):
        result = parser_factory.test_parser("Monster", make_page())

        assert not result.success
        assert "Monster" in result.error
