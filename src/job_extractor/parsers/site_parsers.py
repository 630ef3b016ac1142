"""
Data-driven registry of site parsers for known job boards.

Each SiteParser row holds the URL patterns and CSS selectors of one job
board, plus the two callables that decide whether a page belongs to the
board and turn it into a JobRecord. Supporting a new board means adding
a row to KNOWN_SITE_PARSERS, not writing a new class.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Sequence, Tuple

from job_extractor.detectors.company_detector import (
    CompanyDetector,
    is_ats_platform_name,
    looks_like_job_title,
)
from job_extractor.detectors.role_detector import RoleDetector
from job_extractor.detectors.salary_detector import SalaryDetector, extract_salary_text
from job_extractor.logging_config import get_structured_logger
from job_extractor.models import JobRecord
from job_extractor.page import JobPage
from job_extractor.utils.text_utils import clean_text, last_title_segment

logger = logging.getLogger(__name__)
slogger = get_structured_logger(__name__)

HEADING_SELECTOR = "h1, h2, h3"


def build_job_record(
    page: JobPage,
    company_name: str,
    role: str,
    salary: str,
    notes: str,
    today: Optional[date] = None,
) -> JobRecord:
    """
    Assemble the record returned for one page.

    Text values pass through clean_text; the link is the page URL.
    ``today`` pins date_submitted (defaults to the current date).
    """
    fields = {
        "company_name": clean_text(company_name),
        "role": clean_text(role),
        "salary": clean_text(salary),
        "link_to_job_req": page.url,
        "notes": notes,
    }
    if today is not None:
        fields["date_submitted"] = today.isoformat()
    return JobRecord(**fields)


def _is_admissible_company(name: str) -> bool:
    """Reject job board / ATS names and job titles."""
    return bool(name) and not is_ats_platform_name(name) and not looks_like_job_title(name)


def _first_admissible(page: JobPage, selectors: Sequence[str]) -> str:
    """First selector text that can be an employer name."""
    for selector in selectors:
        text = page.select_text([selector])
        if _is_admissible_company(text):
            return text
    return ""


def _is_valid_known_page(parser: "SiteParser", page: JobPage) -> bool:
    if not parser.matches_url(page.url):
        return False
    return any(page.has_any(marker) for marker in parser.content_markers if marker)


def _extract_known_company(parser: "SiteParser", page: JobPage) -> Tuple[str, str]:
    """Return (company, strategy) using the board's ordered company strategies."""
    detector = CompanyDetector.from_settings()

    if parser.use_json_ld:
        candidate = detector.extract_from_json_ld(page)
        if candidate:
            return candidate.name, "json_ld"

    name = _first_admissible(page, parser.company_selectors)
    if name:
        return name, "selector"

    name = _first_admissible(page, parser.company_link_selectors)
    if name:
        return name, "link"

    if parser.use_page_title:
        name = last_title_segment(page.title)
        if _is_admissible_company(name):
            return name, "page_title"

    candidate = detector.extract_from_subdomain(page.url)
    if candidate:
        return candidate.name, "subdomain"

    return "", "none"


def _extract_known_role(parser: "SiteParser", page: JobPage) -> Tuple[str, str]:
    role = page.select_text(parser.title_selectors)
    if role:
        return role, "selector"

    headings = [
        text
        for text in page.texts(HEADING_SELECTOR)
        if not any(word in text.lower() for word in parser.heading_exclusions)
    ]
    match = RoleDetector.from_settings().extract_best_role(headings)
    if match:
        return match.text, f"role_detector:{match.match_type.value}"

    return "", "none"


def _extract_known_salary(parser: "SiteParser", page: JobPage) -> Tuple[str, str]:
    salary = SalaryDetector.from_settings().extract_salary_string(page)
    if salary:
        return salary, "salary_detector"

    salary = page.select_text(parser.salary_selectors)
    if salary:
        return salary, "selector"

    salary = extract_salary_text(page.text)
    if salary:
        return salary, "text_fallback"

    return "", "none"


def _parse_known_page(
    parser: "SiteParser", page: JobPage, today: Optional[date] = None
) -> JobRecord:
    company, company_strategy = _extract_known_company(parser, page)
    role, role_strategy = _extract_known_role(parser, page)
    salary, salary_strategy = _extract_known_salary(parser, page)

    slogger.field_extracted("company", company, f"{parser.site_name}/{company_strategy}")
    slogger.field_extracted("role", role, f"{parser.site_name}/{role_strategy}")
    slogger.field_extracted("salary", salary, f"{parser.site_name}/{salary_strategy}")

    return build_job_record(
        page,
        company_name=company,
        role=role,
        salary=salary,
        notes=f"Extracted from {parser.site_name}",
        today=today,
    )


@dataclass(frozen=True)
class SiteParser:
    """
    Defines how to recognize and parse one job board.

    This is a data structure - board-specific behaviour lives in the
    selector lists and flags, and the shared ``validate_page``/``parse_page``
    callables interpret them.
    """

    site_name: str
    # Substrings of the page URL that identify the board ("*" matches any URL)
    url_patterns: Tuple[str, ...]
    title_selectors: Tuple[str, ...] = ()
    company_selectors: Tuple[str, ...] = ()
    # Looser company fallbacks, tried after company_selectors
    company_link_selectors: Tuple[str, ...] = ()
    salary_selectors: Tuple[str, ...] = ()
    # Any marker present (with a URL match) makes the page valid for the board
    content_markers: Tuple[str, ...] = ()
    # Read JSON-LD hiringOrganization before selectors
    use_json_ld: bool = False
    # Fall back to the last page-title segment for the company
    use_page_title: bool = False
    # Headings containing these words are never used as the role
    heading_exclusions: Tuple[str, ...] = ()
    validate_page: Callable[["SiteParser", JobPage], bool] = field(
        default=_is_valid_known_page, compare=False, repr=False
    )
    parse_page: Callable[..., JobRecord] = field(
        default=_parse_known_page, compare=False, repr=False
    )

    def matches_url(self, url: str) -> bool:
        return any(pattern == "*" or pattern in (url or "") for pattern in self.url_patterns)

    def is_valid_job_page(self, page: JobPage) -> bool:
        """Check whether this parser recognizes the page."""
        return self.validate_page(self, page)

    def parse(self, page: JobPage, today: Optional[date] = None) -> JobRecord:
        """Extract a JobRecord from the page. Never returns None."""
        return self.parse_page(self, page, today)


LINKEDIN_PARSER = SiteParser(
    site_name="LinkedIn",
    url_patterns=("linkedin.com/jobs/view", "linkedin.com/jobs/collections"),
    title_selectors=(
        ".topcard__title",
        ".job-details-jobs-unified-top-card__job-title",
        'h1[data-test-id="job-title"]',
        ".jobs-unified-top-card__job-title",
        ".job-details-jobs-unified-top-card__job-title h1",
    ),
    company_selectors=(
        ".topcard__org-name-link",
        ".job-details-jobs-unified-top-card__company-name",
        'a[data-control-name="job_details_topcard_company_url"]',
        ".topcard__flavor--black-link",
        ".jobs-unified-top-card__company-name",
        ".job-details-jobs-unified-top-card__company-name a",
    ),
    company_link_selectors=('a[href*="/company/"]',),
    salary_selectors=(
        '[data-test-id="job-salary-info"]',
        ".job-details-preferences-and-skills__salary",
        ".jobs-description__salary",
    ),
    content_markers=(
        ".topcard__title, .job-details-jobs-unified-top-card__job-title",
        ".topcard__org-name-link, .job-details-jobs-unified-top-card__company-name",
    ),
    heading_exclusions=("linkedin",),
)

INDEED_PARSER = SiteParser(
    site_name="Indeed",
    url_patterns=("indeed.com/viewjob", "indeed.com/jobs/view"),
    title_selectors=(
        ".jobsearch-JobInfoHeader-title",
        'h1[data-automation="job-title"]',
        ".jobsearch-JobInfoHeader-title span[title]",
        "h1.icl-u-xs-mb--xs",
    ),
    company_selectors=(
        '[data-testid="company-name"]',
        '[data-testid="inlineHeader-companyName"]',
        ".jobsearch-InlineCompanyRating",
        ".jobsearch-CompanyInfoContainer a",
        ".jobsearch-JobInfoHeader-subtitle a",
        'a[data-jk][href*="cmp"]',
        ".icl-u-lg-mr--sm",
        '[data-company-name="true"]',
    ),
    company_link_selectors=('a[href*="/cmp/"]',),
    salary_selectors=(
        '.jobsearch-JobMetadataHeader-item:-soup-contains("$")',
        ".salary-snippet",
        '[data-testid="job-salary"]',
        '.icl-u-xs-mr--xs:-soup-contains("$")',
        '.jobsearch-JobDescriptionSection-sectionItem:-soup-contains("$")',
    ),
    content_markers=(
        ".jobsearch-JobInfoHeader-title",
        '[data-testid="company-name"], .jobsearch-InlineCompanyRating',
    ),
    use_json_ld=True,
    heading_exclusions=("indeed",),
)

GLASSDOOR_PARSER = SiteParser(
    site_name="Glassdoor",
    url_patterns=("glassdoor.com/job-listing", "glassdoor.com/jobs/view"),
    title_selectors=(
        '[data-test="job-title"]',
        ".jobTitle",
        ".job-details-header .jobTitle",
        'h1[data-test="job-title"]',
        ".JobDetails_jobTitle__",
    ),
    company_selectors=(
        '[data-test="employer-name"]',
        ".employerName",
        ".job-details-header .employerName",
        'a[data-test="employer-name"]',
        ".JobDetails_companyName__",
        ".EmployerProfile_profileContainer .employerName",
    ),
    company_link_selectors=(".job-details-header a",),
    salary_selectors=(
        '[data-test="salary-estimate"]',
        ".salaryEstimate",
        ".SalaryEstimate",
        '[data-test="detailSalary"]',
        ".JobDetails_salary__",
        ".css-1xe2xww",
    ),
    content_markers=(
        '[data-test="job-title"], .jobTitle',
        '[data-test="employer-name"], .employerName',
    ),
    heading_exclusions=("glassdoor",),
)

ANGELLIST_PARSER = SiteParser(
    site_name="AngelList",
    url_patterns=("angel.co/jobs", "wellfound.com/jobs", "angel.co/company"),
    title_selectors=(
        '[data-test="JobTitle"]',
        ".job-title",
        "h1.job-detail-title",
        ".JobDetail_title__",
        'h1[data-test="job-title"]',
    ),
    company_selectors=(
        '[data-test="StartupLink"]',
        ".company-name",
        ".startup-link",
        'a[href*="/company/"]',
        ".job-detail-header .company",
        ".JobDetail_companyName__",
    ),
    company_link_selectors=('a[href*="/company/"], a[href*="/startup/"]',),
    salary_selectors=(
        '[data-test="salary"]',
        ".salary-range",
        ".compensation",
        '[class*="salary"]',
        '[class*="Salary"]',
    ),
    content_markers=(
        '[data-test="JobTitle"], .job-title, .job-detail-title',
        '[data-test="StartupLink"], .company-name',
    ),
    use_page_title=True,
    heading_exclusions=("angel", "wellfound"),
)

GREENHOUSE_PARSER = SiteParser(
    site_name="Greenhouse",
    url_patterns=("greenhouse.io", "boards.greenhouse.io"),
    title_selectors=(".app-title", "h1", ".job-title", ".header-job-title"),
    company_selectors=(
        ".company-name",
        ".header-company-name",
        'a[href*="/company/"]',
    ),
    salary_selectors=(".salary", ".compensation", '*[class*="salary"]', '*[class*="compensation"]'),
    content_markers=(".app-title, h1",),
    use_page_title=True,
    heading_exclusions=("greenhouse",),
)

LEVER_PARSER = SiteParser(
    site_name="Lever",
    url_patterns=("lever.co", "jobs.lever.co"),
    title_selectors=(".posting-headline h2", ".posting-header h2", "h1", ".job-title"),
    company_selectors=(
        ".company-name",
        ".posting-header .company",
        'a[href*="/company/"]',
        ".posting-headline .company",
    ),
    salary_selectors=(
        ".salary-range",
        ".compensation",
        '*[class*="salary"]',
        '*[class*="compensation"]',
    ),
    content_markers=(".posting-headline, .posting-header",),
    use_page_title=True,
    heading_exclusions=("lever",),
)

# NOTE: Order matters - the first board whose URL and page checks pass wins
KNOWN_SITE_PARSERS: Tuple[SiteParser, ...] = (
    LINKEDIN_PARSER,
    INDEED_PARSER,
    GLASSDOOR_PARSER,
    ANGELLIST_PARSER,
    GREENHOUSE_PARSER,
    LEVER_PARSER,
)
