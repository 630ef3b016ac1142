"""
Fallback parser for pages that no known job board claims.

Unlike the board rows, the generic parser has no trusted selectors. Every
field is produced by pooling candidates from several page locations and
letting the detectors score them.
"""

import logging
from datetime import date
from typing import List, Optional

from job_extractor.detectors.company_detector import CompanyDetector
from job_extractor.detectors.role_detector import RoleDetector
from job_extractor.detectors.salary_detector import SalaryDetector
from job_extractor.logging_config import get_structured_logger
from job_extractor.models import JobRecord
from job_extractor.page import JobPage
from job_extractor.parsers.site_parsers import SiteParser, build_job_record
from job_extractor.settings import get_extraction_settings
from job_extractor.utils.text_utils import first_title_segment

logger = logging.getLogger(__name__)
slogger = get_structured_logger(__name__)

GENERIC_SITE_NAME = "Generic"

GENERIC_TITLE_SELECTORS: List[str] = [
    ".job-title",
    '[class*="job-title"]',
    '[class*="title"]',
    '[data-testid*="title"]',
    '[data-test*="title"]',
]

JOB_PAGE_WORDS = ("job", "career", "position")

JOB_CONTENT_KEYWORDS: List[str] = [
    "job description",
    "responsibilities",
    "requirements",
    "qualifications",
    "skills required",
    "experience",
    "education",
    "benefits",
    "salary",
    "employment type",
    "full time",
    "part time",
    "remote",
    "on-site",
]

JOB_NODE_SELECTOR = '[data-testid*="job"], [class*="job"], [id*="job"]'
APPLY_CONTROL_SELECTOR = 'button:-soup-contains("apply"), a:-soup-contains("apply")'

MIN_GENERIC_SIGNALS = 2


def collect_role_candidates(page: JobPage, max_text_length: int) -> List[str]:
    """
    Gather job-title candidates in priority order.

    First h1, first page-title segment, first generic title selector hit,
    then every h1-h3 shorter than ``max_text_length``.
    """
    candidates: List[str] = []

    h1 = page.select_text(["h1"])
    if h1:
        candidates.append(h1)

    title_head = first_title_segment(page.title)
    if title_head:
        candidates.append(title_head)

    selector_text = page.select_text(GENERIC_TITLE_SELECTORS)
    if selector_text:
        candidates.append(selector_text)

    candidates.extend(text for text in page.texts("h1, h2, h3") if len(text) < max_text_length)
    return candidates


def extract_generic_role(page: JobPage) -> str:
    """Best-scoring role candidate, or the first h1 when none is convincing."""
    settings = get_extraction_settings()
    detector = RoleDetector.from_settings()

    match = detector.extract_best_role(
        collect_role_candidates(page, settings["max_role_text_length"])
    )
    if match and match.score >= settings["min_role_score"]:
        return match.text

    return page.select_text(["h1"])


def job_signals(page: JobPage) -> List[bool]:
    """Evaluate the 11 job-page signals (title words, URL words, DOM and text hints)."""
    lower_title = page.title.lower()

    signals = [word in lower_title for word in JOB_PAGE_WORDS]
    signals += [word in page.url for word in JOB_PAGE_WORDS]
    signals += [
        page.has_any(JOB_NODE_SELECTOR),
        "apply now" in page.text,
        "apply for" in page.text,
        page.has_any(APPLY_CONTROL_SELECTOR),
        any(keyword in page.lower_text for keyword in JOB_CONTENT_KEYWORDS),
    ]
    return signals


def count_job_signals(page: JobPage) -> int:
    return sum(job_signals(page))


def is_valid_generic_page(parser: SiteParser, page: JobPage) -> bool:
    """A page looks like a job posting when at least two signals fire."""
    return count_job_signals(page) >= MIN_GENERIC_SIGNALS


def parse_generic_page(
    parser: SiteParser, page: JobPage, today: Optional[date] = None
) -> JobRecord:
    company_detector = CompanyDetector.from_settings()

    role = extract_generic_role(page)
    company = company_detector.select_best_candidate(company_detector.collect_candidates(page))
    salary = SalaryDetector.from_settings().extract_salary_string(page)

    slogger.field_extracted("company", company, "generic/arbitration")
    slogger.field_extracted("role", role, "generic/role_detector")
    slogger.field_extracted("salary", salary, "generic/salary_detector")

    return build_job_record(
        page,
        company_name=company,
        role=role,
        salary=salary,
        notes="Auto-extracted (please verify)",
        today=today,
    )


GENERIC_PARSER = SiteParser(
    site_name=GENERIC_SITE_NAME,
    url_patterns=("*",),
    validate_page=is_valid_generic_page,
    parse_page=parse_generic_page,
)
