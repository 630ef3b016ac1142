"""
Salary detection and normalization.

Money expressions are matched with an ordered pattern table. Each entry
declares the pay period it implies; "unknown" periods are inferred from the
magnitude of the figure. Every non-overlapping match of every pattern is
collected and the highest-confidence match wins (first found on ties).
"""

import logging
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Pattern

from job_extractor.constants import MAX_CONFIDENCE, MIN_NORMALIZED_SALARY_CONFIDENCE
from job_extractor.detectors.numeric import parse_number
from job_extractor.models import SalaryMatch, SalaryPeriod
from job_extractor.page import JobPage
from job_extractor.settings import get_extraction_settings

logger = logging.getLogger(__name__)

_AMOUNT = r"([\d,]+(?:\.\d{2})?)"
_RANGE_SEP = r"\s*[-\u2013to]+\s*"
_DASH = r"\s*[-\u2013]\s*"
_YEAR = r"(?:year|yr|annually|annual|pa|p\.a\.)"
_HOUR = r"(?:hour|hr|hourly)"
_MONTH = r"(?:month|mo|monthly)"


@dataclass(frozen=True)
class SalaryPattern:
    """
    One row of the salary pattern table.

    Attributes:
        pattern: Compiled regex with one (single) or two (range) amount groups
        period: Pay period implied by the pattern (UNKNOWN means infer)
        thousands: True when the amount groups exclude a trailing "k"
    """

    pattern: Pattern
    period: SalaryPeriod
    thousands: bool = False


def _p(regex: str) -> Pattern:
    return re.compile(regex, re.IGNORECASE)


def _range(unit: str = "") -> str:
    return r"\$\s*" + _AMOUNT + _RANGE_SEP + r"\$?\s*" + _AMOUNT + unit


def _single(unit: str) -> str:
    return r"\$\s*" + _AMOUNT + unit


_PER = r"\s*(?:per\s+)?"

# NOTE: Order matters - most specific forms first
SALARY_PATTERNS: List[SalaryPattern] = [
    # $100,000 - $150,000 per year
    SalaryPattern(_p(_range(_PER + _YEAR)), SalaryPeriod.YEARLY),
    # $100K - $150K
    SalaryPattern(
        _p(r"\$\s*([\d.]+)\s*k" + _RANGE_SEP + r"\$?\s*([\d.]+)\s*k"),
        SalaryPeriod.YEARLY,
        thousands=True,
    ),
    # $100,000 - $150,000 (period inferred from magnitude)
    SalaryPattern(_p(_range()), SalaryPeriod.UNKNOWN),
    # $50 - $75 per hour
    SalaryPattern(_p(_range(_PER + _HOUR)), SalaryPeriod.HOURLY),
    # $5,000 - $8,000 per month
    SalaryPattern(_p(_range(_PER + _MONTH)), SalaryPeriod.MONTHLY),
    # $150,000 per year
    SalaryPattern(_p(_single(_PER + _YEAR)), SalaryPeriod.YEARLY),
    # $150K
    SalaryPattern(_p(r"\$\s*([\d.]+)\s*k(?:\s|$|[,.])"), SalaryPeriod.YEARLY, thousands=True),
    # $50 per hour
    SalaryPattern(_p(_single(_PER + _HOUR)), SalaryPeriod.HOURLY),
    # $5,000 per month
    SalaryPattern(_p(_single(_PER + _MONTH)), SalaryPeriod.MONTHLY),
    # 100,000 - 150,000 per year
    SalaryPattern(
        _p(r"([\d,]+)" + _RANGE_SEP + r"([\d,]+)" + _PER + r"(?:year|yr|annually)"),
        SalaryPeriod.YEARLY,
    ),
    # 100k - 150k
    SalaryPattern(
        _p(r"([\d.]+)\s*k" + _RANGE_SEP + r"([\d.]+)\s*k"), SalaryPeriod.YEARLY, thousands=True
    ),
    # $100K - $150K (Glassdoor Estimate)
    SalaryPattern(
        _p(r"\$\s*([\d.]+)\s*k" + _DASH + r"\$?\s*([\d.]+)\s*k\s*(?:\(.*(?:estimate|est)\))?"),
        SalaryPeriod.YEARLY,
        thousands=True,
    ),
    # $100,000 - $150,000/yr and /hr
    SalaryPattern(
        _p(r"\$\s*" + _AMOUNT + _DASH + r"\$?\s*" + _AMOUNT + r"\s*/\s*(?:yr|year)"),
        SalaryPeriod.YEARLY,
    ),
    SalaryPattern(
        _p(r"\$\s*" + _AMOUNT + _DASH + r"\$?\s*" + _AMOUNT + r"\s*/\s*(?:hr|hour)"),
        SalaryPeriod.HOURLY,
    ),
    # $150,000/yr and $45/hr
    SalaryPattern(_p(_single(r"\s*/\s*(?:yr|year)")), SalaryPeriod.YEARLY),
    SalaryPattern(_p(_single(r"\s*/\s*(?:hr|hour)")), SalaryPeriod.HOURLY),
]

# Loose patterns for plain-text fallbacks on known job boards
FALLBACK_SALARY_PATTERNS: List[Pattern] = [
    _p(
        r"\$[\d,]+(?:\.\d{2})?(?:\s*-\s*\$[\d,]+(?:\.\d{2})?)?"
        r"(?:\s*(?:per\s+)?(?:hour|hr|year|yr|annually|month|mo))?"
    ),
    _p(r"[\d,]+k?(?:\s*-\s*[\d,]+k?)?\s*(?:per\s+)?(?:hour|hr|year|yr|annually|month|mo)"),
]

SALARY_KEYWORDS: List[str] = [
    "salary",
    "compensation",
    "pay",
    "wage",
    "earning",
    "income",
    "base pay",
    "base salary",
    "annual salary",
    "hourly rate",
    "salary range",
    "pay range",
    "compensation range",
]

# Elements dedicated to salary display (+10)
SALARY_SELECTORS: List[str] = [
    '[data-test-id="job-salary-info"]',
    '[data-test="salary-estimate"]',
    '[data-testid="salary"]',
    ".salary-snippet",
    ".salaryEstimate",
    ".SalaryEstimate",
    ".job-details-preferences-and-skills__salary",
    ".jobs-description__salary",
    '*[class*="salary"]',
    '*[class*="Salary"]',
    '*[class*="compensation"]',
    '*[class*="pay-range"]',
]

# Job detail / criteria containers (+5, only when they contain "$")
DETAIL_SELECTORS: List[str] = [
    ".job-criteria__text",
    ".job-details__content",
    ".jobsearch-JobMetadataHeader-item",
    ".JobDetails",
    '[class*="job-detail"]',
]

EXPLICIT_UNIT_TOKENS = ("/yr", "/hr", "per year", "per hour")

SELECTOR_BOOST = 10
KEYWORD_LINE_BOOST = 15
DETAIL_BOOST = 5


def _format_amount(value: float) -> str:
    if value >= 1000:
        thousands = value / 1000
        if thousands == int(thousands):
            return f"${int(thousands)}k"
        # Halves round up: 62250 -> $62.3k
        rounded = (Decimal(str(value)) / 1000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"${rounded}k"
    if value == int(value):
        return f"${int(value)}"
    return f"${value:g}"


def normalize_format(
    min_value: Optional[float], max_value: Optional[float], period: SalaryPeriod
) -> str:
    """
    Render a salary as a compact display string.

    Examples:
        >>> normalize_format(120000, 150000, SalaryPeriod.YEARLY)
        '$120k - $150k/yr'
        >>> normalize_format(45, 45, SalaryPeriod.HOURLY)
        '$45/hr'
    """
    if min_value is None:
        return ""

    if period == SalaryPeriod.HOURLY:
        suffix = "/hr"
    elif period == SalaryPeriod.YEARLY:
        suffix = "/yr"
    else:
        suffix = ""

    if max_value is not None and max_value != min_value:
        return f"{_format_amount(min_value)} - {_format_amount(max_value)}{suffix}"
    return f"{_format_amount(min_value)}{suffix}"


def _infer_period(period: SalaryPeriod, min_value: Optional[float]) -> SalaryPeriod:
    if period != SalaryPeriod.UNKNOWN or min_value is None:
        return period
    if min_value >= 1000:
        return SalaryPeriod.YEARLY
    if min_value < 500:
        return SalaryPeriod.HOURLY
    return SalaryPeriod.UNKNOWN


def _score_match(raw: str, is_range: bool) -> int:
    if any(token in raw for token in EXPLICIT_UNIT_TOKENS):
        return 95
    if "k" in raw.lower():
        return 85
    if is_range:
        return 80
    return 70


def _boost(match: SalaryMatch, amount: int) -> SalaryMatch:
    match.confidence = min(MAX_CONFIDENCE, match.confidence + amount)
    return match


def _best(matches: List[SalaryMatch]) -> Optional[SalaryMatch]:
    if not matches:
        return None
    # max() keeps the first of equal-confidence matches
    return max(matches, key=lambda m: m.confidence)


class SalaryDetector:
    """
    Find and normalize salary expressions in text and documents.

    Usage:
        detector = SalaryDetector()
        match = detector.extract_salary("We pay $120,000 - $150,000 per year")
        match.normalized  # "$120k - $150k/yr"
    """

    def __init__(self, min_normalized_confidence: int = MIN_NORMALIZED_SALARY_CONFIDENCE):
        self.min_normalized_confidence = min_normalized_confidence

    @classmethod
    def from_settings(cls) -> "SalaryDetector":
        settings = get_extraction_settings()
        return cls(min_normalized_confidence=settings["min_normalized_salary_confidence"])

    def extract_salary(self, text: str) -> Optional[SalaryMatch]:
        """
        Find the most confident salary expression in a string.

        Args:
            text: Text to scan

        Returns:
            Best SalaryMatch, or None when nothing matched
        """
        if not text:
            return None

        matches: List[SalaryMatch] = []

        for entry in SALARY_PATTERNS:
            for found in entry.pattern.finditer(text):
                raw = found.group(0)
                first = parse_number(found.group(1))
                second = parse_number(found.group(2)) if entry.pattern.groups > 1 else None

                if entry.thousands:
                    first = first * 1000 if first is not None else None
                    second = second * 1000 if second is not None else None

                min_value = first
                max_value = second if second is not None else first
                period = _infer_period(entry.period, min_value)

                matches.append(
                    SalaryMatch(
                        raw=raw.strip(),
                        normalized=normalize_format(min_value, max_value, period),
                        min_value=min_value,
                        max_value=max_value,
                        period=period,
                        confidence=_score_match(raw, second is not None),
                    )
                )

        return _best(matches)

    def extract_from_document(self, page: JobPage) -> Optional[SalaryMatch]:
        """
        Pool salary candidates from three page zones and return the best.

        Zones:
        - dedicated salary elements (+10)
        - body text lines holding a salary keyword (+15) or a "$"
        - job detail containers holding a "$" (+5)

        Boosted confidence never exceeds 100.

        Args:
            page: Page to scan

        Returns:
            Best SalaryMatch, or None when no zone matched
        """
        candidates: List[SalaryMatch] = []

        for selector in SALARY_SELECTORS:
            for element in page.select(selector):
                match = self.extract_salary(element.get_text())
                if match:
                    candidates.append(_boost(match, SELECTOR_BOOST))

        for line in page.text.split("\n"):
            has_keyword = any(keyword in line.lower() for keyword in SALARY_KEYWORDS)
            if not has_keyword and "$" not in line:
                continue
            match = self.extract_salary(line)
            if match:
                candidates.append(_boost(match, KEYWORD_LINE_BOOST) if has_keyword else match)

        for selector in DETAIL_SELECTORS:
            for element in page.select(selector):
                text = element.get_text()
                if "$" not in text:
                    continue
                match = self.extract_salary(text)
                if match:
                    candidates.append(_boost(match, DETAIL_BOOST))

        best = _best(candidates)
        if best:
            logger.debug(
                f"Salary {best.raw!r} -> {best.normalized!r} "
                f"(confidence {best.confidence}, {len(candidates)} candidates)"
            )
        return best

    def extract_salary_string(self, page: JobPage) -> str:
        """
        Return a display string for the page's salary.

        Confident matches are returned normalized; borderline ones keep the
        text exactly as it appeared on the page.

        Args:
            page: Page to scan

        Returns:
            Normalized or raw salary text, "" when none was found
        """
        match = self.extract_from_document(page)
        if match is None:
            return ""
        if match.confidence >= self.min_normalized_confidence:
            return match.normalized
        return match.raw


def extract_salary_text(text: str) -> str:
    """
    Return the first loose salary-looking substring of a text.

    Used by known-board parsers after the detector and their own selectors
    found nothing.
    """
    if not text:
        return ""
    for pattern in FALLBACK_SALARY_PATTERNS:
        found = pattern.search(text)
        if found:
            return found.group(0)
    return ""
