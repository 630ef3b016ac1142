"""
Company-name detection from competing page signals.

Each ``extract_*`` strategy proposes zero or more CompanyCandidate objects
from one independent signal (structured data, URL, sentence patterns, word
frequency, page structure). ``select_best_candidate`` arbitrates the pooled
candidates with source bonuses and job-title/generic-term penalties, so
that role names and platform chrome do not win over the employer.
"""

import json
import logging
import re
from collections import Counter
from typing import Any, Iterable, List, Optional, Pattern, Sequence, Union

from job_extractor.constants import (
    MAX_CONTEXT_NAME_LENGTH,
    MAX_FREQUENCY_CANDIDATES,
    MIN_COMPANY_SCORE,
    MIN_CONTEXT_NAME_LENGTH,
    MIN_FREQUENCY_OCCURRENCES,
)
from job_extractor.models import CandidateSource, CompanyCandidate
from job_extractor.page import JobPage
from job_extractor.settings import get_company_thresholds
from job_extractor.utils.text_utils import last_title_segment
from job_extractor.utils.url_utils import get_domain_label, get_hostname

logger = logging.getLogger(__name__)

# Names are at most 50 characters
_NAME = r"([A-Z][A-Za-z0-9\s&.,'-]{1,49}?)"

# NOTE: Order matters - earlier patterns claim a name first during de-duplication
CONTEXT_PATTERNS: List[Pattern] = [
    re.compile(r"(?:at|@)\s+" + _NAME + r"(?:\s+is|\s+we|[.,]|$)", re.IGNORECASE),
    re.compile(r"join\s+(?:the\s+)?" + _NAME + r"\s+(?:team|family)", re.IGNORECASE),
    re.compile(_NAME + r"\s+is\s+(?:hiring|looking|seeking)", re.IGNORECASE),
    re.compile(r"work(?:ing)?\s+(?:at|for)\s+" + _NAME + r"(?:\s|[.,]|$)", re.IGNORECASE),
    re.compile(r"careers?\s+(?:at|with)\s+([A-Z][A-Za-z0-9\s&.,'-]+)", re.IGNORECASE),
    re.compile(_NAME + r"\s+careers?", re.IGNORECASE),
    re.compile(r"about\s+" + _NAME + r"(?:\s|:)", re.IGNORECASE),
    re.compile(_NAME + r"\s+(?:jobs?|openings?|positions?)", re.IGNORECASE),
]

# Runs of 1-4 capitalized words; case-sensitive on purpose
CAPITALIZED_PHRASE_PATTERN = re.compile(r"\b([A-Z][a-z]*(?:\s+[A-Z][a-z]*){0,3})\b")

_TRAILING_FILLER_PATTERN = re.compile(
    r"\s+(is|are|was|team|jobs?|careers?|Inc\.?|LLC|Ltd\.?|Corp\.?)$", re.IGNORECASE
)

STOP_WORDS = frozenset(
    [
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
        "be", "have", "has", "had", "do", "does", "did", "will", "would",
        "could", "should", "may", "might", "must", "shall", "can", "need",
        "job", "jobs", "career", "careers", "position", "positions", "opening",
        "apply", "application", "hiring", "looking", "seeking", "join",
        "team", "work", "working", "opportunity", "opportunities",
        "software", "engineer", "developer", "senior", "junior", "manager",
        "remote", "hybrid", "onsite", "full-time", "part-time", "contract",
        "about", "us", "our", "we", "you", "your", "this", "that", "these",
        "new", "all", "more", "view", "see", "find", "search", "home", "back",
        "next", "previous", "page", "site", "website", "company", "companies",
    ]
)

# Section headings and page chrome that are never company names
NEGATIVE_INDICATORS: List[str] = [
    "description",
    "requirements",
    "qualifications",
    "responsibilities",
    "benefits",
    "location",
    "salary",
    "experience",
    "skills",
    "education",
    "overview",
    "summary",
    "details",
    "information",
    "posted",
    "date",
    "apply now",
    "submit",
    "sign in",
    "log in",
    "register",
    "similar jobs",
]

# Job boards and applicant tracking systems - hosts, not employers
ATS_PLATFORMS = frozenset(
    [
        "greenhouse", "lever", "workday", "icims", "taleo", "jobvite",
        "smartrecruiters", "breezy", "jazz", "jazzhr", "bamboohr", "bamboo",
        "ashby", "rippling", "gusto", "paylocity", "paycom", "adp",
        "successfactors", "oracle", "workable", "recruitee", "pinpoint",
        "teamtailor", "personio", "deel", "remote", "oyster", "lattice",
        "linkedin", "indeed", "glassdoor", "ziprecruiter", "monster",
        "careerbuilder", "dice", "angellist", "wellfound", "ycombinator",
        "workatastartup", "hired", "triplebyte", "angel", "powered by",
    ]
)

# <company>.<ats-host> and jobs.<company>.com
ATS_SUBDOMAIN_PATTERNS: List[Pattern] = [
    re.compile(r"^([a-z0-9-]+)\.greenhouse\.io$", re.IGNORECASE),
    re.compile(r"^([a-z0-9-]+)\.lever\.co$", re.IGNORECASE),
    re.compile(r"^([a-z0-9-]+)\.ashbyhq\.com$", re.IGNORECASE),
    re.compile(r"^([a-z0-9-]+)\.workable\.com$", re.IGNORECASE),
    re.compile(r"^([a-z0-9-]+)\.recruitee\.com$", re.IGNORECASE),
    re.compile(r"^([a-z0-9-]+)\.breezy\.hr$", re.IGNORECASE),
    re.compile(r"^([a-z0-9-]+)\.bamboohr\.com$", re.IGNORECASE),
    re.compile(r"^([a-z0-9-]+)\.pinpointhq\.com$", re.IGNORECASE),
    re.compile(r"^([a-z0-9-]+)\.teamtailor\.com$", re.IGNORECASE),
    re.compile(r"^jobs\.([a-z0-9-]+)\.com$", re.IGNORECASE),
]

GENERIC_SUBDOMAINS = frozenset(["www", "jobs", "careers", "boards", "apply"])

GENERIC_COMPANY_SELECTORS: List[str] = [
    ".company",
    ".company-name",
    '[class*="company"]',
    'a[href*="/company/"]',
    '[data-testid*="company"]',
]

META_SELECTORS: List[str] = [
    'meta[property="og:site_name"]',
    'meta[name="author"]',
    'meta[name="publisher"]',
]

BREADCRUMB_SELECTOR = '[aria-label="breadcrumb"] a, .breadcrumb a, nav a'
LOGO_SELECTOR = 'img[alt*="logo"], img[src*="logo"], img[class*="logo"]'

# Arbitration weights
SOURCE_BONUS = {
    CandidateSource.CONTEXT_PATTERN: 20,
    CandidateSource.SELECTOR: 15,
    CandidateSource.META: 10,
    CandidateSource.TITLE: 5,
    CandidateSource.URL: 0,
}
FREQUENCY_SOURCE_MULTIPLIER = 3
MAX_REPETITION_BONUS = 20
SHORT_NAME_PENALTY = 20
JOB_TITLE_PENALTY = 50
GENERIC_TERM_PENALTY = 40

JOB_TITLE_WORDS: List[str] = [
    "engineer",
    "developer",
    "manager",
    "director",
    "analyst",
    "specialist",
]
GENERIC_TERMS: List[str] = ["software", "remote", "hybrid", "full time", "part time"]
_JOB_TITLE_PATTERN = re.compile(
    r"\b(?:" + "|".join(JOB_TITLE_WORDS) + r")s?\b", re.IGNORECASE
)

_LOGO_WORD_PATTERN = re.compile(r"logo", re.IGNORECASE)


def is_ats_platform_name(name: Optional[str]) -> bool:
    """
    Check whether a name is a job board / ATS rather than an employer.

    Matches the platform name itself or "<platform> logo" / "<platform> careers".

    Examples:
        >>> is_ats_platform_name("Greenhouse")
        True
        >>> is_ats_platform_name("LinkedIn Careers")
        True
        >>> is_ats_platform_name("Acme")
        False
    """
    if not name:
        return False

    lower = name.lower().strip()
    if lower in ATS_PLATFORMS:
        return True

    for suffix in (" logo", " careers"):
        if lower.endswith(suffix) and lower[: -len(suffix)] in ATS_PLATFORMS:
            return True
    return False


def looks_like_job_title(name: Optional[str]) -> bool:
    """
    Check whether a name reads as a job title ("Senior Software Engineer").

    Only whole words count, so "Acme Engineering" is still a company.
    """
    if not name:
        return False
    return bool(_JOB_TITLE_PATTERN.search(name))


def clean_company_name(name: str) -> str:
    """
    Tidy a name captured by a context pattern.

    Strips one trailing filler word or legal suffix (is, team, jobs, Inc.,
    LLC, ...) and a trailing comma or period. Returns "" when the result is
    only stop words or contains a negative indicator.
    """
    cleaned = _TRAILING_FILLER_PATTERN.sub("", (name or "").strip())
    cleaned = re.sub(r"[,.]$", "", cleaned).strip()

    words = cleaned.lower().split()
    if all(word in STOP_WORDS for word in words):
        return ""

    lower = cleaned.lower()
    if any(indicator in lower for indicator in NEGATIVE_INDICATORS):
        return ""

    return cleaned


def _humanize_subdomain(subdomain: str) -> str:
    # my-company -> My Company
    return " ".join(word[:1].upper() + word[1:] for word in subdomain.split("-"))


def _iter_json_ld_items(data: Any) -> Iterable[dict]:
    """Yield every object of a JSON-LD payload (single object, list or @graph)."""
    if isinstance(data, list):
        for item in data:
            yield from _iter_json_ld_items(item)
    elif isinstance(data, dict):
        yield data
        graph = data.get("@graph")
        if isinstance(graph, list):
            for item in graph:
                yield from _iter_json_ld_items(item)


def _has_type(item: dict, type_name: str) -> bool:
    item_type = item.get("@type")
    if isinstance(item_type, list):
        return type_name in item_type
    return item_type == type_name


def _organization_name(org: Any) -> str:
    if isinstance(org, str):
        return org.strip()
    if isinstance(org, dict):
        name = org.get("name")
        return name.strip() if isinstance(name, str) else ""
    if isinstance(org, list) and org:
        return _organization_name(org[0])
    return ""


class CompanyDetector:
    """
    Collect and arbitrate company-name candidates.

    Strategies never raise on malformed input; they simply contribute
    nothing. Thresholds are instance attributes so they can come from
    settings.

    Usage:
        detector = CompanyDetector.from_settings()
        name = detector.select_best_candidate(detector.collect_candidates(page))
    """

    def __init__(
        self,
        min_frequency_occurrences: int = MIN_FREQUENCY_OCCURRENCES,
        max_frequency_candidates: int = MAX_FREQUENCY_CANDIDATES,
        min_company_score: int = MIN_COMPANY_SCORE,
    ):
        self.min_frequency_occurrences = min_frequency_occurrences
        self.max_frequency_candidates = max_frequency_candidates
        self.min_company_score = min_company_score

    @classmethod
    def from_settings(cls) -> "CompanyDetector":
        """Build a detector with thresholds from ``job_extractor.settings``."""
        return cls(**get_company_thresholds())

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def extract_from_json_ld(self, page: JobPage) -> Optional[CompanyCandidate]:
        """
        Read the employer from embedded JSON-LD.

        JobPosting.hiringOrganization scores 95 and Organization.name 90.
        The first admissible name in document order wins.
        """
        for script in page.select('script[type="application/ld+json"]'):
            try:
                data = json.loads(script.string or script.get_text() or "{}")
            except json.JSONDecodeError as e:
                logger.debug(f"Skipping malformed JSON-LD block: {e}")
                continue

            for item in _iter_json_ld_items(data):
                if _has_type(item, "JobPosting"):
                    name = _organization_name(item.get("hiringOrganization"))
                    if name and not is_ats_platform_name(name):
                        return CompanyCandidate(name, CandidateSource.META, 95)

                if _has_type(item, "Organization"):
                    name = _organization_name(item.get("name"))
                    if name and not is_ats_platform_name(name):
                        return CompanyCandidate(name, CandidateSource.META, 90)

        return None

    def extract_from_subdomain(self, url: str) -> Optional[CompanyCandidate]:
        """Turn ``acme-labs.greenhouse.io`` style hosts into "Acme Labs" (75)."""
        hostname = get_hostname(url)
        if not hostname:
            return None

        for pattern in ATS_SUBDOMAIN_PATTERNS:
            match = pattern.match(hostname)
            if not match:
                continue

            subdomain = match.group(1).lower()
            if subdomain in GENERIC_SUBDOMAINS:
                continue

            name = _humanize_subdomain(subdomain)
            if not is_ats_platform_name(name):
                return CompanyCandidate(name, CandidateSource.URL, 75)

        return None

    def extract_from_context_patterns(self, text: str) -> List[CompanyCandidate]:
        """
        Find names in phrases like "Join the Acme team" or "Acme is hiring".

        Every match of every pattern is considered. Names are cleaned, must
        be 2-50 characters long and are de-duplicated case-insensitively.
        """
        candidates: List[CompanyCandidate] = []
        seen = set()

        if not text:
            return candidates

        for pattern in CONTEXT_PATTERNS:
            for match in pattern.finditer(text):
                if not match.group(1):
                    continue

                name = clean_company_name(match.group(1))
                if not MIN_CONTEXT_NAME_LENGTH <= len(name) <= MAX_CONTEXT_NAME_LENGTH:
                    continue
                if name.lower() in seen:
                    continue

                seen.add(name.lower())
                candidates.append(CompanyCandidate(name, CandidateSource.CONTEXT_PATTERN, 85))

        return candidates

    def extract_by_frequency(self, source: Union[JobPage, str]) -> List[CompanyCandidate]:
        """
        Count repeated capitalized phrases in the page text.

        Phrases seen at least ``min_frequency_occurrences`` times become
        candidates with confidence min(95, 50 + 5 * frequency), most
        frequent first, capped at ``max_frequency_candidates``.

        Args:
            source: Page (its body text is scanned) or raw text

        Returns:
            Frequency candidates
        """
        text = source.text if isinstance(source, JobPage) else (source or "")
        counts: Counter = Counter()

        for match in CAPITALIZED_PHRASE_PATTERN.finditer(text):
            phrase = match.group(1).strip()
            words = phrase.split()

            if not words or all(word.lower() in STOP_WORDS for word in words):
                continue
            if len(phrase) < 2 or len(phrase) > 40:
                continue

            lower = phrase.lower()
            if any(indicator in lower for indicator in NEGATIVE_INDICATORS):
                continue
            if len(words) > 4:
                continue

            counts[phrase] += 1

        candidates = [
            CompanyCandidate(
                name=name,
                source=CandidateSource.FREQUENCY,
                confidence=min(95, 50 + frequency * 5),
                frequency=frequency,
            )
            for name, frequency in counts.items()
            if frequency >= self.min_frequency_occurrences
        ]
        # sorted() is stable: equal frequencies keep first-seen order
        candidates = sorted(candidates, key=lambda c: c.frequency, reverse=True)
        return candidates[: self.max_frequency_candidates]

    def extract_from_selectors(
        self, page: JobPage, selectors: Sequence[str] = GENERIC_COMPANY_SELECTORS
    ) -> Optional[CompanyCandidate]:
        """First non-empty element text among company selectors (90)."""
        name = page.select_text(selectors)
        if name and not is_ats_platform_name(name):
            return CompanyCandidate(name, CandidateSource.SELECTOR, 90)
        return None

    def extract_from_meta_tags(self, page: JobPage) -> Optional[CompanyCandidate]:
        """og:site_name, author or publisher meta content (80)."""
        name = page.meta_content(META_SELECTORS)
        if name and not is_ats_platform_name(name):
            return CompanyCandidate(name, CandidateSource.META, 80)
        return None

    def extract_from_page_title(self, page: JobPage) -> Optional[CompanyCandidate]:
        """Last segment of a "Role | Company" page title (70)."""
        name = last_title_segment(page.title)
        if name and not is_ats_platform_name(name):
            return CompanyCandidate(name, CandidateSource.TITLE, 70)
        return None

    def extract_from_breadcrumbs(self, page: JobPage) -> Optional[CompanyCandidate]:
        """Text of the last breadcrumb / nav link (60)."""
        links = page.select(BREADCRUMB_SELECTOR)
        if not links:
            return None

        name = links[-1].get_text().strip()
        if name and not is_ats_platform_name(name):
            return CompanyCandidate(name, CandidateSource.SELECTOR, 60)
        return None

    def extract_from_logo_alt(self, page: JobPage) -> Optional[CompanyCandidate]:
        """Logo image alt text with the word "logo" removed (50)."""
        for image in page.select(LOGO_SELECTOR):
            alt = image.get("alt") or ""
            if "logo" not in alt.lower():
                continue

            name = _LOGO_WORD_PATTERN.sub("", alt).strip()
            if len(name) > 1 and not is_ats_platform_name(name):
                return CompanyCandidate(name, CandidateSource.SELECTOR, 50)

        return None

    def extract_from_url_domain(self, url: str) -> Optional[CompanyCandidate]:
        """Registrable domain label, capitalized (30)."""
        label = get_domain_label(url)
        if not label:
            return None

        name = label[:1].upper() + label[1:]
        if is_ats_platform_name(name):
            return None
        return CompanyCandidate(name, CandidateSource.URL, 30)

    def collect_candidates(self, page: JobPage) -> List[CompanyCandidate]:
        """
        Pool every strategy's candidates for one page.

        Order: structured data, subdomain, selectors, meta, title, context
        patterns, frequency, breadcrumbs, logo, URL domain. Arbitration
        breaks score ties by this order.
        """
        candidates: List[CompanyCandidate] = []

        for candidate in (
            self.extract_from_json_ld(page),
            self.extract_from_subdomain(page.url),
            self.extract_from_selectors(page),
            self.extract_from_meta_tags(page),
            self.extract_from_page_title(page),
        ):
            if candidate:
                candidates.append(candidate)

        candidates.extend(self.extract_from_context_patterns(page.text))
        candidates.extend(self.extract_by_frequency(page))

        for candidate in (
            self.extract_from_breadcrumbs(page),
            self.extract_from_logo_alt(page),
            self.extract_from_url_domain(page.url),
        ):
            if candidate:
                candidates.append(candidate)

        logger.debug(f"Collected {len(candidates)} company candidates for {page.url}")
        return candidates

    # ------------------------------------------------------------------
    # Arbitration
    # ------------------------------------------------------------------

    def score_candidate(self, candidate: CompanyCandidate) -> int:
        """Final arbitration score of one candidate."""
        score = candidate.confidence

        if candidate.source == CandidateSource.FREQUENCY:
            score += candidate.frequency * FREQUENCY_SOURCE_MULTIPLIER
        else:
            score += SOURCE_BONUS.get(candidate.source, 0)

        if candidate.frequency > 1:
            score += min(MAX_REPETITION_BONUS, candidate.frequency * 2)

        if len(candidate.name) < 3:
            score -= SHORT_NAME_PENALTY

        lower = candidate.name.lower()
        if any(word in lower for word in JOB_TITLE_WORDS):
            score -= JOB_TITLE_PENALTY
        if any(term in lower for term in GENERIC_TERMS):
            score -= GENERIC_TERM_PENALTY

        return score

    def select_best_candidate(self, candidates: Iterable[CompanyCandidate]) -> str:
        """
        Pick the employer name from pooled candidates.

        Platform names are discarded, the rest are scored, and the top
        name is returned when its score reaches ``min_company_score``.
        Equal scores keep pool order.

        Args:
            candidates: Pooled candidates from any strategies

        Returns:
            Winning company name, or "" when nothing is convincing enough
        """
        scored = [
            (candidate, self.score_candidate(candidate))
            for candidate in candidates
            if not is_ats_platform_name(candidate.name)
        ]
        if not scored:
            return ""

        scored.sort(key=lambda pair: pair[1], reverse=True)
        best, best_score = scored[0]

        if best_score >= self.min_company_score:
            logger.debug(
                f"Selected company {best.name!r} ({best.source.value}, score {best_score}) "
                f"from {len(scored)} candidates"
            )
            return best.name

        logger.debug(f"No company candidate reached {self.min_company_score} (best {best_score})")
        return ""
