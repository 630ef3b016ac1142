"""Job-title classification with tiered confidence scores.

Tiers are checked in order and the first hit wins:

1. exact tech phrase            -> 100
2. tech regex pattern           -> 90
3. generic tech keyword         -> 70 (40 next to a non-tech indicator)
4. generic role keyword         -> 30 (skipped next to a non-tech indicator)

Text carrying a non-tech indicator and nothing else scores a floor of 10.
Tiers 1 and 2 are evaluated even when a non-tech indicator is present.
"""

import logging
import re
from typing import Iterable, List, Optional, Pattern

from job_extractor.constants import MAX_ROLE_TEXT_LENGTH
from job_extractor.models import RoleMatch, RoleMatchType
from job_extractor.settings import get_extraction_settings

logger = logging.getLogger(__name__)

EXACT_TECH_ROLES: List[str] = [
    "software engineer",
    "software developer",
    "full stack developer",
    "fullstack developer",
    "full-stack developer",
    "frontend developer",
    "front-end developer",
    "frontend engineer",
    "front-end engineer",
    "backend developer",
    "back-end developer",
    "backend engineer",
    "back-end engineer",
    "devops engineer",
    "site reliability engineer",
    "sre",
    "platform engineer",
    "cloud engineer",
    "data engineer",
    "ml engineer",
    "machine learning engineer",
    "ai engineer",
    "mobile developer",
    "mobile engineer",
    "ios developer",
    "ios engineer",
    "android developer",
    "android engineer",
    "web developer",
    "systems engineer",
    "infrastructure engineer",
    "security engineer",
    "qa engineer",
    "test engineer",
    "automation engineer",
    "solutions architect",
    "technical architect",
    "software architect",
    "data scientist",
    "research scientist",
    "applied scientist",
    "research engineer",
]

# NOTE: Order matters - the first pattern to match decides the tier
TECH_PATTERNS: List[Pattern] = [
    re.compile(r"\b(sde|swe|sre)\s*[iI1-3]{1,3}\b", re.IGNORECASE),  # SDE II, SWE1
    re.compile(r"\bstaff\s+(software\s+)?engineer", re.IGNORECASE),
    re.compile(r"\bprincipal\s+(software\s+)?engineer", re.IGNORECASE),
    re.compile(r"\bsenior\s+(software\s+)?engineer", re.IGNORECASE),
    re.compile(r"\bjunior\s+(software\s+)?engineer", re.IGNORECASE),
    re.compile(r"\b(sr\.|sr)\s+(software\s+)?engineer", re.IGNORECASE),
    re.compile(
        r"\b(software|backend|frontend|full[- ]?stack)\s+engineer(ing)?\s+(intern|new\s+grad)",
        re.IGNORECASE,
    ),
    re.compile(
        r"\bengineer\s*[-\u2013]\s*(backend|frontend|platform|infrastructure|data)",
        re.IGNORECASE,
    ),  # Engineer - Backend
    re.compile(r"\b(l[3-7]|e[3-7]|ic[1-5])\s+(software\s+)?engineer", re.IGNORECASE),  # L4 Engineer
    re.compile(r"\bnew\s+grad\s+(software\s+)?engineer", re.IGNORECASE),
    re.compile(r"\bentry[- ]level\s+(software\s+)?engineer", re.IGNORECASE),
    re.compile(r"\b(backend|frontend|fullstack|full-stack)\s+engineer", re.IGNORECASE),
    re.compile(
        r"\b(python|java|golang|rust|node|react|typescript)\s+(developer|engineer)",
        re.IGNORECASE,
    ),
    re.compile(r"\bdev\s*ops\b", re.IGNORECASE),
    re.compile(r"\bsoftware\s+development\s+engineer", re.IGNORECASE),
]

GENERIC_TECH_KEYWORDS: List[str] = ["engineer", "developer", "architect", "programmer", "coder"]

GENERIC_ROLE_KEYWORDS: List[str] = [
    "manager",
    "analyst",
    "specialist",
    "lead",
    "director",
    "consultant",
    "coordinator",
]

NON_TECH_INDICATORS: List[str] = [
    "sales",
    "marketing",
    "hr",
    "human resources",
    "recruiting",
    "recruiter",
    "talent acquisition",
    "account manager",
    "customer success",
    "support specialist",
    "office manager",
    "administrative",
    "financial analyst",
    "operations manager",
    "project manager",
    "product manager",  # tech-adjacent, but not an engineering role
]


class RoleDetector:
    """
    Score short strings as job-title candidates.

    The detector holds no per-call state; one instance can be shared.
    """

    def __init__(self, max_text_length: int = MAX_ROLE_TEXT_LENGTH):
        self.max_text_length = max_text_length

    @classmethod
    def from_settings(cls) -> "RoleDetector":
        return cls(max_text_length=get_extraction_settings()["max_role_text_length"])

    def _has_non_tech_indicator(self, lower_text: str) -> bool:
        for indicator in NON_TECH_INDICATORS:
            if indicator in lower_text:
                # A strong tech signal overrides the indicator
                if not any(role in lower_text for role in EXACT_TECH_ROLES):
                    return True
        return False

    def score_role(self, text: str) -> Optional[RoleMatch]:
        """
        Classify one string as a job title.

        Args:
            text: Candidate title text

        Returns:
            RoleMatch with the tier score, or None when the text is too long
            or matches nothing
        """
        if text is None or len(text) > self.max_text_length:
            return None

        lower_text = text.lower().strip()
        non_tech = self._has_non_tech_indicator(lower_text)

        for role in EXACT_TECH_ROLES:
            if role in lower_text:
                return RoleMatch(text=text, score=100, match_type=RoleMatchType.EXACT_TECH)

        for pattern in TECH_PATTERNS:
            if pattern.search(lower_text):
                return RoleMatch(text=text, score=90, match_type=RoleMatchType.TECH_PATTERN)

        for keyword in GENERIC_TECH_KEYWORDS:
            if keyword in lower_text:
                score = 40 if non_tech else 70
                return RoleMatch(text=text, score=score, match_type=RoleMatchType.GENERIC_TECH)

        if not non_tech:
            for keyword in GENERIC_ROLE_KEYWORDS:
                if keyword in lower_text:
                    return RoleMatch(text=text, score=30, match_type=RoleMatchType.GENERIC)
            return None

        return RoleMatch(text=text, score=10, match_type=RoleMatchType.GENERIC)

    def extract_best_role(self, candidates: Iterable[str]) -> Optional[RoleMatch]:
        """
        Pick the highest-scoring title among candidates.

        Empty and whitespace-only candidates are skipped. Ties keep the
        first candidate seen.

        Args:
            candidates: Candidate strings in priority order

        Returns:
            Best RoleMatch, or None when no candidate scored
        """
        best: Optional[RoleMatch] = None

        for candidate in candidates:
            if not candidate or not candidate.strip():
                continue

            match = self.score_role(candidate.strip())
            if match and (best is None or match.score > best.score):
                best = match

        if best:
            logger.debug(
                f"Best role candidate {best.text!r} ({best.match_type.value}, {best.score})"
            )
        return best
