"""
Data models for job extraction.

JobRecord and ExtractionResult are the pydantic models returned to callers.
The candidate/match dataclasses are transient and live only for one
extraction call.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApplicationStatus(str, Enum):
    """Tracker status of an application. Opaque to the extractor."""

    HAVE_NOT_APPLIED = "Have Not Applied"
    SUBMITTED_PENDING = "Submitted - Pending Response"
    REJECTED = "Rejected"
    INTERVIEWING = "Interviewing"
    OFFER_IN_PROGRESS = "Offer Extended - In Progress"
    REQ_REMOVED = "Job Rec Removed/Deleted"
    GHOSTED = "Ghosted"
    OFFER_DECLINED = "Offer Extended - Did Not Accept"
    REAPPLIED = "Re-Applied With Updates"
    RESCINDED = "Rescinded Application"
    NOT_FOR_ME = "Not For Me"
    FOLLOW_UP_SENT = "Sent Follow Up Email"
    NOT_APPLICABLE = "N/A"


class RejectionReason(str, Enum):
    """Tracker rejection reason. Opaque to the extractor."""

    NONE = ""
    FILLED_INTERNAL = "Filled - Internal"
    NOT_A_GOOD_FIT = 'Generic "Not A Good Fit"'
    NO_NEW_APPLICANTS = "No New Applicants"
    ELIMINATED_ROLE = "Eliminated Role"
    CHANGED_SCOPE = "Changed Job Scope"
    APPLIED_TOO_LATE = "Applied Too Late"
    AUTO_REJECT = "Auto-Reject: No Feedback"
    FIRST_ROUND = "1st Round Rejection"
    MIDDLE_ROUND = "Middle Round Rejection"
    NOT_APPLICABLE = "N/A"
    FINAL_ROUND = "Final Round Rejection"
    NO_RESPONSE = "No Response: Sent Email"
    POST_INTERVIEW = "Post-Interview Follow-up"


class CandidateSource(str, Enum):
    """Signal origin of a company-name candidate."""

    CONTEXT_PATTERN = "context_pattern"
    SELECTOR = "selector"
    META = "meta"
    TITLE = "title"
    FREQUENCY = "frequency"
    URL = "url"


class RoleMatchType(str, Enum):
    """Which role-detection tier produced a match."""

    EXACT_TECH = "exact_tech"
    TECH_PATTERN = "tech_pattern"
    GENERIC_TECH = "generic_tech"
    GENERIC = "generic"


class SalaryPeriod(str, Enum):
    """Pay period of a salary match."""

    HOURLY = "hourly"
    YEARLY = "yearly"
    MONTHLY = "monthly"
    UNKNOWN = "unknown"


@dataclass
class CompanyCandidate:
    """
    A proposed company name before arbitration.

    Attributes:
        name: Candidate company name
        source: Signal that produced the name
        confidence: Heuristic score in [0, 100]
        frequency: Number of times the name was seen (>= 1)
    """

    name: str
    source: CandidateSource
    confidence: int
    frequency: int = 1


@dataclass
class RoleMatch:
    """A scored job-title candidate."""

    text: str
    score: int
    match_type: RoleMatchType


@dataclass
class SalaryMatch:
    """
    A salary expression found in text.

    ``min_value`` is None only when no numeric text parsed; for a single value
    ``max_value`` equals ``min_value``.
    """

    raw: str
    normalized: str
    min_value: Optional[float]
    max_value: Optional[float]
    period: SalaryPeriod
    confidence: int

    @property
    def is_range(self) -> bool:
        return (
            self.min_value is not None
            and self.max_value is not None
            and self.max_value != self.min_value
        )


def _today() -> str:
    return date.today().isoformat()


class JobRecord(BaseModel):
    """
    Structured result of one page extraction.

    The extractor fills company_name, role, salary and notes. The remaining
    bookkeeping fields are defaulted and passed through untouched.
    """

    company_name: str = ""
    role: str = ""
    salary: str = ""
    link_to_job_req: str = Field(description="URL of the page the record was extracted from")
    application_status: ApplicationStatus = Field(default=ApplicationStatus.HAVE_NOT_APPLIED)
    date_submitted: str = Field(default_factory=_today, description="ISO date (YYYY-MM-DD)")
    rejection_reason: RejectionReason = Field(default=RejectionReason.NONE)
    notes: str = ""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "company_name": self.company_name,
            "role": self.role,
            "salary": self.salary,
            "link_to_job_req": self.link_to_job_req,
            "application_status": self.application_status,
            "date_submitted": self.date_submitted,
            "rejection_reason": self.rejection_reason,
            "notes": self.notes,
        }


class ExtractionResult(BaseModel):
    """
    Outcome of a dispatch.

    ``success`` is False only when no parser could run at all; soft validation
    problems are reported in ``warnings`` with ``success`` still True.
    """

    success: bool
    data: JobRecord
    parser_used: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "success": self.success,
            "data": self.data.to_dict(),
            "parser_used": self.parser_used,
            "warnings": list(self.warnings),
            "error": self.error,
        }
