"""Tests for the extraction result models."""

from datetime import date

import pytest
from pydantic import ValidationError

from job_extractor.models import (
    ApplicationStatus,
    ExtractionResult,
    JobRecord,
    RejectionReason,
    SalaryMatch,
    SalaryPeriod,
)


class TestJobRecord:
    def test_defaults(self):
        record = JobRecord(link_to_job_req="https://acme.com/jobs/1")

        assert record.company_name == ""
        assert record.application_status == ApplicationStatus.HAVE_NOT_APPLIED.value
        assert record.rejection_reason == ""
        assert record.date_submitted == date.today().isoformat()

    def test_link_is_required(self):
        with pytest.raises(ValidationError):
            JobRecord()

    def test_enum_values_are_serialized(self):
        record = JobRecord(
            link_to_job_req="https://acme.com/jobs/1",
            application_status=ApplicationStatus.INTERVIEWING,
            rejection_reason=RejectionReason.FIRST_ROUND,
        )

        data = record.to_dict()

        assert data["application_status"] == "Interviewing"
        assert data["rejection_reason"] == "1st Round Rejection"

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError):
            JobRecord(link_to_job_req="https://acme.com", application_status="Maybe")


class TestExtractionResult:
    def test_to_dict(self):
        result = ExtractionResult(
            success=True,
            data=JobRecord(link_to_job_req="https://acme.com/jobs/1", role="Engineer"),
            parser_used="Generic",
            warnings=["Company name may be incomplete"],
        )

        data = result.to_dict()

        assert data["success"] is True
        assert data["data"]["role"] == "Engineer"
        assert data["parser_used"] == "Generic"
        assert data["warnings"] == ["Company name may be incomplete"]
        assert data["error"] is None


class TestSalaryMatch:
    def test_single_value_is_not_a_range(self):
        match = SalaryMatch("$45/hr", "$45/hr", 45, 45, SalaryPeriod.HOURLY, 95)
        assert not match.is_range

    def test_range(self):
        match = SalaryMatch("$1 - $2", "$1 - $2/hr", 1, 2, SalaryPeriod.HOURLY, 80)
        assert match.is_range
