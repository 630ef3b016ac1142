"""Tests for salary detection and normalization."""

import pytest

from job_extractor.detectors.numeric import parse_number
from job_extractor.detectors.salary_detector import (
    SalaryDetector,
    extract_salary_text,
    normalize_format,
)
from job_extractor.models import SalaryPeriod


@pytest.fixture
def detector():
    return SalaryDetector()


class TestNormalizeFormat:
    """Test display formatting."""

    def test_yearly_range(self):
        assert normalize_format(120000, 150000, SalaryPeriod.YEARLY) == "$120k - $150k/yr"

    def test_single_hourly(self):
        assert normalize_format(45, 45, SalaryPeriod.HOURLY) == "$45/hr"

    def test_fractional_thousands(self):
        assert normalize_format(82500, 82500, SalaryPeriod.YEARLY) == "$82.5k/yr"

    def test_half_tenths_round_up(self):
        assert normalize_format(62250, 80000, SalaryPeriod.YEARLY) == "$62.3k - $80k/yr"
        assert normalize_format(62350, 62350, SalaryPeriod.UNKNOWN) == "$62.4k"

    @pytest.mark.parametrize("display", ["$120k", "$82.5k", "$45"])
    def test_display_amount_parses_back(self, display):
        value = parse_number(display.lstrip("$"))

        assert normalize_format(value, value, SalaryPeriod.UNKNOWN) == display

    def test_unknown_period_has_no_suffix(self):
        assert normalize_format(600, 700, SalaryPeriod.UNKNOWN) == "$600 - $700"

    def test_monthly_has_no_suffix(self):
        assert normalize_format(5000, 5000, SalaryPeriod.MONTHLY) == "$5k"

    def test_missing_minimum(self):
        assert normalize_format(None, None, SalaryPeriod.YEARLY) == ""


class TestExtractSalary:
    """Test matching against a single string."""

    def test_yearly_range_with_unit(self, detector):
        match = detector.extract_salary("$120,000 - $150,000 per year")

        assert match.min_value == 120000
        assert match.max_value == 150000
        assert match.period == SalaryPeriod.YEARLY
        assert match.confidence == 95
        assert match.normalized == "$120k - $150k/yr"
        assert match.is_range

    def test_hourly_slash_unit(self, detector):
        match = detector.extract_salary("Rate: $45/hr")

        assert match.min_value == 45
        assert match.max_value == 45
        assert match.period == SalaryPeriod.HOURLY
        assert match.confidence == 95
        assert match.normalized == "$45/hr"
        assert not match.is_range

    def test_k_range_multiplies_by_thousand(self, detector):
        match = detector.extract_salary("$120K - $150K")

        assert match.min_value == 120000
        assert match.max_value == 150000
        assert match.confidence == 85
        assert match.normalized == "$120k - $150k/yr"

    def test_bare_range_infers_yearly_from_magnitude(self, detector):
        match = detector.extract_salary("$80,000 - $100,000")

        assert match.period == SalaryPeriod.YEARLY
        assert match.confidence == 80
        assert match.normalized == "$80k - $100k/yr"

    def test_bare_range_infers_hourly_from_magnitude(self, detector):
        match = detector.extract_salary("$50 - $75")

        assert match.period == SalaryPeriod.HOURLY
        assert match.normalized == "$50 - $75/hr"

    def test_bare_range_in_between_stays_unknown(self, detector):
        match = detector.extract_salary("$600 - $700")

        assert match.period == SalaryPeriod.UNKNOWN
        assert match.normalized == "$600 - $700"

    def test_single_value_without_explicit_unit_scores_70(self, detector):
        match = detector.extract_salary("Up to $150,000 annually")

        assert match.raw == "$150,000 annually"
        assert match.confidence == 70
        assert match.period == SalaryPeriod.YEARLY

    def test_single_monthly_value(self, detector):
        match = detector.extract_salary("$5,000 per month")

        assert match.period == SalaryPeriod.MONTHLY
        assert match.min_value == 5000

    def test_no_salary(self, detector):
        assert detector.extract_salary("Competitive compensation") is None
        assert detector.extract_salary("") is None

    def test_highest_confidence_wins(self, detector):
        match = detector.extract_salary("Bonus $5,000 annually. Base $120,000 - $150,000 per year")
        assert match.normalized == "$120k - $150k/yr"

    def test_repeated_calls_agree(self, detector):
        text = "Base $120,000 - $150,000 per year, bonus $5k annually"

        first = detector.extract_salary(text)

        assert first is not None
        assert detector.extract_salary(text) == first


class TestExtractFromDocument:
    """Test the three document zones."""

    def test_salary_element_boost_is_clamped(self, detector, make_page):
        page = make_page(body='<div class="salary">$120,000 - $150,000 per year</div>')

        match = detector.extract_from_document(page)

        assert match.confidence == 100
        assert match.normalized == "$120k - $150k/yr"

    def test_keyword_line_is_boosted(self, detector, make_page):
        page = make_page(body="<p>Base salary: $100,000 - $130,000</p>")

        match = detector.extract_from_document(page)

        assert match.confidence == 95
        assert match.normalized == "$100k - $130k/yr"

    def test_detail_container_with_dollar_sign(self, detector, make_page):
        page = make_page(body='<div class="job-details__content">$40 - $50</div>')

        match = detector.extract_from_document(page)

        assert match.confidence == 85
        assert match.normalized == "$40 - $50/hr"

    def test_lines_without_keyword_or_dollar_are_ignored(self, detector, make_page):
        page = make_page(body="<p>100k - 150k</p>")
        assert detector.extract_from_document(page) is None

    def test_no_salary_anywhere(self, detector, make_page):
        page = make_page(body="<h1>Software Engineer</h1><p>Great team.</p>")
        assert detector.extract_from_document(page) is None


class TestExtractSalaryString:
    """Test choosing between normalized and raw display."""

    def test_confident_match_is_normalized(self, detector, make_page):
        page = make_page(body="<p>$120,000 - $150,000 per year</p>")
        assert detector.extract_salary_string(page) == "$120k - $150k/yr"

    def test_borderline_match_keeps_raw_text(self, detector, make_page):
        page = make_page(body="<p>Up to $150,000 annually</p>")
        assert detector.extract_salary_string(page) == "$150,000 annually"

    def test_nothing_found(self, detector, make_page):
        assert detector.extract_salary_string(make_page(body="<p>No numbers</p>")) == ""

    def test_threshold_from_settings(self, tmp_path, monkeypatch, make_page):
        config = tmp_path / "extraction.yaml"
        config.write_text("min_normalized_salary_confidence: 60\n")
        monkeypatch.setenv("JOB_EXTRACTOR_CONFIG", str(config))

        detector = SalaryDetector.from_settings()
        page = make_page(body="<p>Up to $150,000 annually</p>")

        assert detector.extract_salary_string(page) == "$150k/yr"


class TestExtractSalaryText:
    """Test the loose plain-text fallback."""

    def test_dollar_range(self):
        assert extract_salary_text("Pay is $90,000 - $110,000 a year") == "$90,000 - $110,000"

    def test_k_with_unit(self):
        assert extract_salary_text("Earn 120k per year") == "120k per year"

    def test_nothing(self):
        assert extract_salary_text("No pay info") == ""
        assert extract_salary_text("") == ""
