"""Tests for URL helpers."""

import pytest

from job_extractor.utils.url_utils import get_domain_label, get_hostname, is_valid_url


class TestGetHostname:
    """Test get_hostname."""

    def test_lowercases_host(self):
        assert get_hostname("https://Acme.Greenhouse.io/jobs/1") == "acme.greenhouse.io"

    def test_requires_scheme(self):
        assert get_hostname("acme.com/jobs") is None

    def test_empty(self):
        assert get_hostname("") is None
        assert get_hostname(None) is None

    def test_invalid_port_is_not_an_error(self):
        """urlparse raises ValueError on bracket garbage; treated as unparseable."""
        assert get_hostname("http://[invalid/jobs") is None


class TestIsValidUrl:
    """Test is_valid_url."""

    @pytest.mark.parametrize(
        "url",
        ["https://example.com/job/123", "http://jobs.lever.co/acme/abc"],
    )
    def test_valid(self, url):
        assert is_valid_url(url)

    @pytest.mark.parametrize("url", ["example.com/job/123", "not a url", "", "https://"])
    def test_invalid(self, url):
        assert not is_valid_url(url)


class TestGetDomainLabel:
    """Test get_domain_label."""

    def test_second_level_label(self):
        assert get_domain_label("https://www.example.com/careers") == "example"

    def test_bare_domain(self):
        assert get_domain_label("https://acme.io/") == "acme"

    def test_multi_part_public_suffix(self):
        assert get_domain_label("https://careers.acme.co.uk/jobs/1") == "acme"
        assert get_domain_label("https://jobs.example.com.au/") == "example"

    def test_single_label_host(self):
        assert get_domain_label("http://localhost:8000/") == ""

    def test_unparseable(self):
        assert get_domain_label("garbage") == ""
