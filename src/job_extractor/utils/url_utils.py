"""Utilities for inspecting page URLs."""

import logging
from typing import Optional
from urllib.parse import urlparse

import tldextract

logger = logging.getLogger(__name__)

# Bundled public suffix snapshot only; extraction never touches the network
_extract_domain = tldextract.TLDExtract(suffix_list_urls=())


def get_hostname(url: str) -> Optional[str]:
    """
    Return the lower-cased hostname of a URL.

    Args:
        url: Absolute URL

    Returns:
        Hostname, or None when the URL cannot be parsed or has no host

    Examples:
        >>> get_hostname("https://Acme.Greenhouse.io/jobs/1")
        'acme.greenhouse.io'
        >>> get_hostname("not a url") is None
        True
    """
    if not url:
        return None

    try:
        parsed = urlparse(url.strip())
        hostname = parsed.hostname
    except ValueError as e:
        logger.debug(f"Unparseable URL '{url}': {e}")
        return None

    if not parsed.scheme or not hostname:
        return None
    return hostname


def is_valid_url(url: str) -> bool:
    """
    Check that a URL parses with both a scheme and a host.

    Examples:
        >>> is_valid_url("https://example.com/job/123")
        True
        >>> is_valid_url("example.com/job/123")
        False
    """
    return get_hostname(url) is not None


def get_domain_label(url: str) -> str:
    """
    Return the registrable domain label of a URL's host.

    Multi-part public suffixes (co.uk, com.au) are recognized, so
    ``careers.acme.co.uk`` yields ``acme``.

    Examples:
        >>> get_domain_label("https://www.example.com/careers")
        'example'
        >>> get_domain_label("https://careers.acme.co.uk/jobs/1")
        'acme'
        >>> get_domain_label("https://localhost/")
        ''
    """
    hostname = get_hostname(url)
    if not hostname:
        return ""

    ext = _extract_domain(hostname)
    if ext.domain and ext.suffix:
        return ext.domain
    return ""
