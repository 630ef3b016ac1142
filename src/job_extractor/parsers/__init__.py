"""Site parsers and the dispatcher that picks one per page."""

from job_extractor.parsers.factory import ParserFactory, extract_job_data, get_supported_sites
from job_extractor.parsers.generic import GENERIC_PARSER
from job_extractor.parsers.site_parsers import KNOWN_SITE_PARSERS, SiteParser

__all__ = [
    "ParserFactory",
    "SiteParser",
    "KNOWN_SITE_PARSERS",
    "GENERIC_PARSER",
    "extract_job_data",
    "get_supported_sites",
]
