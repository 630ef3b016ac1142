"""Custom exceptions for the job extractor.

Detectors never raise for missing or malformed page content; these exceptions
cover configuration problems and the outer shell (dispatch lookups and page
fetching).
"""


class JobExtractorError(Exception):
    """Base exception for all job extractor errors.

    All custom exceptions in this module inherit from this base class,
    making it easy to catch all extractor-specific errors.
    """

    pass


class ConfigurationError(JobExtractorError):
    """Raised when there's an error in configuration.

    Examples:
    - Settings file cannot be read or parsed
    - Unknown setting keys
    - Non-integer threshold values
    """

    pass


class ParserNotFoundError(JobExtractorError):
    """Raised when a site parser is requested by a name that does not exist.

    Attributes:
        site_name: The requested parser name
    """

    def __init__(self, site_name: str):
        self.site_name = site_name
        super().__init__(f"Parser for {site_name} not found")


class PageFetchError(JobExtractorError):
    """Raised when the command-line shell cannot download a page.

    Attributes:
        url: The URL that failed
        reason: Description of the failure
    """

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")
