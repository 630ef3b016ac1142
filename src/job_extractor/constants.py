"""Extraction-wide constants.

These are the default thresholds used by the detectors and the dispatcher.
Most of them can be overridden at runtime through ``job_extractor.settings``.
"""

# Role detection
MAX_ROLE_TEXT_LENGTH = 150  # Longer text is never treated as a job title
MIN_ROLE_SCORE = 30  # Generic parser accepts a detected role at or above this score

# Company detection
MIN_FREQUENCY_OCCURRENCES = 3  # Capitalized phrase must repeat this often to be a candidate
MAX_FREQUENCY_CANDIDATES = 10  # Keep only the most frequent phrases
MIN_COMPANY_SCORE = 40  # Final arbitration score needed to accept a company name
MIN_CONTEXT_NAME_LENGTH = 2
MAX_CONTEXT_NAME_LENGTH = 50

# Salary detection
MIN_NORMALIZED_SALARY_CONFIDENCE = 80  # Below this the raw matched text is displayed
MAX_CONFIDENCE = 100

# Validation
MIN_COMPANY_NAME_LENGTH = 2
MIN_ROLE_LENGTH = 3

# Fetching (CLI only)
DEFAULT_REQUEST_TIMEOUT = 30  # HTTP request timeout in seconds
