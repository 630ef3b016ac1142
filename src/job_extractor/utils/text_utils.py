"""Text cleanup helpers for values lifted out of job pages."""

import re
from typing import Optional

# Typographic characters that leak out of page markup
_QUOTE_REPLACEMENTS = {
    "\u201c": '"',  # Left double quotation mark
    "\u201d": '"',  # Right double quotation mark
    "\u2018": "'",  # Left single quotation mark
    "\u2019": "'",  # Right single quotation mark
    "\xa0": " ",  # Non-breaking space
    "\u200b": "",  # Zero-width space
    "\ufeff": "",  # BOM
}

# Separators used between "Role - Company" style page title segments
TITLE_SEPARATOR_PATTERN = re.compile(r"[|\-\u2013]")


def clean_text(text: Optional[str]) -> str:
    """
    Collapse whitespace and normalize quote characters.

    Args:
        text: Raw text content of an element

    Returns:
        Single-line, trimmed text ("" for None)

    Examples:
        >>> clean_text("  Senior\\n  Engineer ")
        'Senior Engineer'
        >>> clean_text("\\u201cAcme\\u201d")
        '"Acme"'
    """
    if not text:
        return ""

    for old, new in _QUOTE_REPLACEMENTS.items():
        text = text.replace(old, new)

    return re.sub(r"\s+", " ", text).strip()


def split_title(title: str):
    """Split a page title on |, - and en dash separators."""
    return TITLE_SEPARATOR_PATTERN.split(title or "")


def first_title_segment(title: str) -> str:
    """Return the leading segment of a page title ("Role - Company" -> "Role")."""
    parts = split_title(title)
    return parts[0].strip() if parts else ""


def last_title_segment(title: str) -> str:
    """
    Return the trailing segment of a page title when it has separators.

    A title without any separator yields "" because the whole title is
    rarely just the company name.
    """
    parts = split_title(title)
    if len(parts) > 1:
        return parts[-1].strip()
    return ""


def contains_any(text: str, keywords) -> bool:
    """Case-insensitive substring test against a keyword list."""
    lower = (text or "").lower()
    return any(keyword in lower for keyword in keywords)
