"""Numeric literal parsing for salary figures."""

import re
from typing import Optional

# Leading float literal, parsed the lenient way ("150." -> 150, "1.2.3" -> 1.2)
_FLOAT_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)")


def parse_number(text: Optional[str]) -> Optional[float]:
    """
    Parse a salary figure such as "120,000", "150k" or "45.50".

    Commas and whitespace are stripped first. A trailing "k" (any case)
    multiplies the value by 1000.

    Args:
        text: Captured numeric text

    Returns:
        Parsed value, or None when the text holds no leading number

    Examples:
        >>> parse_number("120,000")
        120000.0
        >>> parse_number("1.5K")
        1500.0
        >>> parse_number("abc") is None
        True
    """
    if not text:
        return None

    cleaned = re.sub(r"[,\s]", "", text)

    multiplier = 1
    if cleaned.lower().endswith("k"):
        cleaned = cleaned[:-1]
        multiplier = 1000

    match = _FLOAT_PREFIX.match(cleaned)
    if not match:
        return None

    return float(match.group(0)) * multiplier
