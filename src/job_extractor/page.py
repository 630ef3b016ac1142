"""Read-only view of a loaded job page (URL + parsed DOM + text)."""

import logging
from functools import cached_property
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

logger = logging.getLogger(__name__)


class JobPage:
    """
    A job page as handed to the extractor.

    The parsed tree is never modified. Selector helpers swallow selector
    syntax errors so a bad selector only means "nothing found".

    Usage:
        page = JobPage("https://acme.com/jobs/1", html)
        page.select_text([".job-title", "h1"])
    """

    def __init__(self, url: str, html: Optional[str] = None, soup: Optional[BeautifulSoup] = None):
        """
        Initialize the page view.

        Args:
            url: Location of the page
            html: Raw HTML (ignored when soup is given)
            soup: Already-parsed document
        """
        self.url = url or ""
        self.soup = soup if soup is not None else BeautifulSoup(html or "", "html.parser")

    @cached_property
    def title(self) -> str:
        """Document title, or "" when missing."""
        if self.soup.title is None:
            return ""
        return self.soup.title.get_text().strip()

    @cached_property
    def text(self) -> str:
        """Concatenated text content of the body (whole document when there is no body)."""
        root = self.soup.body or self.soup
        return root.get_text()

    @cached_property
    def lower_text(self) -> str:
        return self.text.lower()

    def select(self, selector: str) -> List[Tag]:
        """Return all elements matching a CSS selector ([] on invalid syntax)."""
        try:
            return self.soup.select(selector)
        except (SelectorSyntaxError, NotImplementedError, ValueError) as e:
            logger.debug(f"Skipping selector {selector!r}: {e}")
            return []

    def select_one(self, selector: str) -> Optional[Tag]:
        """Return the first element matching a CSS selector, or None."""
        try:
            return self.soup.select_one(selector)
        except (SelectorSyntaxError, NotImplementedError, ValueError) as e:
            logger.debug(f"Skipping selector {selector!r}: {e}")
            return None

    def has_any(self, selector: str) -> bool:
        return self.select_one(selector) is not None

    def select_text(self, selectors: Sequence[str]) -> str:
        """
        Return the stripped text of the first selector hit with non-empty text.

        Args:
            selectors: CSS selectors in priority order

        Returns:
            Element text, or "" when no selector yields text
        """
        for selector in selectors:
            element = self.select_one(selector)
            if element is None:
                continue
            text = element.get_text().strip()
            if text:
                return text
        return ""

    def meta_content(self, selectors: Sequence[str]) -> str:
        """Return the first non-empty ``content`` attribute among meta selectors."""
        for selector in selectors:
            element = self.select_one(selector)
            if element is None:
                continue
            content = (element.get("content") or "").strip()
            if content:
                return content
        return ""

    def texts(self, selector: str) -> List[str]:
        """Stripped text of every element matching a selector, empties dropped."""
        results = []
        for element in self.select(selector):
            text = element.get_text().strip()
            if text:
                results.append(text)
        return results
