"""Token description extraction from raw HTML.

Candidates are tried from most to least authoritative, stopping at the first
acceptable one:

1. **Meta tags** (``description``, ``og:description``,
   ``twitter:description``).  Meta content is written by the page author, so
   the UI-chrome filter is skipped for it (``lenient=True``).
2. **Structural selectors**: elements whose class or test id mentions
   "description" or "about", and paragraphs inside ``<main>``.
3. **Leaf text blocks**: ``p``/``div``/``span`` elements without element
   children, in document order, that also read like a sentence.

Every step uses :func:`is_valid_description`.  Relative timestamps ("3 hours
ago") are always rejected because token pages are full of them.

No candidate is not an error: :func:`extract_description` returns ``None``.
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Tag

from pumpscope.scraper.config import (
    DEFAULT_MAX_DESCRIPTION_LENGTH,
    DEFAULT_MIN_DESCRIPTION_LENGTH,
    EXACT_EXCLUSIONS,
    META_SELECTORS,
    STRUCTURAL_SELECTORS,
    TEXT_BLOCK_EXCLUSIONS,
    TEXT_BLOCK_TAGS,
    TIME_PATTERNS,
    UI_EXCLUSIONS,
)

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_DECIMAL_RE = re.compile(r"^\d+[.,]\d+")
_SINGLE_WORD_RE = re.compile(r"^\w+\s*$")


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def is_relative_time(text: str) -> bool:
    """Return ``True`` if *text* is or contains a relative timestamp."""
    return any(pattern.search(text) for pattern in TIME_PATTERNS)


def is_valid_description(
    text: str | None,
    lenient: bool,
    *,
    min_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH,
    max_length: int = DEFAULT_MAX_DESCRIPTION_LENGTH,
) -> bool:
    """Return ``True`` if *text* is acceptable as a token description.

    Args:
        text: Candidate text.
        lenient: Skip the UI-chrome substring filter.  Used for meta tag
            content.
        min_length: Shortest accepted length in characters.
        max_length: Longest accepted length in characters.

    Returns:
        ``False`` for empty or out-of-bounds text, relative timestamps, exact
        placeholder phrases, and (unless lenient) text containing UI chrome.
    """
    if not text or len(text) < min_length or len(text) > max_length:
        return False

    if is_relative_time(text):
        return False

    lower_text = text.lower()
    if lower_text in EXACT_EXCLUSIONS:
        return False

    if not lenient and any(phrase in lower_text for phrase in UI_EXCLUSIONS):
        return False

    return True


def is_valid_text_block(
    text: str | None,
    *,
    min_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH,
    max_length: int = DEFAULT_MAX_DESCRIPTION_LENGTH,
) -> bool:
    """Stricter check for free text found outside meta tags and selectors.

    On top of :func:`is_valid_description` (non-lenient) the text must have
    more than two words, must not start with a decimal number or be a single
    word, and must not mention market data or refresh prompts.
    """
    if not is_valid_description(
        text, False, min_length=min_length, max_length=max_length
    ):
        return False

    text = text or ""
    lower_text = text.lower()
    return (
        not _LEADING_DECIMAL_RE.match(text)
        and not _SINGLE_WORD_RE.match(text)
        and len(text.split(" ")) > 2
        and not any(phrase in lower_text for phrase in TEXT_BLOCK_EXCLUSIONS)
    )


# ---------------------------------------------------------------------------
# Cascade steps
# ---------------------------------------------------------------------------


def _from_meta_tags(soup: BeautifulSoup, min_length: int, max_length: int) -> str | None:
    for selector in META_SELECTORS:
        tag = soup.select_one(selector)
        if tag is None:
            continue
        content = tag.get("content")
        if not isinstance(content, str):
            continue
        text = normalize_text(content)
        if is_valid_description(text, True, min_length=min_length, max_length=max_length):
            return text
    return None


def _from_structural_selectors(
    soup: BeautifulSoup, min_length: int, max_length: int
) -> str | None:
    for selector in STRUCTURAL_SELECTORS:
        for element in soup.select(selector):
            text = normalize_text(element.get_text())
            if is_valid_description(text, False, min_length=min_length, max_length=max_length):
                return text
    return None


def _has_element_children(element: Tag) -> bool:
    return element.find(True, recursive=False) is not None


def _from_text_blocks(soup: BeautifulSoup, min_length: int, max_length: int) -> str | None:
    for element in soup.find_all(TEXT_BLOCK_TAGS):
        if _has_element_children(element):
            continue
        text = normalize_text(element.get_text())
        if is_valid_text_block(text, min_length=min_length, max_length=max_length):
            return text
    return None


_CASCADE = (_from_meta_tags, _from_structural_selectors, _from_text_blocks)


# ---------------------------------------------------------------------------
# Public extraction function
# ---------------------------------------------------------------------------


def extract_description(
    html: str,
    *,
    min_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH,
    max_length: int = DEFAULT_MAX_DESCRIPTION_LENGTH,
) -> str | None:
    """Extract a human-readable token description from a token page.

    Deterministic: the same input always yields the same output.

    Args:
        html: Raw HTML of the token page (may be partial or malformed).
        min_length: Shortest accepted description.
        max_length: Longest accepted description.

    Returns:
        The normalized description, or ``None`` if no candidate passed the
        filters.
    """
    if not html:
        return None

    try:
        soup = BeautifulSoup(html, "html.parser")
        for step in _CASCADE:
            found = step(soup, min_length, max_length)
            if found is not None:
                return found
    except Exception as exc:  # noqa: BLE001
        logger.warning("scraper: HTML parsing failed: %s", exc)
    return None
