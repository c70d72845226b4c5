from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

from services.extracted_content import ExtractedContent, ExtractionMethod

logger = logging.getLogger(__name__)

PLACEHOLDER_HEADINGS = ("Introduction", "Key Points", "Conclusion")

_SECTION_PREFIX = re.compile(r"^/(blog|article|post|news)/", re.IGNORECASE)
_PAGE_EXTENSION = re.compile(r"\.(html|php|aspx?)$", re.IGNORECASE)
_WORD_START = re.compile(r"\b\w")


class UnparsableURLError(ValueError):
    """Raised when a URL has no scheme or host to derive content from."""


def hostname_of(url: str) -> str:
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError as exc:
        raise UnparsableURLError(url) from exc
    if not parts.scheme or not hostname:
        raise UnparsableURLError(url)
    return hostname


def _slug_title(url: str) -> str:
    path = urlsplit(url).path
    path = _SECTION_PREFIX.sub("", path)
    path = _PAGE_EXTENSION.sub("", path)
    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        return ""
    words = re.sub(r"[-_]", " ", segments[-1])
    return _WORD_START.sub(lambda match: match.group(0).upper(), words).strip()


def title_from_url(url: str) -> str:
    """Derive a readable title from the last path segment of ``url``.

    ``/blog/10-budget_meal-tips.html`` becomes ``10 Budget Meal Tips``. URLs
    without a usable path fall back to ``Article from <hostname>`` and URLs
    that cannot be parsed at all to ``Article Content``.
    """
    try:
        hostname = hostname_of(url)
    except UnparsableURLError:
        return "Article Content"
    return _slug_title(url) or f"Article from {hostname}"


def synthesize(url: str) -> ExtractedContent:
    """Build plausible article content from the URL alone. Never raises."""
    try:
        domain = hostname_of(url).removeprefix("www.")
    except UnparsableURLError:
        logger.warning("Unable to parse %r, using basic fallback content", url)
        return ExtractedContent(
            title="Article Content for Pinterest",
            description="Content optimized for Pinterest sharing",
            content=(
                "This content has been prepared for Pinterest optimization with engaging "
                "titles, descriptions, and strategic hashtags."
            ),
            headings=("Main Content",),
            url=url,
            extraction_method=ExtractionMethod.basic_fallback,
        )

    title = title_from_url(url)
    topic = title.lower()
    content = (
        f"This article from {domain} covers important topics related to {topic}. "
        "The content provides valuable insights and practical information that can be "
        "optimized for Pinterest sharing. Key topics likely include tips, strategies, and "
        "actionable advice for readers interested in this subject."
    )
    return ExtractedContent(
        title=title,
        description=f"Valuable content from {domain} about {topic}",
        content=content,
        headings=PLACEHOLDER_HEADINGS,
        url=url,
        extraction_method=ExtractionMethod.intelligent_fallback,
    )
