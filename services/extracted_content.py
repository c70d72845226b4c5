from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

TITLE_MAX_CHARS = 200
DESCRIPTION_MAX_CHARS = 300
CONTENT_MAX_CHARS = 2000
HEADING_MAX_CHARS = 200
MAX_HEADINGS = 10


class ExtractionMethod(str, Enum):
    direct_scrape = "direct-scrape"
    proxy_scrape = "proxy-scrape"
    intelligent_fallback = "intelligent-fallback"
    basic_fallback = "basic-fallback"


@dataclass(frozen=True)
class ExtractedContent:
    """Normalized article text; every field is capped on construction."""

    title: str
    description: str
    content: str
    url: str
    extraction_method: ExtractionMethod
    headings: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "title", self.title[:TITLE_MAX_CHARS])
        object.__setattr__(self, "description", self.description[:DESCRIPTION_MAX_CHARS])
        object.__setattr__(self, "content", self.content[:CONTENT_MAX_CHARS])
        object.__setattr__(
            self,
            "headings",
            tuple(heading[:HEADING_MAX_CHARS] for heading in self.headings[:MAX_HEADINGS]),
        )
