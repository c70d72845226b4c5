from __future__ import annotations

import pytest

from services.extracted_content import ExtractionMethod
from services.fallback_synthesizer import synthesize, title_from_url


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://example.com/blog/10-budget_meal-tips.html", "10 Budget Meal Tips"),
        ("https://example.com/recipes/slow-cooker-chili/", "Slow Cooker Chili"),
        ("https://example.com/NEWS/market-update.aspx", "Market Update"),
        ("https://example.com/article/", "Article from example.com"),
        ("https://www.example.com", "Article from www.example.com"),
        ("not a url", "Article Content"),
        ("/relative/path-only", "Article Content"),
    ],
)
def test_title_from_url(url, expected):
    assert title_from_url(url) == expected


def test_synthesize_builds_intelligent_fallback_from_url():
    extracted = synthesize("https://www.example.com/blog/easy-weeknight-dinners")

    assert extracted.extraction_method is ExtractionMethod.intelligent_fallback
    assert extracted.title == "Easy Weeknight Dinners"
    assert extracted.description == "Valuable content from example.com about easy weeknight dinners"
    assert extracted.content.startswith(
        "This article from example.com covers important topics related to easy weeknight dinners."
    )
    assert extracted.headings == ("Introduction", "Key Points", "Conclusion")
    assert extracted.url == "https://www.example.com/blog/easy-weeknight-dinners"


def test_synthesize_returns_static_record_for_unparsable_url():
    extracted = synthesize("definitely not a url")

    assert extracted.extraction_method is ExtractionMethod.basic_fallback
    assert extracted.title == "Article Content for Pinterest"
    assert extracted.headings == ("Main Content",)
    assert extracted.url == "definitely not a url"


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com",
        "http://example.com/a/b/c?x=1#frag",
        "https://[::1",
        "mailto:someone@example.com",
        "ftp://files.example.com/archive.php",
        "   ",
        "?",
    ],
)
def test_synthesize_always_has_title_and_content(url):
    extracted = synthesize(url)

    assert extracted.title
    assert extracted.content
    assert len(extracted.title) <= 200
    assert len(extracted.content) <= 2000
