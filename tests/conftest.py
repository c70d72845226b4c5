from __future__ import annotations

import httpx
import pytest

from services.extracted_content import ExtractedContent, ExtractionMethod

ARTICLE_URL = "https://www.example.com/blog/10-budget-meal-prep-tips.html"

ARTICLE_HTML = """
<html>
  <head>
    <title>10 Budget Meal Prep Tips for Beginners</title>
    <meta name="description" content="Cook once, eat all week without overspending.">
    <meta property="og:title" content="OG title that should lose">
  </head>
  <body>
    <nav>Home | Recipes | About</nav>
    <article>
      <header><h1>10 Budget Meal Prep Tips</h1></header>
      <script>var tracking = "do not include me";</script>
      <h2>Plan your week</h2>
      <p>Planning meals ahead helps you save money and reduce food waste every single week.</p>
      <h2>Cook in bulk</h2>
      <p>Batch cooking grains and beans lets you improve variety while keeping costs down.</p>
      <p>Portion everything into containers on Sunday so weekday lunches take seconds to grab.</p>
      <aside>Sponsored: buy our containers</aside>
    </article>
    <footer>Copyright Example</footer>
  </body>
</html>
"""


def make_extracted(
    title: str = "10 Budget Meal Prep Tips for Beginners",
    content: str = "Meal prep helps you save money. It can also improve your diet. Boost your energy.",
    description: str = "",
    url: str = ARTICLE_URL,
) -> ExtractedContent:
    return ExtractedContent(
        title=title,
        description=description,
        content=content,
        headings=("Plan your week", "Cook in bulk"),
        url=url,
        extraction_method=ExtractionMethod.direct_scrape,
    )


@pytest.fixture
def article_html() -> str:
    return ARTICLE_HTML


@pytest.fixture
def extracted() -> ExtractedContent:
    return make_extracted()


REPLY_DESCRIPTION = (
    "Meal prep on a budget is easier than it looks. Plan five dinners, shop once, and cook "
    "grains and proteins in bulk so weeknights take minutes. Save this pin and try the plan "
    "this Sunday to cut your grocery bill without eating the same thing every night."
)


def reply_payload(**overrides) -> dict:
    """A valid pin content object as the text-generation service would write it."""
    payload = {
        "pinTitles": [
            {"title": f"Budget Meal Prep Idea {index}", "strategy": "Number Hook"} for index in range(5)
        ],
        "descriptions": [{"description": REPLY_DESCRIPTION, "strategy": "Benefit + CTA"} for _ in range(5)],
        "hashtags": {
            "primary": ["#mealprep", "#budget"],
            "niche": ["#food", "#recipes"],
            "longtail": ["#budgetmealprep"],
        },
        "strategicInsights": ["Led with numbers because the article is a listicle"],
    }
    payload.update(overrides)
    return payload


def anthropic_response(text: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"content": [{"type": "text", "text": text}]})
