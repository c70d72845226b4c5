from __future__ import annotations

import httpx
import pytest
from conftest import make_extracted
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from routers.pins import GENERIC_FAILURE
from services.content_generator import PinContentGeneratorService
from services.extracted_content import ExtractedContent, ExtractionMethod
from services.pin_pipeline import PinPipeline

URL = "https://example.com/blog/10-budget-meal-prep-tips"


class StubExtractor:
    async def extract(self, url: str):
        return make_extracted(url=url)


class ExplodingExtractor:
    async def extract(self, url: str):
        raise RuntimeError("unexpected")


def _client(extractor) -> TestClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("AI service must not be called without a key")

    pipeline = PinPipeline(
        extractor=extractor,
        ai_generator=PinContentGeneratorService(api_key=None, transport=httpx.MockTransport(handler)),
    )
    return TestClient(create_app(settings=Settings(anthropic_api_key=None), pipeline=pipeline))


@pytest.fixture
def client() -> TestClient:
    return _client(StubExtractor())


def test_generate_returns_template_content_with_camel_case_keys(client):
    response = client.post("/api/v1/pins/generate", json={"url": URL, "niche": "Food & Recipes"})

    assert response.status_code == 200
    body = response.json()
    assert body["aiUsed"] is False
    assert body["extractionMethod"] == "direct-scrape"
    assert len(body["content"]["pinTitles"]) == 6
    assert body["content"]["pinTitles"][0] == {
        "title": "10 budget meal Tips That Actually Work",
        "strategy": "Number Hook + Authority",
    }
    assert set(body["content"]["hashtags"]) == {"primary", "niche", "longtail"}
    assert body["content"]["hashtags"]["niche"] == ["#food", "#recipes", "#cooking", "#foodie"]
    assert len(body["content"]["strategicInsights"]) == 5
    assert body["plainText"].startswith("PIN TITLES:\n1. 10 budget meal Tips That Actually Work\n")
    assert "\n\nHASHTAGS:\n#budget #meal #pinterest #viral #food" in body["plainText"]
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_blank_niche_is_treated_as_unset(client):
    response = client.post("/api/v1/pins/generate", json={"url": URL, "niche": "", "insights": ""})

    assert response.status_code == 200
    assert response.json()["content"]["hashtags"]["niche"] == ["#tips", "#guide", "#howto", "#advice"]


@pytest.mark.parametrize(
    "payload",
    [
        {"url": "not a url"},
        {"url": ""},
        {"url": URL, "niche": "Astrology"},
        {},
    ],
)
def test_invalid_requests_are_rejected(client, payload):
    response = client.post("/api/v1/pins/generate", json=payload)

    assert response.status_code == 422


def test_unexpected_failure_returns_generic_message():
    response = _client(ExplodingExtractor()).post("/api/v1/pins/generate", json={"url": URL})

    assert response.status_code == 500
    assert response.json() == {"detail": GENERIC_FAILURE}


def test_extract_returns_extracted_content(client):
    response = client.post("/api/v1/pins/extract", json={"url": URL})

    assert response.status_code == 200
    body = response.json()
    assert body["url"] == URL
    assert body["extractionMethod"] == "direct-scrape"
    assert body["headings"] == ["Plan your week", "Cook in bulk"]


def test_niches_lists_all_thirteen_labels(client):
    response = client.get("/api/v1/niches")

    assert response.status_code == 200
    niches = response.json()["niches"]
    assert len(niches) == 13
    assert niches[0] == "Health & Wellness"
    assert "Animals & Pets" in niches


def test_extract_returns_at_most_ten_headings():
    class ManyHeadingsExtractor:
        async def extract(self, url: str):
            return ExtractedContent(
                title="Budget Meal Prep",
                description="",
                content="Meal prep helps you save money.",
                headings=tuple(f"Step {number}" for number in range(1, 13)),
                url=url,
                extraction_method=ExtractionMethod.direct_scrape,
            )

    response = _client(ManyHeadingsExtractor()).post("/api/v1/pins/extract", json={"url": URL})

    assert response.status_code == 200
    assert response.json()["headings"] == [f"Step {number}" for number in range(1, 11)]
