from __future__ import annotations

import json
import logging

import httpx
from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter
from pydantic import ValidationError

from services.extracted_content import ExtractedContent
from services.pin_content import GeneratedContent, Niche

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """
You are a Pinterest marketing strategist and content optimization expert. Analyze the article
below and create high-performing Pinterest pin variants.

ARTICLE CONTENT:
Title: {title}
Description: {description}
Content: {content}
Headings: {headings}
Niche: {niche}
Additional Insights: {insights}

ANALYSIS FRAMEWORK:
1. Identify the main topic, subtopics, benefits, actionable steps, target audience, data points,
   authority markers, emotional hooks and pain points the article addresses.
2. Apply Pinterest optimization: proven pin formats for this content type, search keyword
   patterns, seasonal timing, gaps in competing content, and text-overlay readability.
3. Write variants using these formulas:
   Curiosity: "The [Number] [Topic] That [Outcome]", "[Number] [Topic] [Authority] Don't Want You
   to Know", "What Happens When You [Action] - The Results Will [Emotion]"
   Benefit-driven: "[Number] Ways to [Desired Outcome] in [Timeframe]", "How to [Achievement]
   Without [Common Obstacle]", "[Process] That Actually Works (Proven Results)"
   Problem-solution: "Stop [Bad Habit] - Try This [Solution] Instead", "Why [Common Approach]
   Fails (And What Works Better)", "[Number] Mistakes Everyone Makes With [Topic]"
   Authority and social proof: "What [Number]+ [People/Experts] Learned About [Topic]",
   "[Expert/Study] Reveals [Surprising Finding]", "The [Topic] Method That Changed [Number] Lives"

OUTPUT REQUIREMENTS:
- pinTitles: 5-8 variants, at most 100 characters each, each testing a different
  psychological trigger; use numbers for listicles.
- descriptions: 5-8 variants, between 200 and 500 characters each, keyword-rich, benefit-focused,
  with a clear call to action.
- hashtags: primary (high traffic), niche (category specific) and longtail (precise targeting)
  groups; every tag starts with # and contains no spaces.
- strategicInsights: the strategic decisions behind the variants.
- Every variant must accurately represent the article; no clickbait that does not deliver.

Respond with JSON in exactly this shape:
{{
  "pinTitles": [
    {{"title": "Generated Title 1", "strategy": "Curiosity Gap + Number Hook"}}
  ],
  "descriptions": [
    {{"description": "Generated description 1...", "strategy": "Problem-Solution + CTA"}}
  ],
  "hashtags": {{
    "primary": ["#maintag1", "#maintag2"],
    "niche": ["#nichetag1", "#nichetag2"],
    "longtail": ["#longtailtag1", "#longtailtag2"]
  }},
  "strategicInsights": ["Used curiosity gap formula because the article reveals surprising data"]
}}
""".strip()


class PinGenerationError(RuntimeError):
    """Raised when AI pin generation fails or returns invalid output."""


class MissingCredentialError(PinGenerationError):
    """Raised when no API key is configured for the text-generation service."""


class GenerationRateLimitedError(PinGenerationError):
    """Raised when the outbound rate limit for the text-generation service is exhausted."""


class GenerationServiceError(PinGenerationError):
    """Raised when the text-generation service cannot be reached or answers with an error."""


class GenerationResponseError(PinGenerationError):
    """Raised when the generated text holds no valid pin content JSON."""


def find_json_object(text: str) -> str | None:
    """Return the first complete top-level ``{...}`` region in ``text``.

    Braces inside JSON string literals are ignored, so prose around the object
    and braces in generated copy do not confuse the scan.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


def build_prompt(extracted: ExtractedContent, niche: Niche | str | None, insights: str | None) -> str:
    niche_label = niche.value if isinstance(niche, Niche) else niche
    return PROMPT_TEMPLATE.format(
        title=extracted.title,
        description=extracted.description,
        content=extracted.content,
        headings=", ".join(extracted.headings),
        niche=niche_label or "General",
        insights=insights or "None provided",
    )


class PinContentGeneratorService:
    """Generate Pinterest copy through the Anthropic messages API."""

    def __init__(
        self,
        api_key: str | None,
        api_url: str = "https://api.anthropic.com/v1/messages",
        api_version: str = "2023-06-01",
        model: str = "claude-3-sonnet-20240229",
        max_tokens: int = 4000,
        timeout: float = 60.0,
        rate_limit: str = "10/minute",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._api_version = api_version
        self._model = model
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._transport = transport
        self._rate_limit = parse(rate_limit)
        self._limiter = MovingWindowRateLimiter(MemoryStorage())

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def generate(
        self,
        extracted: ExtractedContent,
        niche: Niche | str | None = None,
        insights: str | None = None,
    ) -> GeneratedContent:
        if not self._api_key:
            raise MissingCredentialError("Anthropic API key is not configured.")
        if not self._limiter.hit(self._rate_limit, "anthropic-messages"):
            raise GenerationRateLimitedError(f"Generation rate limit of {self._rate_limit} exceeded.")

        text = await self._request(build_prompt(extracted, niche, insights))
        return self.parse_reply(text)

    async def _request(self, prompt: str) -> str:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    self._api_url,
                    headers={
                        "content-type": "application/json",
                        "x-api-key": self._api_key,
                        "anthropic-version": self._api_version,
                    },
                    json={
                        "model": self._model,
                        "max_tokens": self._max_tokens,
                        "messages": [{"role": "user", "content": prompt}],
                    },
                )
        except httpx.HTTPError as exc:
            raise GenerationServiceError("Anthropic request failed.") from exc

        if not response.is_success:
            raise GenerationServiceError(f"Anthropic API error: {response.status_code}")

        try:
            text = response.json()["content"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise GenerationServiceError("Anthropic returned an unexpected response envelope.") from exc
        if not isinstance(text, str) or not text:
            raise GenerationServiceError("Anthropic returned empty response.")
        return text

    @staticmethod
    def parse_reply(text: str) -> GeneratedContent:
        region = find_json_object(text)
        if region is None:
            raise GenerationResponseError("Anthropic reply contains no JSON object.")

        try:
            payload = json.loads(region)
        except json.JSONDecodeError as exc:
            raise GenerationResponseError("Anthropic returned invalid JSON.") from exc

        try:
            return GeneratedContent.model_validate(payload)
        except ValidationError as exc:
            logger.debug("Rejected generated content: %s", exc)
            raise GenerationResponseError("Anthropic response does not match the pin content schema.") from exc
