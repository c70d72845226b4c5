from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlsplit

from app.core.config import Settings
from services.article_extractor import ArticleExtractorService
from services.content_generator import PinContentGeneratorService
from services.extracted_content import ExtractedContent
from services.page_fetcher import DirectFetchStrategy, PageFetcherService, ProxyFetchStrategy
from services.pin_content import GeneratedContent, Niche
from services.template_generator import TemplateGeneratorService

logger = logging.getLogger(__name__)


class InvalidURLError(ValueError):
    """Raised when the article URL is missing or not an absolute http(s) URL."""


class PipelineBusyError(RuntimeError):
    """Raised when the same request is already being processed."""


@dataclass(frozen=True)
class PinGenerationResult:
    content: GeneratedContent
    ai_used: bool
    extracted: ExtractedContent


def validate_url(url: str) -> str:
    cleaned = (url or "").strip()
    if not cleaned:
        raise InvalidURLError("Please enter a valid URL")
    try:
        parts = urlsplit(cleaned)
        hostname = parts.hostname
        parts.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError as exc:
        raise InvalidURLError(f"Invalid URL: {cleaned}") from exc
    if parts.scheme not in {"http", "https"} or not hostname:
        raise InvalidURLError(f"Invalid URL: {cleaned}")
    return cleaned


class PinPipeline:
    """Turn an article URL into Pinterest copy, preferring AI and falling back to templates."""

    def __init__(
        self,
        extractor: ArticleExtractorService,
        ai_generator: PinContentGeneratorService,
        template_generator: TemplateGeneratorService | None = None,
    ) -> None:
        self._extractor = extractor
        self._ai_generator = ai_generator
        self._template_generator = template_generator or TemplateGeneratorService()
        self._in_flight: set[tuple[str, str, str]] = set()

    @property
    def busy(self) -> bool:
        return bool(self._in_flight)

    async def run(
        self,
        url: str,
        niche: Niche | str | None = None,
        insights: str | None = None,
    ) -> PinGenerationResult:
        article_url = validate_url(url)
        key = (article_url, niche.value if isinstance(niche, Niche) else niche or "", insights or "")
        if key in self._in_flight:
            raise PipelineBusyError(f"Already generating pins for {article_url}")

        self._in_flight.add(key)
        try:
            extracted = await self._extractor.extract(article_url)
            logger.info("Extracted %s via %s", article_url, extracted.extraction_method.value)
            return await self._generate(extracted, niche, insights)
        finally:
            self._in_flight.discard(key)

    async def extract(self, url: str) -> ExtractedContent:
        return await self._extractor.extract(validate_url(url))

    async def _generate(
        self,
        extracted: ExtractedContent,
        niche: Niche | str | None,
        insights: str | None,
    ) -> PinGenerationResult:
        if self._ai_generator.configured:
            try:
                content = await self._ai_generator.generate(extracted, niche, insights)
            except Exception as exc:  # noqa: BLE001 - any AI failure falls back to templates
                logger.warning("AI generation failed for %s, using offline templates: %s", extracted.url, exc)
            else:
                return PinGenerationResult(content=content, ai_used=True, extracted=extracted)
        else:
            logger.info("Anthropic API key missing; using offline templates")

        content = self._template_generator.generate(extracted, niche)
        return PinGenerationResult(content=content, ai_used=False, extracted=extracted)


def build_pipeline(settings: Settings) -> PinPipeline:
    fetcher = PageFetcherService(
        strategies=(
            DirectFetchStrategy(user_agent=settings.user_agent),
            ProxyFetchStrategy(proxy_url=settings.proxy_url),
        ),
        timeout=settings.fetch_timeout,
    )
    ai_generator = PinContentGeneratorService(
        api_key=settings.anthropic_api_key,
        api_url=settings.anthropic_api_url,
        api_version=settings.anthropic_version,
        model=settings.anthropic_model,
        max_tokens=settings.anthropic_max_tokens,
        timeout=settings.anthropic_timeout,
        rate_limit=settings.generation_rate_limit,
    )
    return PinPipeline(
        extractor=ArticleExtractorService(fetcher),
        ai_generator=ai_generator,
    )
