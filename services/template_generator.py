from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from services.extracted_content import ExtractedContent
from services.pin_content import (
    DESCRIPTION_MAX_CHARS,
    PIN_TITLE_MAX_CHARS,
    GeneratedContent,
    HashtagGroups,
    Niche,
    PinDescription,
    PinTitle,
)
from services.template_vocabulary import TemplateVocabulary

logger = logging.getLogger(__name__)

TITLE_TEMPLATES = (
    ("{number} {topic} Tips That Actually Work", "Number Hook + Authority"),
    ("How to Master {topic} Without the Stress", "Benefit-Driven + Problem Solution"),
    ("The {topic} Guide for {audience}", "Audience Targeting + Authority"),
    ("{topic} Mistakes Everyone Makes", "Problem Identification"),
    ("Why Your {topic} Strategy Is Wrong", "Contrarian Approach"),
    ("{small_number} Ways to {benefit} Your {topic}", "Benefit-Driven + Number Hook"),
)

DESCRIPTION_TEMPLATES = (
    (
        "Discover the best {topic} strategies that actually work. This comprehensive guide "
        "covers everything {audience} need to know, from the first simple steps to the habits "
        "that keep results coming week after week. Save this pin for later! \U0001f4cc",
        "Benefit-Focused + CTA",
    ),
    (
        "Struggling with {topic}? Here's how to {benefit} your results fast with a clear "
        "step-by-step plan and proven techniques you can start using today, even if you only "
        "have a few minutes to spare each day. Perfect for {audience}! ✨",
        "Problem-Solution + Urgency",
    ),
    (
        "{topic} doesn't have to be complicated. Learn the simple strategies that deliver real "
        "results, skip the guesswork, and focus on the few changes that make the biggest "
        "difference. Bookmark this for easy reference! \U0001f4a1",
        "Simplification + Authority",
    ),
    (
        "Ready to transform your {topic} game? These expert-tested tips will help you "
        "{second_benefit} better results without wasting time or money on approaches that never "
        "really pay off. Click through to read the full step-by-step guide! \U0001f680",
        "Transformation + Engagement",
    ),
    (
        "The ultimate {topic} resource for {audience}. Everything you need to know in one place, "
        "with practical examples, common pitfalls to avoid, and easy wins to try first. Save "
        "time, skip the overwhelm, and get better results! ⭐",
        "Comprehensive + Value",
    ),
    (
        "Stop making these {topic} mistakes! Learn what actually works, why the usual advice "
        "falls short, and how to start seeing real progress this week. Save it now, because "
        "this is a perfect guide for beginners and pros alike! \U0001f3af",
        "Mistake Avoidance + Expertise",
    ),
)

_NUMBER = re.compile(r"\d+")


@dataclass(frozen=True)
class ContentSignals:
    """What the template generator learned about an article."""

    main_topic: str
    benefits: tuple[str, ...]
    audience: str
    number: str | None

    @property
    def is_listicle(self) -> bool:
        return self.number is not None


def _hashtag(body: str, default: str) -> str:
    cleaned = re.sub(r"[\s#]", "", body)
    return f"#{cleaned or default}"


class TemplateGeneratorService:
    """Rule-based Pinterest copy that needs no network access and never fails."""

    def __init__(self, vocabulary: TemplateVocabulary | None = None) -> None:
        self._vocabulary = vocabulary or TemplateVocabulary()

    def generate(self, extracted: ExtractedContent, niche: Niche | str | None = None) -> GeneratedContent:
        niche_label = _niche_label(niche)
        signals = self.analyze(extracted, niche_label)
        logger.debug("Template signals for %s: %s", extracted.url, signals)

        return GeneratedContent(
            pin_titles=self._titles(signals),
            descriptions=self._descriptions(signals),
            hashtags=self._hashtags(signals, niche_label),
            strategic_insights=(
                f"Used template-based optimization for {signals.main_topic} content",
                f"Applied {niche_label or 'general'} niche targeting strategies",
                f"Incorporated {'listicle' if signals.is_listicle else 'article'} format optimization",
                "Generated variants testing different emotional triggers",
                "Focused on benefit-driven messaging for better engagement",
            ),
        )

    def analyze(self, extracted: ExtractedContent, niche_label: str = "") -> ContentSignals:
        number = _NUMBER.search(extracted.title)
        return ContentSignals(
            main_topic=self.main_topic(extracted.title),
            benefits=self.benefits(extracted.content),
            audience=self._vocabulary.niche_audiences.get(niche_label, self._vocabulary.default_audience),
            number=number.group(0) if number else None,
        )

    def main_topic(self, title: str) -> str:
        vocabulary = self._vocabulary
        words = [
            word
            for word in title.lower().split()
            if word not in vocabulary.stop_words and len(word) >= vocabulary.min_topic_word_chars
        ]
        return " ".join(words[: vocabulary.topic_words]) or vocabulary.default_topic

    def benefits(self, content: str) -> tuple[str, ...]:
        vocabulary = self._vocabulary
        found: list[str] = []
        for sentence in content.split(".")[: vocabulary.benefit_sentences]:
            lowered = sentence.lower()
            for keyword in vocabulary.benefit_keywords:
                if keyword in lowered and keyword not in found:
                    found.append(keyword)
        return tuple(found[: vocabulary.max_benefits])

    @staticmethod
    def _fields(signals: ContentSignals) -> dict[str, str]:
        return {
            "topic": signals.main_topic,
            "audience": signals.audience,
            "number": signals.number or "10",
            "small_number": signals.number or "5",
            "benefit": signals.benefits[0] if signals.benefits else "improve",
            "second_benefit": signals.benefits[1] if len(signals.benefits) > 1 else "achieve",
        }

    def _titles(self, signals: ContentSignals) -> tuple[PinTitle, ...]:
        fields = self._fields(signals)
        return tuple(
            PinTitle(title=template.format(**fields)[:PIN_TITLE_MAX_CHARS], strategy=strategy)
            for template, strategy in TITLE_TEMPLATES
        )

    def _descriptions(self, signals: ContentSignals) -> tuple[PinDescription, ...]:
        fields = self._fields(signals)
        return tuple(
            PinDescription(description=template.format(**fields)[:DESCRIPTION_MAX_CHARS], strategy=strategy)
            for template, strategy in DESCRIPTION_TEMPLATES
        )

    def _hashtags(self, signals: ContentSignals, niche_label: str) -> HashtagGroups:
        topic_words = signals.main_topic.split(" ")
        first_word = topic_words[0]
        second_word = topic_words[1] if len(topic_words) > 1 else ""
        compact_topic = signals.main_topic.replace(" ", "")
        benefit = signals.benefits[0] if signals.benefits else "improve"

        return HashtagGroups(
            primary=(
                _hashtag(first_word, "tips"),
                _hashtag(second_word, "guide"),
                "#pinterest",
                "#viral",
            ),
            niche=self._vocabulary.niche_hashtags.get(niche_label, self._vocabulary.default_niche_hashtags),
            longtail=(
                _hashtag(f"{compact_topic}tips", "tips"),
                _hashtag(f"{compact_topic}guide", "guide"),
                _hashtag(f"{benefit}{first_word}", "improve"),
                _hashtag(f"{first_word}hacks", "contenthacks"),
            ),
        )


def _niche_label(niche: Niche | str | None) -> str:
    if isinstance(niche, Niche):
        return niche.value
    return (niche or "").strip()
