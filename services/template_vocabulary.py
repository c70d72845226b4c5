from __future__ import annotations

from dataclasses import dataclass, field

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "how", "what", "why", "when", "where",
    }
)

BENEFIT_KEYWORDS = (
    "save", "improve", "increase", "reduce", "boost", "enhance", "optimize", "maximize",
    "minimize", "achieve", "gain", "earn", "learn", "discover", "master",
)

NICHE_AUDIENCES = {
    "Health & Wellness": "health enthusiasts",
    "Finance & Money": "money-conscious individuals",
    "Lifestyle & Home": "homeowners",
    "Food & Recipes": "home cooks",
    "Fashion & Beauty": "style lovers",
    "Travel & Adventure": "travelers",
    "Business & Productivity": "entrepreneurs",
    "Parenting & Family": "parents",
    "DIY & Crafts": "DIY enthusiasts",
    "Technology": "tech users",
    "Education & Learning": "learners",
    "Fitness & Exercise": "fitness enthusiasts",
    "Animals & Pets": "pet owners",
}

NICHE_HASHTAGS = {
    "Health & Wellness": ("#health", "#wellness", "#healthy", "#selfcare"),
    "Finance & Money": ("#money", "#finance", "#investing", "#savings"),
    "Lifestyle & Home": ("#lifestyle", "#home", "#homedecor", "#living"),
    "Food & Recipes": ("#food", "#recipes", "#cooking", "#foodie"),
    "Fashion & Beauty": ("#fashion", "#beauty", "#style", "#outfit"),
    "Travel & Adventure": ("#travel", "#adventure", "#wanderlust", "#explore"),
    "Business & Productivity": ("#business", "#productivity", "#entrepreneur", "#success"),
    "Parenting & Family": ("#parenting", "#family", "#kids", "#mom"),
    "DIY & Crafts": ("#diy", "#crafts", "#handmade", "#creative"),
    "Technology": ("#tech", "#technology", "#digital", "#innovation"),
    "Education & Learning": ("#education", "#learning", "#study", "#knowledge"),
    "Fitness & Exercise": ("#fitness", "#exercise", "#workout", "#health"),
    "Animals & Pets": ("#pets", "#animals", "#petcare", "#petlovers"),
}

DEFAULT_NICHE_HASHTAGS = ("#tips", "#guide", "#howto", "#advice")


@dataclass(frozen=True)
class TemplateVocabulary:
    """Word lists and niche lookups used by the template generator.

    Pass a customised instance to ``TemplateGeneratorService`` to extend the
    vocabularies without touching the generation rules.
    """

    stop_words: frozenset[str] = STOP_WORDS
    benefit_keywords: tuple[str, ...] = BENEFIT_KEYWORDS
    niche_audiences: dict[str, str] = field(default_factory=lambda: dict(NICHE_AUDIENCES))
    niche_hashtags: dict[str, tuple[str, ...]] = field(default_factory=lambda: dict(NICHE_HASHTAGS))
    default_niche_hashtags: tuple[str, ...] = DEFAULT_NICHE_HASHTAGS
    default_audience: str = "everyone"
    default_topic: str = "content"
    min_topic_word_chars: int = 4
    topic_words: int = 2
    benefit_sentences: int = 10
    max_benefits: int = 3
