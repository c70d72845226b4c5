from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

PIN_TITLE_MAX_CHARS = 100
DESCRIPTION_MIN_CHARS = 200
DESCRIPTION_MAX_CHARS = 500
MIN_VARIANTS = 5
MAX_VARIANTS = 8

HASHTAG_PATTERN = r"^#[^\s#]+$"

Hashtag = Annotated[str, StringConstraints(pattern=HASHTAG_PATTERN)]


class Niche(str, Enum):
    health_wellness = "Health & Wellness"
    finance_money = "Finance & Money"
    lifestyle_home = "Lifestyle & Home"
    food_recipes = "Food & Recipes"
    fashion_beauty = "Fashion & Beauty"
    travel_adventure = "Travel & Adventure"
    business_productivity = "Business & Productivity"
    parenting_family = "Parenting & Family"
    diy_crafts = "DIY & Crafts"
    technology = "Technology"
    education_learning = "Education & Learning"
    fitness_exercise = "Fitness & Exercise"
    animals_pets = "Animals & Pets"


class _PinModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class PinTitle(_PinModel):
    title: str = Field(min_length=1, max_length=PIN_TITLE_MAX_CHARS)
    strategy: str


class PinDescription(_PinModel):
    description: str = Field(min_length=DESCRIPTION_MIN_CHARS, max_length=DESCRIPTION_MAX_CHARS)
    strategy: str


class HashtagGroups(_PinModel):
    primary: tuple[Hashtag, ...]
    niche: tuple[Hashtag, ...]
    longtail: tuple[Hashtag, ...]

    def all_tags(self) -> list[str]:
        return [*self.primary, *self.niche, *self.longtail]


class GeneratedContent(_PinModel):
    """Pinterest copy for one article, identical in shape for AI and template output."""

    pin_titles: tuple[PinTitle, ...] = Field(min_length=MIN_VARIANTS, max_length=MAX_VARIANTS)
    descriptions: tuple[PinDescription, ...] = Field(min_length=MIN_VARIANTS, max_length=MAX_VARIANTS)
    hashtags: HashtagGroups
    strategic_insights: tuple[str, ...] = ()

    def as_plain_text(self) -> str:
        titles = "\n".join(f"{index}. {item.title}" for index, item in enumerate(self.pin_titles, 1))
        descriptions = "\n".join(
            f"{index}. {item.description}" for index, item in enumerate(self.descriptions, 1)
        )
        return (
            f"PIN TITLES:\n{titles}\n\n"
            f"DESCRIPTIONS:\n{descriptions}\n\n"
            f"HASHTAGS:\n{' '.join(self.hashtags.all_tags())}"
        )
