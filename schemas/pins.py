from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from services.extracted_content import ExtractionMethod
from services.pin_content import GeneratedContent, Niche


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PinGenerationRequest(_CamelModel):
    url: str = Field(min_length=1, max_length=2048)
    niche: Niche | None = None
    insights: str | None = None

    @field_validator("niche", mode="before")
    @classmethod
    def _blank_niche(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ExtractionRequest(_CamelModel):
    url: str = Field(min_length=1, max_length=2048)


class ExtractedContentResponse(_CamelModel):
    title: str
    description: str
    content: str
    headings: list[str]
    url: str
    extraction_method: ExtractionMethod


class PinGenerationResponse(_CamelModel):
    ai_used: bool
    extraction_method: ExtractionMethod
    content: GeneratedContent
    plain_text: str


class NicheListResponse(_CamelModel):
    niches: list[str]
