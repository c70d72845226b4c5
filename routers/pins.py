from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from schemas.pins import (
    ExtractedContentResponse,
    ExtractionRequest,
    NicheListResponse,
    PinGenerationRequest,
    PinGenerationResponse,
)
from services.pin_content import Niche
from services.pin_pipeline import InvalidURLError, PinPipeline, PipelineBusyError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pins"])

GENERIC_FAILURE = "Failed to process the URL. Please check the URL and try again."


def get_pipeline(request: Request) -> PinPipeline:
    return request.app.state.pipeline


@router.get("/niches", response_model=NicheListResponse)
async def list_niches() -> NicheListResponse:
    return NicheListResponse(niches=[niche.value for niche in Niche])


@router.post("/pins/extract", response_model=ExtractedContentResponse)
async def extract_article(
    payload: ExtractionRequest,
    pipeline: PinPipeline = Depends(get_pipeline),
) -> ExtractedContentResponse:
    try:
        extracted = await pipeline.extract(payload.url)
    except InvalidURLError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return ExtractedContentResponse(
        title=extracted.title,
        description=extracted.description,
        content=extracted.content,
        headings=list(extracted.headings),
        url=extracted.url,
        extraction_method=extracted.extraction_method,
    )


@router.post("/pins/generate", response_model=PinGenerationResponse)
async def generate_pins(
    payload: PinGenerationRequest,
    pipeline: PinPipeline = Depends(get_pipeline),
) -> PinGenerationResponse:
    try:
        result = await pipeline.run(payload.url, niche=payload.niche, insights=payload.insights)
    except InvalidURLError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except PipelineBusyError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001 - unexpected failures get a generic message
        logger.exception("Pin generation failed for %s", payload.url)
        raise HTTPException(status_code=500, detail=GENERIC_FAILURE) from exc

    return PinGenerationResponse(
        ai_used=result.ai_used,
        extraction_method=result.extracted.extraction_method,
        content=result.content,
        plain_text=result.content.as_plain_text(),
    )
