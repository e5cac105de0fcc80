import logging
from typing import List

from fastapi import APIRouter, Query, Request

from translator.core.exceptions import ServiceUnavailableError
from translator.models.translation import (
    DetectRequest,
    DetectResponse,
    TranslateRequest,
    TranslateResponse,
    TranslationHistoryItem,
)
from translator.services.translation.translation_service import TranslationService

router = APIRouter()
logger = logging.getLogger(__name__)


def get_translation_service(request: Request) -> TranslationService:
    """Translation service created during application startup."""
    service = getattr(request.app.state, "translation_service", None)
    if service is None:
        raise ServiceUnavailableError("Translation service")
    return service


@router.post("/detect", response_model=DetectResponse)
async def detect_language(request: Request, body: DetectRequest):
    """
    Detect the language of a text by nearest character-frequency profile.
    """
    service = get_translation_service(request)
    result = service.classifier.classify_with_distance(body.text)
    return DetectResponse(
        language=result.language_code,
        distance=None if result.is_unknown else result.distance,
        known_languages=service.classifier.language_codes,
    )


@router.post("/translate", response_model=TranslateResponse)
async def translate(request: Request, body: TranslateRequest):
    """
    Translate a text, detecting its language first when no source is given.
    """
    service = get_translation_service(request)
    result = await service.translate(
        body.text, source_lang=body.source_lang, target_lang=body.target_lang
    )
    logger.info(
        f"Translated {len(body.text)} chars {result['source_lang']}->"
        f"{result['target_lang']} via {result['cache_tier']}"
    )
    return TranslateResponse(**result)


@router.get("/translations/history", response_model=List[TranslationHistoryItem])
async def translation_history(
    request: Request, limit: int = Query(50, ge=1, le=500)
):
    """
    Recent translation lookups, newest first.
    """
    service = get_translation_service(request)
    return [
        TranslationHistoryItem(**vars(record))
        for record in service.cache.history(limit)
    ]


@router.get("/translations/stats")
async def translation_stats(request: Request):
    """
    Cache and classifier statistics.
    """
    return get_translation_service(request).get_stats()
