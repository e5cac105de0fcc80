import logging

from fastapi import APIRouter, Path, Request

from translator.core.exceptions import (
    LanguageProfileNotFoundError,
    ServiceUnavailableError,
    StorageError,
    ValidationError,
)
from translator.models.translation import (
    LANG_CODE_PATTERN,
    ProfileCatalogResponse,
    ProfileSummary,
    ProfileUpsertRequest,
)
from translator.services.language.classifier import LanguageClassifier
from translator.services.language.profile import (
    CharacterFrequencyProfile,
    normalize_text,
)
from translator.services.language.store import StoreError

router = APIRouter()
logger = logging.getLogger(__name__)


def get_classifier(request: Request) -> LanguageClassifier:
    """Language classifier created during application startup."""
    classifier = getattr(request.app.state, "classifier", None)
    if classifier is None:
        raise ServiceUnavailableError("Language classifier")
    return classifier


def _summarize(lang_code: str, profile: CharacterFrequencyProfile) -> ProfileSummary:
    return ProfileSummary(
        lang_code=lang_code,
        distinct_characters=len(profile),
        top_characters=profile.top(5),
    )


@router.get("/languages", response_model=ProfileCatalogResponse)
async def list_languages(request: Request):
    """
    List the loaded language profiles.
    """
    classifier = get_classifier(request)
    stats = classifier.get_stats()
    return ProfileCatalogResponse(
        profiles=[
            _summarize(code, profile) for code, profile in classifier.catalog.items()
        ],
        skipped_records=stats["skipped_records"],
        load_error=stats["load_error"],
    )


@router.get("/languages/{lang_code}", response_model=ProfileSummary)
async def get_language(
    request: Request, lang_code: str = Path(pattern=LANG_CODE_PATTERN)
):
    """
    Summary of a single language profile.
    """
    profile = get_classifier(request).get_profile(lang_code)
    if profile is None:
        raise LanguageProfileNotFoundError(lang_code)
    return _summarize(lang_code, profile)


@router.put("/languages/{lang_code}", response_model=ProfileSummary)
async def upsert_language(
    request: Request,
    body: ProfileUpsertRequest,
    lang_code: str = Path(pattern=LANG_CODE_PATTERN),
):
    """
    Add or replace a language profile built from a sample text.
    """
    if not normalize_text(body.sample_text):
        raise ValidationError(
            "Sample text must contain at least one letter or digit", field="sample_text"
        )
    classifier = get_classifier(request)
    try:
        profile = classifier.upsert_profile(lang_code, body.sample_text)
    except StoreError as e:
        raise StorageError(str(e), e.operation) from e
    return _summarize(lang_code, profile)
