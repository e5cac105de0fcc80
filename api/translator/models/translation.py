from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

LANG_CODE_PATTERN = r"^[a-z]{2,3}$"


def _strip_null_bytes(v: str) -> str:
    return v.replace("\x00", "")


class DetectRequest(BaseModel):
    """Request model for language detection."""

    text: str = Field(max_length=20000, description="Text to classify")

    @field_validator("text")
    @classmethod
    def sanitize_text(cls, v: str) -> str:
        """Remove null bytes."""
        return _strip_null_bytes(v)


class DetectResponse(BaseModel):
    language: str = Field(description="Closest language code, or 'unknown'")
    distance: Optional[float] = Field(
        None, description="Distance to the closest profile (null when unknown)"
    )
    known_languages: List[str] = Field(default_factory=list)


class TranslateRequest(BaseModel):
    """Request model for translation."""

    text: str = Field(max_length=20000, description="Text to translate")
    source_lang: Optional[str] = Field(
        None, pattern=LANG_CODE_PATTERN, description="Source language; detected if omitted"
    )
    target_lang: Optional[str] = Field(
        None, pattern=LANG_CODE_PATTERN, description="Target language; chosen if omitted"
    )

    @field_validator("text")
    @classmethod
    def sanitize_text(cls, v: str) -> str:
        """Remove null bytes."""
        return _strip_null_bytes(v)

    @field_validator("source_lang", "target_lang", mode="before")
    @classmethod
    def normalize_code(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v


class TranslateResponse(BaseModel):
    translated_text: str
    source_lang: str
    target_lang: Optional[str] = None
    cache_tier: Optional[str] = Field(
        None, description="memory, database or phrasebook; null for blank input"
    )


class ProfileUpsertRequest(BaseModel):
    """Request model for adding or replacing a language profile."""

    sample_text: str = Field(
        min_length=1, max_length=200000, description="Sample text in the language"
    )

    @field_validator("sample_text")
    @classmethod
    def sanitize_sample(cls, v: str) -> str:
        return _strip_null_bytes(v)


class ProfileSummary(BaseModel):
    lang_code: str
    distinct_characters: int
    top_characters: List[Tuple[str, float]] = Field(
        default_factory=list, description="Most frequent [character, probability] pairs"
    )


class ProfileCatalogResponse(BaseModel):
    profiles: List[ProfileSummary]
    skipped_records: List[str] = Field(default_factory=list)
    load_error: Optional[str] = None


class TranslationHistoryItem(BaseModel):
    id: int
    source_text: str
    source_lang: str
    target_text: str
    target_lang: str
    timestamp: str
