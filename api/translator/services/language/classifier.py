"""Nearest-profile language classification.

The classifier loads every stored profile once at construction and keeps
them in an in-memory catalog. Classification builds the profile of the input
text and returns the language code whose profile is closest by Euclidean
distance.

The catalog is iterated in lexicographic order of language code and the
running minimum only moves on a strictly smaller distance, so equal distances
resolve to the alphabetically first code.
"""

import logging
import math
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from translator.metrics.translation_metrics import (
    language_classification_distance,
    language_classification_total,
    language_profiles_loaded,
    profile_upserts_total,
)
from translator.services.language.profile import (
    CharacterFrequencyProfile,
    build_profile,
    euclidean_distance,
)
from translator.services.language.store import ProfileStore, StoreError

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"


@dataclass(frozen=True)
class ClassificationResult:
    """Winning language code with its distance (``inf`` when unknown)."""

    language_code: str
    distance: float

    @property
    def is_unknown(self) -> bool:
        return self.language_code == UNKNOWN


def _sorted_catalog(
    profiles: Mapping[str, CharacterFrequencyProfile],
) -> Mapping[str, CharacterFrequencyProfile]:
    return MappingProxyType({code: profiles[code] for code in sorted(profiles)})


class LanguageClassifier:
    """Classify text against an in-memory catalog of language profiles.

    Readers never lock: ``classify`` takes the current catalog reference and
    walks it. ``upsert_profile`` holds ``_write_lock`` while it persists the
    new profile and then swaps in a rebuilt catalog, so a reader sees either
    the old mapping or the new one, never a half-updated one.
    """

    def __init__(self, store: ProfileStore):
        self.store = store
        self._write_lock = threading.RLock()
        self._catalog: Mapping[str, CharacterFrequencyProfile] = MappingProxyType({})
        self.skipped_records: list[str] = []
        self.load_error: Optional[str] = None
        self._load()

    @classmethod
    def bootstrap_from(cls, store: ProfileStore) -> "LanguageClassifier":
        """Create a classifier whose catalog is loaded from ``store``."""
        return cls(store)

    def _load(self) -> None:
        try:
            result = self.store.load_all()
        except StoreError as e:
            # Degraded but usable: every classify() returns UNKNOWN until
            # profiles are added.
            logger.error(f"Language profile store unavailable, starting empty: {e}")
            self.load_error = str(e)
            language_profiles_loaded.set(0)
            return

        self._catalog = _sorted_catalog(result.profiles)
        self.skipped_records = list(result.skipped)
        language_profiles_loaded.set(len(self._catalog))
        if result.skipped:
            logger.warning(
                f"Skipped {len(result.skipped)} corrupt language profile(s): "
                f"{', '.join(result.skipped)}"
            )
        logger.info(
            f"LanguageClassifier ready with {len(self._catalog)} profiles: "
            f"{', '.join(self._catalog) or '-'}"
        )

    @property
    def catalog(self) -> Mapping[str, CharacterFrequencyProfile]:
        """Read-only view of the loaded profiles in iteration order."""
        return self._catalog

    @property
    def language_codes(self) -> list[str]:
        return list(self._catalog)

    def get_profile(self, lang_code: str) -> Optional[CharacterFrequencyProfile]:
        return self._catalog.get(lang_code)

    def classify_with_distance(self, text: str) -> ClassificationResult:
        """Classify ``text`` and report the winning distance."""
        text_profile = build_profile(text)
        catalog = self._catalog

        best_code = UNKNOWN
        best_distance = math.inf
        for lang_code, profile in catalog.items():
            distance = euclidean_distance(text_profile, profile)
            if distance < best_distance:
                best_distance = distance
                best_code = lang_code

        language_classification_total.labels(result=best_code).inc()
        if best_code != UNKNOWN:
            language_classification_distance.observe(best_distance)
        return ClassificationResult(language_code=best_code, distance=best_distance)

    def classify(self, text: str) -> str:
        """Return the language code closest to ``text``, or ``UNKNOWN``.

        Never raises; an empty catalog yields ``UNKNOWN`` and empty text is
        compared as the empty profile.
        """
        return self.classify_with_distance(text).language_code

    def upsert_profile(self, lang_code: str, sample_text: str) -> CharacterFrequencyProfile:
        """Add or replace the profile for ``lang_code`` built from ``sample_text``.

        The profile is persisted first; the catalog entry is replaced only
        after the store accepted it.

        Raises:
            StoreError: If the store rejected the write. The catalog is left
                exactly as it was.
        """
        profile = build_profile(sample_text)
        with self._write_lock:
            try:
                self.store.save(lang_code, profile)
            except StoreError:
                profile_upserts_total.labels(outcome="store_error").inc()
                logger.error(
                    f"Failed to persist language profile '{lang_code}'; catalog unchanged"
                )
                raise

            updated = dict(self._catalog)
            updated[lang_code] = profile
            self._catalog = _sorted_catalog(updated)

        profile_upserts_total.labels(outcome="success").inc()
        language_profiles_loaded.set(len(self._catalog))
        logger.info(
            f"Language profile '{lang_code}' stored ({len(profile)} distinct characters)"
        )
        return profile

    def get_stats(self) -> Dict[str, Any]:
        """Summary of the catalog state.

        Returns:
            Dict with loaded codes, skipped corrupt records and load error.
        """
        catalog = self._catalog
        return {
            "profiles_loaded": len(catalog),
            "language_codes": list(catalog),
            "skipped_records": list(self.skipped_records),
            "load_error": self.load_error,
        }
