"""Character-frequency language detection.

This package provides:
- build_profile / euclidean_distance: profile statistics and comparison
- encode_profile / decode_profile: lossless JSON form for storage
- ProfileStore, SQLiteProfileStore, InMemoryProfileStore: profile persistence
- LanguageClassifier: nearest-profile classification with write-through updates
"""

from translator.services.language.classifier import (
    UNKNOWN,
    ClassificationResult,
    LanguageClassifier,
)
from translator.services.language.codec import (
    ProfileDecodeError,
    decode_profile,
    encode_profile,
)
from translator.services.language.profile import (
    EMPTY_PROFILE,
    CharacterFrequencyProfile,
    build_profile,
    euclidean_distance,
)
from translator.services.language.samples import (
    REFERENCE_SAMPLES,
    seed_reference_profiles,
)
from translator.services.language.store import (
    InMemoryProfileStore,
    ProfileLoadResult,
    ProfileStore,
    SQLiteProfileStore,
    StoreError,
)

__all__ = [
    "UNKNOWN",
    "EMPTY_PROFILE",
    "CharacterFrequencyProfile",
    "ClassificationResult",
    "InMemoryProfileStore",
    "LanguageClassifier",
    "ProfileDecodeError",
    "ProfileLoadResult",
    "ProfileStore",
    "REFERENCE_SAMPLES",
    "SQLiteProfileStore",
    "StoreError",
    "build_profile",
    "decode_profile",
    "encode_profile",
    "euclidean_distance",
    "seed_reference_profiles",
]
