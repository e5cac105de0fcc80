"""Translation package.

This package provides:
- Phrasebook: Hard-coded word list standing in for a translation backend
- TieredTranslationCache: Multi-tier lookup cache (L1 memory + L3 SQLite)
- TranslationService: Orchestrates detection, lookup and the phrasebook
"""

from translator.services.translation.cache import (
    LRUCache,
    TieredTranslationCache,
    TranslationLookupStore,
    TranslationRecord,
)
from translator.services.translation.phrasebook import Phrasebook
from translator.services.translation.translation_service import TranslationService

__all__ = [
    "LRUCache",
    "Phrasebook",
    "TieredTranslationCache",
    "TranslationLookupStore",
    "TranslationRecord",
    "TranslationService",
]
