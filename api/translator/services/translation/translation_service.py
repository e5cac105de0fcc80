"""Translation Service.

Orchestrates language detection, cached lookups and the phrasebook backend.
"""

import logging
import sqlite3
import time
from typing import Any, Dict, Optional

from translator.metrics.translation_metrics import (
    translation_errors_total,
    translation_lookups_total,
    translation_operation_duration_seconds,
)
from translator.services.language.classifier import UNKNOWN, LanguageClassifier
from translator.services.translation.cache import TieredTranslationCache
from translator.services.translation.phrasebook import Phrasebook

logger = logging.getLogger(__name__)


class TranslationService:
    """Main orchestrator for detection and translation.

    Flow:
    1. Detect the input language (unless the caller names it)
    2. Pick the target: English input goes to the English target language,
       everything else goes to the default target language
    3. Look the triple up in memory, then in the database
    4. On a miss, ask the phrasebook and record the result in both tiers
    """

    def __init__(
        self,
        classifier: LanguageClassifier,
        cache_backend: TieredTranslationCache,
        phrasebook: Optional[Phrasebook] = None,
        default_target_lang: str = "en",
        english_target_lang: str = "pt",
    ):
        """Initialize the TranslationService.

        Args:
            classifier: Loaded language classifier.
            cache_backend: Tiered lookup cache (L1 memory + L3 SQLite).
            phrasebook: Optional pre-configured Phrasebook instance.
            default_target_lang: Target for input that is not English.
            english_target_lang: Target for English input.
        """
        self.classifier = classifier
        self.cache = cache_backend
        self.phrasebook = phrasebook or Phrasebook()
        self.default_target_lang = default_target_lang
        self.english_target_lang = english_target_lang

        self.stats = {
            "translations_requested": 0,
            "memory_hits": 0,
            "database_hits": 0,
            "phrasebook_translations": 0,
            "empty_inputs": 0,
            "store_errors": 0,
        }

    def detect_language(self, text: str) -> str:
        """Language code of ``text`` according to the classifier."""
        return self.classifier.classify(text)

    def choose_target_language(self, source_lang: str) -> str:
        """Target language for a detected source language."""
        if source_lang == "en":
            return self.english_target_lang
        return self.default_target_lang

    async def translate(
        self,
        text: str,
        source_lang: Optional[str] = None,
        target_lang: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Translate ``text``.

        Args:
            text: Text to translate.
            source_lang: Source language code. If None, detected.
            target_lang: Target language code. If None, chosen from the source.

        Returns:
            Dict with:
            - translated_text: The translation ("" for blank input)
            - source_lang: Detected/provided source language
            - target_lang: Target language used
            - cache_tier: "memory", "database", "phrasebook" or None for blank input
        """
        start_time = time.perf_counter()
        self.stats["translations_requested"] += 1
        try:
            if not (text or "").strip():
                self.stats["empty_inputs"] += 1
                return {
                    "translated_text": "",
                    "source_lang": UNKNOWN,
                    "target_lang": target_lang,
                    "cache_tier": None,
                }

            if source_lang is None:
                source_lang = self.detect_language(text)
            if target_lang is None:
                target_lang = self.choose_target_language(source_lang)

            cached, tier = await self.cache.get(text, source_lang, target_lang)
            if cached is not None:
                self.stats[f"{tier}_hits"] += 1
                translation_lookups_total.labels(tier=tier).inc()
                logger.debug(f"Translation served from {tier} cache")
                return {
                    "translated_text": cached,
                    "source_lang": source_lang,
                    "target_lang": target_lang,
                    "cache_tier": tier,
                }

            translated = self.phrasebook.translate(text, source_lang, target_lang)
            self.stats["phrasebook_translations"] += 1
            translation_lookups_total.labels(tier="phrasebook").inc()

            try:
                await self.cache.set(text, source_lang, target_lang, translated)
            except sqlite3.Error as e:
                # The translation is still valid; it just won't survive a restart
                self.stats["store_errors"] += 1
                translation_errors_total.labels(stage="record").inc()
                logger.error(f"Failed to record translation lookup: {e}")

            return {
                "translated_text": translated,
                "source_lang": source_lang,
                "target_lang": target_lang,
                "cache_tier": "phrasebook",
            }
        finally:
            translation_operation_duration_seconds.observe(
                max(0.0, time.perf_counter() - start_time)
            )

    def get_stats(self) -> Dict[str, Any]:
        """Get translation service statistics.

        Returns:
            Dict with service, cache and classifier statistics.
        """
        return {
            **self.stats,
            "cache_stats": self.cache.get_stats(),
            "classifier": self.classifier.get_stats(),
        }
