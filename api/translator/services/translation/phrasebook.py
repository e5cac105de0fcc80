"""Hard-coded phrase dictionary used as the translation backend.

There is no real machine translation: known single words are looked up
case-insensitively, anything else comes back as a bracketed placeholder that
names the target language.
"""

import logging
from typing import ClassVar, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class Phrasebook:
    """Tiny bilingual word list keyed by (source, target) language pair."""

    PHRASES: ClassVar[Dict[Tuple[str, str], Dict[str, str]]] = {
        ("en", "pt"): {
            "hello": "olá",
            "world": "mundo",
            "dog": "cachorro",
            "cat": "gato",
            "house": "casa",
        },
        ("pt", "en"): {
            "olá": "hello",
            "mundo": "world",
            "cachorro": "dog",
            "gato": "cat",
            "casa": "house",
        },
        ("es", "en"): {"hola": "hello"},
        ("fr", "en"): {"bonjour": "hello"},
    }

    PLACEHOLDERS: ClassVar[Dict[str, str]] = {
        "pt": "[Traduzido para PT: {text}]",
        "en": "[Translated to EN: {text}]",
    }

    def __init__(self, extra_phrases: Optional[Dict[Tuple[str, str], Dict[str, str]]] = None):
        self.phrases: Dict[Tuple[str, str], Dict[str, str]] = {
            pair: dict(words) for pair, words in self.PHRASES.items()
        }
        for pair, words in (extra_phrases or {}).items():
            self.phrases.setdefault(pair, {}).update(
                {word.casefold(): translation for word, translation in words.items()}
            )

    def supports(self, source_lang: str, target_lang: str) -> bool:
        return (source_lang, target_lang) in self.phrases

    def lookup(self, text: str, source_lang: str, target_lang: str) -> Optional[str]:
        """Exact dictionary hit for ``text``, ignoring case only."""
        words = self.phrases.get((source_lang, target_lang))
        if not words:
            return None
        return words.get(text.casefold())

    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """Translate ``text``, falling back to a placeholder on a miss."""
        hit = self.lookup(text, source_lang, target_lang)
        if hit is not None:
            return hit

        if self.supports(source_lang, target_lang):
            template = self.PLACEHOLDERS.get(
                target_lang, f"[Translated to {target_lang.upper()}: {{text}}]"
            )
            return template.format(text=text)

        logger.debug(f"No phrasebook entries for {source_lang}->{target_lang}")
        return f"[Sem tradução para {source_lang}-{target_lang}: {text}]"
