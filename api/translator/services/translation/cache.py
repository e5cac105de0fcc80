"""Two-tier lookup cache for translation results.

L1: In-memory LRU cache keyed by (text, source language, target language)
L3: SQLite ``translations`` table recording every lookup with its timestamp
"""

import logging
import sqlite3
from collections import OrderedDict
from dataclasses import dataclass
from typing import List, Optional, Tuple

from translator.db.database import TranslatorDatabase

logger = logging.getLogger(__name__)

LookupKey = Tuple[str, str, str]


@dataclass
class TranslationRecord:
    """A stored translation lookup."""

    id: int
    source_text: str
    source_lang: str
    target_text: str
    target_lang: str
    timestamp: str


class LRUCache:
    """Bounded mapping of lookup key to translation, least recently used out first."""

    def __init__(self, maxsize: int = 1000):
        self._entries: OrderedDict[LookupKey, str] = OrderedDict()
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: LookupKey) -> Optional[str]:
        value = self._entries.get(key)
        if value is None:
            self.misses += 1
            return None
        self._entries.move_to_end(key)
        self.hits += 1
        return value

    def set(self, key: LookupKey, value: str) -> None:
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        """Drop every entry and reset the counters."""
        self._entries.clear()
        self.hits = self.misses = 0

    def get_stats(self) -> dict:
        lookups = self.hits + self.misses
        return {
            "hits": self.hits,
            "misses": self.misses,
            "size": len(self._entries),
            "maxsize": self.maxsize,
            "hit_ratio": self.hits / lookups if lookups else 0,
        }


class TranslationLookupStore:
    """Persistent record of translation lookups in SQLite.

    Lookups match on the exact source text and language pair. Entries never
    expire; the table doubles as the translation history.
    """

    def __init__(self, database: TranslatorDatabase):
        self.db = database

    def find(self, source_text: str, source_lang: str, target_lang: str) -> Optional[str]:
        """Return the most recent stored translation for the triple, if any."""
        with self.db.get_connection() as conn:
            row = conn.execute(
                """
                SELECT target_text FROM translations
                WHERE source_text = ? AND source_lang = ? AND target_lang = ?
                ORDER BY id DESC LIMIT 1
                """,
                (source_text, source_lang, target_lang),
            ).fetchone()
            return row["target_text"] if row else None

    def insert(
        self, source_text: str, source_lang: str, target_text: str, target_lang: str
    ) -> int:
        """Record a translation and return its row id."""
        with self.db.get_connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO translations
                (source_text, source_lang, target_text, target_lang)
                VALUES (?, ?, ?, ?)
                """,
                (source_text, source_lang, target_text, target_lang),
            )
            conn.commit()
            return cursor.lastrowid

    def list_recent(self, limit: int = 50) -> List[TranslationRecord]:
        """Stored lookups, newest first."""
        with self.db.get_connection() as conn:
            rows = conn.execute(
                """
                SELECT id, source_text, source_lang, target_text, target_lang, timestamp
                FROM translations
                ORDER BY timestamp DESC, id DESC
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [TranslationRecord(**dict(row)) for row in rows]

    def count(self) -> int:
        with self.db.get_connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM translations").fetchone()[0]


class TieredTranslationCache:
    """Memory (L1) in front of the translations table (L3).

    An L3 hit is copied into L1; a new translation is written to both.
    """

    def __init__(self, database: TranslatorDatabase, l1_size: int = 1000):
        self.l1 = LRUCache(maxsize=l1_size)
        self.l3 = TranslationLookupStore(database)
        self.l3_hits = 0
        self.l3_misses = 0

    @staticmethod
    def make_key(text: str, source_lang: str, target_lang: str) -> LookupKey:
        return (text, source_lang, target_lang)

    async def get(
        self, text: str, source_lang: str, target_lang: str
    ) -> Tuple[Optional[str], Optional[str]]:
        """Look up a translation.

        Returns:
            Tuple of (translation, tier) where tier is "memory" or "database",
            or (None, None) on a miss in both tiers.
        """
        key = self.make_key(text, source_lang, target_lang)
        result = self.l1.get(key)
        if result is not None:
            return result, "memory"

        try:
            result = self.l3.find(text, source_lang, target_lang)
        except sqlite3.Error as e:
            # L3 is an optimisation; a read failure behaves like a miss
            logger.warning(f"Translation lookup store read failed: {e}")
            result = None

        if result is not None:
            self.l3_hits += 1
            self.l1.set(key, result)
            return result, "database"

        self.l3_misses += 1
        return None, None

    async def set(
        self, text: str, source_lang: str, target_lang: str, translated: str
    ) -> None:
        """Write a translation to both tiers.

        Raises:
            sqlite3.Error: If the L3 write fails. L1 is updated regardless.
        """
        self.l1.set(self.make_key(text, source_lang, target_lang), translated)
        self.l3.insert(text, source_lang, translated, target_lang)

    def history(self, limit: int = 50) -> List[TranslationRecord]:
        return self.l3.list_recent(limit)

    def get_stats(self) -> dict:
        """L1 counters plus L3 hits, misses and row count."""
        try:
            stored = self.l3.count()
        except sqlite3.Error as e:
            logger.warning(f"Could not count stored translations: {e}")
            stored = None
        return {
            "l1": self.l1.get_stats(),
            "l3": {
                "hits": self.l3_hits,
                "misses": self.l3_misses,
                "stored_translations": stored,
            },
        }
