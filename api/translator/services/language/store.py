"""
Durable storage for language profiles.

The classifier only needs two operations from its store: load every profile
at startup and save one profile with insert-or-replace semantics. The
``ProfileStore`` protocol captures that contract; ``SQLiteProfileStore`` backs
it with the ``language_profiles`` table and ``InMemoryProfileStore`` keeps
profiles in a dict for scripts and tests.
"""

import logging
import sqlite3
from dataclasses import dataclass, field
from typing import Dict, List, Protocol, runtime_checkable

from translator.db.database import TranslatorDatabase
from translator.metrics.translation_metrics import profile_records_skipped_total
from translator.services.language.codec import (
    ProfileDecodeError,
    decode_profile,
    encode_profile,
)
from translator.services.language.profile import CharacterFrequencyProfile

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the profile store cannot complete an operation."""

    def __init__(self, message: str, operation: str = "write"):
        super().__init__(message)
        self.operation = operation


@dataclass
class ProfileLoadResult:
    """Outcome of a bulk load.

    Attributes:
        profiles: Every record that decoded cleanly, keyed by language code
        skipped: Language codes whose stored record was corrupt
    """

    profiles: Dict[str, CharacterFrequencyProfile] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


@runtime_checkable
class ProfileStore(Protocol):
    """Persistence contract consumed by the language classifier."""

    def load_all(self) -> ProfileLoadResult:
        """Load every stored profile.

        Corrupt records are skipped and listed on the result.

        Raises:
            StoreError: If the store cannot be read at all.
        """
        ...

    def save(self, lang_code: str, profile: CharacterFrequencyProfile) -> None:
        """Insert or wholly replace the profile stored for ``lang_code``.

        Raises:
            StoreError: If the profile could not be persisted.
        """
        ...


class SQLiteProfileStore:
    """Profile store backed by the ``language_profiles`` SQLite table."""

    def __init__(self, database: TranslatorDatabase):
        self.db = database

    def load_all(self) -> ProfileLoadResult:
        result = ProfileLoadResult()
        try:
            with self.db.get_connection() as conn:
                rows = conn.execute(
                    "SELECT lang_code, char_frequencies FROM language_profiles "
                    "ORDER BY lang_code"
                ).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Could not read language profiles: {e}", "read") from e

        for row in rows:
            lang_code = row["lang_code"]
            try:
                result.profiles[lang_code] = decode_profile(row["char_frequencies"])
            except ProfileDecodeError as e:
                logger.warning(f"Skipping corrupt profile for '{lang_code}': {e}")
                profile_records_skipped_total.inc()
                result.skipped.append(lang_code)

        logger.info(
            f"Loaded {len(result.profiles)} language profiles "
            f"({result.skipped_count} skipped)"
        )
        return result

    def save(self, lang_code: str, profile: CharacterFrequencyProfile) -> None:
        try:
            with self.db.get_connection() as conn:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO language_profiles
                    (lang_code, char_frequencies, updated_at)
                    VALUES (?, ?, datetime('now'))
                    """,
                    (lang_code, encode_profile(profile)),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise StoreError(
                f"Could not save language profile '{lang_code}': {e}", "write"
            ) from e


class InMemoryProfileStore:
    """Dict-backed profile store.

    Profiles are kept in their serialized form so that loading goes through
    the same decoding path as the SQLite store.
    """

    def __init__(self, records: Dict[str, str] | None = None):
        self.records: Dict[str, str] = dict(records or {})

    def load_all(self) -> ProfileLoadResult:
        result = ProfileLoadResult()
        for lang_code in sorted(self.records):
            try:
                result.profiles[lang_code] = decode_profile(self.records[lang_code])
            except ProfileDecodeError as e:
                logger.warning(f"Skipping corrupt profile for '{lang_code}': {e}")
                profile_records_skipped_total.inc()
                result.skipped.append(lang_code)
        return result

    def save(self, lang_code: str, profile: CharacterFrequencyProfile) -> None:
        self.records[lang_code] = encode_profile(profile)
