"""
Pytest configuration and fixtures for the translator API.

This module provides:
- Temporary SQLite databases with the translator schema applied
- Profile stores and classifiers loaded with the reference profiles
- A FastAPI test client running against an isolated data directory
"""

from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from translator.core.config import Settings, reset_settings
from translator.db.database import TranslatorDatabase
from translator.services.language.classifier import LanguageClassifier
from translator.services.language.samples import REFERENCE_SAMPLES
from translator.services.language.store import (
    InMemoryProfileStore,
    SQLiteProfileStore,
    StoreError,
)
from translator.services.translation.cache import TieredTranslationCache
from translator.services.translation.translation_service import TranslationService


class FailingSaveStore(InMemoryProfileStore):
    """In-memory store whose writes can be switched to fail."""

    def __init__(self, records=None):
        super().__init__(records)
        self.fail_saves = False
        self.save_calls = 0

    def save(self, lang_code, profile):
        self.save_calls += 1
        if self.fail_saves:
            raise StoreError(f"simulated write failure for '{lang_code}'", "write")
        super().save(lang_code, profile)


class UnavailableStore:
    """Store that cannot be read or written at all."""

    def load_all(self):
        raise StoreError("database is locked", "read")

    def save(self, lang_code, profile):
        raise StoreError("database is locked", "write")


@pytest.fixture
def database(tmp_path: Path) -> TranslatorDatabase:
    """Initialized translator database in a temporary directory."""
    db = TranslatorDatabase(str(tmp_path / "translator.db"))
    db.initialize()
    return db


@pytest.fixture
def sqlite_store(database: TranslatorDatabase) -> SQLiteProfileStore:
    return SQLiteProfileStore(database)


@pytest.fixture
def reference_store() -> InMemoryProfileStore:
    """In-memory store holding the four reference profiles."""
    store = InMemoryProfileStore()
    classifier = LanguageClassifier(store)
    for lang_code, sample in REFERENCE_SAMPLES.items():
        classifier.upsert_profile(lang_code, sample)
    return store


@pytest.fixture
def reference_classifier(reference_store: InMemoryProfileStore) -> LanguageClassifier:
    """Classifier bootstrapped from a store with the reference profiles."""
    return LanguageClassifier.bootstrap_from(reference_store)


@pytest.fixture
def failing_store(reference_store: InMemoryProfileStore) -> FailingSaveStore:
    """Reference profiles in a store whose writes can be made to fail."""
    return FailingSaveStore(reference_store.records)


@pytest.fixture
def unavailable_store() -> UnavailableStore:
    return UnavailableStore()


@pytest.fixture
def translation_service(
    database: TranslatorDatabase, sqlite_store: SQLiteProfileStore
) -> TranslationService:
    """Translation service over a SQLite-backed reference catalog."""
    classifier = LanguageClassifier(sqlite_store)
    for lang_code, sample in REFERENCE_SAMPLES.items():
        classifier.upsert_profile(lang_code, sample)
    return TranslationService(
        classifier=classifier,
        cache_backend=TieredTranslationCache(database, l1_size=10),
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return Settings(DEBUG=True, DATA_DIR=str(tmp_path / "data"), ENVIRONMENT="testing")


@pytest.fixture
def test_client(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[TestClient, None, None]:
    """FastAPI test client with the lifespan run against a temporary DATA_DIR.

    The reference profiles are seeded at startup.
    """
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("SEED_REFERENCE_PROFILES", "true")
    reset_settings()

    # Import app here to avoid triggering Settings validation at module load time
    from translator.main import app

    with TestClient(app) as client:
        yield client
    reset_settings()
