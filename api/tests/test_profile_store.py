"""Tests for the SQLite and in-memory profile stores."""

import sqlite3

import pytest

from translator.db.database import TranslatorDatabase
from translator.services.language.classifier import LanguageClassifier
from translator.services.language.profile import EMPTY_PROFILE, build_profile
from translator.services.language.store import (
    InMemoryProfileStore,
    ProfileStore,
    SQLiteProfileStore,
    StoreError,
)


def _insert_raw(database: TranslatorDatabase, lang_code: str, serialized) -> None:
    with database.get_connection() as conn:
        conn.execute(
            "INSERT INTO language_profiles (lang_code, char_frequencies) VALUES (?, ?)",
            (lang_code, serialized),
        )
        conn.commit()


class TestSQLiteProfileStore:
    def test_implements_protocol(self, sqlite_store):
        assert isinstance(sqlite_store, ProfileStore)
        assert isinstance(InMemoryProfileStore(), ProfileStore)

    def test_empty_table_loads_nothing(self, sqlite_store):
        result = sqlite_store.load_all()

        assert result.profiles == {}
        assert result.skipped == []

    def test_save_then_load(self, sqlite_store):
        en = build_profile("hello world")
        pt = build_profile("olá mundo")
        sqlite_store.save("en", en)
        sqlite_store.save("pt", pt)

        result = sqlite_store.load_all()

        assert result.profiles == {"en": en, "pt": pt}
        assert list(result.profiles) == ["en", "pt"]

    def test_save_replaces_instead_of_merging(self, sqlite_store, database):
        sqlite_store.save("xx", build_profile("aaaa"))
        sqlite_store.save("xx", build_profile("bbbb"))

        result = sqlite_store.load_all()
        assert result.profiles["xx"] == {"b": 1.0}
        with database.get_connection() as conn:
            count = conn.execute(
                "SELECT COUNT(*) FROM language_profiles WHERE lang_code = 'xx'"
            ).fetchone()[0]
        assert count == 1

    def test_empty_profile_persists(self, sqlite_store):
        sqlite_store.save("zz", EMPTY_PROFILE)

        assert sqlite_store.load_all().profiles["zz"] == EMPTY_PROFILE

    def test_corrupt_record_is_skipped_not_fatal(self, sqlite_store, database):
        sqlite_store.save("en", build_profile("hello"))
        _insert_raw(database, "bad", "e:0.5;t:0.5;")
        _insert_raw(database, "dup", '{"a": 0.5, "a": 0.5}')
        sqlite_store.save("pt", build_profile("olá"))

        result = sqlite_store.load_all()

        assert sorted(result.profiles) == ["en", "pt"]
        assert sorted(result.skipped) == ["bad", "dup"]
        assert result.skipped_count == 2

    def test_undecodable_rows_are_skipped(self, sqlite_store, database):
        sqlite_store.save("en", build_profile("hello"))
        _insert_raw(database, "zz", b"\xff\xfe{")
        _insert_raw(database, "yy", "[" * 100000)
        _insert_raw(database, "xx", 7)

        result = sqlite_store.load_all()

        assert list(result.profiles) == ["en"]
        assert sorted(result.skipped) == ["xx", "yy", "zz"]

    def test_classifier_starts_despite_undecodable_rows(self, sqlite_store, database):
        sqlite_store.save("en", build_profile("hello"))
        _insert_raw(database, "zz", b"\xff\xfe{")

        classifier = LanguageClassifier(sqlite_store)

        assert classifier.language_codes == ["en"]
        assert classifier.skipped_records == ["zz"]

    def test_unreadable_database_raises_store_error(self, tmp_path):
        database = TranslatorDatabase(str(tmp_path / "missing" / "dir" / "x.db"))
        store = SQLiteProfileStore(database)

        with pytest.raises(StoreError) as exc_info:
            store.load_all()
        assert exc_info.value.operation == "read"

    def test_missing_table_raises_store_error(self, tmp_path):
        # database file exists but the schema was never applied
        store = SQLiteProfileStore(TranslatorDatabase(str(tmp_path / "bare.db")))

        with pytest.raises(StoreError):
            store.load_all()
        with pytest.raises(StoreError) as exc_info:
            store.save("en", build_profile("hello"))
        assert exc_info.value.operation == "write"
        assert isinstance(exc_info.value.__cause__, sqlite3.Error)

    def test_survives_reopening(self, database):
        SQLiteProfileStore(database).save("fr", build_profile("bonjour"))

        reopened = TranslatorDatabase(str(database.db_path))
        reopened.initialize()

        assert SQLiteProfileStore(reopened).load_all().profiles["fr"] == build_profile(
            "bonjour"
        )


class TestInMemoryProfileStore:
    def test_round_trip_through_serialized_records(self):
        store = InMemoryProfileStore()
        store.save("en", build_profile("hello"))

        assert isinstance(store.records["en"], str)
        assert store.load_all().profiles == {"en": build_profile("hello")}

    def test_deeply_nested_record_skipped(self):
        store = InMemoryProfileStore({"en": '{"e": 1.0}', "zz": "[" * 100000})

        classifier = LanguageClassifier(store)

        assert classifier.language_codes == ["en"]
        assert classifier.skipped_records == ["zz"]

    def test_corrupt_record_skipped(self):
        store = InMemoryProfileStore({"en": '{"h": 1.0}', "xx": "garbage"})

        result = store.load_all()

        assert list(result.profiles) == ["en"]
        assert result.skipped == ["xx"]
