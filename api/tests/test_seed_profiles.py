"""Tests for the profile seeding script."""

import argparse

import pytest

from translator.db.database import TranslatorDatabase
from translator.scripts.seed_profiles import main, parse_sample
from translator.services.language.profile import build_profile
from translator.services.language.samples import REFERENCE_SAMPLES
from translator.services.language.store import SQLiteProfileStore


def _stored_profiles(db_path):
    return SQLiteProfileStore(TranslatorDatabase(str(db_path))).load_all().profiles


class TestParseSample:
    def test_code_and_path(self):
        code, path = parse_sample("DE=samples/german.txt")

        assert code == "de"
        assert str(path) == "samples/german.txt"

    @pytest.mark.parametrize("value", ["de", "=file.txt", "de=", "de=  "])
    def test_rejects_malformed(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_sample(value)


class TestSeedMain:
    def test_seeds_reference_profiles(self, tmp_path):
        db_path = tmp_path / "seed" / "translator.db"

        written = main(db_path=str(db_path))

        assert written == ["en", "pt", "es", "fr"]
        stored = _stored_profiles(db_path)
        assert stored["pt"] == build_profile(REFERENCE_SAMPLES["pt"])

    def test_second_run_writes_nothing(self, tmp_path):
        db_path = tmp_path / "translator.db"
        main(db_path=str(db_path))

        assert main(db_path=str(db_path)) == []
        assert main(overwrite=True, db_path=str(db_path)) == ["en", "pt", "es", "fr"]

    def test_extra_sample_files(self, tmp_path):
        db_path = tmp_path / "translator.db"
        sample = tmp_path / "german.txt"
        sample.write_text("Der schnelle braune Fuchs springt über den faulen Hund.", encoding="utf-8")

        written = main(samples=[("de", sample)], db_path=str(db_path))

        assert written[-1] == "de"
        assert _stored_profiles(db_path)["de"] == build_profile(
            "Der schnelle braune Fuchs springt über den faulen Hund."
        )

    def test_missing_sample_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            main(
                samples=[("de", tmp_path / "missing.txt")],
                db_path=str(tmp_path / "translator.db"),
            )
