"""Tests for character-frequency profiles and the Euclidean distance."""

import math

import pytest

from translator.services.language.profile import (
    EMPTY_PROFILE,
    CharacterFrequencyProfile,
    build_profile,
    euclidean_distance,
    normalize_text,
)
from translator.services.language.samples import REFERENCE_SAMPLES

SAMPLE_TEXTS = [
    "The quick brown fox jumps over the lazy dog.",
    "Ação, coração e pão!",
    "Здравствуй, мир",
    "日本語のテキスト",
    "Room 101 on floor 3",
    "a",
    *REFERENCE_SAMPLES.values(),
]


class TestNormalizeText:
    def test_lowercases_and_drops_punctuation_and_whitespace(self):
        assert normalize_text("Hello, World!") == "helloworld"

    def test_keeps_accents_digits_and_other_scripts(self):
        assert normalize_text("Ça coûte 20 €") == "çacoûte20"
        assert normalize_text("Привет мир") == "приветмир"

    def test_none_and_empty(self):
        assert normalize_text("") == ""
        assert normalize_text(None) == ""


class TestBuildProfile:
    def test_counts_divided_by_total(self):
        profile = build_profile("Abba!")

        assert dict(profile) == {"a": 0.5, "b": 0.5}

    def test_case_folded_before_counting(self):
        assert build_profile("AaA") == {"a": 1.0}

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_probabilities_sum_to_one(self, text):
        profile = build_profile(text)

        assert math.isclose(profile.total, 1.0, abs_tol=1e-9)
        assert all(0.0 <= p <= 1.0 for p in profile.values())

    @pytest.mark.parametrize("text", ["", "   ", "?!.,;:-", "\n\t"])
    def test_degenerate_text_gives_empty_profile(self, text):
        profile = build_profile(text)

        assert len(profile) == 0
        assert profile.total == 0
        assert profile == EMPTY_PROFILE

    def test_profile_is_read_only(self):
        profile = build_profile("abc")

        with pytest.raises(TypeError):
            profile["a"] = 1.0  # type: ignore[index]

    def test_top_orders_by_frequency_then_character(self):
        profile = build_profile("aaa bb c")

        assert profile.top(2) == [("a", 0.5), ("b", pytest.approx(2 / 6))]


class TestEuclideanDistance:
    @pytest.mark.parametrize("text", SAMPLE_TEXTS + [""])
    def test_distance_to_self_is_zero(self, text):
        profile = build_profile(text)

        assert euclidean_distance(profile, profile) == 0.0

    def test_symmetric(self):
        profiles = [build_profile(text) for text in SAMPLE_TEXTS] + [EMPTY_PROFILE]

        for a in profiles:
            for b in profiles:
                assert euclidean_distance(a, b) == euclidean_distance(b, a)

    def test_missing_characters_count_as_zero(self):
        a = CharacterFrequencyProfile({"a": 1.0})
        b = CharacterFrequencyProfile({"b": 1.0})

        assert euclidean_distance(a, b) == pytest.approx(math.sqrt(2))

    def test_two_empty_profiles(self):
        assert euclidean_distance(EMPTY_PROFILE, CharacterFrequencyProfile()) == 0.0

    def test_empty_against_non_empty_is_norm(self):
        profile = build_profile("hello world")

        assert euclidean_distance(EMPTY_PROFILE, profile) == pytest.approx(profile.norm())
        assert euclidean_distance(profile, EMPTY_PROFILE) == pytest.approx(profile.norm())

    def test_accepts_plain_dicts(self):
        assert euclidean_distance({"a": 0.6, "b": 0.4}, {"a": 0.6, "b": 0.4}) == 0.0
