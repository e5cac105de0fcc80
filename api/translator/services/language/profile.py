"""Character-frequency profiles and the distance between them.

A profile maps each lower-cased letter or digit of a text to its relative
frequency. Two profiles are compared with the Euclidean distance over the
union of their characters, a missing character counting as probability 0.
"""

import math
from collections import Counter
from types import MappingProxyType
from typing import Iterator, Mapping


class CharacterFrequencyProfile(Mapping[str, float]):
    """Immutable character -> probability mapping.

    Probabilities sum to 1.0 for a profile built from text with at least one
    letter or digit; otherwise the profile is empty. Profiles are never
    mutated: an update replaces the whole profile.
    """

    __slots__ = ("_frequencies",)

    def __init__(self, frequencies: Mapping[str, float] | None = None):
        self._frequencies = MappingProxyType(dict(frequencies or {}))

    def __getitem__(self, char: str) -> float:
        return self._frequencies[char]

    def __iter__(self) -> Iterator[str]:
        return iter(self._frequencies)

    def __len__(self) -> int:
        return len(self._frequencies)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CharacterFrequencyProfile):
            return dict(self._frequencies) == dict(other._frequencies)
        if isinstance(other, Mapping):
            return dict(self._frequencies) == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._frequencies.items()))

    def __repr__(self) -> str:
        return f"CharacterFrequencyProfile({dict(self._frequencies)!r})"

    @property
    def total(self) -> float:
        """Sum of all probabilities (1.0 or 0.0 up to rounding)."""
        return math.fsum(self._frequencies.values())

    def norm(self) -> float:
        """L2 norm, i.e. the distance to the empty profile."""
        return math.sqrt(math.fsum(p * p for p in self._frequencies.values()))

    def top(self, n: int = 5) -> list[tuple[str, float]]:
        """Most frequent characters, ties broken by character."""
        return sorted(self._frequencies.items(), key=lambda kv: (-kv[1], kv[0]))[:n]


EMPTY_PROFILE = CharacterFrequencyProfile()


def normalize_text(text: str) -> str:
    """Lower-case ``text`` and keep only Unicode letters and digits."""
    return "".join(ch for ch in (text or "").lower() if ch.isalnum())


def build_profile(text: str) -> CharacterFrequencyProfile:
    """Compute the character-frequency profile of ``text``.

    Accented letters and non-Latin scripts are kept; whitespace, punctuation
    and symbols are dropped. Text with nothing left after normalization yields
    the empty profile.
    """
    counts = Counter(normalize_text(text))
    total = sum(counts.values())
    if total == 0:
        return EMPTY_PROFILE
    return CharacterFrequencyProfile(
        {char: count / total for char, count in counts.items()}
    )


def euclidean_distance(
    a: Mapping[str, float], b: Mapping[str, float]
) -> float:
    """Euclidean distance between two profiles over the union of their keys.

    The union is walked in sorted order so that distance(a, b) and
    distance(b, a) add up the same terms in the same order.
    """
    squares = []
    for char in sorted(a.keys() | b.keys()):
        diff = a.get(char, 0.0) - b.get(char, 0.0)
        squares.append(diff * diff)
    return math.sqrt(math.fsum(squares))
