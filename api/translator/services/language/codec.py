"""Serialization of character-frequency profiles for durable storage.

A profile is stored as a JSON object mapping each character to its
probability, keys sorted, non-ASCII characters written as-is. JSON floats are
written with ``repr`` precision, so decoding returns exactly the encoded
values.
"""

import json
import math
from typing import Any

from translator.services.language.profile import CharacterFrequencyProfile


class ProfileDecodeError(ValueError):
    """Raised when a stored profile cannot be decoded."""


def encode_profile(profile: CharacterFrequencyProfile) -> str:
    """Serialize ``profile`` to its JSON text form."""
    return json.dumps(
        dict(profile), ensure_ascii=False, sort_keys=True, allow_nan=False
    )


def _reject_duplicates(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ProfileDecodeError(f"Character {key!r} appears more than once")
        result[key] = value
    return result


def decode_profile(serialized: str) -> CharacterFrequencyProfile:
    """Parse the JSON text form back into a profile.

    Raises:
        ProfileDecodeError: If the text is not a JSON object of single
            characters mapped to finite probabilities in [0, 1].
    """
    if serialized is None:
        raise ProfileDecodeError("Serialized profile is missing")
    try:
        raw = json.loads(serialized, object_pairs_hook=_reject_duplicates)
    except ProfileDecodeError:
        raise
    except (ValueError, TypeError, RecursionError) as e:
        # Undecodable bytes, nesting too deep for the parser, non-text values
        raise ProfileDecodeError(f"Invalid profile JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ProfileDecodeError(
            f"Profile must be a JSON object, got {type(raw).__name__}"
        )

    frequencies: dict[str, float] = {}
    for char, value in raw.items():
        if len(char) != 1:
            raise ProfileDecodeError(f"Profile key {char!r} is not a single character")
        # bool is an int subclass; true/false are not probabilities
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ProfileDecodeError(f"Probability for {char!r} is not a number")
        value = float(value)
        if not math.isfinite(value) or not 0.0 <= value <= 1.0:
            raise ProfileDecodeError(f"Probability for {char!r} out of range: {value}")
        frequencies[char] = value
    return CharacterFrequencyProfile(frequencies)
