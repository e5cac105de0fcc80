"""Frequency-profile language detection and lookup translation service."""
