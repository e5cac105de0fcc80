"""Prometheus metrics for language detection and the translation lookup pipeline."""

from prometheus_client import Counter, Gauge, Histogram

language_classification_total = Counter(
    "translator_language_classification_total",
    "Total language classifications by resulting language code",
    ["result"],
)

language_classification_distance = Histogram(
    "translator_language_classification_distance",
    "Distance between the input profile and the winning language profile",
    buckets=(0.05, 0.1, 0.15, 0.2, 0.25, 0.3, 0.4, 0.5, 0.75, 1.0, 1.5),
)

language_profiles_loaded = Gauge(
    "translator_language_profiles_loaded",
    "Number of language profiles held in the in-memory catalog",
)

profile_records_skipped_total = Counter(
    "translator_profile_records_skipped_total",
    "Stored language profile records skipped because they could not be decoded",
)

profile_upserts_total = Counter(
    "translator_profile_upserts_total",
    "Language profile add/update attempts by outcome",
    ["outcome"],
)

translation_lookups_total = Counter(
    "translator_translation_lookups_total",
    "Translation lookups by the tier that produced the result",
    ["tier"],
)

translation_operation_duration_seconds = Histogram(
    "translator_translation_operation_duration_seconds",
    "Duration of translation operations",
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1),
)

translation_errors_total = Counter(
    "translator_translation_errors_total",
    "Translation lookup errors by stage",
    ["stage"],
)
