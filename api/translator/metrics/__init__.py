"""Centralized metrics module for Prometheus instrumentation.

Usage:
    from translator.metrics.translation_metrics import language_classification_total
"""

from translator.metrics import translation_metrics

__all__ = ["translation_metrics"]
