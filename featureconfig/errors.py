"""Exceptions raised by the feature configuration provider."""

from __future__ import annotations


class FeatureConfigError(RuntimeError):
    """Base class for feature configuration failures."""


class FeatureConfigFetchError(FeatureConfigError):
    """Fetching evaluations failed; the cached snapshot was left untouched."""


__all__ = ["FeatureConfigError", "FeatureConfigFetchError"]
