"""Static registry of the features this process knows how to evaluate.

The registry is the single source of truth for which remote evaluations are
accepted into the cache, the order used for telemetry, and the accessor that
the provider generates for each entry.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .models import CustomizationOverride, EvaluationRecord, EvaluationValue
from .rules import customization_override, is_treatment, project_context_group

Derivation = Callable[[EvaluationRecord | None, "FeatureMetadata"], Any]


def _string_or_default(record: EvaluationRecord | None, meta: FeatureMetadata) -> str | None:
    if record is not None and record.value.string_value is not None:
        return record.value.string_value
    if meta.default is not None:
        return meta.default.string_value
    return None


def _enabled(record: EvaluationRecord | None, _: FeatureMetadata) -> bool:
    return is_treatment(record)


def _override(
    record: EvaluationRecord | None, _: FeatureMetadata
) -> CustomizationOverride | None:
    return customization_override(record)


def _group(record: EvaluationRecord | None, _: FeatureMetadata) -> str:
    return project_context_group(record.variation if record is not None else None)


@dataclass(frozen=True)
class FeatureMetadata:
    name: str
    derive: Derivation = field(compare=False)
    default: EvaluationValue | None = None
    description: str = ""


class Features:
    """Identifiers of every registered feature."""

    test = "test"
    featureA = "featureA"
    featureB = "featureB"
    customizationArnOverride = "customizationArnOverride"
    projectContextGroup = "projectContextGroup"
    dataCollectionFeature = "dataCollectionFeature"


FEATURE_DEFINITIONS: Mapping[str, FeatureMetadata] = MappingProxyType(
    {
        Features.test: FeatureMetadata(
            name="testFeature",
            derive=_string_or_default,
            default=EvaluationValue(string_value="testValue"),
            description="Sentinel feature used to verify the evaluation round trip.",
        ),
        Features.featureA: FeatureMetadata(name="featureA", derive=_enabled),
        Features.featureB: FeatureMetadata(name="featureB", derive=_enabled),
        Features.customizationArnOverride: FeatureMetadata(
            name="customizationArnOverride",
            derive=_override,
            description="Server-assigned customization ARN and its display name.",
        ),
        Features.projectContextGroup: FeatureMetadata(
            name="ProjectContextV2",
            derive=_group,
            description="Staged rollout group for project context.",
        ),
        Features.dataCollectionFeature: FeatureMetadata(
            name="IDEProjectContextDataCollection",
            derive=_enabled,
        ),
    }
)

_BY_REMOTE_NAME: Mapping[str, str] = MappingProxyType(
    {meta.name: identifier for identifier, meta in FEATURE_DEFINITIONS.items()}
)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def definitions_of() -> tuple[str, ...]:
    """Return every registered identifier in registry order."""

    return tuple(FEATURE_DEFINITIONS)


def lookup(key: Any) -> str | None:
    """Resolve an identifier or remote feature name to its identifier."""

    if not isinstance(key, str):
        return None
    if key in FEATURE_DEFINITIONS:
        return key
    return _BY_REMOTE_NAME.get(key)


def getter_name(identifier: str) -> str:
    return "get_" + _CAMEL_BOUNDARY.sub("_", identifier).lower()


__all__ = [
    "FEATURE_DEFINITIONS",
    "FeatureMetadata",
    "Features",
    "definitions_of",
    "getter_name",
    "lookup",
]
