"""Per-feature derivation rules layered on top of cached evaluations."""

from __future__ import annotations

from collections.abc import Mapping

from .models import CustomizationOverride, EvaluationRecord

TREATMENT = "TREATMENT"

PROJECT_CONTEXT_GROUPS: Mapping[str, str] = {
    "CONTROL": "control",
    "TREATMENT_1": "t1",
    "TREATMENT_2": "t2",
}
PROJECT_CONTEXT_FALLBACK = "control"


def is_treatment(record: EvaluationRecord | None) -> bool:
    return record is not None and record.variation == TREATMENT


def project_context_group(variation: str | None) -> str:
    """Map a rollout variation to its short group code.

    Unknown or missing variations resolve to ``PROJECT_CONTEXT_FALLBACK``.
    """

    if variation is None:
        return PROJECT_CONTEXT_FALLBACK
    return PROJECT_CONTEXT_GROUPS.get(variation, PROJECT_CONTEXT_FALLBACK)


def customization_override(
    record: EvaluationRecord | None,
) -> CustomizationOverride | None:
    if record is None:
        return None
    arn = record.value.string_value
    if not arn:
        return None
    return CustomizationOverride(arn=arn, name=record.variation)


__all__ = [
    "PROJECT_CONTEXT_FALLBACK",
    "PROJECT_CONTEXT_GROUPS",
    "TREATMENT",
    "customization_override",
    "is_treatment",
    "project_context_group",
]
