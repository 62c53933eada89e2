"""Data models for remote feature evaluations."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class EvaluationValue(BaseModel):
    """Typed value attached to an evaluation; at most one field is usually set."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    string_value: str | None = Field(default=None, alias="stringValue")
    bool_value: bool | None = Field(default=None, alias="boolValue")
    long_value: int | None = Field(default=None, alias="longValue")
    double_value: float | None = Field(default=None, alias="doubleValue")


class FeatureEvaluation(BaseModel):
    """Raw ``{feature, variation, value}`` triple returned by the backend."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    feature: str
    variation: str
    value: EvaluationValue = Field(default_factory=EvaluationValue)


class EvaluationRecord(BaseModel):
    """Server decision for one registered feature, as held in the cache."""

    model_config = ConfigDict(frozen=True)

    name: str
    variation: str
    value: EvaluationValue = Field(default_factory=EvaluationValue)


@dataclass(frozen=True)
class CustomizationOverride:
    arn: str
    name: str


__all__ = [
    "CustomizationOverride",
    "EvaluationRecord",
    "EvaluationValue",
    "FeatureEvaluation",
]
