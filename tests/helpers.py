"""Shared test doubles for feature configuration tests."""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any

MOCK_FEATURE_EVALUATIONS: list[dict[str, Any]] = [
    {"feature": "testFeature", "variation": "TREATMENT", "value": {"stringValue": "testValue"}},
    {"feature": "featureA", "variation": "CONTROL", "value": {"stringValue": "testValue"}},
    {"feature": "featureB", "variation": "TREATMENT", "value": {"stringValue": "testValue"}},
    {
        "feature": "customizationArnOverride",
        "variation": "customizationName",
        "value": {"stringValue": "customizationARN"},
    },
]


class StubSource:
    """Evaluation source replaying queued responses; the last one repeats."""

    def __init__(self, *responses: Sequence[Mapping[str, Any]] | Exception) -> None:
        self.responses = list(responses)
        self.calls = 0

    async def fetch_evaluations(self) -> Sequence[Mapping[str, Any]]:
        self.calls += 1
        if not self.responses:
            raise AssertionError("unexpected fetch")
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return copy.deepcopy(list(response))
