"""Test configuration and shared fixtures."""

from __future__ import annotations

import copy
from typing import Any

import pytest
import pytest_asyncio

from featureconfig import metrics
from featureconfig.provider import FeatureConfigProvider

from tests.helpers import MOCK_FEATURE_EVALUATIONS, StubSource


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset_metrics()
    yield
    metrics.reset_metrics()


@pytest.fixture
def mock_evaluations() -> list[dict[str, Any]]:
    return copy.deepcopy(MOCK_FEATURE_EVALUATIONS)


@pytest_asyncio.fixture
async def fetched_provider(mock_evaluations) -> FeatureConfigProvider:
    provider = FeatureConfigProvider(StubSource(mock_evaluations))
    await provider.fetch_feature_configs()
    return provider
