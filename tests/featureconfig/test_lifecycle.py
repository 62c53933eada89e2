import httpx
import pytest

from featureconfig.client import FeatureEvaluationClient
from featureconfig.config import FeatureConfigSettings
from featureconfig.lifecycle import open_feature_config

from tests.helpers import MOCK_FEATURE_EVALUATIONS, StubSource


@pytest.mark.asyncio
async def test_open_fetches_on_start_and_resets_on_exit() -> None:
    settings = FeatureConfigSettings(endpoint="http://features")
    source = StubSource(MOCK_FEATURE_EVALUATIONS)

    async with open_feature_config(settings, source=source) as provider:
        assert source.calls == 1
        assert provider.is_enabled("featureB") is True

    assert provider.get_feature_configs() == {}


@pytest.mark.asyncio
async def test_open_without_initial_fetch() -> None:
    settings = FeatureConfigSettings(endpoint="http://features", fetch_on_start=False)
    source = StubSource(MOCK_FEATURE_EVALUATIONS)

    async with open_feature_config(settings, source=source) as provider:
        assert source.calls == 0
        assert provider.get_test() == "testValue"
        await provider.fetch_feature_configs()
        assert provider.is_enabled("featureB") is True


@pytest.mark.asyncio
async def test_failed_initial_fetch_yields_empty_provider() -> None:
    settings = FeatureConfigSettings(endpoint="http://features")
    source = StubSource(httpx.ConnectError("backend unreachable"))

    async with open_feature_config(settings, source=source) as provider:
        assert provider.get_feature_configs() == {}
        assert provider.is_enabled("featureB") is False
        assert provider.get_project_context_group() == "control"


@pytest.mark.asyncio
async def test_non_json_initial_response_yields_empty_provider() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    settings = FeatureConfigSettings(endpoint="http://features")
    client = FeatureEvaluationClient(
        "http://features",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    try:
        async with open_feature_config(settings, source=client) as provider:
            assert provider.get_feature_configs() == {}
            assert provider.get_test() == "testValue"
    finally:
        await client._client.aclose()


@pytest.mark.asyncio
async def test_open_applies_override_validator() -> None:
    checked: list[str] = []

    async def reject(arn: str) -> bool:
        checked.append(arn)
        return False

    settings = FeatureConfigSettings(endpoint="http://features")
    source = StubSource(MOCK_FEATURE_EVALUATIONS)

    async with open_feature_config(settings, source=source, override_validator=reject) as provider:
        assert checked == ["customizationARN"]
        assert provider.get_customization_arn_override() is None
        assert provider.is_enabled("featureB") is True
