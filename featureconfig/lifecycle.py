"""Explicit open/fetch/close lifecycle for the per-process provider."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from .client import EvaluationSource, FeatureEvaluationClient
from .config import FeatureConfigSettings
from .errors import FeatureConfigFetchError
from .provider import FeatureConfigProvider, OverrideValidator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_feature_config(
    settings: FeatureConfigSettings,
    *,
    source: EvaluationSource | None = None,
    override_validator: OverrideValidator | None = None,
) -> AsyncIterator[FeatureConfigProvider]:
    """Yield a provider for the lifetime of the ``async with`` block.

    The host application keeps the yielded provider as its single instance
    and passes it to consumers. A failed initial fetch is logged and leaves
    the provider with an empty snapshot.
    """

    client: FeatureEvaluationClient | None = None
    if source is None:
        client = FeatureEvaluationClient(
            settings.endpoint,
            timeout=settings.timeout_sec,
            auth_header=settings.auth_header,
            auth_token=settings.auth_token,
            user_context=settings.user_context(),
        )
        source = client
    provider = FeatureConfigProvider(source, override_validator=override_validator)
    try:
        if settings.fetch_on_start:
            try:
                await provider.fetch_feature_configs()
            except FeatureConfigFetchError:
                logger.warning("Initial feature evaluation fetch failed; using defaults")
        yield provider
    finally:
        provider.reset()
        if client is not None:
            await client.close()


__all__ = ["open_feature_config"]
