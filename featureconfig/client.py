"""HTTP client for the remote experimentation backend."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

import httpx

from .errors import FeatureConfigFetchError


class EvaluationSource(Protocol):
    async def fetch_evaluations(self) -> Sequence[Mapping[str, Any]]: ...


class FeatureEvaluationClient:
    """Lists the feature evaluations the backend assigned to this client."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        auth_header: str = "Authorization",
        auth_token: str | None = None,
        user_context: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers=self._build_headers(auth_header, auth_token),
        )
        self._owns_client = client is None
        self._user_context = dict(user_context or {})

    def _build_headers(self, header: str, token: str | None) -> dict[str, str]:
        if token:
            return {header: f"Bearer {token}"}
        return {}

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_evaluations(self) -> list[Mapping[str, Any]]:
        resp = await self._client.post(
            f"{self._base_url}/listFeatureEvaluations",
            json={"userContext": self._user_context},
        )
        resp.raise_for_status()
        try:
            body = resp.json()
        except ValueError as exc:
            raise FeatureConfigFetchError("feature evaluation response is not JSON") from exc
        if not isinstance(body, Mapping):
            raise FeatureConfigFetchError("feature evaluation response must be a mapping")
        evaluations = body.get("featureEvaluations") or []
        if not isinstance(evaluations, list):
            raise FeatureConfigFetchError("featureEvaluations must be a list")
        return evaluations


__all__ = ["EvaluationSource", "FeatureEvaluationClient"]
