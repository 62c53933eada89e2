"""Configuration helpers for the feature configuration provider."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import yaml  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

CONFIG_SECTION = "feature_config"


def _env_value(env: Mapping[str, str], key: str, default: str | None = None) -> str | None:
    value = env.get(key)
    if value is None or str(value).strip() == "":
        return default
    return value


def _required_env(env: Mapping[str, str], key: str) -> str:
    value = _env_value(env, key)
    if not value:
        raise ValueError(f"{key} is required")
    return value


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass(frozen=True)
class FeatureConfigSettings:
    endpoint: str
    timeout_sec: float = 5.0
    auth_header: str = "Authorization"
    auth_token: str | None = None
    client_id: str | None = None
    ide_category: str = "VSCODE"
    operating_system: str | None = None
    product: str = "CodeWhisperer"
    fetch_on_start: bool = True

    def user_context(self) -> dict[str, str]:
        """Return the ``userContext`` body sent with evaluation requests."""

        ctx = {"ideCategory": self.ide_category, "product": self.product}
        if self.operating_system:
            ctx["operatingSystem"] = self.operating_system
        if self.client_id:
            ctx["clientId"] = self.client_id
        return ctx

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "FeatureConfigSettings":
        endpoint = _required_env(env, "FEATURE_CONFIG_ENDPOINT").strip()
        timeout_sec = float(_env_value(env, "FEATURE_CONFIG_TIMEOUT_SEC", "5.0"))
        auth_header = _env_value(env, "FEATURE_CONFIG_AUTH_HEADER", "Authorization")
        auth_token = _env_value(env, "FEATURE_CONFIG_AUTH_TOKEN")
        client_id = _env_value(env, "FEATURE_CONFIG_CLIENT_ID")
        ide_category = _env_value(env, "FEATURE_CONFIG_IDE_CATEGORY", "VSCODE")
        operating_system = _env_value(env, "FEATURE_CONFIG_OPERATING_SYSTEM")
        product = _env_value(env, "FEATURE_CONFIG_PRODUCT", "CodeWhisperer")
        fetch_on_start = _as_bool(_env_value(env, "FEATURE_CONFIG_FETCH_ON_START", "true"))

        return cls(
            endpoint=endpoint,
            timeout_sec=timeout_sec,
            auth_header=str(auth_header),
            auth_token=str(auth_token) if auth_token else None,
            client_id=str(client_id) if client_id else None,
            ide_category=str(ide_category),
            operating_system=str(operating_system) if operating_system else None,
            product=str(product),
            fetch_on_start=fetch_on_start,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FeatureConfigSettings":
        raw = dict(data)
        endpoint = raw.get("endpoint")
        if not endpoint:
            raise ValueError(f"{CONFIG_SECTION} configuration requires 'endpoint'")
        return cls(
            endpoint=str(endpoint).strip(),
            timeout_sec=float(raw.get("timeout_sec", 5.0)),
            auth_header=str(raw.get("auth_header") or "Authorization"),
            auth_token=raw.get("auth_token") or None,
            client_id=raw.get("client_id") or None,
            ide_category=str(raw.get("ide_category") or "VSCODE"),
            operating_system=raw.get("operating_system") or None,
            product=str(raw.get("product") or "CodeWhisperer"),
            fetch_on_start=_as_bool(raw.get("fetch_on_start", True)),
        )


def _read_config_mapping(path: str) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            try:
                data = yaml.safe_load(fh) or {}
            except yaml.YAMLError as exc:
                logger.error("Failed to parse configuration file %s: %s", path, exc)
                raise ValueError(f"Failed to parse configuration file {path}") from exc
    except (FileNotFoundError, OSError) as exc:
        logger.error("Unable to open configuration file %s: %s", path, exc)
        raise

    if not isinstance(data, dict):
        raise TypeError("Feature config file must be a mapping")
    return data


def load_feature_config(
    path: str | None = None, env: Mapping[str, str] | None = None
) -> FeatureConfigSettings:
    """Load settings from the ``feature_config`` section of ``path`` or from ``env``."""

    if path is not None:
        section = _read_config_mapping(path).get(CONFIG_SECTION)
        if not isinstance(section, Mapping):
            raise TypeError(f"'{CONFIG_SECTION}' section must be a mapping")
        return FeatureConfigSettings.from_mapping(section)
    return FeatureConfigSettings.from_env(env if env is not None else {})


__all__ = ["CONFIG_SECTION", "FeatureConfigSettings", "load_feature_config"]
