"""Process-wide cache of remote feature evaluations and its typed accessors."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

import httpx

from . import metrics
from .client import EvaluationSource
from .errors import FeatureConfigFetchError
from .models import EvaluationRecord, EvaluationValue, FeatureEvaluation
from .registry import FEATURE_DEFINITIONS, Features, definitions_of, getter_name, lookup
from .rules import is_treatment

logger = logging.getLogger(__name__)

OverrideValidator = Callable[[str], Awaitable[bool]]

_EMPTY: Mapping[str, EvaluationRecord] = MappingProxyType({})


class FeatureConfigProvider:
    """Fetches feature evaluations once and serves them from memory.

    The cache is a read-only mapping that is replaced by a single reference
    assignment after a successful fetch, so readers observe either the
    previous snapshot or the new one. All accessors are synchronous and
    resolve unknown identifiers and variations to defaults instead of raising.

    One ``get_<feature>`` accessor is generated for every registry entry; see
    :func:`featureconfig.registry.getter_name`.
    """

    def __init__(
        self,
        source: EvaluationSource,
        *,
        override_validator: OverrideValidator | None = None,
    ) -> None:
        self._source = source
        self._override_validator = override_validator
        self._configs: Mapping[str, EvaluationRecord] = _EMPTY

    async def fetch_feature_configs(self) -> None:
        """Replace the cached snapshot with the backend's current evaluations.

        Raises
        ------
        FeatureConfigFetchError
            If the backend call fails or returns a malformed payload. The
            previous snapshot stays authoritative.
        """

        try:
            raw = await self._source.fetch_evaluations()
            staged = self._stage(raw)
        except FeatureConfigFetchError:
            metrics.record_fetch("failure")
            logger.warning("Feature evaluation fetch returned a malformed response")
            raise
        except (httpx.HTTPError, OSError, ValueError) as exc:
            metrics.record_fetch("failure")
            logger.warning("Feature evaluation fetch failed: %s", exc)
            raise FeatureConfigFetchError("failed to fetch feature evaluations") from exc

        await self._validate_override(staged)
        self._configs = MappingProxyType(staged)
        metrics.record_fetch("success")
        metrics.cached_features.set(len(staged))
        logger.info(
            "feature_configs_fetched",
            extra={"features": self.get_feature_configs_telemetry()},
        )

    def _stage(self, raw: Sequence[Mapping[str, Any]]) -> dict[str, EvaluationRecord]:
        staged: dict[str, EvaluationRecord] = {}
        dropped = 0
        for item in raw:
            if not isinstance(item, Mapping):
                raise FeatureConfigFetchError("feature evaluation must be a mapping")
            evaluation = FeatureEvaluation.model_validate(item)
            identifier = lookup(evaluation.feature)
            if identifier is None:
                dropped += 1
                logger.debug("Ignoring unregistered feature %s", evaluation.feature)
                continue
            staged[identifier] = EvaluationRecord(
                name=FEATURE_DEFINITIONS[identifier].name,
                variation=evaluation.variation,
                value=evaluation.value,
            )
        metrics.record_dropped(dropped)
        return staged

    async def _validate_override(self, staged: dict[str, EvaluationRecord]) -> None:
        record = staged.get(Features.customizationArnOverride)
        if record is None or self._override_validator is None:
            return
        arn = record.value.string_value or ""
        try:
            accepted = bool(await self._override_validator(arn))
        except Exception:
            logger.exception("Customization override validation failed for %s", arn)
            accepted = False
        if not accepted:
            logger.warning("Dropping unavailable customization override %s", arn)
            del staged[Features.customizationArnOverride]

    def reset(self) -> None:
        """Discard the cached snapshot."""

        self._configs = _EMPTY
        metrics.cached_features.set(0)

    def get_feature_configs(self) -> dict[str, EvaluationRecord]:
        """Return a copy of the snapshot keyed by registry identifier.

        Keys are identifiers such as ``test``; the remote feature name
        (``testFeature``) is available as ``record.name``.
        """

        return dict(self._configs)

    def get_feature(self, key: str) -> EvaluationRecord | None:
        identifier = lookup(key)
        if identifier is None:
            return None
        return self._configs.get(identifier)

    def get_feature_value(self, key: str) -> EvaluationValue | None:
        """Return the cached value for ``key``, else its registered default."""

        identifier = lookup(key)
        if identifier is None:
            return None
        record = self._configs.get(identifier)
        if record is not None:
            return record.value
        return FEATURE_DEFINITIONS[identifier].default

    def is_enabled(self, key: str) -> bool:
        return is_treatment(self.get_feature(key))

    def get_feature_configs_telemetry(self) -> str:
        snapshot = self._configs
        pairs = [
            f"{snapshot[identifier].name}: {snapshot[identifier].variation}"
            for identifier in definitions_of()
            if identifier in snapshot
        ]
        return "{" + ", ".join(pairs) + "}"


def _make_getter(identifier: str) -> Callable[[FeatureConfigProvider], Any]:
    meta = FEATURE_DEFINITIONS[identifier]

    def getter(self: FeatureConfigProvider) -> Any:
        return meta.derive(self.get_feature(identifier), meta)

    getter.__name__ = getter_name(identifier)
    getter.__qualname__ = f"{FeatureConfigProvider.__name__}.{getter.__name__}"
    getter.__doc__ = meta.description or f"Derived value of ``{meta.name}``."
    return getter


def _install_getters(cls: type[FeatureConfigProvider]) -> None:
    for identifier in definitions_of():
        name = getter_name(identifier)
        if name in vars(cls):
            raise TypeError(f"{cls.__name__}.{name} is already defined")
        setattr(cls, name, _make_getter(identifier))
    missing = [i for i in definitions_of() if not callable(getattr(cls, getter_name(i), None))]
    if missing:
        raise TypeError(f"missing feature getters for: {', '.join(missing)}")


_install_getters(FeatureConfigProvider)


__all__ = ["FeatureConfigProvider", "OverrideValidator"]
