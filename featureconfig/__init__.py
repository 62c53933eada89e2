"""Remote feature evaluation cache with fail-safe typed accessors."""

from .client import EvaluationSource, FeatureEvaluationClient
from .config import FeatureConfigSettings, load_feature_config
from .errors import FeatureConfigError, FeatureConfigFetchError
from .lifecycle import open_feature_config
from .models import CustomizationOverride, EvaluationRecord, EvaluationValue
from .provider import FeatureConfigProvider
from .registry import FEATURE_DEFINITIONS, Features, definitions_of, getter_name

__all__ = [
    "CustomizationOverride",
    "EvaluationRecord",
    "EvaluationSource",
    "EvaluationValue",
    "FEATURE_DEFINITIONS",
    "FeatureConfigError",
    "FeatureConfigFetchError",
    "FeatureConfigProvider",
    "FeatureConfigSettings",
    "FeatureEvaluationClient",
    "Features",
    "definitions_of",
    "getter_name",
    "load_feature_config",
    "open_feature_config",
]
