from scene_features.features.derivative import derivative_of, derivative_strategy
from scene_features.features.kinematics import FEATURES
from scene_features.features.registry import (
    FeatureConfigurationError,
    FeatureDescriptor,
    FeatureError,
    FeatureNotFoundError,
    FeatureRegistry,
)
from scene_features.features.values import FeatureState, FeatureValue, is_feature_valid

__all__ = [
    "FEATURES",
    "FeatureConfigurationError",
    "FeatureDescriptor",
    "FeatureError",
    "FeatureNotFoundError",
    "FeatureRegistry",
    "FeatureState",
    "FeatureValue",
    "derivative_of",
    "derivative_strategy",
    "is_feature_valid",
]
