"""
The kinematic feature catalog.

FEATURES is the process-wide registry. Importing this module declares every
feature below and then freezes the registry, so by the time any caller can
reach FEATURES it is read-only.

Base features read straight from the entity state:

    posFt    (m)     — lateral offset from the lane centerline
    posFyaw  (rad)   — heading relative to the lane
    speed    (m/s)   — scalar speed
    velFs    (m/s)   — longitudinal velocity, speed * cos(posFyaw)
    velFt    (m/s)   — lateral velocity, speed * sin(posFyaw)

Derivative chain, each one backward difference of the feature above it:

    speed -> acc   -> jerk
    velFs -> accFs -> jerkFs
    velFt -> accFt -> jerkFt

history_depth counts the frames a feature reads: 2 for accelerations, 3 for jerks.
"""

from __future__ import annotations

from scene_features.features.derivative import derivative_strategy
from scene_features.features.registry import FeatureRegistry
from scene_features.features.values import FeatureValue

FEATURES = FeatureRegistry()


def _entity_attribute(attr: str):
    def _strategy(descriptor, record, roadway, vehicle_index, pastframe=0):
        return FeatureValue(float(getattr(record[pastframe][vehicle_index], attr)))

    return _strategy


FEATURES.declare("PosFt", "posFt", float, "m", strategy=_entity_attribute("t"))
FEATURES.declare("PosFyaw", "posFyaw", float, "rad", strategy=_entity_attribute("phi"))
FEATURES.declare("Speed", "speed", float, "m/s", strategy=_entity_attribute("speed"))
FEATURES.declare("VelFs", "velFs", float, "m/s", strategy=_entity_attribute("vel_s"))
FEATURES.declare("VelFt", "velFt", float, "m/s", strategy=_entity_attribute("vel_t"))

_DERIVATIVES = [
    # (name, symbol, units, base symbol, history_depth)
    ("Acc", "acc", "m/s^2", "speed", 2),
    ("AccFs", "accFs", "m/s^2", "velFs", 2),
    ("AccFt", "accFt", "m/s^2", "velFt", 2),
    ("Jerk", "jerk", "m/s^3", "acc", 3),
    ("JerkFs", "jerkFs", "m/s^3", "accFs", 3),
    ("JerkFt", "jerkFt", "m/s^3", "accFt", 3),
]

for _name, _symbol, _units, _base, _depth in _DERIVATIVES:
    FEATURES.declare(
        _name,
        _symbol,
        float,
        _units,
        strategy=derivative_strategy(FEATURES, _base),
        history_depth=_depth,
    )

FEATURES.freeze()
