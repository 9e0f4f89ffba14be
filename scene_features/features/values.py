"""
Tagged feature values.

Every feature returns a FeatureValue: a float plus a FeatureState saying how
far the float can be trusted. The state is the single source of truth for
validity; the float is never inspected for that. Values produced with a state
other than GOOD carry a fixed sentinel (0.0 for INSUFFICIENT_HISTORY, NaN for
the rest) so numeric aggregation over them fails loudly.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass


class FeatureState(enum.IntEnum):
    GOOD = 0                  # value is trustworthy
    INSUFFICIENT_HISTORY = 1  # best guess made without enough past frames (e.g. acc from one frame)
    MISSING = 2               # no value could be computed (no car in front, etc.)
    CENSORED_HIGH = 3         # value is past an operating threshold
    CENSORED_LOW = 4          # value is below an operating threshold


_VALID_STATES = frozenset({FeatureState.GOOD, FeatureState.INSUFFICIENT_HISTORY})


@dataclass(frozen=True)
class FeatureValue:
    value: float
    state: FeatureState = FeatureState.GOOD

    def __float__(self) -> float:
        return float(self.value)

    @property
    def is_valid(self) -> bool:
        return self.state in _VALID_STATES

    @classmethod
    def insufficient_history(cls) -> FeatureValue:
        return cls(0.0, FeatureState.INSUFFICIENT_HISTORY)

    @classmethod
    def missing(cls) -> FeatureValue:
        return cls(math.nan, FeatureState.MISSING)

    @classmethod
    def censored_high(cls) -> FeatureValue:
        return cls(math.nan, FeatureState.CENSORED_HIGH)

    @classmethod
    def censored_low(cls) -> FeatureValue:
        return cls(math.nan, FeatureState.CENSORED_LOW)


def is_feature_valid(fval: FeatureValue) -> bool:
    """True when the state is GOOD or INSUFFICIENT_HISTORY, whatever the number is."""
    return fval.is_valid
