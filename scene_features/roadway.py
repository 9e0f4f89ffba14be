"""
Straight, wrap-around 1-D roadway.

A StraightRoadway is a single closed line of fixed length: driving off the end
at s = length puts a vehicle back at s = 0. Every longitudinal position handed
to the neighbor search or the collision check is first reduced to the
canonical range [0, length) with mod_position_to_roadway.

Usage:

    from scene_features.roadway import StraightRoadway, mod_position_to_roadway

    roadway = StraightRoadway(100.0)
    mod_position_to_roadway(150.0, roadway)   # 50.0
    mod_position_to_roadway(-20.0, roadway)   # 80.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class StraightRoadway:
    """A single lane of the given length (m) whose ends are joined."""

    length: float

    def __post_init__(self) -> None:
        if not self.length > 0.0 or math.isinf(self.length):
            raise ValueError(f"Roadway length must be finite and positive, got {self.length}")

    def gap(self, s_rear: float, s_fore: float) -> float:
        """Distance travelled forward along the ring from s_rear to reach s_fore."""
        return mod_position_to_roadway(s_fore - s_rear, self)


def mod_position_to_roadway(s: float, roadway: StraightRoadway) -> float:
    """
    Reduce a longitudinal position to the range [0, roadway.length).

    A single remainder keeps this constant-time for positions many laps away
    from the origin. math.fmod keeps the sign of s, so negative results are
    shifted up by one length; the final check catches -tiny + length rounding
    up to exactly length.
    """
    length = roadway.length
    s = math.fmod(s, length)
    if s < 0.0:
        s += length
    if s >= length:
        s = 0.0
    return s
