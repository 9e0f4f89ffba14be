"""
First-collision scanning over a scene.

get_first_collision walks every unordered pair of slots in a fixed order,
(1, 2), (1, 3), ..., (2, 3), ..., and returns the first pair the overlap
predicate accepts. It stops there; it does not report every colliding pair.
(0, 0) means no pair overlaps.

The overlap predicate is supplied by the caller. is_colliding_1d is the one
for a StraightRoadway, where each vehicle occupies an interval of length
`length` centred on its position s.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from scene_features.roadway import StraightRoadway
from scene_features.scene import Entity

logger = logging.getLogger(__name__)

OverlapPredicate = Callable[[Any, Any, Any], bool]


def get_first_collision(scene, roadway, is_colliding: OverlapPredicate) -> tuple[int, int]:
    """Return the first colliding (i, j) with 1-based slots i < j, or (0, 0)."""
    nvehicles = len(scene)
    for i in range(1, nvehicles + 1):
        veh_a = scene[i]
        for j in range(i + 1, nvehicles + 1):
            if is_colliding(veh_a, scene[j], roadway):
                logger.debug("Collision between slots %d and %d", i, j)
                return i, j
    return 0, 0


def has_collision(scene, roadway, is_colliding: OverlapPredicate) -> bool:
    return get_first_collision(scene, roadway, is_colliding) != (0, 0)


def is_colliding_1d(veh_a: Entity, veh_b: Entity, roadway: StraightRoadway) -> bool:
    # Intervals overlap when the centre gap, taken the short way round the ring,
    # is below the sum of the half lengths.
    gap = roadway.gap(veh_a.s, veh_b.s)
    gap = min(gap, roadway.length - gap)
    return gap < 0.5 * (veh_a.length + veh_b.length)
