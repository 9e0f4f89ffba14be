"""
Fore / rear neighbor relationships for a scene.

LeadFollowRelationships.compute asks a neighbor search for the nearest
vehicle ahead of and behind each requested slot, and stores the slot numbers
it gets back. 0 means no neighbor was found in that direction (or the slot was
not requested). The result is a snapshot: it is not updated if the scene it
was computed from changes.

The search itself is pluggable. StraightRoadwayNeighborSearch covers the
single wrap-around roadway; anything with fore()/rear() methods returning a
NeighborLongitudinalResult can be passed instead.

Usage:

    from scene_features.config import load_config
    from scene_features.neighbors import LeadFollowRelationships, StraightRoadwayNeighborSearch

    search = StraightRoadwayNeighborSearch.from_config(load_config("features"))
    rel = LeadFollowRelationships.compute(record[0], roadway, search)
    rel.fore_index   # (3, 0, 1)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol

from scene_features.roadway import StraightRoadway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NeighborLongitudinalResult:
    index: int = 0           # slot of the neighbor in the scene, 0 if none
    distance: float = math.nan  # positive distance along the lane, meaningful only if index != 0


class NeighborSearch(Protocol):
    def fore(self, scene: Any, vehicle_index: int, roadway: Any) -> NeighborLongitudinalResult: ...

    def rear(self, scene: Any, vehicle_index: int, roadway: Any) -> NeighborLongitudinalResult: ...


@dataclass(frozen=True)
class StraightRoadwayNeighborSearch:
    """
    Nearest vehicle ahead / behind along a StraightRoadway.

    Gaps are measured between vehicle positions (s) going around the ring, so
    the vehicle just past the seam at s = 0 leads one just before it. Vehicles
    further than the configured maximum distance are ignored, and so is a vehicle
    at exactly the same position (gap 0): it is neither ahead nor behind.
    """

    max_distance_fore: float = 250.0
    max_distance_rear: float = 250.0

    @classmethod
    def from_config(cls, cfg: dict) -> StraightRoadwayNeighborSearch:
        neighbors_cfg = cfg["neighbors"]
        return cls(
            max_distance_fore=float(neighbors_cfg["max_distance_fore"]),
            max_distance_rear=float(neighbors_cfg["max_distance_rear"]),
        )

    def fore(self, scene, vehicle_index: int, roadway: StraightRoadway) -> NeighborLongitudinalResult:
        ego = scene[vehicle_index]
        return self._nearest(
            scene, vehicle_index, lambda other: roadway.gap(ego.s, other.s), self.max_distance_fore
        )

    def rear(self, scene, vehicle_index: int, roadway: StraightRoadway) -> NeighborLongitudinalResult:
        ego = scene[vehicle_index]
        return self._nearest(
            scene, vehicle_index, lambda other: roadway.gap(other.s, ego.s), self.max_distance_rear
        )

    @staticmethod
    def _nearest(scene, vehicle_index, gap_to, max_distance) -> NeighborLongitudinalResult:
        best = NeighborLongitudinalResult()
        for slot, other in enumerate(scene, start=1):
            if slot == vehicle_index:
                continue
            gap = gap_to(other)
            if 0.0 < gap <= max_distance and (best.index == 0 or gap < best.distance):
                best = NeighborLongitudinalResult(slot, gap)
        return best


@dataclass(frozen=True)
class LeadFollowRelationships:
    """Per-slot leading (fore) and trailing (rear) neighbor slots; position i holds slot i + 1."""

    fore_index: tuple[int, ...]
    rear_index: tuple[int, ...]

    @classmethod
    def compute(
        cls,
        scene,
        roadway,
        search: NeighborSearch,
        vehicle_indices: Iterable[int] | None = None,
    ) -> LeadFollowRelationships:
        """
        Find the fore and rear neighbor of every requested slot.

        Args:
            scene: Frame with 1-based slot access and len().
            roadway: Passed through to the search.
            search: Provides fore()/rear() lookups.
            vehicle_indices: 1-based slots to compute; defaults to all of them.
                Slots not requested keep 0.
        """
        nvehicles = len(scene)
        fore = [0] * nvehicles
        rear = [0] * nvehicles

        if vehicle_indices is None:
            vehicle_indices = range(1, nvehicles + 1)

        for vehicle_index in vehicle_indices:
            fore[vehicle_index - 1] = search.fore(scene, vehicle_index, roadway).index
            rear[vehicle_index - 1] = search.rear(scene, vehicle_index, roadway).index

        logger.debug(
            "Lead/follow for %d vehicles: %d without leader",
            nvehicles,
            fore.count(0),
        )
        return cls(tuple(fore), tuple(rear))

    def fore(self, vehicle_index: int) -> int:
        return self.fore_index[vehicle_index - 1]

    def rear(self, vehicle_index: int) -> int:
        return self.rear_index[vehicle_index - 1]
