"""
Entities, frames and frame sequences.

A Frame is one time-sampled snapshot of every tracked entity. Entities sit in
slots numbered from 1; slot 0 never holds an entity and is used throughout the
package as "none" (no neighbor, no collision, identity not found). Slot order
is not stable from one frame to the next, so an entity is re-located across
frames by its id.

A QueueRecord is an ordered run of frames addressed by a non-positive offset:
record[0] is the most recent frame, record[-1] the one before it, and so on.

Usage:

    from scene_features.scene import QueueRecord

    record = QueueRecord.from_dataframe(df)
    frame = record[0]
    slot = frame.find_slot("car_7")
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import pandas as pd

from scene_features.config import load_config

logger = logging.getLogger(__name__)

_REQUIRED_COLUMNS = ["frame", "time", "track_id", "s", "t", "phi", "speed"]


@dataclass(frozen=True)
class Entity:
    """
    State of one tracked vehicle in road-relative (Frenet) coordinates.

    s      (m)   — longitudinal position along the roadway
    t      (m)   — lateral offset from the lane centerline
    phi    (rad) — heading relative to the lane direction
    speed  (m/s) — scalar speed
    """

    id: str
    s: float
    t: float = 0.0
    phi: float = 0.0
    speed: float = 0.0
    length: float = 4.0
    width: float = 1.8

    @property
    def vel_s(self) -> float:
        return self.speed * math.cos(self.phi)

    @property
    def vel_t(self) -> float:
        return self.speed * math.sin(self.phi)


class Frame:
    """Entities present at one instant, addressed by 1-based slot."""

    def __init__(self, entities: Sequence[Entity] = ()) -> None:
        self._entities = tuple(entities)

    def __getitem__(self, slot: int) -> Entity:
        if not 1 <= slot <= len(self._entities):
            raise IndexError(f"Slot {slot} out of range 1..{len(self._entities)}")
        return self._entities[slot - 1]

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __repr__(self) -> str:
        return f"Frame({list(self._entities)!r})"

    def find_slot(self, entity_id: str) -> int:
        """Slot holding entity_id, or 0 when it is not in this frame."""
        for slot, entity in enumerate(self._entities, start=1):
            if entity.id == entity_id:
                return slot
        return 0


class QueueRecord:
    """Ordered frames with their timestamps (s), most recent last."""

    def __init__(self, frames: Sequence[Frame], times: Sequence[float]) -> None:
        if len(frames) != len(times):
            raise ValueError(
                f"Got {len(frames)} frames but {len(times)} timestamps"
            )
        self._frames = list(frames)
        self._times = [float(t) for t in times]

    @property
    def nframes(self) -> int:
        return len(self._frames)

    def pastframe_inbounds(self, pastframe: int) -> bool:
        return pastframe <= 0 and self.nframes + pastframe >= 1

    def _position(self, pastframe: int) -> int:
        if not self.pastframe_inbounds(pastframe):
            raise IndexError(
                f"pastframe {pastframe} out of range {1 - self.nframes}..0"
            )
        return self.nframes - 1 + pastframe

    def __getitem__(self, pastframe: int) -> Frame:
        return self._frames[self._position(pastframe)]

    def elapsed_time(self, earlier: int, later: int) -> float:
        """Seconds between the frames at offsets `earlier` and `later`."""
        return self._times[self._position(later)] - self._times[self._position(earlier)]

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> QueueRecord:
        """
        Build a record from a long-format trajectory table.

        Args:
            df: One row per (frame, track_id) with columns frame, time,
                track_id, s, t, phi, speed and optionally length, width.
                Missing vehicle dimensions come from configs/features.yaml.

        Returns:
            A QueueRecord with one Frame per distinct frame number, in
            ascending frame order. Within a frame, slots follow row order.

        Raises:
            ValueError: If a required column is absent.
        """
        missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Trajectory table is missing columns: {missing}")

        df = df.copy()
        if "length" not in df.columns or "width" not in df.columns:
            vehicle_cfg = load_config("features")["vehicle"]
            if "length" not in df.columns:
                df["length"] = float(vehicle_cfg["length"])
            if "width" not in df.columns:
                df["width"] = float(vehicle_cfg["width"])

        frames: list[Frame] = []
        times: list[float] = []
        for _, group in df.groupby("frame", sort=True):
            entities = [
                Entity(
                    id=str(row.track_id),
                    s=float(row.s),
                    t=float(row.t),
                    phi=float(row.phi),
                    speed=float(row.speed),
                    length=float(row.length),
                    width=float(row.width),
                )
                for row in group.itertuples(index=False)
            ]
            frames.append(Frame(entities))
            times.append(float(group["time"].iloc[0]))

        logger.debug("Built record with %d frames from %d rows", len(frames), len(df))
        return cls(frames, times)
