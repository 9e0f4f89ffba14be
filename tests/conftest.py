"""
Shared pytest fixtures for the scene_features test suite.

All fixtures are synthetic. Values are chosen so that expected feature outputs
are easy to compute by hand.
"""

from __future__ import annotations

import pandas as pd
import pytest

from scene_features.roadway import StraightRoadway
from scene_features.scene import Entity, Frame, QueueRecord

# ---------------------------------------------------------------------------
# Roadway
# ---------------------------------------------------------------------------

@pytest.fixture()
def roadway() -> StraightRoadway:
    return StraightRoadway(100.0)


# ---------------------------------------------------------------------------
# Three-frame record (frame sequence)
# ---------------------------------------------------------------------------

@pytest.fixture()
def three_frame_record() -> QueueRecord:
    """
    Three frames 0.1 s apart. Slot order changes between frames.

    pastframe -2 (t=0.0): a (speed 9),  b (speed 5)
    pastframe -1 (t=0.1): b (speed 5),  a (speed 10)
    pastframe  0 (t=0.2): a (speed 12), b (speed 5), c (speed 7, first seen)

    Expected (most recent frame):
      - acc of a   = (12 - 10) / 0.1 = 20
      - jerk of a  = (20 - 10) / 0.1 = 100
      - acc of b   = 0
      - acc of c   = insufficient history (not in the previous frame)
    """
    frames = [
        Frame([
            Entity("a", s=0.0, speed=9.0),
            Entity("b", s=20.0, speed=5.0),
        ]),
        Frame([
            Entity("b", s=20.5, speed=5.0),
            Entity("a", s=0.9, speed=10.0),
        ]),
        Frame([
            Entity("a", s=2.0, speed=12.0),
            Entity("b", s=21.0, speed=5.0),
            Entity("c", s=60.0, speed=7.0),
        ]),
    ]
    return QueueRecord(frames, times=[0.0, 0.1, 0.2])


@pytest.fixture()
def single_frame_record() -> QueueRecord:
    return QueueRecord([Frame([Entity("a", s=5.0, speed=10.0)])], times=[0.0])


# ---------------------------------------------------------------------------
# Long-format trajectory table (QueueRecord.from_dataframe input)
# ---------------------------------------------------------------------------

@pytest.fixture()
def trajectory_df() -> pd.DataFrame:
    """
    Two cars, four frames at 1.0 s intervals.

      - track "1" accelerates 1 m/s per second from 10 m/s, heading 0
      - track "2" drives at a constant 5 m/s, 20 m ahead at frame 0
    """
    records = []
    for frame in range(4):
        records.append({
            "frame": frame, "time": float(frame), "track_id": "1",
            "s": 10.0 * frame, "t": 0.0, "phi": 0.0, "speed": 10.0 + frame,
        })
        records.append({
            "frame": frame, "time": float(frame), "track_id": "2",
            "s": 20.0 + 5.0 * frame, "t": 0.5, "phi": 0.0, "speed": 5.0,
        })
    return pd.DataFrame(records)
