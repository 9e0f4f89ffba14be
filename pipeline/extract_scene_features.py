"""
extract_scene_features.py — Extract per-frame features from a trajectory table.

Reads the long-format trajectory CSV named in configs/features.yaml, builds a
frame sequence from it, and for every frame computes the configured kinematic
features plus each vehicle's fore / rear neighbor slot and whether it is part
of the frame's first collision. All frames are concatenated into one CSV.

Usage:
    python -m pipeline.extract_scene_features

Output:
    data/analysis_results/scene_features.csv
"""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd

_PROJECT_ROOT = Path(__file__).parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from scene_features.collisions import get_first_collision, is_colliding_1d  # noqa: E402
from scene_features.config import load_config  # noqa: E402
from scene_features.extract import extract_features  # noqa: E402
from scene_features.logging_utils import get_logger  # noqa: E402
from scene_features.neighbors import (  # noqa: E402
    LeadFollowRelationships,
    StraightRoadwayNeighborSearch,
)
from scene_features.roadway import StraightRoadway  # noqa: E402
from scene_features.scene import QueueRecord  # noqa: E402

logger = get_logger(__name__)


def build_feature_table(trajectory_df: pd.DataFrame, cfg: dict) -> pd.DataFrame:
    """
    Compute the feature table for every frame of a trajectory table.

    Args:
        trajectory_df: Long-format table accepted by QueueRecord.from_dataframe.
        cfg: Parsed features config (roadway, neighbors, extraction sections).

    Returns:
        One row per (frame, slot) with columns frame, time, slot, track_id,
        the feature value / state pairs, fore_slot, rear_slot and in_collision.
        Empty if the table has no rows.
    """
    record = QueueRecord.from_dataframe(trajectory_df)
    roadway = StraightRoadway(float(cfg["roadway"]["length"]))
    search = StraightRoadwayNeighborSearch.from_config(cfg)
    symbols = cfg["extraction"]["symbols"]

    frame_times = trajectory_df.groupby("frame", sort=True)["time"].first()
    frame_tables: list[pd.DataFrame] = []
    n_collision_frames = 0

    for position, (frame_number, frame_time) in enumerate(frame_times.items()):
        pastframe = position - (record.nframes - 1)
        scene = record[pastframe]

        table = extract_features(record, roadway, symbols, pastframe=pastframe)
        rel = LeadFollowRelationships.compute(scene, roadway, search)
        table["fore_slot"] = list(rel.fore_index)
        table["rear_slot"] = list(rel.rear_index)

        first = get_first_collision(scene, roadway, is_colliding_1d)
        # slots start at 1, so the (0, 0) "no collision" pair matches nothing
        table["in_collision"] = table["slot"].isin(first)
        if first != (0, 0):
            n_collision_frames += 1

        table.insert(0, "time", float(frame_time))
        table.insert(0, "frame", frame_number)
        frame_tables.append(table)

    if not frame_tables:
        logger.warning("Trajectory table has no frames")
        return pd.DataFrame()

    logger.info(
        "Extracted %d features over %d frames (%d with a collision)",
        len(symbols),
        len(frame_tables),
        n_collision_frames,
    )
    return pd.concat(frame_tables, ignore_index=True)


def main() -> None:
    cfg = load_config("features")
    input_csv = Path(cfg["data"]["trajectory_csv"])
    output_csv = Path(cfg["data"]["features_csv"])

    logger.info("Reading trajectories from %s", input_csv)
    trajectory_df = pd.read_csv(input_csv, dtype={"track_id": str})

    features_df = build_feature_table(trajectory_df, cfg)
    if features_df.empty:
        logger.error("No features extracted. Check %s", input_csv)
        return

    output_csv.parent.mkdir(parents=True, exist_ok=True)
    features_df.to_csv(output_csv, index=False)
    logger.info("Wrote %d rows → %s", len(features_df), output_csv)


if __name__ == "__main__":
    main()
