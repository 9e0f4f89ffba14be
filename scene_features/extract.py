"""
Batch feature extraction into a DataFrame.

extract_features evaluates a list of features for every entity in one frame
of a record and lays the results out as a table, one row per slot. Each
feature gets two columns: the numeric value and its FeatureState name, so
downstream code can filter on quality without re-deriving it from NaNs.

Usage:

    from scene_features.extract import extract_features

    df = extract_features(record, roadway, ["speed", "acc", "jerk"])
    # columns: slot, track_id, speed, speed_state, acc, acc_state, jerk, jerk_state
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
import pandas as pd

from scene_features.features.kinematics import FEATURES
from scene_features.features.registry import FeatureRegistry

logger = logging.getLogger(__name__)


def extract_features(
    record,
    roadway,
    symbols: Sequence[str],
    registry: FeatureRegistry = FEATURES,
    pastframe: int = 0,
) -> pd.DataFrame:
    """
    Evaluate `symbols` for every slot of record[pastframe].

    Args:
        record: Frame sequence (see scene_features.scene.QueueRecord).
        roadway: Passed through to each feature.
        symbols: Feature symbols, in output column order.
        registry: Registry the symbols are looked up in.
        pastframe: Frame offset to extract (0 = most recent).

    Returns:
        DataFrame with columns slot, track_id, then <symbol> (float64) and
        <symbol>_state (str) per feature. Empty (with those columns) if the
        frame holds no entities.

    Raises:
        FeatureNotFoundError: If any symbol is not declared. Checked before
            any feature is computed.
    """
    descriptors = [registry.lookup(sym) for sym in symbols]
    scene = record[pastframe]

    columns = ["slot", "track_id"]
    for desc in descriptors:
        columns += [desc.symbol, f"{desc.symbol}_state"]

    rows: list[dict] = []
    for slot, entity in enumerate(scene, start=1):
        row: dict = {"slot": slot, "track_id": entity.id}
        for desc in descriptors:
            fval = registry.evaluate(desc, record, roadway, slot, pastframe)
            row[desc.symbol] = fval.value
            row[f"{desc.symbol}_state"] = fval.state.name
        rows.append(row)

    df = pd.DataFrame(rows, columns=columns)
    for desc in descriptors:
        df[desc.symbol] = df[desc.symbol].astype(np.float64)

    invalid = sum(
        int((~df[f"{d.symbol}_state"].isin(["GOOD", "INSUFFICIENT_HISTORY"])).sum())
        for d in descriptors
    )
    if invalid:
        logger.info("%d of %d feature values are missing or censored", invalid, len(df) * len(descriptors))
    return df
