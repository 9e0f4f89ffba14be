"""
Backward-difference time derivative of any feature.

derivative_of turns a base feature into its rate of change between two frames
of a record. It follows the entity by id rather than by slot, because slot
order changes between frames. When the earlier frame is outside the record or
no longer contains the entity, or both frames carry the same timestamp, the
result is FeatureValue.insufficient_history() (0.0, INSUFFICIENT_HISTORY)
instead of an error. A base value that is missing or censored in either frame
makes the derivative FeatureValue.missing().
"""

from __future__ import annotations

from typing import Any, Callable

from scene_features.features.values import FeatureValue

# base(record, roadway, vehicle_index, pastframe) -> FeatureValue
BaseEvaluator = Callable[[Any, Any, int, int], FeatureValue]


def derivative_of(
    base: BaseEvaluator,
    record: Any,
    roadway: Any,
    vehicle_index: int,
    pastframe: int = 0,
    frames_back: int = 1,
) -> FeatureValue:
    """
    (base at pastframe - base at pastframe - frames_back) / elapsed time.

    Args:
        base: Evaluator for the feature being differentiated, e.g.
            FeatureRegistry.evaluator("speed").
        record: Frame sequence supporting record[pastframe],
            pastframe_inbounds(pastframe) and elapsed_time(earlier, later).
        roadway: Passed through to the base feature.
        vehicle_index: Slot of the entity in record[pastframe].
        pastframe: Offset of the current frame (0 = most recent).
        frames_back: How many frames earlier the difference is taken against.
    """
    earlier = pastframe - frames_back
    if not (record.pastframe_inbounds(pastframe) and record.pastframe_inbounds(earlier)):
        return FeatureValue.insufficient_history()

    entity_id = record[pastframe][vehicle_index].id
    earlier_index = record[earlier].find_slot(entity_id)
    if earlier_index == 0:
        return FeatureValue.insufficient_history()

    # Frames sharing a timestamp give no rate of change
    elapsed = record.elapsed_time(earlier, pastframe)
    if elapsed == 0.0:
        return FeatureValue.insufficient_history()

    curr = base(record, roadway, vehicle_index, pastframe)
    past = base(record, roadway, earlier_index, earlier)
    if not (curr.is_valid and past.is_valid):
        return FeatureValue.missing()
    return FeatureValue((float(curr) - float(past)) / elapsed)


def derivative_strategy(registry: Any, base_symbol: str, frames_back: int = 1) -> Callable[..., FeatureValue]:
    """
    Strategy for declaring the derivative of an already-declared feature.

    The base feature is looked up when the strategy runs, so it only has to be
    declared before the registry is used, not before this call.
    """

    def _strategy(descriptor, record, roadway, vehicle_index, pastframe=0):
        return derivative_of(
            registry.evaluator(base_symbol),
            record,
            roadway,
            vehicle_index,
            pastframe,
            frames_back,
        )

    return _strategy
