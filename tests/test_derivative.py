"""
Tests for scene_features.features.derivative — the backward-difference engine.
"""

from __future__ import annotations

import math

import pytest

from scene_features.features.derivative import derivative_of, derivative_strategy
from scene_features.features.registry import FeatureRegistry
from scene_features.features.values import FeatureState, FeatureValue
from scene_features.roadway import StraightRoadway
from scene_features.scene import Entity, Frame, QueueRecord


def _speed(record, roadway, vehicle_index, pastframe=0):
    return FeatureValue(record[pastframe][vehicle_index].speed)


class TestDerivativeOf:
    def test_simple_difference(self, roadway: StraightRoadway) -> None:
        """10 m/s then 12 m/s, 0.1 s apart -> 20 m/s^2."""
        record = QueueRecord(
            [Frame([Entity("a", s=0.0, speed=10.0)]), Frame([Entity("a", s=1.0, speed=12.0)])],
            times=[0.0, 0.1],
        )
        fval = derivative_of(_speed, record, roadway, 1)
        assert fval.state == FeatureState.GOOD
        assert fval.value == pytest.approx(20.0)

    def test_follows_identity_not_slot(
        self, three_frame_record: QueueRecord, roadway: StraightRoadway
    ) -> None:
        """a is slot 1 now but slot 2 in the previous frame."""
        fval = derivative_of(_speed, three_frame_record, roadway, 1)
        assert fval.value == pytest.approx(20.0)
        assert fval.state == FeatureState.GOOD

    def test_identity_missing_in_earlier_frame(
        self, three_frame_record: QueueRecord, roadway: StraightRoadway
    ) -> None:
        fval = derivative_of(_speed, three_frame_record, roadway, 3)
        assert fval == FeatureValue(0.0, FeatureState.INSUFFICIENT_HISTORY)

    def test_earlier_frame_out_of_range(
        self, single_frame_record: QueueRecord, roadway: StraightRoadway
    ) -> None:
        fval = derivative_of(_speed, single_frame_record, roadway, 1)
        assert fval == FeatureValue(0.0, FeatureState.INSUFFICIENT_HISTORY)

    def test_pastframe_out_of_range(
        self, three_frame_record: QueueRecord, roadway: StraightRoadway
    ) -> None:
        for pastframe in (1, -3, -10):
            fval = derivative_of(_speed, three_frame_record, roadway, 1, pastframe=pastframe)
            assert fval == FeatureValue(0.0, FeatureState.INSUFFICIENT_HISTORY)

    def test_oldest_frame_has_insufficient_history(
        self, three_frame_record: QueueRecord, roadway: StraightRoadway
    ) -> None:
        fval = derivative_of(_speed, three_frame_record, roadway, 1, pastframe=-2)
        assert fval.state == FeatureState.INSUFFICIENT_HISTORY

    def test_frames_back(self, three_frame_record: QueueRecord, roadway: StraightRoadway) -> None:
        """a: 9 m/s at t=0.0 and 12 m/s at t=0.2 -> 15 m/s^2."""
        fval = derivative_of(_speed, three_frame_record, roadway, 1, frames_back=2)
        assert fval.value == pytest.approx(15.0)

    def test_past_frame_difference(
        self, three_frame_record: QueueRecord, roadway: StraightRoadway
    ) -> None:
        """At pastframe -1, a is in slot 2: (10 - 9) / 0.1."""
        fval = derivative_of(_speed, three_frame_record, roadway, 2, pastframe=-1)
        assert fval.value == pytest.approx(10.0)


class TestDerivativeStrategy:
    def test_declares_derivative_of_registered_feature(
        self, three_frame_record: QueueRecord, roadway: StraightRoadway
    ) -> None:
        registry = FeatureRegistry()
        registry.declare(
            "Speed", "speed", float, "m/s",
            strategy=lambda desc, rec, road, idx, past=0: _speed(rec, road, idx, past),
        )
        registry.declare(
            "Acc", "acc", float, "m/s^2",
            strategy=derivative_strategy(registry, "speed"), history_depth=2,
        )
        fval = registry.evaluate("acc", three_frame_record, roadway, 1)
        assert fval.value == pytest.approx(20.0)


class TestDegradedInputs:
    def test_zero_dt_does_not_cause_division_error(self, roadway: StraightRoadway) -> None:
        """Two consecutive frames with identical timestamps should not crash."""
        record = QueueRecord(
            [Frame([Entity("a", s=0.0, speed=10.0)]), Frame([Entity("a", s=1.0, speed=12.0)])],
            times=[0.0, 0.0],
        )
        fval = derivative_of(_speed, record, roadway, 1)
        assert fval == FeatureValue(0.0, FeatureState.INSUFFICIENT_HISTORY)

    def test_censored_base_gives_missing_derivative(self, roadway: StraightRoadway) -> None:
        """Speed above its censor bound has no number to difference against."""
        registry = FeatureRegistry()
        registry.declare(
            "Speed", "speed", float, "m/s",
            strategy=lambda desc, rec, road, idx, past=0: _speed(rec, road, idx, past),
            censor_high=11.0,
        )
        registry.declare("Acc", "acc", float, "m/s^2", strategy=derivative_strategy(registry, "speed"))
        record = QueueRecord(
            [Frame([Entity("a", s=0.0, speed=10.0)]), Frame([Entity("a", s=1.0, speed=12.0)])],
            times=[0.0, 0.1],
        )
        fval = registry.evaluate("acc", record, roadway, 1)
        assert fval.state == FeatureState.MISSING
        assert math.isnan(fval.value)
        assert not fval.is_valid

    def test_missing_earlier_base_gives_missing_derivative(
        self, three_frame_record: QueueRecord, roadway: StraightRoadway
    ) -> None:
        def _missing_in_past(record, roadway, vehicle_index, pastframe=0):
            if pastframe < 0:
                return FeatureValue.missing()
            return _speed(record, roadway, vehicle_index, pastframe)

        fval = derivative_of(_missing_in_past, three_frame_record, roadway, 1)
        assert fval.state == FeatureState.MISSING
