"""
Tests for scene_features.config — YAML config loading.
"""

from __future__ import annotations

import pytest

from scene_features.config import load_config
from scene_features.roadway import StraightRoadway


class TestLoadConfig:
    def test_features_config_has_sections(self) -> None:
        cfg = load_config("features")
        for section in ("roadway", "neighbors", "vehicle"):
            assert section in cfg, f"Missing section: {section}"

    def test_roadway_length_builds_a_roadway(self) -> None:
        cfg = load_config("features")
        roadway = StraightRoadway(float(cfg["roadway"]["length"]))
        assert roadway.length > 0

    def test_unknown_config_raises(self) -> None:
        with pytest.raises(FileNotFoundError, match="features"):
            load_config("does_not_exist")
