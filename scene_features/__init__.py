"""
Scene Features — kinematic and relational feature extraction for recorded
vehicle trajectories.

Contains:
  - scene_features.roadway             — wrap-around straight roadway and position normalization
  - scene_features.scene               — entity / frame / frame-sequence containers
  - scene_features.features.values     — FeatureValue and FeatureState
  - scene_features.features.registry   — feature descriptors and the feature registry
  - scene_features.features.derivative — backward-difference derivative engine
  - scene_features.features.kinematics — the declared speed / acceleration / jerk catalog
  - scene_features.neighbors           — fore / rear neighbor relationships
  - scene_features.collisions          — first-collision scanning
  - scene_features.extract             — batch extraction into a DataFrame
  - scene_features.config              — YAML config loading
  - scene_features.logging_utils       — project-wide logger factory
"""
