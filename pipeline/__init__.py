# pipeline/ — batch scripts for scene_features.
#
#   extract_scene_features → per-frame kinematic features, lead/follow slots and
#                            collision flags for a trajectory table → features CSV
