"""Keyframed parameter timelines: interpolation, attribute binding, track editing and JSON persistence."""

__version__ = "0.1.0"

__all__ = ["keyframe", "parameter", "parameter_view", "camera_mapping", "motion_studio"]