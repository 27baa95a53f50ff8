"""Parameter tracks for the animatable fields of a 3D camera."""

from __future__ import annotations

from typing import Any, List

from motiontimeline.parameter import AttributeBinding, Parameter

_CAMERA_FIELDS = (
    ("position.x", "position", "x"),
    ("position.y", "position", "y"),
    ("position.z", "position", "z"),
    ("stepout.x", "stepout", "x"),
    ("stepout.y", "stepout", "y"),
    ("stepout.z", "stepout", "z"),
    ("spin", None, "spin"),
    ("tilt", None, "tilt"),
    ("roll", None, "roll"),
    ("zoom", None, "zoom"),
    ("shift.x", "shift", "x"),
    ("shift.y", "shift", "y"),
    ("near plane", None, "near_plane"),
    ("far plane", None, "far_plane"),
)


def build_camera_parameters(camera: Any) -> List[Parameter]:
    """Build unbounded parameters bound to a camera, starting at its current values."""
    if camera is None:
        raise ValueError("a camera is required to build camera parameters")
    parameters = []
    for name, owner, attribute in _CAMERA_FIELDS:
        target = camera if owner is None else getattr(camera, owner)
        binding = AttributeBinding(target, attribute)
        parameters.append(
            Parameter.build(
                name,
                binding,
                [],
                binding.get(),
                has_min_value=False,
                has_max_value=False,
            )
        )
    return parameters