"""Keyframes: a value pinned to a point in time on a parameter track."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

Interpolator = Callable[[float], float]


def _read_number(data: Mapping[str, Any], key: str) -> float:
    value = data[key]
    if not isinstance(value, (int, float)):
        raise TypeError(f'expected a number for "{key}", got {type(value).__name__}')
    return float(value)


def _read_bool(data: Mapping[str, Any], key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise TypeError(f'expected a boolean for "{key}", got {type(value).__name__}')
    return value


@dataclass
class Keyframe:
    """A value at a time, with an optional easing function for the approach to it."""

    interpolator_func: Optional[Interpolator] = field(default=None, compare=False, repr=False)
    value: float = 0.0
    time: float = 0.0
    focused: bool = False

    def set_as_focused(self) -> None:
        self.focused = True

    def set_as_unfocused(self) -> None:
        self.focused = False

    @classmethod
    def construct(
        cls,
        time: float = 0.0,
        value: float = 0.0,
        interpolator_func: Optional[Interpolator] = None,
    ) -> "Keyframe":
        """Build a keyframe from time first, then value."""
        return cls(interpolator_func=interpolator_func, value=value, time=time)

    def to_json(self) -> dict:
        """Return the serialisable form; the interpolator is not stored."""
        return {"focused": self.focused, "time": self.time, "value": self.value}

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Keyframe":
        """Build a keyframe from its serialised form; every key is required."""
        return cls(
            time=_read_number(data, "time"),
            value=_read_number(data, "value"),
            focused=_read_bool(data, "focused"),
        )

    def describe(self) -> str:
        """Return a multi-line human-readable description."""
        return (
            "Keyframe(\n"
            f"   time: {self.time:g},\n"
            f"   value: {self.value:g},\n"
            f"   focused: {int(self.focused)},\n"
            ")"
        )