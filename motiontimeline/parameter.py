"""Animated parameters: a keyframed track bound to an attribute of some object."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional

from motiontimeline.keyframe import Interpolator, Keyframe


@dataclass(eq=False)
class AttributeBinding:
    """A reference to one numeric attribute of an object."""

    target: Any
    attribute: str

    def get(self) -> float:
        return getattr(self.target, self.attribute)

    def set(self, value: float) -> None:
        setattr(self.target, self.attribute, value)


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


def _read_str(data: Mapping[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f'expected a string for "{key}", got {type(value).__name__}')
    return value


def _interpolate(start: float, end: float, t: float, func: Optional[Interpolator]) -> float:
    factor = func(t) if func is not None else t
    return start + factor * (end - start)


@dataclass
class Parameter:
    """A named track of keyframes whose value can be evaluated and written to a binding."""

    name: str = "[unset-name]"
    initial_value: float = 0.0
    parameter: Optional[AttributeBinding] = None
    keyframes: List[Keyframe] = field(default_factory=list)
    has_min_value: bool = True
    has_max_value: bool = True
    min_value: float = 0.0
    max_value: float = 1.0
    interpolate_initial_value_to_1st_keyframe: bool = field(default=False, compare=False)

    @classmethod
    def build(
        cls,
        name: str = "[unset-name]",
        parameter: Optional[AttributeBinding] = None,
        keyframes: Optional[Iterable[Keyframe]] = None,
        initial_value: float = 0.0,
        has_min_value: bool = True,
        has_max_value: bool = True,
        min_value: float = 0.0,
        max_value: float = 1.0,
    ) -> "Parameter":
        return cls(
            name=name,
            initial_value=initial_value,
            parameter=parameter,
            keyframes=list(keyframes or ()),
            has_min_value=has_min_value,
            has_max_value=has_max_value,
            min_value=min_value,
            max_value=max_value,
        )

    def add_keyframe(
        self,
        time: float = 0.0,
        value: float = 0.0,
        interpolator_func: Optional[Interpolator] = None,
    ) -> None:
        """Add a keyframe, keeping the track ordered by time."""
        self.keyframes.append(Keyframe.construct(time, value, interpolator_func))
        self.keyframes.sort(key=lambda keyframe: keyframe.time)

    def remove_keyframe_at_index(self, index: int = 0) -> bool:
        """Remove the keyframe at ``index``; return whether one was removed."""
        if 0 <= index < len(self.keyframes):
            del self.keyframes[index]
            return True
        return False

    def _require_binding(self, action: str) -> AttributeBinding:
        if self.parameter is None:
            raise RuntimeError(f'cannot {action}: parameter "{self.name}" is not bound')
        return self.parameter

    def assign_to_time(self, position: float = 0.0) -> None:
        """Write the value at ``position`` to the bound attribute."""
        binding = self._require_binding("assign to time")
        binding.set(self.calculate_value_at(position))

    def calculate_value_at(self, position: float = 0.0) -> float:
        """Evaluate the track at ``position``, clamped to the active bounds."""
        self._require_binding("calculate value")
        result = self._unclamped_value_at(position)
        if self.has_min_value:
            result = max(self.min_value, result)
        if self.has_max_value:
            result = min(self.max_value, result)
        return result

    def _unclamped_value_at(self, position: float) -> float:
        if not self.keyframes:
            return self.initial_value

        first = self.keyframes[0]
        if position < first.time:
            if not self.interpolate_initial_value_to_1st_keyframe or first.time <= 0.0:
                return first.value
            t = min(1.0, max(0.0, position / first.time))
            return _interpolate(self.initial_value, first.value, t, first.interpolator_func)

        last = self.keyframes[-1]
        if len(self.keyframes) == 1 or position >= last.time:
            return last.value

        next_index = bisect_right(self.keyframes, position, key=lambda keyframe: keyframe.time)
        previous_kf = self.keyframes[next_index - 1]
        next_kf = self.keyframes[next_index]
        if previous_kf.time == next_kf.time:
            return next_kf.value
        t = (position - previous_kf.time) / (next_kf.time - previous_kf.time)
        t = min(1.0, max(0.0, t))
        return _interpolate(previous_kf.value, next_kf.value, t, next_kf.interpolator_func)

    def to_json(self) -> dict:
        """Return the serialisable form; the binding is not stored."""
        return {
            "has_max_value": self.has_max_value,
            "has_min_value": self.has_min_value,
            "initial_value": self.initial_value,
            "keyframes": [keyframe.to_json() for keyframe in self.keyframes],
            "max_value": self.max_value,
            "min_value": self.min_value,
            "name": self.name,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Parameter":
        """Build an unbound parameter from its serialised form; every key is required."""
        keyframes = data["keyframes"]
        if not isinstance(keyframes, list):
            raise TypeError('expected an array for "keyframes"')
        return cls(
            name=_read_str(data, "name"),
            initial_value=_read_number(data, "initial_value"),
            keyframes=[Keyframe.from_json(item) for item in keyframes],
            has_min_value=_read_bool(data, "has_min_value"),
            has_max_value=_read_bool(data, "has_max_value"),
            min_value=_read_number(data, "min_value"),
            max_value=_read_number(data, "max_value"),
        )

    def describe(self) -> str:
        """Return a multi-line human-readable description."""
        binding = "0x0" if self.parameter is None else f"{id(self.parameter):#x}"
        lines = [
            "Parameter(\n",
            f'   name: "{self.name}",\n',
            f"   has_min_value: {int(self.has_min_value)},\n",
            f"   has_max_value: {int(self.has_max_value)},\n",
            f"   min_value: {self.min_value:g},\n",
            f"   max_value: {self.max_value:g},\n",
            f"   parameter: {binding},\n",
            f"   initial_value: {self.initial_value:g},\n",
            "   keyframes: ",
        ]
        if not self.keyframes:
            lines.append("[]\n")
        else:
            lines.append("[\n")
            lines.extend(f"      {keyframe.describe()},\n" for keyframe in self.keyframes)
            lines.append("   ]\n")
        lines.append(")")
        return "".join(lines)