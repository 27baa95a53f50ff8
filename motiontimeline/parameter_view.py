"""Editing state for one parameter track in the timeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from motiontimeline.keyframe import Interpolator
from motiontimeline.parameter import Parameter

DEFAULT_HEIGHT = 32.0


class KeyframeMarker(NamedTuple):
    """Where a keyframe sits inside the track's drawing area."""

    x: float
    y: float
    focused: bool


@dataclass(eq=False)
class ParameterView:
    """A view over a parameter track that tracks a focused keyframe and edits it."""

    label: str = "Unlabeled Parameter"
    track: Optional[Parameter] = None
    width: float = 1200.0
    height: float = DEFAULT_HEIGHT
    x_scale: float = 100.0
    time_scale: float = 1.0
    start_x: float = 0.0
    selection_cursor_x: int = -1
    hidden: bool = False
    focused: bool = False
    focused_keyframe_idx: int = 0

    def set_as_focused(self) -> None:
        self.focused = True

    def set_as_unfocused(self) -> None:
        self.focused = False

    def add_keyframe(
        self,
        time: float = 0.0,
        value: float = 0.0,
        interpolator_func: Optional[Interpolator] = None,
    ) -> None:
        """Add a keyframe to the track; does nothing without a track."""
        if self.track is None:
            return
        self.track.add_keyframe(time, value, interpolator_func)

    def remove_keyframe_at_index(self, index: int = 0) -> bool:
        """Remove a keyframe and keep the focus on a sensible neighbour."""
        if self.track is None or index < 0:
            return False
        if not self.track.remove_keyframe_at_index(index):
            return False

        keyframes = self.track.keyframes
        remaining = len(keyframes)
        if remaining == 0:
            self.focused_keyframe_idx = 0
        else:
            if self.focused_keyframe_idx == index:
                if self.focused_keyframe_idx >= remaining:
                    self.focused_keyframe_idx = remaining - 1
            elif self.focused_keyframe_idx > index:
                self.focused_keyframe_idx -= 1
            if self.focused_keyframe_idx < 0:
                self.focused_keyframe_idx = 0

        for position, keyframe in enumerate(keyframes):
            keyframe.focused = position == self.focused_keyframe_idx
        return True

    def remove_keyframe_at_focused_keyframe_idx(self) -> bool:
        return self.remove_keyframe_at_index(self.focused_keyframe_idx)

    def _focused_index(self) -> Optional[int]:
        if self.track is None:
            return None
        if 0 <= self.focused_keyframe_idx < len(self.track.keyframes):
            return self.focused_keyframe_idx
        return None

    def move_keyframe_value(self, delta: float = 0.0) -> None:
        """Shift the focused keyframe's value, clamped to the track's bounds."""
        index = self._focused_index()
        if index is None:
            return
        track = self.track
        keyframe = track.keyframes[index]
        value = keyframe.value + delta
        if track.has_max_value and value > track.max_value:
            value = track.max_value
        if track.has_min_value and value < track.min_value:
            value = track.min_value
        keyframe.value = value

    def move_keyframe_time(self, delta: float = 0.0, keyframe_max_time: float = 120.0) -> None:
        """Shift the focused keyframe in time without passing its neighbours."""
        index = self._focused_index()
        if index is None:
            return
        keyframes = self.track.keyframes
        keyframe = keyframes[index]
        lower_bound = keyframes[index - 1].time if index > 0 else 0.0
        upper_bound = keyframes[index + 1].time if index < len(keyframes) - 1 else keyframe_max_time
        new_time = keyframe.time + delta
        if new_time < lower_bound:
            new_time = lower_bound
        if new_time > upper_bound:
            new_time = upper_bound
        keyframe.time = new_time

    def _step_focus(self, step: int, wrap: bool) -> None:
        if self.track is None:
            return
        keyframes = self.track.keyframes
        count = len(keyframes)
        if count == 0:
            return
        if not 0 <= self.focused_keyframe_idx < count:
            self.focused_keyframe_idx = 0
            keyframes[0].focused = True
            return

        keyframes[self.focused_keyframe_idx].focused = False
        index = self.focused_keyframe_idx + step
        if index >= count:
            index = 0 if wrap else count - 1
        elif index < 0:
            index = count - 1 if wrap else 0
        self.focused_keyframe_idx = index
        keyframes[index].focused = True

    def next_keyframe(self, wrap: bool = False) -> None:
        self._step_focus(1, wrap)

    def previous_keyframe(self, wrap: bool = False) -> None:
        self._step_focus(-1, wrap)

    def visible_keyframe_positions(self) -> List[KeyframeMarker]:
        """Return the markers of keyframes that fall inside the view's width."""
        if self.track is None:
            raise RuntimeError(f'parameter view "{self.label}" has no track')
        track = self.track
        unbounded = not track.has_max_value or not track.has_min_value
        scale = self.x_scale * self.time_scale
        markers: List[KeyframeMarker] = []
        for keyframe in track.keyframes:
            x = keyframe.time * scale - self.start_x * scale
            if x > self.width:
                break
            if x < 0:
                continue
            y = self.height * 0.5 if unbounded else keyframe.value * self.height
            markers.append(KeyframeMarker(x, y, keyframe.focused))
        return markers