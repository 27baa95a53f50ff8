"""A timeline editor that plays back and edits a set of animated parameters."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from motiontimeline.parameter import Parameter
from motiontimeline.parameter_view import DEFAULT_HEIGHT, ParameterView


class Key(enum.Enum):
    """Keys the studio responds to."""

    SPACE = "space"
    A = "a"
    H = "h"
    N = "n"
    P = "p"
    X = "x"
    NUM_1 = "1"
    NUM_2 = "2"
    NUM_3 = "3"
    NUM_4 = "4"
    NUM_5 = "5"
    NUM_6 = "6"
    NUM_7 = "7"
    NUM_8 = "8"
    PAD_2 = "pad_2"
    PAD_4 = "pad_4"
    PAD_6 = "pad_6"
    PAD_8 = "pad_8"


class Modifier(enum.IntFlag):
    """Modifier keys held while a key is pressed."""

    NONE = 0
    SHIFT = 1
    CTRL = 2
    ALT = 4
    COMMAND = 8


_KEY_COMMANDS: Dict[Tuple[Key, Modifier], str] = {
    (Key.SPACE, Modifier.NONE): "toggle_playback",
    (Key.N, Modifier.SHIFT): "next_parameter_view",
    (Key.P, Modifier.SHIFT): "previous_parameter_view",
    (Key.NUM_1, Modifier.COMMAND): "move_playhead_fine_left",
    (Key.NUM_2, Modifier.COMMAND): "move_playhead_fine_right",
    (Key.NUM_3, Modifier.COMMAND): "move_playhead_macro_left",
    (Key.NUM_4, Modifier.COMMAND): "move_playhead_macro_right",
    (Key.NUM_5, Modifier.COMMAND): "move_keyframe_time_back",
    (Key.NUM_6, Modifier.COMMAND): "move_keyframe_time_forward",
    (Key.NUM_7, Modifier.COMMAND): "move_keyframe_value_up",
    (Key.NUM_8, Modifier.COMMAND): "move_keyframe_value_down",
    (Key.A, Modifier.NONE): "add_keyframe",
    (Key.N, Modifier.NONE): "next_keyframe",
    (Key.P, Modifier.NONE): "previous_keyframe",
    (Key.H, Modifier.NONE): "toggle_timeline_visibility",
    # X was once bound to keyframe removal; the JSON dump binding replaced it.
    (Key.X, Modifier.NONE): "dump_json_to_cout",
    (Key.PAD_4, Modifier.NONE): "move_timeline_start_position_forward",
    (Key.PAD_6, Modifier.NONE): "move_timeline_start_position_backward",
    (Key.PAD_8, Modifier.NONE): "increase_timeline_time_scale",
    (Key.PAD_2, Modifier.NONE): "decrease_timeline_time_scale",
}


@dataclass(eq=False)
class MotionStudio:
    """Playback and keyframe editing over a list of parameters and their views."""

    parameters: List[Parameter] = field(default_factory=list)
    parameter_views: List[ParameterView] = field(default_factory=list)
    parameter_view_idx: int = 0
    wrap_parameter_view_idx_change: bool = True
    playback_speed: float = 1.0 / 60.0
    playhead: float = 0.0
    playhead_max: float = 120.0
    playhead_movement_fine: float = 1.0 / 60
    playhead_movement_macro: float = 1.0 / 60 * 30
    playing: bool = False
    timeline_start_position: float = 0.0
    timeline_time_scale: float = 1.0
    timeline_overlay_visible: bool = True

    def toggle_timeline_visibility(self) -> None:
        self.timeline_overlay_visible = not self.timeline_overlay_visible

    def move_timeline_start_position(self, delta: float = 0.0) -> None:
        """Scroll the visible start of the timeline, kept within [0, playhead_max]."""
        new_position = self.timeline_start_position + delta
        if new_position < 0.0:
            new_position = 0.0
        elif new_position > self.playhead_max:
            new_position = self.playhead_max
        self.timeline_start_position = new_position

    def modify_timeline_time_scale(self, delta: float = 0.0) -> None:
        """Change the zoom of the timeline; a negative result resets it to 0.125."""
        new_scale = self.timeline_time_scale + delta
        if new_scale < 0.0:
            new_scale = 0.125
        elif new_scale > self.playhead_max:
            new_scale = self.playhead_max
        self.timeline_time_scale = new_scale

    def toggle_playback(self) -> None:
        self.playing = not self.playing

    def update_playback(self) -> None:
        """Advance the playhead when playing and write every parameter's value."""
        if self.playing:
            self.playhead += self.playback_speed
        for parameter in self.parameters:
            parameter.assign_to_time(self.playhead)

    def set_playhead_position(self, playhead_position: float = 0.0) -> None:
        self.playhead = playhead_position

    def move_playhead(self, delta: float = 0.0) -> None:
        """Move the playhead, kept within [0, playhead_max]."""
        new_position = self.playhead + delta
        if new_position < 0.0:
            new_position = 0.0
        elif new_position > self.playhead_max:
            new_position = self.playhead_max
        self.set_playhead_position(new_position)

    @property
    def current_parameter_view(self) -> ParameterView:
        return self.parameter_views[self.parameter_view_idx]

    def move_keyframe_value(self, delta: float = 0.0) -> None:
        self.current_parameter_view.move_keyframe_value(delta)

    def move_keyframe_time(self, delta: float = 0.0) -> None:
        self.current_parameter_view.move_keyframe_time(delta)

    def next_keyframe(self) -> None:
        self.current_parameter_view.next_keyframe()

    def previous_keyframe(self) -> None:
        self.current_parameter_view.previous_keyframe()

    def add_keyframe(self) -> None:
        """Add a keyframe with value 0 at the playhead on the current view."""
        self.current_parameter_view.add_keyframe(self.playhead, 0.0, None)

    def remove_keyframe(self) -> None:
        self.current_parameter_view.remove_keyframe_at_focused_keyframe_idx()

    def _step_parameter_view(self, step: int) -> None:
        views = self.parameter_views
        total = len(views)
        if total == 0:
            return
        start_idx = self.parameter_view_idx
        views[self.parameter_view_idx].set_as_unfocused()

        index = self.parameter_view_idx
        while True:
            index += step
            if index >= total or index < 0:
                if self.wrap_parameter_view_idx_change:
                    index = 0 if index >= total else total - 1
                else:
                    index = total - 1 if index >= total else 0
                    break
            if not views[index].hidden or index == start_idx:
                break

        self.parameter_view_idx = index
        views[index].set_as_focused()

    def next_parameter_view(self) -> None:
        """Focus the next visible view."""
        self._step_parameter_view(1)

    def previous_parameter_view(self) -> None:
        """Focus the previous visible view."""
        self._step_parameter_view(-1)

    def _command_actions(self) -> Dict[str, Callable[[], None]]:
        return {
            "toggle_playback": self.toggle_playback,
            "next_parameter_view": self.next_parameter_view,
            "previous_parameter_view": self.previous_parameter_view,
            "move_playhead_fine_left": lambda: self.move_playhead(-self.playhead_movement_fine),
            "move_playhead_fine_right": lambda: self.move_playhead(self.playhead_movement_fine),
            "move_playhead_macro_left": lambda: self.move_playhead(-self.playhead_movement_macro),
            "move_playhead_macro_right": lambda: self.move_playhead(self.playhead_movement_macro),
            "move_keyframe_value_up": lambda: self.move_keyframe_value(0.1),
            "move_keyframe_value_down": lambda: self.move_keyframe_value(-0.1),
            "move_keyframe_time_back": lambda: self.move_keyframe_time(-0.1),
            "move_keyframe_time_forward": lambda: self.move_keyframe_time(0.1),
            "next_keyframe": self.next_keyframe,
            "add_keyframe": self.add_keyframe,
            "remove_keyframe": self.remove_keyframe,
            "previous_keyframe": self.previous_keyframe,
            "toggle_timeline_visibility": self.toggle_timeline_visibility,
            "dump_json_to_cout": lambda: print(self.build_json_dump()),
            "move_timeline_start_position_forward": lambda: self.move_timeline_start_position(0.25),
            "move_timeline_start_position_backward": lambda: self.move_timeline_start_position(-0.25),
            "increase_timeline_time_scale": lambda: self.modify_timeline_time_scale(0.06125),
            "decrease_timeline_time_scale": lambda: self.modify_timeline_time_scale(-0.06125),
        }

    def on_key_down(self, key: Key, modifiers: Modifier = Modifier.NONE) -> None:
        """Run the command bound to ``key`` with exactly these ``modifiers``, if any."""
        command = _KEY_COMMANDS.get((key, Modifier(modifiers)))
        if command is None:
            return
        action = self._command_actions().get(command)
        if action is None:
            raise RuntimeError(f'no action for command "{command}"')
        action()

    def build_parameter_views_for_parameters(
        self,
        parameters: Optional[Iterable[Parameter]] = None,
        height: float = DEFAULT_HEIGHT,
    ) -> List[ParameterView]:
        """Create one view per parameter, labelled with its name; defaults to this studio's."""
        source = self.parameters if parameters is None else parameters
        return [ParameterView(label=parameter.name, track=parameter, height=height) for parameter in source]

    def build_json(self) -> dict:
        return {"parameters": [parameter.to_json() for parameter in self.parameters]}

    def build_json_dump(self) -> str:
        return json.dumps(self.build_json(), indent=2, sort_keys=True)

    def load_json(self, json_string: str = "[unset-json_string]") -> None:
        """Replace the parameters with those in ``json_string``; they come back unbound."""
        data = json.loads(json_string)
        if not (isinstance(data, dict) and isinstance(data.get("parameters"), list)):
            raise ValueError('Expected key "parameters" with an array value in JSON')
        self.parameters = [Parameter.from_json(item) for item in data["parameters"]]