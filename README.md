# motiontimeline

Keyframed timelines for animating numeric values. A `Parameter` holds a
list of `Keyframe`s sorted by time and works out the value at any point in
time. It interpolates linearly, or through an easing function that you
provide. When the parameter is bound to an attribute of some object, the
computed value is written straight into that attribute.

An editing layer sits on top of this. A `ParameterView` moves a focus cursor
over the keyframes of one track and nudges their time and value within
bounds. A `MotionStudio` brings several parameters together under one
playhead, maps key presses to editing commands, and saves and loads the
whole timeline as JSON.

## Installation

```
pip install motiontimeline
```

To run the tests:

```
pip install "motiontimeline[test]"
pytest
```

## Keyframes

`motiontimeline.keyframe.Keyframe` is a dataclass with `time`, `value`,
`focused` and an optional `interpolator_func`, a callable that maps a
normalised progress in `[0, 1]` to a blend factor.
`Keyframe.construct(time, value, interpolator_func)` takes the time first.
`set_as_focused()` and `set_as_unfocused()` change the `focused` flag.
`describe()` returns a multi-line text description.

## Binding a parameter and sampling it

```python
from dataclasses import dataclass

from motiontimeline.keyframe import Keyframe
from motiontimeline.parameter import AttributeBinding, Parameter


@dataclass
class Sprite:
    x: float = 0.0


sprite = Sprite()
x_track = Parameter.build(
    "x",
    AttributeBinding(sprite, "x"),
    [Keyframe.construct(2.0, 0.4), Keyframe.construct(4.0, 0.6)],
)

x_track.calculate_value_at(3.0)   # halfway between the two keyframes, about 0.5
x_track.assign_to_time(4.0)       # writes 0.6 into sprite.x
```

`AttributeBinding(target, attribute)` refers to one attribute of an object
and offers `get()` and `set(value)`. `calculate_value_at` and
`assign_to_time` raise `RuntimeError` when the parameter has no binding.

How a value is worked out:

- With no keyframes, the value is `initial_value`.
- Before the first keyframe, the first keyframe's value is used. If
  `interpolate_initial_value_to_1st_keyframe` is set, the value blends
  from `initial_value` at time 0 towards the first keyframe instead.
- At or after the last keyframe, the last keyframe's value is used.
- Between two keyframes, the value is interpolated. The easing function of
  the later keyframe is used if it has one.
- The result is then clamped to `min_value` and `max_value` when
  `has_min_value` and `has_max_value` are set. By default both are set and
  the range is 0 to 1. Pass `has_min_value=False` and `has_max_value=False`
  to `Parameter.build` to remove the bounds.

`add_keyframe(time, value, interpolator_func)` inserts a keyframe and keeps
the list sorted by time. `remove_keyframe_at_index(index)` returns whether a
keyframe was removed. `describe()` returns a multi-line text description.

## Editing one track

`motiontimeline.parameter_view.ParameterView` wraps a `Parameter` (its
`track`):

- `next_keyframe(wrap)` and `previous_keyframe(wrap)` move the focus.
- `move_keyframe_value(delta)` shifts the focused keyframe's value within
  the track's bounds.
- `move_keyframe_time(delta, keyframe_max_time)` shifts the focused
  keyframe in time. It stays between its neighbours, or between 0 and
  `keyframe_max_time` at the ends.
- `add_keyframe`, `remove_keyframe_at_index` and
  `remove_keyframe_at_focused_keyframe_idx` change the track and keep the
  focus on a sensible neighbour.
- `visible_keyframe_positions()` returns `KeyframeMarker(x, y, focused)`
  tuples for the keyframes that fall inside the view's `width`. The
  positions are scaled by `x_scale`, `time_scale` and `start_x`.

## Camera parameters

`build_camera_parameters(camera)` from `motiontimeline.camera_mapping`
returns one unbounded, bound parameter for each animatable field of a 3D
camera object:

- `position.x`, `position.y`, `position.z`
- `stepout.x`, `stepout.y`, `stepout.z`
- `spin`, `tilt`, `roll`, `zoom`
- `shift.x`, `shift.y`
- `near_plane`, `far_plane` (named `near plane` and `far plane`)

Any object with these attributes will do. Each parameter's `initial_value`
is the camera's current value. Passing `None` raises `ValueError`.

## Editing in a studio

```python
from types import SimpleNamespace

from motiontimeline.camera_mapping import build_camera_parameters
from motiontimeline.motion_studio import Key, Modifier, MotionStudio

camera = SimpleNamespace(
    position=SimpleNamespace(x=0.0, y=0.0, z=0.0),
    stepout=SimpleNamespace(x=0.0, y=0.0, z=16.0),
    shift=SimpleNamespace(x=0.0, y=0.0),
    spin=0.0, tilt=0.0, roll=0.0, zoom=1.0,
    near_plane=1.0, far_plane=100.0,
)

studio = MotionStudio()
studio.parameters = build_camera_parameters(camera)
studio.parameter_views = studio.build_parameter_views_for_parameters(
    studio.parameters, 32.0
)

studio.on_key_down(Key.A, Modifier.NONE)         # add a keyframe at the playhead
studio.on_key_down(Key.NUM_4, Modifier.COMMAND)  # move the playhead forward
studio.update_playback()                         # write the values into the camera

saved = studio.build_json_dump()
```

Key bindings accepted by `on_key_down(key, modifiers)`. The modifiers must
match exactly; a key with no binding does nothing.

| Key | Modifier | Command |
| --- | --- | --- |
| `SPACE` | none | toggle playback |
| `N` / `P` | `SHIFT` | next / previous parameter view |
| `N` / `P` | none | next / previous keyframe |
| `A` | none | add a keyframe with value 0 at the playhead |
| `H` | none | toggle timeline visibility |
| `X` | none | print the JSON dump |
| `NUM_1` / `NUM_2` | `COMMAND` | playhead back / forward by `playhead_movement_fine` |
| `NUM_3` / `NUM_4` | `COMMAND` | playhead back / forward by `playhead_movement_macro` |
| `NUM_5` / `NUM_6` | `COMMAND` | focused keyframe time −0.1 / +0.1 |
| `NUM_7` / `NUM_8` | `COMMAND` | focused keyframe value +0.1 / −0.1 |
| `PAD_4` / `PAD_6` | none | timeline start position +0.25 / −0.25 |
| `PAD_8` / `PAD_2` | none | timeline time scale +0.06125 / −0.06125 |

Removing a keyframe has no key. Call `remove_keyframe()` instead.

The same operations are also available as methods:

- `toggle_playback`, `update_playback`
- `move_playhead`, `set_playhead_position`
- `next_keyframe`, `previous_keyframe`, `add_keyframe`, `remove_keyframe`
- `move_keyframe_time`, `move_keyframe_value`
- `next_parameter_view`, `previous_parameter_view`
- `move_timeline_start_position`, `modify_timeline_time_scale`,
  `toggle_timeline_visibility`

`next_parameter_view` and `previous_parameter_view` skip hidden views. They
wrap around when `wrap_parameter_view_idx_change` is set.

## JSON format

A keyframe is stored as `{"focused": ..., "time": ..., "value": ...}`. The
easing function is not stored. A parameter is stored with its name, initial
value, bounds and keyframes. Its binding is not stored.

To convert single objects, use `Keyframe.to_json` / `Keyframe.from_json`
and `Parameter.to_json` / `Parameter.from_json`. `from_json` requires every
key. It raises `KeyError` for a missing key and `TypeError` for a value of
the wrong type.

For a whole timeline in the form `{"parameters": [...]}`, use
`MotionStudio.build_json`, `MotionStudio.build_json_dump` (indented,
sorted keys) and `MotionStudio.load_json`. `load_json` raises `ValueError`
when there is no `"parameters"` array. It replaces the parameters with
unbound ones, so bind them again before you call `update_playback`.

## What this package does not do

The package holds the timeline model and its editing state only. It does
not:

- draw anything on screen;
- read a keyboard;
- render a camera;
- read or write files.

You feed key presses to `MotionStudio.on_key_down` yourself, and draw the
timeline from `ParameterView.visible_keyframe_positions` and the studio's
fields. Saving and loading go through strings, and it is up to you where
they are stored.