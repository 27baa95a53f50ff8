import json
from types import SimpleNamespace

import pytest

from motiontimeline.keyframe import Keyframe
from motiontimeline.motion_studio import Key, Modifier, MotionStudio
from motiontimeline.parameter import AttributeBinding, Parameter
from motiontimeline.parameter_view import ParameterView


def _curve():
    return [
        Keyframe.construct(2.0, 0.4),
        Keyframe.construct(4.0, 0.6),
        Keyframe.construct(5.0, 0.2),
        Keyframe.construct(5.5, 0.3),
    ]


def _placement():
    return SimpleNamespace(position=SimpleNamespace(x=0.0, y=0.0, z=0.0))


def _parameters_for_placement(p):
    return [
        Parameter.build("position.x", AttributeBinding(p.position, "x"), _curve()),
        Parameter.build("position.y", AttributeBinding(p.position, "y"), _curve()),
        Parameter.build("position.z", AttributeBinding(p.position, "z"), _curve()),
        Parameter.build("rotation.x", AttributeBinding(p.position, "y"), []),
        Parameter.build("rotation.y", AttributeBinding(p.position, "z"), []),
        Parameter.build("rotation.z", AttributeBinding(p.position, "y"), []),
    ]


def _music_elements():
    return SimpleNamespace(volume=0.8, mod=0.8)


def _parameters_for_music(m):
    return [
        Parameter.build("volume", AttributeBinding(m, "volume"), _curve()),
        Parameter.build("mod", AttributeBinding(m, "mod"), _curve()),
    ]


def _studio_with_views(count=3):
    studio = MotionStudio()
    studio.parameter_views = [ParameterView(label=f"v{i}") for i in range(count)]
    return studio


def test_placement_scenario_views_and_playback():
    placement = _placement()
    studio = MotionStudio()
    studio.parameters = _parameters_for_placement(placement)
    studio.parameter_views = studio.build_parameter_views_for_parameters(studio.parameters)
    assert [v.label for v in studio.parameter_views] == [
        "position.x", "position.y", "position.z", "rotation.x", "rotation.y", "rotation.z",
    ]
    assert all(v.track is p for v, p in zip(studio.parameter_views, studio.parameters))
    assert all(v.height == 32.0 for v in studio.parameter_views)

    studio.set_playhead_position(3.0)
    studio.update_playback()
    assert placement.position.x == pytest.approx(0.5)


def test_music_scenario_with_custom_height():
    music = _music_elements()
    studio = MotionStudio()
    studio.parameters = _parameters_for_music(music)
    views = studio.build_parameter_views_for_parameters(studio.parameters, 120)
    assert [(v.label, v.height) for v in views] == [("volume", 120), ("mod", 120)]

    studio.update_playback()
    assert music.volume == pytest.approx(0.4)
    assert music.mod == pytest.approx(0.4)


def test_build_views_defaults_to_own_parameters():
    studio = MotionStudio()
    studio.parameters = [Parameter.build("a"), Parameter.build("b")]
    assert [v.label for v in studio.build_parameter_views_for_parameters()] == ["a", "b"]


def test_update_playback_advances_only_when_playing():
    studio = MotionStudio()
    studio.update_playback()
    assert studio.playhead == 0.0
    studio.toggle_playback()
    assert studio.playing is True
    studio.update_playback()
    assert studio.playhead == pytest.approx(1.0 / 60.0)


def test_update_playback_with_unbound_parameter_raises():
    studio = MotionStudio()
    studio.parameters = [Parameter.build("loose")]
    with pytest.raises(RuntimeError):
        studio.update_playback()


def test_move_playhead_is_clamped():
    studio = MotionStudio()
    studio.move_playhead(-5.0)
    assert studio.playhead == 0.0
    studio.move_playhead(500.0)
    assert studio.playhead == 120.0
    studio.move_playhead(-20.0)
    assert studio.playhead == 100.0


def test_move_timeline_start_position_is_clamped():
    studio = MotionStudio()
    studio.move_timeline_start_position(-1.0)
    assert studio.timeline_start_position == 0.0
    studio.move_timeline_start_position(0.25)
    assert studio.timeline_start_position == 0.25
    studio.move_timeline_start_position(1000.0)
    assert studio.timeline_start_position == 120.0


def test_modify_timeline_time_scale_resets_when_negative():
    studio = MotionStudio()
    studio.modify_timeline_time_scale(-2.0)
    assert studio.timeline_time_scale == 0.125
    studio.modify_timeline_time_scale(1000.0)
    assert studio.timeline_time_scale == 120.0


def test_toggle_timeline_visibility():
    studio = MotionStudio()
    studio.toggle_timeline_visibility()
    assert studio.timeline_overlay_visible is False
    studio.toggle_timeline_visibility()
    assert studio.timeline_overlay_visible is True


def test_next_parameter_view_wraps():
    studio = _studio_with_views(3)
    studio.parameter_view_idx = 2
    studio.next_parameter_view()
    assert studio.parameter_view_idx == 0
    assert studio.parameter_views[0].focused is True
    assert studio.parameter_views[2].focused is False


def test_next_parameter_view_without_wrap_stays_at_end():
    studio = _studio_with_views(3)
    studio.wrap_parameter_view_idx_change = False
    studio.parameter_view_idx = 2
    studio.next_parameter_view()
    assert studio.parameter_view_idx == 2
    assert studio.parameter_views[2].focused is True


def test_previous_parameter_view_wraps_and_clamps():
    studio = _studio_with_views(3)
    studio.previous_parameter_view()
    assert studio.parameter_view_idx == 2
    studio.wrap_parameter_view_idx_change = False
    studio.parameter_view_idx = 0
    studio.previous_parameter_view()
    assert studio.parameter_view_idx == 0


def test_parameter_view_change_skips_hidden():
    studio = _studio_with_views(3)
    studio.parameter_views[1].hidden = True
    studio.next_parameter_view()
    assert studio.parameter_view_idx == 2
    studio.previous_parameter_view()
    assert studio.parameter_view_idx == 0


def test_parameter_view_change_returns_to_start_when_others_hidden():
    studio = _studio_with_views(3)
    studio.parameter_views[1].hidden = True
    studio.parameter_views[2].hidden = True
    studio.next_parameter_view()
    assert studio.parameter_view_idx == 0
    assert studio.parameter_views[0].focused is True


def test_parameter_view_change_with_no_views_is_noop():
    studio = MotionStudio()
    studio.next_parameter_view()
    studio.previous_parameter_view()
    assert studio.parameter_view_idx == 0


def test_keyframe_editing_through_current_view():
    parameter = Parameter.build("p", None, _curve())
    studio = MotionStudio()
    studio.parameter_views = [ParameterView(label="p", track=parameter)]
    studio.move_keyframe_time(0.1)
    assert parameter.keyframes[0].time == pytest.approx(2.1)
    studio.move_keyframe_value(0.1)
    assert parameter.keyframes[0].value == pytest.approx(0.5)
    studio.next_keyframe()
    assert studio.parameter_views[0].focused_keyframe_idx == 1
    studio.previous_keyframe()
    assert studio.parameter_views[0].focused_keyframe_idx == 0
    studio.remove_keyframe()
    assert [k.time for k in parameter.keyframes] == [4.0, 5.0, 5.5]


def test_add_keyframe_at_playhead():
    parameter = Parameter.build("p")
    studio = MotionStudio()
    studio.parameter_views = [ParameterView(label="p", track=parameter)]
    studio.set_playhead_position(1.5)
    studio.add_keyframe()
    assert [(k.time, k.value) for k in parameter.keyframes] == [(1.5, 0.0)]


def test_on_key_down_space_toggles_playback():
    studio = MotionStudio()
    studio.on_key_down(Key.SPACE)
    assert studio.playing is True


def test_on_key_down_shift_n_changes_view_and_plain_n_changes_keyframe():
    parameter = Parameter.build("p", None, _curve())
    studio = MotionStudio()
    studio.parameter_views = [ParameterView(label="p", track=parameter), ParameterView(label="q")]
    studio.on_key_down(Key.N)
    assert studio.parameter_views[0].focused_keyframe_idx == 1
    assert studio.parameter_view_idx == 0
    studio.on_key_down(Key.N, Modifier.SHIFT)
    assert studio.parameter_view_idx == 1


def test_on_key_down_requires_exact_modifiers():
    studio = MotionStudio()
    studio.on_key_down(Key.NUM_2)
    studio.on_key_down(Key.SPACE, Modifier.SHIFT)
    assert studio.playhead == 0.0
    assert studio.playing is False


def test_on_key_down_pad_keys():
    studio = MotionStudio()
    studio.on_key_down(Key.PAD_8)
    assert studio.timeline_time_scale == pytest.approx(1.06125)
    studio.on_key_down(Key.PAD_2)
    assert studio.timeline_time_scale == pytest.approx(1.0)
    studio.on_key_down(Key.PAD_4)
    assert studio.timeline_start_position == 0.25
    studio.on_key_down(Key.PAD_6)
    assert studio.timeline_start_position == 0.0


def test_on_key_down_h_and_a():
    parameter = Parameter.build("p")
    studio = MotionStudio()
    studio.parameter_views = [ParameterView(label="p", track=parameter)]
    studio.on_key_down(Key.H)
    assert studio.timeline_overlay_visible is False
    studio.on_key_down(Key.A)
    assert len(parameter.keyframes) == 1


def test_on_key_down_x_prints_json_dump(capsys):
    studio = MotionStudio()
    studio.parameters = [Parameter.build("p")]
    studio.on_key_down(Key.X)
    printed = capsys.readouterr().out
    assert printed == studio.build_json_dump() + "\n"


def test_build_json_dump_format():
    studio = MotionStudio()
    studio.parameters = [Parameter()]
    expected = """{
  "parameters": [
    {
      "has_max_value": true,
      "has_min_value": true,
      "initial_value": 0.0,
      "keyframes": [],
      "max_value": 1.0,
      "min_value": 0.0,
      "name": "[unset-name]"
    }
  ]
}"""
    assert studio.build_json_dump() == expected


def test_load_json_round_trip():
    studio = MotionStudio()
    studio.parameters = [Parameter.build("spin", None, _curve(), 0.0, False, False)]
    dumped = studio.build_json_dump()
    other = MotionStudio()
    other.load_json(dumped)
    assert other.parameters == studio.parameters
    assert other.build_json() == json.loads(dumped)


def test_load_json_requires_parameters_array():
    studio = MotionStudio()
    with pytest.raises(ValueError, match="parameters"):
        studio.load_json('{"cameras": []}')
    with pytest.raises(ValueError, match="parameters"):
        studio.load_json('{"parameters": {}}')


def test_load_json_rejects_invalid_json():
    studio = MotionStudio()
    with pytest.raises(json.JSONDecodeError):
        studio.load_json("[unset-json_string]")