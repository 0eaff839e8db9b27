import pytest

from twinparadox.model.geometry_primitives import Event
from twinparadox.model.scene import (
    FULL_EMPHASIS, REDUCED_EMPHASIS, DisplayOptions, GridLeg, GridLineKind, ReceivedCounts, build_scene,
    current_time, default_viewport, simultaneity_slope,
)
from twinparadox.model.signals import Emitter, traveler_proper_time_at
from twinparadox.model.stages import Stage

ALL_ON = DisplayOptions(show_grid=True, show_stationary_signals=True, show_traveler_signals=True)


def test_current_time_per_stage(textbook):
    half = textbook.one_way_time
    assert current_time(textbook, Stage.SETUP, 0.7) == 0.0
    assert current_time(textbook, Stage.OUTBOUND, 0.5) == pytest.approx(half / 2)
    assert current_time(textbook, Stage.TURNAROUND, 0.3) == pytest.approx(half)
    assert current_time(textbook, Stage.INBOUND, 1.0) == pytest.approx(2 * half)
    assert current_time(textbook, Stage.CONCLUSION, 0.0) == pytest.approx(textbook.stationary_total_time)


def test_simultaneity_slope_swings_during_turnaround(textbook):
    v = textbook.velocity
    assert simultaneity_slope(textbook, Stage.SETUP, 0.5) is None
    assert simultaneity_slope(textbook, Stage.CONCLUSION, 0.5) is None
    assert simultaneity_slope(textbook, Stage.OUTBOUND, 0.2) == v
    assert simultaneity_slope(textbook, Stage.TURNAROUND, 0.0) == pytest.approx(v)
    assert simultaneity_slope(textbook, Stage.TURNAROUND, 0.5) == pytest.approx(0.0)
    assert simultaneity_slope(textbook, Stage.TURNAROUND, 1.0) == pytest.approx(-v)
    assert simultaneity_slope(textbook, Stage.INBOUND, 0.9) == -v


def test_simultaneity_line_jump_in_stationary_age(textbook):
    v = textbook.velocity
    t_turn = textbook.one_way_time

    before = build_scene(textbook, Stage.OUTBOUND, 1.0).simultaneity
    after = build_scene(textbook, Stage.INBOUND, 0.0).simultaneity

    # Alice's "now" on Earth leaps from t_turn / gamma^2 to T - t_turn / gamma^2
    assert before.stationary_age == pytest.approx(t_turn * (1 - v * v))
    assert after.stationary_age == pytest.approx(textbook.stationary_total_time - t_turn * (1 - v * v))


def test_simultaneity_line_geometry(textbook):
    scene = build_scene(textbook, Stage.OUTBOUND, 0.4)
    line = scene.simultaneity
    assert line.segment.start == scene.traveler_event
    assert line.segment.end.x == -0.5
    assert line.segment.slope == pytest.approx(textbook.velocity)
    assert line.stationary_age < scene.t_now


def test_no_simultaneity_line_at_rest(textbook):
    assert build_scene(textbook, Stage.SETUP, 0.5).simultaneity is None
    assert build_scene(textbook, Stage.CONCLUSION, 0.5).simultaneity is None


def test_world_lines(textbook):
    total = textbook.stationary_total_time
    scene = build_scene(textbook, Stage.OUTBOUND, 0.5)
    assert scene.stationary_world_line.end == Event(0.0, total)
    assert scene.planet_line.start.x == scene.planet_line.end.x == textbook.distance
    assert scene.traveler_path.events[1] == textbook.turnaround_event
    assert scene.traveler_path.proper_time() == pytest.approx(textbook.traveler_total_proper_time)
    assert scene.stationary_event == Event(0.0, scene.t_now)
    assert [s.slope for s in scene.light_cone] == [1.0, -1.0]


def test_active_path_grows_with_time(textbook):
    assert len(build_scene(textbook, Stage.SETUP, 0.0).traveler_active_path) == 1
    assert len(build_scene(textbook, Stage.OUTBOUND, 0.5).traveler_active_path) == 2
    inbound = build_scene(textbook, Stage.INBOUND, 0.5).traveler_active_path
    assert len(inbound) == 3
    assert inbound.events[1] == textbook.turnaround_event


def test_traveler_clock_at_reunion(textbook):
    scene = build_scene(textbook, Stage.CONCLUSION, 0.0)
    assert scene.traveler_proper_time == pytest.approx(textbook.traveler_total_proper_time)
    assert scene.stationary_time == pytest.approx(textbook.stationary_total_time)
    assert f"{textbook.stationary_total_time:.2f}" in scene.explanation
    assert f"{textbook.traveler_total_proper_time:.2f}" in scene.explanation


def test_optional_layers_off_by_default(textbook):
    scene = build_scene(textbook, Stage.INBOUND, 0.5)
    assert scene.grids == ()
    assert scene.signals == ()
    assert scene.received_counts == ReceivedCounts()
    assert scene.received_counts[Emitter.STATIONARY] == 0


@pytest.mark.parametrize("stage, legs, emphasis", [
    (Stage.SETUP, [GridLeg.OUTBOUND], FULL_EMPHASIS),
    (Stage.OUTBOUND, [GridLeg.OUTBOUND], FULL_EMPHASIS),
    (Stage.TURNAROUND, [GridLeg.OUTBOUND, GridLeg.INBOUND], REDUCED_EMPHASIS),
    (Stage.INBOUND, [GridLeg.INBOUND], FULL_EMPHASIS),
    (Stage.CONCLUSION, [GridLeg.INBOUND], FULL_EMPHASIS),
])
def test_grid_families_per_stage(textbook, stage, legs, emphasis):
    scene = build_scene(textbook, stage, 0.5, ALL_ON)
    assert [f.leg for f in scene.grids] == legs
    assert all(f.emphasis == emphasis for f in scene.grids)


def test_grid_lines_stay_inside_viewport(textbook):
    viewport = default_viewport(textbook)
    scene = build_scene(textbook, Stage.TURNAROUND, 0.5, ALL_ON)
    for family in scene.grids:
        assert family.lines
        for line in family.lines:
            assert viewport.contains(line.segment.start, eps=1e-6)
            assert viewport.contains(line.segment.end, eps=1e-6)
            if line.label_position is not None:
                assert viewport.contains(line.label_position, eps=1e-6)


def test_outbound_grid_contains_traveler_axes(textbook):
    (family,) = build_scene(textbook, Stage.OUTBOUND, 0.5, ALL_ON).grids
    by_label = {line.label: line for line in family.lines}

    time_axis = by_label["x'=0"]
    assert time_axis.kind == GridLineKind.POSITION
    assert time_axis.segment.slope == pytest.approx(1.0 / textbook.velocity)

    now_axis = by_label["t'=0"]
    assert now_axis.kind == GridLineKind.TIME
    assert now_axis.label_position == Event(0.0, 0.0)


def test_signal_counts(textbook):
    scene = build_scene(textbook, Stage.CONCLUSION, 0.0, ALL_ON)
    assert scene.received_counts[Emitter.STATIONARY] == 12
    assert scene.received_counts[Emitter.TRAVELER] == 6
    assert len(scene.signals) == 18


def test_scene_is_deterministic(textbook):
    a = build_scene(textbook, Stage.TURNAROUND, 0.37, ALL_ON)
    b = build_scene(textbook, Stage.TURNAROUND, 0.37, ALL_ON)
    assert a == b


def test_progress_is_clamped(textbook):
    scene = build_scene(textbook, Stage.OUTBOUND, 1.5)
    assert scene.progress == 1.0
    assert scene.t_now == pytest.approx(textbook.one_way_time)


@pytest.mark.parametrize("before, after", [
    ((Stage.OUTBOUND, 1.0), (Stage.TURNAROUND, 0.0)),
    ((Stage.TURNAROUND, 1.0), (Stage.INBOUND, 0.0)),
])
def test_stage_boundaries_are_continuous(textbook, before, after):
    a = build_scene(textbook, *before)
    b = build_scene(textbook, *after)
    assert a.t_now == pytest.approx(b.t_now)
    assert a.traveler_event.x == pytest.approx(b.traveler_event.x)
    assert a.traveler_event.t == pytest.approx(b.traveler_event.t)
    assert a.traveler_proper_time == pytest.approx(b.traveler_proper_time)


@pytest.mark.parametrize("progress", [0.0, 0.5, 1.0])
def test_traveler_waits_at_home_during_setup(textbook, progress):
    scene = build_scene(textbook, Stage.SETUP, progress)
    assert scene.traveler_event == Event(0.0, 0.0)
    assert scene.traveler_proper_time == 0.0


def test_traveler_clock_follows_active_path(slow_trip):
    for stage, progress in [(Stage.OUTBOUND, 0.3), (Stage.TURNAROUND, 0.5), (Stage.INBOUND, 0.8)]:
        scene = build_scene(slow_trip, stage, progress)
        assert scene.traveler_proper_time == pytest.approx(scene.traveler_active_path.proper_time())
        assert scene.traveler_proper_time == pytest.approx(traveler_proper_time_at(slow_trip, scene.t_now))
        assert scene.traveler_proper_time == pytest.approx(scene.t_now / slow_trip.gamma)


def test_scene_is_hashable(textbook):
    a = build_scene(textbook, Stage.INBOUND, 0.25, ALL_ON)
    b = build_scene(textbook, Stage.INBOUND, 0.25, ALL_ON)
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
