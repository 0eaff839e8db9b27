import dataclasses
import math

import pytest

from twinparadox import config
from twinparadox.model.geometry_primitives import Event
from twinparadox.model.parameters import SimulationParameters


def test_defaults_match_config():
    params = SimulationParameters()
    assert params.distance == config.DEFAULT_DISTANCE
    assert params.velocity == config.DEFAULT_VELOCITY


def test_textbook_values(textbook):
    assert textbook.gamma == pytest.approx(2.0, abs=1e-3)
    assert textbook.one_way_time == pytest.approx(6.0046, abs=1e-4)
    assert textbook.stationary_total_time == pytest.approx(12.0092, abs=1e-4)
    assert textbook.traveler_total_proper_time == pytest.approx(6.005, abs=1e-3)
    assert textbook.age_gap == pytest.approx(
        textbook.stationary_total_time - textbook.traveler_total_proper_time
    )


def test_round_numbers(slow_trip):
    assert slow_trip.gamma == pytest.approx(1.25)
    assert slow_trip.stationary_total_time == pytest.approx(100.0 / 3.0)
    assert slow_trip.traveler_total_proper_time == pytest.approx(80.0 / 3.0)
    assert slow_trip.traveler_one_way_proper_time == pytest.approx(40.0 / 3.0)


def test_traveler_is_always_younger():
    for v in (0.1, 0.5, 0.9, 0.99):
        params = SimulationParameters(distance=3.0, velocity=v)
        assert params.traveler_total_proper_time < params.stationary_total_time
        assert params.age_gap > 0.0


def test_turnaround_event(textbook):
    assert textbook.turnaround_event == Event(5.2, textbook.one_way_time)


@pytest.mark.parametrize("distance, velocity", [
    (5.0, 1.0),
    (5.0, 0.0),
    (5.0, -0.5),
    (5.0, 1.5),
    (0.0, 0.5),
    (-1.0, 0.5),
    (math.nan, 0.5),
    (5.0, math.inf),
])
def test_invalid_values_rejected(distance, velocity):
    with pytest.raises(ValueError):
        SimulationParameters(distance=distance, velocity=velocity)


def test_clamped_forces_ui_ranges():
    low = SimulationParameters.clamped(0.5, 1.5)
    assert low.distance == config.DISTANCE_MIN
    assert low.velocity == config.VELOCITY_MAX

    high = SimulationParameters.clamped(25.0, 0.01)
    assert high.distance == config.DISTANCE_MAX
    assert high.velocity == config.VELOCITY_MIN

    inside = SimulationParameters.clamped(4.0, 0.5)
    assert (inside.distance, inside.velocity) == (4.0, 0.5)


def test_parameters_are_immutable(textbook):
    with pytest.raises(dataclasses.FrozenInstanceError):
        textbook.velocity = 0.5


def test_gamma_grows_without_bound():
    gammas = [SimulationParameters(distance=1.0, velocity=v).gamma for v in (0.1, 0.3, 0.6, 0.9, 0.99, 0.999999)]
    assert all(later > earlier for earlier, later in zip(gammas, gammas[1:]))
    assert gammas[-1] > 700.0


@pytest.mark.parametrize("distance", [1.0, 5.2, 10.0])
@pytest.mark.parametrize("velocity", [0.1, 0.6, 0.866, 0.99])
def test_traveler_time_is_dilated_by_gamma(distance, velocity):
    params = SimulationParameters(distance=distance, velocity=velocity)
    assert params.traveler_total_proper_time * params.gamma == pytest.approx(params.stationary_total_time)
    assert params.traveler_one_way_proper_time == pytest.approx(params.traveler_total_proper_time / 2)


def test_clamped_rounds_to_widget_precision():
    params = SimulationParameters.clamped(5.2571, 0.86641)
    assert params.distance == round(5.2571, config.DISTANCE_DECIMALS) == 5.26
    assert params.velocity == round(0.86641, config.VELOCITY_DECIMALS) == 0.866
