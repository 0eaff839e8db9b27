import numpy as np
import pytest

from twinparadox.model.geometry_primitives import Event
from twinparadox.model.signals import (
    Emitter, doppler_factor, observed_doppler, received_count, stationary_reception, stationary_signals,
    traveler_event_at, traveler_event_at_proper_time, traveler_proper_time_at, traveler_signals,
)


def _assert_light_like(signal):
    dx = signal.end.x - signal.emission.x
    dt = signal.end.t - signal.emission.t
    assert abs(dx) == pytest.approx(dt)


def test_doppler_factor():
    assert doppler_factor(0.6, approaching=False) == pytest.approx(0.5)
    assert doppler_factor(0.6, approaching=True) == pytest.approx(2.0)


def test_traveler_kinematics(textbook):
    assert traveler_event_at(textbook, 0.0) == Event(0.0, 0.0)
    turn = traveler_event_at(textbook, textbook.one_way_time)
    assert turn.x == pytest.approx(textbook.distance)
    home = traveler_event_at(textbook, textbook.stationary_total_time)
    assert home.x == pytest.approx(0.0, abs=1e-9)
    # Clamped outside the trip
    assert traveler_event_at(textbook, 99.0) == home
    assert traveler_proper_time_at(textbook, 99.0) == pytest.approx(textbook.traveler_total_proper_time)


def test_proper_time_and_event_are_inverse(slow_trip):
    for tau in (0.5, 5.0, 13.0, 20.0, 26.0):
        event = traveler_event_at_proper_time(slow_trip, tau)
        assert traveler_proper_time_at(slow_trip, event.t) == pytest.approx(tau)
        assert traveler_event_at(slow_trip, event.t).x == pytest.approx(event.x)


def test_stationary_reception_lies_on_traveler_path(slow_trip):
    for t_emit in (1.0, 6.0, 7.0, 30.0):
        reception = stationary_reception(slow_trip, t_emit)
        assert reception.x == pytest.approx(reception.t - t_emit)
        assert traveler_event_at(slow_trip, reception.t).x == pytest.approx(reception.x)


def test_no_signal_before_its_emission(textbook):
    assert stationary_signals(textbook, 0.5) == []
    assert traveler_signals(textbook, 1.0) == []


def test_stationary_signals_in_flight(textbook):
    signals = stationary_signals(textbook, 2.5)
    assert [s.index for s in signals] == [1, 2]
    assert not any(s.received for s in signals)
    assert signals[0].end == Event(1.5, 2.5)
    assert signals[1].end == Event(0.5, 2.5)
    for signal in signals:
        _assert_light_like(signal)


def test_traveler_signal_in_flight(textbook):
    (signal,) = traveler_signals(textbook, 3.0)
    assert signal.emitter == Emitter.TRAVELER
    assert not signal.received
    assert signal.end.t == 3.0
    assert signal.end.x == pytest.approx(signal.emission.x - (3.0 - signal.emission.t))
    _assert_light_like(signal)


def test_textbook_stationary_signals_arrive_on_the_way_home(textbook):
    total = textbook.stationary_total_time
    signals = stationary_signals(textbook, total)

    assert len(signals) == 12
    assert received_count(signals) == 12
    for signal in signals:
        _assert_light_like(signal)
        # The first yearly signal only catches up after the turnaround
        assert signal.reception.t > textbook.one_way_time

    taus = [traveler_proper_time_at(textbook, s.reception.t) for s in signals]
    spacing = np.diff(taus)
    assert spacing == pytest.approx(1.0 / doppler_factor(textbook.velocity, approaching=True))
    assert spacing[0] == pytest.approx(0.268, abs=1e-3)


def test_stationary_signals_red_then_blue(slow_trip):
    t_turn = slow_trip.one_way_time
    signals = stationary_signals(slow_trip, slow_trip.stationary_total_time)
    assert all(s.received for s in signals)

    outbound = [s for s in signals if s.reception.t <= t_turn]
    inbound = [s for s in signals if s.reception.t > t_turn]
    assert len(outbound) == 6

    tau_out = [traveler_proper_time_at(slow_trip, s.reception.t) for s in outbound]
    tau_in = [traveler_proper_time_at(slow_trip, s.reception.t) for s in inbound]
    # Redshift: one signal every 2 years of traveler time; blueshift: every half year
    assert np.diff(tau_out) == pytest.approx(2.0)
    assert np.diff(tau_in) == pytest.approx(0.5)


def test_textbook_traveler_signals(textbook):
    signals = traveler_signals(textbook, textbook.stationary_total_time)
    assert len(signals) == 6
    assert received_count(signals, Emitter.TRAVELER) == 6
    assert received_count(signals, Emitter.STATIONARY) == 0

    arrivals = [s.reception.t for s in signals]
    assert arrivals[:3] == pytest.approx([3.732, 7.463, 11.195], abs=2e-3)
    assert arrivals[3:] == pytest.approx([11.472, 11.740, 12.008], abs=2e-3)

    gaps = np.diff(arrivals)
    assert gaps[:2] == pytest.approx(1.0 / doppler_factor(textbook.velocity, approaching=False))
    assert gaps[3:] == pytest.approx(1.0 / doppler_factor(textbook.velocity, approaching=True))
    for signal in signals:
        assert signal.reception.x == 0.0
        _assert_light_like(signal)


def test_signal_path_label(textbook):
    (signal,) = stationary_signals(textbook, 1.0)
    assert signal.path.label == "stationary-1"
    assert signal.path.start == Event(0.0, 1.0)


def test_reception_is_unset_while_in_flight(textbook):
    for signal in stationary_signals(textbook, 2.5) + traveler_signals(textbook, 3.0):
        assert not signal.received
        assert signal.reception is None
        assert observed_doppler(textbook, signal) is None

    for signal in stationary_signals(textbook, textbook.stationary_total_time):
        assert signal.received
        assert signal.reception == signal.end


@pytest.mark.parametrize("emit", [stationary_signals, traveler_signals])
def test_receptions_keep_emission_order(slow_trip, emit):
    signals = emit(slow_trip, slow_trip.stationary_total_time)
    arrivals = [s.reception.t for s in signals]
    assert [s.index for s in signals] == sorted(s.index for s in signals)
    assert all(later >= earlier for earlier, later in zip(arrivals, arrivals[1:]))


def test_observed_doppler_per_leg(slow_trip):
    t_turn = slow_trip.one_way_time
    for signal in stationary_signals(slow_trip, slow_trip.stationary_total_time):
        expected = 2.0 if signal.reception.t > t_turn else 0.5
        assert observed_doppler(slow_trip, signal) == pytest.approx(expected)
    for signal in traveler_signals(slow_trip, slow_trip.stationary_total_time):
        expected = 2.0 if signal.emission.t > t_turn else 0.5
        assert observed_doppler(slow_trip, signal) == pytest.approx(expected)
