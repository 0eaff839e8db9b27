"""
Signal Exchange
===============
Light-speed "birthday" signals exchanged between the twins.

Each twin emits one signal per year of their own clock. A signal travels on a
light-like line (|dx/dt| = 1) until it meets the other twin's world line. The
full set is rebuilt from scratch for every instant; nothing is carried over
between frames.

Classes:
    Emitter: Which twin sent a signal.
    Signal: One emitted signal and its state at the current instant.

Functions:
    stationary_signals: Signals sent by the stay-at-home twin.
    traveler_signals: Signals sent by the traveling twin.
    observed_doppler: Red/blue shift of a received signal.
    received_count: Number of signals that already arrived.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from twinparadox.model.geometry_primitives import Event, Segment, WorldLine
from twinparadox.model.parameters import SimulationParameters


class Emitter(StrEnum):
    STATIONARY = "stationary"
    TRAVELER = "traveler"


@dataclass(frozen=True)
class Signal:
    """
    A light signal at the current instant.

    Attributes:
        emitter: The twin that sent it.
        index: Emitter clock reading at emission (1, 2, ...).
        emission: Lab event of emission.
        end: Reception event if received, otherwise the wavefront at t_now.
        received: Whether the other twin already got it.
        reception: Lab event of reception, None while the signal is in flight.
    """
    emitter: Emitter
    index: int
    emission: Event
    end: Event
    received: bool
    reception: Optional[Event]

    @property
    def path(self) -> Segment:
        return Segment(self.emission, self.end, label=f"{self.emitter}-{self.index}")


def doppler_factor(velocity: float, approaching: bool) -> float:
    """
    Ratio of received to emitted signal frequency for relative speed `velocity`.

    Below 1 (redshift) while the twins separate, above 1 (blueshift) while
    they approach.
    """
    ratio = (1.0 + velocity) / (1.0 - velocity)
    return math.sqrt(ratio) if approaching else math.sqrt(1.0 / ratio)


def traveler_event_at(params: SimulationParameters, t: float) -> Event:
    """Lab event of the traveler at lab time t (clamped to the trip)."""
    t = min(max(t, 0.0), params.stationary_total_time)
    t_turn = params.one_way_time
    if t <= t_turn:
        return Event(params.velocity * t, t)
    return Event(params.distance - params.velocity * (t - t_turn), t)


def traveler_path_until(params: SimulationParameters, t: float) -> WorldLine:
    """World line the traveler has covered by lab time t (a single event at t <= 0)."""
    t = min(max(t, 0.0), params.stationary_total_time)
    events = [Event(0.0, 0.0)]
    if t > 0.0:
        if t > params.one_way_time:
            events.append(params.turnaround_event)
        events.append(traveler_event_at(params, t))
    return WorldLine.through(events)


def traveler_proper_time_at(params: SimulationParameters, t: float) -> float:
    """Traveler clock reading at lab time t: the proper length of the path so far."""
    return traveler_path_until(params, t).proper_time()


def traveler_event_at_proper_time(params: SimulationParameters, tau: float) -> Event:
    """Lab event at which the traveler's clock reads `tau`."""
    g = params.gamma
    if tau <= params.traveler_one_way_proper_time:
        t = tau * g
        return Event(params.velocity * t, t)
    t = params.one_way_time + (tau - params.traveler_one_way_proper_time) * g
    return Event(params.distance - params.velocity * (t - params.one_way_time), t)


def stationary_reception(params: SimulationParameters, t_emit: float) -> Event:
    """
    Where a signal sent from x = 0 at `t_emit` meets the traveler.

    The signal follows x = t - t_emit. It is solved against the outbound leg
    first and against the inbound leg when that first intersection falls after
    the turnaround.
    """
    v = params.velocity
    t_turn = params.one_way_time

    t_int = t_emit / (1.0 - v)
    if t_int > t_turn:
        t_int = (params.distance + t_emit + v * t_turn) / (1.0 + v)
    return Event(t_int - t_emit, t_int)


def stationary_signals(params: SimulationParameters, t_now: float) -> list[Signal]:
    """Signals emitted by the stay-at-home twin at each whole year up to t_now."""
    signals: list[Signal] = []
    for i in range(1, math.floor(params.stationary_total_time) + 1):
        t_emit = float(i)
        if t_emit > t_now:
            break

        reception = stationary_reception(params, t_emit)
        received = t_now >= reception.t
        end = reception if received else Event(t_now - t_emit, t_now)

        signals.append(Signal(
            emitter=Emitter.STATIONARY,
            index=i,
            emission=Event(0.0, t_emit),
            end=end,
            received=received,
            reception=reception if received else None,
        ))
    return signals


def traveler_signals(params: SimulationParameters, t_now: float) -> list[Signal]:
    """Signals emitted by the traveler at each whole year of proper time."""
    signals: list[Signal] = []
    for i in range(1, math.floor(params.traveler_total_proper_time) + 1):
        emission = traveler_event_at_proper_time(params, float(i))
        if emission.t > t_now:
            break

        # Heads home along x = x_emit - (t - t_emit)
        reception = Event(0.0, emission.t + emission.x)
        received = t_now >= reception.t
        if received:
            end = reception
        else:
            end = Event(emission.x - (t_now - emission.t), t_now)

        signals.append(Signal(
            emitter=Emitter.TRAVELER,
            index=i,
            emission=emission,
            end=end,
            received=received,
            reception=reception if received else None,
        ))
    return signals


def observed_doppler(params: SimulationParameters, signal: Signal) -> Optional[float]:
    """
    Frequency ratio the receiving twin measures for `signal`, or None while it
    is still in flight.

    The twins approach once the receiver (stationary signals) or the emitter
    (traveler signals) is past the turnaround.
    """
    if signal.reception is None:
        return None
    t_turn = params.one_way_time
    if signal.emitter == Emitter.STATIONARY:
        approaching = signal.reception.t > t_turn
    else:
        approaching = signal.emission.t > t_turn
    return doppler_factor(params.velocity, approaching)


def received_count(signals: list[Signal], emitter: Optional[Emitter] = None) -> int:
    return sum(1 for s in signals if s.received and (emitter is None or s.emitter == emitter))
