"""
Geometric Primitives of the Space-Time Diagram.

All coordinates live in the stay-at-home observer's inertial frame (the lab
frame): `x` is position in light-years, `t` is coordinate time in years.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, TYPE_CHECKING

import numpy as np
import math

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Event:
    """A point (x, t) in space-time."""
    x: float
    t: float

    def interval_to(self, other: Event) -> float:
        """
        Squared space-time interval dt^2 - dx^2 between two events.

        Positive for time-like separation, zero for light-like and negative
        for space-like separation.
        """
        dx = other.x - self.x
        dt = other.t - self.t
        return dt * dt - dx * dx

    def proper_time_to(self, other: Event) -> float:
        """Proper time along a straight (inertial) path to a time-like event."""
        return math.sqrt(max(0.0, self.interval_to(other)))

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.t])


@dataclass(frozen=True)
class Segment:
    """A straight line between two events."""
    start: Event
    end: Event
    label: Optional[str] = None

    @property
    def slope(self) -> Optional[float]:
        """dt/dx of the segment, or None for a vertical (x = const) segment."""
        dx = self.end.x - self.start.x
        if dx == 0.0:
            return None
        return (self.end.t - self.start.t) / dx

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.start.to_array(), self.end.to_array()])


@dataclass(frozen=True)
class WorldLine:
    """
    An ordered sequence of events traced by one observer.
    Consecutive events are joined by straight segments.
    """
    events: tuple[Event, ...] = field(default_factory=tuple)

    @classmethod
    def through(cls, events: List[Event]) -> WorldLine:
        return cls(events=tuple(events))

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    @property
    def start(self) -> Event:
        return self.events[0]

    @property
    def end(self) -> Event:
        return self.events[-1]

    def segments(self) -> list[Segment]:
        return [Segment(a, b) for a, b in zip(self.events[:-1], self.events[1:])]

    def proper_time(self) -> float:
        """Total proper time along the (piecewise inertial) world line."""
        return sum(s.start.proper_time_to(s.end) for s in self.segments())

    def to_array(self) -> npt.NDArray[np.float64]:
        """(N, 2) array of (x, t) rows, convenient for plotting."""
        if not self.events:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([e.to_array() for e in self.events])


@dataclass(frozen=True)
class Viewport:
    """Visible rectangle of the diagram in lab coordinates."""
    x_min: float
    x_max: float
    t_min: float
    t_max: float

    def contains(self, event: Event, eps: float = 1e-9) -> bool:
        return (
            self.x_min - eps <= event.x <= self.x_max + eps
            and self.t_min - eps <= event.t <= self.t_max + eps
        )

    def corners(self) -> list[Event]:
        return [
            Event(self.x_min, self.t_min),
            Event(self.x_max, self.t_min),
            Event(self.x_max, self.t_max),
            Event(self.x_min, self.t_max),
        ]
