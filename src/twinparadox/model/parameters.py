"""
Simulation Parameters
=====================
The two free physical inputs of the Twin Paradox and the quantities derived
from them.

Units are normalized so that the speed of light is 1: distances are in
light-years, times in years and velocities are fractions of c.

Classes:
    SimulationParameters: Immutable (distance, velocity) pair.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from twinparadox import config
from twinparadox.model.geometry_primitives import Event
from twinparadox.utils import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationParameters:
    """
    Mission parameters of the traveling twin.

    Attributes:
        distance: Distance to the turnaround star in light-years (> 0).
        velocity: Traveler speed as a fraction of c, strictly inside (0, 1).

    Raises:
        ValueError: If either value lies outside its valid domain.
    """
    distance: float = config.DEFAULT_DISTANCE
    velocity: float = config.DEFAULT_VELOCITY

    def __post_init__(self) -> None:
        if not math.isfinite(self.distance) or self.distance <= 0.0:
            raise ValueError(f"Distance must be positive, got {self.distance}.")
        if not math.isfinite(self.velocity) or not 0.0 < self.velocity < 1.0:
            raise ValueError(f"Velocity must be inside (0, 1), got {self.velocity}.")

    @classmethod
    def clamped(cls, distance: float, velocity: float) -> SimulationParameters:
        """
        Build parameters from raw user input, forcing both values into the
        ranges and the precision offered by the input widgets.
        """
        d = round(clamp(distance, config.DISTANCE_MIN, config.DISTANCE_MAX), config.DISTANCE_DECIMALS)
        v = round(clamp(velocity, config.VELOCITY_MIN, config.VELOCITY_MAX), config.VELOCITY_DECIMALS)
        if (d, v) != (distance, velocity):
            logger.debug(f"Clamped input ({distance}, {velocity}) to ({d}, {v}).")
        return cls(distance=d, velocity=v)

    # ---- derived quantities ----

    @property
    def gamma(self) -> float:
        """Lorentz factor 1 / sqrt(1 - v^2)."""
        return 1.0 / math.sqrt(1.0 - self.velocity ** 2)

    @property
    def one_way_time(self) -> float:
        """Lab-frame time at which the traveler reaches the star."""
        return self.distance / self.velocity

    @property
    def stationary_total_time(self) -> float:
        """Round-trip time elapsed for the stay-at-home twin."""
        return 2.0 * self.one_way_time

    @property
    def traveler_total_proper_time(self) -> float:
        """Round-trip time elapsed on the traveler's own clock."""
        return self.stationary_total_time / self.gamma

    @property
    def traveler_one_way_proper_time(self) -> float:
        return self.traveler_total_proper_time / 2.0

    @property
    def age_gap(self) -> float:
        """How much older the stay-at-home twin is at the reunion."""
        return self.stationary_total_time - self.traveler_total_proper_time

    @property
    def turnaround_event(self) -> Event:
        return Event(x=self.distance, t=self.one_way_time)
