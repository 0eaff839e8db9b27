from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from math import sqrt, ceil, floor, inf

from twinparadox.model.geometry_primitives import Event, Segment, Viewport


def lorentz_factor(velocity: float) -> float:
    """Lorentz factor 1 / sqrt(1 - v^2) for |v| < 1."""
    return 1.0 / sqrt(1.0 - velocity * velocity)


@dataclass(frozen=True)
class LorentzFrame:
    """
    Inertial frame moving with `velocity` relative to the lab frame, whose
    space-time origin sits at the lab event `origin`.

    Primed coordinates (x', t') are related to lab coordinates by the boost

        x' = gamma * (dx - v * dt)
        t' = gamma * (dt - v * dx)

    with dx, dt measured from `origin`.
    """
    velocity: float
    origin: Event = Event(0.0, 0.0)

    @property
    def gamma(self) -> float:
        return lorentz_factor(self.velocity)

    def to_frame(self, event: Event) -> tuple[float, float]:
        """Lab event -> (x', t')."""
        g, v = self.gamma, self.velocity
        dx = event.x - self.origin.x
        dt = event.t - self.origin.t
        return g * (dx - v * dt), g * (dt - v * dx)

    def to_lab(self, x_prime: float, t_prime: float) -> Event:
        """(x', t') -> lab event."""
        g, v = self.gamma, self.velocity
        return Event(
            self.origin.x + g * (x_prime + v * t_prime),
            self.origin.t + g * (t_prime + v * x_prime),
        )

    def primed_bounds(self, viewport: Viewport) -> tuple[float, float, float, float]:
        """
        Range of primed coordinates covered by the viewport.

        Returns:
            (x'_min, x'_max, t'_min, t'_max) over the four viewport corners. The
            boost is linear, so the extremes are always attained at corners.
        """
        primed = [self.to_frame(c) for c in viewport.corners()]
        xs = [p[0] for p in primed]
        ts = [p[1] for p in primed]
        return min(xs), max(xs), min(ts), max(ts)

    def integer_range(self, viewport: Viewport) -> tuple[range, range]:
        """Integer x' and t' values whose grid lines can cross the viewport."""
        x_lo, x_hi, t_lo, t_hi = self.primed_bounds(viewport)
        return (
            range(ceil(x_lo), floor(x_hi) + 1),
            range(ceil(t_lo), floor(t_hi) + 1),
        )

    def simultaneity_line(self, t_prime: float, viewport: Viewport) -> Optional[Segment]:
        """Lab segment of all events with the given t' (clipped)."""
        anchor = self.to_lab(0.0, t_prime)
        return clip_line_to_viewport(anchor, (1.0, self.velocity), viewport)

    def position_line(self, x_prime: float, viewport: Viewport) -> Optional[Segment]:
        """Lab segment of all events with the given x' (clipped)."""
        anchor = self.to_lab(x_prime, 0.0)
        return clip_line_to_viewport(anchor, (self.velocity, 1.0), viewport)


def clip_line_to_viewport(
    point: Event,
    direction: tuple[float, float],
    viewport: Viewport,
    *,
    eps: float = 1e-12
) -> Optional[Segment]:
    """
    Clip the infinite line P(s) = point + s * direction to the viewport.

    Uses the Liang-Barsky parametrisation: every viewport edge bounds the
    admissible parameter interval [s_lo, s_hi] from one side.

    Args:
        point: Any event on the line.
        direction: (dx, dt) direction of the line, not both zero.
        viewport: Rectangle to clip against.
        eps: Tolerance for treating a direction component as zero.

    Returns:
        The clipped Segment, or None when the line misses the viewport.
    """
    dx, dt = direction
    s_lo, s_hi = -inf, inf

    for p, q in (
        (-dx, point.x - viewport.x_min),
        (dx, viewport.x_max - point.x),
        (-dt, point.t - viewport.t_min),
        (dt, viewport.t_max - point.t),
    ):
        if abs(p) < eps:
            # parallel to this edge: either fully inside or fully outside
            if q < 0.0:
                return None
            continue
        s = q / p
        if p < 0.0:
            s_lo = max(s_lo, s)
        else:
            s_hi = min(s_hi, s)

    if s_lo > s_hi or s_lo == -inf or s_hi == inf:
        return None

    return Segment(
        start=Event(point.x + s_lo * dx, point.t + s_lo * dt),
        end=Event(point.x + s_hi * dx, point.t + s_hi * dt),
    )
