"""
Scene Builder (Geometry Engine)
===============================
Turns (parameters, stage, progress, display options) into everything the
Minkowski diagram draws.

Why is this file needed?
------------------------
1. Purity: `build_scene` is a pure function of its inputs. The animation can
   be paused, rewound or re-parameterised at any frame and the next call is
   always consistent, because no state survives between calls.
2. Decoupling: The plot widget only paints what it receives here. It never
   does physics.

Classes:
    DisplayOptions: Optional layers (boosted grid, signals).
    GridFamily / GridLine: Lines of the traveler's co-moving coordinate grid.
    SimultaneityLine: The traveler's current "plane of now".
    Scene: The complete description of one frame.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from twinparadox import config
from twinparadox.model.geometry_primitives import Event, Segment, Viewport, WorldLine
from twinparadox.model.geometry_utils import LorentzFrame
from twinparadox.model.narrative import explanation_for
from twinparadox.model.parameters import SimulationParameters
from twinparadox.model.signals import (
    Emitter, Signal, received_count, stationary_signals, traveler_event_at,
    traveler_path_until, traveler_signals,
)
from twinparadox.model.stages import Stage
from twinparadox.utils import lerp

logger = logging.getLogger(__name__)

# Grid opacity for a single leg, and for the two superimposed legs at the turnaround
FULL_EMPHASIS = 0.5
REDUCED_EMPHASIS = 0.3


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------

@dataclass(frozen=True)
class DisplayOptions:
    show_grid: bool = False
    show_stationary_signals: bool = False
    show_traveler_signals: bool = False


class GridLeg(StrEnum):
    """Which inertial leg of the trip a boosted grid belongs to."""
    OUTBOUND = "outbound"
    INBOUND = "inbound"


class GridLineKind(StrEnum):
    TIME = "t'"       # line of constant t' (a simultaneity line)
    POSITION = "x'"   # line of constant x' (a co-moving world line)


@dataclass(frozen=True)
class GridLine:
    kind: GridLineKind
    value: int
    segment: Segment
    label_position: Optional[Event] = None

    @property
    def label(self) -> str:
        return f"{self.kind}={self.value}"


@dataclass(frozen=True)
class GridFamily:
    leg: GridLeg
    emphasis: float
    lines: tuple[GridLine, ...] = ()


@dataclass(frozen=True)
class SimultaneityLine:
    """
    The traveler's line of "now".

    Attributes:
        segment: From the traveler's event back past Bob's world line.
        slope: dt/dx in the lab frame.
        stationary_age: Bob's clock reading the traveler regards as simultaneous.
    """
    segment: Segment
    slope: float
    stationary_age: float


@dataclass(frozen=True)
class ReceivedCounts:
    """Signals already received, per emitting twin. Indexable by Emitter."""
    stationary: int = 0
    traveler: int = 0

    def __getitem__(self, emitter: Emitter) -> int:
        return getattr(self, Emitter(emitter).value)


@dataclass(frozen=True)
class Scene:
    """
    Everything drawn for one frame. All fields are immutable values, so equal
    inputs give equal (and hashable) scenes.
    """
    params: SimulationParameters
    stage: Stage
    progress: float
    t_now: float
    viewport: Viewport

    stationary_world_line: WorldLine
    planet_line: Segment
    light_cone: tuple[Segment, Segment]

    traveler_path: WorldLine
    traveler_active_path: WorldLine
    traveler_event: Event
    stationary_event: Event
    traveler_proper_time: float

    simultaneity: Optional[SimultaneityLine]
    grids: tuple[GridFamily, ...]
    signals: tuple[Signal, ...]
    received_counts: ReceivedCounts = ReceivedCounts()
    explanation: str = ""

    @property
    def stationary_time(self) -> float:
        return self.t_now


# ------------------------------------------------------------------------------
# Time & slope mapping
# ------------------------------------------------------------------------------

def current_time(params: SimulationParameters, stage: Stage, progress: float) -> float:
    """Lab-frame time shown by the diagram for a stage and progress."""
    half = params.one_way_time
    match stage:
        case Stage.SETUP:
            return 0.0
        case Stage.OUTBOUND:
            return half * progress
        case Stage.TURNAROUND:
            return half
        case Stage.INBOUND:
            return half + half * progress
        case Stage.CONCLUSION:
            return params.stationary_total_time
    raise ValueError(f"Unknown stage: {stage!r}")


def simultaneity_slope(params: SimulationParameters, stage: Stage, progress: float) -> Optional[float]:
    """
    dt/dx of the traveler's simultaneity line, or None when it is hidden.

    During the turnaround the slope swings linearly in progress from +v to -v.
    This linear swing is a modelling simplification standing in for a finite
    acceleration phase.
    """
    v = params.velocity
    match stage:
        case Stage.OUTBOUND:
            return v
        case Stage.TURNAROUND:
            return lerp(v, -v, progress)
        case Stage.INBOUND:
            return -v
    return None


def default_viewport(params: SimulationParameters) -> Viewport:
    return Viewport(
        x_min=-config.VIEW_MARGIN_BEFORE,
        x_max=params.distance + config.VIEW_MARGIN_AFTER,
        t_min=-config.VIEW_MARGIN_BEFORE,
        t_max=params.stationary_total_time + config.VIEW_MARGIN_AFTER,
    )


# ------------------------------------------------------------------------------
# Boosted grid
# ------------------------------------------------------------------------------

def leg_frame(params: SimulationParameters, leg: GridLeg) -> LorentzFrame:
    """Co-moving frame of the traveler on one leg, anchored at the leg's start."""
    if leg == GridLeg.OUTBOUND:
        return LorentzFrame(velocity=params.velocity, origin=Event(0.0, 0.0))
    return LorentzFrame(velocity=-params.velocity, origin=params.turnaround_event)


def boosted_grid(frame: LorentzFrame, viewport: Viewport) -> tuple[GridLine, ...]:
    """
    Integer t' and x' lines of `frame` that cross the viewport.

    The viewport corners are mapped into the primed frame to find the integer
    range, then every integer line is mapped back and clipped.
    """
    x_values, t_values = frame.integer_range(viewport)
    lines: list[GridLine] = []

    for tp in t_values:
        segment = frame.simultaneity_line(tp, viewport)
        if segment is None:
            continue
        anchor = frame.to_lab(0.0, tp)
        lines.append(GridLine(
            kind=GridLineKind.TIME,
            value=tp,
            segment=segment,
            label_position=anchor if viewport.contains(anchor) else None,
        ))

    for xp in x_values:
        segment = frame.position_line(xp, viewport)
        if segment is None:
            continue
        anchor = frame.to_lab(xp, 0.0)
        lines.append(GridLine(
            kind=GridLineKind.POSITION,
            value=xp,
            segment=segment,
            label_position=anchor if viewport.contains(anchor) else None,
        ))

    return tuple(lines)


def grid_families(params: SimulationParameters, stage: Stage, viewport: Viewport) -> tuple[GridFamily, ...]:
    """Boosted grids to show for a stage (both legs, faded, at the turnaround)."""
    match stage:
        case Stage.SETUP | Stage.OUTBOUND:
            legs = [(GridLeg.OUTBOUND, FULL_EMPHASIS)]
        case Stage.INBOUND | Stage.CONCLUSION:
            legs = [(GridLeg.INBOUND, FULL_EMPHASIS)]
        case _:
            legs = [(GridLeg.OUTBOUND, REDUCED_EMPHASIS), (GridLeg.INBOUND, REDUCED_EMPHASIS)]

    families = []
    for leg, emphasis in legs:
        frame = leg_frame(params, leg)
        families.append(GridFamily(leg=leg, emphasis=emphasis, lines=boosted_grid(frame, viewport)))
    return tuple(families)


# ------------------------------------------------------------------------------
# Scene
# ------------------------------------------------------------------------------

def _simultaneity(params: SimulationParameters, stage: Stage, progress: float, traveler: Event) -> Optional[SimultaneityLine]:
    slope = simultaneity_slope(params, stage, progress)
    if slope is None:
        return None

    x_end = -config.SIMULTANEITY_OVERSHOOT
    end = Event(x_end, traveler.t - slope * (traveler.x - x_end))
    return SimultaneityLine(
        segment=Segment(traveler, end, label="simultaneity"),
        slope=slope,
        stationary_age=traveler.t - slope * traveler.x,
    )


def build_scene(
    params: SimulationParameters,
    stage: Stage,
    progress: float,
    options: DisplayOptions = DisplayOptions(),
) -> Scene:
    """
    Compute every drawable primitive for one frame.

    Args:
        params: Mission parameters.
        stage: Current narrative stage.
        progress: Progress (0..1) inside the stage.
        options: Which optional layers to compute.

    Returns:
        A frozen Scene. Identical inputs always give an equal Scene.
    """
    progress = min(max(progress, 0.0), 1.0)
    total = params.stationary_total_time
    t_now = current_time(params, stage, progress)
    viewport = default_viewport(params)

    traveler = traveler_event_at(params, t_now)
    origin = Event(0.0, 0.0)
    size = config.LIGHT_CONE_SIZE

    grids = grid_families(params, stage, viewport) if options.show_grid else ()

    signals: list[Signal] = []
    if options.show_stationary_signals:
        signals.extend(stationary_signals(params, t_now))
    if options.show_traveler_signals:
        signals.extend(traveler_signals(params, t_now))

    counts = ReceivedCounts(
        stationary=received_count(signals, Emitter.STATIONARY),
        traveler=received_count(signals, Emitter.TRAVELER),
    )
    active_path = traveler_path_until(params, t_now)

    return Scene(
        params=params,
        stage=stage,
        progress=progress,
        t_now=t_now,
        viewport=viewport,
        stationary_world_line=WorldLine.through([origin, Event(0.0, total)]),
        planet_line=Segment(Event(params.distance, 0.0), Event(params.distance, total), label="planet"),
        light_cone=(
            Segment(origin, Event(size, size)),
            Segment(origin, Event(-size, size)),
        ),
        traveler_path=WorldLine.through([origin, params.turnaround_event, Event(0.0, total)]),
        traveler_active_path=active_path,
        traveler_event=traveler,
        stationary_event=Event(0.0, t_now),
        traveler_proper_time=active_path.proper_time(),
        simultaneity=_simultaneity(params, stage, progress, traveler),
        grids=grids,
        signals=tuple(signals),
        received_counts=counts,
        explanation=explanation_for(stage, params),
    )
