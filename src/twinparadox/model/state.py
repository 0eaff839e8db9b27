"""
Session State (Data Model)
==========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the mission parameters, the stage clock, the
   display toggles and the playback settings in one place.
2. Decoupling: Views read from this object; Controllers write to this object.
   The diagram is always rebuilt from it with `scene()`.

Nothing here is persisted: every field is reset when the application starts.

Classes:
    SimulationState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging

from twinparadox import config
from twinparadox.model.parameters import SimulationParameters
from twinparadox.model.scene import DisplayOptions, Scene, build_scene
from twinparadox.model.stages import Stage, StageClock
from twinparadox.utils import clamp

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """
    Singleton-like class that holds the entire state of the session.
    Pass this instance to your Controllers and Views.
    """
    params: SimulationParameters = field(default_factory=SimulationParameters)
    clock: StageClock = field(default_factory=StageClock)
    options: DisplayOptions = field(default_factory=DisplayOptions)

    playback_speed: float = config.DEFAULT_ANIMATION_SPEED
    is_playing: bool = False

    @property
    def stage(self) -> Stage:
        return self.clock.stage

    @property
    def progress(self) -> float:
        return self.clock.progress

    @property
    def parameters_editable(self) -> bool:
        """Mission parameters can only change before departure."""
        return self.clock.stage == Stage.SETUP

    def scene(self) -> Scene:
        return build_scene(self.params, self.clock.stage, self.clock.progress, self.options)

    def set_parameters(self, distance: float, velocity: float) -> None:
        self.params = SimulationParameters.clamped(distance, velocity)
        logger.info(
            f"Parameters set: d={self.params.distance} ly, v={self.params.velocity} c, "
            f"gamma={self.params.gamma:.3f}"
        )

    def set_options(self, **changes: bool) -> None:
        """Update display toggles, e.g. `set_options(show_grid=True)`."""
        self.options = replace(self.options, **changes)

    def set_playback_speed(self, speed: float) -> None:
        self.playback_speed = clamp(speed, config.ANIMATION_SPEED_MIN, config.ANIMATION_SPEED_MAX)

    @property
    def speed_multiplier(self) -> float:
        """Playback speed relative to the default animation step."""
        return self.playback_speed / config.DEFAULT_ANIMATION_SPEED

    def reset(self) -> None:
        """Clear all data for a new session"""
        self.params = SimulationParameters()
        self.clock = StageClock()
        self.options = DisplayOptions()
        self.playback_speed = config.DEFAULT_ANIMATION_SPEED
        self.is_playing = False
        logger.info("Simulation state has been reset.")
