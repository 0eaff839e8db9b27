from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer, Signal

from twinparadox import config
from twinparadox.model.stages import Stage
from twinparadox.model.state import SimulationState

logger = logging.getLogger(__name__)


class PlaybackController(QObject):
    """
    Drives the stage clock from a QTimer and is the single writer of the
    SimulationState. Views listen to `state_changed` and rebuild from the state.
    """
    state_changed = Signal(object)
    playing_changed = Signal(bool)

    def __init__(self, state: SimulationState, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.state = state

        self.timer = QTimer(self)
        self.timer.setInterval(config.FRAME_INTERVAL_MS)
        self.timer.timeout.connect(self._on_tick)

    # ---- playback ----

    def toggle_play(self) -> None:
        """Play/pause; when the journey is over, start again from Setup."""
        if self.state.clock.is_finished:
            self.state.clock.reset()
            self._set_playing(True)
            self._notify()
            return
        self._set_playing(not self.state.is_playing)

    def pause(self) -> None:
        self._set_playing(False)

    def _on_tick(self) -> None:
        running = self.state.clock.tick(self.state.playback_speed)
        if not running:
            self._set_playing(False)
        self._notify()

    def _set_playing(self, playing: bool) -> None:
        if playing == self.state.is_playing:
            return
        self.state.is_playing = playing
        if playing:
            self.timer.start()
        else:
            self.timer.stop()
        logger.debug(f"Playback {'started' if playing else 'paused'} at {self.state.stage.label}.")
        self.playing_changed.emit(playing)

    # ---- manual navigation (always pauses) ----

    def next_stage(self) -> None:
        self.pause()
        if self.state.clock.advance():
            self._notify()

    def previous_stage(self) -> None:
        self.pause()
        if self.state.clock.retreat():
            self._notify()

    def jump_to(self, stage: Stage) -> None:
        self.pause()
        self.state.clock.jump_to(stage)
        self._notify()

    # ---- settings ----

    def set_parameters(self, distance: float, velocity: float) -> None:
        if not self.state.parameters_editable:
            logger.warning("Ignoring parameter change outside the Setup stage.")
            return
        self.state.set_parameters(distance, velocity)
        self._notify()

    def set_options(self, **changes: bool) -> None:
        self.state.set_options(**changes)
        self._notify()

    def set_speed(self, speed: float) -> None:
        self.state.set_playback_speed(speed)
        self._notify()

    def reset(self) -> None:
        self.pause()
        self.state.reset()
        self._notify()

    def _notify(self) -> None:
        self.state_changed.emit(self.state)
