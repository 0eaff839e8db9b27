"""
Stage Clock
===========
The narrative progression of the Twin Paradox and the position inside the
current stage.

Classes:
    Stage: Ordered enumeration of the five narrative stages.
    StageClock: Mutable (stage, progress) pair with navigation rules.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

from twinparadox.utils import clamp

logger = logging.getLogger(__name__)


class Stage(IntEnum):
    """The stages of the journey, in narrative order."""
    SETUP = 0
    OUTBOUND = 1
    TURNAROUND = 2
    INBOUND = 3
    CONCLUSION = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def is_first(self) -> bool:
        return self == Stage.SETUP

    @property
    def is_last(self) -> bool:
        return self == Stage.CONCLUSION


@dataclass
class StageClock:
    """
    Current stage and fractional progress (0..1) within it.

    Every stage change resets the progress to 0. The animation driver calls
    `tick()`, which rolls over into the next stage and freezes at the end of
    the last one.
    """
    stage: Stage = Stage.SETUP
    progress: float = 0.0

    def __post_init__(self) -> None:
        self.stage = Stage(self.stage)
        self.progress = clamp(self.progress, 0.0, 1.0)

    @property
    def is_finished(self) -> bool:
        return self.stage.is_last and self.progress >= 1.0

    def advance(self) -> bool:
        """Move to the next stage. Returns False (no-op) on the last stage."""
        if self.stage.is_last:
            return False
        self._enter(Stage(self.stage + 1))
        return True

    def retreat(self) -> bool:
        """Move to the previous stage. Returns False (no-op) on the first stage."""
        if self.stage.is_first:
            return False
        self._enter(Stage(self.stage - 1))
        return True

    def jump_to(self, stage: Stage) -> None:
        self._enter(Stage(stage))

    def set_progress(self, progress: float) -> None:
        self.progress = clamp(progress, 0.0, 1.0)

    def tick(self, step: float) -> bool:
        """
        Advance the animation by `step` progress units.

        Reaching the end of a stage rolls over into the next stage with
        progress 0. On the last stage the progress freezes at 1.

        Returns:
            True while the animation should keep running, False once the
            journey is finished.
        """
        if self.is_finished:
            return False

        nxt = self.progress + step
        if nxt < 1.0:
            self.set_progress(nxt)
            return True

        if self.advance():
            return True

        self.progress = 1.0
        logger.debug("Reached the end of the journey.")
        return False

    def reset(self) -> None:
        self._enter(Stage.SETUP)

    def _enter(self, stage: Stage) -> None:
        if stage != self.stage:
            logger.debug(f"Stage {self.stage.label} -> {stage.label}")
        self.stage = stage
        self.progress = 0.0
