"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for handling slow tasks.

Why is this file needed?
------------------------
1. Responsiveness: A tutor request is a network round-trip. Running it on the
   main thread would freeze the animation and the whole window.
2. Signals: They provide a safe way to hand the answer back to the GUI
   using Qt Signals.

Classes:
    TutorWorker: Sends one question to the physics tutor.
"""
import logging
from PySide6.QtCore import QThread, Signal

from twinparadox.controller import tutor
from twinparadox.controller.tutor import ChatMessage
from twinparadox.model.parameters import SimulationParameters
from twinparadox.model.stages import Stage

logger = logging.getLogger(__name__)


class TutorWorker(QThread):
    # Signals to update the UI from the background
    answer_ready = Signal(str)
    error_occurred = Signal(str)

    def __init__(
        self,
        question: str,
        params: SimulationParameters,
        stage: Stage,
        history: list[ChatMessage],
    ):
        super().__init__()
        # Inputs are captured by value; the GUI may change the state meanwhile
        self.question = question
        self.params = params
        self.stage = stage
        self.history = list(history)

    def run(self):
        try:
            logger.info(f"Asking tutor (stage {self.stage.name}, {len(self.history)} earlier messages)...")
            answer = tutor.ask(self.question, self.params, self.stage, self.history)
            self.answer_ready.emit(answer)
        except Exception as e:
            logger.error(f"Error in TutorWorker: {e}")
            self.error_occurred.emit(str(e))
