"""
Physics Tutor Chat Panel
"""
import html
import logging

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QLineEdit,
    QTextBrowser, QGroupBox
)

from twinparadox.controller.tutor import ChatMessage, GREETING, ERROR_MESSAGE
from twinparadox.controller.workers import TutorWorker
from twinparadox.model.state import SimulationState

logger = logging.getLogger(__name__)


class TutorPanel(QWidget):
    def __init__(self, state: SimulationState) -> None:
        super().__init__()
        self.state = state
        self.messages: list[ChatMessage] = [ChatMessage("model", GREETING)]
        self.worker: TutorWorker | None = None

        layout = QVBoxLayout(self)

        grp = QGroupBox("AI Physics Tutor")
        vbox = QVBoxLayout(grp)

        self.transcript = QTextBrowser()
        self.transcript.setOpenExternalLinks(False)
        vbox.addWidget(self.transcript, 1)

        self.lbl_thinking = QLabel("Thinking...")
        self.lbl_thinking.setStyleSheet("color: gray; font-style: italic;")
        self.lbl_thinking.setVisible(False)
        vbox.addWidget(self.lbl_thinking)

        input_row = QHBoxLayout()
        self.input = QLineEdit()
        self.input.setPlaceholderText("Why does the line tilt?")
        self.input.returnPressed.connect(self.on_send_clicked)
        input_row.addWidget(self.input, 1)
        self.btn_send = QPushButton("Send")
        self.btn_send.clicked.connect(self.on_send_clicked)
        input_row.addWidget(self.btn_send)
        vbox.addLayout(input_row)

        layout.addWidget(grp)

        self._render_transcript()

    @property
    def is_busy(self) -> bool:
        return self.worker is not None

    def on_send_clicked(self) -> None:
        question = self.input.text().strip()
        if not question or self.is_busy:
            return

        # Earlier turns only; the new question is sent separately
        history = list(self.messages)
        self.messages.append(ChatMessage("user", question))
        self.input.clear()
        self._render_transcript()
        self._set_busy(True)

        self.worker = TutorWorker(question, self.state.params, self.state.stage, history)
        self.worker.answer_ready.connect(self.on_answer)
        self.worker.error_occurred.connect(self.on_error)
        self.worker.finished.connect(self.on_worker_finished)
        self.worker.start()

    def on_answer(self, text: str) -> None:
        self.messages.append(ChatMessage("model", text))
        self._render_transcript()

    def on_error(self, message: str) -> None:
        logger.error(f"Tutor request failed: {message}")
        self.messages.append(ChatMessage("model", ERROR_MESSAGE))
        self._render_transcript()

    def on_worker_finished(self) -> None:
        self.worker.deleteLater()
        self.worker = None
        self._set_busy(False)

    def shutdown(self) -> None:
        """Block until a pending tutor request has finished."""
        if self.worker is not None and self.worker.isRunning():
            logger.info("Waiting for the pending tutor request before closing.")
            self.worker.wait()

    def _set_busy(self, busy: bool) -> None:
        self.btn_send.setEnabled(not busy)
        self.lbl_thinking.setVisible(busy)

    def _render_transcript(self) -> None:
        blocks = []
        for message in self.messages:
            if message.role == "user":
                blocks.append(f"<p align='right'><b>You:</b> {_to_html(message.text)}</p>")
            else:
                blocks.append(f"<p><b>Tutor:</b> {_to_html(message.text)}</p>")
        self.transcript.setHtml("".join(blocks))
        bar = self.transcript.verticalScrollBar()
        bar.setValue(bar.maximum())


def _to_html(text: str) -> str:
    return html.escape(text).replace("\n", "<br>")
