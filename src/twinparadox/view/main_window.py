"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar and the three columns:
controls, space-time diagram and tutor chat.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (like File -> Export) and the playback
   controller's notifications to the widgets that display them.
"""
import logging

from PySide6.QtWidgets import QMainWindow, QSplitter, QFileDialog, QMessageBox
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence

from twinparadox import config
from twinparadox.controller.playback import PlaybackController
from twinparadox.model.state import SimulationState
from twinparadox.view.panels.control_panel import ControlPanel
from twinparadox.view.panels.tutor_panel import TutorPanel
from twinparadox.view.widgets.minkowski_plot import MinkowskiPlot

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, state: SimulationState) -> None:
        super().__init__()
        self.state: SimulationState = state
        self.controller = PlaybackController(state, self)

        self.setWindowTitle(config.APP_NAME)
        self.resize(*config.WINDOW_SIZE)

        # --- SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        self.control_panel = ControlPanel(self.controller)
        self.plot = MinkowskiPlot()
        self.tutor_panel = TutorPanel(self.state)

        splitter.addWidget(self.control_panel)
        splitter.addWidget(self.plot)
        splitter.addWidget(self.tutor_panel)

        # Sidebar : diagram : chat
        splitter.setSizes([340, 800, 360])

        # --- SIGNAL CONNECTIONS ---
        self.controller.state_changed.connect(self.on_state_changed)
        self.controller.playing_changed.connect(lambda _playing: self.on_state_changed(self.state))

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # Initial Render
        self.on_state_changed(self.state)

    def _create_actions(self) -> None:
        # File Actions
        self.act_export = QAction("Export Diagram as PNG...", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self.on_export_png)

        self.act_exit = QAction("Exit", self)
        self.act_exit.setShortcut(QKeySequence.StandardKey.Quit)
        self.act_exit.triggered.connect(self.close)

        # Simulation Actions
        self.act_play = QAction("Play / Pause", self)
        self.act_play.setShortcut("Space")
        self.act_play.triggered.connect(self.controller.toggle_play)

        self.act_next = QAction("Next Stage", self)
        self.act_next.setShortcut("Ctrl+Right")
        self.act_next.triggered.connect(self.controller.next_stage)

        self.act_prev = QAction("Previous Stage", self)
        self.act_prev.setShortcut("Ctrl+Left")
        self.act_prev.triggered.connect(self.controller.previous_stage)

        self.act_reset = QAction("Reset", self)
        self.act_reset.setShortcut("Ctrl+R")
        self.act_reset.triggered.connect(self.controller.reset)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_export)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        sim_menu = menu_bar.addMenu("&Simulation")
        sim_menu.addAction(self.act_play)
        sim_menu.addSeparator()
        sim_menu.addAction(self.act_prev)
        sim_menu.addAction(self.act_next)
        sim_menu.addSeparator()
        sim_menu.addAction(self.act_reset)

    # --- SLOTS ---

    def on_state_changed(self, state: SimulationState) -> None:
        """Rebuild the diagram and refresh the controls from the state."""
        scene = state.scene()
        self.plot.set_scene(scene)
        self.control_panel.update_from_state(state, scene)

        self.act_prev.setEnabled(not state.is_playing and not state.stage.is_first)
        self.act_next.setEnabled(not state.is_playing and not state.stage.is_last)

    def on_export_png(self) -> None:
        fname, _ = QFileDialog.getSaveFileName(
            self, "Export Diagram", "twin_paradox.png", "PNG Images (*.png)"
        )
        if not fname:
            return
        if not fname.lower().endswith(".png"):
            fname += ".png"

        try:
            self.plot.export_png(fname)
        except Exception as e:
            logger.exception("Diagram export failed")
            QMessageBox.critical(self, "Error", f"Could not export the diagram:\n{e}")

    def closeEvent(self, event, /) -> None:
        """Stop the animation timer and let a running tutor thread finish."""
        self.controller.pause()
        self.tutor_panel.shutdown()
        event.accept()
