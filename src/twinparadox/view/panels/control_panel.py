"""
Simulation Control Panel
========================
Left-hand column: mission parameters, derived metrics, display toggles,
playback controls and the stage narrative.
"""
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QDoubleSpinBox,
    QGroupBox, QFormLayout, QCheckBox, QSlider, QProgressBar
)
from PySide6.QtCore import Qt

from twinparadox import config
from twinparadox.controller.playback import PlaybackController
from twinparadox.model.narrative import STATIONARY_NAME, TRAVELER_NAME
from twinparadox.model.scene import Scene
from twinparadox.model.state import SimulationState

# Slider works in integer thousandths of a progress unit
SPEED_SCALE = 1000


class ControlPanel(QWidget):
    def __init__(self, controller: PlaybackController) -> None:
        super().__init__()
        self.controller = controller

        layout = QVBoxLayout(self)

        # --- Parameters Group ---
        grp_params = QGroupBox("Mission Parameters")
        form = QFormLayout(grp_params)

        self.spin_distance = QDoubleSpinBox()
        self.spin_distance.setRange(config.DISTANCE_MIN, config.DISTANCE_MAX)
        self.spin_distance.setSingleStep(config.DISTANCE_STEP)
        self.spin_distance.setDecimals(config.DISTANCE_DECIMALS)
        self.spin_distance.setSuffix(" ly")
        self.spin_distance.setValue(config.DEFAULT_DISTANCE)
        self.spin_distance.valueChanged.connect(self.on_parameters_changed)
        form.addRow("Distance to Star:", self.spin_distance)

        self.spin_velocity = QDoubleSpinBox()
        self.spin_velocity.setRange(config.VELOCITY_MIN, config.VELOCITY_MAX)
        self.spin_velocity.setSingleStep(config.VELOCITY_STEP)
        self.spin_velocity.setDecimals(config.VELOCITY_DECIMALS)
        self.spin_velocity.setSuffix(" c")
        self.spin_velocity.setValue(config.DEFAULT_VELOCITY)
        self.spin_velocity.valueChanged.connect(self.on_parameters_changed)
        form.addRow(f"{TRAVELER_NAME}'s Velocity:", self.spin_velocity)

        self.lbl_gamma = QLabel()
        form.addRow("Lorentz Factor (γ):", self.lbl_gamma)
        self.lbl_dilation = QLabel()
        form.addRow("Time Dilation:", self.lbl_dilation)
        self.lbl_stationary_total = QLabel()
        form.addRow(f"{STATIONARY_NAME}'s Total Time:", self.lbl_stationary_total)
        self.lbl_traveler_total = QLabel()
        form.addRow(f"{TRAVELER_NAME}'s Total Time:", self.lbl_traveler_total)
        self.lbl_age_gap = QLabel()
        form.addRow("Age Difference:", self.lbl_age_gap)

        layout.addWidget(grp_params)

        # --- Visual Aids Group ---
        grp_visual = QGroupBox("Visual Aids")
        vbox_visual = QVBoxLayout(grp_visual)

        self.chk_grid = QCheckBox(f"Show {TRAVELER_NAME}'s Grid")
        self.chk_grid.toggled.connect(lambda on: self.controller.set_options(show_grid=on))
        vbox_visual.addWidget(self.chk_grid)

        self.chk_stationary_signals = QCheckBox(f"Show {STATIONARY_NAME}'s Signals")
        self.chk_stationary_signals.toggled.connect(
            lambda on: self.controller.set_options(show_stationary_signals=on)
        )
        vbox_visual.addWidget(self.chk_stationary_signals)

        self.chk_traveler_signals = QCheckBox(f"Show {TRAVELER_NAME}'s Signals")
        self.chk_traveler_signals.toggled.connect(
            lambda on: self.controller.set_options(show_traveler_signals=on)
        )
        vbox_visual.addWidget(self.chk_traveler_signals)

        layout.addWidget(grp_visual)

        # --- Playback Group ---
        grp_play = QGroupBox("Simulation")
        vbox_play = QVBoxLayout(grp_play)

        speed_row = QHBoxLayout()
        speed_row.addWidget(QLabel("Speed:"))
        self.slider_speed = QSlider(Qt.Horizontal)
        self.slider_speed.setRange(
            round(config.ANIMATION_SPEED_MIN * SPEED_SCALE),
            round(config.ANIMATION_SPEED_MAX * SPEED_SCALE),
        )
        self.slider_speed.setValue(round(config.DEFAULT_ANIMATION_SPEED * SPEED_SCALE))
        self.slider_speed.valueChanged.connect(
            lambda value: self.controller.set_speed(value / SPEED_SCALE)
        )
        speed_row.addWidget(self.slider_speed, 1)
        self.lbl_speed = QLabel("1.0x")
        speed_row.addWidget(self.lbl_speed)
        vbox_play.addLayout(speed_row)

        nav_row = QHBoxLayout()
        self.btn_prev = QPushButton("◀ Prev")
        self.btn_prev.clicked.connect(self.controller.previous_stage)
        nav_row.addWidget(self.btn_prev)
        self.lbl_stage = QLabel()
        self.lbl_stage.setAlignment(Qt.AlignCenter)
        self.lbl_stage.setStyleSheet("font-weight: bold;")
        nav_row.addWidget(self.lbl_stage, 1)
        self.btn_next = QPushButton("Next ▶")
        self.btn_next.clicked.connect(self.controller.next_stage)
        nav_row.addWidget(self.btn_next)
        vbox_play.addLayout(nav_row)

        self.btn_play = QPushButton()
        self.btn_play.setMinimumHeight(40)
        self.btn_play.clicked.connect(self.controller.toggle_play)
        vbox_play.addWidget(self.btn_play)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setTextVisible(False)
        vbox_play.addWidget(self.progress_bar)

        layout.addWidget(grp_play)

        # --- Narrative ---
        grp_insight = QGroupBox("Physics Insight")
        vbox_insight = QVBoxLayout(grp_insight)
        self.lbl_insight = QLabel()
        self.lbl_insight.setWordWrap(True)
        self.lbl_insight.setAlignment(Qt.AlignTop | Qt.AlignLeft)
        vbox_insight.addWidget(self.lbl_insight)
        layout.addWidget(grp_insight)

        layout.addStretch()

    # --- SLOTS ---

    def on_parameters_changed(self) -> None:
        self.controller.set_parameters(self.spin_distance.value(), self.spin_velocity.value())

    # --- REFRESH ---

    def update_from_state(self, state: SimulationState, scene: Scene) -> None:
        """Mirror the state into the widgets without re-triggering their signals."""
        params = state.params
        editable = state.parameters_editable and not state.is_playing

        for widget, value in (
            (self.spin_distance, params.distance),
            (self.spin_velocity, params.velocity),
        ):
            widget.blockSignals(True)
            widget.setValue(value)
            widget.setEnabled(editable)
            widget.blockSignals(False)

        self.lbl_gamma.setText(f"{params.gamma:.4f}")
        self.lbl_dilation.setText(f"1 : {params.gamma:.2f}")
        self.lbl_stationary_total.setText(f"{params.stationary_total_time:.2f} years")
        self.lbl_traveler_total.setText(f"{params.traveler_total_proper_time:.2f} years")
        self.lbl_age_gap.setText(f"{params.age_gap:.2f} years")

        for checkbox, on in (
            (self.chk_grid, state.options.show_grid),
            (self.chk_stationary_signals, state.options.show_stationary_signals),
            (self.chk_traveler_signals, state.options.show_traveler_signals),
        ):
            checkbox.blockSignals(True)
            checkbox.setChecked(on)
            checkbox.blockSignals(False)

        self.slider_speed.blockSignals(True)
        self.slider_speed.setValue(round(state.playback_speed * SPEED_SCALE))
        self.slider_speed.blockSignals(False)
        self.lbl_speed.setText(f"{state.speed_multiplier:.1f}x")

        self.lbl_stage.setText(state.stage.label)
        self.btn_prev.setEnabled(not state.is_playing and not state.stage.is_first)
        self.btn_next.setEnabled(not state.is_playing and not state.stage.is_last)
        self.btn_play.setText("Pause Simulation" if state.is_playing else "Play / Resume")
        self.progress_bar.setValue(round(state.progress * 100))

        self.lbl_insight.setText(scene.explanation)
