"""Space-time (Minkowski) diagram widget."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pyqtgraph as pg
from pyqtgraph.exporters import ImageExporter
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel

from twinparadox.model.geometry_primitives import Event, Segment, WorldLine
from twinparadox.model.narrative import STATIONARY_NAME, TRAVELER_NAME
from twinparadox.model.scene import GridLeg, GridLineKind
from twinparadox.model.signals import Emitter, observed_doppler

if TYPE_CHECKING:
    from twinparadox.model.scene import Scene, GridFamily, SimultaneityLine
    from twinparadox.model.signals import Signal


logger = logging.getLogger(__name__)


class MinkowskiPlot(QWidget):
    """
    pyqtgraph diagram of one Scene.

    The widget is a pure painter: every call to `set_scene` clears the plot
    and redraws all items from the given scene.
    """

    COLORS = {
        "stationary_line": "#3b82f6",  # Blue
        "traveler_line": "#ef4444",    # Red
        "light": "#fbbf24",        # Amber
        "planet": "#94a3b8",       # Slate
        "simultaneity": "#10b981", # Emerald
        GridLeg.OUTBOUND: "#22d3ee",  # Cyan
        GridLeg.INBOUND: "#a78bfa",   # Violet
        Emitter.STATIONARY: "#60a5fa",
        Emitter.TRAVELER: "#f87171",
    }
    RECEIVED_EDGE = {
        Emitter.STATIONARY: "#1e3a8a",
        Emitter.TRAVELER: "#7f1d1d",
    }

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.lbl_title = QLabel("<b>Space-Time Diagram</b>")
        self.lbl_counters = QLabel("")
        self.lbl_counters.setAlignment(Qt.AlignmentFlag.AlignRight)
        layout.addWidget(self.lbl_title)
        layout.addWidget(self.lbl_counters)

        self.plot_widget = pg.PlotWidget()
        self.plot_item = self.plot_widget.getPlotItem()
        self.plot_item.setLabel("bottom", "Position (ly)")
        self.plot_item.setLabel("left", "Time (years)")
        self.plot_item.showGrid(x=True, y=True, alpha=0.1)
        self.plot_item.setMenuEnabled(False)
        layout.addWidget(self.plot_widget, 1)

        self._last_viewport = None

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_scene(self, scene: Scene) -> None:
        """Redraw the diagram for the given scene."""
        self.plot_item.clear()

        self._draw_light_cone(scene)
        self._draw_grids(scene.grids)
        self._draw_world_lines(scene)
        self._draw_signals(scene.signals)
        if scene.simultaneity is not None:
            self._draw_simultaneity(scene.simultaneity)
        self._draw_markers(scene)
        self._update_counters(scene)

        # Re-fit only when the parameters changed, so a user zoom survives playback
        if scene.viewport != self._last_viewport:
            vp = scene.viewport
            self.plot_item.setXRange(vp.x_min, vp.x_max, padding=0)
            self.plot_item.setYRange(vp.t_min, vp.t_max, padding=0)
            self._last_viewport = vp

    def export_png(self, filepath: str) -> None:
        """Save the current diagram as an image."""
        exporter = ImageExporter(self.plot_item)
        exporter.parameters()["width"] = 1600
        exporter.export(filepath)
        logger.info(f"Diagram exported to {filepath}")

    # ------------------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------------------

    def _line(
        self,
        points: Segment | WorldLine,
        color: str,
        width: float = 1.0,
        style: Qt.PenStyle = Qt.PenStyle.SolidLine,
        opacity: float = 1.0,
    ) -> pg.PlotDataItem:
        arr = points.to_array()
        item = self.plot_item.plot(arr[:, 0], arr[:, 1], pen=pg.mkPen(color=color, width=width, style=style))
        item.setOpacity(opacity)
        return item

    def _markers(
        self,
        events: list[Event],
        color: str,
        size: float = 6.0,
        edge: str | None = None,
    ) -> None:
        if not events:
            return
        scatter = pg.ScatterPlotItem(
            x=[e.x for e in events],
            y=[e.t for e in events],
            size=size,
            brush=pg.mkBrush(color),
            pen=pg.mkPen(edge, width=1) if edge else pg.mkPen(None),
        )
        self.plot_item.addItem(scatter)

    def _text(self, text: str, at: Event, color: str, anchor: tuple[float, float] = (0.0, 1.0)) -> None:
        item = pg.TextItem(text, color=color, anchor=anchor)
        item.setPos(at.x, at.t)
        self.plot_item.addItem(item)

    # ---- layers ----

    def _draw_light_cone(self, scene: Scene) -> None:
        color = self.COLORS["light"]
        for edge in scene.light_cone:
            self._line(edge, color, style=Qt.PenStyle.DashLine, opacity=0.5)
        self._text("Light Speed (c)", Event(2.0, 2.0), color)

    def _draw_grids(self, grids: tuple[GridFamily, ...]) -> None:
        for family in grids:
            color = self.COLORS[family.leg]
            for line in family.lines:
                style = Qt.PenStyle.DashLine if line.kind == GridLineKind.TIME else Qt.PenStyle.DotLine
                self._line(line.segment, color, width=1.0, style=style, opacity=family.emphasis)
                if line.kind == GridLineKind.TIME and line.label_position is not None:
                    self._text(line.label, line.label_position, color)

    def _draw_world_lines(self, scene: Scene) -> None:
        blue = self.COLORS["stationary_line"]
        red = self.COLORS["traveler_line"]
        total = scene.params.stationary_total_time

        self._line(scene.stationary_world_line, blue, width=3)
        self._text(STATIONARY_NAME, Event(0.0, total), blue, anchor=(1.0, 1.0))

        self._line(scene.planet_line, self.COLORS["planet"], style=Qt.PenStyle.DashLine, opacity=0.5)
        self._text("Planet", Event(scene.params.distance, -0.5), self.COLORS["planet"], anchor=(0.5, 0.5))

        self._line(scene.traveler_path, red, width=1, opacity=0.3)
        if len(scene.traveler_active_path) > 1:
            self._line(scene.traveler_active_path, red, width=3)

    def _draw_signals(self, signals: tuple[Signal, ...]) -> None:
        for emitter in Emitter:
            own = [s for s in signals if s.emitter == emitter]
            if not own:
                continue
            color = self.COLORS[emitter]
            for signal in own:
                self._line(signal.path, color, style=Qt.PenStyle.DashLine)
            self._markers([s.emission for s in own], color, size=4)
            self._markers([s.end for s in own if s.received], color, size=7, edge=self.RECEIVED_EDGE[emitter])

    def _draw_simultaneity(self, simultaneity: SimultaneityLine) -> None:
        color = self.COLORS["simultaneity"]
        self._line(simultaneity.segment, color, width=2, style=Qt.PenStyle.DashLine)
        self._text(
            f"{STATIONARY_NAME} 'now': {simultaneity.stationary_age:.2f} y",
            Event(0.0, simultaneity.stationary_age),
            color,
            anchor=(1.0, 0.5),
        )

    def _draw_markers(self, scene: Scene) -> None:
        self._markers([scene.stationary_event], self.COLORS["stationary_line"], size=9)
        self._markers([scene.traveler_event], self.COLORS["traveler_line"], size=12)
        self._text(
            f"{TRAVELER_NAME}: {scene.traveler_proper_time:.2f} y",
            scene.traveler_event,
            self.COLORS["traveler_line"],
            anchor=(-0.1, 0.5),
        )

    def _update_counters(self, scene: Scene) -> None:
        receivers = (
            (Emitter.STATIONARY, TRAVELER_NAME),
            (Emitter.TRAVELER, STATIONARY_NAME),
        )
        lines = []
        for emitter, receiver in receivers:
            own = [s for s in scene.signals if s.emitter == emitter]
            if not own:
                continue
            text = f"{receiver} received: <b>{scene.received_counts[emitter]}</b> msgs"

            received = [s for s in own if s.received]
            if received:
                factor = observed_doppler(scene.params, received[-1])
                shift = "blueshift" if factor > 1.0 else "redshift"
                text += f" ({shift} x{factor:.2f})"

            lines.append(f"<span style='color:{self.COLORS[emitter]}'>{text}</span>")
        self.lbl_counters.setText("<br>".join(lines))
