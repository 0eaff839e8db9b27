"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the Global Data Model (SimulationState).
2. Instantiates the Main Window (View), which owns the PlaybackController.
3. Passes the Model into the View so they can communicate.
4. Prevents circular import errors by being the orchestrator.
"""
import logging
import sys
from typing import Optional, Sequence

import pyqtgraph as pg
from PySide6.QtWidgets import QApplication

from twinparadox import config
from twinparadox.cli import parse_args
from twinparadox.logging_config import setup_logging
from twinparadox.model.state import SimulationState
from twinparadox.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=args.log_level, log_file=args.log_file)

    # 2. Create the Qt Application
    app = QApplication(sys.argv[:1])
    app.setApplicationName(config.APP_NAME)

    pg.setConfigOption("background", "w")
    pg.setConfigOption("foreground", "k")
    pg.setConfigOptions(antialias=True)

    # 3. Initialize the Data Model (out-of-range values are clamped)
    state = SimulationState()
    state.set_parameters(args.distance, args.velocity)

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(state)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
