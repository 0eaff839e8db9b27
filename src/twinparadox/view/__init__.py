"""
The VIEW layer: Qt widgets and the pyqtgraph diagram. Widgets only read the
SimulationState; every change goes through the PlaybackController.
"""
