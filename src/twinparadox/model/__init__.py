"""
The MODEL layer contains pure data structures and the space-time geometry.
It has NO knowledge of the GUI (Qt) or the plotting library (pyqtgraph).
It deals with Parameters, Stages, Events, Signals and the Scene.
"""
