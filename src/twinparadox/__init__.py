"""
Twin Paradox Visualizer
=======================
Interactive space-time (Minkowski) diagram of the twin paradox, with an
optional AI physics tutor.
"""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("twinparadox")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
