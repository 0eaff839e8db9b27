import pytest

from twinparadox.model.parameters import SimulationParameters


@pytest.fixture
def textbook():
    """d = 5.2 ly, v = 0.866 c: gamma is (almost exactly) 2."""
    return SimulationParameters(distance=5.2, velocity=0.866)


@pytest.fixture
def slow_trip():
    """d = 10 ly, v = 0.6 c: gamma = 1.25 and round numbers everywhere."""
    return SimulationParameters(distance=10.0, velocity=0.6)


@pytest.fixture(scope="session")
def qapp():
    """Shared offscreen QApplication for tests that touch Qt objects."""
    import os

    # Use offscreen platform to avoid GUI requirement
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication

    return QApplication.instance() or QApplication([])
