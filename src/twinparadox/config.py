"""
Configuration & Global Constants
================================
This module serves as the central registry for default values, input ranges
and the settings of the external tutor service.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (slider limits, animation steps)
   being scattered throughout the widgets.
2. Environment: It reads the tutor credentials from the environment (and an
   optional `.env` file) in one place.

Exports:
    DEFAULT_DISTANCE (float): Initial distance to the star in light-years.
    DEFAULT_VELOCITY (float): Initial traveler speed as a fraction of c.
    GEMINI_MODEL (str): Model used by the physics tutor.
"""
import os

from dotenv import load_dotenv

load_dotenv()

# Application
APP_NAME: str = "Twin Paradox Visualizer"
WINDOW_SIZE: tuple[int, int] = (1500, 900)

# Mission parameters (textbook case: v = sqrt(0.75) c, gamma = 2)
DEFAULT_DISTANCE: float = 5.2
DEFAULT_VELOCITY: float = 0.866

DISTANCE_MIN: float = 1.0
DISTANCE_MAX: float = 10.0
DISTANCE_STEP: float = 0.1
DISTANCE_DECIMALS: int = 2

VELOCITY_MIN: float = 0.1
VELOCITY_MAX: float = 0.99
VELOCITY_STEP: float = 0.01
VELOCITY_DECIMALS: int = 3

# Animation (progress units per frame)
DEFAULT_ANIMATION_SPEED: float = 0.005
ANIMATION_SPEED_MIN: float = 0.001
ANIMATION_SPEED_MAX: float = 0.02
FRAME_INTERVAL_MS: int = 16

# Diagram
VIEW_MARGIN_BEFORE: float = 1.0
VIEW_MARGIN_AFTER: float = 2.0
SIMULTANEITY_OVERSHOOT: float = 0.5
LIGHT_CONE_SIZE: float = 10.0

# Physics tutor (Gemini)
API_KEY_ENV_VARS: tuple[str, ...] = ("GEMINI_API_KEY", "GOOGLE_API_KEY")
GEMINI_MODEL: str = os.getenv("TWINPARADOX_GEMINI_MODEL", "gemini-2.5-flash")


def get_api_key() -> str | None:
    """Return the first tutor API key found in the environment, if any."""
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    return None
