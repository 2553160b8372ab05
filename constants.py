# constants.py

"""
Application Constants

This module defines static configuration values for the application's framework
and the defaults used when a value is missing from config.json.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

# Name of the application's dedicated logger
LOGGER_NAME = "orbit_ribbons"

# Screen dimensions
WIDTH = 1200  # Pixels
HEIGHT = 1200  # Pixels

# Framerate
FPS = 60  # Frames per second

# Window Title
TITLE = "Orbit Ribbons"

# Simulation defaults (used when the 'simulation' config section omits a key)
DEFAULT_PARTICLE_COUNT = 16
DEFAULT_ORBITAL_RADIUS = 1000.0  # World units
DEFAULT_HISTORY_EPOCHS = 200  # Ticks of trail kept per particle
DEFAULT_VELOCITY_JITTER = 100.0  # World units per second
GRAVITATIONAL_PARAM_PER_RADIUS = 57.0  # gravitational_param = orbital_radius * this
DEFAULT_COLOR_DRIFT_MAGNITUDE = 0.008

# Random palette ranges
HUE_RANGE_MIN = 0.2
HUE_RANGE_MAX = 0.4

# Trail palette (HSLA components other than hue)
TRAIL_SATURATION = 0.5
TRAIL_LIGHTNESS = 0.5
TRAIL_ALPHA = 0.5

# Background and reference circle (HSL components other than hue)
BACKGROUND_SATURATION = 0.38
BACKGROUND_LIGHTNESS = 0.33
CIRCLE_SATURATION = 0.36
CIRCLE_LIGHTNESS = 0.33

# Screen fit: the visible world is the orbital circle plus this margin.
VIEW_MARGIN = 1.1

# Debug logging cadence in the frame loop
LOG_EVERY_TICKS = 100
