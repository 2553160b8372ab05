# color.py

"""
HSLA colors for the trail palette.

All components are normalized floats: hue in [0, 1) and circular, saturation,
lightness and alpha in [0, 1]. The renderer converts to RGB only at the last
moment (see hsla_to_rgba).
"""

import logging
from typing import List, NamedTuple, Sequence

import numpy as np

import constants

logger = logging.getLogger(constants.LOGGER_NAME)


def wrap_hue(hue: float) -> float:
    """Wraps a hue into [0, 1)."""
    wrapped = hue % 1.0
    # A tiny negative hue rounds up to exactly 1.0 under float modulo.
    if wrapped >= 1.0:
        return 0.0
    return wrapped


class Color(NamedTuple):
    hue: float
    saturation: float
    lightness: float
    alpha: float = 1.0

    def to_rgba(self):
        """Returns (r, g, b, a) floats in [0, 1]."""
        return tuple(float(c) for c in hsla_to_rgba(np.array([self]))[0])

    def to_rgba255(self):
        return tuple(int(round(c * 255)) for c in self.to_rgba())

    def to_rgb255(self):
        return self.to_rgba255()[:3]


def hsla_to_rgba(colors: np.ndarray) -> np.ndarray:
    """
    Vectorized HSLA -> RGBA conversion.

    - Inputs: colors (np.ndarray) - shape (n, 4), columns hue, saturation, lightness, alpha.
    - Outputs: np.ndarray of shape (n, 4) with r, g, b, a in [0, 1].
    """
    colors = np.asarray(colors, dtype=float).reshape(-1, 4)
    hue = colors[:, 0:1]
    saturation = colors[:, 1:2]
    lightness = colors[:, 2:3]

    chroma = saturation * np.minimum(lightness, 1.0 - lightness)
    k = (np.array([0.0, 8.0, 4.0]) + hue * 12.0) % 12.0
    rgb = lightness - chroma * np.maximum(-1.0, np.minimum(np.minimum(k - 3.0, 9.0 - k), 1.0))

    return np.clip(np.hstack([rgb, colors[:, 3:4]]), 0.0, 1.0)


class ColorDrifter:
    """
    Evolves per-particle trail colors with a small bounded random walk.

    Data Contract:
    - Inputs: rng (np.random.Generator) - injected source of randomness.
    - Invariants: hue stays in [0, 1); saturation and lightness stay in [0, 1];
      alpha is never changed.
    """
    def __init__(self, rng: np.random.Generator,
                 magnitude: float = constants.DEFAULT_COLOR_DRIFT_MAGNITUDE):
        self.rng = rng
        self.magnitude = magnitude

    def tweak(self, color: Color, magnitude: float = None) -> Color:
        """Returns a copy of `color` with hue, saturation and lightness nudged."""
        mag = self.magnitude if magnitude is None else magnitude
        if mag == 0:
            return color

        d_hue, d_sat, d_light = self.rng.uniform(-mag, mag, 3)
        return Color(
            hue=wrap_hue(color.hue + d_hue),
            saturation=float(np.clip(color.saturation + d_sat, 0.0, 1.0)),
            lightness=float(np.clip(color.lightness + d_light, 0.0, 1.0)),
            alpha=color.alpha,
        )

    def drift(self, colors: Sequence[Color]) -> List[Color]:
        return [self.tweak(c) for c in colors]


# --- Palette seeding ---

def trail_palette(count: int, hue_start: float, hue_range: float) -> List[Color]:
    """
    Spreads `count` trail hues evenly from hue_start to hue_start + hue_range.
    """
    palette = []
    for i in range(count):
        if count > 1:
            hue = hue_start + hue_range * i / (count - 1)
        else:
            hue = hue_start
        palette.append(Color(
            wrap_hue(hue),
            constants.TRAIL_SATURATION,
            constants.TRAIL_LIGHTNESS,
            constants.TRAIL_ALPHA,
        ))
    return palette


def background_color(background_hue: float) -> Color:
    return Color(background_hue, constants.BACKGROUND_SATURATION, constants.BACKGROUND_LIGHTNESS)


def circle_color(background_hue: float) -> Color:
    return Color(background_hue, constants.CIRCLE_SATURATION, constants.CIRCLE_LIGHTNESS)
