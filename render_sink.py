# render_sink.py

import abc
import logging
from typing import NamedTuple

import numpy as np
import pygame
from pygame import gfxdraw

import constants
from color import Color, hsla_to_rgba
from mesh_builder import Mesh

logger = logging.getLogger(constants.LOGGER_NAME)


class ReferenceCircle(NamedTuple):
    """The guide circle drawn at the orbital radius."""
    radius: float
    color: Color


class RenderSink(abc.ABC):
    """
    Anything that can display one frame of the scene.

    The simulation core only ever calls submit(); window fitting, rasterization
    and presentation belong to the implementation.
    """

    @abc.abstractmethod
    def submit(self, background: Color, circle: ReferenceCircle, mesh: Mesh):
        raise NotImplementedError


class PygameRenderSink(RenderSink):
    """
    Draws frames onto a pygame Surface.

    The world is scaled so that the reference circle, plus a small margin, fits
    the shorter side of the surface, and the y axis points up. pygame cannot
    interpolate colors across a triangle, so each triangle is filled with the
    mean of its vertex colors and alpha-blended with gfxdraw.

    Data Contract:
    - Inputs:
        - surface (pygame.Surface): target surface, usually the display.
        - view_radius (float): world radius that must stay visible.
    - Side Effects: draws onto `surface`; does not flip the display.
    """
    def __init__(self, surface: pygame.Surface, view_radius: float):
        self.surface = surface
        self.view_radius = view_radius

    def _scale(self) -> float:
        width, height = self.surface.get_size()
        return min(width, height) / 2.0 / self.view_radius / constants.VIEW_MARGIN

    def to_screen(self, points: np.ndarray) -> np.ndarray:
        """Maps world (x, y) points to integer pixel coordinates."""
        width, height = self.surface.get_size()
        scale = self._scale()
        points = np.asarray(points, dtype=float).reshape(-1, 2)
        screen = np.empty_like(points)
        screen[:, 0] = width / 2.0 + points[:, 0] * scale
        screen[:, 1] = height / 2.0 - points[:, 1] * scale
        # Keep coordinates within the range SDL accepts.
        return np.clip(np.rint(screen), -30000, 30000).astype(int)

    def submit(self, background: Color, circle: ReferenceCircle, mesh: Mesh):
        self.surface.fill(background.to_rgb255())

        width, height = self.surface.get_size()
        radius = int(round(circle.radius * self._scale()))
        if radius > 0:
            pygame.draw.circle(self.surface, circle.color.to_rgb255(), (width // 2, height // 2), radius)

        if mesh.is_empty:
            return

        screen = self.to_screen(mesh.vertices[:, :2])
        rgba = np.rint(hsla_to_rgba(mesh.colors) * 255).astype(int)

        for tri in mesh.triangles:
            x1, y1, x2, y2, x3, y3 = (int(v) for v in screen[tri].ravel())
            color = tuple(int(c) for c in rgba[tri].mean(axis=0))
            gfxdraw.filled_trigon(self.surface, x1, y1, x2, y2, x3, y3, color)
