# mesh_builder.py

import logging
from dataclasses import dataclass

import numba
import numpy as np

from constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


@numba.jit(nopython=True)
def _ribbon_indices_jit(particle_count, epochs):
    """
    Triangulates the ribbon between neighbouring slots across neighbouring epochs.

    For each slot pair (a, a + 1) and each epoch pair (past, present = past + 1),
    walking from the oldest pair towards the newest, emits one quad as two
    triangles:
        (past, a) -> (present, a) -> (present, a + 1)
        (past, a) -> (present, a + 1) -> (past, a + 1)
    where (epoch, slot) is the flat index epoch * particle_count + slot.
    The last slot is not joined back to slot 0.
    """
    quads = max(particle_count - 1, 0) * max(epochs - 1, 0)
    indices = np.empty(quads * 6, dtype=np.int64)

    k = 0
    for a in range(particle_count - 1):
        b = a + 1
        for past in range(epochs - 2, -1, -1):
            present = past + 1
            indices[k] = past * particle_count + a
            indices[k + 1] = present * particle_count + a
            indices[k + 2] = present * particle_count + b
            indices[k + 3] = past * particle_count + a
            indices[k + 4] = present * particle_count + b
            indices[k + 5] = past * particle_count + b
            k += 6
    return indices


@dataclass
class Mesh:
    """
    Indexed, per-vertex colored triangle mesh.

    - vertices: shape (V, 3), x, y and epoch depth.
    - colors: shape (V, 4), HSLA per vertex.
    - indices: shape (3 * T,), every three entries form one triangle.
    """
    vertices: np.ndarray
    colors: np.ndarray
    indices: np.ndarray

    @classmethod
    def empty(cls) -> "Mesh":
        return cls(
            vertices=np.zeros((0, 3), dtype=np.float64),
            colors=np.zeros((0, 4), dtype=np.float64),
            indices=np.zeros(0, dtype=np.int64),
        )

    @property
    def is_empty(self) -> bool:
        return len(self.indices) == 0

    @property
    def triangles(self) -> np.ndarray:
        """Indices reshaped to (T, 3)."""
        return self.indices.reshape(-1, 3)


class MeshBuilder:
    """Converts a TrailHistory into a ribbon mesh. Holds no state between builds."""

    @staticmethod
    def build(history, particle_count: int) -> Mesh:
        """
        Builds the ribbon mesh for the current history.

        Each record becomes one vertex whose third coordinate is its epoch age,
        so older records sit further along the depth axis. An empty history
        yields an empty mesh.
        """
        if history.particle_count != particle_count:
            raise ValueError(
                f"History records {history.particle_count} particles per epoch, "
                f"not {particle_count}"
            )

        length = len(history)
        if length == 0:
            return Mesh.empty()
        if length % particle_count != 0:
            raise ValueError(
                f"History length {length} is not a multiple of particle_count {particle_count}"
            )

        epochs = length // particle_count
        depth = (np.arange(length) // particle_count).astype(np.float64)

        vertices = np.empty((length, 3), dtype=np.float64)
        vertices[:, :2] = history.flat_positions()
        vertices[:, 2] = depth

        return Mesh(
            vertices=vertices,
            colors=history.flat_colors(),
            indices=_ribbon_indices_jit(particle_count, epochs),
        )
