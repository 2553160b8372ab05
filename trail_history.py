# trail_history.py

import logging
from typing import NamedTuple, Sequence, Tuple

import numpy as np

from color import Color
from constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class Record(NamedTuple):
    """Snapshot of one particle at one tick."""
    position: Tuple[float, float]
    color: Color


class TrailHistory:
    """
    Bounded, newest-first history of per-particle snapshots.

    Records are grouped into epochs of exactly `particle_count` records, one
    epoch per tick. Epoch 0 is always the newest. Flat index i belongs to
    epoch i // particle_count and slot i % particle_count, and slot k always
    traces particle k.

    Storage is a fixed-capacity ring of epochs: pushing into a full history
    overwrites the oldest epoch in place, so nothing is reallocated after
    construction.

    Data Contract:
    - Inputs:
        - particle_count (int): records per epoch.
        - max_epochs (int): number of epochs retained.
    - Invariants: len(self) % particle_count == 0 and len(self) <= capacity at all
      times; a batch is either fully recorded or not recorded at all.
    """
    def __init__(self, particle_count: int, max_epochs: int):
        if particle_count < 1:
            raise ValueError(f"particle_count must be at least 1, got {particle_count}")
        if max_epochs < 1:
            raise ValueError(f"max_epochs must be at least 1, got {max_epochs}")

        self.particle_count = particle_count
        self.max_epochs = max_epochs

        self._positions = np.zeros((max_epochs, particle_count, 2), dtype=np.float64)
        self._colors = np.zeros((max_epochs, particle_count, 4), dtype=np.float64)
        self._head = 0  # ring slot holding epoch 0
        self._epochs = 0

        logger.info(f"TrailHistory created: {max_epochs} epochs x {particle_count} particles.")

    @property
    def capacity(self) -> int:
        return self.max_epochs * self.particle_count

    @property
    def epochs(self) -> int:
        """Number of materialized epochs."""
        return self._epochs

    def __len__(self):
        return self._epochs * self.particle_count

    def push_batch(self, records: Sequence[Record]):
        """
        Records one tick's batch as the new epoch 0.

        When the history is full the oldest epoch is discarded.
        """
        if len(records) != self.particle_count:
            raise ValueError(
                f"Batch must hold exactly {self.particle_count} records, got {len(records)}"
            )

        positions = np.array([r.position for r in records], dtype=np.float64).reshape(-1, 2)
        colors = np.array([tuple(r.color) for r in records], dtype=np.float64).reshape(-1, 4)

        head = (self._head - 1) % self.max_epochs
        self._positions[head] = positions
        self._colors[head] = colors
        self._head = head
        self._epochs = min(self._epochs + 1, self.max_epochs)

    def clear(self):
        self._head = 0
        self._epochs = 0

    def _ring_order(self) -> np.ndarray:
        return (self._head + np.arange(self._epochs)) % self.max_epochs

    def flat_positions(self) -> np.ndarray:
        """Positions in flat (newest-first) order, shape (len, 2)."""
        return self._positions[self._ring_order()].reshape(-1, 2)

    def flat_colors(self) -> np.ndarray:
        """HSLA colors in flat (newest-first) order, shape (len, 4)."""
        return self._colors[self._ring_order()].reshape(-1, 4)

    def __getitem__(self, index: int) -> Record:
        length = len(self)
        if index < 0:
            index += length
        if not 0 <= index < length:
            raise IndexError(f"history index {index} out of range for length {length}")

        epoch, slot = divmod(index, self.particle_count)
        ring = (self._head + epoch) % self.max_epochs
        x, y = self._positions[ring, slot]
        return Record((float(x), float(y)), Color(*(float(c) for c in self._colors[ring, slot])))

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]
