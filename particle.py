# particle.py

import logging
import numpy as np
from constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

class Particle:
    """
    A single orbiting body: a 2D position and a 2D velocity.

    The simulator keeps all particles as arrays (Structure of Arrays); Particle
    objects are used to seed a simulator with explicit state and to hand out
    snapshots of it.

    Data Contract:
    - position (np.ndarray): shape (2,), world units.
    - velocity (np.ndarray): shape (2,), world units per second.
    - Invariants: both arrays are float copies, never views into simulator state.
    """
    def __init__(self, position, velocity):
        self.position = np.array(position, dtype=float)
        self.velocity = np.array(velocity, dtype=float)

        if self.position.shape != (2,) or self.velocity.shape != (2,):
            raise ValueError(
                f"Particle position and velocity must be 2D vectors, got "
                f"{self.position.shape} and {self.velocity.shape}"
            )

        logger.debug(f"Particle created: pos={self.position}, vel={self.velocity}")

    @property
    def speed(self) -> float:
        return float(np.hypot(self.velocity[0], self.velocity[1]))

    @property
    def radius(self) -> float:
        """Distance from the center of the force field."""
        return float(np.hypot(self.position[0], self.position[1]))

    def __repr__(self):
        return f"Particle(position={self.position.tolist()}, velocity={self.velocity.tolist()})"
