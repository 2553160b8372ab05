# particle_system.py

import numpy as np
import logging
import numba
from particle import Particle
from constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

# --- JIT-Compiled Physics Functions ---
# Kept outside the ParticleSimulator class and operating only on NumPy arrays
# and scalars, as required by Numba's nopython mode.
# error_model="numpy" makes a particle sitting exactly on the origin produce
# inf/nan like plain float arithmetic instead of raising ZeroDivisionError.

@numba.jit(nopython=True, error_model="numpy")
def _integrate_jit(positions, velocities, delta_seconds):
    """
    Advances every particle by one tick of the stylized central-force law.

    position += velocity * dt
    force     = 1 / (2 * |position|)
    gravity   = -normalize(position) + force * dt   (scalar added to both axes)
    velocity += gravity

    Particles do not interact, so each row is updated independently.
    """
    for i in range(positions.shape[0]):
        px = positions[i, 0] + velocities[i, 0] * delta_seconds
        py = positions[i, 1] + velocities[i, 1] * delta_seconds
        positions[i, 0] = px
        positions[i, 1] = py

        distance = np.sqrt(px * px + py * py)
        force = 1.0 / (distance * 2.0)
        bias = force * delta_seconds

        velocities[i, 0] += -px / distance + bias
        velocities[i, 1] += -py / distance + bias


def point_on_circle(rng: np.random.Generator) -> np.ndarray:
    """
    Returns a random unit vector.

    Draws (x, y) uniformly from the square [-1, 1]^2 and normalizes it, retrying
    only when the draw is exactly the origin.
    """
    while True:
        x, y = rng.uniform(-1.0, 1.0, 2)
        length_sq = x * x + y * y
        if length_sq != 0.0:
            return np.array([x, y]) / np.sqrt(length_sq)


class ParticleSimulator:
    """
    Owns the state of all particles and integrates their motion per tick.

    Data Contract:
    - Inputs:
        - positions (np.ndarray): shape (n, 2), world units.
        - velocities (np.ndarray): shape (n, 2), world units per second.
    - Outputs: None. step() modifies internal state in place.
    - Side Effects: None beyond its own arrays.
    - Invariants: The number of particles is constant for the simulator's lifetime;
      positions and velocities always have the same length.
    """
    def __init__(self, positions: np.ndarray, velocities: np.ndarray):
        self.positions = np.array(positions, dtype=np.float64).reshape(-1, 2)
        self.velocities = np.array(velocities, dtype=np.float64).reshape(-1, 2)

        if self.positions.shape != self.velocities.shape:
            raise ValueError(
                f"positions {self.positions.shape} and velocities "
                f"{self.velocities.shape} must have the same shape"
            )

        self.num_particles = self.positions.shape[0]
        logger.info(f"ParticleSimulator created for {self.num_particles} particles.")

    @classmethod
    def initialize(cls, count: int, orbital_radius: float, gravitational_param: float,
                   velocity_jitter: float, rng: np.random.Generator) -> "ParticleSimulator":
        """
        Places `count` particles on the circle of radius `orbital_radius`.

        Each particle moves tangentially at the circular-orbit speed
        sqrt(gravitational_param), in a randomly chosen direction, with the scalar
        speed perturbed by U[-velocity_jitter, velocity_jitter].
        """
        if count < 1:
            raise ValueError(f"Particle count must be at least 1, got {count}")

        positions = np.zeros((count, 2), dtype=np.float64)
        velocities = np.zeros((count, 2), dtype=np.float64)
        circular_speed = np.sqrt(gravitational_param)

        for i in range(count):
            pos = point_on_circle(rng) * orbital_radius

            speed = circular_speed if rng.random() < 0.5 else -circular_speed
            speed += rng.uniform(-velocity_jitter, velocity_jitter)

            tangent = np.array([pos[1], -pos[0]])
            tangent /= np.linalg.norm(tangent)

            positions[i] = pos
            velocities[i] = speed * tangent

        logger.info(
            f"Initialized {count} orbits: radius={orbital_radius}, "
            f"gm={gravitational_param}, jitter={velocity_jitter}"
        )
        return cls(positions, velocities)

    @classmethod
    def from_particles(cls, particles) -> "ParticleSimulator":
        particles = list(particles)
        if not particles:
            raise ValueError("At least one particle is required")
        return cls(
            np.stack([p.position for p in particles]),
            np.stack([p.velocity for p in particles]),
        )

    @property
    def particles(self):
        """Snapshots of the current particle state, in slot order."""
        return [Particle(self.positions[i], self.velocities[i]) for i in range(self.num_particles)]

    def step(self, delta_seconds: float):
        """
        Advances all particles by `delta_seconds`.

        delta_seconds is taken as given; it is not clamped or validated.
        """
        _integrate_jit(self.positions, self.velocities, float(delta_seconds))
