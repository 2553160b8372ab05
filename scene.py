# scene.py

import logging

import numpy as np

import constants
from color import ColorDrifter, background_color, circle_color, trail_palette
from mesh_builder import Mesh, MeshBuilder
from particle_system import ParticleSimulator
from render_sink import ReferenceCircle, RenderSink
from trail_history import Record, TrailHistory

logger = logging.getLogger(constants.LOGGER_NAME)


def _setting(config: dict, key: str, default):
    """Reads `key` from config, treating a missing key and null alike."""
    value = config.get(key)
    return default if value is None else value


class OrbitScene:
    """
    Ties the simulation core together and runs one update per tick.

    Per tick: particles are integrated, every trail color drifts a little, the
    batch of (position, color) snapshots is pushed into the history, and the
    ribbon mesh is rebuilt from the whole history.

    Data Contract:
    - Inputs:
        - config (dict): The 'simulation' section of the config file. Missing or
          null keys fall back to constants.DEFAULT_* or, for palette hues, to a
          random draw from `rng`.
        - rng (np.random.Generator): The master seeded random number generator.
    - Outputs: None. tick() leaves `mesh`, `background` and `circle` ready for a RenderSink.
    - Invariants: particle, color and history slot counts are always equal.
    """
    def __init__(self, config: dict, rng: np.random.Generator):
        self.rng = rng

        self.particle_count = int(_setting(config, 'particle_count', constants.DEFAULT_PARTICLE_COUNT))
        self.orbital_radius = float(_setting(config, 'orbital_radius', constants.DEFAULT_ORBITAL_RADIUS))
        self.history_epochs = int(_setting(config, 'history_epochs', constants.DEFAULT_HISTORY_EPOCHS))
        self.velocity_jitter = float(_setting(config, 'velocity_jitter', constants.DEFAULT_VELOCITY_JITTER))
        self.gravitational_param = float(_setting(
            config, 'gravitational_param',
            self.orbital_radius * constants.GRAVITATIONAL_PARAM_PER_RADIUS,
        ))
        drift_magnitude = float(_setting(
            config, 'color_drift_magnitude', constants.DEFAULT_COLOR_DRIFT_MAGNITUDE,
        ))

        if self.particle_count < 1:
            raise ValueError(f"particle_count must be at least 1, got {self.particle_count}")
        if self.history_epochs < 1:
            raise ValueError(f"history_epochs must be at least 1, got {self.history_epochs}")

        # --- Palette ---
        self.hue_start = float(_setting(config, 'hue_start', rng.random()))
        self.hue_range = float(_setting(
            config, 'hue_range', rng.uniform(constants.HUE_RANGE_MIN, constants.HUE_RANGE_MAX),
        ))
        self.background_hue = float(_setting(config, 'background_hue', rng.uniform(0.0, 1.0)))
        logger.info(
            f"Palette: hue_start={self.hue_start:.4f}, hue_range={self.hue_range:.4f}, "
            f"background_hue={self.background_hue:.4f}"
        )

        self.background = background_color(self.background_hue)
        self.circle = ReferenceCircle(self.orbital_radius, circle_color(self.background_hue))
        self.colors = trail_palette(self.particle_count, self.hue_start, self.hue_range)

        # --- Core components ---
        self.simulator = ParticleSimulator.initialize(
            self.particle_count,
            self.orbital_radius,
            self.gravitational_param,
            self.velocity_jitter,
            rng,
        )
        self.drifter = ColorDrifter(rng, drift_magnitude)
        self.history = TrailHistory(self.particle_count, self.history_epochs)
        self.mesh = Mesh.empty()
        self.ticks = 0

        logger.info(f"OrbitScene created with {self.particle_count} particles, "
                    f"{self.history_epochs} history epochs.")

    def tick(self, delta_seconds: float):
        self.simulator.step(delta_seconds)

        self.colors = self.drifter.drift(self.colors)
        batch = [
            Record((float(pos[0]), float(pos[1])), color)
            for pos, color in zip(self.simulator.positions, self.colors)
        ]
        self.history.push_batch(batch)

        self.mesh = MeshBuilder.build(self.history, self.particle_count)
        self.ticks += 1

        if self.ticks % constants.LOG_EVERY_TICKS == 0:
            radii = np.hypot(self.simulator.positions[:, 0], self.simulator.positions[:, 1])
            logger.debug(
                f"Tick={self.ticks}, dt={delta_seconds:.4f}, "
                f"Epochs={self.history.epochs}, "
                f"Triangles={len(self.mesh.indices) // 3}, "
                f"MinRadius={radii.min():.2f}, MaxRadius={radii.max():.2f}"
            )

    def render(self, sink: RenderSink):
        sink.submit(self.background, self.circle, self.mesh)
