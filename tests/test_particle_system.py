import math

import numpy as np
import pytest

from particle import Particle
from particle_system import ParticleSimulator, point_on_circle


def test_point_on_circle_is_unit_length(rng):
    for _ in range(100):
        p = point_on_circle(rng)
        assert np.hypot(p[0], p[1]) == pytest.approx(1.0)


def test_initialize_places_particles_on_orbital_radius(rng):
    sim = ParticleSimulator.initialize(64, 1000.0, 57000.0, 100.0, rng)

    radii = np.hypot(sim.positions[:, 0], sim.positions[:, 1])
    assert sim.num_particles == 64
    np.testing.assert_allclose(radii, 1000.0, rtol=1e-12)


def test_initial_speed_within_jitter_band(rng):
    gm, jitter = 57000.0, 100.0
    sim = ParticleSimulator.initialize(500, 1000.0, gm, jitter, rng)

    speeds = np.hypot(sim.velocities[:, 0], sim.velocities[:, 1])
    assert np.all(speeds >= math.sqrt(gm) - jitter - 1e-9)
    assert np.all(speeds <= math.sqrt(gm) + jitter + 1e-9)


def test_initial_velocity_is_tangential(rng):
    sim = ParticleSimulator.initialize(50, 1000.0, 57000.0, 100.0, rng)

    dots = np.einsum("ij,ij->i", sim.positions, sim.velocities)
    np.testing.assert_allclose(dots, 0.0, atol=1e-6)


def test_orbit_direction_is_roughly_balanced(rng):
    sim = ParticleSimulator.initialize(2000, 1000.0, 57000.0, 100.0, rng)

    # z of position x velocity: negative when moving along (y, -x).
    cross = sim.positions[:, 0] * sim.velocities[:, 1] - sim.positions[:, 1] * sim.velocities[:, 0]
    clockwise = np.count_nonzero(cross < 0) / len(cross)
    assert 0.45 < clockwise < 0.55


def test_initialize_is_reproducible_with_same_seed():
    a = ParticleSimulator.initialize(8, 1000.0, 57000.0, 100.0, np.random.default_rng(7))
    b = ParticleSimulator.initialize(8, 1000.0, 57000.0, 100.0, np.random.default_rng(7))

    np.testing.assert_array_equal(a.positions, b.positions)
    np.testing.assert_array_equal(a.velocities, b.velocities)


def test_initialize_rejects_empty_system(rng):
    with pytest.raises(ValueError):
        ParticleSimulator.initialize(0, 1000.0, 57000.0, 100.0, rng)


def test_single_step_regression():
    sim = ParticleSimulator.from_particles([Particle((1000.0, 0.0), (0.0, 238.7))])

    sim.step(1.0)

    px, py = 1000.0, 238.7
    distance = math.hypot(px, py)
    force = 1.0 / (2.0 * distance)
    np.testing.assert_allclose(sim.positions[0], [px, py])
    np.testing.assert_allclose(
        sim.velocities[0],
        [-px / distance + force, 238.7 - py / distance + force],
        rtol=1e-12,
    )
    assert sim.velocities[0, 0] == pytest.approx(-0.9721891, abs=1e-4)
    assert sim.velocities[0, 1] == pytest.approx(238.4683092, abs=1e-4)


def test_step_scales_with_delta_seconds():
    sim = ParticleSimulator.from_particles([Particle((0.0, 500.0), (10.0, 0.0))])

    sim.step(0.5)

    assert sim.positions[0].tolist() == pytest.approx([5.0, 500.0])
    distance = math.hypot(5.0, 500.0)
    bias = 0.5 / (2.0 * distance)
    assert sim.velocities[0].tolist() == pytest.approx(
        [10.0 - 5.0 / distance + bias, -500.0 / distance + bias]
    )


def test_particles_do_not_interact():
    lone = ParticleSimulator.from_particles([Particle((1000.0, 0.0), (0.0, 238.7))])
    crowd = ParticleSimulator.from_particles([
        Particle((1000.0, 0.0), (0.0, 238.7)),
        Particle((1001.0, 0.0), (0.0, -238.7)),
    ])

    for _ in range(10):
        lone.step(1 / 60)
        crowd.step(1 / 60)

    np.testing.assert_array_equal(lone.positions[0], crowd.positions[0])
    np.testing.assert_array_equal(lone.velocities[0], crowd.velocities[0])


def test_particle_at_origin_is_not_guarded():
    sim = ParticleSimulator.from_particles([Particle((0.0, 0.0), (0.0, 0.0))])

    with np.errstate(all="ignore"):
        sim.step(1.0)

    assert not np.all(np.isfinite(sim.velocities[0]))


def test_particles_snapshot_is_a_copy(rng):
    sim = ParticleSimulator.initialize(3, 1000.0, 57000.0, 100.0, rng)

    snapshot = sim.particles
    snapshot[0].position[:] = 0.0

    assert len(snapshot) == 3
    assert snapshot[1].radius == pytest.approx(1000.0)
    assert np.hypot(*sim.positions[0]) == pytest.approx(1000.0)


def test_particle_rejects_non_2d_vectors():
    with pytest.raises(ValueError):
        Particle((1.0, 2.0, 3.0), (0.0, 0.0))
