import numpy as np
import pytest

from color import Color
from trail_history import Record, TrailHistory


def make_batch(tick, count):
    """Slot k of tick t sits at (t, k) with hue k / 10."""
    return [Record((float(tick), float(k)), Color(k / 10, 0.5, 0.5, 0.5)) for k in range(count)]


def test_new_history_is_empty():
    history = TrailHistory(4, 10)

    assert len(history) == 0
    assert history.epochs == 0
    assert history.capacity == 40
    assert history.flat_positions().shape == (0, 2)
    assert list(history) == []


def test_newest_batch_is_epoch_zero():
    history = TrailHistory(3, 5)
    history.push_batch(make_batch(0, 3))
    history.push_batch(make_batch(1, 3))

    assert len(history) == 6
    assert history[0].position == (1.0, 0.0)
    assert history[2].position == (1.0, 2.0)
    assert history[3].position == (0.0, 0.0)
    assert history[5] == Record((0.0, 2.0), Color(0.2, 0.5, 0.5, 0.5))


def test_slots_keep_their_particle_across_epochs():
    history = TrailHistory(4, 6)
    for tick in range(9):
        history.push_batch(make_batch(tick, 4))

    positions = history.flat_positions()
    for i, (tick, slot) in enumerate(positions):
        assert slot == i % 4
        assert tick == 8 - i // 4


def test_oldest_epochs_are_evicted_at_capacity():
    history = TrailHistory(2, 3)
    for tick in range(5):
        history.push_batch(make_batch(tick, 2))

    assert len(history) == history.capacity == 6
    ticks = [record.position[0] for record in history]
    assert ticks == [4.0, 4.0, 3.0, 3.0, 2.0, 2.0]


@pytest.mark.parametrize("particle_count, max_epochs, ticks", [
    (1, 1, 5),
    (3, 4, 2),
    (5, 7, 30),
    (16, 200, 250),
])
def test_length_invariants_hold_after_every_push(particle_count, max_epochs, ticks):
    history = TrailHistory(particle_count, max_epochs)

    for tick in range(ticks):
        history.push_batch(make_batch(tick, particle_count))
        assert len(history) % particle_count == 0
        assert len(history) <= max_epochs * particle_count

    assert history.epochs == min(ticks, max_epochs)


def test_wrong_batch_size_is_rejected_without_partial_write():
    history = TrailHistory(3, 4)
    history.push_batch(make_batch(0, 3))

    with pytest.raises(ValueError):
        history.push_batch(make_batch(1, 2))

    assert len(history) == 3
    assert history[0].position == (0.0, 0.0)


def test_flat_colors_follow_flat_positions():
    history = TrailHistory(2, 3)
    history.push_batch(make_batch(0, 2))
    history.push_batch(make_batch(1, 2))

    colors = history.flat_colors()
    assert colors.shape == (4, 4)
    np.testing.assert_allclose(colors[:, 0], [0.0, 0.1, 0.0, 0.1])


def test_index_out_of_range():
    history = TrailHistory(2, 3)
    history.push_batch(make_batch(0, 2))

    assert history[-1].position == (0.0, 1.0)
    with pytest.raises(IndexError):
        history[2]


def test_clear_empties_history():
    history = TrailHistory(2, 3)
    history.push_batch(make_batch(0, 2))
    history.clear()

    assert len(history) == 0
    history.push_batch(make_batch(1, 2))
    assert history[0].position == (1.0, 0.0)


@pytest.mark.parametrize("particle_count, max_epochs", [(0, 5), (3, 0)])
def test_invalid_sizes(particle_count, max_epochs):
    with pytest.raises(ValueError):
        TrailHistory(particle_count, max_epochs)
