import os

# pygame must never try to open a real display under test.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(12345)
