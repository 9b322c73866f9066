"""Shared pytest fixtures for acf_features tests."""

import numpy as np
import pytest


@pytest.fixture()
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(42)


@pytest.fixture()
def white_image():
    """16x16 all-white rgb image."""
    return np.full((16, 16, 3), 255, dtype=np.uint8)


@pytest.fixture()
def random_image(rng):
    """32x32 random rgb image."""
    return rng.integers(0, 256, size=(32, 32, 3), dtype=np.uint8)
