# -*- coding: utf-8 -*-
"""
Shared fixtures for the WRFL test suite.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator so every test sees the same data."""
    return np.random.default_rng(20261018)


@pytest.fixture
def random_mask(rng):
    """40x36 random mask with a clear margin of 6 cells."""
    mask = np.zeros((36, 40), dtype=bool)
    mask[6:-6, 6:-6] = rng.random((24, 28)) < 0.55
    return mask


@pytest.fixture
def random_image(rng):
    """28x24 float64 image, values in [0, 100)."""
    return rng.random((24, 28)) * 100.0


@pytest.fixture
def integer_valued_image(rng):
    """21x17 float64 image holding integers, exact under summation."""
    return rng.integers(-500, 500, size=(17, 21)).astype(np.float64)
