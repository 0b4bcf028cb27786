"""Pytest configuration for repository-relative imports."""

import os
import sys

import numpy as np
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture
def bimodal_draws():
    """Two well-separated normal modes at 0 and 10."""
    rng = np.random.default_rng(20240601)
    return np.concatenate([rng.normal(0.0, 1.0, 4000), rng.normal(10.0, 1.0, 4000)])


@pytest.fixture
def normal_draws():
    rng = np.random.default_rng(7)
    return rng.normal(0.0, 1.0, 4000)
