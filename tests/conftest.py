"""
Pytest configuration and shared fixtures for the Kalman Forecast test suite.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

# Add src to path for testing
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from kalman_forecast import LinearSystem, MultivariateNormal
from kalman_forecast.config import set_global_seed


@pytest.fixture(scope="session")
def global_test_seed():
    """Set global random seed for all tests to ensure reproducibility."""
    seed = 42
    set_global_seed(seed)
    return seed


@pytest.fixture
def rng():
    """Seeded random number generator."""
    return np.random.default_rng(42)


@pytest.fixture
def scalar_system():
    """1x1 random-walk-plus-noise system with noise=1.0, walk=0.1."""
    return LinearSystem(
        transition=[[1.0]],
        control=[[1.0]],
        observation=[[1.0]],
        process_noise=[[0.1]],
        observation_noise=[[1.0]]
    )


@pytest.fixture
def tracking_system():
    """2D constant-velocity system observing position only."""
    dt = 1.0
    return LinearSystem(
        transition=[[1.0, dt], [0.0, 1.0]],
        control=[[0.5 * dt ** 2], [dt]],
        observation=[[1.0, 0.0]],
        process_noise=[[0.01, 0.0], [0.0, 0.01]],
        observation_noise=[[0.5]]
    )


@pytest.fixture
def tracking_belief():
    """Belief matching ``tracking_system``."""
    return MultivariateNormal([0.0, 1.0], [[1.0, 0.2], [0.2, 2.0]])


def check_psd(matrix, tol=1e-10):
    """Check if matrix is positive semi-definite."""
    return np.all(np.linalg.eigvalsh(matrix) >= -tol)


@pytest.fixture
def psd_check():
    """Positive semi-definiteness check for covariance assertions."""
    return check_psd


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "visual: marks tests that generate visual output"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark integration and visual tests."""
    for item in items:
        if "integration" in item.nodeid or "end_to_end" in item.nodeid:
            item.add_marker(pytest.mark.integration)

        if "test_viz" in item.nodeid:
            item.add_marker(pytest.mark.visual)
