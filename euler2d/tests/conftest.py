"""Shared fixtures for the euler2d test suite."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from euler2d.src import GasProperties, FlowState


@pytest.fixture
def gas():
    """Air with R/cv = 0.4 and kappa = 1.4."""
    return GasProperties(R=287.0, cv=717.5, kappa=1.4)


@pytest.fixture
def free_stream(gas):
    """The default far-field stream: rho = 1, rho_vx = 200, rho_vy = 0, E = 1e5."""
    return np.array([1.0, 200.0, 0.0, 1e5])


@pytest.fixture
def random_states(gas):
    """A batch of physically valid conserved states."""
    rng = np.random.default_rng(1234)
    n = 50
    rho = rng.uniform(0.2, 3.0, n)
    vx = rng.uniform(-400.0, 400.0, n)
    vy = rng.uniform(-400.0, 400.0, n)
    p = rng.uniform(1e4, 2e5, n)
    return FlowState.from_primitives(rho, vx, vy, p, gas).to_array()
