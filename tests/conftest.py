"""
Shared test helpers
===================
Hand-placed node stores for deterministic checks.
"""

import numpy as np
import pytest

from ideagraph.store import NodeStore, VisualKind


def _make_store(positions, width=500.0, height=500.0, size=10.0,
                velocities=None, kinds=None, pulse=0.5, pulse_direction=1.0):
    positions = np.asarray(positions, dtype=np.float64)
    n = len(positions)
    if velocities is None:
        velocities = np.zeros((n, 2))
    if kinds is None:
        kinds = [VisualKind.CIRCLE] * n
    return NodeStore(
        width, height,
        ids=[f"node-{i}" for i in range(n)],
        positions=positions,
        velocities=velocities,
        sizes=np.full(n, size),
        kinds=[int(k) for k in kinds],
        pulse=np.full(n, pulse),
        pulse_direction=np.full(n, pulse_direction),
        rotation=np.zeros(n),
    )


@pytest.fixture
def make_store():
    return _make_store


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
