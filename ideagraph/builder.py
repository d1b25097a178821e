"""
Graph Builder
=============
Generates a fresh node layout and its proximity graph for a container.
"""

import logging

import numpy as np

from .config import default_config
from .store import NodeStore

logger = logging.getLogger(__name__)


def pairwise_distances(positions):
    """(N, N) Euclidean distance matrix."""
    diff = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
    return np.sqrt(np.sum(diff**2, axis=2))


class GraphBuilder:
    """Builds randomized node stores with capped nearest-neighbour edges."""

    def __init__(self, config=None, rng=None, pulse_start=0.5):
        self.config = config or default_config.graph
        self.rng = rng if rng is not None else np.random.default_rng()
        self.pulse_start = pulse_start

    def build(self, width, height):
        """
        Create N nodes inside a width x height container and connect them.

        Args:
            width, height: Container size in px (must be positive)
        Returns: NodeStore
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Container must have positive size, got {width}x{height}")

        cfg = self.config
        n = max(0, int(cfg.node_count))
        rng = self.rng

        # Sizes must leave a non-empty band [size, dim - size]
        sizes = rng.uniform(cfg.size_min, cfg.size_max, n)
        sizes = np.minimum(sizes, min(width, height) / 2.0)

        positions = np.empty((n, 2))
        positions[:, 0] = rng.uniform(sizes, width - sizes)
        positions[:, 1] = rng.uniform(sizes, height - sizes)

        speed = cfg.max_speed * cfg.velocity_scale
        velocities = (rng.random((n, 2)) - 0.5) * speed

        kinds = np.array([int(k) for k in cfg.visual_kinds], dtype=np.int64)
        node_kinds = kinds[rng.integers(0, len(kinds), n)] if n else np.zeros(0, dtype=np.int64)

        store = NodeStore(
            width, height,
            ids=[f"node-{i}" for i in range(n)],
            positions=positions,
            velocities=velocities,
            sizes=sizes,
            kinds=node_kinds,
            pulse=np.full(n, self.pulse_start),
            pulse_direction=np.where(rng.random(n) > 0.5, 1.0, -1.0),
            rotation=rng.uniform(0.0, 2 * np.pi, n),
        )

        self._connect(store)
        logger.info(f"Built graph: {n} nodes, {len(store.connections)} edges ({width:.0f}x{height:.0f})")
        return store

    def _connect(self, store):
        """Link each node to its nearest neighbours within max_distance."""
        cfg = self.config
        n = len(store)
        d_max = cfg.max_distance
        k = cfg.max_connections
        if n < 2 or d_max <= 0 or k <= 0:
            return

        dist = pairwise_distances(store.positions)

        for a in range(n):
            candidates = np.where((dist[a] < d_max) & (np.arange(n) != a))[0]
            # Stable sort so equal distances keep index order
            candidates = candidates[np.argsort(dist[a, candidates], kind='stable')][:k]

            for b in candidates:
                if len(store.neighbors[a]) >= k:
                    break
                if len(store.neighbors[b]) >= k:
                    continue
                strength = 1.0 - dist[a, b] / d_max
                base_active = self.rng.random() < cfg.base_active_probability
                store.add_connection(a, int(b), strength, base_active)
