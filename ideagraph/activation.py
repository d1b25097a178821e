"""
Activation Propagator
=====================
Delayed activation queue that spreads a visual pulse along graph edges.
"""

import logging
from collections import deque
from dataclasses import dataclass

import numpy as np

from .config import default_config

logger = logging.getLogger(__name__)


@dataclass
class ActivationEntry:
    node_id: str
    delay: int


class ActivationPropagator:
    """
    Activation state of a graph.

    The queue is drained at most `max_per_tick` entries per frame; the rest
    waits for later frames. Active nodes fade out stochastically.
    """

    def __init__(self, config=None, rng=None):
        self.config = config or default_config.activation
        self.rng = rng if rng is not None else np.random.default_rng()
        self.queue = deque()
        self.active = set()

    @property
    def pending(self):
        return len(self.queue)

    def is_active(self, node_id):
        return node_id in self.active

    def activate(self, node_id, delay=0):
        """Schedule a node to light up after `delay` frames."""
        if not self.config.enabled:
            return
        self.queue.append(ActivationEntry(node_id, int(delay)))

    def clear(self):
        self.queue.clear()
        self.active.clear()

    def tick(self, store):
        """Advance one frame: decay, then process up to max_per_tick entries."""
        cfg = self.config
        self._decay()

        for _ in range(min(cfg.max_per_tick, len(self.queue))):
            entry = self.queue.popleft()
            if entry.delay > 0:
                entry.delay -= 1
                self.queue.append(entry)
                continue
            if entry.node_id not in store:
                logger.debug(f"Dropping activation for unknown node {entry.node_id}")
                continue
            # Already lit nodes do not spread again
            if entry.node_id in self.active:
                continue
            self.active.add(entry.node_id)
            self._propagate(store, entry.node_id)

    def _propagate(self, store, node_id):
        cfg = self.config
        neighbours = store.connected_node_ids(node_id)
        count = min(len(neighbours), cfg.max_fanout)
        if count <= 0:
            return
        chosen = self.rng.choice(len(neighbours), size=count, replace=False)
        delays = self.rng.integers(cfg.delay_min, cfg.delay_max + 1, size=count)
        for idx, delay in zip(chosen, delays):
            self.activate(neighbours[int(idx)], int(delay))

    def _decay(self):
        p = self.config.decay_probability
        if not self.active or p <= 0:
            return
        for node_id in sorted(self.active):
            if self.rng.random() < p:
                self.active.discard(node_id)

    def trigger_idle(self, store):
        """Background trigger: maybe activate one random node."""
        cfg = self.config
        if not cfg.enabled or len(store) == 0:
            return None
        if self.rng.random() >= cfg.idle_probability:
            return None
        node_id = store.ids[int(self.rng.integers(0, len(store)))]
        self.activate(node_id)
        return node_id
