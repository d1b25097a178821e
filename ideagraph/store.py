"""
Node Store
==========
Structure-of-arrays container for the simulated nodes and their
proximity connections. Physics mutates the arrays in place; everything
else (ids, kinds, sizes, edges) is fixed for the lifetime of a store.
"""

from dataclasses import dataclass
from enum import IntEnum

import numpy as np


class VisualKind(IntEnum):
    """Render variant of a node, fixed at creation."""
    CIRCLE = 0
    BULB = 1
    STAR = 2
    NOTE = 3


@dataclass(frozen=True)
class Node:
    """Read-only view of one node."""
    id: str
    x: float
    y: float
    target: tuple
    vx: float
    vy: float
    kind: VisualKind
    size: float
    pulse_intensity: float
    pulse_direction: int
    rotation: float
    connected_node_ids: frozenset


@dataclass(frozen=True)
class Connection:
    """Undirected link between two node ids."""
    source: str
    target: str
    strength: float
    base_active: bool

    @property
    def key(self):
        return frozenset((self.source, self.target))


class NodeStore:
    """Nodes and edges of one built graph."""

    def __init__(self, width, height, ids, positions, velocities, sizes, kinds,
                 pulse, pulse_direction, rotation):
        self.width = float(width)
        self.height = float(height)
        self.ids = list(ids)
        self._index = {node_id: i for i, node_id in enumerate(self.ids)}
        if len(self._index) != len(self.ids):
            raise ValueError("node ids must be unique")

        n = len(self.ids)
        self.positions = np.asarray(positions, dtype=np.float64).reshape(n, 2)
        self.velocities = np.asarray(velocities, dtype=np.float64).reshape(n, 2)
        self.targets = self.positions.copy()
        self.has_target = np.zeros(n, dtype=np.bool_)
        self.sizes = np.asarray(sizes, dtype=np.float64).reshape(n)
        self.kinds = np.asarray(kinds, dtype=np.int64).reshape(n)
        self.pulse = np.asarray(pulse, dtype=np.float64).reshape(n)
        self.pulse_direction = np.asarray(pulse_direction, dtype=np.float64).reshape(n)
        self.rotation = np.asarray(rotation, dtype=np.float64).reshape(n)

        self.connections = []
        self.neighbors = [set() for _ in range(n)]

    def __len__(self):
        return len(self.ids)

    def __contains__(self, node_id):
        return node_id in self._index

    def index_of(self, node_id):
        try:
            return self._index[node_id]
        except KeyError:
            raise KeyError(f"Unknown node id: {node_id}") from None

    def add_connection(self, a, b, strength, base_active=False):
        """Link two nodes by index. Returns False for self-loops and duplicates."""
        if a == b or b in self.neighbors[a]:
            return False
        self.neighbors[a].add(b)
        self.neighbors[b].add(a)
        self.connections.append(
            Connection(self.ids[a], self.ids[b], float(strength), bool(base_active))
        )
        return True

    def connected_node_ids(self, node_id):
        i = self.index_of(node_id)
        return [self.ids[j] for j in sorted(self.neighbors[i])]

    def degree(self, node_id):
        return len(self.neighbors[self.index_of(node_id)])

    def degrees(self):
        return np.array([len(s) for s in self.neighbors], dtype=np.int64)

    def edge_index(self):
        """(E, 2) array of endpoint indices, in connection order."""
        if not self.connections:
            return np.zeros((0, 2), dtype=np.int64)
        return np.array(
            [(self._index[c.source], self._index[c.target]) for c in self.connections],
            dtype=np.int64,
        )

    def base_active_mask(self):
        return np.array([c.base_active for c in self.connections], dtype=np.bool_)

    def clear_targets(self):
        self.has_target[:] = False
        self.targets[:] = self.positions

    def node(self, node_id):
        i = self.index_of(node_id)
        target = tuple(self.targets[i]) if self.has_target[i] else None
        return Node(
            id=node_id,
            x=float(self.positions[i, 0]),
            y=float(self.positions[i, 1]),
            target=target,
            vx=float(self.velocities[i, 0]),
            vy=float(self.velocities[i, 1]),
            kind=VisualKind(int(self.kinds[i])),
            size=float(self.sizes[i]),
            pulse_intensity=float(self.pulse[i]),
            pulse_direction=int(self.pulse_direction[i]),
            rotation=float(self.rotation[i]),
            connected_node_ids=frozenset(self.ids[j] for j in self.neighbors[i]),
        )

    def nodes(self):
        return [self.node(node_id) for node_id in self.ids]

    def distances_from(self, x, y):
        """Euclidean distance of every node to a point."""
        diff = self.positions - np.array([x, y], dtype=np.float64)
        return np.sqrt(np.sum(diff**2, axis=1))
