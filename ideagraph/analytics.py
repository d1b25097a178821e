"""
Graph Analytics Module
======================
Summary metrics for a built graph and for a recorded run.
"""

import numpy as np
from dataclasses import dataclass


@dataclass
class GraphMetrics:
    """Structure of a built graph."""
    n_nodes: int
    n_edges: int
    mean_degree: float
    max_degree: int
    n_isolated: int
    base_active_ratio: float
    mean_strength: float


@dataclass
class ActivationMetrics:
    """Activation activity over a recorded run."""
    n_frames: int
    peak_active: int
    mean_active: float
    frames_with_activity: int
    first_active_frame: int  # -1 if nothing ever lit up


class GraphAnalytics:
    """Static analysis helpers."""

    @staticmethod
    def analyze_graph(store):
        n = len(store)
        if n == 0:
            return GraphMetrics(0, 0, 0.0, 0, 0, 0.0, 0.0)

        degrees = store.degrees()
        n_edges = len(store.connections)
        if n_edges:
            base_ratio = float(np.mean(store.base_active_mask()))
            mean_strength = float(np.mean([c.strength for c in store.connections]))
        else:
            base_ratio = 0.0
            mean_strength = 0.0

        return GraphMetrics(
            n_nodes=n,
            n_edges=n_edges,
            mean_degree=float(np.mean(degrees)),
            max_degree=int(np.max(degrees)),
            n_isolated=int(np.sum(degrees == 0)),
            base_active_ratio=base_ratio,
            mean_strength=mean_strength,
        )

    @staticmethod
    def analyze_run(snapshots):
        """
        Compute activation metrics.

        Args:
            snapshots: list of FrameSnapshot in frame order
        """
        if not snapshots:
            return ActivationMetrics(0, 0, 0.0, 0, -1)

        counts = np.array([s.n_active for s in snapshots])
        lit = np.where(counts > 0)[0]
        first = snapshots[lit[0]].frame if len(lit) > 0 else -1

        return ActivationMetrics(
            n_frames=len(snapshots),
            peak_active=int(np.max(counts)),
            mean_active=float(np.mean(counts)),
            frames_with_activity=int(len(lit)),
            first_active_frame=int(first),
        )
