"""
Graph Construction Tests
========================
Structural invariants of the proximity graph and the node store.
"""

import numpy as np
import pytest

from ideagraph.builder import GraphBuilder, pairwise_distances
from ideagraph.config import GraphConfig
from ideagraph.physics import PhysicsStepper
from ideagraph.store import VisualKind


def _edge_keys(store):
    return [c.key for c in store.connections]


@pytest.mark.parametrize("seed", range(8))
def test_edge_cap_and_no_duplicates(seed):
    cfg = GraphConfig(node_count=60, max_distance=250.0, max_connections=3)
    store = GraphBuilder(cfg, np.random.default_rng(seed)).build(800, 600)

    assert np.all(store.degrees() <= 3)
    keys = _edge_keys(store)
    assert len(keys) == len(set(keys))
    assert all(len(k) == 2 for k in keys)


def test_adjacency_is_symmetric(rng):
    store = GraphBuilder(GraphConfig(node_count=40), rng).build(600, 400)

    for node_id in store.ids:
        for other in store.connected_node_ids(node_id):
            assert node_id in store.connected_node_ids(other)
    assert int(np.sum(store.degrees())) == 2 * len(store.connections)


def test_strength_from_initial_distance(rng):
    cfg = GraphConfig(node_count=30, max_distance=180.0)
    store = GraphBuilder(cfg, rng).build(500, 500)
    dist = pairwise_distances(store.positions)

    assert store.connections
    for conn in store.connections:
        a, b = store.index_of(conn.source), store.index_of(conn.target)
        assert dist[a, b] < 180.0
        assert conn.strength == pytest.approx(1.0 - dist[a, b] / 180.0)
        assert 0.0 <= conn.strength <= 1.0


def test_base_active_probability(rng):
    cfg = GraphConfig(node_count=200, max_distance=300.0, base_active_probability=0.2)
    store = GraphBuilder(cfg, rng).build(1000, 1000)
    ratio = np.mean(store.base_active_mask())

    assert 0.1 < ratio < 0.3


def test_nodes_created_inside_container(rng):
    store = GraphBuilder(GraphConfig(node_count=100), rng).build(320, 240)

    assert len(store) == 100
    assert np.all(store.positions[:, 0] >= store.sizes)
    assert np.all(store.positions[:, 0] <= 320 - store.sizes)
    assert np.all(store.positions[:, 1] >= store.sizes)
    assert np.all(store.positions[:, 1] <= 240 - store.sizes)
    assert np.all((store.sizes >= 10.0) & (store.sizes <= 16.0))


def test_ids_and_kinds(rng):
    cfg = GraphConfig(node_count=12, visual_kinds=(VisualKind.STAR, VisualKind.NOTE))
    store = GraphBuilder(cfg, rng).build(400, 400)

    assert store.ids == [f"node-{i}" for i in range(12)]
    assert {node.kind for node in store.nodes()} <= {VisualKind.STAR, VisualKind.NOTE}


def test_initial_speed_bounded(rng):
    cfg = GraphConfig(node_count=50, max_speed=0.4, velocity_scale=0.5)
    store = GraphBuilder(cfg, rng).build(400, 400)

    assert np.all(np.abs(store.velocities) <= 0.1 + 1e-12)


def test_single_node_has_no_edges(rng):
    store = GraphBuilder(GraphConfig(node_count=1), rng).build(400, 400)
    assert len(store) == 1
    assert store.connections == []


def test_non_positive_distance_has_no_edges(rng):
    store = GraphBuilder(GraphConfig(node_count=20, max_distance=0.0), rng).build(400, 400)
    assert store.connections == []
    assert np.all(store.degrees() == 0)


def test_zero_sized_container_rejected(rng):
    with pytest.raises(ValueError):
        GraphBuilder(GraphConfig(), rng).build(0, 400)


def test_tiny_container_clamps_sizes(rng):
    store = GraphBuilder(GraphConfig(node_count=5), rng).build(12, 300)
    assert np.all(store.sizes <= 6.0)
    assert np.all(store.positions[:, 0] == pytest.approx(6.0))


def test_rebuild_gives_new_layout_same_invariants(rng):
    builder = GraphBuilder(GraphConfig(node_count=30, max_connections=2), rng)
    first = builder.build(500, 500)
    second = builder.build(500, 500)

    assert not np.allclose(first.positions, second.positions)
    assert np.all(second.degrees() <= 2)


def test_store_duplicate_connection_refused(make_store):
    store = make_store([[10.0, 10.0], [20.0, 20.0]])

    assert store.add_connection(0, 1, 0.5)
    assert not store.add_connection(1, 0, 0.5)
    assert not store.add_connection(0, 0, 1.0)
    assert len(store.connections) == 1


def test_store_node_view(make_store):
    store = make_store([[10.0, 20.0], [30.0, 40.0]], velocities=[[0.1, 0.2], [0.0, 0.0]])
    store.add_connection(0, 1, 0.9, base_active=True)
    node = store.node("node-0")

    assert (node.x, node.y) == (10.0, 20.0)
    assert node.target is None
    assert node.connected_node_ids == frozenset({"node-1"})
    assert store.connections[0].base_active

    with pytest.raises(KeyError):
        store.node("node-9")


def test_scenario_small_graph_bounded_motion():
    """N=10, D=100, K=3 in 500x500, then 1000 frames with no pointer."""
    cfg = GraphConfig(node_count=10, max_distance=100.0, max_connections=3)
    store = GraphBuilder(cfg, np.random.default_rng(3)).build(500, 500)

    degrees = store.degrees()
    assert np.all((degrees >= 0) & (degrees <= 3))

    stepper = PhysicsStepper()
    for _ in range(1000):
        stepper.step(store)

    assert np.all(store.positions >= store.sizes[:, np.newaxis] - 1e-9)
    assert np.all(store.positions <= 500 - store.sizes[:, np.newaxis] + 1e-9)
