"""
Simulation Lifecycle Tests
==========================
Rebuild on resize, frame ordering, frame loop start/stop and presets.
"""

import numpy as np
import pytest

from ideagraph.analytics import GraphAnalytics
from ideagraph.config import PRESETS, SimulationConfig, get_preset
from ideagraph.renderer import RecordingSurface
from ideagraph.simulation import FrameLoop, Simulation


def _sim(seed=11, **graph):
    config = SimulationConfig()
    for key, value in graph.items():
        setattr(config.graph, key, value)
    return Simulation(config, seed=seed)


def test_rebuild_clears_activation_state():
    sim = _sim(node_count=20)
    assert sim.resize(500, 500)

    sim.activate("node-3")
    sim.activate("node-7", delay=30)
    sim.click(250, 250)
    for _ in range(5):
        sim.tick()
    assert sim.active or sim.propagator.pending

    old_store = sim.store
    assert sim.resize(900, 300)
    assert sim.store is not old_store
    assert sim.active == set()
    assert sim.propagator.pending == 0
    assert sim.interaction.pointer is None


def test_active_ids_always_in_store():
    sim = _sim(node_count=25)
    sim.resize(600, 400)
    sim.propagator.activate("node-999")

    for t in range(300):
        if t % 20 == 0:
            sim.click(300, 200)
        sim.tick()
        assert sim.active <= set(sim.store.ids)

    assert "node-999" not in sim.active


def test_zero_sized_container_is_deferred():
    sim = _sim()
    assert not sim.resize(0, 600)
    assert not sim.resize(800, -1)
    assert not sim.ready

    # Ticking and rendering before a graph exists are silent no-ops
    sim.tick()
    assert sim.frame == 0
    assert sim.render(RecordingSurface()) is False
    assert sim.click(10, 10) == []
    assert sim.trigger_idle() is None

    assert sim.resize(800, 600)
    assert sim.ready


def test_small_resize_is_ignored():
    sim = _sim()
    assert sim.resize(500, 500)
    store = sim.store

    assert not sim.resize(500.4, 500.2)
    assert sim.store is store
    assert sim.resize(520, 500)
    assert sim.store is not store


def test_tick_advances_frame_and_moves_nodes():
    sim = _sim()
    sim.resize(500, 500)
    before = sim.store.positions.copy()

    for _ in range(10):
        sim.tick()

    assert sim.frame == 10
    assert not np.allclose(before, sim.store.positions)


def test_seed_reproduces_layout():
    a, b = _sim(seed=42), _sim(seed=42)
    a.resize(640, 480)
    b.resize(640, 480)

    np.testing.assert_allclose(a.store.positions, b.store.positions)
    assert [c.key for c in a.store.connections] == [c.key for c in b.store.connections]


def test_run_records_snapshots():
    sim = _sim()
    sim.resize(500, 500)

    sim.activate("node-0")
    snapshots = sim.run(40, record_every=4, click=(250, 250), progress=False)

    assert len(snapshots) == 11
    assert snapshots[0].frame == 0
    assert snapshots[-1].frame == 40
    assert snapshots[-1].positions.shape == (25, 2)
    metrics = GraphAnalytics.analyze_run(snapshots)
    assert metrics.n_frames == 11
    assert metrics.peak_active >= 1


def test_run_requires_graph():
    with pytest.raises(RuntimeError):
        _sim().run(10, progress=False)


def test_frame_loop_start_stop():
    sim = _sim()
    sim.resize(400, 400)
    scheduled = []
    frames = []

    loop = FrameLoop(sim, scheduled.append, on_frame=lambda: frames.append(sim.frame))
    loop.start()
    loop.start()
    assert len(scheduled) == 1

    for _ in range(3):
        scheduled.pop(0)()
    assert frames == [1, 2, 3]
    assert len(scheduled) == 1

    loop.stop()
    scheduled.pop(0)()
    assert frames == [1, 2, 3]
    assert scheduled == []
    assert sim.frame == 3


def test_frame_loop_restart_after_stop_does_not_double_schedule():
    sim = _sim()
    sim.resize(400, 400)
    scheduled = []

    loop = FrameLoop(sim, scheduled.append)
    loop.start()
    loop.stop()
    loop.start()

    # The pending callback is reused
    assert len(scheduled) == 1
    scheduled.pop(0)()
    assert sim.frame == 1
    assert len(scheduled) == 1


def test_frame_loop_context_manager():
    sim = _sim()
    sim.resize(400, 400)
    scheduled = []

    with FrameLoop(sim, scheduled.append) as loop:
        assert loop.running
        scheduled.pop(0)()
    assert not loop.running

    scheduled.pop(0)()
    assert sim.frame == 1


def test_presets_are_valid_and_independent():
    for name in PRESETS:
        get_preset(name).validate()

    cfg = get_preset("idea-network")
    cfg.graph.node_count = 3
    assert PRESETS["idea-network"].graph.node_count == 25

    with pytest.raises(KeyError):
        get_preset("confetti")


def test_particle_preset_has_no_graph_or_activation():
    sim = Simulation(get_preset("particle"), seed=1)
    sim.resize(800, 600)

    assert sim.store.connections == []
    sim.activate("node-0")
    sim.pointer_move(400, 300)
    assert sim.propagator.pending == 0
    assert sim.interaction.pointer is None

    for _ in range(200):
        sim.tick()
    assert sim.active == set()


def test_neural_preset_runs():
    sim = Simulation(get_preset("neural"), seed=2)
    sim.resize(800, 600)
    sim.run(100, progress=False)

    assert np.all(sim.store.pulse >= 0.0)
    assert np.all(sim.store.pulse <= 1.0)
    assert np.all(sim.store.degrees() <= 6)


@pytest.mark.parametrize("field, value", [
    ("node_count", -1),
    ("size_min", 0.0),
    ("base_active_probability", 1.5),
])
def test_invalid_graph_config_rejected(field, value):
    config = SimulationConfig()
    setattr(config.graph, field, value)
    with pytest.raises(ValueError):
        Simulation(config)


def test_invalid_pulse_band_rejected():
    config = SimulationConfig()
    config.physics.pulse_min = 0.7
    with pytest.raises(ValueError):
        config.validate()


def test_idle_interval_in_frames():
    config = SimulationConfig()
    assert config.idle_interval_ticks == 180
    assert config.frame_interval_ms == 16


@pytest.mark.parametrize("section, field, value", [
    ("interaction", "click_delay_step", 0.0),
    ("interaction", "click_delay_step", -5.0),
    ("interaction", "hover_radius", 0.0),
    ("physics", "attraction_radius", 0.0),
    ("physics", "attraction_radius", -10.0),
    ("render", "pointer_glow_radius", 0.0),
])
def test_invalid_radius_or_step_rejected(section, field, value):
    config = SimulationConfig()
    setattr(getattr(config, section), field, value)
    with pytest.raises(ValueError):
        Simulation(config)


def test_idle_trigger_cadence_in_run():
    config = SimulationConfig()
    config.activation.idle_interval_ms = 100
    config.activation.idle_probability = 1.0
    config.activation.decay_probability = 0.0
    sim = Simulation(config, seed=4)
    sim.resize(500, 500)
    assert config.idle_interval_ticks == 6

    fired = []
    trigger = sim.trigger_idle

    def record():
        node_id = trigger()
        fired.append((sim.frame, node_id))
        return node_id

    sim.trigger_idle = record
    sim.run(30, progress=False)

    assert [frame for frame, _ in fired] == [6, 12, 18, 24]
    assert all(node_id in sim.store for _, node_id in fired)


def test_snapshot_requires_graph():
    sim = _sim()
    with pytest.raises(RuntimeError):
        sim.snapshot()

    sim.resize(300, 300)
    assert sim.snapshot().frame == 0


def test_render_passes_pointer():
    config = get_preset("neural")
    sim = Simulation(config, seed=6)
    sim.resize(400, 400)
    x, y = sim.store.positions[0]

    plain = RecordingSurface()
    sim.render(plain)
    sim.pointer_move(x, y)
    hovered = RecordingSurface()
    sim.render(hovered)

    assert hovered.of_type('glow')[0][3] > plain.of_type('glow')[0][3]
