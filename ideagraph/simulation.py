"""
Idea Network Simulation
=======================
Composition root for one animated background: graph building, physics,
activation and rendering, advanced one discrete frame at a time.
"""

import logging
from dataclasses import dataclass

import numpy as np
from tqdm import tqdm

from .activation import ActivationPropagator
from .builder import GraphBuilder
from .config import default_config
from .interaction import InteractionMapper
from .physics import PhysicsStepper
from .renderer import Renderer

logger = logging.getLogger(__name__)


@dataclass
class FrameSnapshot:
    """Copy of the drawable state at one frame."""
    frame: int
    positions: np.ndarray
    active: np.ndarray        # (N,) bool
    pulse: np.ndarray

    @property
    def n_active(self) -> int:
        return int(np.sum(self.active))


class Simulation:
    """Animated force-graph with delayed activation spreading."""

    def __init__(self, config=None, rng=None, seed=None):
        self.config = (config or default_config).validate()
        if rng is None:
            rng = np.random.default_rng(seed)
        self.rng = rng

        cfg = self.config
        self.builder = GraphBuilder(
            cfg.graph, rng,
            pulse_start=(cfg.physics.pulse_min + cfg.physics.pulse_max) / 2.0,
        )
        self.physics = PhysicsStepper(cfg.physics)
        self.propagator = ActivationPropagator(cfg.activation, rng)
        self.interaction = InteractionMapper(
            self.propagator, cfg.interaction, cfg.physics,
            interactive=cfg.interactive, rng=rng,
        )
        self.renderer = Renderer(cfg.render)

        self.store = None
        self.frame = 0

    @property
    def ready(self):
        return self.store is not None

    @property
    def active(self):
        return self.propagator.active

    def resize(self, width, height):
        """
        Rebuild the graph for a new container size.

        Returns True if a new graph was swapped in. Non-positive sizes and
        changes below resize_tolerance are ignored.
        """
        if width <= 0 or height <= 0:
            logger.warning(f"Container has no area ({width}x{height}), graph build deferred")
            return False
        if self.store is not None:
            tol = self.config.render.resize_tolerance
            if abs(self.store.width - width) < tol and abs(self.store.height - height) < tol:
                return False

        store = self.builder.build(width, height)
        # Swap atomically; pending activations refer to the old ids
        self.propagator.clear()
        self.interaction.pointer_leave()
        self.store = store
        return True

    def tick(self):
        """Advance one frame: hover -> physics -> activation."""
        if self.store is None:
            return
        self.interaction.hover_tick(self.store)
        self.physics.step(self.store, self.interaction.pointer, self.config.interactive)
        self.propagator.tick(self.store)
        self.frame += 1

    def activate(self, node_id, delay=0):
        self.propagator.activate(node_id, delay)

    def pointer_move(self, x, y):
        self.interaction.pointer_move(x, y)

    def pointer_leave(self):
        self.interaction.pointer_leave(self.store)

    def click(self, x, y):
        if self.store is None:
            return []
        return self.interaction.click(self.store, x, y)

    def trigger_idle(self):
        if self.store is None:
            return None
        return self.propagator.trigger_idle(self.store)

    def render(self, surface):
        """Draw the current frame. No-op until a graph exists."""
        if self.store is None:
            return False
        self.renderer.draw(surface, self.store, self.propagator.active,
                           pointer=self.interaction.pointer)
        return True

    def snapshot(self):
        if self.store is None:
            raise RuntimeError("Simulation has no graph yet; call resize() first")
        store = self.store
        active = np.array([node_id in self.propagator.active for node_id in store.ids],
                          dtype=np.bool_)
        return FrameSnapshot(self.frame, store.positions.copy(), active, store.pulse.copy())

    def run(self, n_ticks, record_every=1, click=None, progress=True):
        """
        Headless loop.

        Args:
            n_ticks: Frames to simulate
            record_every: Snapshot stride
            click: Optional (x, y) clicked before the first frame
        Returns: list of FrameSnapshot
        """
        if self.store is None:
            raise RuntimeError("Simulation has no graph yet; call resize() first")

        idle_every = self.config.idle_interval_ticks
        record_every = max(1, int(record_every))
        if click is not None:
            scheduled = self.click(*click)
            logger.info(f"Click at ({click[0]:.0f}, {click[1]:.0f}) scheduled {len(scheduled)} activations")

        snapshots = [self.snapshot()]
        for t in tqdm(range(n_ticks), desc="Animating", disable=not progress):
            if t > 0 and t % idle_every == 0:
                self.trigger_idle()
            self.tick()
            if (t + 1) % record_every == 0:
                snapshots.append(self.snapshot())

        logger.info(f"Simulated {n_ticks} frames, {len(self.active)} nodes active at the end")
        return snapshots


class FrameLoop:
    """
    Start/stop handle for the per-frame callback.

    `scheduler(callback)` must arrange for `callback` to run once on the
    next display frame (e.g. a single-shot Qt timer). The stop flag is
    checked once per frame; after stop() no further frames are scheduled.
    """

    def __init__(self, simulation, scheduler, on_frame=None):
        self.simulation = simulation
        self.scheduler = scheduler
        self.on_frame = on_frame
        self.running = False
        self._pending = False

    def start(self):
        if self.running:
            return self
        self.running = True
        if not self._pending:
            self._pending = True
            self.scheduler(self._frame)
        return self

    def stop(self):
        self.running = False

    def _frame(self):
        self._pending = False
        if not self.running:
            return
        self.simulation.tick()
        if self.on_frame is not None:
            self.on_frame()
        if self.running:
            self._pending = True
            self.scheduler(self._frame)

    def __enter__(self):
        return self.start()

    def __exit__(self, *exc):
        self.stop()
        return False
