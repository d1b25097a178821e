"""
Interaction Mapper
==================
Translates pointer input (surface coordinates) into attraction targets
and activations.
"""

import math

import numpy as np

from .config import default_config


class InteractionMapper:
    """Pointer state plus hover and click activation rules."""

    def __init__(self, propagator, config=None, physics_config=None,
                 interactive=True, rng=None):
        self.propagator = propagator
        self.config = config or default_config.interaction
        self.physics_config = physics_config or default_config.physics
        self.interactive = interactive
        self.rng = rng if rng is not None else np.random.default_rng()
        self.pointer = None

    def pointer_move(self, x, y):
        if not self.interactive:
            return
        self.pointer = (float(x), float(y))

    def pointer_leave(self, store=None):
        """Forget the pointer; nodes go back to free drift."""
        self.pointer = None
        if store is not None:
            store.clear_targets()

    def hover_tick(self, store):
        """Occasionally activate nodes right under the pointer."""
        if self.pointer is None or len(store) == 0:
            return []
        cfg = self.config
        dist = store.distances_from(*self.pointer)
        near = np.where(dist < cfg.hover_radius)[0]
        hit = [store.ids[i] for i in near if self.rng.random() < cfg.hover_probability]
        for node_id in hit:
            self.propagator.activate(node_id)
        return hit

    def click(self, store, x, y):
        """
        Ripple activation around a click.

        Every node closer than click_radius_factor * attraction_radius is
        activated with a delay of floor(distance / click_delay_step) frames.
        Returns the list of (node_id, delay) scheduled.
        """
        if not self.interactive or len(store) == 0:
            return []
        cfg = self.config
        radius = self.physics_config.attraction_radius * cfg.click_radius_factor
        dist = store.distances_from(x, y)

        scheduled = []
        for i in np.where(dist < radius)[0]:
            delay = int(math.floor(dist[i] / cfg.click_delay_step))
            self.propagator.activate(store.ids[i], delay)
            scheduled.append((store.ids[i], delay))
        return scheduled
