"""
Physics Stepper
===============
Per-frame node motion with Numba JIT acceleration.
One call advances the simulation by exactly one discrete frame.
"""

import numpy as np
from numba import jit

from .config import default_config


@jit(nopython=True, fastmath=True, cache=True)
def step_nodes(positions, velocities, targets, has_target, sizes,
               pulse, pulse_direction, rotation, width, height,
               pointer_x, pointer_y, pointer_active,
               attraction_radius, attraction_strength, smoothing, drift_scale,
               bounce_lookahead, pulse_speed, pulse_min, pulse_max, rotation_speed):
    """
    Advance every node by one frame, in place.

    Motion per node:
    - pointer inside attraction_radius: target = p + (pointer - p) * force
    - pointer elsewhere: target = p + v (free drift)
    - with target: p eases toward it by `smoothing`, else p += v * drift_scale
    Then bounce on [size, dim - size] and advance the glow pulse.
    """
    n = positions.shape[0]
    for i in range(n):
        x = positions[i, 0]
        y = positions[i, 1]
        vx = velocities[i, 0]
        vy = velocities[i, 1]
        size = sizes[i]

        # Pointer attraction
        if pointer_active:
            dx = pointer_x - x
            dy = pointer_y - y
            dist = np.sqrt(dx * dx + dy * dy)
            if dist < attraction_radius:
                force = (1.0 - dist / attraction_radius) * attraction_strength
                targets[i, 0] = x + dx * force
                targets[i, 1] = y + dy * force
            else:
                targets[i, 0] = x + vx
                targets[i, 1] = y + vy
            has_target[i] = True

        # Integrate
        if has_target[i]:
            x += (targets[i, 0] - x) * smoothing
            y += (targets[i, 1] - y) * smoothing
        else:
            x += vx * drift_scale
            y += vy * drift_scale

        # Bounce on container edges
        lo_x, hi_x = size, width - size
        if x <= lo_x or x >= hi_x:
            vx = -vx
            x = max(lo_x, min(hi_x, x))
            if has_target[i]:
                targets[i, 0] = x + vx * bounce_lookahead
        lo_y, hi_y = size, height - size
        if y <= lo_y or y >= hi_y:
            vy = -vy
            y = max(lo_y, min(hi_y, y))
            if has_target[i]:
                targets[i, 1] = y + vy * bounce_lookahead

        positions[i, 0] = x
        positions[i, 1] = y
        velocities[i, 0] = vx
        velocities[i, 1] = vy

        # Glow pulse, clamped at the band edges
        p = pulse[i] + pulse_speed * pulse_direction[i]
        if p >= pulse_max:
            p = pulse_max
            pulse_direction[i] = -1.0
        elif p <= pulse_min:
            p = pulse_min
            pulse_direction[i] = 1.0
        pulse[i] = p

        rotation[i] += rotation_speed * pulse_direction[i]


class PhysicsStepper:
    """Applies the motion kernel to a NodeStore."""

    def __init__(self, config=None):
        self.config = config or default_config.physics

    def step(self, store, pointer=None, interactive=True):
        """
        Single frame update.

        Args:
            store: NodeStore mutated in place
            pointer: (x, y) in surface coordinates or None
            interactive: False disables pointer attraction
        """
        if len(store) == 0:
            return store
        cfg = self.config
        pointer_active = pointer is not None and interactive
        px, py = pointer if pointer_active else (0.0, 0.0)
        strength = cfg.attraction_strength if interactive else 0.0

        step_nodes(
            store.positions, store.velocities, store.targets, store.has_target,
            store.sizes, store.pulse, store.pulse_direction, store.rotation,
            store.width, store.height,
            float(px), float(py), pointer_active,
            cfg.attraction_radius, strength, cfg.smoothing, cfg.drift_scale,
            cfg.bounce_lookahead, cfg.pulse_speed, cfg.pulse_min, cfg.pulse_max,
            cfg.rotation_speed,
        )
        return store
