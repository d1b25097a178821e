"""
Renderer
========
Draws the current graph state onto a drawing surface.
Read-only with respect to the simulation.
"""

import logging

import numpy as np

from .config import default_config
from .store import VisualKind

logger = logging.getLogger(__name__)


class Surface:
    """Drawing target. Backends override every method."""

    def clear(self, width, height):
        raise NotImplementedError

    def draw_line(self, x1, y1, x2, y2, color, alpha, width, dash=()):
        raise NotImplementedError

    def draw_glow(self, x, y, radius, color, alpha):
        raise NotImplementedError

    def draw_circle(self, x, y, radius, color, alpha):
        raise NotImplementedError

    def draw_glyph(self, kind, x, y, half_size, rotation, alpha):
        """Draw a glyph asset. Return False if the asset is unavailable."""
        return False


class RecordingSurface(Surface):
    """Keeps a list of draw calls instead of pixels."""

    def __init__(self, glyphs=()):
        self.glyphs = set(glyphs)
        self.calls = []

    def clear(self, width, height):
        self.calls.append(('clear', width, height))

    def draw_line(self, x1, y1, x2, y2, color, alpha, width, dash=()):
        self.calls.append(('line', x1, y1, x2, y2, color, alpha, width, tuple(dash)))

    def draw_glow(self, x, y, radius, color, alpha):
        self.calls.append(('glow', x, y, radius, color, alpha))

    def draw_circle(self, x, y, radius, color, alpha):
        self.calls.append(('circle', x, y, radius, color, alpha))

    def draw_glyph(self, kind, x, y, half_size, rotation, alpha):
        if kind not in self.glyphs:
            return False
        self.calls.append(('glyph', kind, x, y, half_size, rotation, alpha))
        return True

    def of_type(self, name):
        return [c for c in self.calls if c[0] == name]


class Renderer:
    """Paints connections, then nodes."""

    def __init__(self, config=None):
        self.config = config or default_config.render
        # Visual kind -> draw routine
        self._drawers = {
            VisualKind.CIRCLE: self._draw_circle,
            VisualKind.BULB: self._draw_glyph,
            VisualKind.STAR: self._draw_glyph,
            VisualKind.NOTE: self._draw_glyph,
        }
        self._missing = set()

    def draw(self, surface, store, active=frozenset(), pointer=None):
        """
        Render one frame of `store`.

        Args:
            active: ids of the lit nodes
            pointer: (x, y) of the pointer, or None when it is off the surface
        """
        surface.clear(store.width, store.height)
        self._draw_connections(surface, store, active)
        self._draw_nodes(surface, store, active, self._pointer_effect(store, pointer))

    def _line_alpha(self, conn, lit):
        cfg = self.config
        if cfg.strength_opacity:
            return min(conn.strength + 0.2, 1.0) if lit else conn.strength * 0.3
        return cfg.active_line_alpha if lit else cfg.idle_line_alpha

    def _pointer_effect(self, store, pointer):
        """Per-node scale factor, growing toward the pointer."""
        cfg = self.config
        if pointer is None or cfg.pointer_glow_gain <= 0 or len(store) == 0:
            return None
        dist = store.distances_from(*pointer)
        closeness = np.clip(1.0 - dist / cfg.pointer_glow_radius, 0.0, None)
        return 1.0 + closeness * cfg.pointer_glow_gain

    def _draw_connections(self, surface, store, active):
        cfg = self.config
        pos = store.positions
        for conn in store.connections:
            a = store.index_of(conn.source)
            b = store.index_of(conn.target)
            lit = conn.base_active or conn.source in active or conn.target in active
            surface.draw_line(
                pos[a, 0], pos[a, 1], pos[b, 0], pos[b, 1],
                cfg.connection_color,
                self._line_alpha(conn, lit),
                cfg.active_line_width if lit else cfg.idle_line_width,
                cfg.dash_pattern if lit else (),
            )

    def _draw_nodes(self, surface, store, active, effect=None):
        cfg = self.config
        for i, node_id in enumerate(store.ids):
            is_active = node_id in active
            scale = cfg.active_scale if is_active else 1.0
            if effect is not None:
                scale *= effect[i]
            color = cfg.primary_color if is_active else cfg.secondary_color
            x, y = store.positions[i]
            size = store.sizes[i]

            surface.draw_glow(x, y, size * cfg.glow_scale * scale, color, cfg.glow_alpha)

            kind = VisualKind(int(store.kinds[i]))
            self._drawers[kind](
                surface, kind, x, y,
                size * scale * cfg.glyph_scale,
                store.rotation[i], store.pulse[i], color,
                cfg.active_alpha if is_active else cfg.idle_alpha,
            )

    def _draw_circle(self, surface, kind, x, y, half_size, rotation, pulse, color, alpha):
        radius = half_size * (1.0 + pulse * self.config.circle_pulse_gain)
        surface.draw_circle(x, y, radius, color, alpha)

    def _draw_glyph(self, surface, kind, x, y, half_size, rotation, pulse, color, alpha):
        if surface.draw_glyph(kind, x, y, half_size, rotation, alpha):
            return
        if kind not in self._missing:
            self._missing.add(kind)
            logger.warning(f"Glyph for {kind.name} unavailable, drawing circles instead")
        self._draw_circle(surface, kind, x, y, half_size, rotation, pulse, color, alpha)
