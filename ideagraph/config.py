"""
Idea Network Configuration
==========================
Simulation parameters, interaction tuning and render styling.
"""

import copy
from dataclasses import dataclass, field

from .store import VisualKind


@dataclass
class GraphConfig:
    """Node generation and proximity graph settings."""
    node_count: int = 25
    max_distance: float = 200.0    # px, longest edge allowed
    max_connections: int = 3       # nearest-neighbour cutoff per node
    max_speed: float = 0.3         # px/frame
    velocity_scale: float = 0.5    # initial drift = (u - 0.5) * max_speed * scale

    size_min: float = 10.0
    size_max: float = 16.0
    base_active_probability: float = 0.2
    visual_kinds: tuple = (VisualKind.BULB, VisualKind.STAR, VisualKind.CIRCLE, VisualKind.NOTE)


@dataclass
class PhysicsConfig:
    """Per-frame motion and pulse parameters."""
    attraction_radius: float = 200.0
    attraction_strength: float = 0.03
    smoothing: float = 0.1         # easing factor toward target
    drift_scale: float = 0.5       # free drift when a node has no target
    bounce_lookahead: float = 10.0

    # Glow pulse
    pulse_speed: float = 0.002
    pulse_min: float = 0.4
    pulse_max: float = 0.6
    rotation_speed: float = 0.0002


@dataclass
class ActivationConfig:
    """Activation cascade settings (delays are in frames)."""
    enabled: bool = True
    max_per_tick: int = 3
    max_fanout: int = 2
    delay_min: int = 10
    delay_max: int = 40
    decay_probability: float = 0.02

    # Background trigger
    idle_interval_ms: int = 3000
    idle_probability: float = 0.3


@dataclass
class InteractionConfig:
    """Pointer mapping settings."""
    hover_radius: float = 50.0
    hover_probability: float = 0.02
    click_radius_factor: float = 0.7
    click_delay_step: float = 10.0   # px of distance per frame of delay


@dataclass
class RenderConfig:
    """Drawing styles."""
    connection_color: str = "#000f9f"
    primary_color: str = "#000f9f"     # active nodes
    secondary_color: str = "#4d5f80"   # idle nodes
    background_color: str = "#ffffff"

    active_line_alpha: float = 0.4
    idle_line_alpha: float = 0.1
    active_line_width: float = 1.0
    idle_line_width: float = 0.5
    dash_pattern: tuple = (4.0, 2.0)

    glow_scale: float = 1.5
    glow_alpha: float = 0.5
    active_scale: float = 1.2
    active_alpha: float = 0.9
    idle_alpha: float = 0.7
    glyph_scale: float = 0.8
    circle_pulse_gain: float = 0.05

    # Optional effects
    strength_opacity: bool = False     # edge opacity follows connection strength
    pointer_glow_gain: float = 0.0     # extra scale for nodes under the pointer
    pointer_glow_radius: float = 100.0

    fps: int = 60
    resize_debounce_ms: int = 100
    resize_tolerance: float = 1.0      # px change that forces a rebuild


@dataclass
class SimulationConfig:
    """Complete configuration for one animated background."""
    graph: GraphConfig = field(default_factory=GraphConfig)
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    activation: ActivationConfig = field(default_factory=ActivationConfig)
    interaction: InteractionConfig = field(default_factory=InteractionConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    interactive: bool = True
    container: str = "hero-section"   # objectName of the widget to size against

    @property
    def frame_interval_ms(self) -> int:
        return max(1, int(1000 / self.render.fps))

    @property
    def idle_interval_ticks(self) -> int:
        return max(1, int(self.activation.idle_interval_ms * self.render.fps / 1000))

    def validate(self):
        """Raise ValueError on values the simulation cannot run with."""
        g, p, a = self.graph, self.physics, self.activation
        if g.node_count < 0:
            raise ValueError(f"node_count must be >= 0, got {g.node_count}")
        if g.max_connections < 0:
            raise ValueError(f"max_connections must be >= 0, got {g.max_connections}")
        if g.size_min <= 0 or g.size_min > g.size_max:
            raise ValueError(f"invalid node size range [{g.size_min}, {g.size_max}]")
        if not g.visual_kinds:
            raise ValueError("visual_kinds must not be empty")
        if p.pulse_min >= p.pulse_max:
            raise ValueError(f"invalid pulse band [{p.pulse_min}, {p.pulse_max}]")
        if not 0.0 < p.smoothing <= 1.0:
            raise ValueError(f"smoothing must be in (0, 1], got {p.smoothing}")
        if p.attraction_radius <= 0:
            raise ValueError(f"attraction_radius must be > 0, got {p.attraction_radius}")
        if a.delay_min < 0 or a.delay_min > a.delay_max:
            raise ValueError(f"invalid delay range [{a.delay_min}, {a.delay_max}]")
        if a.max_per_tick < 1:
            raise ValueError(f"max_per_tick must be >= 1, got {a.max_per_tick}")
        for name in ('base_active_probability',):
            self._check_probability(name, getattr(g, name))
        for name in ('decay_probability', 'idle_probability'):
            self._check_probability(name, getattr(a, name))
        i = self.interaction
        if i.hover_radius <= 0:
            raise ValueError(f"hover_radius must be > 0, got {i.hover_radius}")
        if i.click_delay_step <= 0:
            raise ValueError(f"click_delay_step must be > 0, got {i.click_delay_step}")
        self._check_probability('hover_probability', i.hover_probability)
        if self.render.pointer_glow_radius <= 0:
            raise ValueError(f"pointer_glow_radius must be > 0, got {self.render.pointer_glow_radius}")
        if self.render.fps < 1:
            raise ValueError(f"fps must be >= 1, got {self.render.fps}")
        return self

    @staticmethod
    def _check_probability(name, value):
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"{name} must be in [0, 1], got {value}")


def _neural_preset():
    cfg = SimulationConfig()
    cfg.graph = GraphConfig(
        node_count=30, max_distance=150.0, max_connections=6,
        max_speed=0.5, velocity_scale=1.0,
        size_min=2.0, size_max=5.0, base_active_probability=0.3,
        visual_kinds=(VisualKind.CIRCLE,),
    )
    cfg.physics = PhysicsConfig(attraction_radius=100.0, pulse_speed=0.01,
                                pulse_min=0.0, pulse_max=1.0)
    cfg.activation = ActivationConfig(max_per_tick=6, max_fanout=4,
                                      decay_probability=0.05,
                                      idle_interval_ms=2000, idle_probability=1.0)
    cfg.render = RenderConfig(primary_color="#ffffff", secondary_color="#000f9f",
                              active_line_width=1.5, glow_scale=3.0,
                              active_scale=1.5, dash_pattern=(),
                              strength_opacity=True, pointer_glow_gain=1.5)
    return cfg


def _particle_preset():
    # No graph and no activation: drifting circles only
    cfg = SimulationConfig(interactive=False)
    cfg.graph = GraphConfig(
        node_count=30, max_connections=0, max_speed=0.4, velocity_scale=1.0,
        size_min=1.0, size_max=7.0, base_active_probability=0.0,
        visual_kinds=(VisualKind.CIRCLE,),
    )
    cfg.physics = PhysicsConfig(attraction_strength=0.0, pulse_speed=0.004,
                                pulse_min=0.1, pulse_max=0.6)
    cfg.activation = ActivationConfig(enabled=False, idle_probability=0.0)
    cfg.render = RenderConfig(glow_scale=1.0, glow_alpha=0.2)
    return cfg


PRESETS = {
    'idea-network': SimulationConfig(),
    'neural': _neural_preset(),
    'particle': _particle_preset(),
}


def get_preset(name):
    """Return an independent copy of a named preset."""
    if name not in PRESETS:
        raise KeyError(f"Unknown preset '{name}'. Available: {', '.join(sorted(PRESETS))}")
    return copy.deepcopy(PRESETS[name])


# Default instance
default_config = SimulationConfig()
