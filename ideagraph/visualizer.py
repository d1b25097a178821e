"""
Network Visualizer
==================
Interactive HTML export of a recorded run:
- Connection lines (lit when an endpoint is active or the edge is base-active)
- Nodes sized by their radius, primary colour when active
- Frame slider with play/pause animation
"""

import logging

import numpy as np
import plotly.graph_objects as go

from .config import default_config
from .store import VisualKind

logger = logging.getLogger(__name__)

# Plotly marker symbol per visual kind
KIND_SYMBOLS = {
    VisualKind.CIRCLE: 'circle',
    VisualKind.BULB: 'diamond',
    VisualKind.STAR: 'star',
    VisualKind.NOTE: 'square',
}


class NetworkVisualizer:
    """Plotly rendering of recorded snapshots."""

    def __init__(self, config=None):
        self.config = config or default_config.render

    def _edge_coords(self, store, positions, mask):
        """Flattened line coordinates with None breaks for the selected edges."""
        edges = store.edge_index()[mask]
        xs, ys = [], []
        for a, b in edges:
            xs.extend([positions[a, 0], positions[b, 0], None])
            ys.extend([positions[a, 1], positions[b, 1], None])
        return xs, ys

    def _traces(self, store, snapshot):
        cfg = self.config
        edges = store.edge_index()
        if len(edges):
            lit = store.base_active_mask() | snapshot.active[edges[:, 0]] | snapshot.active[edges[:, 1]]
        else:
            lit = np.zeros(0, dtype=bool)

        idle_x, idle_y = self._edge_coords(store, snapshot.positions, ~lit)
        lit_x, lit_y = self._edge_coords(store, snapshot.positions, lit)

        scale = np.where(snapshot.active, cfg.active_scale, 1.0)
        colors = np.where(snapshot.active, cfg.primary_color, cfg.secondary_color)
        opacity = np.where(snapshot.active, cfg.active_alpha, cfg.idle_alpha)

        return [
            go.Scatter(
                x=idle_x, y=idle_y, mode='lines', hoverinfo='skip',
                line=dict(color=cfg.connection_color, width=cfg.idle_line_width * 2),
                opacity=cfg.idle_line_alpha * 2, name='Connections',
            ),
            go.Scatter(
                x=lit_x, y=lit_y, mode='lines', hoverinfo='skip',
                line=dict(color=cfg.connection_color, width=cfg.active_line_width * 2, dash='dash'),
                opacity=cfg.active_line_alpha * 2, name='Lit connections',
            ),
            go.Scatter(
                x=snapshot.positions[:, 0], y=snapshot.positions[:, 1],
                mode='markers',
                marker=dict(
                    size=store.sizes * 2 * scale * cfg.glyph_scale,
                    color=colors.tolist(),
                    opacity=opacity.tolist(),
                    symbol=[KIND_SYMBOLS[VisualKind(int(k))] for k in store.kinds],
                    line=dict(width=0),
                ),
                text=[f"{node_id}<br>degree {len(store.neighbors[i])}"
                      for i, node_id in enumerate(store.ids)],
                hoverinfo='text',
                name='Ideas',
            ),
        ]

    def create_report(self, store, snapshots, output_path="ideagraph_report.html",
                      title="Idea Network"):
        """
        Generate an animated HTML report.

        Args:
            store: NodeStore the snapshots were recorded from
            snapshots: list of FrameSnapshot
            output_path: Output HTML file
        """
        if not snapshots:
            raise ValueError("No snapshots to render")
        logger.info(f"Generating report: {output_path}")
        cfg = self.config

        fig = go.Figure(data=self._traces(store, snapshots[0]))

        # Limit to 200 animation frames
        stride = max(1, len(snapshots) // 200)
        frames = [
            go.Frame(data=self._traces(store, s), traces=[0, 1, 2], name=str(s.frame))
            for s in snapshots[::stride]
        ]
        fig.frames = frames

        fig.update_layout(
            title=dict(text=title, x=0.5),
            width=max(600, int(store.width)),
            height=max(400, int(store.height)) + 120,
            paper_bgcolor=cfg.background_color,
            plot_bgcolor=cfg.background_color,
            showlegend=False,
            margin=dict(l=20, r=20, t=60, b=80),
            xaxis=dict(range=[0, store.width], visible=False),
            # Screen coordinates: y grows downward
            yaxis=dict(range=[store.height, 0], visible=False, scaleanchor='x'),
            updatemenus=[dict(
                type='buttons',
                showactive=False,
                y=0.0,
                x=0.02,
                xanchor='left',
                buttons=[
                    dict(label='▶ Play', method='animate',
                         args=[None, dict(frame=dict(duration=1000 // cfg.fps, redraw=False),
                                          fromcurrent=True)]),
                    dict(label='⏸ Pause', method='animate',
                         args=[[None], dict(frame=dict(duration=0, redraw=False), mode='immediate')]),
                ],
            )],
            sliders=[dict(
                active=0,
                currentvalue=dict(prefix='Frame: '),
                pad=dict(t=30),
                len=0.85,
                x=0.12,
                steps=[dict(args=[[f.name], dict(mode='immediate', frame=dict(duration=0, redraw=False))],
                            method='animate', label=f.name) for f in frames],
            )],
        )

        config = {'scrollZoom': False, 'displayModeBar': False, 'responsive': True}
        html = fig.to_html(config=config, include_plotlyjs='cdn', full_html=True)

        custom_css = f"""
        <style>
            body {{ background: {cfg.background_color}; margin: 0; }}
            .js-plotly-plot {{ border-radius: 8px; }}
        </style>
        """
        html = html.replace('</head>', f'{custom_css}</head>')

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(html)

        logger.info(f"Report saved: {output_path}")
        return output_path
