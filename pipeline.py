#!/usr/bin/env python3
"""
Idea Network Pipeline
=====================
Headless run of the animated idea-network background with an
interactive HTML export.

Usage:
    python pipeline.py --ticks 600 --output network.html
    python pipeline.py --preset neural --width 1200 --height 800
    python pipeline.py --click 400 300 --seed 7
"""

import argparse
import logging
import sys

from ideagraph.analytics import GraphAnalytics
from ideagraph.config import PRESETS, get_preset
from ideagraph.simulation import Simulation
from ideagraph.visualizer import NetworkVisualizer


def setup_logging(verbose=False):
    """Configure logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%H:%M:%S'
    )


def parse_args(argv=None):
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Idea Network background simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument('--preset', type=str, default='idea-network',
                        choices=sorted(PRESETS),
                        help='Configuration preset')
    parser.add_argument('--width', type=float, default=1200.0,
                        help='Container width (px)')
    parser.add_argument('--height', type=float, default=800.0,
                        help='Container height (px)')
    parser.add_argument('--nodes', type=int, default=None,
                        help='Override node count')
    parser.add_argument('--ticks', type=int, default=600,
                        help='Frames to simulate')
    parser.add_argument('--record-every', type=int, default=2,
                        help='Snapshot stride (frames)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for a reproducible layout')
    parser.add_argument('--click', type=float, nargs=2, metavar=('X', 'Y'), default=None,
                        help='Simulate a click before the first frame')
    parser.add_argument('--output', type=str, default='ideagraph_report.html',
                        help='Output HTML report path')
    parser.add_argument('--list-presets', action='store_true',
                        help='List presets and exit')
    parser.add_argument('--verbose', action='store_true',
                        help='Debug logging')

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger("ideagraph")

    # ==================== LIST PRESETS ====================
    if args.list_presets:
        print("\nAvailable presets:")
        print("-" * 40)
        for name in sorted(PRESETS):
            g = PRESETS[name].graph
            print(f"  {name:14s} {g.node_count:3d} nodes  K={g.max_connections}  D={g.max_distance:.0f}")
        print("-" * 40)
        return 0

    # ==================== 1. CONFIGURE ====================
    logger.info(f"[1/4] Preset '{args.preset}' | {args.width:.0f}x{args.height:.0f} px")
    config = get_preset(args.preset)
    if args.nodes is not None:
        config.graph.node_count = args.nodes

    try:
        simulation = Simulation(config, seed=args.seed)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    # ==================== 2. BUILD GRAPH ====================
    logger.info("[2/4] Building graph...")
    if not simulation.resize(args.width, args.height):
        logger.error("Container size must be positive")
        return 2

    graph = GraphAnalytics.analyze_graph(simulation.store)
    logger.info(f"  Nodes: {graph.n_nodes} | Edges: {graph.n_edges}")
    logger.info(f"  Degree: mean {graph.mean_degree:.2f}, max {graph.max_degree}, isolated {graph.n_isolated}")

    # ==================== 3. ANIMATE ====================
    logger.info(f"[3/4] Animating {args.ticks} frames...")
    snapshots = simulation.run(args.ticks, record_every=args.record_every, click=args.click)

    run = GraphAnalytics.analyze_run(snapshots)
    logger.info(f"  Peak active: {run.peak_active} | Mean active: {run.mean_active:.2f}")
    logger.info(f"  Frames with activity: {run.frames_with_activity}/{run.n_frames}")

    # ==================== 4. EXPORT ====================
    logger.info("[4/4] Writing report...")
    visualizer = NetworkVisualizer(config.render)
    visualizer.create_report(simulation.store, snapshots, args.output,
                             title=f"Idea Network ({args.preset})")

    logger.info(f"Complete! Open: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
