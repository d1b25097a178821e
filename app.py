#!/usr/bin/env python3
"""
Idea Network Desktop Application
================================
Settings panel + live animated background in one window.
"""

import logging
import os
import sys

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QComboBox, QPushButton, QGroupBox, QFormLayout, QSpinBox,
    QCheckBox, QStatusBar, QMessageBox
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QPalette

from ideagraph.analytics import GraphAnalytics
from ideagraph.config import PRESETS, get_preset
from ideagraph.widget import IdeaNetworkWidget

logger = logging.getLogger(__name__)


class IdeaNetworkWindow(QMainWindow):
    """Configuration panel next to the live network."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Idea Network")
        self.setMinimumSize(1100, 700)
        self._setup_ui()

    def _setup_ui(self):
        """Build the UI."""
        central = QWidget()
        self.setCentralWidget(central)
        layout = QHBoxLayout(central)

        panel = QWidget()
        panel.setMaximumWidth(300)
        side = QVBoxLayout(panel)
        side.setSpacing(15)

        # Title
        title = QLabel("Idea Network")
        title.setFont(QFont("Arial", 20, QFont.Weight.Bold))
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        side.addWidget(title)

        subtitle = QLabel("Move the pointer to attract ideas, click to spread them")
        subtitle.setWordWrap(True)
        subtitle.setStyleSheet("color: #888; font-size: 12px;")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        side.addWidget(subtitle)

        # Graph Group
        graph_group = QGroupBox("Graph")
        graph_form = QFormLayout(graph_group)

        self.preset_combo = QComboBox()
        self.preset_combo.addItems(sorted(PRESETS))
        self.preset_combo.setCurrentText("idea-network")
        self.preset_combo.currentTextChanged.connect(self._on_preset_changed)
        graph_form.addRow("Preset:", self.preset_combo)

        self.nodes_spin = QSpinBox()
        self.nodes_spin.setRange(0, 500)
        self.nodes_spin.setValue(PRESETS["idea-network"].graph.node_count)
        graph_form.addRow("Nodes:", self.nodes_spin)

        self.links_spin = QSpinBox()
        self.links_spin.setRange(0, 20)
        self.links_spin.setValue(PRESETS["idea-network"].graph.max_connections)
        graph_form.addRow("Links / node:", self.links_spin)

        self.interactive_check = QCheckBox("Pointer interaction")
        self.interactive_check.setChecked(True)
        graph_form.addRow(self.interactive_check)

        side.addWidget(graph_group)

        # Apply Button
        self.apply_btn = QPushButton("Apply")
        self.apply_btn.setStyleSheet("""
            QPushButton {
                background-color: #000f9f;
                color: white;
                font-size: 16px;
                font-weight: bold;
                padding: 12px;
                border-radius: 8px;
                border: none;
            }
            QPushButton:hover {
                background-color: #1a2bb5;
            }
        """)
        self.apply_btn.clicked.connect(self._apply)
        side.addWidget(self.apply_btn)
        side.addStretch()

        layout.addWidget(panel)

        # Live network, sized against its hero container
        config = get_preset("idea-network")
        hero = QWidget()
        hero.setObjectName(config.container)
        hero_layout = QVBoxLayout(hero)
        hero_layout.setContentsMargins(0, 0, 0, 0)
        self.network = IdeaNetworkWidget(config)
        hero_layout.addWidget(self.network)
        layout.addWidget(hero, stretch=1)

        # Status bar
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage("Ready.")

    def _on_preset_changed(self, name):
        logger.info(f"Preset selected: {name}")
        preset = PRESETS[name]
        self.nodes_spin.setValue(preset.graph.node_count)
        self.links_spin.setValue(preset.graph.max_connections)
        self.interactive_check.setChecked(preset.interactive)

    def _apply(self):
        """Rebuild the network with the panel settings."""
        config = get_preset(self.preset_combo.currentText())
        config.graph.node_count = self.nodes_spin.value()
        config.graph.max_connections = self.links_spin.value()
        config.interactive = self.interactive_check.isChecked()

        try:
            self.network.set_config(config)
        except ValueError as e:
            logger.error(f"Rejected settings: {e}")
            QMessageBox.critical(self, "Error", f"Invalid settings:\n{e}")
            return

        store = self.network.simulation.store
        if store is None:
            self.status_bar.showMessage("Waiting for the view to get a size...")
            return
        metrics = GraphAnalytics.analyze_graph(store)
        logger.info(f"Applied: {metrics.n_nodes} nodes, {metrics.n_edges} links")
        self.status_bar.showMessage(
            f"{metrics.n_nodes} nodes, {metrics.n_edges} links (max degree {metrics.max_degree})"
        )


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%H:%M:%S'
    )

    # Set environment for Qt
    os.environ['QT_AUTO_SCREEN_SCALE_FACTOR'] = '1'

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    # Dark palette
    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor(45, 45, 45))
    palette.setColor(QPalette.ColorRole.WindowText, QColor(255, 255, 255))
    palette.setColor(QPalette.ColorRole.Base, QColor(35, 35, 35))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor(50, 50, 50))
    palette.setColor(QPalette.ColorRole.Text, QColor(255, 255, 255))
    palette.setColor(QPalette.ColorRole.Button, QColor(55, 55, 55))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor(255, 255, 255))
    palette.setColor(QPalette.ColorRole.Highlight, QColor(0, 15, 159))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor(255, 255, 255))
    app.setPalette(palette)

    window = IdeaNetworkWindow()
    window.show()
    window.raise_()
    window.activateWindow()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
