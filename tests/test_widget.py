"""
Qt Widget Tests
===============
Container lookup on an offscreen Qt platform.
"""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from ideagraph.config import SimulationConfig  # noqa: E402
from ideagraph.widget import IdeaNetworkWidget  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


def _window_with_container(name):
    window = QtWidgets.QWidget()
    window.resize(800, 600)
    container = QtWidgets.QWidget(window)
    container.setObjectName(name)
    container.resize(420, 260)
    return window, container


def test_sizes_against_named_container(qapp):
    window, container = _window_with_container("hero-section")
    widget = IdeaNetworkWidget(SimulationConfig(), parent=window, seed=1)
    widget.resize(100, 80)

    assert widget.container_size() == (420, 260)
    widget._apply_resize()
    assert (widget.simulation.store.width, widget.simulation.store.height) == (420.0, 260.0)


def test_falls_back_to_own_size(qapp):
    window, _ = _window_with_container("sidebar")
    widget = IdeaNetworkWidget(SimulationConfig(), parent=window, seed=1)
    widget.resize(300, 200)

    assert widget.container_size() == (300, 200)


def test_container_resize_is_followed(qapp):
    from PyQt6.QtCore import QSize
    from PyQt6.QtGui import QResizeEvent

    window, container = _window_with_container("hero-section")
    widget = IdeaNetworkWidget(SimulationConfig(), parent=window, seed=1)

    container.resize(500, 400)
    QtWidgets.QApplication.sendEvent(container, QResizeEvent(QSize(500, 400), QSize(420, 260)))
    assert widget._resize_timer.isActive()

    widget._apply_resize()
    assert widget.simulation.store.width == 500.0
    assert widget.simulation.store.height == 400.0
