"""
Qt Idea Network Widget
======================
Live PyQt6 surface for the simulation: QPainter drawing, pointer
forwarding, debounced resize and a frame loop tied to visibility.
"""

import logging
import math

from PyQt6.QtCore import QByteArray, QEvent, QPointF, QRectF, Qt, QTimer
from PyQt6.QtGui import QBrush, QColor, QPainter, QPen, QRadialGradient
from PyQt6.QtSvg import QSvgRenderer
from PyQt6.QtWidgets import QWidget

from .assets import GLYPH_SOURCES, glyph_svg
from .renderer import Surface
from .simulation import FrameLoop, Simulation

logger = logging.getLogger(__name__)


def _color(color, alpha):
    c = QColor(color)
    c.setAlphaF(max(0.0, min(1.0, float(alpha))))
    return c


def load_glyphs(color):
    """Parse the embedded SVG glyphs. Invalid ones are left out."""
    glyphs = {}
    for kind in GLYPH_SOURCES:
        renderer = QSvgRenderer(QByteArray(glyph_svg(kind, color).encode('utf-8')))
        if renderer.isValid():
            glyphs[kind] = renderer
        else:
            logger.warning(f"Could not load glyph {kind.name}")
    return glyphs


class QtSurface(Surface):
    """Surface backed by an active QPainter."""

    def __init__(self, painter, glyphs=None, background="#ffffff"):
        self.painter = painter
        self.glyphs = glyphs or {}
        self.background = background

    def clear(self, width, height):
        self.painter.fillRect(QRectF(0, 0, width, height), QColor(self.background))

    def draw_line(self, x1, y1, x2, y2, color, alpha, width, dash=()):
        pen = QPen(_color(color, alpha))
        pen.setWidthF(width)
        if dash:
            pen.setDashPattern([float(d) for d in dash])
        self.painter.setPen(pen)
        self.painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))

    def draw_glow(self, x, y, radius, color, alpha):
        center = QPointF(x, y)
        gradient = QRadialGradient(center, radius)
        gradient.setColorAt(0.0, _color(color, alpha))
        gradient.setColorAt(1.0, _color(color, 0.0))
        self.painter.setPen(Qt.PenStyle.NoPen)
        self.painter.setBrush(QBrush(gradient))
        self.painter.drawEllipse(center, radius, radius)

    def draw_circle(self, x, y, radius, color, alpha):
        self.painter.setPen(Qt.PenStyle.NoPen)
        self.painter.setBrush(_color(color, alpha))
        self.painter.drawEllipse(QPointF(x, y), radius, radius)

    def draw_glyph(self, kind, x, y, half_size, rotation, alpha):
        renderer = self.glyphs.get(kind)
        if renderer is None:
            return False
        p = self.painter
        p.save()
        p.translate(x, y)
        p.rotate(math.degrees(rotation))
        p.setOpacity(alpha)
        renderer.render(p, QRectF(-half_size, -half_size, 2 * half_size, 2 * half_size))
        p.restore()
        return True


class IdeaNetworkWidget(QWidget):
    """Animated idea-network background."""

    def __init__(self, config=None, parent=None, seed=None):
        super().__init__(parent)
        self.setMouseTracking(True)

        self._resize_timer = QTimer(self)
        self._resize_timer.setSingleShot(True)
        self._resize_timer.timeout.connect(self._apply_resize)

        self._idle_timer = QTimer(self)
        self._idle_timer.timeout.connect(self._on_idle)

        self.simulation = None
        self.loop = None
        self._container = None
        self.set_config(config, seed=seed)

    def set_config(self, config, seed=None):
        """Replace the simulation (e.g. when the user switches preset)."""
        simulation = Simulation(config, seed=seed)
        was_running = self.loop is not None and self.loop.running
        self._stop()

        self.simulation = simulation
        cfg = simulation.config
        self.glyphs = load_glyphs(cfg.render.primary_color)
        self.loop = FrameLoop(self.simulation, self._schedule, on_frame=self.update)
        self._idle_timer.setInterval(cfg.activation.idle_interval_ms)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, not cfg.interactive)

        self._apply_resize()
        if was_running or self.isVisible():
            self._start()
        self.update()

    def _schedule(self, callback):
        QTimer.singleShot(self.simulation.config.frame_interval_ms, callback)

    def _start(self):
        self.loop.start()
        if self.simulation.config.activation.enabled:
            self._idle_timer.start()

    def _stop(self):
        if self.loop is not None:
            self.loop.stop()
        self._idle_timer.stop()

    def _bind_container(self):
        """Look up the container widget by objectName and follow its resizes."""
        name = self.simulation.config.container
        found = self.window().findChild(QWidget, name) if name else None
        if found is self:
            found = None
        if found is self._container:
            return
        if self._container is not None:
            self._container.removeEventFilter(self)
        if found is not None:
            found.installEventFilter(self)
        else:
            logger.debug(f"No container named '{name}', sizing against the widget")
        self._container = found

    def container_size(self):
        """Size the graph is built for: the container if found, else the widget."""
        self._bind_container()
        source = self._container if self._container is not None else self
        return source.width(), source.height()

    def _apply_resize(self):
        if self.simulation.resize(*self.container_size()):
            self.update()

    def _on_idle(self):
        self.simulation.trigger_idle()

    # ---- Qt events ----

    def eventFilter(self, obj, event):
        if obj is self._container and event.type() == QEvent.Type.Resize:
            self._resize_timer.start(self.simulation.config.render.resize_debounce_ms)
        return super().eventFilter(obj, event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        background = self.simulation.config.render.background_color
        surface = QtSurface(painter, self.glyphs, background)
        if not self.simulation.render(surface):
            surface.clear(self.width(), self.height())
        painter.end()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._resize_timer.start(self.simulation.config.render.resize_debounce_ms)

    def showEvent(self, event):
        super().showEvent(event)
        if not self.simulation.ready:
            self._apply_resize()
        self._start()

    def hideEvent(self, event):
        super().hideEvent(event)
        self._stop()

    def mouseMoveEvent(self, event):
        pos = event.position()
        self.simulation.pointer_move(pos.x(), pos.y())

    def leaveEvent(self, event):
        super().leaveEvent(event)
        self.simulation.pointer_leave()

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self.simulation.click(pos.x(), pos.y())
