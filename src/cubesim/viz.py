import math
import time

import numpy as np
from PyQt5.QtCore import QTimer, Qt, QPointF
from PyQt5.QtWidgets import QWidget
from PyQt5.QtGui import QPainter, QColor, QPen, QBrush, QPolygonF
from pyquaternion import Quaternion

from cubesim import catch_errors
from cubesim.animation import Engaged
from cubesim.engine import CubeEngine
from cubesim.keymap import BACK, FRONT, LEFT, RIGHT, quadrant_for
from cubesim.palette import Face, Palette
from cubesim.prefs import preferences

# Corners of a unit face with the given outward normal, before scaling.
# Listed counter-clockwise when seen from outside
FACE_VERTICES = {
    Face.RIGHT: [(1, -1, -1), (1, 1, -1), (1, 1, 1), (1, -1, 1)],
    Face.LEFT: [(-1, -1, -1), (-1, -1, 1), (-1, 1, 1), (-1, 1, -1)],
    Face.UP: [(-1, 1, -1), (-1, 1, 1), (1, 1, 1), (1, 1, -1)],
    Face.DOWN: [(-1, -1, -1), (1, -1, -1), (1, -1, 1), (-1, -1, 1)],
    Face.FRONT: [(-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1)],
    Face.BACK: [(-1, -1, -1), (-1, 1, -1), (1, 1, -1), (1, -1, -1)],
}

# Distance from camera to the center of the cube
CAMERA_DISTANCE = 12.0

MAX_ELEVATION = math.pi / 2 - 0.1

# Side of the cube outlined for each camera quadrant
HIGHLIGHT_FACES = {FRONT: Face.FRONT, RIGHT: Face.RIGHT, BACK: Face.BACK, LEFT: Face.LEFT}

# Half the edge of the outline, just outside the cube
HIGHLIGHT_HALF_SIZE = 1.55

HIGHLIGHT_FILL = (250, 204, 21, 38)
HIGHLIGHT_EDGE = (254, 240, 138, 153)


class CubeViz:
    """Cube visualization logic"""

    def __init__(self, engine: CubeEngine):
        self.engine = engine
        # Camera orbit, measured from +z towards +x, and above the horizon
        self.azimuth = math.pi / 6
        self.elevation = math.pi / 7
        self.palette = Palette.from_preferences(preferences)
        preferences.add_listener(self.refresh)

    def refresh(self):
        self.palette = Palette.from_preferences(preferences)

    def view_rotation(self) -> Quaternion:
        # Brings the camera onto the +z axis
        return Quaternion(axis=[1, 0, 0], angle=self.elevation) * Quaternion(
            axis=[0, 1, 0], angle=-self.azimuth
        )

    def faces(self):
        """(depth, screen-space vertices, color) for every face turned towards the camera"""
        view = self.view_rotation()
        camera = np.array([0.0, 0.0, CAMERA_DISTANCE])
        half = preferences.sticker_size / 2
        state = self.engine.state
        turning = state if isinstance(state, Engaged) else None
        turn = turning.rotation() if turning else Quaternion()

        polygons = []
        for cubie in self.engine.snapshot():
            q = view
            if turning and turning.involves(cubie):
                q = view * turn
            center = np.array(cubie.position, dtype=float)
            for face, vertices in FACE_VERTICES.items():
                normal = q.rotate(cubie.orientation.rotate(np.array(face.normal, dtype=float)))
                points = [
                    q.rotate(center + cubie.orientation.rotate(np.array(v, dtype=float) * half))
                    for v in vertices
                ]
                face_center = np.mean(points, axis=0)
                if np.dot(normal, camera - face_center) <= 0:
                    continue
                depth = np.linalg.norm(camera - face_center)
                color = self.palette.color_of(cubie.home_face, face)
                polygons.append((depth, points, color))
        polygons.sort(key=lambda p: -p[0])
        return polygons

    def highlight(self):
        """Camera-space outline of the side that the column keys act on"""
        face = HIGHLIGHT_FACES[quadrant_for(self.azimuth)]
        view = self.view_rotation()
        return [
            view.rotate(np.array(v, dtype=float) * HIGHLIGHT_HALF_SIZE)
            for v in FACE_VERTICES[face]
        ]

    def project(self, v, w, h):
        scale_factor = min(w, h) * CAMERA_DISTANCE / 7
        d = CAMERA_DISTANCE - v[2]
        return QPointF(w / 2 + scale_factor * v[0] / d, h / 2 - scale_factor * v[1] / d)

    def draw(self, painter, w, h):
        bg = preferences.background_color
        painter.fillRect(0, 0, w, h, QColor(bg, bg, bg))
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setPen(QPen(QColor(0, 0, 0), 1))
        for _, points, color in self.faces():
            painter.setBrush(QBrush(QColor(*color)))
            painter.drawPolygon(QPolygonF([self.project(p, w, h) for p in points]))
        painter.setPen(QPen(QColor(*HIGHLIGHT_EDGE), 2))
        painter.setBrush(QBrush(QColor(*HIGHLIGHT_FILL)))
        painter.drawPolygon(QPolygonF([self.project(p, w, h) for p in self.highlight()]))

    def rotate(self, dx, dy=0):
        self.azimuth = (self.azimuth - dx * 0.01) % (2 * math.pi)
        self.elevation = max(-MAX_ELEVATION, min(MAX_ELEVATION, self.elevation + dy * 0.01))


class CubeWidget(QWidget):
    """Widget that uses CubeViz for rendering and drives the animation clock"""

    def __init__(self, viz: CubeViz, parent=None):
        super(CubeWidget, self).__init__(parent)

        self.viz = viz
        self.viz.engine.add_listener(self.refresh)
        self.setMinimumSize(preferences.cube_size, preferences.cube_size)
        self.setFocusPolicy(Qt.StrongFocus)

        # Timer for update loop
        self.last_tick = time.monotonic()
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.update_surface)
        self.timer.start(16)  # ~60 FPS

        # Mouse tracking
        self.setMouseTracking(True)
        self.last_mouse_pos = None
        self.dragging = False

    def refresh(self):
        # Repaint
        self.update()

    @catch_errors
    def update_surface(self):
        now = time.monotonic()
        self.viz.engine.tick(now - self.last_tick)
        self.last_tick = now
        self.update()

    @catch_errors
    def paintEvent(self, event):
        painter = QPainter(self)
        self.viz.draw(painter, self.width(), self.height())

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.dragging = True
            self.last_mouse_pos = event.pos()

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.dragging = False

    def mouseMoveEvent(self, event):
        if self.dragging and self.last_mouse_pos:
            dx = event.x() - self.last_mouse_pos.x()
            dy = event.y() - self.last_mouse_pos.y()
            self.viz.rotate(dx, dy)
            self.last_mouse_pos = event.pos()
