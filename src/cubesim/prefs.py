import json
import logging
import os
import sys
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import List, Tuple

from PyQt5.QtWidgets import (
    QDialog,
    QWidget,
    QPushButton,
    QVBoxLayout,
    QHBoxLayout,
    QGroupBox,
    QDialogButtonBox,
    QSlider,
    QColorDialog,
)
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor

from cubesim.palette import Face

# Factory-default sticker colors, in Face order: R, L, U, D, F, B
_DEFAULT_COLORS = [
    (231, 76, 60),
    (230, 126, 34),
    (236, 240, 241),
    (241, 196, 15),
    (46, 204, 113),
    (52, 152, 219),
]

_DEFAULT_CORE_COLOR = (44, 62, 80)


@dataclass
class Preferences:
    """Top-level preferences object"""

    animation_speed: float = 5.0
    shuffle_length: int = 20
    background_color: int = 17
    sticker_size: float = 0.95
    cube_size: int = 500
    colors: List[Tuple] = field(default_factory=lambda: list(_DEFAULT_COLORS))
    core_color: Tuple = _DEFAULT_CORE_COLOR
    listeners: List = field(default_factory=list)

    def save(self):
        prefs_path = Preferences.get_preferences_path()

        prefs = {
            "animation_speed": self.animation_speed,
            "shuffle_length": self.shuffle_length,
            "background": self.background_color,
            "sticker_size": self.sticker_size,
            "cube_size": self.cube_size,
            "colors": self.colors,
            "core_color": self.core_color,
        }

        try:
            with open(prefs_path, "w") as f:
                json.dump(prefs, f)
        except Exception as e:
            logging.error(f"Error saving preferences: {e}")

    def add_listener(self, callback):
        self.listeners.append(callback)

    def notify(self):
        for listener in self.listeners:
            listener()

    @staticmethod
    def load() -> "Preferences":
        prefs_path = Preferences.get_preferences_path()

        if prefs_path.exists():
            try:
                with open(prefs_path, "r") as f:
                    prefs = json.load(f)
                    colors = [tuple(c) for c in prefs.get("colors", [])]
                    if len(colors) != len(_DEFAULT_COLORS):
                        colors = list(_DEFAULT_COLORS)
                    speed = float(prefs.get("animation_speed", 5.0))
                    if speed <= 0:
                        speed = 5.0
                    return Preferences(
                        animation_speed=speed,
                        shuffle_length=max(0, int(prefs.get("shuffle_length", 20))),
                        background_color=prefs.get("background", 17),
                        sticker_size=prefs.get("sticker_size", 0.95),
                        cube_size=prefs.get("cube_size", 500),
                        colors=colors,
                        core_color=tuple(prefs.get("core_color", _DEFAULT_CORE_COLOR)),
                    )
            except Exception as e:
                logging.error(f"Error loading preferences: {e}")
                return Preferences()
        else:
            return Preferences()

    @staticmethod
    def get_preferences_path() -> Path:
        return app_dir() / "preferences.json"


class PreferencesDialog(QDialog):
    """Dialog for modifying preferences"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Preferences")
        self.setWindowModality(Qt.NonModal)
        self.setMinimumWidth(300)

        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addWidget(self.cube_widget)
        layout.addWidget(self.motion_widget)

        def close():
            preferences.save()
            self.hide()

        button_box = QDialogButtonBox(QDialogButtonBox.Save)
        button_box.accepted.connect(close)
        layout.addWidget(button_box)

    def slider(self, name, minimum, maximum, value, on_change) -> QWidget:
        group = QGroupBox(name)
        layout = QHBoxLayout()
        group.setLayout(layout)
        slider = QSlider(Qt.Horizontal)
        layout.addWidget(slider)
        layout.addStretch(1)
        slider.setMinimum(minimum)
        slider.setMaximum(maximum)
        slider.setValue(int(value))

        def update():
            on_change(slider.value())
            preferences.notify()

        slider.valueChanged.connect(update)
        return group

    @cached_property
    def cube_widget(self) -> QWidget:
        group = QGroupBox("Cube")
        layout = QHBoxLayout()
        group.setLayout(layout)
        layout.addWidget(self.cube_colors_widget)
        layout.addWidget(
            self.slider(
                "Size",
                150,
                800,
                preferences.cube_size,
                lambda v: setattr(preferences, "cube_size", v),
            )
        )
        layout.addWidget(
            self.slider(
                "Background Color",
                0,
                255,
                preferences.background_color,
                lambda v: setattr(preferences, "background_color", v),
            )
        )
        layout.addWidget(
            self.slider(
                "Sticker Size",
                80,
                100,
                preferences.sticker_size * 100,
                lambda v: setattr(preferences, "sticker_size", v / 100),
            )
        )
        return group

    @cached_property
    def motion_widget(self) -> QWidget:
        group = QGroupBox("Moves")
        layout = QHBoxLayout()
        group.setLayout(layout)
        layout.addWidget(
            self.slider(
                "Turn Speed",
                1,
                20,
                preferences.animation_speed,
                lambda v: setattr(preferences, "animation_speed", float(v)),
            )
        )
        layout.addWidget(
            self.slider(
                "Shuffle Length",
                1,
                100,
                preferences.shuffle_length,
                lambda v: setattr(preferences, "shuffle_length", v),
            )
        )
        return group

    @cached_property
    def cube_colors_widget(self) -> QWidget:
        group = QGroupBox("Colors")
        layout = QHBoxLayout()
        group.setLayout(layout)

        # One column per axis, positive face on top
        col = [QVBoxLayout(), QVBoxLayout(), QVBoxLayout()]
        for c in col:
            layout.addLayout(c)

        self._color_buttons = []
        for face in Face:
            swatch = QWidget()
            swatch.setFixedSize(30, 30)
            swatch.setCursor(Qt.PointingHandCursor)
            swatch.setToolTip(face.name.capitalize())
            swatch.mousePressEvent = lambda event, f=face: self._pick_color(f)
            self._color_buttons.append(swatch)
            col[face.axis_index].addWidget(swatch)
            self._paint_swatch(face)

        def reset():
            preferences.colors = list(_DEFAULT_COLORS)
            for face in Face:
                self._paint_swatch(face)
            preferences.notify()

        reset_button = QPushButton("Reset")
        layout.addWidget(reset_button)
        reset_button.clicked.connect(reset)
        layout.addStretch(1)

        return group

    def _paint_swatch(self, face: Face):
        r, g, b = preferences.colors[face.value][:3]
        self._color_buttons[face.value].setStyleSheet(
            f"background-color: rgb({r}, {g}, {b}); border: 1px solid black;"
        )

    def _pick_color(self, face: Face):
        """Non-modal color picker for the stickers of one face"""
        r, g, b = preferences.colors[face.value][:3]
        self._color_picker = QColorDialog(self)
        self._color_picker.setCurrentColor(QColor(r, g, b))
        self._color_picker.setWindowTitle(f"{face.name.capitalize()} Color")

        def on_color_selected(color):
            if not color.isValid():
                return
            preferences.colors[face.value] = (color.red(), color.green(), color.blue())
            self._paint_swatch(face)
            preferences.notify()

        self._color_picker.colorSelected.connect(on_color_selected)
        self._color_picker.finished.connect(lambda: self.activateWindow())
        self._color_picker.setModal(False)
        self._color_picker.show()


_dialog = None


def show_dialog(parent):
    """Show preferences dialog"""
    global _dialog
    if _dialog is None or not _dialog.isVisible():
        _dialog = PreferencesDialog(parent)
    _dialog.show()
    _dialog.raise_()
    _dialog.activateWindow()


def app_dir() -> Path:
    """Return platform-appropriate application home directory"""
    if sys.platform == "darwin":  # macOS
        path = Path.home() / "Library" / "Preferences" / "cubesim"
    elif sys.platform == "win32":  # Windows
        path = Path(os.environ.get("APPDATA", str(Path.home()))) / "cubesim"
    else:  # Linux/Unix
        config_home = os.environ.get("XDG_CONFIG_HOME")
        base = Path(config_home) if config_home else Path.home() / ".config"
        path = base / "cubesim"
    path.mkdir(parents=True, exist_ok=True)
    return path


# Preferences as saved by the user
preferences = Preferences.load()
