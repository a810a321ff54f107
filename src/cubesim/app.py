import dataclasses
import logging
import os
import re
import sys
import traceback
from functools import cached_property
from typing import List, Optional

from PyQt5.QtWidgets import (
    QAction,
    QApplication,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from PyQt5.QtCore import Qt, QEvent
from PyQt5.QtGui import QKeySequence

from cubesim import catch_and_return, catch_errors, prefs
from cubesim.engine import CubeEngine
from cubesim.history import CommandHistory
from cubesim.keymap import move_for_arrow, move_for_key, quadrant_for
from cubesim.notation import parse_moves
from cubesim.prefs import preferences
from cubesim.viz import CubeViz, CubeWidget

# Rows of the manual control panel
BUTTON_ROWS = [
    ("X-Axis (Right/Left)", ["L", "M", "R"]),
    ("Y-Axis (Up/Down)", ["U", "E", "D"]),
    ("Z-Axis (Front/Back)", ["F", "S", "B"]),
]

# Commands that can be typed into the command input
COMMANDS = {"help", "shuffle", "reset"}

ARROW_KEYS = {
    Qt.Key_Up: "up",
    Qt.Key_Down: "down",
    Qt.Key_Left: "left",
    Qt.Key_Right: "right",
}

HELP_TEXT = """
Q W E: turn the left, middle or right column of the facing side upwards
A S D: turn the top, middle or bottom row to the right
Shift + key: turn the other way
Arrows: turn the right layer up or down, or the top layer left or right
R: shuffle

Drag the cube to look around it.

Commands: shuffle, shuffle(n), reset, help, or moves such as R U R' U'
Up and down recall earlier commands
"""


class AppWindow(QMainWindow):
    """Main window of the cube simulator"""

    def __init__(self):
        super(AppWindow, self).__init__()

        self.setWindowTitle("Cube Simulator")
        self.resize(1000, 800)

        self.engine = CubeEngine(
            rate=preferences.animation_speed,
            shuffle_length=preferences.shuffle_length,
        )
        self.engine.add_listener(self.refresh_status)
        self.engine.animation.add_completion_listener(self.refresh_status)
        preferences.add_listener(self.apply_preferences)

        self.commands = Commands(self)

        self._create_menus()

        central_widget = self._empty_container(QVBoxLayout())
        central_widget.layout().setContentsMargins(10, 10, 10, 10)
        self.setCentralWidget(central_widget)
        w = self._empty_container(QHBoxLayout())
        w.layout().addWidget(self.cube_widget, 1)
        w.layout().addWidget(self.controls_widget)
        central_widget.layout().addWidget(w, 1)
        central_widget.layout().addWidget(self.command_input)
        central_widget.layout().addWidget(self.status_widget)

        self.cube_widget.installEventFilter(self)
        self.command_input.installEventFilter(self)
        self.cube_widget.setFocus()
        self.refresh_status()

    @cached_property
    def cube_widget(self) -> CubeWidget:
        self.viz = CubeViz(self.engine)
        return CubeWidget(self.viz)

    @cached_property
    def controls_widget(self) -> QWidget:
        w = self._empty_container(QVBoxLayout())

        shuffle_button = QPushButton("Shuffle")
        shuffle_button.clicked.connect(lambda: self.commands.execute("shuffle"))
        reset_button = QPushButton("Reset")
        reset_button.clicked.connect(lambda: self.commands.execute("reset"))
        top = self._empty_container(QHBoxLayout())
        top.layout().addWidget(shuffle_button)
        top.layout().addWidget(reset_button)
        w.layout().addWidget(top)

        for title, names in BUTTON_ROWS:
            group = QWidget()
            grid = QGridLayout()
            group.setLayout(grid)
            label = QLabel(title)
            label.setAlignment(Qt.AlignCenter)
            grid.addWidget(label, 0, 0, 1, 3)
            for col, name in enumerate(names):
                for row, suffix in enumerate(["", "'"]):
                    button = QPushButton(f"{name}{suffix}")
                    button.setFocusPolicy(Qt.NoFocus)
                    button.clicked.connect(
                        lambda _, n=f"{name}{suffix}": self.start_named_move(n)
                    )
                    grid.addWidget(button, row + 1, col)
            w.layout().addWidget(group)
        w.layout().addStretch(1)
        return w

    @cached_property
    def command_input(self) -> QLineEdit:
        w = QLineEdit()
        w.setPlaceholderText("Enter moves or a command")

        def run():
            self.commands.execute(w.text().strip())
            w.clear()
            self.cube_widget.setFocus()

        w.returnPressed.connect(run)
        return w

    @cached_property
    def status_widget(self) -> QLabel:
        w = QLabel("")
        w.setMinimumHeight(30)
        return w

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")
        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        edit_menu = self.menuBar().addMenu("Edit")
        prefs_action = QAction("Preferences...", self)
        prefs_action.triggered.connect(lambda: prefs.show_dialog(self))
        edit_menu.addAction(prefs_action)

        help_menu = self.menuBar().addMenu("Help")
        help_action = QAction("Controls", self)
        help_action.triggered.connect(self.show_help)
        help_menu.addAction(help_action)

    def _empty_container(self, layout) -> QWidget:
        w = QWidget()
        w.setLayout(layout)
        return w

    def set_status(self, s: str):
        self.status_widget.setText(s)

    def refresh_status(self):
        if self.engine.is_solved():
            self.set_status("Solved")
        else:
            self.set_status(f"Moves: {self.engine.move_count}")

    def apply_preferences(self):
        if preferences.animation_speed > 0:
            self.engine.animation.rate = preferences.animation_speed
        self.engine.shuffle_length = preferences.shuffle_length

    def start_named_move(self, name: str):
        for m in parse_moves(name):
            self.engine.start_move(m.axis, m.layer_index, m.sign)

    @catch_and_return(False)
    def eventFilter(self, obj, event):
        if event.type() != QEvent.KeyPress:
            return False
        if obj is self.cube_widget:
            return self.handle_key(event)
        if obj is self.command_input:
            return self.recall_command(event.key())
        return False

    def recall_command(self, key) -> bool:
        if key == Qt.Key_Up:
            previous_command = self.commands.history.previous()
            if previous_command is not None:
                self.command_input.setText(previous_command)
            return True
        if key == Qt.Key_Down:
            self.command_input.setText(self.commands.history.next())
            return True
        return False

    def handle_key(self, event) -> bool:
        if event.key() in ARROW_KEYS:
            move = move_for_arrow(ARROW_KEYS[event.key()])
            self.engine.start_move(move.axis, move.layer_index, move.sign)
            return True
        key = event.text().lower()
        if key == "r":
            self.commands.execute("shuffle")
            return True
        move = move_for_key(
            key,
            bool(event.modifiers() & Qt.ShiftModifier),
            quadrant_for(self.viz.azimuth),
        )
        if move is None:
            return False
        self.engine.start_move(move.axis, move.layer_index, move.sign)
        return True

    @catch_errors
    def show_help(self):
        help_dialog = QMessageBox(self)
        help_dialog.setWindowTitle("Controls")
        help_dialog.setText(HELP_TEXT)
        help_dialog.setStandardButtons(QMessageBox.Ok)
        help_dialog.show()


class Commands:
    def __init__(self, window: AppWindow):
        self.window = window
        self.engine = window.engine
        self.history = CommandHistory()

    def execute(self, raw_command):
        """Execute a command from the command input"""
        cmd = raw_command
        if not cmd:
            return

        try:
            self.window.set_status("")
            m = re.fullmatch(r"(\w+)(?:\((\d*)\))?", cmd)
            if m and m.group(1) in COMMANDS:
                args = [int(m.group(2))] if m.group(2) else []
                result = getattr(self, m.group(1))(*args)
                if result is None:
                    result = CommandResult(add_to_history=[raw_command])
                if result.error is not None:
                    self.window.set_status(f"Error: {result.error}")
                elif result.add_to_history:
                    for c in result.add_to_history:
                        self.history.add(c)
            else:
                try:
                    moves = self.engine.apply_moves(raw_command)
                except ValueError:
                    self.window.set_status(f"No such command: {raw_command}")
                    return
                if moves:
                    self.history.add(raw_command)
                self.window.refresh_status()
        except Exception as e:
            logging.error(traceback.format_exc())
            self.window.set_status(f"Error: {e}")

    def help(self):
        self.window.show_help()
        return CommandResult(add_to_history=[])

    def shuffle(self, count: Optional[int] = None):
        if not self.engine.is_idle:
            return CommandResult(error="Wait for the current turn to finish")
        moves = self.engine.shuffle(count)
        logging.info(f"Shuffled cube with {len(moves)} moves")

    def reset(self):
        if not self.engine.reset():
            return CommandResult(error="Wait for the current turn to finish")
        logging.info("Reset cube")


@dataclasses.dataclass
class CommandResult:
    error: Optional[str] = None
    add_to_history: Optional[List[str]] = None


def main():
    app = QApplication(sys.argv)
    app.setApplicationName("Cube Simulator")
    window = AppWindow()
    window.show()
    sys.exit(app.exec_())


def run():
    # Configure logging
    logfile = prefs.app_dir() / "cubesim.log"
    logging.basicConfig(
        filename=logfile,
        filemode="w",
        level=logging.DEBUG,
        format="%(levelname)s - %(message)s",
    )

    if getattr(sys, "frozen", False):  # Running from a PyInstaller bundle
        bundle_dir = os.path.dirname(sys.executable)
        if os.path.basename(bundle_dir) == "MacOS":
            logging.debug(f"Running bundle from {bundle_dir}")
            os.chdir(os.path.dirname(os.path.dirname(bundle_dir)))
    main()


if __name__ == "__main__":
    run()
