import logging
import math
from dataclasses import dataclass, replace
from typing import Callable, List, Union

from pyquaternion import Quaternion

from cubesim.lattice import Cubie
from cubesim.moves import MoveEngine
from cubesim.rotation import Axis

# A quarter turn, in radians
QUARTER = math.pi / 2

# Angular speed of an animated turn, radians per second
DEFAULT_RATE = 5.0


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Engaged:
    """A layer turn in flight. The renderer interpolates from these fields"""

    axis: Axis
    layer_index: int
    sign: int
    progress: float = 0.0

    def rotation(self) -> Quaternion:
        a = Axis.parse(self.axis)
        if a is None:
            return Quaternion()
        return Quaternion(axis=a.vector, angle=self.sign * self.progress)

    def involves(self, cubie: Cubie) -> bool:
        a = Axis.parse(self.axis)
        return a is not None and round(cubie.position[a.value]) == self.layer_index

    def is_complete(self) -> bool:
        return self.progress >= QUARTER


AnimationState = Union[Idle, Engaged]


class AnimationController:
    """
    Sequences grab, interpolate, commit and release for one layer turn at a time.

    Driven by tick() once per rendered frame. Moves requested while a turn is
    in flight are dropped, not queued.
    """

    def __init__(self, move_engine: MoveEngine, rate: float = DEFAULT_RATE):
        if rate <= 0:
            raise ValueError(f"Animation rate must be positive, got {rate}")
        self.move_engine = move_engine
        self.rate = rate
        self.state: AnimationState = Idle()
        self._completion_listeners: List[Callable] = []

    @property
    def is_idle(self) -> bool:
        return isinstance(self.state, Idle)

    def start_move(self, axis, layer_index: int, sign: int) -> bool:
        if not self.is_idle:
            logging.debug(f"Rejected move {axis}={layer_index} ({sign}): turn in progress")
            return False
        self.state = Engaged(axis, layer_index, sign, 0.0)
        return True

    def tick(self, delta_seconds: float):
        if delta_seconds < 0:
            raise ValueError(f"Ticks must move forward in time, got {delta_seconds}")
        state = self.state
        if not isinstance(state, Engaged):
            return
        if state.is_complete():
            self.state = Idle()
            if self.move_engine.apply_move(state.axis, state.layer_index, state.sign):
                self.notify_completion_listeners()
            return
        progress = min(state.progress + self.rate * delta_seconds, QUARTER)
        self.state = replace(state, progress=progress)

    def add_completion_listener(self, callback: Callable):
        self._completion_listeners.append(callback)

    def notify_completion_listeners(self):
        for listener in self._completion_listeners:
            listener()
