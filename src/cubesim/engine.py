import logging
from typing import Callable, List, Optional

from cubesim.animation import DEFAULT_RATE, AnimationController, AnimationState
from cubesim.lattice import Cubie, CubieLattice
from cubesim.moves import Move, MoveEngine
from cubesim.notation import parse_moves
from cubesim.shuffle import ShuffleSequencer

DEFAULT_SHUFFLE_LENGTH = 20


class CubeEngine:
    """State of one cube, as seen by the view layer"""

    def __init__(
        self,
        rate: float = DEFAULT_RATE,
        rng=None,
        shuffle_length: int = DEFAULT_SHUFFLE_LENGTH,
    ):
        self.lattice = CubieLattice()
        self.move_engine = MoveEngine(self.lattice)
        self.animation = AnimationController(self.move_engine, rate)
        self.shuffler = ShuffleSequencer(self.move_engine, rng)
        self.shuffle_length = shuffle_length
        self.move_count = 0
        self.animation.add_completion_listener(self._count_move)

    @property
    def state(self) -> AnimationState:
        return self.animation.state

    @property
    def is_idle(self) -> bool:
        return self.animation.is_idle

    def start_move(self, axis, layer_index: int, sign: int) -> bool:
        return self.animation.start_move(axis, layer_index, sign)

    def tick(self, delta_seconds: float):
        self.animation.tick(delta_seconds)

    def shuffle(self, count: Optional[int] = None) -> List[Move]:
        if not self.is_idle:
            logging.debug("Ignoring shuffle while a turn is in progress")
            return []
        if count is None:
            count = self.shuffle_length
        self.move_count = 0
        moves = self.shuffler.shuffle(count)
        return moves

    def reset(self) -> bool:
        if not self.is_idle:
            logging.debug("Ignoring reset while a turn is in progress")
            return False
        self.move_count = 0
        self.lattice.reset()
        return True

    def apply_moves(self, moves_str: str) -> List[Move]:
        """Apply moves in notation immediately, without animation"""
        moves = parse_moves(moves_str)
        if not self.is_idle:
            logging.debug(f"Ignoring '{moves_str}' while a turn is in progress")
            return []
        for m in moves:
            # Parsed moves are well formed, so each one commits
            self.move_count += 1
            self.move_engine.apply(m)
        return moves

    def snapshot(self) -> List[Cubie]:
        return self.lattice.all_cubies()

    def is_solved(self) -> bool:
        return self.lattice.is_solved()

    def add_listener(self, callback: Callable):
        self.lattice.add_listener(callback)

    def _count_move(self):
        self.move_count += 1
