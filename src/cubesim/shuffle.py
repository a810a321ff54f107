import logging
import random
from typing import List

from cubesim.moves import Move, MoveEngine
from cubesim.rotation import Axis, LAYERS, SIGNS


class ShuffleSequencer:
    """Random quarter turns applied instantly, without animation"""

    def __init__(self, move_engine: MoveEngine, rng=None):
        self.move_engine = move_engine
        self.rng = rng if rng is not None else random.Random()

    def shuffle(self, n: int) -> List[Move]:
        if n < 0:
            raise ValueError(f"Shuffle length must not be negative, got {n}")
        moves = []
        for _ in range(n):
            m = Move(
                axis=self.rng.choice(list(Axis)),
                layer_index=self.rng.choice(LAYERS),
                sign=self.rng.choice(SIGNS),
            )
            self.move_engine.apply(m)
            moves.append(m)
        logging.debug(f"Shuffled with {n} moves")
        return moves
