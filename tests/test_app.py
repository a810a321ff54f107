import typing
from typing import List, Optional

from cubesim.app import ARROW_KEYS, CommandResult
from cubesim.keymap import move_for_arrow


def test_command_result_defaults():
    result = CommandResult()
    assert result.error is None
    assert result.add_to_history is None
    hints = typing.get_type_hints(CommandResult)
    assert hints["add_to_history"] == Optional[List[str]]


def test_every_arrow_key_has_a_move():
    assert all(move_for_arrow(name) is not None for name in ARROW_KEYS.values())
