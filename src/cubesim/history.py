from typing import List, Optional


class CommandHistory:
    """
    Commands as entered by the user, traversed with the up and down keys.

    The pointer indexes the entry on display. It sits one past the end when
    the input is blank.
    """

    def __init__(self):
        self.commands: List[str] = []
        self.pointer = 0

    def add(self, command: str):
        self.commands.append(command)
        self.pointer = len(self.commands)

    def previous(self) -> Optional[str]:
        if not self.commands:
            return None
        self.pointer = max(0, self.pointer - 1)
        return self.commands[self.pointer]

    def next(self) -> str:
        self.pointer = min(self.pointer + 1, len(self.commands))
        if self.pointer < len(self.commands):
            return self.commands[self.pointer]
        return ""
