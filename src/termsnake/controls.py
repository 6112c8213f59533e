# controls.py
from typing import List, Optional, Union
import curses

from .game import Command
from .geometry import Direction


ESCAPE = 27

KEYMAP = {
    curses.KEY_UP: Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
    ord("1"): Command.SELECT_NORMAL,
    ord("2"): Command.SELECT_EXTREME,
    ord("\n"): Command.CONFIRM,
    ord("\r"): Command.CONFIRM,
    curses.KEY_ENTER: Command.CONFIRM,
    ord(" "): Command.CONFIRM,
    ESCAPE: Command.QUIT,
}
for _ch, _action in (("w", Direction.UP), ("s", Direction.DOWN),
                     ("a", Direction.LEFT), ("d", Direction.RIGHT),
                     ("r", Command.RESTART), ("q", Command.QUIT)):
    KEYMAP[ord(_ch)] = _action
    KEYMAP[ord(_ch.upper())] = _action

Action = Union[Direction, Command]


def translate_key(code: int) -> Optional[Action]:
    """Map a curses key code to a heading or a command; unknown keys map to None."""
    return KEYMAP.get(code)


def drain_keys(window) -> List[int]:
    """Read every pending key without blocking (window must be in nodelay mode)."""
    keys = []
    while True:
        code = window.getch()
        if code == -1:
            return keys
        keys.append(code)
