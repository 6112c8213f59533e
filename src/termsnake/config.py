from dataclasses import dataclass
from enum import Enum
from typing import Optional
import random

# ----- Playfield (interior cells; a one-cell wall border surrounds it) -----
PLAYFIELD_W, PLAYFIELD_H = 30, 18
INITIAL_LENGTH = 4

# ----- Timing (ms) -----
FRAME_MS = 16
NEW_RECORD_BLINK_MS = 3000.0
NEW_RECORD_BLINK_PERIOD_MS = 500.0
ITEM_FLASH_MS = 1500.0
ITEM_FLASH_PERIOD_MS = 200.0
ESCAPE_DELAY_MS = 25  # curses waits this long to tell a bare Esc from an escape sequence

HIGHSCORE_FILE = "highscore.txt"


class Difficulty(Enum):
    NORMAL = 1
    EXTREME = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


# ----- Tunables (what you'd tweak for difficulty) -----
@dataclass
class Config:
    seed: Optional[int] = None
    width: int = PLAYFIELD_W
    height: int = PLAYFIELD_H
    initial_length: int = INITIAL_LENGTH
    base_move_ms: float = 180.0
    min_move_ms: float = 60.0
    move_step_ms: float = 12.0
    foods_per_level: int = 5
    normal_multiplier: float = 1.0
    extreme_multiplier: float = 0.8
    frame_ms: int = FRAME_MS
    highscore_path: str = HIGHSCORE_FILE
    spawn_attempts: Optional[int] = None  # None -> 4x the interior area

    def multiplier(self, difficulty: Difficulty) -> float:
        if difficulty is Difficulty.EXTREME:
            return self.extreme_multiplier
        return self.normal_multiplier

    @property
    def max_spawn_attempts(self) -> int:
        if self.spawn_attempts is not None:
            return self.spawn_attempts
        return 4 * self.width * self.height

    @property
    def min_side(self) -> int:
        """Smallest width or height that fits the starting snake facing any way."""
        return 2 * self.initial_length


CFG = Config()


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Random source handed to the session; seed it to make spawns reproducible."""
    return random.Random(seed)
