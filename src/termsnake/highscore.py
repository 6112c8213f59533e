"""
Best-effort persistence for the single high-score integer.

Nothing here raises: a missing, unreadable or garbled file reads as 0 and a
failed write is logged and dropped, so persistence never interrupts a game.
"""

import logging
import os

logger = logging.getLogger(__name__)


class HighScoreFile:
    """High score stored as plain text in one file."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read().strip()
        except OSError as e:
            logger.warning("Could not read high score from %s: %s", self.path, e)
            return 0

        try:
            return int(text)
        except ValueError:
            logger.warning("Ignoring malformed high score file %s: %r", self.path, text[:32])
            return 0

    def save(self, value: int) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(str(int(value)))
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)
            return
        logger.info("High score %d saved to %s", value, self.path)

    def __repr__(self):
        return f"<HighScoreFile {self.path!r}>"
