# render.py
"""
Terminal presentation.

`build_frame` is a pure function from a Session to styled text lines, so it can
be tested without a terminal; `draw_frame` pushes those lines through curses.
Blinking (new-record banner, freshly spawned items) is derived from timestamps
at render time and never written back into the session.
"""
from typing import List, NamedTuple, Optional, Tuple
import curses
import logging

from .config import (
    Config, Difficulty,
    ITEM_FLASH_MS, ITEM_FLASH_PERIOD_MS,
    NEW_RECORD_BLINK_MS, NEW_RECORD_BLINK_PERIOD_MS,
)
from .game import GameState, Session
from .items import ItemType

logger = logging.getLogger(__name__)

# ----- Glyphs -----
TOP_LEFT, TOP_RIGHT = "╔", "╗"
BOTTOM_LEFT, BOTTOM_RIGHT = "╚", "╝"
HORIZONTAL, VERTICAL = "═", "║"
HEAD, BODY, TAIL = "●", "○", "·"

ITEM_GLYPHS = {
    ItemType.NORMAL: "A",
    ItemType.RARE: "G",
    ItemType.POISON: "X",
}
# Extreme mode draws every cell two columns wide so these fit the grid.
ITEM_EMOJI = {
    ItemType.NORMAL: "\U0001f34e",   # apple
    ItemType.RARE: "\U0001f347",     # grapes
    ItemType.POISON: "\U0001f4a3",   # bomb
}

MESSAGE_LINES = 4


class Span(NamedTuple):
    text: str
    role: str = "text"
    width: int = 0     # terminal columns the text occupies


def span(text: str, role: str = "text", width: Optional[int] = None) -> Span:
    return Span(text, role, len(text) if width is None else width)


class Blink(NamedTuple):
    active: bool
    on: bool


def blink(elapsed_ms: float, duration_ms: float, interval_ms: float) -> Blink:
    """Blink phase `elapsed_ms` after a trigger: on/off every `interval_ms`, for `duration_ms`."""
    if elapsed_ms < 0 or elapsed_ms > duration_ms:
        return Blink(False, False)
    return Blink(True, int(elapsed_ms // interval_ms) % 2 == 0)


def record_blink(session: Session, now_ms: float) -> Blink:
    if not session.new_record or session.record_at_ms is None:
        return Blink(False, False)
    return blink(now_ms - session.record_at_ms, NEW_RECORD_BLINK_MS, NEW_RECORD_BLINK_PERIOD_MS)


def item_visible(session: Session, now_ms: float) -> bool:
    item = session.item
    if item is None or session.state is GameState.GAME_OVER:
        return False
    flash = blink(now_ms - item.spawned_ms, ITEM_FLASH_MS, ITEM_FLASH_PERIOD_MS)
    return not flash.active or flash.on


# ---------- Frame building ----------
def scoreboard(session: Session, now_ms: float) -> List[Span]:
    high = f"High: {session.high_score:4d}  "
    record = record_blink(session, now_ms)
    if record.active and not record.on:
        high = " " * len(high)
    return [
        span(f"Score: {session.score:4d}  "),
        span(high, "high"),
        span(f"Level: {session.level:2d}  Length: {len(session.snake):3d}"),
    ]


def _cell(session: Session, x: int, y: int, wide: bool, show_item: bool) -> Span:
    cfg = session.cfg
    last_x, last_y = cfg.width + 1, cfg.height + 1
    pad = " " if wide else ""
    cols = 2 if wide else 1

    if y == 0 or y == last_y:
        if x == 0:
            return span((TOP_LEFT if y == 0 else BOTTOM_LEFT) + pad, "border")
        if x == last_x:
            return span((TOP_RIGHT if y == 0 else BOTTOM_RIGHT) + pad, "border")
        return span(HORIZONTAL * cols, "border")
    if x == 0 or x == last_x:
        return span(VERTICAL + pad, "border")

    item = session.item
    if show_item and item.position == (x, y):
        role = item.type.value
        if wide:
            return span(ITEM_EMOJI[item.type], role, 2)
        return span(ITEM_GLYPHS[item.type], role)

    index = session.snake.find_segment_index((x, y))
    if index is None:
        return span(" " * cols)
    if index == 0:
        return span(HEAD + pad, "head")
    if index == len(session.snake) - 1:
        return span(TAIL + pad, "tail")
    return span(BODY + pad, "body")


def board(session: Session, now_ms: float) -> List[List[Span]]:
    cfg = session.cfg
    wide = session.difficulty is Difficulty.EXTREME
    show_item = item_visible(session, now_ms)
    return [
        [_cell(session, x, y, wide, show_item) for x in range(cfg.width + 2)]
        for y in range(cfg.height + 2)
    ]


def legend(difficulty: Difficulty) -> List[Span]:
    if difficulty is not Difficulty.EXTREME:
        return [span(ITEM_GLYPHS[ItemType.NORMAL], "normal"), span(" apple +10")]
    return [
        span(ITEM_EMOJI[ItemType.NORMAL], "normal", 2), span(" +10  "),
        span(ITEM_EMOJI[ItemType.RARE], "rare", 2), span(" +20  "),
        span(ITEM_EMOJI[ItemType.POISON], "poison", 2), span(" -10"),
    ]


def messages(session: Session, now_ms: float) -> List[List[Span]]:
    lines: List[List[Span]] = [[] for _ in range(MESSAGE_LINES)]
    if session.state is GameState.START:
        lines[0] = [span("Select Mode: 1. Normal   2. Extreme")]
        lines[1] = [span(f"Selected: {session.difficulty.label}    Press any direction to begin.")]
    elif session.state is GameState.RUNNING:
        lines[0] = legend(session.difficulty)
    else:
        lines[0] = [span("GAME OVER", "banner")]
        lines[1] = [span(f"Final Score: {session.score}")]
        record = record_blink(session, now_ms)
        if session.new_record and (not record.active or record.on):
            lines[2] = [span("NEW RECORD!", "high")]
        lines[3] = [span("Press R to restart or Q to quit.")]
    return lines


def build_frame(session: Session, now_ms: float) -> List[List[Span]]:
    return [scoreboard(session, now_ms)] + board(session, now_ms) + messages(session, now_ms)


def line_text(spans: List[Span]) -> str:
    return "".join(s.text for s in spans)


def required_size(cfg: Config) -> Tuple[int, int]:
    """(rows, cols) the terminal needs; Extreme mode doubles the grid width."""
    rows = 1 + (cfg.height + 2) + MESSAGE_LINES + 1
    cols = 2 * (cfg.width + 2)
    return rows, cols


# ---------- curses output ----------
ROLE_STYLES = {
    "border": (curses.COLOR_CYAN, curses.A_NORMAL),
    "head": (curses.COLOR_GREEN, curses.A_BOLD),
    "body": (curses.COLOR_GREEN, curses.A_NORMAL),
    "tail": (curses.COLOR_GREEN, curses.A_DIM),
    "normal": (curses.COLOR_RED, curses.A_BOLD),
    "rare": (curses.COLOR_MAGENTA, curses.A_BOLD),
    "poison": (curses.COLOR_RED, curses.A_DIM),
    "high": (curses.COLOR_YELLOW, curses.A_BOLD),
    "banner": (curses.COLOR_RED, curses.A_BOLD),
}


class Palette:
    """Role name -> curses attribute."""

    def __init__(self, attrs=None):
        self.attrs = attrs or {}

    @classmethod
    def setup(cls) -> "Palette":
        if not curses.has_colors():
            return cls({role: extra for role, (_, extra) in ROLE_STYLES.items()})
        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            logger.debug("terminal has no default colors, using a black background")
            background = curses.COLOR_BLACK
        attrs = {}
        for pair_id, (role, (fg, extra)) in enumerate(ROLE_STYLES.items(), start=1):
            curses.init_pair(pair_id, fg, background)
            attrs[role] = curses.color_pair(pair_id) | extra
        return cls(attrs)

    def attr(self, role: str) -> int:
        return self.attrs.get(role, curses.A_NORMAL)


def draw_frame(window, frame: List[List[Span]], palette: Palette) -> None:
    window.erase()
    for row, spans in enumerate(frame):
        col = 0
        for s in spans:
            if s.text:
                try:
                    window.addstr(row, col, s.text, palette.attr(s.role))
                except curses.error:
                    pass  # writes past the window edge
            col += s.width
    window.refresh()
