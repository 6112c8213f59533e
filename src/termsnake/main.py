# main.py
from dataclasses import replace
from typing import List, Optional
import argparse
import curses
import locale
import logging
import os
import sys
import time

from .config import CFG, ESCAPE_DELAY_MS, Config, Difficulty, make_rng
from .controls import drain_keys, translate_key
from .game import Session, advance, handle_command, new_session
from .highscore import HighScoreFile
from .render import Palette, build_frame, draw_frame, required_size

logger = logging.getLogger(__name__)


class TerminalTooSmallError(Exception):
    def __init__(self, rows: int, cols: int, need_rows: int, need_cols: int):
        super().__init__(
            f"Terminal is {cols}x{rows}; termsnake needs at least {need_cols}x{need_rows}."
        )


def setup_terminal(stdscr) -> None:
    curses.curs_set(0)
    curses.noecho()
    curses.cbreak()
    stdscr.keypad(True)
    stdscr.nodelay(True)


def check_size(stdscr, cfg: Config) -> None:
    rows, cols = stdscr.getmaxyx()
    need_rows, need_cols = required_size(cfg)
    if rows < need_rows or cols < need_cols:
        raise TerminalTooSmallError(rows, cols, need_rows, need_cols)


def run(stdscr, session: Session) -> None:
    """Frame loop: drain input, advance the simulation, draw once, yield the CPU."""
    setup_terminal(stdscr)
    check_size(stdscr, session.cfg)
    palette = Palette.setup()

    t0 = time.monotonic()
    previous = 0.0
    while session.running:
        # 1) clock
        now = (time.monotonic() - t0) * 1000.0
        delta = now - previous
        previous = now

        # 2) input
        for code in drain_keys(stdscr):
            handle_command(session, translate_key(code), now)

        # 3) update (may run several ticks after a slow frame)
        advance(session, delta, now)

        # 4) render
        draw_frame(stdscr, build_frame(session, now), palette)
        time.sleep(session.cfg.frame_ms / 1000.0)


def positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return n


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="termsnake", description="Snake in the terminal.")
    p.add_argument("--width", type=positive_int, default=CFG.width, help="playfield columns")
    p.add_argument("--height", type=positive_int, default=CFG.height, help="playfield rows")
    p.add_argument("--difficulty", choices=[d.name.lower() for d in Difficulty],
                   default="normal", help="mode pre-selected on the start screen")
    p.add_argument("--seed", type=int, default=None, help="seed item spawns for a reproducible game")
    p.add_argument("--highscore-file", default=CFG.highscore_path)
    p.add_argument("--log-file", default=None, help="write logs here (nothing is logged otherwise)")
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = p.parse_args(argv)
    if min(args.width, args.height) < CFG.min_side:
        p.error(f"--width and --height must be at least {CFG.min_side} to fit the snake")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=getattr(logging, args.log_level),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    cfg = replace(
        CFG,
        width=args.width,
        height=args.height,
        seed=args.seed,
        highscore_path=args.highscore_file,
    )
    session = new_session(
        HighScoreFile(cfg.highscore_path),
        cfg,
        rng=make_rng(cfg.seed),
        difficulty=Difficulty[args.difficulty.upper()],
    )
    logger.info("Starting termsnake %dx%d seed=%s", cfg.width, cfg.height, cfg.seed)

    # Box-drawing glyphs and emoji need the user's (UTF-8) locale before initscr.
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as e:
        logger.warning("Could not apply the user locale: %s", e)
    # initscr reads ESCDELAY; ncurses otherwise holds a bare Esc for 1000 ms.
    os.environ.setdefault("ESCDELAY", str(ESCAPE_DELAY_MS))
    try:
        curses.wrapper(run, session)
    except TerminalTooSmallError as e:
        print(e, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    logger.info("Exiting, high score %d", session.high_score)
    return 0


if __name__ == "__main__":
    sys.exit(main())
