# game.py
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union
import logging
import random

from .config import CFG, Config, Difficulty, make_rng
from .geometry import Direction, Position, is_out_of_bounds
from .items import BoardFullError, Item, ItemType, spawn_item
from .snake import Snake

logger = logging.getLogger(__name__)


class GameState(Enum):
    START = "start"
    RUNNING = "running"
    GAME_OVER = "game_over"


class Command(Enum):
    SELECT_NORMAL = auto()
    SELECT_EXTREME = auto()
    CONFIRM = auto()
    RESTART = auto()
    QUIT = auto()


# ---------- Scoring / pacing rules ----------
def score_after(score: int, item_type: ItemType, difficulty: Difficulty) -> int:
    if item_type is ItemType.NORMAL:
        return score + 10
    if item_type is ItemType.RARE:
        return score + (20 if difficulty is Difficulty.EXTREME else 8)
    return max(0, score - 10)


def level_for(foods_consumed: int, cfg: Config = CFG) -> int:
    return 1 + foods_consumed // cfg.foods_per_level


def movement_interval(level: int, difficulty: Difficulty, cfg: Config = CFG) -> float:
    """Step interval in ms: the difficulty-scaled base, minus a fixed step per level, floored."""
    base = cfg.base_move_ms * cfg.multiplier(difficulty)
    return max(cfg.min_move_ms, base - (level - 1) * cfg.move_step_ms)


# ---------- State ----------
@dataclass
class Session:
    store: object                  # anything with load() -> int and save(int)
    cfg: Config = field(default_factory=Config)
    rng: random.Random = field(default_factory=make_rng)
    snake: Snake = field(default_factory=Snake)
    item: Optional[Item] = None
    state: GameState = GameState.START
    difficulty: Difficulty = Difficulty.NORMAL
    score: int = 0
    high_score: int = 0
    level: int = 1
    foods_consumed: int = 0
    move_interval: float = 0.0     # current step interval (ms)
    accumulator: float = 0.0       # elapsed ms not yet spent on ticks
    new_record: bool = False
    record_at_ms: Optional[float] = None
    running: bool = True           # cleared by Q/Escape; ends the frame loop


def new_session(
    store,
    cfg: Config = CFG,
    rng: Optional[random.Random] = None,
    difficulty: Difficulty = Difficulty.NORMAL,
    now_ms: float = 0.0,
) -> Session:
    """Build a session on the Start screen with a snake and item already laid out."""
    session = Session(
        store=store,
        cfg=cfg,
        rng=rng if rng is not None else make_rng(cfg.seed),
        difficulty=difficulty,
    )
    reset_session(session, Direction.RIGHT, now_ms)
    return session


def reset_session(session: Session, direction: Direction, now_ms: float) -> None:
    cfg = session.cfg
    session.score = 0
    session.new_record = False
    session.record_at_ms = None
    session.high_score = session.store.load()
    session.level = 1
    session.foods_consumed = 0
    session.accumulator = 0.0
    session.move_interval = movement_interval(1, session.difficulty, cfg)

    start = Position(cfg.width // 2, cfg.height // 2)
    session.snake.reset(start, direction, cfg.initial_length)
    session.item = spawn_item(
        session.snake, session.difficulty, session.rng, now_ms,
        cfg.width, cfg.height, cfg.max_spawn_attempts,
    )


def start_game(session: Session, direction: Direction, now_ms: float) -> None:
    reset_session(session, direction, now_ms)
    session.state = GameState.RUNNING
    logger.info("Game started: difficulty=%s direction=%s high=%d",
                session.difficulty.label, direction.name, session.high_score)


def end_game(session: Session, now_ms: float, reason: str) -> None:
    session.state = GameState.GAME_OVER
    if session.score > session.high_score:
        session.high_score = session.score
        session.store.save(session.high_score)
        session.new_record = True
        session.record_at_ms = now_ms
        logger.info("New high score: %d", session.score)
    else:
        session.new_record = False
        session.record_at_ms = None
    logger.info("Game over (%s): score=%d level=%d length=%d",
                reason, session.score, session.level, len(session.snake))


# ---------- Input / Update ----------
def handle_command(session: Session, action: Union[Direction, Command, None], now_ms: float) -> None:
    """Apply one translated key press; presses are handled in arrival order."""
    if action is None:
        return

    if isinstance(action, Direction):
        if session.state is GameState.START:
            start_game(session, action, now_ms)
        if session.state is GameState.RUNNING:
            session.snake.queue_direction(action)
        return

    if action is Command.QUIT:
        session.running = False
    elif session.state is GameState.START:
        if action is Command.SELECT_NORMAL:
            session.difficulty = Difficulty.NORMAL
        elif action is Command.SELECT_EXTREME:
            session.difficulty = Difficulty.EXTREME
        elif action is Command.CONFIRM:
            start_game(session, Direction.RIGHT, now_ms)
    elif session.state is GameState.GAME_OVER and action is Command.RESTART:
        start_game(session, Direction.RIGHT, now_ms)


def step_game(session: Session, now_ms: float) -> bool:
    """
    Advance the snake exactly one cell.
    Consumption is decided against the queued heading before the move is
    committed; collisions are checked after it.
    Returns True if still alive, False if this tick ended the game.
    """
    cfg = session.cfg
    snake = session.snake
    item = session.item

    will_consume = item is not None and snake.peek_next_head() == item.position
    grow = will_consume and item.type is not ItemType.POISON
    head = snake.move(grow)

    if is_out_of_bounds(head, cfg.width, cfg.height):
        end_game(session, now_ms, "wall")
        return False
    if snake.has_self_collision():
        end_game(session, now_ms, "self")
        return False

    if will_consume:
        session.score = score_after(session.score, item.type, session.difficulty)
        if item.type is not ItemType.POISON:
            session.foods_consumed += 1

        level = level_for(session.foods_consumed, cfg)
        if level != session.level:
            logger.info("Level %d reached", level)
        session.level = level
        session.move_interval = movement_interval(level, session.difficulty, cfg)

        try:
            session.item = spawn_item(
                snake, session.difficulty, session.rng, now_ms,
                cfg.width, cfg.height, cfg.max_spawn_attempts,
            )
        except BoardFullError:
            logger.info("Board is full")
            session.item = None
            end_game(session, now_ms, "board full")
            return False
    return True


def advance(session: Session, delta_ms: float, now_ms: float) -> int:
    """
    Fixed-timestep accumulator: bank `delta_ms` and run one full tick per
    elapsed movement interval, stopping as soon as the game leaves Running.
    Returns the number of ticks performed.
    """
    if session.state is not GameState.RUNNING:
        return 0

    session.accumulator += delta_ms
    ticks = 0
    while session.accumulator >= session.move_interval:
        step_game(session, now_ms)
        session.accumulator -= session.move_interval
        ticks += 1
        if session.state is not GameState.RUNNING:
            break
    return ticks
