import random

import pytest

from termsnake.config import Config
from termsnake.game import new_session, step_game
from termsnake.items import Item, ItemType


class MemoryStore:
    """In-memory stand-in for the high-score file."""

    def __init__(self, value=0):
        self.value = value
        self.saved = []

    def load(self):
        return self.value

    def save(self, value):
        self.value = value
        self.saved.append(value)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def session(store):
    return new_session(store, Config(), rng=random.Random(1234))


def put_item_ahead(session, item_type, now_ms=0.0):
    """Place an item on the cell the snake will enter next tick."""
    session.item = Item(session.snake.peek_next_head(), item_type, now_ms)
    return session.item


@pytest.fixture
def feed():
    def _feed(session, item_type=ItemType.NORMAL, now_ms=0.0):
        put_item_ahead(session, item_type, now_ms)
        return step_game(session, now_ms)
    return _feed
