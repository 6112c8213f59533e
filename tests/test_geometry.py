import pytest

from termsnake.geometry import Direction, Position, is_opposite, is_out_of_bounds


class TestDirection:
    """Headings and their offsets."""

    def test_offsets_are_unit_steps(self):
        assert Direction.UP.offset == (0, -1)
        assert Direction.DOWN.offset == (0, 1)
        assert Direction.LEFT.offset == (-1, 0)
        assert Direction.RIGHT.offset == (1, 0)

    @pytest.mark.parametrize("a,b", [
        (Direction.UP, Direction.DOWN),
        (Direction.LEFT, Direction.RIGHT),
    ])
    def test_opposites(self, a, b):
        assert a.opposite is b
        assert b.opposite is a
        assert is_opposite(a, b)

    def test_perpendicular_and_same_are_not_opposite(self):
        assert not is_opposite(Direction.UP, Direction.LEFT)
        assert not is_opposite(Direction.RIGHT, Direction.RIGHT)


class TestPosition:
    """Position value semantics."""

    def test_equality_by_value(self):
        assert Position(3, 4) == Position(3, 4)
        assert Position(3, 4) == (3, 4)

    def test_translate(self):
        assert Position(5, 5).translate(Direction.UP) == (5, 4)
        assert Position(5, 5).translate(Direction.LEFT, 3) == (2, 5)


class TestBounds:
    """The interior is [1, width] x [1, height]."""

    @pytest.mark.parametrize("pos", [(0, 5), (31, 5), (5, 0), (5, 19), (-1, -1)])
    def test_walls_are_out_of_bounds(self, pos):
        assert is_out_of_bounds(pos, 30, 18)

    @pytest.mark.parametrize("pos", [(1, 1), (30, 18), (15, 9), (1, 18), (30, 1)])
    def test_interior_is_in_bounds(self, pos):
        assert not is_out_of_bounds(pos, 30, 18)
