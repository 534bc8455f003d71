"""Direction algebra for tile-to-tile movement along the track.

Directions are absolute (screen space, rows grow downward). Turns are relative
to a facing direction and are resolved into directions with ``next_direction``.
"""
from __future__ import annotations

from enum import Enum, IntFlag
from typing import Iterator, Tuple


class Direction(IntFlag):
    LEFT = 1
    RIGHT = 2
    UP = 4
    DOWN = 8


class Turn(Enum):
    FORWARD = "forward"
    TO_LEFT = "to_left"
    TO_RIGHT = "to_right"
    BACKWARD = "backward"


CARDINALS: Tuple[Direction, ...] = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)

HORIZONTAL = Direction.LEFT | Direction.RIGHT
VERTICAL = Direction.UP | Direction.DOWN
ALL_DIRECTIONS = HORIZONTAL | VERTICAL

_TURNS = {
    Direction.LEFT: {Turn.TO_LEFT: Direction.DOWN, Turn.TO_RIGHT: Direction.UP, Turn.BACKWARD: Direction.RIGHT},
    Direction.RIGHT: {Turn.TO_LEFT: Direction.UP, Turn.TO_RIGHT: Direction.DOWN, Turn.BACKWARD: Direction.LEFT},
    Direction.UP: {Turn.TO_LEFT: Direction.LEFT, Turn.TO_RIGHT: Direction.RIGHT, Turn.BACKWARD: Direction.DOWN},
    Direction.DOWN: {Turn.TO_LEFT: Direction.RIGHT, Turn.TO_RIGHT: Direction.LEFT, Turn.BACKWARD: Direction.UP},
}


def can_go(flags: int, direction: Direction) -> bool:
    """Whether ``flags`` has an exit toward ``direction``.

    This says nothing about the neighbouring tile, i.e. whether it leads back.
    """
    return bool(flags & direction)


def next_direction(facing: Direction, turn: Turn) -> Direction:
    if turn is Turn.FORWARD:
        return facing
    return _TURNS[facing][turn]


def opposite(direction: Direction) -> Direction:
    return _TURNS[direction][Turn.BACKWARD]


def way_to_go(flags: int, first, second, third, facing: Direction | None = None):
    """Pick the most preferred open exit.

    With a ``facing`` the candidates are turns and the chosen turn is returned
    unchanged; otherwise they are absolute directions. ``Turn.BACKWARD`` means
    none of them was open.
    """
    for choice in (first, second, third):
        direction = next_direction(facing, choice) if facing is not None else choice
        if can_go(flags, direction):
            return choice
    return Turn.BACKWARD


def tile_delta(direction: Direction, cols: int) -> int:
    """Index delta to the neighbouring tile in ``direction``."""
    step = cols if direction in (Direction.UP, Direction.DOWN) else 1
    return -step if direction in (Direction.UP, Direction.LEFT) else step


def unit_deltas(facing: Direction, turn: Turn | None = None) -> Tuple[int, int]:
    if turn is not None:
        facing = next_direction(facing, turn)
    dx = {Direction.LEFT: -1, Direction.RIGHT: 1}.get(facing, 0)
    dy = {Direction.UP: -1, Direction.DOWN: 1}.get(facing, 0)
    return dx, dy


def is_straight(flags: int) -> bool:
    return flags == HORIZONTAL or flags == VERTICAL


def directions_of(flags: int) -> Iterator[Direction]:
    for direction in CARDINALS:
        if flags & direction:
            yield direction
