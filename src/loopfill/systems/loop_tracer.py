"""Closed-loop discovery over resolved tile flags.

A trace starts on a tile facing one of its exits and keeps choosing the first
open exit among (preferred turn, forward, alternate turn) until it steps onto a
tile it has already visited. Only a walk that closes back on its start tile
forms a loop, and only if no skipped alternate branch hints at a smaller loop
inside it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Container, Dict, List, Optional

from loopfill.components.board import Board
from loopfill.utils.movement import (
    Direction,
    Turn,
    can_go,
    is_straight,
    next_direction,
    opposite,
    tile_delta,
    way_to_go,
)

FlagsLookup = Callable[[int], int]


@dataclass(slots=True)
class Alternate:
    """An open exit passed over in favour of the preferred one."""
    tile: int
    direction: Direction
    delta: int


@dataclass(slots=True)
class LoopTrace:
    start: int
    exits: Dict[int, int] = field(default_factory=dict)
    dots: List[int] = field(default_factory=list)
    corners: List[int] = field(default_factory=list)
    alternates: List[Alternate] = field(default_factory=list)


def _inclusive(first: int, last: int, step: int) -> range:
    return range(first, last + (1 if step > 0 else -1), step)


def straight_line_to_edge(board: Board, alternate: Alternate) -> range:
    """Tiles from just past ``alternate.tile`` to the grid edge, ignoring connectivity."""
    tile = alternate.tile + alternate.delta
    col, row = board.cell(tile)
    if alternate.direction in (Direction.LEFT, Direction.RIGHT):
        col = board.cols - 1 if alternate.direction is Direction.RIGHT else 0
    else:
        row = board.rows - 1 if alternate.direction is Direction.DOWN else 0
    return _inclusive(tile, board.index(col, row), alternate.delta)


def better_alternate(board: Board, visited: Container[int], alternates: List[Alternate]) -> bool:
    """Whether some passed-over branch heads straight back into the loop.

    Following the preference past such a branch means the loop encloses it,
    so a smaller loop exists. This is a heuristic, not a proof of minimality.
    """
    for alternate in alternates:
        for index in straight_line_to_edge(board, alternate):
            if index in visited:
                return True
    return False


def trace_loop(
    board: Board,
    flags_for: FlagsLookup,
    markers: Container[int],
    tile: int,
    facing: Direction,
    preferred: Turn,
    alternate: Turn,
) -> Optional[LoopTrace]:
    """Try to close a minimal loop from ``tile`` heading out ``facing``.

    Returns None when the walk dead-ends, runs into its own tail, or encloses
    a better alternate. On the start tile the walk always goes forward.
    """
    trace = LoopTrace(start=tile)
    exits = trace.exits
    exits[tile] = 0
    cols = board.cols
    while True:
        if tile in markers:
            trace.dots.append(tile)
        flags = flags_for(tile)
        # Only the corner indices matter, not their order; signatures are sorted later.
        if not is_straight(flags):
            trace.corners.append(tile)

        going = way_to_go(flags, preferred, Turn.FORWARD, alternate, facing)
        if going is Turn.BACKWARD:
            return None
        if going is not alternate and tile != trace.start:
            alt_dir = next_direction(facing, alternate)
            if can_go(flags, alt_dir):
                trace.alternates.append(Alternate(tile, alt_dir, tile_delta(alt_dir, cols)))

        facing = next_direction(facing, going if tile != trace.start else Turn.FORWARD)
        exits[tile] |= facing
        tile += tile_delta(facing, cols)
        if tile in exits:
            break
        exits[tile] = opposite(facing)
    if tile != trace.start or better_alternate(board, exits, trace.alternates):
        return None
    exits[tile] |= opposite(facing)
    return trace
