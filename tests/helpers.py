from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping, Sequence, Set, Tuple

from esper import World

from loopfill.components.board import Board
from loopfill.events.bus import EventBus
from loopfill.systems.region_decomposition import rect_cells
from loopfill.utils.movement import Direction
from loopfill.world import create_world

# Fully connected 4x4 grid with a dot in the upper-left corner.
OPEN_GRID = (
    "*+++",
    "++++",
    "++++",
    "++++",
)

# Two squares sharing their middle column; the whole outline is a larger loop.
TWIN_SQUARES = (
    "*-*-*",
    "| | |",
    "+-+-+",
)

# Same outline, a single dot in the upper-left corner.
TWIN_SQUARES_ONE_DOT = (
    "*-+-+",
    "| | |",
    "+-+-+",
)

SQUARE_THREE_DOTS = (
    "*-*",
    "| |",
    "*-+",
)

L_SHAPE = (
    "*-+",
    "| |",
    "| +-+",
    "|   |",
    "+---+",
)

U_SHAPE = (
    "*-+ +-+",
    "| | | |",
    "| +-+ |",
    "|     |",
    "+-----+",
)

DEAD_END = (
    "*--",
)

LOLLIPOP = (
    "*-+-+",
    "  | |",
    "  +-+",
)


def build_level(lines: Sequence[str]) -> Tuple[EventBus, World]:
    """Create a world with the shape and level systems and load ``lines``."""
    bus = EventBus()
    world = create_world(bus, lines)
    return bus, world


def enclosed_cells(board: Board, exits: Mapping[int, int]) -> Set[int]:
    """Cells walled in by the loop edges in ``exits``, found by flooding from outside.

    A cell is the unit square between four tile centres, identified by its
    upper-left tile.
    """
    right_edges = set()
    down_edges = set()
    for index, value in exits.items():
        col, row = board.cell(index)
        if value & Direction.RIGHT:
            right_edges.add((col, row))
        if value & Direction.DOWN:
            down_edges.add((col, row))

    def inside(cell):
        c, r = cell
        return -1 <= c < board.cols and -1 <= r < board.rows

    seen = {(-1, -1)}
    stack = [(-1, -1)]
    while stack:
        c, r = stack.pop()
        moves = (
            ((c + 1, r), (c + 1, r) not in down_edges),
            ((c - 1, r), (c, r) not in down_edges),
            ((c, r + 1), (c, r + 1) not in right_edges),
            ((c, r - 1), (c, r) not in right_edges),
        )
        for cell, open_ in moves:
            if open_ and inside(cell) and cell not in seen:
                seen.add(cell)
                stack.append(cell)

    return {
        board.index(c, r)
        for r in range(board.rows - 1)
        for c in range(board.cols - 1)
        if (c, r) not in seen
    }


def covered_cells(board: Board, rects: Iterable[Tuple[int, int]]) -> Counter:
    """How many rectangles cover each cell."""
    counts: Counter = Counter()
    for rect in rects:
        counts.update(rect_cells(board, rect))
    return counts
