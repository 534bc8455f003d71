from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from loopfill.components.board import Board
from loopfill.components.tile_flags import TileFlags
from loopfill.utils.movement import ALL_DIRECTIONS, CARDINALS, HORIZONTAL, VERTICAL, opposite, tile_delta, unit_deltas

# Exits each character offers; a neighbour must offer the reciprocal exit too.
TRACK_CHARS: Dict[str, int] = {
    " ": 0,
    "-": int(HORIZONTAL),
    "|": int(VERTICAL),
    "+": int(ALL_DIRECTIONS),
    "*": int(ALL_DIRECTIONS),
}
DOT_CHARS = frozenset("*")


def parse_track(lines: Sequence[str]) -> Tuple[Board, TileFlags, List[int]]:
    """Build board geometry, resolved tile flags and dot tiles from a text grid.

    ``-`` and ``|`` are straight pieces, ``+`` connects to every neighbour that
    connects back, ``*`` is a ``+`` carrying a dot. Dots are listed in index order.
    """
    rows = [line.rstrip("\n") for line in lines]
    width = max((len(row) for row in rows), default=0)
    board = Board(rows=len(rows), cols=width)
    offered: Dict[int, int] = {}
    dots: List[int] = []
    for r, row in enumerate(rows):
        for c, char in enumerate(row.ljust(width)):
            if char not in TRACK_CHARS:
                raise ValueError(f"Unknown track character {char!r} at row {r}, column {c}")
            index = board.index(c, r)
            if TRACK_CHARS[char]:
                offered[index] = TRACK_CHARS[char]
            if char in DOT_CHARS:
                dots.append(index)

    flags = TileFlags()
    for index, offer in offered.items():
        col, row = board.cell(index)
        resolved = 0
        for direction in CARDINALS:
            if not offer & direction:
                continue
            dx, dy = unit_deltas(direction)
            if board.index(col + dx, row + dy) < 0:
                continue
            neighbor = index + tile_delta(direction, board.cols)
            if offered.get(neighbor, 0) & opposite(direction):
                resolved |= direction
        flags.set(index, resolved)
    return board, flags, dots
