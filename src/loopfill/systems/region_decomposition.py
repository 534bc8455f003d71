"""Rectangle cover for the area enclosed by a loop.

Rectangles are pairs of tile indices (upper-left, lower-right) whose tile
centres bound the filled area. The covered cells, i.e. the unit squares between
four tile centres identified by their upper-left tile, never overlap and add
up to exactly the area the loop encloses.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Tuple

from loopfill.components.board import Board
from loopfill.utils.movement import Direction, can_go

Rect = Tuple[int, int]
FlagsLookup = Callable[[int], int]


@dataclass(slots=True)
class Span:
    """Run of a row between two tiles with downward exits."""
    right: int
    broken: bool = False


def extract_spans(board: Board, tiles: Iterable[int], flags_for: FlagsLookup) -> Dict[int, Dict[int, Span]]:
    """Per-row spans keyed by their left column.

    In index order, tiles with a downward exit alternately open and close a
    span. A span whose ends also connect toward each other along the row is
    marked broken: it runs along a horizontal edge of the loop.
    """
    rows: Dict[int, Dict[int, Span]] = {}
    opened: Tuple[int, int] | None = None
    current_row = -1
    for index in sorted(tiles):
        col, row = board.cell(index)
        if row != current_row:
            current_row, opened = row, None
        flags = flags_for(index)
        if not can_go(flags, Direction.DOWN):
            continue
        if opened is None:
            opened = (col, flags)
            continue
        left, left_flags = opened
        broken = can_go(left_flags, Direction.RIGHT) or can_go(flags, Direction.LEFT)
        rows.setdefault(row, {})[left] = Span(right=col, broken=broken)
        opened = None
    return rows


def merge_spans(board: Board, rows: Dict[int, Dict[int, Span]]) -> List[Rect]:
    """Grow each span downward through identical, unbroken spans below it.

    A span below is consumed only when it extends a rectangle; otherwise it
    starts a rectangle of its own once its row comes up.
    """
    rects: List[Rect] = []
    if not rows:
        return rects
    last_row = max(rows)
    for row in range(min(rows), last_row + 1):
        spans = rows.get(row)
        if not spans:
            continue
        for left in sorted(spans):
            top = spans.pop(left)
            bottom = row + 1
            while bottom <= last_row:
                below = rows.get(bottom, {}).get(left)
                if below is None or below.right != top.right or below.broken:
                    break
                del rows[bottom][left]
                bottom += 1
            rects.append((board.index(left, row), board.index(top.right, bottom)))
    return rects


def decompose(board: Board, tiles: Iterable[int], flags_for: FlagsLookup) -> List[Rect]:
    """Cover the area enclosed by the loop through ``tiles`` with rectangles."""
    return merge_spans(board, extract_spans(board, tiles, flags_for))


def rect_bounds(board: Board, rect: Rect) -> Tuple[int, int, int, int]:
    """(col1, row1, col2, row2) of a rectangle's corner tiles."""
    col1, row1 = board.cell(rect[0])
    col2, row2 = board.cell(rect[1])
    return col1, row1, col2, row2


def rect_cells(board: Board, rect: Rect) -> Iterator[int]:
    """Upper-left tile index of every cell the rectangle covers."""
    col1, row1, col2, row2 = rect_bounds(board, rect)
    for row in range(row1, row2):
        for col in range(col1, col2):
            yield board.index(col, row)
