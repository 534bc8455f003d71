from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from loopfill.components.board import Board
from loopfill.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    MIN_TILE_SIZE,
)


@dataclass(slots=True)
class BoardGeometry:
    """Pixel placement of the board; row 0 is drawn at the top."""

    tile_size: float
    left: float
    bottom: float
    rows: int
    cols: int

    @property
    def top(self) -> float:
        return self.bottom + self.rows * self.tile_size

    @property
    def right(self) -> float:
        return self.left + self.cols * self.tile_size

    def tile_center(self, col: int, row: int) -> Tuple[float, float]:
        x = self.left + (col + 0.5) * self.tile_size
        y = self.top - (row + 0.5) * self.tile_size
        return x, y

    def tile_at(self, x: float, y: float) -> Tuple[int, int] | None:
        if not (self.left <= x < self.right and self.bottom <= y < self.top):
            return None
        col = int((x - self.left) // self.tile_size)
        row = int((self.top - y) // self.tile_size)
        return col, row


def compute_board_geometry(window_width: int, window_height: int, board: Board) -> BoardGeometry:
    """Largest tile size that keeps the board inside the configured window share."""
    cols = max(board.cols, 1)
    rows = max(board.rows, 1)
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / cols, max_board_h / rows))
    if tile_size < MIN_TILE_SIZE:
        tile_size = MIN_TILE_SIZE
    left = (window_width - cols * tile_size) / 2
    return BoardGeometry(tile_size=tile_size, left=left, bottom=BOTTOM_MARGIN, rows=board.rows, cols=board.cols)
