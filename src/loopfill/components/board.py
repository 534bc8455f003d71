from dataclasses import dataclass
from typing import Tuple

@dataclass(slots=True)
class Board:
    """Tile grid geometry. Tiles are indexed row-major from 0."""
    rows: int
    cols: int

    def index(self, col: int, row: int) -> int:
        if 0 <= col < self.cols and 0 <= row < self.rows:
            return row * self.cols + col
        return -1

    def cell(self, index: int) -> Tuple[int, int]:
        return index % self.cols, index // self.cols

    def counts(self) -> Tuple[int, int]:
        return self.cols, self.rows

    def contains(self, index: int) -> bool:
        return 0 <= index < self.rows * self.cols
