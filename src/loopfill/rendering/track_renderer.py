from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

from loopfill.constants import DOT_COLOR, DOT_RADIUS_PCT, TRACK_COLOR, TRACK_WIDTH
from loopfill.utils.movement import Direction, can_go

if TYPE_CHECKING:
    from loopfill.components.board import Board
    from loopfill.components.level import Level
    from loopfill.components.tile_flags import TileFlags
    from loopfill.rendering.context import BoardGeometry

Segment = Tuple[float, float, float, float]


class TrackRenderer:
    """Draws track segments between connected tile centres and the remaining dots."""

    def __init__(self):
        self.last_segments: List[Segment] = []
        self.last_dots: List[Tuple[float, float]] = []

    def render(self, arcade, geometry: BoardGeometry, board: Board, flags: TileFlags, level: Level, headless: bool) -> None:
        segments: List[Segment] = []
        # Right and down exits only, so each connection is drawn once.
        for index, value in flags.flags.items():
            col, row = board.cell(index)
            x1, y1 = geometry.tile_center(col, row)
            if can_go(value, Direction.RIGHT) and col + 1 < board.cols:
                x2, y2 = geometry.tile_center(col + 1, row)
                segments.append((x1, y1, x2, y2))
            if can_go(value, Direction.DOWN) and row + 1 < board.rows:
                x2, y2 = geometry.tile_center(col, row + 1)
                segments.append((x1, y1, x2, y2))
        dots = [geometry.tile_center(*board.cell(tile)) for tile in sorted(level.dots)]
        self.last_segments = segments
        self.last_dots = dots
        if headless:
            return
        for x1, y1, x2, y2 in segments:
            arcade.draw_line(x1, y1, x2, y2, TRACK_COLOR, TRACK_WIDTH)
        radius = geometry.tile_size * DOT_RADIUS_PCT
        for x, y in dots:
            arcade.draw_circle_filled(x, y, radius, DOT_COLOR)
