from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

from loopfill.components.fill_region import FillRegion
from loopfill.systems.region_decomposition import rect_bounds

if TYPE_CHECKING:
    from esper import World
    from loopfill.components.board import Board
    from loopfill.rendering.context import BoardGeometry

DrawCommand = Tuple[float, float, float, float, Tuple[int, int, int]]


class FillRenderer:
    """Draws the rectangles of every completed shape.

    A rectangle spans from the centre of its upper-left tile to the centre of
    its lower-right tile.
    """

    def __init__(self, world: World):
        self.world = world
        self.last_draw_commands: List[DrawCommand] = []

    def build_commands(self, geometry: BoardGeometry, board: Board) -> List[DrawCommand]:
        commands: List[DrawCommand] = []
        for _, region in self.world.get_component(FillRegion):
            for rect in region.rects:
                col1, row1, col2, row2 = rect_bounds(board, rect)
                left, top = geometry.tile_center(col1, row1)
                right, bottom = geometry.tile_center(col2, row2)
                commands.append((left, right, bottom, top, region.color))
        return commands

    def render(self, arcade, geometry: BoardGeometry, board: Board, headless: bool) -> None:
        self.last_draw_commands = self.build_commands(geometry, board)
        if headless:
            return
        for left, right, bottom, top, color in self.last_draw_commands:
            arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, color)
