from typing import Optional, Tuple

from esper import World

from loopfill.components.board import Board
from loopfill.components.level import Level
from loopfill.components.tile_flags import TileFlags
from loopfill.events.bus import EventBus, EVENT_SHAPE_FILLED
from loopfill.rendering.context import BoardGeometry, compute_board_geometry
from loopfill.rendering.fill_renderer import FillRenderer
from loopfill.rendering.track_renderer import TrackRenderer


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_SHAPE_FILLED, self.on_shape_filled)
        self.fill_renderer = FillRenderer(world)
        self.track_renderer = TrackRenderer()
        self.filled_count = 0

    def _level_parts(self) -> Optional[Tuple[Board, TileFlags, Level]]:
        for entity, level in self.world.get_component(Level):
            try:
                board = self.world.component_for_entity(entity, Board)
                flags = self.world.component_for_entity(entity, TileFlags)
            except KeyError:
                return None
            return board, flags, level
        return None

    def geometry(self) -> Optional[BoardGeometry]:
        parts = self._level_parts()
        if parts is None:
            return None
        return compute_board_geometry(self.window.width, self.window.height, parts[0])

    def on_shape_filled(self, sender, **kwargs):
        self.filled_count += 1

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        # Headless safeguard: if no active Arcade window (unit tests), skip actual draw calls but still build draw lists.
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        parts = self._level_parts()
        if parts is None:
            return
        board, flags, level = parts
        geometry = compute_board_geometry(self.window.width, self.window.height, board)
        # Fills sit underneath the track.
        self.fill_renderer.render(arcade, geometry, board, headless)
        self.track_renderer.render(arcade, geometry, board, flags, level, headless)
