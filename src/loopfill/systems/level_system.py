import logging
from typing import Dict, Optional, Sequence

from esper import World

from loopfill.components.board import Board
from loopfill.components.level import Level
from loopfill.components.tile_flags import TileFlags
from loopfill.events.bus import (
    EventBus,
    EVENT_DOT_ADDED,
    EVENT_DOT_CONSUMED,
    EVENT_LEVEL_LOADED,
    EVENT_LEVEL_RESET,
    EVENT_LEVEL_UNLOADED,
    EVENT_TILE_CLICK,
    EVENT_TILES_CHANGED,
)
from loopfill.utils.track_art import parse_track

logger = logging.getLogger(__name__)


class LevelSystem:
    """Owns the level entity and announces its lifecycle on the event bus.

    Loading announces every dot before ``level_loaded`` so listeners see the
    complete set of dots when they bake.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.level_entity: Optional[int] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)

    def level(self) -> Optional[Level]:
        if self.level_entity is None:
            return None
        try:
            return self.world.component_for_entity(self.level_entity, Level)
        except KeyError:
            return None

    def load(self, lines: Sequence[str], name: str = "level") -> int:
        if self.level_entity is not None:
            self.unload()
        board, flags, dots = parse_track(lines)
        level = Level(name=name, initial_dots=tuple(dots), dots=set(dots))
        self.level_entity = self.world.create_entity(level, board, flags)
        logger.debug("Loaded level %r: %dx%d, %d dot(s)", name, board.cols, board.rows, len(dots))
        for tile in dots:
            self.event_bus.emit(EVENT_DOT_ADDED, tile=tile)
        self.event_bus.emit(EVENT_LEVEL_LOADED, level_entity=self.level_entity)
        return self.level_entity

    def reset(self) -> None:
        level = self.level()
        if level is None:
            return
        level.dots = set(level.initial_dots)
        self.event_bus.emit(EVENT_LEVEL_RESET)

    def consume_dot(self, tile: int) -> bool:
        level = self.level()
        if level is None or tile not in level.dots:
            return False
        level.dots.discard(tile)
        self.event_bus.emit(EVENT_DOT_CONSUMED, tile=tile)
        return True

    def set_tile_flags(self, updates: Dict[int, int]) -> None:
        """Replace the flags of some tiles and announce the topology change."""
        if self.level_entity is None or not updates:
            return
        flags = self.world.component_for_entity(self.level_entity, TileFlags)
        board = self.world.component_for_entity(self.level_entity, Board)
        positions = []
        for index, value in updates.items():
            if not board.contains(index):
                continue
            flags.set(index, value)
            positions.append(index)
        self.event_bus.emit(EVENT_TILES_CHANGED, positions=positions)

    def unload(self) -> None:
        if self.level_entity is None:
            return
        self.event_bus.emit(EVENT_LEVEL_UNLOADED)
        self.world.delete_entity(self.level_entity, immediate=True)
        self.level_entity = None

    def on_tile_click(self, sender, **kwargs):
        index = kwargs.get('index')
        if index is None:
            return
        self.consume_dot(index)
