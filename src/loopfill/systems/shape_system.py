import logging
from typing import List, Optional, Tuple

from esper import World

from loopfill.components.board import Board
from loopfill.components.fill_region import FillRegion
from loopfill.components.level import Level
from loopfill.components.marker import Marker
from loopfill.components.shape import Shape
from loopfill.components.shape_registry import ShapeRegistry
from loopfill.components.tile_flags import TileFlags
from loopfill.constants import FILL_COLOR
from loopfill.events.bus import (
    EventBus,
    EVENT_DOT_ADDED,
    EVENT_DOT_CONSUMED,
    EVENT_LEVEL_LOADED,
    EVENT_LEVEL_RESET,
    EVENT_LEVEL_UNLOADED,
    EVENT_SHAPE_CREATED,
    EVENT_SHAPE_FILLED,
    EVENT_SHAPES_BAKED,
    EVENT_TILES_CHANGED,
)
from loopfill.systems.loop_tracer import trace_loop
from loopfill.systems.region_decomposition import decompose
from loopfill.utils.movement import Direction, Turn
from loopfill.utils.shape_signatures import canonical_signature

logger = logging.getLogger(__name__)

# Turn biases tried from every dot and direction; which minimal loop a trace
# reaches first depends on the bias, so both are always attempted.
TURN_BIASES: Tuple[Tuple[Turn, Turn], ...] = (
    (Turn.TO_LEFT, Turn.TO_RIGHT),
    (Turn.TO_RIGHT, Turn.TO_LEFT),
)


class ShapeSystem:
    """Bakes dots into shapes and fills shapes whose dots are all consumed.

    Shapes are rebuilt from scratch on level load, reset and topology changes;
    their identity does not survive a rebake. Completion runs synchronously
    from ``remove_at`` and never triggers a bake.
    """

    def __init__(self, world: World, event_bus: EventBus, fill_color=FILL_COLOR):
        self.world = world
        self.event_bus = event_bus
        self.fill_color = fill_color
        self.event_bus.subscribe(EVENT_LEVEL_LOADED, self.on_level_loaded)
        self.event_bus.subscribe(EVENT_LEVEL_RESET, self.on_level_reset)
        self.event_bus.subscribe(EVENT_TILES_CHANGED, self.on_tiles_changed)
        self.event_bus.subscribe(EVENT_LEVEL_UNLOADED, self.on_level_unloaded)
        self.event_bus.subscribe(EVENT_DOT_ADDED, self.on_dot_added)
        self.event_bus.subscribe(EVENT_DOT_CONSUMED, self.on_dot_consumed)

    # ------------------------------------------------------------------
    # Level lookup
    # ------------------------------------------------------------------
    def _level_entity(self) -> Optional[int]:
        for entity, _ in self.world.get_component(Level):
            return entity
        return None

    def registry(self) -> Optional[ShapeRegistry]:
        entity = self._level_entity()
        if entity is None:
            return None
        try:
            return self.world.component_for_entity(entity, ShapeRegistry)
        except KeyError:
            return None

    def _ensure_registry(self) -> Optional[ShapeRegistry]:
        entity = self._level_entity()
        if entity is None:
            return None
        registry = self.registry()
        if registry is None:
            registry = ShapeRegistry()
            self.world.add_component(entity, registry)
        return registry

    def _level_parts(self) -> Optional[Tuple[Board, TileFlags, ShapeRegistry]]:
        entity = self._level_entity()
        if entity is None:
            return None
        try:
            board = self.world.component_for_entity(entity, Board)
            flags = self.world.component_for_entity(entity, TileFlags)
            registry = self.world.component_for_entity(entity, ShapeRegistry)
        except KeyError:
            return None
        return board, flags, registry

    def shapes(self) -> List[Shape]:
        registry = self.registry()
        return list(registry.shapes) if registry else []

    def shapes_at(self, tile: int) -> List[Shape]:
        registry = self.registry()
        marker = registry.markers.get(tile) if registry else None
        return list(marker.shapes) if marker else []

    # ------------------------------------------------------------------
    # Dots
    # ------------------------------------------------------------------
    def add_point(self, tile: int) -> None:
        registry = self._ensure_registry()
        if registry is None:
            return
        registry.add_marker(tile)

    def remove_at(self, tile: int) -> None:
        registry = self.registry()
        marker = registry.markers.get(tile) if registry else None
        if marker is None or not marker.shapes:
            return
        for shape in reversed(marker.shapes):
            if shape.remove_dot():
                self._complete(shape)
        marker.shapes.clear()

    # ------------------------------------------------------------------
    # Baking
    # ------------------------------------------------------------------
    def bake(self) -> int:
        """Trace every unexplored dot direction; returns the number of new shapes."""
        parts = self._level_parts()
        if parts is None:
            return 0
        board, flags, registry = parts
        before = len(registry.shapes)
        for tile, marker in list(registry.markers.items()):
            for direction in flags.directions(tile):
                for preferred, alternate in TURN_BIASES:
                    self._explore(board, flags, registry, marker, direction, preferred, alternate)
        created = len(registry.shapes) - before
        logger.debug("Baked %d new shape(s) from %d dot(s)", created, len(registry.markers))
        self.event_bus.emit(EVENT_SHAPES_BAKED, count=len(registry.shapes))
        return created

    def rebake(self) -> int:
        registry = self.registry()
        if registry is None:
            return 0
        registry.clear_shapes()
        return self.bake()

    def _explore(
        self,
        board: Board,
        flags: TileFlags,
        registry: ShapeRegistry,
        marker: Marker,
        direction: Direction,
        preferred: Turn,
        alternate: Turn,
    ) -> Optional[Shape]:
        if direction in marker.explored:
            return None
        trace = trace_loop(board, flags.get, registry.markers, marker.tile, direction, preferred, alternate)
        if trace is None or not registry.signatures.add(trace.corners):
            return None
        shape = Shape(
            shape_id=registry.next_id,
            signature=canonical_signature(trace.corners),
            exits=trace.exits,
            dots=tuple(trace.dots),
        )
        registry.next_id += 1
        registry.shapes.append(shape)
        # Every dot on the loop would find this same shape heading this way,
        # so mark the direction explored for all of them.
        for dot in shape.dots:
            other = registry.markers.get(dot)
            if other is not None:
                other.explored.add(direction)
                other.shapes.append(shape)
        logger.debug("Shape %d: %d tile(s), dots %s", shape.shape_id, len(shape.tiles), shape.dots)
        self.event_bus.emit(EVENT_SHAPE_CREATED, shape=shape)
        return shape

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------
    def _complete(self, shape: Shape) -> None:
        parts = self._level_parts()
        if parts is None:
            return
        board = parts[0]
        rects = decompose(board, shape.tiles, lambda index: shape.exits.get(index, 0))
        shape.rects = rects
        shape.completed = True
        fill_list = shape.get_fill_list()
        if fill_list is not None:
            fill_list.extend(rects)
        fill_entity = self.world.create_entity(
            FillRegion(shape_id=shape.shape_id, rects=list(rects), color=self.fill_color)
        )
        logger.debug("Shape %d filled with %d rectangle(s)", shape.shape_id, len(rects))
        self.event_bus.emit(EVENT_SHAPE_FILLED, shape=shape, rects=list(rects), fill_entity=fill_entity)

    def clear_fills(self) -> None:
        for entity, _ in list(self.world.get_component(FillRegion)):
            self.world.delete_entity(entity, immediate=True)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def on_level_loaded(self, sender, **kwargs):
        if self._ensure_registry() is None:
            return
        self.bake()

    def on_level_reset(self, sender, **kwargs):
        if self.registry() is None:
            return
        self.clear_fills()
        self.rebake()

    def on_tiles_changed(self, sender, **kwargs):
        self.rebake()

    def on_level_unloaded(self, sender, **kwargs):
        self.clear_fills()
        entity = self._level_entity()
        if entity is not None and self.world.has_component(entity, ShapeRegistry):
            self.world.remove_component(entity, ShapeRegistry)

    def on_dot_added(self, sender, **kwargs):
        tile = kwargs.get('tile')
        if tile is None:
            return
        self.add_point(tile)

    def on_dot_consumed(self, sender, **kwargs):
        tile = kwargs.get('tile')
        if tile is None:
            return
        self.remove_at(tile)
