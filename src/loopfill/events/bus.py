from blinker import Signal
from typing import Callable, Dict, Optional


class EventBus:
    """Named blinker signals shared by the level, shape, input and render systems.

    Handlers are called as ``fn(bus, **payload)`` and
    ``emit`` returns only after every handler has run.
    """

    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def _signal(self, name: str, create: bool = False) -> Optional[Signal]:
        if create:
            return self._signals.setdefault(name, Signal(name))
        return self._signals.get(name)

    def subscribe(self, name: str, fn: Callable):
        # Strong reference: systems are often created without being stored anywhere.
        self._signal(name, create=True).connect(fn, weak=False)

    def unsubscribe(self, name: str, fn: Callable):
        sig = self._signal(name)
        if sig is not None:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signal(name)
        if sig is not None:
            sig.send(self, **payload)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"            # payload: index, col, row


# ============================================================================
# LEVEL LIFECYCLE
# ============================================================================
EVENT_LEVEL_LOADED = "level_loaded"        # payload: level_entity=int
EVENT_LEVEL_RESET = "level_reset"          # payload: None
EVENT_TILES_CHANGED = "tiles_changed"      # payload: positions=list[int]|None
EVENT_LEVEL_UNLOADED = "level_unloaded"    # payload: None


# ============================================================================
# DOTS & SHAPES
# ============================================================================
EVENT_DOT_ADDED = "dot_added"              # payload: tile=int
EVENT_DOT_CONSUMED = "dot_consumed"        # payload: tile=int
EVENT_SHAPE_CREATED = "shape_created"      # payload: shape=Shape
EVENT_SHAPES_BAKED = "shapes_baked"        # payload: count=int
EVENT_SHAPE_FILLED = "shape_filled"        # payload: shape=Shape, rects=list[(int,int)], fill_entity=int
