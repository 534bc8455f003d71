from typing import Optional, Sequence

from esper import World

from loopfill.constants import FILL_COLOR
from loopfill.events.bus import EventBus
from loopfill.systems.level_system import LevelSystem
from loopfill.systems.shape_system import ShapeSystem


def create_world(
    event_bus: EventBus,
    level_lines: Optional[Sequence[str]] = None,
    *,
    level_name: str = "level",
    fill_color=FILL_COLOR,
) -> World:
    """Build a world with the shape and level systems attached.

    The systems are reachable as ``world.shape_system`` and ``world.level_system``.
    """
    world = World()
    shape_system = ShapeSystem(world, event_bus, fill_color=fill_color)
    level_system = LevelSystem(world, event_bus)
    setattr(world, "shape_system", shape_system)
    setattr(world, "level_system", level_system)
    if level_lines is not None:
        level_system.load(level_lines, name=level_name)
    return world
