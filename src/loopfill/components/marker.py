from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Set

from loopfill.utils.movement import Direction

if TYPE_CHECKING:
    from loopfill.components.shape import Shape


@dataclass(slots=True)
class Marker:
    """A dot anchored to a tile, tracked only for shape membership."""

    tile: int
    shapes: List["Shape"] = field(default_factory=list)
    explored: Set[Direction] = field(default_factory=set)

    def clear(self) -> None:
        self.shapes.clear()
        self.explored.clear()
