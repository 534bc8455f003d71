from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional, Tuple

Rect = Tuple[int, int]


@dataclass(eq=False)
class Shape:
    """A registered minimal loop through one or more dots.

    ``exits`` maps every loop tile to the directions the loop itself uses there;
    its keys are the shape's tile set. ``remaining`` counts dots not yet
    consumed and the shape completes exactly once, when it reaches zero.
    """

    shape_id: int
    signature: Tuple[int, ...]
    exits: Mapping[int, int]
    dots: Tuple[int, ...]
    remaining: int = -1
    rects: List[Rect] = field(default_factory=list)
    completed: bool = False
    fill_list: Optional[List[Rect]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.exits = MappingProxyType(dict(self.exits))
        self.tiles = frozenset(self.exits)
        if self.remaining < 0:
            self.remaining = len(self.dots)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Shape) and other.shape_id == self.shape_id

    def __hash__(self) -> int:
        return hash(self.shape_id)

    def has_tile(self, index: int) -> bool:
        return index in self.tiles

    def visit(self, func: Callable[[int, Any], Any], context: Any = None) -> bool:
        """Call ``func(index, context)`` per tile; a truthy result stops the walk.

        Returns True if every tile was visited.
        """
        for index in sorted(self.tiles):
            if func(index, context):
                return False
        return True

    def get_fill_list(self) -> Optional[List[Rect]]:
        return self.fill_list

    def set_fill_list(self, fill_list: Optional[List[Rect]]) -> None:
        self.fill_list = fill_list

    def remove_dot(self) -> bool:
        """Logically consume one dot; True only on the call that completes the shape."""
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return self.remaining == 0
