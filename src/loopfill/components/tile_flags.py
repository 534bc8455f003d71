from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator

from loopfill.utils.movement import Direction, directions_of


@dataclass(slots=True)
class TileFlags:
    """Per-tile union of traversable exits.

    Tiles without an entry resolve to 0, i.e. no path runs through them.
    """

    flags: Dict[int, int] = field(default_factory=dict)

    def get(self, index: int) -> int:
        return self.flags.get(index, 0)

    def set(self, index: int, flags: int) -> None:
        if flags:
            self.flags[index] = int(flags)
        else:
            self.flags.pop(index, None)

    def directions(self, index: int) -> Iterator[Direction]:
        return directions_of(self.get(index))
