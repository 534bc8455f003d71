from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from loopfill.components.marker import Marker
from loopfill.components.shape import Shape
from loopfill.utils.shape_signatures import ShapeSignatures


@dataclass
class ShapeRegistry:
    """Per-level dots and the shapes baked from them.

    Lives on the level entity and goes away with it; nothing here is shared
    between levels.
    """

    markers: Dict[int, Marker] = field(default_factory=dict)
    shapes: List[Shape] = field(default_factory=list)
    signatures: ShapeSignatures = field(default_factory=ShapeSignatures)
    next_id: int = 1

    def add_marker(self, tile: int) -> Marker:
        marker = self.markers.get(tile)
        if marker is None:
            marker = self.markers[tile] = Marker(tile=tile)
        return marker

    def is_marker(self, tile: int) -> bool:
        return tile in self.markers

    def clear_shapes(self) -> None:
        for marker in self.markers.values():
            marker.clear()
        self.shapes.clear()
        self.signatures.clear()
