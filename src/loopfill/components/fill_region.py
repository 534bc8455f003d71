from dataclasses import dataclass, field
from typing import List, Tuple

Rect = Tuple[int, int]


@dataclass(slots=True)
class FillRegion:
    """Rectangles (upper-left, lower-right tile indices) filling one completed shape."""
    shape_id: int
    rects: List[Rect] = field(default_factory=list)
    color: Tuple[int, int, int] = (200, 40, 40)
