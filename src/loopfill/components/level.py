from dataclasses import dataclass, field
from typing import Set, Tuple


@dataclass(slots=True)
class Level:
    """Tag component for the entity holding the currently loaded level.

    ``initial_dots`` is what a reset restores ``dots`` to.
    """
    name: str = "level"
    initial_dots: Tuple[int, ...] = ()
    dots: Set[int] = field(default_factory=set)
