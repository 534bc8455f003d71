from __future__ import annotations

from typing import Iterable, List, Tuple

Signature = Tuple[int, ...]


def canonical_signature(corners: Iterable[int]) -> Signature:
    """Sort corner indices so the same loop found from any start compares equal."""
    return tuple(sorted(corners))


class ShapeSignatures:
    """Corner signatures of every loop accepted during the current bake."""

    def __init__(self) -> None:
        self._known: List[Signature] = []

    def __len__(self) -> int:
        return len(self._known)

    def add(self, corners: Iterable[int]) -> bool:
        """Register ``corners`` unless already known; True when it was new."""
        signature = canonical_signature(corners)
        if self._find(signature):
            return False
        self._known.append(signature)
        return True

    def clear(self) -> None:
        self._known.clear()

    def _find(self, signature: Signature) -> bool:
        n = len(signature)
        for known in self._known:
            if len(known) == n and all(a == b for a, b in zip(known, signature)):
                return True
        return False
