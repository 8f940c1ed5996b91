"""
The player's in-progress tile path.

Tap semantics:
  - tapping an unselected in-bounds cell adjacent to the last one appends it
  - tapping the last selected cell removes it (undo)
  - any other tap is refused and leaves the selection unchanged
"""

from typing import Iterator, List, Tuple

from ..verifiers.board import Adjacency, is_adjacent
from ..verifiers.models import Grid, Position


class Selection:
    """Ordered, duplicate-free, adjacency-constrained sequence of positions."""

    def __init__(self, grid: Grid, adjacency: Adjacency = "king"):
        self.grid = grid
        self.adjacency = adjacency
        self._path: List[Position] = []

    def can_append(self, pos: Position) -> bool:
        if not self.grid.contains(pos) or pos in self._path:
            return False
        return not self._path or is_adjacent(self._path[-1], pos, self.adjacency)

    def append(self, pos: Position) -> bool:
        pos = Position(*pos)
        if not self.can_append(pos):
            return False
        self._path.append(pos)
        return True

    def remove_last(self) -> bool:
        if not self._path:
            return False
        self._path.pop()
        return True

    def tap(self, pos: Position) -> bool:
        """Apply one tap; returns True if the selection changed."""
        pos = Position(*pos)
        if self._path and self._path[-1] == pos:
            return self.remove_last()
        return self.append(pos)

    def clear(self) -> None:
        self._path.clear()

    @property
    def path(self) -> Tuple[Position, ...]:
        return tuple(self._path)

    @property
    def word(self) -> str:
        """Lowercase candidate word for the current path."""
        return self.grid.word_for(self._path)

    def __len__(self) -> int:
        return len(self._path)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._path)

    def __contains__(self, pos: object) -> bool:
        return pos in self._path
