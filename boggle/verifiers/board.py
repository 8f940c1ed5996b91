"""
Board feasibility checks.

Answers the question: "Can this word be traced on this grid?"
A word is on the board iff some path exists that:
  - starts on a cell matching the first letter
  - moves only between adjacent cells (8 directions)
  - uses each cell at most once
  - spells the word, compared case-insensitively

The search is independent of the tiles the player actually selected.
"""

from typing import Iterator, List, Literal, Optional, Sequence, Tuple

from .models import Grid, Position


Adjacency = Literal["king", "orthogonal"]

KING_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)
ORTHOGONAL_OFFSETS: Tuple[Tuple[int, int], ...] = ((-1, 0), (0, -1), (0, 1), (1, 0))


def _offsets(adjacency: Adjacency) -> Tuple[Tuple[int, int], ...]:
    if adjacency == "king":
        return KING_OFFSETS
    if adjacency == "orthogonal":
        return ORTHOGONAL_OFFSETS
    raise ValueError(f"Unknown adjacency: {adjacency!r}")


def is_adjacent(a: Position, b: Position, adjacency: Adjacency = "king") -> bool:
    """Whether `b` is one step away from `a` (never true for a == b)."""
    return (b[0] - a[0], b[1] - a[1]) in _offsets(adjacency)


def neighbors(pos: Position, grid: Grid, adjacency: Adjacency = "king") -> Iterator[Position]:
    """In-bounds neighbours of `pos`."""
    for dr, dc in _offsets(adjacency):
        candidate = Position(pos[0] + dr, pos[1] + dc)
        if grid.contains(candidate):
            yield candidate


def _search(
    grid: Grid,
    word: str,
    index: int,
    row: int,
    col: int,
    visited: List[List[bool]],
    path: List[Position],
) -> bool:
    if index == len(word):
        return True
    if row < 0 or row >= grid.n_rows or col < 0 or col >= grid.n_cols:
        return False
    if visited[row][col] or grid.cells[row][col].lower() != word[index]:
        return False

    visited[row][col] = True
    path.append(Position(row, col))

    for dr, dc in KING_OFFSETS:
        if _search(grid, word, index + 1, row + dr, col + dc, visited, path):
            return True

    # Backtrack
    visited[row][col] = False
    path.pop()
    return False


def find_path(word: str, grid: Grid) -> Optional[List[Position]]:
    """
    Return the first path on `grid` that spells `word`, or None.

    Every starting cell gets its own visited buffer, so no marks leak
    from one attempt into the next.
    """
    if not word:
        return None

    target = word.lower()
    for start in grid.positions():
        if grid.letter_at(start).lower() != target[0]:
            continue
        visited = [[False] * grid.n_cols for _ in range(grid.n_rows)]
        path: List[Position] = []
        if _search(grid, target, 0, start.row, start.col, visited, path):
            return path
    return None


def exists_on_board(word: str, grid: Grid) -> bool:
    """True if some non-revisiting, 8-adjacent path on `grid` spells `word`."""
    return find_path(word, grid) is not None


def path_spells(path: Sequence[Position], word: str, grid: Grid) -> bool:
    """Whether `path` itself is a legal route on `grid` that spells `word`."""
    if not path or len(path) != len(word):
        return False
    if len(set(path)) != len(path):
        return False
    if not all(grid.contains(pos) for pos in path):
        return False
    if any(not is_adjacent(a, b) for a, b in zip(path, path[1:])):
        return False
    return grid.word_for(path) == word.lower()
