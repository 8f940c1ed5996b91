"""Data models for word verification."""

import random
import string
from typing import FrozenSet, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Position(NamedTuple):
    """A single tile coordinate on the grid."""
    row: int
    col: int


class Grid(BaseModel):
    """
    The fixed letter board for one round.

    Cells are stored as a tuple of row tuples so the board cannot be
    mutated once the round has started.
    """

    model_config = ConfigDict(frozen=True)

    cells: Tuple[Tuple[str, ...], ...]

    @field_validator("cells")
    @classmethod
    def _check_shape(cls, cells: Tuple[Tuple[str, ...], ...]) -> Tuple[Tuple[str, ...], ...]:
        if not cells or not cells[0]:
            raise ValueError("Grid must be at least 1x1")
        width = len(cells[0])
        for r, row in enumerate(cells):
            if len(row) != width:
                raise ValueError(f"Row {r} has {len(row)} cells, expected {width}")
            for c, letter in enumerate(row):
                if len(letter) != 1:
                    raise ValueError(f"Cell ({r}, {c}) must be a single character, got '{letter}'")
        return cells

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> "Grid":
        """Build a grid from strings ("CATS") or lists of letters."""
        return cls(cells=tuple(tuple(row) for row in rows))

    @classmethod
    def random(
        cls,
        rows: int = 4,
        cols: int = 4,
        rng: Optional[random.Random] = None,
    ) -> "Grid":
        """Uniform-random uppercase letters A-Z."""
        rng = rng or random.Random()
        letters = string.ascii_uppercase
        return cls(cells=tuple(
            tuple(rng.choice(letters) for _ in range(cols))
            for _ in range(rows)
        ))

    @property
    def n_rows(self) -> int:
        return len(self.cells)

    @property
    def n_cols(self) -> int:
        return len(self.cells[0])

    def contains(self, pos: Position) -> bool:
        """Whether the coordinate lies inside the board."""
        return 0 <= pos[0] < self.n_rows and 0 <= pos[1] < self.n_cols

    def letter_at(self, pos: Position) -> str:
        return self.cells[pos[0]][pos[1]]

    def positions(self) -> Iterator[Position]:
        """All coordinates in row-major order."""
        for row in range(self.n_rows):
            for col in range(self.n_cols):
                yield Position(row, col)

    def word_for(self, path: Sequence[Position]) -> str:
        """The lowercase candidate word traced by `path`."""
        return "".join(self.letter_at(pos) for pos in path).lower()

    def rows_as_strings(self) -> List[str]:
        return ["".join(row) for row in self.cells]


class GameContext(BaseModel):
    """Read-only snapshot handed to every rule during evaluation."""

    model_config = ConfigDict(frozen=True)

    grid: Grid
    previous_words: FrozenSet[str] = frozenset()


class Accepted(BaseModel):
    """The word passed; `bonus` is extra points awarded by a rule."""

    model_config = ConfigDict(frozen=True)

    bonus: int = Field(0, ge=0)


class Rejected(BaseModel):
    """The word failed a check; `reason` is shown to the player."""

    model_config = ConfigDict(frozen=True)

    reason: str


ValidationOutcome = Union[Accepted, Rejected]
