"""
Test suite for board feasibility.

Covers:
- Grid construction and validation
- exists_on_board / find_path (adjacency, no revisits, case, duplicates)
- path_spells for player-traced paths
- Adjacency helpers
"""

import itertools
import random

import pytest
from pydantic import ValidationError

from boggle.verifiers import Grid, Position, exists_on_board, find_path, path_spells, is_adjacent, neighbors


GRID = Grid.from_rows(["CATS", "DOGE", "XYZW", "QRST"])


def _all_path_words(grid: Grid, max_len: int) -> set:
    """Every word spelled by some simple king-move path, by brute force."""
    words = set()

    def extend(path):
        words.add(grid.word_for(path))
        if len(path) == max_len:
            return
        for nxt in neighbors(path[-1], grid):
            if nxt not in path:
                extend(path + [nxt])

    for start in grid.positions():
        extend([start])
    return words


class TestGrid:
    """Test grid construction."""

    def test_from_rows_strings(self):
        """Rows given as strings are split into single letters."""
        assert GRID.n_rows == 4
        assert GRID.n_cols == 4
        assert GRID.letter_at(Position(1, 2)) == "G"

    def test_ragged_rows_rejected(self):
        """All rows must have the same length."""
        with pytest.raises(ValidationError):
            Grid.from_rows(["CAT", "DO"])

    def test_empty_grid_rejected(self):
        """A grid needs at least one cell."""
        with pytest.raises(ValidationError):
            Grid.from_rows([])

    def test_multi_letter_cell_rejected(self):
        """Each cell holds exactly one character."""
        with pytest.raises(ValidationError):
            Grid.from_rows([["QU", "A"]])

    def test_grid_is_frozen(self):
        """The board cannot be reassigned mid-round."""
        with pytest.raises(ValidationError):
            GRID.cells = (("A",),)

    def test_contains(self):
        """Bounds are 0 <= row < rows and 0 <= col < cols."""
        assert GRID.contains(Position(0, 0))
        assert GRID.contains(Position(3, 3))
        assert not GRID.contains(Position(4, 0))
        assert not GRID.contains(Position(0, -1))

    def test_random_grid_shape_and_letters(self):
        """Random grids use uppercase A-Z at the requested size."""
        grid = Grid.random(5, 3, random.Random(7))
        assert grid.n_rows == 5
        assert grid.n_cols == 3
        assert all(letter.isupper() and letter.isalpha() for row in grid.cells for letter in row)

    def test_random_grid_seeded(self):
        """Same seed, same board."""
        assert Grid.random(rng=random.Random(42)) == Grid.random(rng=random.Random(42))

    def test_word_for_path(self):
        """Candidate words are lowercase and follow path order."""
        assert GRID.word_for([Position(0, 0), Position(0, 1), Position(0, 2)]) == "cat"
        assert GRID.word_for([]) == ""


class TestExistsOnBoard:
    """Test the path search."""

    def test_straight_line_word(self):
        """CAT runs along the top row."""
        assert exists_on_board("cat", GRID) is True

    def test_word_with_diagonal_moves(self):
        """TOGA needs diagonal steps T->O and G->A."""
        assert exists_on_board("toga", GRID) is True
        assert exists_on_board("goat", GRID) is True

    def test_word_not_on_board(self):
        """R and E are never adjacent."""
        assert exists_on_board("rest", GRID) is False

    def test_revisit_not_allowed(self):
        """ZOO would need the single O twice."""
        assert exists_on_board("zoo", GRID) is False

    def test_revisiting_path_only(self):
        """ABA on a board with one A can only be traced by reusing the A."""
        grid = Grid.from_rows(["AB", "XX"])
        assert exists_on_board("aba", grid) is False

    def test_alternate_non_revisiting_path(self):
        """A second A adjacent to B gives a legal route."""
        grid = Grid.from_rows(["AB", "XA"])
        assert exists_on_board("aba", grid) is True

    def test_case_insensitive(self):
        """Word and grid case do not matter."""
        assert exists_on_board("CAT", GRID) is True
        assert exists_on_board("cat", Grid.from_rows(["cat"])) is True

    def test_empty_word(self):
        """The empty word is never on the board."""
        assert exists_on_board("", GRID) is False
        assert find_path("", GRID) is None

    def test_single_letter(self):
        """A single letter only needs to be present."""
        assert exists_on_board("x", GRID) is True
        assert exists_on_board("k", GRID) is False

    def test_duplicate_letters(self):
        """Duplicate letters can each be used once per path."""
        grid = Grid.from_rows(["AB", "BA"])
        assert exists_on_board("abab", grid) is True
        assert exists_on_board("aa", grid) is True
        assert exists_on_board("aaa", grid) is False
        assert exists_on_board("ababa", grid) is False

    def test_first_start_fails_second_succeeds(self):
        """A failed attempt from one start must not block the next start."""
        # The A at (0, 0) reaches B but no C; the A at (2, 2) reaches B then C
        grid = Grid.from_rows(["ABX", "XXX", "CBA"])
        assert exists_on_board("abc", grid) is True

    def test_word_longer_than_board(self):
        """A word with more letters than cells can't fit."""
        grid = Grid.from_rows(["A"])
        assert exists_on_board("aa", grid) is False
        assert exists_on_board("a", grid) is True

    def test_matches_brute_force(self):
        """Search agrees with exhaustive path enumeration on small boards."""
        rng = random.Random(1234)
        for _ in range(10):
            grid = Grid.from_rows([
                "".join(rng.choice("AB") for _ in range(3))
                for _ in range(2)
            ])
            reachable = _all_path_words(grid, max_len=4)
            for n in range(1, 5):
                for letters in itertools.product("ab", repeat=n):
                    word = "".join(letters)
                    assert exists_on_board(word, grid) == (word in reachable), (grid.cells, word)


class TestFindPath:
    """Test the path returned by the search."""

    def test_path_spells_word(self):
        """The returned path is itself a legal route for the word."""
        for word in ["cat", "toga", "west", "dogs", "coat"]:
            path = find_path(word, GRID)
            assert path is not None, word
            assert path_spells(path, word, GRID), word

    def test_path_for_cat(self):
        """CAT is found along the top row."""
        assert find_path("cat", GRID) == [Position(0, 0), Position(0, 1), Position(0, 2)]

    def test_missing_word_has_no_path(self):
        """No path for a word that isn't there."""
        assert find_path("rest", GRID) is None


class TestPathSpells:
    """Test validation of a player-traced path."""

    def test_valid_path(self):
        """Adjacent, distinct, in-bounds tiles spelling the word."""
        assert path_spells([(0, 0), (0, 1), (0, 2)], "cat", GRID) is True

    def test_wrong_word(self):
        """The path spells CAT, not COT."""
        assert path_spells([(0, 0), (0, 1), (0, 2)], "cot", GRID) is False

    def test_non_adjacent_step(self):
        """C(0,0) to T(0,2) skips a column."""
        assert path_spells([(0, 0), (0, 2)], "ct", GRID) is False

    def test_repeated_tile(self):
        """The same tile can't be used twice."""
        grid = Grid.from_rows(["AB", "XX"])
        assert path_spells([(0, 0), (0, 1), (0, 0)], "aba", grid) is False

    def test_out_of_bounds(self):
        """Every tile must be on the board."""
        assert path_spells([(3, 3), (4, 4)], "tx", GRID) is False

    def test_empty_path(self):
        """An empty path spells nothing."""
        assert path_spells([], "", GRID) is False


class TestAdjacency:
    """Test neighbour helpers."""

    def test_king_adjacency(self):
        """Diagonals count as adjacent by default."""
        assert is_adjacent(Position(0, 0), Position(1, 1))
        assert is_adjacent(Position(1, 1), Position(0, 1))
        assert not is_adjacent(Position(0, 0), Position(0, 2))

    def test_cell_not_adjacent_to_itself(self):
        """The zero offset is excluded."""
        assert not is_adjacent(Position(2, 2), Position(2, 2))

    def test_orthogonal_adjacency(self):
        """Orthogonal mode excludes diagonals."""
        assert not is_adjacent(Position(0, 0), Position(1, 1), "orthogonal")
        assert is_adjacent(Position(0, 0), Position(1, 0), "orthogonal")

    def test_unknown_adjacency(self):
        """Only king and orthogonal are supported."""
        with pytest.raises(ValueError):
            is_adjacent(Position(0, 0), Position(0, 1), "hex")

    def test_neighbor_counts(self):
        """Corners have 3 neighbours, inner cells 8."""
        assert len(list(neighbors(Position(0, 0), GRID))) == 3
        assert len(list(neighbors(Position(1, 1), GRID))) == 8
        assert len(list(neighbors(Position(0, 0), GRID, "orthogonal"))) == 2
