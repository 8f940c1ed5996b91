"""Word verification for boggle rounds."""

from .models import Position, Grid, GameContext, Accepted, Rejected, ValidationOutcome
from .board import exists_on_board, find_path, path_spells, is_adjacent, neighbors
from .rules import (
    RuleFlag,
    ALL_RULES,
    GameRule,
    MinLengthRule,
    UniqueWordRule,
    RuleEngine,
    toggle_flag,
    parse_flag,
)
from .scoring import score, score_words
from .data import Dictionary, check_word, set_default_dictionary

__all__ = [
    # Models
    "Position",
    "Grid",
    "GameContext",
    "Accepted",
    "Rejected",
    "ValidationOutcome",
    # Board search
    "exists_on_board",
    "find_path",
    "path_spells",
    "is_adjacent",
    "neighbors",
    # Rules
    "RuleFlag",
    "ALL_RULES",
    "GameRule",
    "MinLengthRule",
    "UniqueWordRule",
    "RuleEngine",
    "toggle_flag",
    "parse_flag",
    # Scoring
    "score",
    "score_words",
    # Dictionary
    "Dictionary",
    "check_word",
    "set_default_dictionary",
]
