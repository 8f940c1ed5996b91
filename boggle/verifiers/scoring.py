"""
Point values for accepted words.

Fixed game policy, by letter count:
  3-4 letters -> 1
  5 letters   -> 2
  6 letters   -> 3
  7 letters   -> 5
  8 or more   -> 11

Words shorter than 3 letters (only possible with the minimum-length rule
disabled) are worth nothing.
"""

from typing import Iterable


def score(word: str) -> int:
    """Points for a single word; pure and deterministic."""
    n = len(word)
    if n < 3:
        return 0
    if n <= 4:
        return 1
    if n == 5:
        return 2
    if n == 6:
        return 3
    if n == 7:
        return 5
    return 11


def score_words(words: Iterable[str]) -> int:
    return sum(score(w) for w in words)
