"""Pluggable word rules and the engine that runs them in order."""

from enum import Flag, auto
from typing import Dict, List, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .models import Accepted, GameContext, Position, Rejected, ValidationOutcome


class RuleFlag(Flag):
    """Independently togglable game rules."""
    NONE = 0
    MIN_LENGTH = auto()
    UNIQUE_WORDS = auto()


ALL_RULES = RuleFlag.MIN_LENGTH | RuleFlag.UNIQUE_WORDS

FLAG_NAMES: Dict[str, RuleFlag] = {
    "min_length": RuleFlag.MIN_LENGTH,
    "unique_words": RuleFlag.UNIQUE_WORDS,
}


def toggle_flag(flags: RuleFlag, flag: RuleFlag) -> RuleFlag:
    """Flip one flag; applying it twice restores the original set."""
    return flags ^ flag


def parse_flag(name: str) -> RuleFlag:
    """Look up a flag by its config name ("min_length", "unique_words")."""
    try:
        return FLAG_NAMES[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown rule '{name}'. Expected one of: {', '.join(FLAG_NAMES)}"
        ) from None


class GameRule(BaseModel):
    """
    A single policy check.

    Subclasses implement `evaluate` and return Accepted (optionally with a
    bonus) or Rejected with a player-facing reason.
    """

    model_config = ConfigDict(frozen=True)

    def evaluate(
        self,
        word: str,
        path: Sequence[Position],
        context: GameContext,
    ) -> ValidationOutcome:
        raise NotImplementedError("Override in subclass")


class MinLengthRule(GameRule):
    """Words must have at least `min_length` letters."""

    min_length: int = Field(3, ge=1)

    def evaluate(self, word, path, context):
        if len(word) >= self.min_length:
            return Accepted()
        return Rejected(reason="word too short")


class UniqueWordRule(GameRule):
    """Each word may only be played once per round."""

    def evaluate(self, word, path, context):
        if word in context.previous_words:
            return Rejected(reason="word already played")
        return Accepted()


class RuleEngine:
    """
    Runs rules in order, fail-fast.

    - The first Rejected stops the pipeline and is returned as-is.
    - The first Accepted with a positive bonus is returned immediately;
      bonuses are not accumulated across rules.
    - Otherwise the word is Accepted with no bonus.
    """

    def __init__(self, rules: Sequence[GameRule] = ()):
        self.rules: List[GameRule] = list(rules)

    @classmethod
    def from_flags(cls, flags: RuleFlag, min_length: int = 3) -> "RuleEngine":
        engine = cls()
        engine.rebuild(flags, min_length=min_length)
        return engine

    def rebuild(self, flags: RuleFlag, min_length: int = 3) -> None:
        """Replace the pipeline with one rule per enabled flag, in canonical order."""
        rules: List[GameRule] = []
        if RuleFlag.MIN_LENGTH in flags:
            rules.append(MinLengthRule(min_length=min_length))
        if RuleFlag.UNIQUE_WORDS in flags:
            rules.append(UniqueWordRule())
        self.rules = rules

    def evaluate(
        self,
        word: str,
        path: Sequence[Position],
        context: GameContext,
    ) -> ValidationOutcome:
        for rule in self.rules:
            outcome = rule.evaluate(word, path, context)
            if isinstance(outcome, Rejected):
                return outcome
            if outcome.bonus > 0:
                return outcome
        return Accepted()
