"""
Stores for state that outlives a round: the high score and rule flags.

Failures never reach the game. A store that cannot be read falls back to
defaults (high score 0, all rules enabled), and a store that cannot be
written logs a warning and carries on.
"""

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, ValidationError

from ..verifiers.rules import ALL_RULES, RuleFlag

log = logging.getLogger(__name__)


class StoredPreferences(BaseModel):
    """On-disk layout of the JSON store."""
    high_score: int = Field(0, ge=0)
    rule_flags: int = Field(ALL_RULES.value, ge=0)


class ScoreStore:
    """Interface the round session talks to."""

    def load_high_score(self) -> int:
        raise NotImplementedError("Override in subclass")

    def save_high_score(self, value: int) -> None:
        raise NotImplementedError("Override in subclass")

    def load_rule_flags(self) -> RuleFlag:
        raise NotImplementedError("Override in subclass")

    def save_rule_flags(self, flags: RuleFlag) -> None:
        raise NotImplementedError("Override in subclass")


class MemoryStore(ScoreStore):
    """Keeps everything in memory; used by tests and one-off sessions."""

    def __init__(self, high_score: int = 0, rule_flags: RuleFlag = ALL_RULES):
        self.high_score = high_score
        self.rule_flags = rule_flags

    def load_high_score(self) -> int:
        return self.high_score

    def save_high_score(self, value: int) -> None:
        self.high_score = value

    def load_rule_flags(self) -> RuleFlag:
        return self.rule_flags

    def save_rule_flags(self, flags: RuleFlag) -> None:
        self.rule_flags = flags


class JsonFileStore(ScoreStore):
    """Persists preferences as a small JSON document."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read(self) -> StoredPreferences:
        if not self.path.exists():
            return StoredPreferences()
        try:
            with open(self.path) as f:
                return StoredPreferences(**json.load(f))
        except (OSError, ValueError, TypeError, ValidationError) as e:
            log.warning("Could not read %s, using defaults: %s", self.path, e)
            return StoredPreferences()

    def _write(self, prefs: StoredPreferences) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(prefs.model_dump(), f, indent=2)
        except OSError as e:
            log.warning("Could not write %s: %s", self.path, e)

    def load_high_score(self) -> int:
        return self._read().high_score

    def save_high_score(self, value: int) -> None:
        prefs = self._read()
        prefs.high_score = value
        self._write(prefs)

    def load_rule_flags(self) -> RuleFlag:
        raw = self._read().rule_flags
        if raw & ~ALL_RULES.value:
            log.warning("Ignoring unknown rule flags %r in %s", raw, self.path)
            return ALL_RULES
        return RuleFlag(raw)

    def save_rule_flags(self, flags: RuleFlag) -> None:
        prefs = self._read()
        prefs.rule_flags = flags.value
        self._write(prefs)
