"""
Pydantic models for the environment layer.

This module contains the data models (configuration, round snapshots, submit
results) used by the round session. The logic classes (Selection,
RoundSession, the stores) remain in their respective files.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..verifiers.board import Adjacency
from ..verifiers.models import Grid


Event = Literal["started", "tick", "ended", "accepted", "rejected", "flags"]

ROUND_SECONDS = 180
GRID_SIZE = 4


class RoundPhase(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    ENDED = "ended"


class SessionConfig(BaseModel):
    """Configuration for a round session."""
    rows: int = Field(GRID_SIZE, ge=1)
    cols: int = Field(GRID_SIZE, ge=1)
    duration: int = Field(ROUND_SECONDS, ge=1)
    min_length: int = Field(3, ge=1)
    seed: Optional[int] = None
    adjacency: Adjacency = "king"  # for the live selection only
    dictionary_first: bool = False  # check the dictionary before the rules
    dictionary_path: Optional[str] = None
    store_path: Optional[str] = None


class SubmitResult(BaseModel):
    """Result of a single submission."""
    word: str
    accepted: bool
    points: int = 0
    bonus: int = 0
    reason: Optional[str] = None
    score: int = 0


class RoundState(BaseModel):
    """Snapshot of everything the display collaborator reads."""
    phase: RoundPhase = RoundPhase.NOT_STARTED
    grid: Optional[Grid] = None
    found_words: List[str] = Field(default_factory=list)
    score: int = Field(0, ge=0)
    high_score: int = Field(0, ge=0)
    time_remaining: int = Field(0, ge=0)
    current_word: str = ""
    last_message: Optional[str] = None
