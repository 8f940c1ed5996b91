"""Round environment for boggle."""

from .models import (
    Event,
    RoundPhase,
    RoundState,
    SessionConfig,
    SubmitResult,
    ROUND_SECONDS,
    GRID_SIZE,
)
from .selection import Selection
from .persistence import ScoreStore, MemoryStore, JsonFileStore, StoredPreferences
from .session import RoundSession, NOT_IN_DICTIONARY, NOT_ON_BOARD, NOT_IN_PROGRESS

__all__ = [
    "Event",
    "RoundPhase",
    "RoundState",
    "SessionConfig",
    "SubmitResult",
    "ROUND_SECONDS",
    "GRID_SIZE",
    "Selection",
    "ScoreStore",
    "MemoryStore",
    "JsonFileStore",
    "StoredPreferences",
    "RoundSession",
    "NOT_IN_DICTIONARY",
    "NOT_ON_BOARD",
    "NOT_IN_PROGRESS",
]
