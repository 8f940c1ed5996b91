import logging
import random
import threading
from typing import Any, Callable, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .models import Event, RoundPhase, RoundState, SessionConfig, SubmitResult
from .persistence import JsonFileStore, MemoryStore, ScoreStore
from .selection import Selection
from ..verifiers.board import exists_on_board
from ..verifiers.data import Dictionary
from ..verifiers.models import GameContext, Grid, Position, Rejected
from ..verifiers.rules import ALL_RULES, RuleEngine, RuleFlag, toggle_flag
from ..verifiers.scoring import score as score_word

log = logging.getLogger(__name__)

NOT_IN_DICTIONARY = "not in dictionary"
NOT_ON_BOARD = "not on board"
NOT_IN_PROGRESS = "round not in progress"

Observer = Callable[[Event, RoundState], None]


class RoundSession(BaseModel):
    """
    Coordinates one player's rounds.

    Holds the grid, found words, score and timer for the current round and
    turns each submission into a single outcome. Every mutation goes through
    one re-entrant lock so a timer thread and an input thread can share a
    session without interleaving score or time updates.

    Attributes:
        config: Session configuration (grid size, round length, rule options)
        dictionary: Word list used for the membership test
        store: Where the high score and rule flags are persisted
        phase: NOT_STARTED, IN_PROGRESS or ENDED
        grid: The current round's board
        found_words: Accepted words, in the order they were played
        score: Points this round
        high_score: Best score across rounds
        time_remaining: Seconds left in the round
        current_word: Candidate word for the live selection
        last_message: Latest rejection reason, for display
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: SessionConfig = Field(default_factory=SessionConfig)
    dictionary: Dictionary = Field(default_factory=Dictionary)
    store: ScoreStore = Field(default_factory=MemoryStore)
    phase: RoundPhase = RoundPhase.NOT_STARTED
    grid: Optional[Grid] = None
    found_words: List[str] = Field(default_factory=list)
    score: int = 0
    high_score: int = 0
    time_remaining: int = 0
    current_word: str = ""
    last_message: Optional[str] = None

    _rng: random.Random = PrivateAttr(default=None)
    _flags: RuleFlag = PrivateAttr(default=ALL_RULES)
    _engine: RuleEngine = PrivateAttr(default=None)
    _selection: Optional[Selection] = PrivateAttr(default=None)
    _lock: Any = PrivateAttr(default_factory=threading.RLock)
    _observers: List[Observer] = PrivateAttr(default_factory=list)

    def model_post_init(self, __context) -> None:
        """Seed the grid generator and pull persisted preferences."""
        self._rng = random.Random(self.config.seed)
        self.high_score = self._load_high_score()
        self._flags = self._load_rule_flags()
        self._engine = RuleEngine.from_flags(self._flags, min_length=self.config.min_length)

    @classmethod
    def create(
        cls,
        config: Optional[SessionConfig] = None,
        dictionary: Optional[Dictionary] = None,
        **config_kwargs: Any
    ) -> "RoundSession":
        """
        Factory method wiring a session from its configuration.

        Loads the dictionary from `config.dictionary_path` when one isn't
        passed in, and uses a JSON store when `config.store_path` is set.

        Raises:
            FileNotFoundError: If the dictionary path doesn't exist
        """
        if config is None:
            config = SessionConfig(**config_kwargs)

        if dictionary is None:
            if config.dictionary_path:
                dictionary = Dictionary.load(config.dictionary_path)
            else:
                log.warning("No dictionary configured; every word will be rejected")
                dictionary = Dictionary()

        store: ScoreStore = JsonFileStore(config.store_path) if config.store_path else MemoryStore()
        return cls(config=config, dictionary=dictionary, store=store)

    # ------------------------------------------------------------------
    # Collaborator access
    # ------------------------------------------------------------------

    def _load(self, what: str, loader: Callable[[], Any], default: Any) -> Any:
        try:
            return loader()
        except Exception as e:
            log.warning("Could not load %s, using default: %s", what, e)
            return default

    def _load_high_score(self) -> int:
        raw = self._load("high score", self.store.load_high_score, 0)
        try:
            value = int(raw)
        except (TypeError, ValueError):
            log.warning("Ignoring stored high score %r", raw)
            return 0
        return max(0, value)

    def _load_rule_flags(self) -> RuleFlag:
        raw = self._load("rule flags", self.store.load_rule_flags, ALL_RULES)
        if isinstance(raw, RuleFlag):
            return raw
        try:
            value = int(raw)
        except (TypeError, ValueError):
            value = -1
        if value < 0 or value & ~ALL_RULES.value:
            log.warning("Ignoring stored rule flags %r", raw)
            return ALL_RULES
        return RuleFlag(value)

    def _save(self, what: str, saver: Callable[[Any], None], value: Any) -> None:
        try:
            saver(value)
        except Exception as e:
            log.warning("Could not save %s: %s", what, e)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register `observer(event, state)`; returns a function that unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, event: Event) -> None:
        if not self._observers:
            return
        snapshot = self.state
        for observer in list(self._observers):
            try:
                observer(event, snapshot)
            except Exception:
                log.exception("Observer failed on %r", event)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> RoundState:
        with self._lock:
            return RoundState(
                phase=self.phase,
                grid=self.grid,
                found_words=list(self.found_words),
                score=self.score,
                high_score=self.high_score,
                time_remaining=self.time_remaining,
                current_word=self.current_word,
                last_message=self.last_message,
            )

    @property
    def rule_flags(self) -> RuleFlag:
        return self._flags

    @property
    def rule_engine(self) -> RuleEngine:
        return self._engine

    @property
    def selection(self) -> Optional[Selection]:
        return self._selection

    @property
    def is_active(self) -> bool:
        return self.phase is RoundPhase.IN_PROGRESS

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start_game(self, grid: Optional[Grid] = None) -> None:
        """
        Begin a new round, discarding whatever the previous one left behind.

        Args:
            grid: Board to play on; a random one is generated when omitted
        """
        with self._lock:
            self.grid = grid or Grid.random(self.config.rows, self.config.cols, self._rng)
            self.found_words = []
            self.score = 0
            self.time_remaining = self.config.duration
            self.current_word = ""
            self.last_message = None
            self._selection = Selection(self.grid, adjacency=self.config.adjacency)
            self.phase = RoundPhase.IN_PROGRESS
            log.info("Round started: %s", " ".join(self.grid.rows_as_strings()))
            self._notify("started")

    def tick(self) -> None:
        """Advance the clock by one second; ends the round at zero."""
        with self._lock:
            if self.phase is not RoundPhase.IN_PROGRESS:
                return
            if self.time_remaining > 0:
                self.time_remaining -= 1
            ended = self.time_remaining == 0
            if ended:
                self.phase = RoundPhase.ENDED
                log.info("Round ended with %d points (%d words)", self.score, len(self.found_words))
            self._notify("tick")
            if ended:
                self._notify("ended")

    def toggle(self, flag: RuleFlag, persist: bool = True) -> RuleFlag:
        """
        Flip one rule on or off; takes effect on the next submission.

        Args:
            flag: The rule to flip
            persist: Save the new flags to the store (off for one-off overrides)
        """
        with self._lock:
            self._flags = toggle_flag(self._flags, flag)
            self._engine.rebuild(self._flags, min_length=self.config.min_length)
            if persist:
                self._save("rule flags", self.store.save_rule_flags, self._flags)
            self._notify("flags")
            return self._flags

    def select(self, pos: Position) -> bool:
        """Tap a tile on the live selection; returns True if it changed."""
        with self._lock:
            if self.phase is not RoundPhase.IN_PROGRESS or self._selection is None:
                return False
            changed = self._selection.tap(pos)
            self.current_word = self._selection.word
            return changed

    def submit_selection(self) -> Optional[SubmitResult]:
        """Submit the word traced by the live selection, then clear it."""
        with self._lock:
            if self._selection is None:
                return None
            path = self._selection.path
            result = self.submit(self._selection.word, path)
            self._selection.clear()
            self.current_word = ""
            return result

    def submit(self, word: str, selection: Iterable[Position] = ()) -> Optional[SubmitResult]:
        """
        Validate and score one word.

        Checks run in order: rules, dictionary, board. The dictionary check
        moves ahead of the rules when `config.dictionary_first` is set.

        Args:
            word: The word to play, any case
            selection: The tiles the player traced, handed to the rules

        Returns:
            None for an empty word, otherwise the SubmitResult
        """
        with self._lock:
            word = word.strip().lower()
            if not word:
                return None
            if self.phase is not RoundPhase.IN_PROGRESS:
                return SubmitResult(word=word, accepted=False, reason=NOT_IN_PROGRESS, score=self.score)

            path = tuple(Position(*pos) for pos in selection)

            if self.config.dictionary_first and not self.dictionary.contains(word):
                return self._reject(word, NOT_IN_DICTIONARY)

            context = GameContext(grid=self.grid, previous_words=frozenset(self.found_words))
            outcome = self._engine.evaluate(word, path, context)
            if isinstance(outcome, Rejected):
                return self._reject(word, outcome.reason)

            if not self.config.dictionary_first and not self.dictionary.contains(word):
                return self._reject(word, NOT_IN_DICTIONARY)

            if not exists_on_board(word, self.grid):
                return self._reject(word, NOT_ON_BOARD)

            points = score_word(word)
            self.found_words.append(word)
            self.score += outcome.bonus + points
            if self.score > self.high_score:
                self.high_score = self.score
                self._save("high score", self.store.save_high_score, self.high_score)
            self.current_word = ""
            self.last_message = None

            log.debug("Accepted '%s' for %d (+%d bonus)", word, points, outcome.bonus)
            self._notify("accepted")
            return SubmitResult(
                word=word,
                accepted=True,
                points=points,
                bonus=outcome.bonus,
                score=self.score,
            )

    def _reject(self, word: str, reason: str) -> SubmitResult:
        self.last_message = reason
        log.debug("Rejected '%s': %s", word, reason)
        self._notify("rejected")
        return SubmitResult(word=word, accepted=False, reason=reason, score=self.score)
