"""Word list used for the dictionary membership test."""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

log = logging.getLogger(__name__)


class Dictionary:
    """Lowercase word set, loaded once and read-only afterwards."""

    def __init__(self, words: Iterable[str] = ()):
        self._words = frozenset(w.strip().lower() for w in words if w.strip())

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Dictionary":
        """
        Read one word per line. Blank lines and `#` comments are skipped.
        Raises FileNotFoundError if the path doesn't exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(path)
        with open(path, "r", encoding="utf-8") as f:
            words = [line for line in f if line.strip() and not line.lstrip().startswith("#")]
        dictionary = cls(words)
        log.info("Loaded %s words from %s", f"{len(dictionary):,}", path)
        return dictionary

    def contains(self, word: str) -> bool:
        return word.lower() in self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self._words)


_DEFAULT: Optional[Dictionary] = None


def set_default_dictionary(dictionary: Optional[Dictionary]) -> None:
    global _DEFAULT
    _DEFAULT = dictionary


def check(word: str) -> bool:
    '''
    Returns True if `word` exists in the default dictionary.
    Returns False otherwise, including when no dictionary has been set.
    '''
    return _DEFAULT is not None and _DEFAULT.contains(word)
