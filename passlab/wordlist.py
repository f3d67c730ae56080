"""
passlab.wordlist

Offline word list, one lowercase word per line, bundled under passlab/data.
A store reads its file at most once and keeps the cleaned set in memory.
A missing or unreadable file is not an error: the store just reports an
empty list (size 0).
"""

import logging
import os
import threading
from typing import FrozenSet, Optional, Tuple

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
DEFAULT_WORDLIST_PATH = os.path.join(DATA_DIR, "common_words_en.txt")

Words = Tuple[FrozenSet[str], int]

_EMPTY: Words = (frozenset(), 0)


def parse_words(text: str) -> FrozenSet[str]:
    """Lowercase each line and keep only purely alphabetic tokens."""
    words = set()
    for line in text.splitlines():
        w = line.strip().lower()
        if not w or not w.isalpha():
            continue
        words.add(w)
    return frozenset(words)


class WordlistStore:
    """
    Lazily loaded, thread-safe word list.

    Concurrent first callers block on the lock and the file is read once;
    everyone then shares the same frozenset.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or DEFAULT_WORDLIST_PATH
        self._lock = threading.Lock()
        self._cached: Optional[Words] = None

    def load_words(self) -> Words:
        cached = self._cached
        if cached is not None:
            return cached
        with self._lock:
            if self._cached is None:
                self._cached = self._read()
            return self._cached

    @property
    def loaded(self) -> bool:
        return self._cached is not None

    def reset(self) -> None:
        """Forget the cached list so the next load re-reads the file."""
        with self._lock:
            self._cached = None

    def _read(self) -> Words:
        if not os.path.exists(self.path):
            logger.warning("Word list not found at %s; dictionary checks disabled", self.path)
            return _EMPTY
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read word list %s: %s", self.path, e)
            return _EMPTY
        words = parse_words(text)
        logger.debug("Loaded %d words from %s", len(words), self.path)
        return words, len(words)


_default_store: Optional[WordlistStore] = None
_default_lock = threading.Lock()


def default_store() -> WordlistStore:
    """Process-wide store for the bundled list, created on first use."""
    global _default_store
    if _default_store is None:
        with _default_lock:
            if _default_store is None:
                _default_store = WordlistStore()
    return _default_store


def load_words() -> Words:
    return default_store().load_words()
