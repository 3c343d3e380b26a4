import logging
import os
from typing import Iterable, Optional, Tuple

from .board import BOARD_SIZE
from .errors import LexiconUnavailable

log = logging.getLogger(__name__)

MIN_WORD_LEN = 2

# Post-2006 terms accepted on top of the base word list.
SUPPLEMENTARY_WORDS = ("EMOJI", "EMOJIS", "SELFIE", "SELFIES", "HASHTAG", "HASHTAGS")


def _normalize(word: str) -> Optional[str]:
    w = word.strip().upper()
    if not (MIN_WORD_LEN <= len(w) <= BOARD_SIZE):
        return None
    if not all('A' <= ch <= 'Z' for ch in w):
        return None
    return w


class Lexicon:
    """Read-only word list: membership test plus ordered enumeration.

    Words are kept uppercase, 2-15 letters, A-Z only. ``all_words()`` is
    ordered by length, then alphabetically.
    """

    def __init__(self, words: Iterable[str] = (), extra: Iterable[str] = ()):
        accepted = set()
        for w in list(words) + list(extra):
            norm = _normalize(w)
            if norm is not None:
                accepted.add(norm)
        self._words = frozenset(accepted)
        self._ordered: Tuple[str, ...] = tuple(sorted(accepted, key=lambda w: (len(w), w)))

    def contains(self, word: str) -> bool:
        return word.upper() in self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self._words)

    def all_words(self) -> Tuple[str, ...]:
        return self._ordered

    def words_between(self, min_len: int, max_len: int) -> Tuple[str, ...]:
        return tuple(w for w in self._ordered if min_len <= len(w) <= max_len)

    def is_ready(self) -> bool:
        return bool(self._words)

    def require_ready(self) -> None:
        if not self._words:
            raise LexiconUnavailable("word list is empty or not loaded")


def load_dictionary(path: str, extra: Iterable[str] = SUPPLEMENTARY_WORDS) -> Lexicon:
    """Read a one-word-per-line file into a Lexicon.

    A missing file yields an empty (not ready) lexicon so callers fail closed.
    """
    if not os.path.exists(path):
        log.warning("Dictionary file not found: %s", path)
        return Lexicon()
    with open(path, "r", encoding="utf-8") as f:
        lexicon = Lexicon((line for line in f if line.strip() and line[0].isalpha()), extra=extra)
    if lexicon.is_ready():
        log.info("Loaded %s words from %s", f"{len(lexicon):,}", path)
    else:
        log.warning("No usable words in %s", path)
    return lexicon
