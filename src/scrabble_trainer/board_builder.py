"""Random growth of a connected, rule-valid mid-game board."""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Set

from .board import CENTER, Board, Coord
from .lexicon import Lexicon
from .rules import can_place_word, invalid_runs, reuses_tile, word_cells

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuilderConfig:
    growth_attempts: int = 200
    seed_min_len: int = 3
    seed_max_len: int = 5
    pool_min_len: int = 3
    pool_max_len: int = 6
    soft_tile_target: int = 18
    stop_probability: float = 0.4
    max_tiles: int = 40


@dataclass
class BuiltBoard:
    board: Board
    # Squares whose premium was spent by a generator-placed word.
    consumed: Set[Coord] = field(default_factory=set)


class BoardBuilder:
    def __init__(
        self,
        lexicon: Lexicon,
        rng: Optional[random.Random] = None,
        config: BuilderConfig = BuilderConfig(),
    ):
        self.lexicon = lexicon
        self.rng = rng or random.Random()
        self.config = config
        self._pool = lexicon.words_between(config.pool_min_len, config.pool_max_len)

    def build(self) -> Optional[BuiltBoard]:
        """Grow one board; None when the seed cannot be placed or the result holds an invalid run.

        Raises LexiconUnavailable when the lexicon is empty.
        """
        self.lexicon.require_ready()
        cfg = self.config
        built = BuiltBoard(Board.empty())

        if not self._place_seed(built):
            log.debug("No seed word fits through the center")
            return None

        for _ in range(cfg.growth_attempts):
            if not self._pool:
                break
            word = self.rng.choice(self._pool)
            anchors = list(built.board.filled_cells())
            ar, ac, letter = self.rng.choice(anchors)
            matches = [i for i, ch in enumerate(word) if ch == letter]
            if not matches:
                continue
            idx = self.rng.choice(matches)
            direction = 'H' if self.rng.random() < 0.5 else 'V'
            if direction == 'H':
                row, col = ar, ac - idx
            else:
                row, col = ar - idx, ac

            if not can_place_word(built.board, word, row, col, direction, self.lexicon):
                continue
            if not reuses_tile(built.board, word, row, col, direction):
                continue
            self._commit(built, word, row, col, direction)

            tiles = built.board.count_tiles()
            if tiles >= cfg.soft_tile_target and self.rng.random() < cfg.stop_probability:
                break
            if tiles >= cfg.max_tiles:
                break

        bad = invalid_runs(built.board, self.lexicon)
        if bad:
            log.debug("Rejected board with invalid runs: %s", ", ".join(bad))
            return None
        return built

    def _place_seed(self, built: BuiltBoard) -> bool:
        cfg = self.config
        seeds = [w for w in self._pool if cfg.seed_min_len <= len(w) <= cfg.seed_max_len]
        self.rng.shuffle(seeds)
        for word in seeds:
            col = CENTER - len(word) // 2
            if can_place_word(built.board, word, CENTER, col, 'H', self.lexicon):
                self._commit(built, word, CENTER, col, 'H')
                return True
        return False

    def _commit(self, built: BuiltBoard, word: str, row: int, col: int, direction: str) -> None:
        for (r, c), ch in zip(word_cells(row, col, len(word), direction), word):
            built.board.place(r, c, ch)
            built.consumed.add((r, c))
