import logging
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .board import Board, Coord
from .lexicon import Lexicon
from .rules import cross_word, extends_beyond, fits_on_board, word_cells
from .scoring import score_play

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Play:
    word: str
    row: int
    col: int
    direction: str  # 'H' or 'V'
    tiles: Tuple[Tuple[Coord, str], ...]  # every cell of the word, in order
    score: int

    @property
    def positions(self) -> List[Coord]:
        return [pos for pos, _ch in self.tiles]

    def new_tiles(self, board: Board) -> Dict[Coord, str]:
        """Tiles this play adds to `board` (cells that are empty there)."""
        return {(r, c): ch for (r, c), ch in self.tiles if board.grid[r][c] is None}

    def __str__(self) -> str:
        arrow = "→" if self.direction == 'H' else "↓"
        return f"{self.word} at ({self.row},{self.col}) {arrow} = {self.score} pts"


def rank_key(play: Play, metric: float) -> Tuple[float, str, int, int, str]:
    """Sort key: higher metric first, then word, row, column, 'H' before 'V'."""
    return (-metric, play.word, play.row, play.col, play.direction)


def _occupied_positions_by_letter(board: Board) -> Dict[str, List[Coord]]:
    by_letter: Dict[str, List[Coord]] = defaultdict(list)
    for r, c, ch in board.filled_cells():
        by_letter[ch].append((r, c))
    return dict(by_letter)


def _candidate_starts_for_word(
    word: str,
    dir_: str,
    occupied_by_letter: Dict[str, List[Coord]],
) -> Sequence[Coord]:
    """Return candidate (row, col) starts that are worth checking.

    A legal play must overlap at least one existing tile with a matching
    letter, so only starts that align some word letter with an equal board
    letter are generated. Every other start would be rejected anyway.
    """
    dr, dc = (0, 1) if dir_ == 'H' else (1, 0)
    L = len(word)
    starts: Set[Coord] = set()
    for i, ch in enumerate(word):
        positions = occupied_by_letter.get(ch)
        if not positions:
            continue
        for r_anchor, c_anchor in positions:
            r0 = r_anchor - i * dr
            c0 = c_anchor - i * dc
            if fits_on_board(r0, c0, L, dir_):
                starts.add((r0, c0))
    return sorted(starts)


class MoveEnumerator:
    """Finds every legal play for a rack on a non-empty board."""

    def __init__(self, lexicon: Lexicon):
        self.lexicon = lexicon

    def enumerate(
        self,
        board: Board,
        rack: Iterable[str],
        consumed: AbstractSet[Coord] = frozenset(),
    ) -> List[Play]:
        """All legal plays in discovery order (word list order, 'H' then 'V', then start).

        Raises LexiconUnavailable when the lexicon is empty.
        """
        self.lexicon.require_ready()
        rack_counts = Counter(ch.upper() for ch in rack)
        occupied = _occupied_positions_by_letter(board)
        if not occupied or not rack_counts:
            return []

        plays: List[Play] = []
        seen: Set[Tuple[str, int, int, str]] = set()
        for word in self.lexicon.all_words():
            for dir_ in ('H', 'V'):
                for r0, c0 in _candidate_starts_for_word(word, dir_, occupied):
                    key = (word, r0, c0, dir_)
                    if key in seen:
                        continue
                    play = self._try_play(board, word, r0, c0, dir_, rack_counts, consumed)
                    if play is not None:
                        seen.add(key)
                        plays.append(play)
        log.debug("Enumerated %d plays for rack %s", len(plays), "".join(sorted(rack_counts.elements())))
        return plays

    def _try_play(
        self,
        board: Board,
        word: str,
        row: int,
        col: int,
        dir_: str,
        rack_counts: Counter,
        consumed: AbstractSet[Coord],
    ) -> Optional[Play]:
        cells = word_cells(row, col, len(word), dir_)
        available = rack_counts.copy()
        touched_existing = False
        used_new = False
        for (r, c), ch in zip(cells, word):
            existing = board.grid[r][c]
            if existing is not None:
                if existing != ch:
                    return None
                touched_existing = True
            else:
                if available[ch] <= 0:
                    return None
                available[ch] -= 1
                used_new = True

        if not (touched_existing and used_new):
            return None
        if extends_beyond(board, row, col, len(word), dir_):
            return None

        for (r, c), ch in zip(cells, word):
            if board.grid[r][c] is not None:
                continue
            formed = cross_word(board, r, c, ch, dir_)
            if formed is not None and formed[0] not in self.lexicon:
                return None

        score = score_play(word, cells, board, consumed, dir_)
        return Play(
            word=word,
            row=row,
            col=col,
            direction=dir_,
            tiles=tuple(zip(cells, word)),
            score=score,
        )


def best_move(
    board: Board,
    rack: Iterable[str],
    lexicon: Lexicon,
    consumed: Optional[AbstractSet[Coord]] = None,
) -> Optional[Play]:
    """Highest-scoring legal play, or None when the rack has no play."""
    plays = MoveEnumerator(lexicon).enumerate(board, rack, consumed or frozenset())
    if not plays:
        return None
    return min(plays, key=lambda p: rank_key(p, p.score))


