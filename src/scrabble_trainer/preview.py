from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, List, Mapping, Set, Tuple

from .board import Board, Coord, in_bounds
from .lexicon import Lexicon
from .rules import board_runs
from .scoring import score_word


@dataclass(frozen=True)
class LivePreview:
    words: Tuple[str, ...]
    cells: FrozenSet[Coord]
    score: int


def live_words(
    board: Board,
    consumed: AbstractSet[Coord],
    placed: Mapping[Coord, str],
    lexicon: Lexicon,
) -> LivePreview:
    """Words the tiles placed so far already spell, with a running score.

    Each word is scored on its own, without cross-word totals, so a tile shared
    by two words is not counted twice through `score_play`.
    """
    merged = board.copy()
    for (r, c), letter in placed.items():
        if in_bounds(r, c) and board.grid[r][c] is None:
            merged.grid[r][c] = letter.upper()

    words: List[str] = []
    cells: Set[Coord] = set()
    total = 0
    for word, positions, _direction in board_runs(merged):
        if not any(pos in placed for pos in positions):
            continue
        if word not in lexicon:
            continue
        words.append(word)
        cells.update(positions)
        total += score_word(word, positions, board, consumed)
    return LivePreview(words=tuple(words), cells=frozenset(cells), score=total)
