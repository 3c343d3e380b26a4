from typing import AbstractSet, Optional, Sequence

from .board import Board, Coord, premium_at
from .rules import cross_word

LETTER_SCORES_EN = {
    **{c: 1 for c in list("AEILNORSTU")},
    **{c: 2 for c in list("DG")},
    **{c: 3 for c in list("BCMP")},
    **{c: 4 for c in list("FHVWY")},
    "K": 5,
    **{c: 8 for c in list("JX")},
    **{c: 10 for c in list("QZ")},
}

RACK_SIZE = 7
BINGO_BONUS = 50

_LETTER_MULT = {"DL": 2, "TL": 3}
_WORD_MULT = {"DW": 2, "TW": 3}


def _tile_score(ch: Optional[str]) -> int:
    if ch is None:
        return 0
    return LETTER_SCORES_EN.get(ch.upper(), 0)


def _live_premium(board: Board, consumed: AbstractSet[Coord], r: int, c: int) -> Optional[str]:
    # Premiums only count for a tile placed this turn on a square not already spent.
    if board.grid[r][c] is not None or (r, c) in consumed:
        return None
    return premium_at(r, c)


def score_word(
    word: str, positions: Sequence[Coord], board: Board, consumed: AbstractSet[Coord]
) -> int:
    """Score one word: letter values with live letter premiums, times live word premiums."""
    total = 0
    word_mult = 1
    for ch, (r, c) in zip(word, positions):
        letter_score = _tile_score(ch)
        premium = _live_premium(board, consumed, r, c)
        letter_score *= _LETTER_MULT.get(premium, 1)
        word_mult *= _WORD_MULT.get(premium, 1)
        total += letter_score
    return total * word_mult


def score_play(
    word: str,
    positions: Sequence[Coord],
    board: Board,
    consumed: AbstractSet[Coord],
    direction: str,
) -> int:
    """Compute the total score for a play: main word + all cross-words + bingo.

    Rules implemented:
    - Letter/word premiums apply only for newly placed tiles on squares not in `consumed`.
    - A premium on a newly placed tile applies to every word formed that includes that tile
      (main word and any cross-words).
    - Existing tiles contribute their face value and form no new cross-words.

    `board` is the position before the play; a cell is newly placed when it is empty there.
    Neither `board` nor `consumed` is modified.
    """
    total = score_word(word, positions, board, consumed)

    new_tiles = 0
    for ch, (r, c) in zip(word, positions):
        if board.grid[r][c] is not None:
            continue
        new_tiles += 1
        formed = cross_word(board, r, c, ch, direction)
        if formed is None:
            continue
        cross, cross_positions = formed
        total += score_word(cross, cross_positions, board, consumed)

    if new_tiles == RACK_SIZE:
        total += BINGO_BONUS
    return total
