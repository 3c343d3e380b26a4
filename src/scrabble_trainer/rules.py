"""Word-formation rules shared by the board builder, the move enumerator and
the placement validator.

Directions are 'H' (left to right) and 'V' (top to bottom). A "run" is a
maximal stretch of contiguous filled cells along one direction.
"""

from typing import Iterator, List, Optional, Tuple

from .board import BOARD_SIZE, Board, Coord, in_bounds, perpendicular, step
from .lexicon import Lexicon

Run = Tuple[str, List[Coord], str]


def word_cells(row: int, col: int, length: int, direction: str) -> List[Coord]:
    dr, dc = step(direction)
    return [(row + i * dr, col + i * dc) for i in range(length)]


def fits_on_board(row: int, col: int, length: int, direction: str) -> bool:
    dr, dc = step(direction)
    end_r = row + (length - 1) * dr
    end_c = col + (length - 1) * dc
    return in_bounds(row, col) and in_bounds(end_r, end_c)


def extends_beyond(board: Board, row: int, col: int, length: int, direction: str) -> bool:
    """True if a board letter sits directly before the start or after the end.

    Such a placement would silently join an existing word and form something
    longer than intended.
    """
    dr, dc = step(direction)
    if board.is_filled(row - dr, col - dc):
        return True
    return board.is_filled(row + length * dr, col + length * dc)


def cross_word(
    board: Board, r: int, c: int, letter: str, direction: str
) -> Optional[Tuple[str, List[Coord]]]:
    """Perpendicular word through a new tile at (r, c) for a play along `direction`.

    Walks outward through contiguous filled board cells in both perpendicular
    directions. Returns None when no word of length >= 2 is formed.
    """
    pr, pc = step(perpendicular(direction))
    sr, sc = r, c
    while board.is_filled(sr - pr, sc - pc):
        sr -= pr
        sc -= pc

    letters: List[str] = []
    positions: List[Coord] = []
    rr, cc = sr, sc
    while in_bounds(rr, cc):
        ch = letter if (rr, cc) == (r, c) else board.grid[rr][cc]
        if ch is None:
            break
        letters.append(ch)
        positions.append((rr, cc))
        rr += pr
        cc += pc

    if len(letters) < 2:
        return None
    return "".join(letters), positions


def reuses_tile(board: Board, word: str, row: int, col: int, direction: str) -> bool:
    return any(board.is_filled(r, c) for r, c in word_cells(row, col, len(word), direction))


def can_place_word(
    board: Board, word: str, row: int, col: int, direction: str, lexicon: Lexicon
) -> bool:
    """Placement legality check used while growing a board.

    Overlapping cells must match, the word must not run into neighbouring
    tiles at its ends, and every new letter's cross word must be a word.
    """
    if not fits_on_board(row, col, len(word), direction):
        return False
    cells = word_cells(row, col, len(word), direction)
    for (r, c), ch in zip(cells, word):
        existing = board.grid[r][c]
        if existing is not None and existing != ch:
            return False

    if extends_beyond(board, row, col, len(word), direction):
        return False

    for (r, c), ch in zip(cells, word):
        if board.grid[r][c] is not None:
            continue
        formed = cross_word(board, r, c, ch, direction)
        if formed is not None and formed[0] not in lexicon:
            return False
    return True


def board_runs(board: Board) -> Iterator[Run]:
    """Yield every maximal horizontal and vertical run of length >= 2."""
    for direction in ('H', 'V'):
        dr, dc = step(direction)
        for line in range(BOARD_SIZE):
            r, c = (line, 0) if direction == 'H' else (0, line)
            letters: List[str] = []
            positions: List[Coord] = []
            while True:
                ch = board.get(r, c) if in_bounds(r, c) else None
                if ch is not None:
                    letters.append(ch)
                    positions.append((r, c))
                else:
                    if len(letters) >= 2:
                        yield "".join(letters), positions, direction
                    letters, positions = [], []
                    if not in_bounds(r, c):
                        break
                r += dr
                c += dc


def invalid_runs(board: Board, lexicon: Lexicon) -> List[str]:
    return [word for word, _positions, _dir in board_runs(board) if word not in lexicon]
