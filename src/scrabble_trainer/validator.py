"""Validation of tiles a player has placed on the board.

The player's tiles are given as a mapping {(row, col): letter}; the board
itself only holds tiles from earlier turns and is never modified here. Every
rejection is returned as a `ValidationResult` carrying a `FailureReason` and a
message meant for the player.
"""

import enum
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, List, Mapping, Optional, Tuple

from .board import BOARD_SIZE, Board, Coord, in_bounds, step
from .errors import LexiconUnavailable
from .lexicon import Lexicon
from .rules import cross_word
from .scoring import score_play


class FailureReason(enum.Enum):
    LEXICON_UNAVAILABLE = "lexicon_unavailable"
    EMPTY = "empty"
    INVALID_TILE = "invalid_tile"
    SQUARE_OCCUPIED = "square_occupied"
    NOT_IN_LINE = "not_in_line"
    NO_WORD = "no_word"
    GAP = "gap"
    TOO_SHORT = "too_short"
    NOT_A_WORD = "not_a_word"
    DISCONNECTED = "disconnected"
    INVALID_CROSS_WORD = "invalid_cross_word"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    word: str = ""
    positions: Tuple[Coord, ...] = ()
    direction: Optional[str] = None
    score: int = 0
    cross_words: Tuple[str, ...] = ()
    reason: Optional[FailureReason] = None
    message: str = ""
    # The word that caused a NOT_A_WORD or INVALID_CROSS_WORD rejection.
    offending_word: Optional[str] = None

    @classmethod
    def failure(
        cls, reason: FailureReason, message: str, offending_word: Optional[str] = None
    ) -> "ValidationResult":
        return cls(valid=False, reason=reason, message=message, offending_word=offending_word)

    def to_dict(self) -> Dict[str, object]:
        if not self.valid:
            return {
                "valid": False,
                "reason": self.reason.value if self.reason else None,
                "error": self.message,
                "word": self.offending_word,
            }
        return {
            "valid": True,
            "word": self.word,
            "positions": [list(p) for p in self.positions],
            "dir": self.direction,
            "score": self.score,
            "crossWords": list(self.cross_words),
        }


_Extracted = List[Tuple[Coord, str]]


def _is_tile_letter(letter: object) -> bool:
    # Checked after uppercasing: a few letters grow on upper(), e.g. sharp s becomes SS.
    if not isinstance(letter, str) or len(letter) != 1:
        return False
    up = letter.upper()
    return len(up) == 1 and "A" <= up <= "Z"


@dataclass
class _Placement:
    board: Board
    placed: Dict[Coord, str] = field(default_factory=dict)

    def letter_at(self, r: int, c: int) -> Optional[str]:
        return self.placed.get((r, c)) or self.board.grid[r][c]

    def extract(self, direction: str) -> Optional[_Extracted]:
        """Run through the placed tiles along `direction`, or None if there is a gap."""
        dr, dc = step(direction)
        coords = sorted(self.placed)
        (sr, sc), (er, ec) = coords[0], coords[-1]
        while in_bounds(sr - dr, sc - dc) and self.board.grid[sr - dr][sc - dc] is not None:
            sr, sc = sr - dr, sc - dc
        while in_bounds(er + dr, ec + dc) and self.board.grid[er + dr][ec + dc] is not None:
            er, ec = er + dr, ec + dc

        run: _Extracted = []
        r, c = sr, sc
        while True:
            letter = self.letter_at(r, c)
            if letter is None:
                return None
            run.append(((r, c), letter))
            if (r, c) == (er, ec):
                return run
            r, c = r + dr, c + dc


class PlacementValidator:
    def __init__(self, lexicon: Lexicon):
        self.lexicon = lexicon

    def validate(
        self,
        board: Board,
        consumed: AbstractSet[Coord],
        placed: Mapping[Coord, str],
    ) -> ValidationResult:
        try:
            self.lexicon.require_ready()
        except LexiconUnavailable:
            return ValidationResult.failure(
                FailureReason.LEXICON_UNAVAILABLE, "The dictionary is not loaded yet."
            )

        if not placed:
            return ValidationResult.failure(FailureReason.EMPTY, "Place at least one tile.")

        tiles: Dict[Coord, str] = {}
        for (r, c), letter in placed.items():
            if not in_bounds(r, c) or not _is_tile_letter(letter):
                return ValidationResult.failure(
                    FailureReason.INVALID_TILE,
                    f"Tiles must be single letters on a {BOARD_SIZE}x{BOARD_SIZE} board.",
                )
            if board.grid[r][c] is not None:
                return ValidationResult.failure(
                    FailureReason.SQUARE_OCCUPIED, f"Square ({r},{c}) is already taken."
                )
            tiles[(r, c)] = letter.upper()

        rows = {r for r, _c in tiles}
        cols = {c for _r, c in tiles}
        placement = _Placement(board, tiles)

        if len(tiles) == 1:
            chosen = self._resolve_single(placement)
            if chosen is None:
                return ValidationResult.failure(FailureReason.NO_WORD, "No word formed.")
            direction, run = chosen
        else:
            if len(rows) == 1:
                direction = 'H'
            elif len(cols) == 1:
                direction = 'V'
            else:
                return ValidationResult.failure(
                    FailureReason.NOT_IN_LINE, "Tiles must all be in one row or one column."
                )
            run = placement.extract(direction)
            if run is None:
                return ValidationResult.failure(FailureReason.GAP, "There is a gap in your word.")
            if len(run) < 2:
                return ValidationResult.failure(
                    FailureReason.TOO_SHORT, "Word must be at least 2 letters."
                )

        word = "".join(letter for _pos, letter in run)
        positions = [pos for pos, _letter in run]

        if word not in self.lexicon:
            # Letters in the order the player put them down.
            placed_letters = "".join(tiles.values())
            if len(run) != len(tiles):
                message = (
                    f'"{word}" is not a valid word. (Your letters {placed_letters} '
                    f'combined with adjacent board tiles to form "{word}".)'
                )
            else:
                message = f'"{word}" is not a valid word.'
            return ValidationResult.failure(FailureReason.NOT_A_WORD, message, offending_word=word)

        cross_words: List[str] = []
        invalid_cross: Optional[str] = None
        for (r, c), letter in run:
            if board.grid[r][c] is not None:
                continue
            formed = cross_word(board, r, c, letter, direction)
            if formed is None:
                continue
            cross_words.append(formed[0])
            if invalid_cross is None and formed[0] not in self.lexicon:
                invalid_cross = formed[0]

        touches_existing = any(board.grid[r][c] is not None for r, c in positions)
        connects_by_cross = any(cw in self.lexicon for cw in cross_words)
        if not touches_existing and not connects_by_cross:
            return ValidationResult.failure(
                FailureReason.DISCONNECTED, "Your word must connect to the existing board."
            )

        if invalid_cross is not None:
            return ValidationResult.failure(
                FailureReason.INVALID_CROSS_WORD,
                f'Cross-word "{invalid_cross}" is not valid.',
                offending_word=invalid_cross,
            )

        score = score_play(word, positions, board, consumed, direction)
        return ValidationResult(
            valid=True,
            word=word,
            positions=tuple(positions),
            direction=direction,
            score=score,
            cross_words=tuple(cross_words),
        )

    @staticmethod
    def _resolve_single(placement: _Placement) -> Optional[Tuple[str, _Extracted]]:
        # A lone tile can read either way: take the longer word, horizontal on a tie.
        horizontal = placement.extract('H') or []
        vertical = placement.extract('V') or []
        if len(horizontal) >= 2 and len(horizontal) >= len(vertical):
            return 'H', horizontal
        if len(vertical) >= 2:
            return 'V', vertical
        return None


