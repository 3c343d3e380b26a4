from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .errors import BoardFormatError

BOARD_SIZE = 15
CENTER = BOARD_SIZE // 2

Coord = Tuple[int, int]

# Standard Scrabble premium squares layout
# Codes: ".." normal, "TW" triple word, "DW" double word, "TL" triple letter, "DL" double letter
PREMIUMS: List[List[str]] = [
    ["TW","..","..","DL","..","..","..","TW","..","..","..","DL","..","..","TW"],
    ["..","DW","..","..","..","TL","..","..","..","TL","..","..","..","DW",".."],
    ["..","..","DW","..","..","..","DL","..","DL","..","..","..","DW","..",".."],
    ["DL","..","..","DW","..","..","..","DL","..","..","..","DW","..","..","DL"],
    ["..","..","..","..","DW","..","..","..","..","..","DW","..","..","..",".."],
    ["..","TL","..","..","..","TL","..","..","..","TL","..","..","..","TL",".."],
    ["..","..","DL","..","..","..","DL","..","DL","..","..","..","DL","..",".."],
    ["TW","..","..","DL","..","..","..","DW","..","..","..","DL","..","..","TW"],
    ["..","..","DL","..","..","..","DL","..","DL","..","..","..","DL","..",".."],
    ["..","TL","..","..","..","TL","..","..","..","TL","..","..","..","TL",".."],
    ["..","..","..","..","DW","..","..","..","..","..","DW","..","..","..",".."],
    ["DL","..","..","DW","..","..","..","DL","..","..","..","DW","..","..","DL"],
    ["..","..","DW","..","..","..","DL","..","DL","..","..","..","DW","..",".."],
    ["..","DW","..","..","..","TL","..","..","..","TL","..","..","..","DW",".."],
    ["TW","..","..","DL","..","..","..","TW","..","..","..","DL","..","..","TW"],
]

TRIPLE_WORD_SQUARES: Tuple[Coord, ...] = tuple(
    (r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE) if PREMIUMS[r][c] == "TW"
)


def premium_at(r: int, c: int) -> Optional[str]:
    code = PREMIUMS[r][c]
    return None if code == ".." else code


def in_bounds(r: int, c: int) -> bool:
    return 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE


def step(direction: str) -> Coord:
    """Unit step along a direction ('H' or 'V')."""
    return (0, 1) if direction == 'H' else (1, 0)


def perpendicular(direction: str) -> str:
    return 'V' if direction == 'H' else 'H'


@dataclass
class Board:
    # grid[r][c] is None for empty, 'A'-'Z' for letters
    grid: List[List[Optional[str]]]

    @staticmethod
    def empty() -> "Board":
        return Board([[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)])

    @staticmethod
    def from_string(multiline: str) -> "Board":
        # 15 lines of 15 chars; '.' empty, 'A-Z' letter
        rows = [line.strip() for line in multiline.strip().splitlines() if line.strip()]
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise BoardFormatError("Board string must be 15 lines of 15 characters")
        grid: List[List[Optional[str]]] = []
        for r in rows:
            row: List[Optional[str]] = []
            for ch in r:
                if ch == '.':
                    row.append(None)
                elif 'A' <= ch <= 'Z':
                    row.append(ch)
                else:
                    raise BoardFormatError(f"Invalid board character: {ch}")
            grid.append(row)
        return Board(grid)

    def to_string(self) -> str:
        return "\n".join("".join(ch or '.' for ch in row) for row in self.grid)

    def get(self, r: int, c: int) -> Optional[str]:
        if in_bounds(r, c):
            return self.grid[r][c]
        return None

    def is_filled(self, r: int, c: int) -> bool:
        return self.get(r, c) is not None

    def place(self, r: int, c: int, letter: str) -> None:
        existing = self.grid[r][c]
        if existing is not None and existing != letter:
            raise ValueError(f"cannot overwrite {existing} at ({r},{c}) with {letter}")
        self.grid[r][c] = letter

    def is_empty(self) -> bool:
        return all(cell is None for row in self.grid for cell in row)

    def filled_cells(self) -> Iterator[Tuple[int, int, str]]:
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                ch = self.grid[r][c]
                if ch is not None:
                    yield r, c, ch

    def count_tiles(self) -> int:
        return sum(1 for _ in self.filled_cells())

    def copy(self) -> "Board":
        return Board([row[:] for row in self.grid])

    def premium_at(self, r: int, c: int) -> Optional[str]:
        return premium_at(r, c)
