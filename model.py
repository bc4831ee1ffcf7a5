from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

Board = List[int]

BOARD_SIZE = 81
EMPTY = 0


class InvalidBoardError(ValueError):
    """Raised when a board is not 81 integer cells in the range 0-9."""


@dataclass(frozen=True)
class Point:
    column: int = 0
    row: int = 0

    def idx(self) -> int:
        return index_of(self.column, self.row)

    def is_valid(self) -> bool:
        return 0 <= self.column < 9 and 0 <= self.row < 9

    def box_start(self) -> "Point":
        """Top-left point of the 3x3 box holding this point."""
        return Point(3 * (self.column // 3), 3 * (self.row // 3))

    @classmethod
    def from_index(cls, index: int) -> "Point":
        return cls(index % 9, index // 9)

    def __add__(self, other: "Point") -> "Point":
        return Point(self.column + other.column, self.row + other.row)

    def __str__(self) -> str:
        return f"r{self.row + 1}c{self.column + 1}"


def index_of(column: int, row: int) -> int:
    return 9 * row + column


def point_of(index: int) -> Point:
    return Point.from_index(index)


def box_start(point: Point) -> Point:
    return point.box_start()


def is_complete(board: Sequence[int]) -> bool:
    if len(board) != BOARD_SIZE:
        return False
    return all(cell != EMPTY for cell in board)


def validate_board(board: Sequence[int]) -> Board:
    """Check the board shape and cell domain and return a private copy.

    Raises InvalidBoardError for anything that is not a sequence of exactly
    81 integers in [0, 9].
    """
    if isinstance(board, (str, bytes)):
        raise InvalidBoardError("Board must be a sequence of integers, not text.")
    try:
        cells = list(board)
    except TypeError:
        raise InvalidBoardError("Board must be a sequence of integers.") from None
    if len(cells) != BOARD_SIZE:
        raise InvalidBoardError(
            f"Board must have {BOARD_SIZE} cells, got {len(cells)}."
        )
    for i, val in enumerate(cells):
        if isinstance(val, bool) or not isinstance(val, int):
            raise InvalidBoardError(f"Cell {point_of(i)} is not an integer: {val!r}")
        if not 0 <= val <= 9:
            raise InvalidBoardError(f"Cell {point_of(i)} is out of range: {val}")
    return cells


_GRID_DECORATION = set("|-+")


def parse_board(text: str) -> Board:
    """Parse puzzle text such as ``53..7....6..195...`` into a board.

    Digits 1-9 are givens, ``0`` and ``.`` are empty cells. Whitespace and
    grid drawing characters are skipped.
    """
    cells: Board = []
    for ch in text:
        if ch.isspace() or ch in _GRID_DECORATION:
            continue
        if ch == ".":
            cells.append(EMPTY)
        elif ch in "0123456789":
            cells.append(int(ch))
        else:
            raise InvalidBoardError(f"Unexpected character in puzzle: {ch!r}")
    if len(cells) != BOARD_SIZE:
        raise InvalidBoardError(
            f"Puzzle must describe {BOARD_SIZE} cells, got {len(cells)}."
        )
    return cells


def format_board(board: Sequence[int]) -> str:
    lines = []
    for start in range(0, len(board), 9):
        lines.append(" ".join(str(v) for v in board[start : start + 9]))
    return "\n".join(lines)


def board_from_grid(grid: Sequence[Sequence[int]]) -> Board:
    """Flatten a 9x9 row list into a board. Cells are validated as given."""
    try:
        rows = [list(row) for row in grid]
    except TypeError:
        raise InvalidBoardError("Grid must be 9 rows of 9 cells.") from None
    if len(rows) != 9 or any(len(row) != 9 for row in rows):
        raise InvalidBoardError("Grid must be 9 rows of 9 cells.")
    return validate_board([v for row in rows for v in row])


def grid_from_board(board: Sequence[int]) -> List[List[int]]:
    return [list(board[r * 9 : r * 9 + 9]) for r in range(9)]


class PuzzleModel:
    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.board: Board = [EMPTY] * BOARD_SIZE
        self.anti_knight: bool = False
        self.anti_king: bool = False
        self.require_uniqueness: bool = False

    def set_value(self, row: int, col: int, value: int) -> None:
        self.board[index_of(col, row)] = value

    def clear_value(self, row: int, col: int) -> None:
        self.board[index_of(col, row)] = EMPTY

    def clear_digits(self) -> None:
        self.board = [EMPTY] * BOARD_SIZE

    def copy_board(self) -> Board:
        return list(self.board)
