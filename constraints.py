from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from model import Board, EMPTY, Point, index_of

DIGITS: Tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 8, 9)

KING_MOVE_OFFSETS: Tuple[Point, ...] = (
    Point(-1, -1),
    Point(-1, 0),
    Point(-1, 1),
    Point(0, -1),
    Point(0, 1),
    Point(1, -1),
    Point(1, 0),
    Point(1, 1),
)

KNIGHT_MOVE_OFFSETS: Tuple[Point, ...] = (
    Point(-2, -1),
    Point(-2, 1),
    Point(2, -1),
    Point(2, 1),
    Point(-1, -2),
    Point(-1, 2),
    Point(1, -2),
    Point(1, 2),
)


def _has_duplicates(values: Iterable[int]) -> bool:
    seen = set()
    for val in values:
        if val == EMPTY:
            continue
        if val in seen:
            return True
        seen.add(val)
    return False


def remove_values(candidates: List[int], values: Iterable[int]) -> None:
    """Drop every occurrence of each value from candidates, in place."""
    excluded = set(values)
    candidates[:] = [v for v in candidates if v not in excluded]


class Constraint:
    name: str = "constraint"

    def excluded_values(self, board: Board, point: Point) -> Iterable[int]:
        """Values this rule forbids at point given the current board."""
        raise NotImplementedError

    def is_satisfied(self, board: Board) -> bool:
        """Return True if no two assigned cells conflict under this rule."""
        raise NotImplementedError


@dataclass
class RowConstraint(Constraint):
    name: str = "row"

    def excluded_values(self, board: Board, point: Point) -> Iterable[int]:
        return [board[index_of(col, point.row)] for col in range(9)]

    def is_satisfied(self, board: Board) -> bool:
        return not any(
            _has_duplicates(board[index_of(col, row)] for col in range(9))
            for row in range(9)
        )


@dataclass
class ColumnConstraint(Constraint):
    name: str = "column"

    def excluded_values(self, board: Board, point: Point) -> Iterable[int]:
        return [board[index_of(point.column, row)] for row in range(9)]

    def is_satisfied(self, board: Board) -> bool:
        return not any(
            _has_duplicates(board[index_of(col, row)] for row in range(9))
            for col in range(9)
        )


def box_cells(point: Point) -> List[Point]:
    start = point.box_start()
    return [
        Point(start.column + dc, start.row + dr) for dr in range(3) for dc in range(3)
    ]


@dataclass
class BoxConstraint(Constraint):
    name: str = "box"

    def excluded_values(self, board: Board, point: Point) -> Iterable[int]:
        return [board[p.idx()] for p in box_cells(point)]

    def is_satisfied(self, board: Board) -> bool:
        for box_r in range(3):
            for box_c in range(3):
                cells = box_cells(Point(box_c * 3, box_r * 3))
                if _has_duplicates(board[p.idx()] for p in cells):
                    return False
        return True


@dataclass
class AdjacencyConstraint(Constraint):
    """No two cells a fixed move apart may hold the same digit."""

    offsets: Sequence[Point] = ()
    name: str = "adjacency"

    def neighbors(self, point: Point) -> List[Point]:
        moved = (point + delta for delta in self.offsets)
        return [p for p in moved if p.is_valid()]

    def excluded_values(self, board: Board, point: Point) -> Iterable[int]:
        return [board[p.idx()] for p in self.neighbors(point)]

    def is_satisfied(self, board: Board) -> bool:
        for index, val in enumerate(board):
            if val == EMPTY:
                continue
            for nb in self.neighbors(Point.from_index(index)):
                if board[nb.idx()] == val:
                    return False
        return True


@dataclass
class AntiKingConstraint(AdjacencyConstraint):
    offsets: Sequence[Point] = KING_MOVE_OFFSETS
    name: str = "anti-king"


@dataclass
class AntiKnightConstraint(AdjacencyConstraint):
    offsets: Sequence[Point] = KNIGHT_MOVE_OFFSETS
    name: str = "anti-knight"


SUDOKU_CONSTRAINTS: Tuple[Constraint, ...] = (
    RowConstraint(),
    ColumnConstraint(),
    BoxConstraint(),
)


def build_constraints(
    anti_king: bool = False, anti_knight: bool = False
) -> List[Constraint]:
    constraints: List[Constraint] = list(SUDOKU_CONSTRAINTS)
    if anti_king:
        constraints.append(AntiKingConstraint())
    if anti_knight:
        constraints.append(AntiKnightConstraint())
    return constraints


def find_candidates(
    board: Board,
    point: Point,
    constraints: Sequence[Constraint] = SUDOKU_CONSTRAINTS,
) -> List[int]:
    """Legal values for the cell at point, ascending.

    An empty list means every digit is already used by a peer, so the search
    branch holding this board is dead.
    """
    candidates = list(DIGITS)
    for constraint in constraints:
        remove_values(candidates, constraint.excluded_values(board, point))
        if not candidates:
            break
    return candidates


def find_conflicts(board: Board, constraints: Sequence[Constraint]) -> List[str]:
    return [c.name for c in constraints if not c.is_satisfied(board)]
