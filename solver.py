from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from constraints import (
    Constraint,
    build_constraints,
    find_candidates,
    find_conflicts,
)
from logging_utils import LOGGER_NAME
from model import (
    BOARD_SIZE,
    EMPTY,
    Board,
    InvalidBoardError,
    Point,
    is_complete,
    validate_board,
)

__all__ = ["SolverResult", "SudokuSolver", "candidates", "is_complete", "solve"]

log = logging.getLogger(LOGGER_NAME)

PROGRESS_INTERVAL_S = 60


@dataclass
class SolverResult:
    status: str
    solution: Optional[Board]
    duration_ms: int
    solutions_found: int = 0
    nodes: int = 0
    message: str = ""

    @property
    def solved(self) -> bool:
        return self.solution is not None


class SudokuSolver:
    def __init__(
        self,
        givens: Sequence[int],
        anti_knight: bool = False,
        anti_king: bool = False,
    ) -> None:
        self.givens = givens
        self.anti_knight = anti_knight
        self.anti_king = anti_king
        self.nodes = 0

    def _constraints(self) -> List[Constraint]:
        return build_constraints(anti_king=self.anti_king, anti_knight=self.anti_knight)

    def _search(
        self,
        board: Board,
        start_index: int,
        constraints: Sequence[Constraint],
        max_solutions: int,
        solutions: List[Board],
        start_time: float,
        last_report: List[float],
        logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        now = time.time()
        if now - last_report[0] >= PROGRESS_INTERVAL_S:
            filled = sum(1 for v in board if v != EMPTY)
            log.info(
                "%ds elapsed; filled %d/81 cells; solutions found %d",
                int(now - start_time),
                filled,
                len(solutions),
            )
            last_report[0] = now
        if is_complete(board):
            solutions.append(board)
            return
        index = next(
            (i for i in range(start_index, BOARD_SIZE) if board[i] == EMPTY), None
        )
        if index is None:
            return
        point = Point.from_index(index)
        options = find_candidates(board, point, constraints)
        if not options and logger:
            logger(f"Dead end: {point} has no candidates")
        for val in options:
            attempt = list(board)
            attempt[index] = val
            self.nodes += 1
            if logger:
                logger(f"Guess: {point} = {val}")
            found = len(solutions)
            self._search(
                attempt,
                index + 1,
                constraints,
                max_solutions,
                solutions,
                start_time,
                last_report,
                logger,
            )
            if len(solutions) >= max_solutions:
                return
            if logger and len(solutions) == found:
                logger(f"Backtrack: {point} != {val}")

    def solve(
        self,
        require_uniqueness: bool = False,
        logger: Optional[Callable[[str], None]] = None,
    ) -> SolverResult:
        start = time.time()
        self.nodes = 0

        def finish(status: str, solution: Optional[Board], found: int, message: str):
            return SolverResult(
                status=status,
                solution=solution,
                duration_ms=int((time.time() - start) * 1000),
                solutions_found=found,
                nodes=self.nodes,
                message=message,
            )

        try:
            board = validate_board(self.givens)
        except InvalidBoardError as exc:
            return finish("invalid-input", None, 0, str(exc))

        constraints = self._constraints()
        log.debug("active constraints: %s", ", ".join(c.name for c in constraints))
        conflicts = find_conflicts(board, constraints)
        if conflicts:
            log.warning("givens violate %s constraint(s)", ", ".join(conflicts))
            return finish(
                "no-solution", None, 0, "Contradiction in givens or constraints."
            )

        solutions: List[Board] = []
        max_solutions = 2 if require_uniqueness else 1
        log.info("solve start")
        self._search(
            board,
            0,
            constraints,
            max_solutions,
            solutions,
            start,
            [start],
            logger,
        )
        result_ms = int((time.time() - start) * 1000)
        log.info(
            "solve end in %d ms; %d guesses; solutions found %d",
            result_ms,
            self.nodes,
            len(solutions),
        )
        if not solutions:
            return finish("no-solution", None, 0, "No solution found.")
        if require_uniqueness and len(solutions) > 1:
            return finish(
                "multiple", solutions[0], len(solutions), "Multiple solutions exist."
            )
        return finish("solved", solutions[0], len(solutions), "Solved successfully.")


def solve(
    board: Sequence[int],
    anti_king: bool = False,
    anti_knight: bool = False,
    require_uniqueness: bool = False,
) -> SolverResult:
    solver = SudokuSolver(board, anti_knight=anti_knight, anti_king=anti_king)
    return solver.solve(require_uniqueness=require_uniqueness)


def candidates(
    board: Sequence[int],
    column: int,
    row: int,
    anti_king: bool = False,
    anti_knight: bool = False,
) -> List[int]:
    """Legal values for (column, row), ascending. Raises InvalidBoardError."""
    cells = validate_board(board)
    point = Point(column, row)
    if not point.is_valid():
        raise InvalidBoardError(f"Cell ({column}, {row}) is outside the board.")
    return find_candidates(
        cells, point, build_constraints(anti_king=anti_king, anti_knight=anti_knight)
    )
