import importlib
import logging

import pytest

from constraints import SUDOKU_CONSTRAINTS, find_conflicts
from model import InvalidBoardError, index_of, is_complete
from solver import SudokuSolver, candidates, solve


def assert_valid_solution(board):
    assert is_complete(board)
    for row in range(9):
        assert sorted(board[index_of(c, row)] for c in range(9)) == list(range(1, 10))
    for col in range(9):
        assert sorted(board[index_of(col, r)] for r in range(9)) == list(range(1, 10))
    for br in range(0, 9, 3):
        for bc in range(0, 9, 3):
            box = [board[index_of(bc + c, br + r)] for r in range(3) for c in range(3)]
            assert sorted(box) == list(range(1, 10))


def test_easy_puzzle_matches_known_solution(easy_puzzle, easy_solution):
    result = solve(easy_puzzle)
    assert result.status == "solved"
    assert result.solved
    assert result.solution == easy_solution
    assert result.solutions_found == 1
    assert result.nodes > 0
    assert_valid_solution(result.solution)


def test_caller_board_is_not_mutated(easy_puzzle):
    before = list(easy_puzzle)
    solve(easy_puzzle)
    assert easy_puzzle == before


def test_complete_board_is_returned_unchanged(easy_solution):
    result = solve(easy_solution)
    assert result.status == "solved"
    assert result.solution == easy_solution
    assert result.nodes == 0


def test_single_empty_cell_gets_its_only_value(easy_solution):
    board = list(easy_solution)
    board[40] = 0
    result = solve(board)
    assert result.status == "solved"
    assert result.solution == easy_solution
    assert result.nodes == 1


def test_empty_board_is_filled(empty_board):
    result = solve(empty_board)
    assert result.status == "solved"
    assert_valid_solution(result.solution)
    assert result.solution[:9] == list(range(1, 10))


def test_duplicate_in_row_is_unsatisfiable(empty_board):
    board = list(empty_board)
    board[index_of(0, 0)] = 5
    board[index_of(8, 0)] = 5
    result = solve(board)
    assert result.status == "no-solution"
    assert result.solution is None
    assert not result.solved
    assert result.nodes == 0


def test_contradictory_givens_are_logged(empty_board, caplog):
    board = list(empty_board)
    board[index_of(0, 0)] = 5
    board[index_of(0, 8)] = 5
    with caplog.at_level(logging.WARNING, logger="sudoku"):
        result = solve(board)
    assert result.status == "no-solution"
    assert "column" in caplog.text


def test_dead_cell_is_unsatisfiable(empty_board):
    board = list(empty_board)
    for col, val in enumerate(range(1, 9)):
        board[index_of(col, 0)] = val
    board[index_of(8, 1)] = 9
    result = solve(board)
    assert result.status == "no-solution"
    assert result.message == "No solution found."


@pytest.mark.parametrize("size", [0, 80, 82])
def test_wrong_length_is_invalid_input(size):
    result = solve([0] * size)
    assert result.status == "invalid-input"
    assert result.solution is None
    assert result.nodes == 0
    assert "81" in result.message


@pytest.mark.parametrize("bad", [10, -1, "7", None])
def test_out_of_domain_value_is_invalid_input(empty_board, bad):
    board = list(empty_board)
    board[5] = bad
    result = solve(board)
    assert result.status == "invalid-input"


def test_anti_king_rejects_solution_that_breaks_it(easy_solution):
    assert solve(easy_solution).status == "solved"
    result = solve(easy_solution, anti_king=True)
    assert result.status == "no-solution"


def test_anti_king_puzzle_without_king_solution(easy_puzzle):
    # the only sudoku solution of this puzzle breaks the king rule
    result = solve(easy_puzzle, anti_king=True)
    assert result.status == "no-solution"


def test_uniqueness_reports_single_solution(easy_puzzle, easy_solution):
    result = solve(easy_puzzle, require_uniqueness=True)
    assert result.status == "solved"
    assert result.solutions_found == 1
    assert result.solution == easy_solution


def test_uniqueness_detects_second_solution(pattern_solution):
    board = list(pattern_solution)
    for col, row in ((0, 0), (1, 0), (0, 3), (1, 3)):
        board[index_of(col, row)] = 0
    result = solve(board, require_uniqueness=True)
    assert result.status == "multiple"
    assert result.solutions_found == 2
    # first solution in ascending candidate order wins
    assert result.solution == pattern_solution

    first_only = solve(board)
    assert first_only.status == "solved"
    assert first_only.solution == pattern_solution


def test_trace_logger_sees_guesses_and_backtracks(easy_puzzle):
    lines = []
    result = SudokuSolver(easy_puzzle).solve(logger=lines.append)
    assert result.status == "solved"
    guesses = [line for line in lines if line.startswith("Guess: ")]
    assert len(guesses) == result.nodes
    assert guesses[0].startswith("Guess: r1c3 = ")
    assert any(line.startswith("Backtrack: ") for line in lines)


def test_solver_can_be_reused(easy_puzzle):
    solver = SudokuSolver(easy_puzzle)
    first = solver.solve()
    second = solver.solve()
    assert first.solution == second.solution
    assert first.nodes == second.nodes


def test_candidates_helper(empty_board):
    board = list(empty_board)
    board[index_of(0, 4)] = 5
    board[index_of(4, 0)] = 3
    board[index_of(3, 3)] = 7
    assert candidates(board, 4, 4) == [1, 2, 4, 6, 8, 9]
    assert candidates(empty_board, 0, 0) == list(range(1, 10))

    board = list(empty_board)
    board[index_of(2, 2)] = 2
    assert 2 in candidates(board, 3, 3)
    assert 2 not in candidates(board, 3, 3, anti_king=True)


def test_candidates_helper_rejects_bad_input(empty_board):
    with pytest.raises(InvalidBoardError):
        candidates([0] * 80, 0, 0)
    with pytest.raises(InvalidBoardError):
        candidates(empty_board, 9, 0)


def test_solutions_pass_standard_rules(easy_puzzle):
    result = solve(easy_puzzle)
    assert find_conflicts(result.solution, SUDOKU_CONSTRAINTS) == []


def test_importing_solver_adds_no_log_handler(monkeypatch):
    import solver as solver_module

    logger = logging.getLogger("sudoku")
    monkeypatch.setattr(logger, "handlers", [])
    importlib.reload(solver_module)
    assert logger.handlers == []
    assert solver_module.log is logger
