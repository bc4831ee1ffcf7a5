from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from logging_utils import get_logger
from model import (
    InvalidBoardError,
    PuzzleModel,
    board_from_grid,
    format_board,
    grid_from_board,
    parse_board,
)
from solver import SolverResult, SudokuSolver

EXIT_SOLVED = 0
EXIT_NO_SOLUTION = 1
EXIT_INVALID = 2


def serialize_puzzle(model: PuzzleModel) -> dict:
    return {
        "version": 1,
        "grid": grid_from_board(model.board),
        "anti_knight": model.anti_knight,
        "anti_king": model.anti_king,
        "uniqueness": model.require_uniqueness,
    }


def apply_puzzle(model: PuzzleModel, data: dict) -> None:
    grid = data.get("grid")
    if not grid:
        raise InvalidBoardError("Invalid grid")
    model.reset()
    model.board = board_from_grid(grid)
    model.anti_knight = bool(data.get("anti_knight", False))
    model.anti_king = bool(data.get("anti_king", False))
    model.require_uniqueness = bool(data.get("uniqueness", False))


def load_puzzle(source: str) -> PuzzleModel:
    """Build a puzzle from a JSON puzzle file, a text file, or puzzle text."""
    model = PuzzleModel()
    if not os.path.isfile(source):
        model.board = parse_board(source)
        return model
    with open(source, "r") as f:
        text = f.read()
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = None
    # a bare run of digits is valid JSON too
    if not isinstance(data, dict):
        model.board = parse_board(text)
        return model
    apply_puzzle(model, data)
    return model


def save_puzzle(model: PuzzleModel, path: str) -> None:
    with open(path, "w") as f:
        json.dump(serialize_puzzle(model), f, indent=2)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="sudoku-solve",
        description="Solve a 9x9 Sudoku by backtracking search.",
    )
    ap.add_argument("puzzle", help="81-cell puzzle text or path to a puzzle file")
    ap.add_argument("--anti-king", action="store_true", help="forbid equal digits a king move apart")
    ap.add_argument("--anti-knight", action="store_true", help="forbid equal digits a knight move apart")
    ap.add_argument("--unique", action="store_true", help="also check that the solution is unique")
    ap.add_argument("--trace", action="store_true", help="print every guess and backtrack")
    ap.add_argument("--output", help="write the solved puzzle as JSON to this path")
    ap.add_argument("--verbose", action="store_true")
    return ap


def report(result: SolverResult) -> None:
    if result.solution is not None:
        print(format_board(result.solution))
    print(f"{result.message} ({result.duration_ms} ms, {result.nodes} guesses)")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_logger()
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    try:
        model = load_puzzle(args.puzzle)
    except (ValueError, TypeError, OSError) as e:
        print(f"Failed to load puzzle: {e}", file=sys.stderr)
        return EXIT_INVALID
    model.anti_king = model.anti_king or args.anti_king
    model.anti_knight = model.anti_knight or args.anti_knight
    model.require_uniqueness = model.require_uniqueness or args.unique

    solver = SudokuSolver(
        model.copy_board(),
        anti_knight=model.anti_knight,
        anti_king=model.anti_king,
    )
    result = solver.solve(
        require_uniqueness=model.require_uniqueness,
        logger=print if args.trace else None,
    )
    if result.status == "invalid-input":
        print(f"Invalid puzzle: {result.message}", file=sys.stderr)
        return EXIT_INVALID
    report(result)
    if result.solution is None:
        return EXIT_NO_SOLUTION

    if args.output:
        model.board = result.solution
        try:
            save_puzzle(model, args.output)
        except OSError as e:
            print(f"Failed to save puzzle: {e}", file=sys.stderr)
            return EXIT_INVALID
    return EXIT_SOLVED


if __name__ == "__main__":
    sys.exit(main())
