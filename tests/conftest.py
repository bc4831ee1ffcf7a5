# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so the top-level modules import in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from model import parse_board  # noqa: E402

EASY_PUZZLE = (
    "53..7...."
    "6..195..."
    ".98....6."
    "8...6...3"
    "4..8.3..1"
    "7...2...6"
    ".6....28."
    "...419..5"
    "....8..79"
)

EASY_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

# Columns 0-1 of rows 0 and 3 form a swappable 1/2 rectangle.
PATTERN_SOLUTION = (
    "123456789"
    "456789123"
    "789123456"
    "214365897"
    "365897214"
    "897214365"
    "531642978"
    "642978531"
    "978531642"
)


@pytest.fixture
def easy_puzzle():
    return parse_board(EASY_PUZZLE)


@pytest.fixture
def easy_solution():
    return parse_board(EASY_SOLUTION)


@pytest.fixture
def pattern_solution():
    return parse_board(PATTERN_SOLUTION)


@pytest.fixture
def empty_board():
    return [0] * 81
