import random

import pytest

from game.board import Board
from game.ruleset import DEFAULT_RULES
from game.secret_code import Solution, SolutionEntry

RED = "#FF0000"
ORANGE = "#FFA500"
YELLOW = "#FFFF00"
GREEN = "#008000"
BLUE = "#0000FF"
PURPLE = "#800080"
BLACK = "#222222"
GRAY = "#808080"

HEART, CIRCLE, SQUARE = DEFAULT_RULES["shapes"]

# Solution used by most board tests
SCENARIO_A = [
    (HEART, RED),
    (CIRCLE, BLUE),
    (SQUARE, GREEN),
    (HEART, YELLOW),
    (CIRCLE, PURPLE),
]

# Five shapes that are not part of SCENARIO_A
MISSES = [
    (SQUARE, RED),
    (SQUARE, ORANGE),
    (SQUARE, YELLOW),
    (SQUARE, BLUE),
    (SQUARE, PURPLE),
]


class RecordingSound:
    def __init__(self):
        self.cues = []

    def play(self, cue):
        self.cues.append(cue)


def index_of(board, symbol, color):
    for i, shape in enumerate(board.inventory.shapes):
        if shape.type == symbol and shape.color == color:
            return i
    raise KeyError((symbol, color))


def set_solution(board, pairs):
    """Replace the random solution of a board with a known one."""
    entries = []
    for position, (symbol, color) in enumerate(pairs):
        number = board.inventory[index_of(board, symbol, color)].number
        entries.append(SolutionEntry(symbol, color, number, position))
    board.solution = Solution(entries, rules=board.rules)


def fill_row(board, pairs):
    """Click the given shapes in order."""
    return [board.select_shape(index_of(board, s, c)) for s, c in pairs]


@pytest.fixture
def sound():
    return RecordingSound()


@pytest.fixture
def notices():
    return []


@pytest.fixture
def board(sound, notices):
    b = Board(rng=random.Random(7), sound=sound, on_notice=notices.append)
    set_solution(b, SCENARIO_A)
    return b
