from __future__ import annotations

import logging
import random
from itertools import permutations

from game.board import Board
from game.shape import CORRECT, EXISTS

logger = logging.getLogger(__name__)


class AutoPlayer:
    """
    Plays a Board through its command interface only.

    Knowledge kept from every scored row:
      - NORMAL: the shape is not part of the solution at all (rows and
        solutions never repeat a shape).
      - EXISTS: the shape is in the solution, but not at that column.
      - CORRECT: the column is solved, the board carries it forward.

    Each row first places every known-present shape into a free column it is
    not excluded from, then fills the remaining columns with untested
    shapes. The carry-forward rule is therefore always satisfied.

    Attributes:
        rng: random.Random
        absent: set[str]
        present: dict[str, set[int]]   shape key -> excluded columns
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()
        self.absent: set[str] = set()
        self.present: dict[str, set[int]] = {}

    def forget(self) -> None:
        self.absent.clear()
        self.present.clear()

    def _assign_required(
        self, required: list[str], free: list[int]
    ) -> dict[int, str]:
        """
        Find columns for the known-present shapes.
        """
        if not required:
            return {}
        cols = free[:]
        self.rng.shuffle(cols)
        for chosen in permutations(cols, len(required)):
            if all(c not in self.present[k] for k, c in zip(required, chosen)):
                return dict(zip(chosen, required))
        # No consistent slot, place them anyway so the row stays legal
        logger.debug("No consistent placement for %s", required)
        return dict(zip(cols, required))

    def plan_row(self, board: Board) -> dict[int, int]:
        """
        Decide which inventory shape goes into each free column.

        Returns:
            dict[int, int]: column -> inventory index
        """
        index_of = {s.get_key(): i for i, s in enumerate(board.inventory.shapes)}
        cells = board.grid.row(board.current_row)
        free = [c for c, cell in enumerate(cells) if cell is None]
        placed = {cell.get_key() for cell in cells if cell is not None}

        required = [k for k in self.present if k not in placed]
        plan = self._assign_required(required, free)

        untested = [
            k
            for k in index_of
            if k not in self.absent and k not in self.present and k not in placed
        ]
        self.rng.shuffle(untested)
        # Known-absent shapes only fill up when nothing untested is left
        fillers = untested + [k for k in index_of if k in self.absent and k not in placed]

        for col in free:
            if col in plan:
                continue
            plan[col] = fillers.pop(0)

        return {col: index_of[key] for col, key in plan.items()}

    def learn(self, board: Board, row: int) -> None:
        for col, shape in enumerate(board.grid.row(row)):
            key = shape.get_key()
            if shape.state == CORRECT:
                self.present.pop(key, None)
            elif shape.state == EXISTS:
                self.present.setdefault(key, set()).add(col)
            else:
                self.absent.add(key)

    def play_row(self, board: Board) -> bool:
        """
        Fill and check the current row.

        Returns:
            bool: True if the row was scored.
        """
        row = board.current_row
        plan = self.plan_row(board)
        # Placement always goes to the first empty column
        for col in sorted(plan):
            board.select_shape(plan[col])

        result = board.confirm_row()
        if result.accepted:
            self.learn(board, row)
        return result.accepted

    def play_game(self, board: Board) -> tuple[bool, int]:
        """
        Play the board until it is over.

        Returns:
            tuple[bool, int]: (won, steps)
        """
        self.forget()
        while not board.is_over:
            if not self.play_row(board):
                raise RuntimeError(f"Row {board.current_row} was rejected.")
        return (board.is_won, board.steps)
