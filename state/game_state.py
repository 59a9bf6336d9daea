# state/game_state.py


class GameState:
    """Read-only snapshot of a game handed to renderers after every change"""

    def __init__(
        self,
        rules,
        grid,
        current_row,
        active_col,
        checked_rows,
        target_number,
        is_over,
        is_won,
        solution=None,
    ):
        self.rules = rules
        self.grid = grid
        self.current_row = current_row
        self.active_col = active_col
        self.checked_rows = checked_rows
        self.target_number = target_number
        self.is_over = is_over
        self.is_won = is_won
        self.solution = solution

    @property
    def steps(self):
        return self.current_row + 1

    def cell(self, row, col):
        return self.grid[row][col]

    def is_active_cell(self, row, col):
        # The highlighted slot, only while its row is still editable
        return (
            not self.is_over
            and row == self.current_row
            and col == self.active_col
            and not self.checked_rows[row]
        )

    def to_dict(self):
        # Return the snapshot as dictionary for i.e. json
        return {
            "rules": self.rules["name"],
            "grid": self.grid,
            "current_row": self.current_row,
            "active_col": self.active_col,
            "checked_rows": list(self.checked_rows),
            "target_number": self.target_number,
            "is_over": self.is_over,
            "is_won": self.is_won,
            "solution": self.solution,
        }
