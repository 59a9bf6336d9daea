from .ruleset import DEFAULT_RULES
from .shape import CORRECT


class Grid:
    """
        Rows x cols matrix of optional shape copies.

    Columns 0..code_length-1 are guessable, the last column is the display
    slot for the target number and never holds a shape.

    Attributes:
        rows (int): Number of rows (attempts).
        cols (int): Number of columns including the display slot.
        slots (int): Number of guessable columns.
        cells (list[list[Shape | None]]): The grid content."""

    def __init__(self, rules=None):
        self.rules = rules or DEFAULT_RULES
        self.rows = self.rules["rows"]
        self.cols = self.rules["cols"]
        self.slots = self.rules["code_length"]
        self.cells = [[None] * self.cols for _ in range(self.rows)]

    def _check(self, row: int, col: int | None = None):
        if not 0 <= row < self.rows:
            raise ValueError(f"Row {row} outside of grid (0..{self.rows - 1}).")
        if col is not None and not 0 <= col < self.slots:
            raise ValueError(
                f"Column {col} is not a guessable slot (0..{self.slots - 1})."
            )

    def get(self, row: int, col: int):
        self._check(row, col)
        return self.cells[row][col]

    def row(self, row: int):
        """Guessable slots of a row (the display slot excluded)."""
        self._check(row)
        return self.cells[row][: self.slots]

    def is_row_full(self, row: int) -> bool:
        return all(cell is not None for cell in self.row(row))

    def place(self, row: int, col: int, shape, state=None):
        """
        Put an independent copy of a shape into a cell.
        Args:
            row (int): Target row.
            col (int): Target guessable column.
            shape (Shape): Shape to copy, it is never stored itself.
            state (str, optional): State of the copy. Defaults to NORMAL.
        Returns:
            Shape: The stored copy.
        """
        self._check(row, col)
        placed = shape.copy(state)
        self.cells[row][col] = placed
        return placed

    def clear(self, row: int, col: int):
        self._check(row, col)
        removed = self.cells[row][col]
        self.cells[row][col] = None
        return removed

    def find_next_empty_cell(self, row: int) -> int:
        """First empty guessable column of the row, -1 if the row is full."""
        for col, cell in enumerate(self.row(row)):
            if cell is None:
                return col
        return -1

    def find_last_removable(self, row: int) -> int:
        """Last filled column whose shape is not CORRECT, -1 if none."""
        cells = self.row(row)
        for col in range(self.slots - 1, -1, -1):
            if cells[col] is not None and cells[col].state != CORRECT:
                return col
        return -1

    def carry_forward(self, from_row: int, to_row: int) -> list[int]:
        """
        Copy every CORRECT slot of one row into the same column of another.
        Returns:
            list[int]: The columns that were filled.
        """
        filled = []
        for col, shape in enumerate(self.row(from_row)):
            if shape is not None and shape.state == CORRECT:
                self.place(to_row, col, shape, state=CORRECT)
                filled.append(col)
        return filled

    def snapshot(self):
        """Plain-data copy of the whole grid for renderers."""
        return [
            [cell.to_dict() if cell is not None else None for cell in row]
            for row in self.cells
        ]
