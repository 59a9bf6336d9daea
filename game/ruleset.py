# Configuration: shapes, colors, number range, grid size, etc.
import math
from dataclasses import dataclass

DEFAULT_RULES = {
    "name": "shap10r",  # Identifier for this ruleset
    "rows": 10,  # Number of attempts per game
    "cols": 6,  # 5 guessable slots + 1 display slot for the target number
    "code_length": 5,  # Number of shapes in the hidden solution
    "shapes": ["♥", "●", "■"],  # Symbol types (Heart, Circle, Square)
    "colors": [
        "#FF0000",
        "#FFA500",
        "#FFFF00",
        "#008000",
        "#0000FF",
        "#800080",
        "#222222",
        "#808080",
    ],  # Red, Orange, Yellow, Green, Blue, Purple, Black, Gray
    "min_number": 12,  # Lowest number attached to a shape
    "max_number": 234,  # Highest number attached to a shape
    "cell_size": 60,  # Default cell size in pixels (renderers only)
    "gap_size": 8,  # Default gap between cells in pixels (renderers only)
    "display": {
        "color_letters": {  # For CLI rendering
            "#FF0000": "R",
            "#FFA500": "O",
            "#FFFF00": "Y",
            "#008000": "G",
            "#0000FF": "B",
            "#800080": "P",
            "#222222": "K",
            "#808080": "A",
        },
        "state_marks": {"normal": " ", "correct": "+", "exists": "?"},
    },
}


class ConfigurationError(ValueError):
    """Raised when a ruleset cannot produce a playable game."""


def inventory_size(rules) -> int:
    """Number of symbol x color combinations described by the rules."""
    return len(rules["shapes"]) * len(rules["colors"])


def validate_rules(rules, strict: bool = True) -> bool:
    """
    Check that a ruleset can start a game.

    Args:
        rules (dict): The ruleset to check.
        strict (bool): If True, raise ConfigurationError on failure.
    Returns:
        bool: True if the rules are usable, False otherwise.
    """

    def fail(msg: str) -> bool:
        if strict:
            raise ConfigurationError(msg)
        return False

    if rules["rows"] < 1:
        return fail(f"At least one row is required, got {rules['rows']}.")

    if rules["code_length"] != rules["cols"] - 1:
        return fail(
            f"Code length must be {rules['cols'] - 1} "
            f"(cols minus the display slot), but got {rules['code_length']}."
        )

    size = inventory_size(rules)
    if size < rules["code_length"]:
        return fail(
            f"Inventory holds {size} shapes, "
            f"need at least {rules['code_length']} for a solution."
        )

    span = rules["max_number"] - rules["min_number"] + 1
    if span < size:
        return fail(
            f"Number range [{rules['min_number']}, {rules['max_number']}] "
            f"has {max(span, 0)} values, need {size} distinct numbers."
        )

    return True


@dataclass(frozen=True)
class Layout:
    """Cell and canvas measurements for one render surface size."""

    cell_size: float
    gap_size: int
    canvas_width: float
    canvas_height: float

    def cell_origin(self, row: int, col: int) -> tuple[float, float]:
        # Top-left corner, including the outer margin
        x = self.gap_size + col * (self.cell_size + self.gap_size)
        y = self.gap_size + row * (self.cell_size + self.gap_size)
        return (x, y)


def default_layout(rules=None) -> Layout:
    rules = rules or DEFAULT_RULES
    cell, gap = rules["cell_size"], rules["gap_size"]
    return Layout(
        cell_size=cell,
        gap_size=gap,
        canvas_width=cell * rules["cols"] + gap * (rules["cols"] + 1),
        canvas_height=cell * rules["rows"] + gap * (rules["rows"] + 1),
    )


def compute_layout(width: float, height: float, rules=None) -> Layout:
    """
    Fit the grid into a container of the given size.

    The cell takes the largest size that fits 90% of the container in both
    directions; the gap is 15% of the cell. A new Layout is returned, the
    rules are left untouched.

    Args:
        width (float): Container width in pixels.
        height (float): Container height in pixels.
        rules (dict, optional): The ruleset. Defaults to DEFAULT_RULES.
    Returns:
        Layout: The computed measurements.
    """
    rules = rules or DEFAULT_RULES
    rows, cols = rules["rows"], rules["cols"]

    cell = min(width * 0.9 / cols, height * 0.9 / rows)
    gap = math.floor(cell * 0.15)

    return Layout(
        cell_size=cell,
        gap_size=gap,
        canvas_width=cell * cols + gap * (cols - 1) + gap * 2,
        canvas_height=cell * rows + gap * (rows - 1) + gap * 2,
    )
