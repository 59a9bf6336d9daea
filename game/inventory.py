import logging
import random

from .ruleset import DEFAULT_RULES, ConfigurationError, validate_rules
from .shape import Shape

logger = logging.getLogger(__name__)


class Inventory:
    """
        Catalogue of every symbol x color shape plus the usage tracker.
    Attributes:
        rules (dict): The ruleset (shapes, colors, number range).
        shapes (list[Shape]): All shapes, symbol-major order.
        clicked (set[str]): Keys of shapes clicked in this game.
        selected_index (int | None): The momentarily selected shape."""

    def __init__(self, rules=None, rng: random.Random | None = None):
        self.rules = rules or DEFAULT_RULES
        self.rng = rng or random.Random()
        self.shapes: list[Shape] = []
        self.clicked: set[str] = set()
        self.selected_index: int | None = None

    def initialize(self):
        """
        Build one shape per (symbol, color) and reset usage tracking.
        """
        self.shapes = [
            Shape(symbol, color)
            for symbol in self.rules["shapes"]
            for color in self.rules["colors"]
        ]
        self.clicked.clear()
        self.selected_index = None

    def assign_numbers(self):
        """
        Give every shape a distinct random number from the rules' range.

        Raises:
            ConfigurationError: If the range holds fewer integers than there
            are shapes.
        """
        validate_rules(self.rules)
        low, high = self.rules["min_number"], self.rules["max_number"]
        if high - low + 1 < len(self.shapes):
            raise ConfigurationError(
                f"Cannot draw {len(self.shapes)} distinct numbers "
                f"from [{low}, {high}]."
            )

        numbers = self.rng.sample(range(low, high + 1), k=len(self.shapes))
        for shape, number in zip(self.shapes, numbers):
            shape.number = number

    def __len__(self):
        return len(self.shapes)

    def __getitem__(self, index):
        return self.shapes[index]

    # --- Usage tracking ---

    def is_clicked(self, shape: Shape) -> bool:
        return shape.get_key() in self.clicked

    def is_clicked_by_index(self, index: int) -> bool:
        if index < 0 or index >= len(self.shapes):
            return False
        return self.shapes[index].get_key() in self.clicked

    def forget(self, shape: Shape):
        """Drop the click record of a shape so it is selectable again."""
        self.clicked.discard(shape.get_key())

    def is_selected(self, index: int) -> bool:
        return self.selected_index == index

    def clear_selection(self):
        # Only the selection, click records stay
        self.selected_index = None

    def select(self, index: int, row_cells, row_checked: bool) -> Shape | None:
        """
        Record a click and decide whether the shape may be placed.

        Args:
            index (int): Position of the shape in the inventory.
            row_cells (list[Shape | None]): Guessable slots of the current row.
            row_checked (bool): Whether the current row was already scored.
        Returns:
            Shape | None: The inventory shape to place, or None when the
            click must not place anything.
        """
        if index < 0 or index >= len(self.shapes):
            logger.debug("Ignoring selection of unknown shape index %s", index)
            return None

        shape = self.shapes[index]
        self.selected_index = index
        self.clicked.add(shape.get_key())

        if row_checked:
            logger.debug("Current row already checked, not placing %s", shape.get_key())
            return None

        if any(shape.same_identity(cell) for cell in row_cells):
            logger.debug("Shape %s already used in current row", shape.get_key())
            return None

        return shape
