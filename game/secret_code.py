import random
from dataclasses import dataclass

from .ruleset import DEFAULT_RULES, ConfigurationError


@dataclass(frozen=True)
class SolutionEntry:
    """One shape of the hidden solution and its target position."""

    type: str
    color: str
    number: int
    position: int

    def get_key(self) -> str:
        return f"{self.type}-{self.color}"

    def to_dict(self):
        return {
            "type": self.type,
            "color": self.color,
            "number": self.number,
            "position": self.position,
        }


class Solution:
    """
        Represents the hidden answer of a game.
    Attributes:
        entries (list[SolutionEntry]): The shapes in target position order.
        target_number (int): Sum of the entries' numbers (display only).
        rules (dict): The ruleset."""

    def __init__(self, entries=None, rules=None):
        self.rules = rules or DEFAULT_RULES
        self.entries: list[SolutionEntry] = list(entries or [])
        self.target_number = sum(e.number for e in self.entries)

    def generate_random(self, shapes, rng: random.Random | None = None):
        """
        Draw the solution from the numbered inventory shapes.

        Shapes are drawn without replacement; the draw order is the target
        position order.

        Args:
            shapes (list[Shape]): The inventory after numbers were assigned.
            rng (random.Random, optional): Source of randomness.
        Raises:
            ConfigurationError: If there are not enough distinct shapes.
        """
        rng = rng or random.Random()
        length = self.rules["code_length"]
        if len(shapes) < length:
            raise ConfigurationError(
                f"Need {length} shapes for a solution, inventory has {len(shapes)}."
            )

        available = list(shapes)
        self.entries = []
        for position in range(length):
            shape = available.pop(rng.randrange(len(available)))
            self.entries.append(
                SolutionEntry(shape.type, shape.color, shape.number, position)
            )

        self.target_number = sum(e.number for e in self.entries)

    def __len__(self):
        return len(self.entries)

    def __getitem__(self, position):
        return self.entries[position]

    def __iter__(self):
        return iter(self.entries)

    def as_string(self):
        """
        Return a readable form of the solution (e.g. '♥R ●B ■G ♥Y ●P').
        Returns:
            str: The solution as a string."""
        if not self.entries:
            return "EMPTY"
        letters = self.rules["display"]["color_letters"]
        return " ".join(e.type + letters.get(e.color, e.color) for e in self.entries)

    def to_list(self):
        return [e.to_dict() for e in self.entries]

    def __str__(self):
        return self.as_string()
