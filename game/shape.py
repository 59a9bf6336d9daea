from typing import Literal

ShapeState = Literal["normal", "correct", "exists"]

NORMAL: ShapeState = "normal"
CORRECT: ShapeState = "correct"
EXISTS: ShapeState = "exists"


class Shape:
    """
        A symbol+color token that can be placed into the grid.
    Attributes:
        type (str): The symbol type (e.g. '♥').
        color (str): The color as hex string.
        number (int): The per-game number attached to this identity.
        state (str): Feedback state of this copy (normal, correct, exists)."""

    def __init__(self, type: str, color: str, number: int = 0, state=NORMAL):
        self.type = type
        self.color = color
        self.number = number
        self.state = state

    def get_key(self) -> str:
        """
        Return the identity key of this shape (e.g. '♥-#FF0000').
        Returns:
            str: The key, number and state are not part of it."""
        return f"{self.type}-{self.color}"

    def same_identity(self, other) -> bool:
        """True if type and color match. Numbers are ignored."""
        return (
            other is not None
            and self.type == other.type
            and self.color == other.color
        )

    def copy(self, state=None):
        """
        Return an independent copy of this shape.
        Args:
            state (str, optional): State for the copy. Defaults to NORMAL.
        Returns:
            Shape: The new shape with the same type, color and number."""
        return Shape(self.type, self.color, self.number, state or NORMAL)

    def to_dict(self):
        return {
            "type": self.type,
            "color": self.color,
            "number": self.number,
            "state": self.state,
        }

    def __repr__(self):
        return f"Shape({self.type!r}, {self.color!r}, {self.number}, {self.state!r})"
