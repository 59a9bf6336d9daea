# Messages and cue ids exchanged with the presentation layer
from dataclasses import dataclass, field
from typing import Callable, Literal, Optional

NoticeKind = Literal["tip", "win", "loss"]

SOUND_CUES = ("pop", "remove", "check", "wrong", "win", "lose", "click")

TIP_MESSAGE = "Remember to use the yellow marked shapes from the previous row!"


def step_word(steps: int) -> str:
    return "step" if steps == 1 else "steps"


@dataclass
class Notice:
    """
    A modal dialog request. Loss notices carry the revealed solution.

    When show_restart is set but on_restart is None, the button only closes
    the dialog (tip notices).
    """

    kind: NoticeKind
    title: str
    message: str = ""
    solution: list = field(default_factory=list)
    show_share: bool = False
    show_restart: bool = True
    button_text: str = "OK"
    on_share: Optional[Callable[[], str]] = None
    on_restart: Optional[Callable[[], object]] = None


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a board command."""

    accepted: bool
    reason: str = ""
    notice: Optional[Notice] = None


class SilentSound:
    """Sound collaborator that plays nothing."""

    def play(self, cue: str):
        if cue not in SOUND_CUES:
            raise ValueError(f"Unknown sound cue '{cue}'. Allowed: {', '.join(SOUND_CUES)}.")
