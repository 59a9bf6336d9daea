from .collaborators import TIP_MESSAGE, ActionResult, Notice, SilentSound, step_word
from .grid import Grid
from .inventory import Inventory
from .ruleset import DEFAULT_RULES, validate_rules
from .scoring import count_feedback, missing_carry_forward, score_row
from .secret_code import Solution
from .shape import CORRECT, EXISTS, NORMAL
from state.game_state import GameState

import logging
import random as rnd

logger = logging.getLogger(__name__)


class Board:
    """Main game board class, manages the grid, the hidden solution and row progression."""

    def __init__(self, rules=None, rng=None, sound=None, on_notice=None):
        """
        Initialize the board and start a first game.

        Args:
            rules (dict, optional): The ruleset. Defaults to DEFAULT_RULES.
            rng (random.Random, optional): Source of randomness.
            sound (object, optional): Sound collaborator with play(cue).
            on_notice (callable, optional): Receives tip/win/loss Notices.
        Raises:
            ConfigurationError: If the rules cannot produce a game.
        """
        self.rules = rules or DEFAULT_RULES
        validate_rules(self.rules)
        self.rng = rng or rnd.Random()
        self.sound = sound or SilentSound()
        self.on_notice = on_notice
        self.max_attempts = self.rules["rows"]
        self._listeners = []
        self.initialize_game()

    def initialize_game(self):
        """Set up a new game: fresh inventory, numbers, solution and grid."""
        self.inventory = Inventory(rules=self.rules, rng=self.rng)
        self.inventory.initialize()
        self.inventory.assign_numbers()

        self.solution = Solution(rules=self.rules)
        self.solution.generate_random(self.inventory.shapes, rng=self.rng)

        self.grid = Grid(rules=self.rules)
        self.current_row = 0
        self.active_col = 0
        self.checked_rows = [False] * self.max_attempts
        self.is_over = False
        self.is_won = False
        self.last_notice = None
        logger.info("New game started, target number %s", self.target_number)

    @property
    def target_number(self):
        return self.solution.target_number

    @property
    def steps(self):
        return self.current_row + 1

    # --- Observers and collaborators ---

    def subscribe(self, callback):
        """
        Register a callback run after every state change.
        Returns:
            callable: Removes the callback again.
        """
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def notify_state_changed(self):
        for callback in list(self._listeners):
            callback()

    def _play(self, cue):
        try:
            self.sound.play(cue)
        except Exception as e:
            logger.warning("Sound '%s' failed: %s", cue, e)

    def _show(self, notice):
        self.last_notice = notice
        if self.on_notice is not None:
            self.on_notice(notice)

    # --- Commands ---

    def select_shape(self, index):
        """
        Handle a click on an inventory shape and place it if allowed.

        Args:
            index (int): Position of the shape in the inventory.
        Returns:
            ActionResult: Whether a shape was placed.
        """
        row_checked = self.is_over or self.checked_rows[self.current_row]
        shape = self.inventory.select(
            index, self.grid.row(self.current_row), row_checked
        )
        if shape is None:
            return ActionResult(False, "shape not placeable")

        col = self.grid.find_next_empty_cell(self.current_row)
        if col == -1:
            logger.debug("Row %s is full", self.current_row)
            return ActionResult(False, "row full")

        return self.place_shape(shape, self.current_row, col)

    def place_shape(self, shape, row, col):
        """Put a copy of shape at (row, col) of the editable row."""
        if (
            self.is_over
            or row != self.current_row
            or self.checked_rows[row]
            or self.grid.is_row_full(row)
            or self.grid.get(row, col) is not None
        ):
            logger.debug("Rejected placement at (%s, %s)", row, col)
            return ActionResult(False, "cell not editable")

        self.grid.place(row, col, shape)
        self.active_col = self.grid.find_next_empty_cell(row)
        self.inventory.clear_selection()
        self._play("pop")
        self.notify_state_changed()
        return ActionResult(True)

    def remove_last(self):
        """Remove the last non-correct shape of the current row."""
        if self.is_over or self.checked_rows[self.current_row]:
            return ActionResult(False, "row not editable")

        col = self.grid.find_last_removable(self.current_row)
        if col == -1:
            return ActionResult(False, "nothing to remove")

        removed = self.grid.clear(self.current_row, col)
        self.inventory.forget(removed)
        self.active_col = self.grid.find_next_empty_cell(self.current_row)
        self.inventory.clear_selection()
        self._play("remove")
        self.notify_state_changed()
        return ActionResult(True)

    def confirm_row(self):
        """
        Score the current row if it is full and the deduction rule holds.

        Returns:
            ActionResult: accepted when the row was scored. A carry-forward
            violation is rejected with a tip Notice attached.
        """
        row = self.current_row
        if self.is_over or self.checked_rows[row] or not self.grid.is_row_full(row):
            logger.debug("Row %s cannot be checked yet", row)
            return ActionResult(False, "row not ready")

        current = self.grid.row(row)
        if row > 0:
            missing = missing_carry_forward(self.grid.row(row - 1), current)
            if missing:
                logger.debug(
                    "Row %s misses marked shapes: %s",
                    row,
                    ", ".join(s.get_key() for s in missing),
                )
                return self._show_tip()

        self._play("check")
        is_win = score_row(current, self.solution)
        self.checked_rows[row] = True

        if is_win:
            self._handle_win()
        elif row == self.max_attempts - 1:
            self._handle_loss()
        else:
            self._move_to_next_row()

        self.notify_state_changed()
        return ActionResult(True, notice=self.last_notice if self.is_over else None)

    def reset(self):
        """Reset the board for a new game with the same rules."""
        self.initialize_game()
        self.notify_state_changed()
        return ActionResult(True)

    # --- Transitions ---

    def _show_tip(self):
        self._play("wrong")
        notice = Notice(
            kind="tip",
            title="Tips",
            message=TIP_MESSAGE,
            show_share=False,
            show_restart=True,
            button_text="OK",
        )
        self._show(notice)
        return ActionResult(False, "carry-forward", notice)

    def _move_to_next_row(self):
        self.current_row += 1
        self.grid.carry_forward(self.current_row - 1, self.current_row)
        self.active_col = self.grid.find_next_empty_cell(self.current_row)

    def _handle_win(self):
        self.is_over = True
        self.is_won = True
        for shape in self.grid.row(self.current_row):
            shape.state = CORRECT
        self._play("win")
        logger.info("Game won in %s %s", self.steps, step_word(self.steps))
        self._show(
            Notice(
                kind="win",
                title="Congratulations!",
                message=f"You found the answer in {self.steps} {step_word(self.steps)}!",
                show_share=True,
                show_restart=True,
                button_text="Restart",
                on_share=self.share,
                on_restart=self.reset,
            )
        )

    def _handle_loss(self):
        self.is_over = True
        self._play("lose")
        logger.info("Game lost, solution was %s", self.reveal_code())
        self._show(
            Notice(
                kind="loss",
                title="Game Over",
                solution=self.solution.to_list(),
                show_share=True,
                show_restart=True,
                button_text="Restart",
                on_share=self.share,
                on_restart=self.reset,
            )
        )

    # --- Queries ---

    def is_row_full(self, row):
        return self.grid.is_row_full(row)

    def shape_states(self):
        """
        Return the best known state per shape key from the checked rows.

        Only CORRECT and EXISTS are recorded, CORRECT wins over EXISTS.

        Returns:
            dict[str, str]: shape key -> state
        """
        states = {}
        for row, checked in enumerate(self.checked_rows):
            if not checked:
                continue
            for shape in self.grid.row(row):
                if shape is None or shape.state not in (CORRECT, EXISTS):
                    continue
                key = shape.get_key()
                if key not in states or shape.state == CORRECT:
                    states[key] = shape.state
        return states

    def is_shape_disabled(self, index, states=None):
        """
        Decide whether an inventory shape should be offered for clicking.

        Args:
            index (int): Position of the shape in the inventory.
            states (dict, optional): Result of shape_states(), if already built.
        Returns:
            bool: True if the shape button should be disabled.
        """
        shape = self.inventory[index]
        row = self.current_row
        cells = self.grid.row(row)
        row_checked = self.checked_rows[row]

        if row_checked or self.grid.is_row_full(row):
            return True
        if any(shape.same_identity(cell) for cell in cells):
            return True

        # Already solved in an earlier row
        for earlier in range(row):
            for cell in self.grid.row(earlier):
                if shape.same_identity(cell) and cell.state == CORRECT:
                    return True

        if states is None:
            states = self.shape_states()
        return (
            self.inventory.is_clicked_by_index(index)
            and states.get(shape.get_key(), NORMAL) != EXISTS
            and not self.inventory.is_selected(index)
        )

    def remaining_attempts(self):
        """Return how many rows are left to be checked."""
        return max(0, self.max_attempts - sum(self.checked_rows))

    def reveal_code(self):
        """Return the solution (used at the end of the game)."""
        return self.solution.as_string()

    def get_feedback_history(self):
        """Return (shape keys, (correct, exists)) for every checked row."""
        result = []
        for row, checked in enumerate(self.checked_rows):
            if not checked:
                continue
            cells = self.grid.row(row)
            result.append(([s.get_key() for s in cells], count_feedback(cells)))
        return result

    def share_text(self, url=None):
        if self.is_won:
            text = f"I found the answer in {self.steps} {step_word(self.steps)} in Shap10r!"
        else:
            text = "Challenge failed in Shap10r!"
        if url:
            text += f" Try it: {url}"
        return text

    def share(self, url=None):
        self._play("click")
        return self.share_text(url)

    def get_current_state(self, reveal=False):
        """Return a GameState snapshot for renderers."""
        return GameState(
            rules=self.rules,
            grid=self.grid.snapshot(),
            current_row=self.current_row,
            active_col=self.active_col,
            checked_rows=list(self.checked_rows),
            target_number=self.target_number,
            is_over=self.is_over,
            is_won=self.is_won,
            solution=self.solution.to_list() if (reveal or self.is_over) else None,
        )

    def render(self):
        """Render a text-based representation of the board (for CLI)."""

        state = self.get_current_state()
        letters = self.rules["display"]["color_letters"]
        marks = self.rules["display"]["state_marks"]
        title = "| +++++++++++++++ Shap10r +++++++++++++++ |"
        line = "+-----" * self.grid.slots + "+------+"

        # build the gameboard
        print(line)
        print(title)
        print(line)
        for row in range(self.max_attempts):
            row_line = ""
            for col in range(self.grid.slots):
                cell = state.cell(row, col)
                if cell is not None:
                    text = cell["type"] + letters.get(cell["color"], "?") + marks[cell["state"]]
                elif state.is_active_cell(row, col):
                    text = "[ ]"
                else:
                    text = "   "
                row_line += "| " + text + " "
            row_line += "| " + str(state.target_number).rjust(4) + " "
            print(row_line + "|")
        print(line)
