# # Command-line interface (text-based play)

from game.board import Board
from game.collaborators import SOUND_CUES
from game.ruleset import DEFAULT_RULES


class TerminalSound:
    """Rings the terminal bell for the cues that need attention."""

    loud = ("wrong", "win", "lose")

    def play(self, cue):
        if cue not in SOUND_CUES:
            raise ValueError(f"Unknown sound cue '{cue}'.")
        if cue in self.loud:
            print("\a", end="", flush=True)


def describe_shape(shape, rules=None):
    rules = rules or DEFAULT_RULES
    letters = rules["display"]["color_letters"]
    return shape["type"] + letters.get(shape["color"], shape["color"])


def show_notice(notice):
    """Print a tip / win / loss notice."""
    print(f"\n*** {notice.title} ***")
    if notice.message:
        print(notice.message)
    if notice.solution:
        print("The correct answer was: " + " ".join(describe_shape(s) for s in notice.solution))


def print_inventory(board):
    letters = board.rules["display"]["color_letters"]
    marks = board.rules["display"]["state_marks"]
    states = board.shape_states()
    items = []
    for i, shape in enumerate(board.inventory.shapes):
        known = marks[states.get(shape.get_key(), "normal")]
        text = f"{shape.type}{letters.get(shape.color, '?')}{known}"
        if board.is_shape_disabled(i, states):
            # Disabled shapes in parentheses
            items.append(f"{i:>2}:({text})")
        else:
            items.append(f"{i:>2}: {text} ")
    for start in range(0, len(items), len(board.rules["colors"])):
        print("  ".join(items[start : start + len(board.rules["colors"])]))


def gameloop():
    print("=== Shap10r CLI ===")
    print(
        "Type a shape number to place it, 'x' to remove, 'c' to check the row, "
        "'r' to restart, 'exit' to quit.\n"
    )

    b = Board(rules=DEFAULT_RULES, sound=TerminalSound(), on_notice=show_notice)

    while True:
        b.render()
        print(f"Attempts left: {b.remaining_attempts()}")
        print_inventory(b)
        user_input = input("Your action: ").strip().lower()

        # handle special commands
        if user_input == "exit":
            print("Exiting game.")
            break
        elif user_input == "x":
            b.remove_last()
            continue
        elif user_input == "c":
            if not b.confirm_row().accepted and not b.is_row_full(b.current_row):
                print("Fill all five slots first.")
        elif user_input == "r":
            b.reset()
            continue
        else:
            try:
                b.select_shape(int(user_input))
            except ValueError:
                print(f"Invalid input: {user_input!r}")
            continue

        # Check win/loss
        if b.is_over:
            b.render()
            print(b.share_text())
            again = input("Play again? [y/N] ").strip().lower()
            if again != "y":
                break
            b.reset()

    print("\n=== Game Over ===")
