from .shape import CORRECT, EXISTS, NORMAL


def score_row(row, solution) -> bool:
    """
    Score a full row against the solution and mark every slot's state.

    Args:
        row (list[Shape]): The guessable slots of the row, all filled.
        solution (Solution | list[SolutionEntry]): The hidden answer.

    Returns:
        bool: True if every slot is CORRECT.

    Notes:
        Matching uses type and color only, numbers are ignored. Each solution
        entry satisfies at most one slot, so a repeated guess shape cannot be
        marked EXISTS twice.
    """

    for shape in row:
        shape.state = NORMAL

    is_win = True
    remaining = list(solution)

    # Exact position matches
    for i, shape in enumerate(row):
        if shape.same_identity(remaining[i]):
            shape.state = CORRECT
            remaining[i] = None
        else:
            is_win = False

    if is_win:
        return True

    # Present somewhere else, consuming solution entries in slot order
    for shape in row:
        if shape.state == CORRECT:
            continue
        for j, entry in enumerate(remaining):
            if shape.same_identity(entry):
                shape.state = EXISTS
                remaining[j] = None
                break

    return False


def missing_carry_forward(previous_row, current_row):
    """
    Return the EXISTS shapes of the previous row absent from the current row.

    Args:
        previous_row (list[Shape | None]): The last scored row.
        current_row (list[Shape | None]): The row about to be scored.
    Returns:
        list[Shape]: Shapes that must be reused before scoring is allowed.
    """
    return [
        marked
        for marked in previous_row
        if marked is not None
        and marked.state == EXISTS
        and not any(marked.same_identity(shape) for shape in current_row)
    ]


def count_feedback(row) -> tuple[int, int]:
    """(correct, exists) counts of a scored row."""
    correct = sum(1 for s in row if s is not None and s.state == CORRECT)
    exists = sum(1 for s in row if s is not None and s.state == EXISTS)
    return (correct, exists)
