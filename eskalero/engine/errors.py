"""
Rejections raised by the reducer.
Each carries a stable code so callers can branch without matching messages.
"""


class ActionRejected(ValueError):
    """Base class. The state an action was applied to is left untouched."""
    code = "rejected"
    # Expected rejections are part of normal play (stale clicks, cancelled input)
    expected = False

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code)


class InvalidConfiguration(ActionRejected):
    code = "invalid_configuration"


class GameAlreadyStarted(ActionRejected):
    code = "game_already_started"


class GameNotStarted(ActionRejected):
    code = "game_not_started"


class NotYourTurn(ActionRejected):
    code = "not_your_turn"
    expected = True


class CellAlreadySet(ActionRejected):
    code = "cell_already_set"
    expected = True


class MissingValue(ActionRejected):
    """Submission without a value: the user cancelled or confirmed an empty entry."""
    code = "missing_value"
    expected = True


class InvalidScore(ActionRejected):
    code = "invalid_score"


class InvalidCell(ActionRejected):
    code = "invalid_cell"


class UnknownAction(ActionRejected):
    code = "unknown_action"
