"""Exception types raised inside the game core.

GameSession converts these into structured outcomes, so none of them cross
apply_move / undo / get_ai_move.
"""


class GobangError(Exception):
    """Base class for all gobang errors."""


class InvalidMove(GobangError):
    """Occupied cell, off-board coordinate, or no game in progress."""


class NoLegalMove(GobangError):
    """The AI was asked to move on a full board."""


class PersistenceFailure(GobangError):
    """A saved-game backend operation failed."""
