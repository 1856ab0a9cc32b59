# Rule violations are reported as ValidationResult values; these are for misuse.
class LudoError(Exception):
    """Base exception for engine and session errors."""

    pass


class BoardStateError(LudoError):
    """Raised when a serialized board state breaks the board invariants."""

    pass


class InvalidMoveError(LudoError):
    """Raised when apply_move is handed a move that references no piece."""

    pass


class GameOverError(LudoError):
    """Raised when acting on a game whose phase is finished."""

    pass


class SessionError(LudoError):
    """Base class for session store errors."""

    pass


class SessionNotFoundError(SessionError):
    """Raised when no session is registered under a game id."""

    pass


class SessionExistsError(SessionError):
    """Raised when creating a session under an id that is already taken."""

    pass


class GameNotActiveError(SessionError):
    """Raised when submitting to a session that has finished or been terminated."""

    pass
