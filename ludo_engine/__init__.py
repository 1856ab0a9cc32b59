"""
Ludo board-rule engine.
Move validation, captures, win detection and standing heuristics for a
four-team Ludo game, plus the session store that owns running games.
"""

from .board import Board
from .config import config, score_weights
from .engine import BoardEngine
from .exceptions import (
    BoardStateError,
    GameNotActiveError,
    GameOverError,
    InvalidMoveError,
    LudoError,
    SessionExistsError,
    SessionNotFoundError,
)
from .piece import Piece
from .rules import (
    apply_move,
    captured_by,
    check_win_condition,
    compute_win_probabilities,
    legal_moves,
    skip_turn,
    validate_move,
    winning_team,
)
from .session import GameMode, GameSession, GameStatus, SessionStore
from .state import BoardState
from .strategy import RandomStrategy, Strategy
from .types import (
    TURN_ORDER,
    GamePhase,
    Move,
    MoveError,
    MoveOutcome,
    Team,
    ValidationResult,
)

__all__ = [
    "Board",
    "BoardEngine",
    "BoardState",
    "GameMode",
    "GamePhase",
    "GameSession",
    "GameStatus",
    "Move",
    "MoveError",
    "MoveOutcome",
    "Piece",
    "RandomStrategy",
    "SessionStore",
    "Strategy",
    "Team",
    "TURN_ORDER",
    "ValidationResult",
    "apply_move",
    "captured_by",
    "check_win_condition",
    "compute_win_probabilities",
    "legal_moves",
    "skip_turn",
    "validate_move",
    "winning_team",
    "config",
    "score_weights",
    "LudoError",
    "BoardStateError",
    "InvalidMoveError",
    "GameOverError",
    "GameNotActiveError",
    "SessionExistsError",
    "SessionNotFoundError",
]
