from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from .piece import Piece
    from .state import BoardState


class Team(Enum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"

    @property
    def index(self) -> int:
        return TURN_ORDER.index(self)


TURN_ORDER: tuple[Team, ...] = (Team.RED, Team.BLUE, Team.GREEN, Team.YELLOW)


class GamePhase(Enum):
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


class MoveError(Enum):
    """Reasons a proposed move is rejected. Values are user-facing."""

    GAME_OVER = "Game is already finished"
    INVALID_DICE_ROLL = "Dice roll must be between 1 and 6"
    NOT_YOUR_TURN = "Not your turn"
    INVALID_PIECE = "Invalid piece"
    STALE_POSITION = "Piece not at expected position"
    NEED_SIX_TO_EXIT = "Need 6 to move piece from home"
    PIECE_FINISHED = "Piece has already finished"
    OVERSHOOT = "Roll overshoots the finish"
    DESTINATION_MISMATCH = "Invalid destination"
    BLOCKED = "Position blocked"


@dataclass(slots=True, frozen=True)
class Move:
    piece_id: int
    team: Team
    from_position: int
    to_position: int
    dice_roll: int


@dataclass(slots=True, frozen=True)
class ValidationResult:
    error: Optional[MoveError] = None

    @property
    def valid(self) -> bool:
        return self.error is None

    @property
    def reason(self) -> str:
        return self.error.value if self.error else ""

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def fail(cls, error: MoveError) -> "ValidationResult":
        return cls(error=error)


@dataclass(slots=True)
class MoveOutcome:
    valid: bool
    move: Move
    state: "BoardState"
    error: Optional[MoveError] = None
    win_probabilities: Dict[Team, float] = field(default_factory=dict)
    captured: List["Piece"] = field(default_factory=list)
    winner: Optional[Team] = None

    @property
    def reason(self) -> str:
        return self.error.value if self.error else ""
