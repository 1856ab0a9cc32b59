"""
Game sessions and the store that owns them.

A ``SessionStore`` replaces a process-wide map of running engines: whoever
coordinates games holds the store, creates a session when a game is created
and discards it when the game ends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional

from loguru import logger

from .config import config
from .engine import BoardEngine
from .exceptions import (
    GameNotActiveError,
    SessionExistsError,
    SessionNotFoundError,
)
from .state import BoardState
from .types import Move, MoveOutcome


class GameMode(Enum):
    STANDARD = "standard"
    DEATH = "death"


class GameStatus(Enum):
    ACTIVE = "active"
    FINISHED = "finished"
    TERMINATED = "terminated"  # Death Mode move ceiling reached


@dataclass(slots=True)
class GameSession:
    game_id: str
    mode: GameMode = GameMode.STANDARD
    max_moves: int = config.DEATH_MODE_MAX_MOVES
    seed: Optional[int] = None
    engine: BoardEngine = field(init=False)
    move_count: int = field(default=0, init=False)
    status: GameStatus = field(default=GameStatus.ACTIVE, init=False)

    def __post_init__(self) -> None:
        if self.max_moves < 1:
            raise ValueError("max_moves must be positive")
        self.engine = BoardEngine(seed=self.seed)

    @property
    def is_active(self) -> bool:
        return self.status == GameStatus.ACTIVE

    @property
    def state(self) -> BoardState:
        return self.engine.get_board_state()

    def _require_active(self) -> None:
        if not self.is_active:
            raise GameNotActiveError(
                f"Game {self.game_id} is {self.status.value}, no further moves accepted"
            )

    def roll_dice(self) -> int:
        self._require_active()
        return self.engine.roll_dice()

    def submit_move(self, move: Move) -> MoveOutcome:
        """Forward ``move`` to the engine and update the session status."""
        self._require_active()
        outcome = self.engine.process_move(move)
        if not outcome.valid:
            return outcome

        self.move_count += 1
        if outcome.winner is not None:
            self.status = GameStatus.FINISHED
            logger.info(
                f"Game {self.game_id} finished after {self.move_count} moves, "
                f"winner {outcome.winner.value}"
            )
        elif self.mode == GameMode.DEATH and self.move_count >= self.max_moves:
            self.status = GameStatus.TERMINATED
            logger.info(
                f"Game {self.game_id} terminated at the {self.max_moves}-move ceiling"
            )
        return outcome

    def pass_turn(self, dice_roll: int) -> BoardState:
        self._require_active()
        return self.engine.pass_turn(dice_roll)


@dataclass(slots=True)
class SessionStore:
    """Explicit registry of running games keyed by game id."""

    _sessions: Dict[str, GameSession] = field(default_factory=dict, init=False)

    def create(
        self,
        game_id: str,
        mode: GameMode = GameMode.STANDARD,
        max_moves: int = config.DEATH_MODE_MAX_MOVES,
        seed: Optional[int] = None,
    ) -> GameSession:
        if game_id in self._sessions:
            raise SessionExistsError(f"Game {game_id} already has a session")
        session = GameSession(game_id=game_id, mode=mode, max_moves=max_moves, seed=seed)
        self._sessions[game_id] = session
        logger.info(f"Created {mode.value} session for game {game_id}")
        return session

    def get(self, game_id: str) -> GameSession:
        try:
            return self._sessions[game_id]
        except KeyError as e:
            raise SessionNotFoundError(f"No session for game {game_id}") from e

    def discard(self, game_id: str) -> GameSession:
        session = self.get(game_id)
        del self._sessions[game_id]
        logger.info(f"Discarded session for game {game_id} ({session.status.value})")
        return session

    def __contains__(self, game_id: object) -> bool:
        return game_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._sessions))
