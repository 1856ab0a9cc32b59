from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from loguru import logger

from . import rules
from .board import Board, board as default_board
from .exceptions import GameOverError
from .state import BoardState
from .types import GamePhase, Move, MoveOutcome, Team, ValidationResult


@dataclass(slots=True)
class BoardEngine:
    """Owns the canonical board state of a single game instance.

    The engine is single-writer: the caller must not run two ``process_move``
    calls for the same game concurrently.
    """

    state: BoardState = field(default_factory=BoardState.initial)
    seed: Optional[int] = None
    board: Board = field(default_factory=lambda: default_board)
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)
        self._sync_phase()

    def _sync_phase(self) -> None:
        if self.state.game_phase == GamePhase.SETUP:
            self.state.game_phase = GamePhase.PLAYING
        if rules.check_win_condition(self.state):
            self.state.game_phase = GamePhase.FINISHED

    # --- Dice ---
    def roll_dice(self) -> int:
        return self.rng.randint(self.board.cfg.DICE_MIN, self.board.cfg.DICE_MAX)

    # --- Queries ---
    @property
    def current_team(self) -> Team:
        return self.state.current_team

    @property
    def is_finished(self) -> bool:
        return self.state.game_phase == GamePhase.FINISHED

    @property
    def winner(self) -> Team | None:
        return rules.winning_team(self.state)

    def legal_moves(self, dice_roll: int) -> List[Move]:
        if self.is_finished:
            return []
        return rules.legal_moves(self.state, dice_roll, self.board)

    def win_probabilities(self) -> Dict[Team, float]:
        return rules.compute_win_probabilities(self.state)

    def validate_move(self, move: Move) -> ValidationResult:
        return rules.validate_move(self.state, move, self.board)

    # --- Transitions ---
    def process_move(self, move: Move) -> MoveOutcome:
        """
        Validate and apply ``move``.

        A rejected move leaves the state untouched and is reported through the
        outcome's ``error``; nothing is raised for rule violations.
        """
        validation = self.validate_move(move)
        if not validation.valid:
            logger.warning(
                f"Rejected {move.team.value} piece {move.piece_id} "
                f"{move.from_position}->{move.to_position}: {validation.reason}"
            )
            return MoveOutcome(
                valid=False,
                move=move,
                state=self.state,
                error=validation.error,
            )

        victim_keys = [
            (pc.team, pc.piece_id)
            for pc in rules.captured_by(self.state, move, self.board)
        ]
        new_state = rules.apply_move(self.state, move, self.board)
        self.state = new_state
        logger.debug(
            f"{move.team.value} piece {move.piece_id} "
            f"{move.from_position}->{move.to_position} (roll {move.dice_roll})"
        )

        winner = rules.winning_team(new_state)
        if winner is not None:
            logger.info(f"Team {winner.value} has won")

        return MoveOutcome(
            valid=True,
            move=move,
            state=new_state,
            win_probabilities=rules.compute_win_probabilities(new_state),
            # pieces as they stand after the move, i.e. back home
            captured=[new_state.piece(team, pid) for team, pid in victim_keys],
            winner=winner,
        )

    def pass_turn(self, dice_roll: int) -> BoardState:
        if self.is_finished:
            raise GameOverError("Cannot pass a turn in a finished game")
        self.state = rules.skip_turn(self.state, dice_roll, self.board)
        return self.state

    # --- State access for the owning session ---
    def get_board_state(self) -> BoardState:
        return self.state

    def set_board_state(self, state: BoardState) -> None:
        self.state = state
        self._sync_phase()
