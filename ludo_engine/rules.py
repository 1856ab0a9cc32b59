"""
Pure rule functions for one Ludo board.

Every function takes a ``BoardState`` and never mutates it; ``apply_move`` and
``skip_turn`` return a fresh state. Callers must serialize moves per game:
validate, then apply at most once per accepted move.
"""

from __future__ import annotations

from typing import Dict, List

import numpy as np
from loguru import logger

from .board import Board, board as default_board
from .config import ScoreWeights, score_weights
from .exceptions import InvalidMoveError
from .piece import Piece
from .state import BoardState
from .types import TURN_ORDER, GamePhase, Move, MoveError, Team, ValidationResult


# --- Validation ---
def validate_move(
    state: BoardState, move: Move, board: Board = default_board
) -> ValidationResult:
    """
    Check a proposed move against turn order, dice and occupancy rules.

    Checks run in a fixed order and the first failure is reported. The dice
    roll is taken as given; nothing here rolls.

    Args:
        state: Board snapshot the move is judged against
        move: The proposed move
        board: Geometry to use (defaults to the configured board)

    Returns:
        ValidationResult: ``valid`` or the ``MoveError`` explaining the rejection
    """
    if state.game_phase == GamePhase.FINISHED:
        return ValidationResult.fail(MoveError.GAME_OVER)

    cfg = board.cfg
    if not cfg.DICE_MIN <= move.dice_roll <= cfg.DICE_MAX:
        return ValidationResult.fail(MoveError.INVALID_DICE_ROLL)

    if move.team != state.current_team:
        return ValidationResult.fail(MoveError.NOT_YOUR_TURN)

    piece = state.piece(move.team, move.piece_id)
    if piece is None:
        return ValidationResult.fail(MoveError.INVALID_PIECE)

    if piece.position != move.from_position:
        return ValidationResult.fail(MoveError.STALE_POSITION)

    if piece.is_home and move.dice_roll != cfg.EXIT_ROLL:
        return ValidationResult.fail(MoveError.NEED_SIX_TO_EXIT)

    if piece.is_finished:
        return ValidationResult.fail(MoveError.PIECE_FINISHED)

    expected = board.destination(piece, move.dice_roll)
    if expected is None:
        return ValidationResult.fail(MoveError.OVERSHOOT)

    if expected != move.to_position:
        return ValidationResult.fail(MoveError.DESTINATION_MISMATCH)

    if not board.is_finish(expected) and any(
        pc.team == move.team and not pc.is_finished
        for pc in state.occupants(expected, move.team, board)
    ):
        return ValidationResult.fail(MoveError.BLOCKED)

    return ValidationResult.ok()


def legal_moves(
    state: BoardState, dice_roll: int, board: Board = default_board
) -> List[Move]:
    """All moves the team on turn may make with ``dice_roll``."""
    team = state.current_team
    moves: List[Move] = []
    for pc in state.team_pieces(team):
        dest = board.destination(pc, dice_roll)
        if dest is None:
            continue
        mv = Move(
            piece_id=pc.piece_id,
            team=team,
            from_position=pc.position,
            to_position=dest,
            dice_roll=dice_roll,
        )
        if validate_move(state, mv, board).valid:
            moves.append(mv)
    return moves


# --- Transitions ---
def captured_by(
    state: BoardState, move: Move, board: Board = default_board
) -> List[Piece]:
    """Opposing pieces that ``move`` would send home."""
    if not board.is_track(move.to_position) or board.is_safe(move.to_position):
        return []
    return [
        pc
        for pc in state.occupants(move.to_position, move.team, board)
        if pc.team != move.team and not pc.is_finished
    ]


def apply_move(
    state: BoardState, move: Move, board: Board = default_board
) -> BoardState:
    """
    Return the state after ``move``; the input state is left untouched.

    Relocates the piece, resolves captures, advances the turn (fixed order,
    finished teams are not skipped) and records the roll. Not idempotent:
    applying the same move twice advances the turn twice.
    """
    new_state = state.clone()
    piece = new_state.piece(move.team, move.piece_id)
    if piece is None:
        raise InvalidMoveError(f"No piece {move.piece_id} for team {move.team.value}")

    victims = captured_by(new_state, move, board)
    board.place(piece, move.to_position)
    for victim in victims:
        logger.debug(f"{piece} captured {victim}")
        board.place(victim, board.cfg.HOME_POSITION)

    if piece.is_finished:
        logger.debug(f"{piece} reached the finish")

    new_state.current_player = (new_state.current_player + 1) % board.cfg.NUM_TEAMS
    new_state.last_dice_roll = move.dice_roll
    if new_state.game_phase == GamePhase.SETUP:
        new_state.game_phase = GamePhase.PLAYING
    if check_win_condition(new_state):
        new_state.game_phase = GamePhase.FINISHED
    return new_state


def skip_turn(
    state: BoardState, dice_roll: int, board: Board = default_board
) -> BoardState:
    """Pass the turn when the team on turn has no legal move for ``dice_roll``."""
    new_state = state.clone()
    new_state.current_player = (new_state.current_player + 1) % board.cfg.NUM_TEAMS
    new_state.last_dice_roll = dice_roll
    if new_state.game_phase == GamePhase.SETUP:
        new_state.game_phase = GamePhase.PLAYING
    return new_state


# --- Outcome ---
def winning_team(state: BoardState) -> Team | None:
    for team in TURN_ORDER:
        if all(pc.is_finished for pc in state.team_pieces(team)):
            return team
    return None


def check_win_condition(state: BoardState) -> bool:
    return winning_team(state) is not None


def compute_win_probabilities(
    state: BoardState, weights: ScoreWeights = score_weights
) -> Dict[Team, float]:
    """
    Heuristic per-team standing for display, normalized to sum to 100.

    This is a weighted piece count, not a calibrated probability:
    ``finished*40 + active*15 + home*(-5)`` clamped to [0, 100], then
    rescaled across teams. When every clamped score is zero each team gets 25.
    """
    counts = np.array([state.counts(team) for team in TURN_ORDER], dtype=np.float64)
    raw = counts @ np.array([weights.home, weights.active, weights.finished])
    clamped = np.clip(raw, weights.floor, weights.ceiling)
    total = clamped.sum()
    if total <= 0:
        return {team: weights.uniform for team in TURN_ORDER}
    normalized = clamped / total * 100.0
    return {team: float(p) for team, p in zip(TURN_ORDER, normalized)}
