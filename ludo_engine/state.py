from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict, Iterator, List

from .board import Board, board as default_board
from .config import config
from .exceptions import BoardStateError
from .piece import Piece
from .types import TURN_ORDER, GamePhase, Team


def _initial_pieces() -> Dict[Team, List[Piece]]:
    return {
        team: [Piece(team=team, piece_id=i) for i in range(config.PIECES_PER_TEAM)]
        for team in TURN_ORDER
    }


@dataclass(slots=True)
class BoardState:
    """Snapshot of one game: 16 pieces, whose turn it is, last roll and phase."""

    pieces: Dict[Team, List[Piece]] = field(default_factory=_initial_pieces)
    current_player: int = 0
    last_dice_roll: int = 0
    game_phase: GamePhase = GamePhase.SETUP

    @classmethod
    def initial(cls) -> "BoardState":
        return cls()

    def clone(self) -> "BoardState":
        return copy.deepcopy(self)

    @property
    def current_team(self) -> Team:
        return TURN_ORDER[self.current_player]

    def team_pieces(self, team: Team) -> List[Piece]:
        return self.pieces[team]

    def piece(self, team: Team, piece_id: int) -> Piece | None:
        for pc in self.pieces.get(team, []):
            if pc.piece_id == piece_id:
                return pc
        return None

    def all_pieces(self) -> Iterator[Piece]:
        for team in TURN_ORDER:
            yield from self.pieces[team]

    def occupants(
        self, position: int, team: Team, board: Board = default_board
    ) -> List[Piece]:
        """Placed pieces sharing the cell that a ``team`` piece at ``position`` would occupy."""
        visitor = Piece(team=team, piece_id=-1)
        board.place(visitor, position)
        return [pc for pc in self.all_pieces() if board.shares_cell(visitor, pc)]

    def counts(self, team: Team) -> tuple[int, int, int]:
        """(home, active, finished) piece counts for ``team``."""
        pieces = self.pieces[team]
        home = sum(1 for pc in pieces if pc.is_home)
        finished = sum(1 for pc in pieces if pc.is_finished)
        return home, len(pieces) - home - finished, finished

    # --- Serialization ---
    def to_dict(self) -> dict:
        return {
            "pieces": {
                team.value: [pc.to_dict() for pc in self.pieces[team]]
                for team in TURN_ORDER
            },
            "current_player": self.current_player,
            "last_dice_roll": self.last_dice_roll,
            "game_phase": self.game_phase.value,
        }

    @classmethod
    def from_dict(cls, data: dict, board: Board = default_board) -> "BoardState":
        """Rebuild a state, rejecting anything that breaks the board invariants.

        A snapshot in which a team has already finished every piece is loaded
        with phase ``finished`` whatever phase it declares.
        """
        cfg = board.cfg
        try:
            raw_pieces = data["pieces"]
            current_player = _strict_int(data.get("current_player", 0), "current_player")
            last_dice_roll = _strict_int(data.get("last_dice_roll", 0), "last_dice_roll")
            phase = GamePhase(data.get("game_phase", GamePhase.SETUP.value))
        except (KeyError, TypeError, ValueError) as e:
            raise BoardStateError(f"Malformed board state: {e}") from e

        if not 0 <= current_player < cfg.NUM_TEAMS:
            raise BoardStateError(f"current_player out of range: {current_player}")

        if not isinstance(raw_pieces, dict) or set(raw_pieces) != {t.value for t in TURN_ORDER}:
            raise BoardStateError("Board state must list pieces for exactly red, blue, green and yellow")

        pieces: Dict[Team, List[Piece]] = {}
        for team in TURN_ORDER:
            raw_team = raw_pieces[team.value]
            if not isinstance(raw_team, list):
                raise BoardStateError(f"Pieces for {team.value} must be a list")
            pieces[team] = [_piece_from_dict(team, raw, board) for raw in raw_team]
            ids = sorted(pc.piece_id for pc in pieces[team])
            if ids != list(range(cfg.PIECES_PER_TEAM)):
                raise BoardStateError(
                    f"Team {team.value} must have pieces 0..{cfg.PIECES_PER_TEAM - 1}, got {ids}"
                )
            pieces[team].sort(key=lambda pc: pc.piece_id)

            placed = [pc.position for pc in pieces[team] if pc.is_active]
            if len(placed) != len(set(placed)):
                raise BoardStateError(f"Team {team.value} stacks pieces on one cell: {sorted(placed)}")

        if any(all(pc.is_finished for pc in team_pieces) for team_pieces in pieces.values()):
            phase = GamePhase.FINISHED

        return cls(
            pieces=pieces,
            current_player=current_player,
            last_dice_roll=last_dice_roll,
            game_phase=phase,
        )


def _strict_int(value, name: str) -> int:
    # bool is an int subclass and floats would truncate silently
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    return value


def _piece_from_dict(team: Team, raw: dict, board: Board) -> Piece:
    try:
        piece_id = _strict_int(raw["piece_id"], "piece_id")
        position = _strict_int(raw["position"], "position")
        declared_team = raw.get("team", team.value)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise BoardStateError(f"Malformed piece for {team.value}: {e}") from e

    if declared_team != team.value:
        raise BoardStateError(f"Piece listed under {team.value} claims team {declared_team}")
    if not board.is_valid_position(position):
        raise BoardStateError(f"Piece {team.value}_{piece_id} has invalid position {position}")
    if board.is_track(position) and board.progress(team, position) >= board.cfg.LAP_LENGTH:
        raise BoardStateError(
            f"Piece {team.value}_{piece_id} sits on cell {position}, which {team.value} never reaches"
        )

    pc = Piece(team=team, piece_id=piece_id)
    board.place(pc, position)
    if "is_home" in raw and bool(raw["is_home"]) != pc.is_home:
        raise BoardStateError(f"Piece {team.value}_{piece_id} is_home flag contradicts position")
    if "is_finished" in raw and bool(raw["is_finished"]) != pc.is_finished:
        raise BoardStateError(f"Piece {team.value}_{piece_id} is_finished flag contradicts position")
    return pc
