from __future__ import annotations

from dataclasses import dataclass, field

from .config import Config, config
from .piece import Piece
from .types import TURN_ORDER, Team


@dataclass(slots=True)
class Board:
    """Owns position arithmetic and cell properties (no rule logic).

    Positions are absolute: -1 home, 0..51 main track, 52..56 the team's own
    finish lane, 57 finished. Progress is measured in steps from the team's
    start cell: 0..50 on the track, 51..55 in the lane, 56 at the finish.
    """

    cfg: Config = field(default_factory=lambda: config)

    def start_offset(self, team: Team) -> int:
        return self.cfg.START_OFFSETS[TURN_ORDER.index(team)]

    def lane_entry(self, team: Team) -> int:
        """Unwrapped ring coordinate where the team leaves the track (one full lap)."""
        return self.start_offset(team) + self.cfg.LAP_LENGTH

    # --- Cell classification ---
    def is_home(self, position: int) -> bool:
        return position == self.cfg.HOME_POSITION

    def is_track(self, position: int) -> bool:
        return 0 <= position < self.cfg.TRACK_LENGTH

    def is_lane(self, position: int) -> bool:
        return self.cfg.LANE_START <= position < self.cfg.FINISH_POSITION

    def is_finish(self, position: int) -> bool:
        return position == self.cfg.FINISH_POSITION

    def is_valid_position(self, position: int) -> bool:
        return self.cfg.HOME_POSITION <= position <= self.cfg.FINISH_POSITION

    def is_safe(self, position: int) -> bool:
        """Track cells exempt from capture. Lanes and the finish are never shared."""
        if not self.cfg.SAFE_CELLS_ENABLED:
            return False
        return position in self.cfg.SAFE_SQUARES

    def place(self, piece: Piece, position: int) -> None:
        """Put ``piece`` on ``position`` using this board's finish cell."""
        if self.is_home(position):
            piece.send_home(self.cfg.HOME_POSITION)
        else:
            piece.move_to(position, self.cfg.FINISH_POSITION)

    def shares_cell(self, a: Piece, b: Piece) -> bool:
        """True when two placed pieces physically occupy the same cell."""
        if a.is_home or b.is_home or a.position != b.position:
            return False
        # lane cells and the finish belong to a single team
        return self.is_track(a.position) or a.team == b.team

    # --- Mapping ---
    def progress(self, team: Team, position: int) -> int:
        """Steps travelled from the team's start cell; -1 while at home."""
        if self.is_home(position):
            return -1
        if self.is_track(position):
            return (position - self.start_offset(team)) % self.cfg.TRACK_LENGTH
        return self.cfg.LAP_LENGTH + (position - self.cfg.LANE_START)

    def position_for_progress(self, team: Team, progress: int) -> int:
        if progress < 0:
            return self.cfg.HOME_POSITION
        if progress < self.cfg.LAP_LENGTH:
            return (self.start_offset(team) + progress) % self.cfg.TRACK_LENGTH
        if progress > self.cfg.FINISH_PROGRESS:
            raise ValueError(f"Progress {progress} lies beyond the finish")
        return self.cfg.LANE_START + (progress - self.cfg.LAP_LENGTH)

    def destination(self, piece: Piece, dice_roll: int) -> int | None:
        """Cell reached by ``piece`` with ``dice_roll``, or None when it cannot move."""
        if piece.is_finished:
            return None
        if piece.is_home:
            return self.start_offset(piece.team) if dice_roll == self.cfg.EXIT_ROLL else None
        target = self.progress(piece.team, piece.position) + dice_roll
        if target > self.cfg.FINISH_PROGRESS:
            return None
        if target < self.cfg.LAP_LENGTH:
            return (piece.position + dice_roll) % self.cfg.TRACK_LENGTH
        return self.position_for_progress(piece.team, target)


board = Board()
