from dataclasses import dataclass

from .config import config
from .types import Team


@dataclass(slots=True)
class Piece:
    """Lightweight piece model. Holds state only.

    Rule logic (legal destinations, finishing, captures) lives in
    ``ludo_engine.rules``; position arithmetic lives in ``Board``.
    """

    team: Team
    piece_id: int  # 0..3 per team
    position: int = -1  # -1 home; 0..51 track; 52..56 lane; 57 finished
    is_home: bool = True
    is_finished: bool = False

    @property
    def is_active(self) -> bool:
        return not self.is_home and not self.is_finished

    def move_to(
        self, new_position: int, finish_position: int = config.FINISH_POSITION
    ) -> None:
        self.position = new_position
        self.is_home = False
        self.is_finished = new_position == finish_position

    def send_home(self, home_position: int = config.HOME_POSITION) -> None:
        self.position = home_position
        self.is_home = True
        self.is_finished = False

    def to_dict(self) -> dict:
        return {
            "piece_id": self.piece_id,
            "team": self.team.value,
            "position": self.position,
            "is_home": self.is_home,
            "is_finished": self.is_finished,
        }

    def __str__(self) -> str:
        return f"Piece({self.team.value}_{self.piece_id} at {self.position})"
