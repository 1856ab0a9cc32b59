import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _int_list(raw: str) -> list[int]:
    return [int(x) for x in raw.split(",") if x.strip()]


@dataclass(slots=True)
class Config:
    # --- Constants ---
    TRACK_LENGTH: int = 52  # absolute cells 0..51 on the shared ring
    NUM_TEAMS: int = 4
    PIECES_PER_TEAM: int = 4
    HOME_POSITION: int = -1

    # Dice
    DICE_MIN: int = 1
    DICE_MAX: int = 6
    EXIT_ROLL: int = 6

    # Absolute start cells, in turn order: Red, Blue, Green, Yellow
    START_OFFSETS: list[int] = field(default_factory=lambda: [1, 14, 27, 40])
    SAFE_SQUARES: list[int] = field(
        default_factory=lambda: _int_list(
            os.getenv("SAFE_SQUARES", "1,9,14,22,27,35,40,48")
        )
    )
    SAFE_CELLS_ENABLED: bool = bool(int(os.getenv("SAFE_CELLS_ENABLED", 1)))

    LAP_LENGTH: int = 51  # steps from the start cell to the finish lane entry
    FINISH_LANE_LENGTH: int = 5  # lane cells before the finish

    # Session limits
    DEATH_MODE_MAX_MOVES: int = int(os.getenv("DEATH_MODE_MAX_MOVES", 2000))
    MAX_TURNS: int = int(os.getenv("MAX_TURNS", 5000))

    # Derived (populated in __post_init__ due to slots)
    LANE_START: int = 0
    FINISH_POSITION: int = 0
    FINISH_PROGRESS: int = 0

    def __post_init__(self):
        # Lane occupies 52..56 and the finished cell is 57
        self.LANE_START = self.TRACK_LENGTH
        self.FINISH_POSITION = self.LANE_START + self.FINISH_LANE_LENGTH
        self.FINISH_PROGRESS = self.LAP_LENGTH + self.FINISH_LANE_LENGTH

        if len(self.START_OFFSETS) != self.NUM_TEAMS:
            raise ValueError("START_OFFSETS must list one cell per team")
        if any(not 0 <= s < self.TRACK_LENGTH for s in self.SAFE_SQUARES):
            raise ValueError("SAFE_SQUARES must be track cells (0..51)")
        if self.DEATH_MODE_MAX_MOVES < 1:
            raise ValueError("DEATH_MODE_MAX_MOVES must be positive")


@dataclass(slots=True)
class ScoreWeights:
    """Weights of the win-probability display heuristic."""

    finished: float = float(os.getenv("SCORE_FINISHED", 40))
    active: float = float(os.getenv("SCORE_ACTIVE", 15))
    home: float = float(os.getenv("SCORE_HOME", -5))
    floor: float = 0.0
    ceiling: float = 100.0
    uniform: float = 25.0


config = Config()
score_weights = ScoreWeights()
