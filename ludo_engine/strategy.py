from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Protocol, Sequence

from .types import Move


class Strategy(Protocol):
    def select_move(self, legal_moves: Sequence[Move]) -> Move | None:
        ...


@dataclass(slots=True)
class RandomStrategy:
    rng_seed: int | None = None
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.rng_seed)

    def select_move(self, legal_moves: Sequence[Move]) -> Move | None:
        if not legal_moves:
            return None
        return self.rng.choice(list(legal_moves))
