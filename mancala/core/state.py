from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .actions import PITS_PER_SIDE

SlotArray = NDArray[np.uint8]

# Unified layout: mover pits, mover store, opponent pits, opponent store.
MOVER_STORE = PITS_PER_SIDE
OPPONENT_FIRST_PIT = PITS_PER_SIDE + 1
OPPONENT_STORE = 2 * PITS_PER_SIDE + 1
BOARD_SLOTS = 2 * PITS_PER_SIDE + 2
HALF_BOARD = BOARD_SLOTS // 2

BORDER = "+-------------------------------+\n"


@dataclass(eq=False)
class GameState:
    """Board from the point of view of the player about to move.

    ``slots`` always has 14 entries; indices 6 and 13 are the stores. Two
    states compare equal when every slot matches, and hash on the raw
    bytes so a state can key a mapping.
    """

    slots: SlotArray  # shape (14,), dtype=np.uint8

    def __post_init__(self) -> None:
        slots = np.asarray(self.slots, dtype=np.uint8)
        if slots.shape != (BOARD_SLOTS,):
            raise ValueError(f"Board must have {BOARD_SLOTS} slots, got shape {slots.shape}.")
        self.slots = slots

    @classmethod
    def from_key(cls, key: bytes) -> "GameState":
        return cls(np.frombuffer(key, dtype=np.uint8).copy())

    def copy(self) -> "GameState":
        return GameState(self.slots.copy())

    def key(self) -> bytes:
        return self.slots.tobytes()

    @property
    def mover_pits(self) -> SlotArray:
        return self.slots[:MOVER_STORE]

    @property
    def opponent_pits(self) -> SlotArray:
        return self.slots[OPPONENT_FIRST_PIT:OPPONENT_STORE]

    @property
    def pits(self) -> SlotArray:
        """The 12 playing pits, mover's first, without the stores."""
        return np.concatenate([self.mover_pits, self.opponent_pits])

    @property
    def mover_store(self) -> int:
        return int(self.slots[MOVER_STORE])

    @property
    def opponent_store(self) -> int:
        return int(self.slots[OPPONENT_STORE])

    @property
    def score_difference(self) -> int:
        return self.mover_store - self.opponent_store

    @property
    def total_seeds(self) -> int:
        return int(self.slots.sum())

    def is_ended(self) -> bool:
        return int(self.mover_pits.sum()) == 0 or int(self.opponent_pits.sum()) == 0

    def swap_board(self) -> None:
        """Hand the move to the other player without touching seed totals."""
        self.slots = np.roll(self.slots, HALF_BOARD)

    def render(self) -> str:
        top = "".join(f"{int(seeds):2} |" for seeds in self.opponent_pits[::-1])
        bottom = "".join(f"{int(seeds):2} |" for seeds in self.mover_pits)
        return (
            BORDER
            + f"|   |{top}   |\n"
            + f"|{self.opponent_store:2} |                       |{self.mover_store:2} |\n"
            + f"|   |{bottom}   |\n"
            + BORDER
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return bool(np.array_equal(self.slots, other.slots))

    def __hash__(self) -> int:
        return hash(self.key())

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"GameState(slots={self.slots.tolist()})"
