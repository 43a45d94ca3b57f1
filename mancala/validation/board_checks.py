from __future__ import annotations

from typing import Optional

import numpy as np

from mancala.core import BOARD_SLOTS, GameState


class BoardInvariantError(ValueError):
    pass


def validate_state(state: GameState, expected_total: Optional[int] = None) -> None:
    if state.slots.shape != (BOARD_SLOTS,):
        raise BoardInvariantError(f"board has shape {state.slots.shape}, expected ({BOARD_SLOTS},)")
    if state.slots.dtype != np.uint8:
        raise BoardInvariantError(f"board dtype is {state.slots.dtype}, expected uint8")
    if expected_total is not None and state.total_seeds != expected_total:
        raise BoardInvariantError(
            f"seed total changed from {expected_total} to {state.total_seeds}"
        )


def validate_transition(before: GameState, after: GameState) -> None:
    """Check that a single move conserved seeds and never shrank a store."""
    validate_state(after, expected_total=before.total_seeds)
    if after.mover_store < before.mover_store:
        raise BoardInvariantError("mover store decreased during a move")
    if after.opponent_store < before.opponent_store:
        raise BoardInvariantError("opponent store decreased during a move")
