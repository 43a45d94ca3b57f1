from __future__ import annotations

import logging
from typing import Iterator

import numpy as np

from .actions import PITS_PER_SIDE, Action, SubAction
from .state import BOARD_SLOTS, MOVER_STORE, OPPONENT_FIRST_PIT, GameState

logger = logging.getLogger(__name__)

STARTING_SEEDS = 4
MAX_SLOT_SEEDS = int(np.iinfo(np.uint8).max)


def initialize_game_state(starting_seeds: int = STARTING_SEEDS) -> GameState:
    if starting_seeds < 0:
        raise ValueError("starting_seeds must be non-negative.")
    # Seeds are conserved, so no slot can ever hold more than the board total.
    if starting_seeds * 2 * PITS_PER_SIDE > MAX_SLOT_SEEDS:
        raise ValueError(
            f"starting_seeds={starting_seeds} puts more than {MAX_SLOT_SEEDS} seeds on the board."
        )
    slots = np.zeros(BOARD_SLOTS, dtype=np.uint8)
    slots[:PITS_PER_SIDE] = starting_seeds
    slots[OPPONENT_FIRST_PIT:OPPONENT_FIRST_PIT + PITS_PER_SIDE] = starting_seeds
    return GameState(slots)


def mirror_pit(pit: int) -> int:
    """Slot of the opponent pit paired with mover pit ``pit``."""
    return pit + OPPONENT_FIRST_PIT


def evaluate_subaction(state: GameState, subaction: SubAction) -> None:
    """Sow the seeds of one mover pit in place, then resolve a capture."""
    pit = int(subaction)
    if not 0 <= pit < PITS_PER_SIDE:
        raise ValueError(f"Slot {pit} is not a pit on the mover's side.")
    seeds = int(state.slots[pit])
    if seeds == 0:
        raise ValueError(f"Pit {pit} is empty and cannot be sown.")

    state.slots[pit] = 0
    visited = (pit + np.arange(1, seeds + 1)) % BOARD_SLOTS
    np.add.at(state.slots, visited, 1)
    last = int(visited[-1])

    if last < PITS_PER_SIDE and state.slots[last] == 1:
        mirror = mirror_pit(last)
        captured = 1 + int(state.slots[mirror])
        state.slots[MOVER_STORE] += captured
        state.slots[last] = 0
        state.slots[mirror] = 0
        logger.debug("Capture at pit %d took %d seeds", last, captured)


def evaluate_action(state: GameState, action: Action) -> None:
    """Apply every sub-move of ``action`` to ``state`` in order.

    The action itself is left untouched so it can be replayed.
    """
    if action.is_empty():
        raise ValueError("Cannot evaluate an empty action.")
    queue = action.copy()
    while not queue.is_empty():
        evaluate_subaction(state, queue.pop_action())


def evaluate_to_new_state(state: GameState, action: Action) -> GameState:
    new_state = state.copy()
    evaluate_action(new_state, action)
    return new_state


def enumerate_legal_actions(state: GameState) -> Iterator[Action]:
    # Single sub-move turns only; capture chains are never generated.
    for pit in range(PITS_PER_SIDE):
        if state.slots[pit] > 0:
            yield Action.singleton(pit)

