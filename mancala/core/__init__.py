"""Board state, turn encoding and sowing rules."""

from .actions import MAX_SUBACTIONS, PITS_PER_SIDE, Action, SubAction
from .state import (
    BOARD_SLOTS,
    MOVER_STORE,
    OPPONENT_FIRST_PIT,
    OPPONENT_STORE,
    GameState,
)
from .rules import (
    STARTING_SEEDS,
    enumerate_legal_actions,
    evaluate_action,
    evaluate_subaction,
    evaluate_to_new_state,
    initialize_game_state,
    mirror_pit,
)

__all__ = [
    "Action",
    "SubAction",
    "GameState",
    "BOARD_SLOTS",
    "MAX_SUBACTIONS",
    "MOVER_STORE",
    "OPPONENT_FIRST_PIT",
    "OPPONENT_STORE",
    "PITS_PER_SIDE",
    "STARTING_SEEDS",
    "enumerate_legal_actions",
    "evaluate_action",
    "evaluate_subaction",
    "evaluate_to_new_state",
    "initialize_game_state",
    "mirror_pit",
]
