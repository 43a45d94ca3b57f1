from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from mancala.core import Action, GameState, enumerate_legal_actions, evaluate_to_new_state
from mancala.selfplay.value_table import ValueTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionChoice:
    action: Action
    value: float


class Policy:
    """Chooses the mover's next turn for a non-terminal board."""

    def select(self, state: GameState) -> ActionChoice:
        raise NotImplementedError


class GreedyPolicy(Policy):
    """Picks the action whose resulting board has the highest table value.

    Ties go to the lowest pit index, since the legal actions are scanned in
    pit order and only a strictly greater value replaces the current best.
    """

    def __init__(self, table: ValueTable) -> None:
        self.table = table

    def select(self, state: GameState) -> ActionChoice:
        best: Optional[ActionChoice] = None
        candidates: List[ActionChoice] = []
        for action in enumerate_legal_actions(state):
            value = self.table.lookup(evaluate_to_new_state(state, action))
            choice = ActionChoice(action, value)
            candidates.append(choice)
            if best is None or value > best.value:
                best = choice
        if best is None:
            raise ValueError("No legal actions available; the board is terminal.")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Actions available to choose from: %s",
                ", ".join(f"{choice.action}={choice.value:.4f}" for choice in candidates),
            )
        return best


class RandomPolicy(Policy):
    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def select(self, state: GameState) -> ActionChoice:
        actions = list(enumerate_legal_actions(state))
        if not actions:
            raise ValueError("No legal actions available; the board is terminal.")
        action = actions[int(self.rng.integers(len(actions)))]
        return ActionChoice(action, 0.0)


def pick_action(state: GameState, table: ValueTable) -> ActionChoice:
    return GreedyPolicy(table).select(state)
