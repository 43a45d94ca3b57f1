from __future__ import annotations

from typing import Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from mancala.core import (
    BOARD_SLOTS,
    PITS_PER_SIDE,
    STARTING_SEEDS,
    Action,
    GameState,
    evaluate_action,
    initialize_game_state,
)


class MancalaEnv(gym.Env):
    """Two-seat sowing game seen from whichever player moves next.

    After every non-final move the board is swapped and ``current_player``
    flips, so observations and actions are always in the mover's frame.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        starting_seeds: int = STARTING_SEEDS,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._starting_seeds = starting_seeds
        self.render_mode = render_mode

        self.observation_space = spaces.Box(low=0, high=255, shape=(BOARD_SLOTS,), dtype=np.uint8)
        self.action_space = spaces.Discrete(PITS_PER_SIDE)

        self._state = initialize_game_state(starting_seeds)
        self.current_player = 0
        self.ply_count = 0

    @property
    def state(self) -> GameState:
        return self._state

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        starting_seeds = options.get("starting_seeds", self._starting_seeds) if options else self._starting_seeds
        self._state = initialize_game_state(starting_seeds)
        self.current_player = 0
        self.ply_count = 0
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._state.is_ended():
            raise ValueError("Cannot step a finished game; call reset().")
        if not self.legal_action_mask()[action_index]:
            raise ValueError(f"Pit {action_index} is empty.")

        score_diff = self._state.score_difference
        evaluate_action(self._state, Action.singleton(int(action_index)))
        reward = float(self._state.score_difference - score_diff)
        self.ply_count += 1

        terminated = self._state.is_ended()
        if not terminated:
            self._state.swap_board()
            self.current_player = 1 - self.current_player
        return self._build_observation(), reward, terminated, False, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        return (self._state.mover_pits > 0).astype(np.int8)

    def stores(self) -> Tuple[int, int]:
        """Store totals indexed by real player, independent of whose turn it is."""
        if self.current_player == 0:
            return self._state.mover_store, self._state.opponent_store
        return self._state.opponent_store, self._state.mover_store

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return self._state.render()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> np.ndarray:
        return self._state.slots.copy()

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "current_player": self.current_player,
        }
