from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from mancala.config import ConfigurationError
from mancala.core import (
    PITS_PER_SIDE,
    STARTING_SEEDS,
    Action,
    GameState,
    evaluate_action,
    initialize_game_state,
)
from mancala.core.rules import MAX_SLOT_SEEDS
from mancala.selfplay import DEFAULT_STATE_VALUE, GreedyPolicy, ValueTable
from mancala.validation import validate_transition

logger = logging.getLogger(__name__)


@dataclass
class SarsaConfig:
    learning_rate: float = 0.1
    discount_factor: float = 0.1
    episodes: int = 100
    starting_seeds: int = STARTING_SEEDS
    default_value: float = DEFAULT_STATE_VALUE
    validate_states: bool = False
    log_interval: int = 10_000

    def validate(self) -> None:
        """Coerce numeric fields in place and reject values training cannot use."""
        try:
            self.learning_rate = float(self.learning_rate)
            self.discount_factor = float(self.discount_factor)
            self.default_value = float(self.default_value)
            self.episodes = int(self.episodes)
            self.starting_seeds = int(self.starting_seeds)
            self.log_interval = int(self.log_interval)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc
        if self.episodes < 0:
            raise ConfigurationError(f"episodes must be non-negative, got {self.episodes}.")
        if self.starting_seeds <= 0:
            raise ConfigurationError(f"starting_seeds must be positive, got {self.starting_seeds}.")
        if self.starting_seeds * 2 * PITS_PER_SIDE > MAX_SLOT_SEEDS:
            raise ConfigurationError(
                f"starting_seeds={self.starting_seeds} puts more than {MAX_SLOT_SEEDS} seeds on the board."
            )
        if not 0.0 <= self.learning_rate <= 1.0:
            raise ConfigurationError(f"learning_rate must lie in [0, 1], got {self.learning_rate}.")
        if not 0.0 <= self.discount_factor <= 1.0:
            raise ConfigurationError(f"discount_factor must lie in [0, 1], got {self.discount_factor}.")
        if self.log_interval <= 0:
            raise ConfigurationError(f"log_interval must be positive, got {self.log_interval}.")


@dataclass
class StepRecord:
    action: Action
    reward: float
    q_prev: float
    q_next: float
    value: float


@dataclass
class EpisodeResult:
    steps: int
    final_state: GameState
    player_one_store: int
    player_two_store: int

    @property
    def winner(self) -> Optional[int]:
        """0 or 1 for the player with the larger store, None on a tie."""
        if self.player_one_store == self.player_two_store:
            return None
        return 0 if self.player_one_store > self.player_two_store else 1


@dataclass
class TrainingSummary:
    episodes: int
    total_steps: int
    table_size: int
    player_one_wins: int
    player_two_wins: int
    draws: int

    @property
    def average_length(self) -> float:
        return self.total_steps / max(1, self.episodes)

    def as_dict(self) -> Dict[str, float]:
        return {
            "episodes": self.episodes,
            "total_steps": self.total_steps,
            "average_length": self.average_length,
            "table_size": self.table_size,
            "player_one_wins": self.player_one_wins,
            "player_two_wins": self.player_two_wins,
            "draws": self.draws,
        }


class SarsaTrainer:
    """Self-play SARSA(0) over a table of board values.

    Both seats share one table: after every non-final move the board is
    swapped so the same greedy policy always plays from the mover's side.
    """

    def __init__(self, config: SarsaConfig = SarsaConfig(), table: Optional[ValueTable] = None) -> None:
        config.validate()
        self.config = config
        self.table = table if table is not None else ValueTable(config.default_value)
        self.policy = GreedyPolicy(self.table)
        self.episode_index = 0
        self.total_steps = 0

    def step(self, state: GameState) -> StepRecord:
        """Pick, apply and score one move on ``state`` in place."""
        q_prev = self.table.lookup(state)
        choice = self.policy.select(state)
        score_diff = state.score_difference
        before = state.copy() if self.config.validate_states else None

        evaluate_action(state, choice.action)

        if before is not None:
            validate_transition(before, state)
        reward = float(state.score_difference - score_diff)
        delta = self.config.learning_rate * (
            reward + self.config.discount_factor * choice.value - q_prev
        )
        value = self.table.update(state, delta)
        record = StepRecord(
            action=choice.action,
            reward=reward,
            q_prev=q_prev,
            q_next=choice.value,
            value=value,
        )
        logger.debug(
            "Action %s reward %.1f: value %.4f += %.3f * (%.1f + %.3f * %.4f - %.4f)",
            record.action,
            reward,
            value,
            self.config.learning_rate,
            reward,
            self.config.discount_factor,
            record.q_next,
            q_prev,
        )
        return record

    def run_episode(self, start: Optional[GameState] = None) -> EpisodeResult:
        """Play one game to the end; ``start`` replaces the fresh opening board, player one to move."""
        if start is None:
            state = initialize_game_state(self.config.starting_seeds)
        else:
            if start.is_ended():
                raise ValueError("Cannot start an episode from a finished board.")
            state = start.copy()
        logger.debug("Episode %d starting", self.episode_index)
        counter = 0
        while True:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Turn %d\n%s", counter, state)
            self.step(state)
            counter += 1
            if state.is_ended():
                break
            if counter % self.config.log_interval == 0:
                logger.info("Episode %d reached turn %d", self.episode_index, counter)
            state.swap_board()

        # The last mover is player one when an odd number of turns was played.
        if counter % 2 == 1:
            player_one_store, player_two_store = state.mover_store, state.opponent_store
        else:
            player_one_store, player_two_store = state.opponent_store, state.mover_store
        logger.info("Episode %d ended after %d turns at state:\n%s", self.episode_index, counter, state)

        self.episode_index += 1
        self.total_steps += counter
        return EpisodeResult(
            steps=counter,
            final_state=state,
            player_one_store=player_one_store,
            player_two_store=player_two_store,
        )

    def train(
        self,
        episodes: Optional[int] = None,
        callback: Optional[Callable[[EpisodeResult], None]] = None,
    ) -> TrainingSummary:
        episodes = self.config.episodes if episodes is None else episodes
        if episodes < 0:
            raise ConfigurationError(f"episodes must be non-negative, got {episodes}.")

        steps = 0
        wins = [0, 0]
        draws = 0
        for _ in range(episodes):
            result = self.run_episode()
            steps += result.steps
            if result.winner is None:
                draws += 1
            else:
                wins[result.winner] += 1
            if callback is not None:
                callback(result)

        summary = TrainingSummary(
            episodes=episodes,
            total_steps=steps,
            table_size=len(self.table),
            player_one_wins=wins[0],
            player_two_wins=wins[1],
            draws=draws,
        )
        logger.info("Training finished: %s", summary.as_dict())
        return summary
