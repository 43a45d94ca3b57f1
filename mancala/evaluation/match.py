from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from mancala.core import STARTING_SEEDS
from mancala.env import MancalaEnv
from mancala.selfplay import Policy


@dataclass
class EvaluationResult:
    games_played: int
    first_player_wins: int
    second_player_wins: int
    draws: int
    average_length: float

    def winrate_first(self) -> float:
        return self.first_player_wins / max(1, self.games_played)

    def winrate_second(self) -> float:
        return self.second_player_wins / max(1, self.games_played)


def evaluate_policies(
    policy_first: Policy,
    policy_second: Policy,
    *,
    episodes: int,
    starting_seeds: int = STARTING_SEEDS,
    env_factory: Optional[Callable[[], MancalaEnv]] = None,
) -> EvaluationResult:
    """Play ``episodes`` games with ``policy_first`` always moving first."""
    env_factory = env_factory or (lambda: MancalaEnv(starting_seeds=starting_seeds))
    policies = (policy_first, policy_second)

    first_wins = 0
    second_wins = 0
    draws = 0
    total_ply = 0

    for _ in range(episodes):
        env = env_factory()
        env.reset()
        terminated = False
        while not terminated:
            choice = policies[env.current_player].select(env.state)
            _, _, terminated, truncated, _ = env.step(choice.action.pop_action())
            if truncated:
                terminated = True

        total_ply += env.ply_count
        first_store, second_store = env.stores()
        if first_store > second_store:
            first_wins += 1
        elif second_store > first_store:
            second_wins += 1
        else:
            draws += 1

    return EvaluationResult(
        games_played=episodes,
        first_player_wins=first_wins,
        second_player_wins=second_wins,
        draws=draws,
        average_length=total_ply / max(1, episodes),
    )
