"""Mancala self-play with a tabular SARSA value function."""

from . import core, env, evaluation, selfplay, training, validation
from .config import ConfigurationError, load_yaml_config, parse_episode_count
from .core import (
    Action,
    GameState,
    enumerate_legal_actions,
    evaluate_action,
    evaluate_subaction,
    evaluate_to_new_state,
    initialize_game_state,
)
from .env import MancalaEnv
from .evaluation import EvaluationResult, evaluate_policies
from .selfplay import ActionChoice, GreedyPolicy, Policy, RandomPolicy, ValueTable, pick_action
from .training import EpisodeResult, SarsaConfig, SarsaTrainer, TrainingSummary

__all__ = [
    "core",
    "env",
    "evaluation",
    "selfplay",
    "training",
    "validation",
    "Action",
    "GameState",
    "enumerate_legal_actions",
    "evaluate_action",
    "evaluate_subaction",
    "evaluate_to_new_state",
    "initialize_game_state",
    "MancalaEnv",
    "ActionChoice",
    "Policy",
    "GreedyPolicy",
    "RandomPolicy",
    "ValueTable",
    "pick_action",
    "SarsaConfig",
    "SarsaTrainer",
    "EpisodeResult",
    "TrainingSummary",
    "EvaluationResult",
    "evaluate_policies",
    "ConfigurationError",
    "load_yaml_config",
    "parse_episode_count",
]
