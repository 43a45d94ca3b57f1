#!/usr/bin/env python3
"""Train the Mancala value table by self-play SARSA and report the result."""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

import numpy as np
from tqdm.auto import tqdm

from mancala.config import ConfigurationError, load_yaml_config, merge_overrides, parse_episode_count
from mancala.evaluation import evaluate_policies
from mancala.logger_config import configure_logging
from mancala.selfplay import GreedyPolicy, RandomPolicy
from mancala.training import SarsaConfig, SarsaTrainer

logger = logging.getLogger("mancala.train")

SARSA_KEYS = (
    "learning_rate",
    "discount_factor",
    "starting_seeds",
    "default_value",
    "validate_states",
    "log_interval",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", type=str, default="configs/sarsa.yaml")
    # Parsed by parse_episode_count so bad input is reported, not a usage error.
    parser.add_argument("--episodes")
    parser.add_argument("--learning-rate", type=float)
    parser.add_argument("--discount-factor", type=float)
    parser.add_argument("--starting-seeds", type=int)
    parser.add_argument("--eval-episodes", type=int)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--validate-states", action="store_true", default=None)
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--log-file")
    parser.add_argument("--no-progress", action="store_true")
    return parser


def build_config(args: argparse.Namespace, cfg: Dict[str, object]) -> SarsaConfig:
    cfg = merge_overrides(
        cfg,
        {
            "episodes": args.episodes,
            "learning_rate": args.learning_rate,
            "discount_factor": args.discount_factor,
            "starting_seeds": args.starting_seeds,
            "validate_states": args.validate_states,
        },
    )
    episodes = parse_episode_count(cfg.get("episodes"))
    config = SarsaConfig(episodes=episodes, **{key: cfg[key] for key in SARSA_KEYS if key in cfg})
    config.validate()
    return config


def run(args: argparse.Namespace) -> Dict[str, object]:
    cfg = load_yaml_config(args.config)
    config = build_config(args, cfg)
    logger.info("Starting training with %s", config)
    trainer = SarsaTrainer(config)

    progress = None
    if not args.no_progress:
        progress = tqdm(total=config.episodes, desc="Episodes")
    try:
        summary = trainer.train(callback=(lambda _: progress.update(1)) if progress else None)
    finally:
        if progress is not None:
            progress.close()

    report: Dict[str, object] = {
        "training": summary.as_dict(),
        "values": trainer.table.summary(),
    }

    eval_episodes = args.eval_episodes if args.eval_episodes is not None else cfg.get("eval_episodes", 0)
    if eval_episodes:
        rng = np.random.default_rng(args.seed)
        result = evaluate_policies(
            GreedyPolicy(trainer.table),
            RandomPolicy(rng),
            episodes=eval_episodes,
            starting_seeds=config.starting_seeds,
        )
        report["evaluation_vs_random"] = {
            "games_played": result.games_played,
            "greedy_wins": result.first_player_wins,
            "random_wins": result.second_player_wins,
            "draws": result.draws,
            "greedy_winrate": result.winrate_first(),
            "average_length": result.average_length,
        }
    return report


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    try:
        report = run(args)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}. No training was run.", file=sys.stderr)
        return 0
    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
