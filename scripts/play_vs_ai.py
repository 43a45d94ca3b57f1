#!/usr/bin/env python3
"""Play Mancala against a freshly trained greedy policy in the console."""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
from tqdm.auto import trange

from mancala import GreedyPolicy, MancalaEnv, RandomPolicy, SarsaConfig, SarsaTrainer
from mancala.logger_config import configure_logging
from mancala.selfplay import Policy

PLAYER_NAMES = ("Player 1", "Player 2")


def train_policy(episodes: int, starting_seeds: int, seed: Optional[int]) -> Policy:
    if episodes <= 0:
        return RandomPolicy(np.random.default_rng(seed))
    trainer = SarsaTrainer(SarsaConfig(episodes=episodes, starting_seeds=starting_seeds))
    for _ in trange(episodes, desc="Training"):
        trainer.run_episode()
    return GreedyPolicy(trainer.table)


def prompt_human_move(legal_mask: np.ndarray) -> int:
    legal = [int(idx) for idx in np.flatnonzero(legal_mask)]
    print(f"Legal pits: {legal}")
    while True:
        raw = input("Pit to sow (q to quit): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Leaving the game.")
            sys.exit(0)
        if not raw.isdigit():
            print("Please enter a number.")
            continue
        idx = int(raw)
        if idx in legal:
            return idx
        print("That pit cannot be sown. Try again.")


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, indent=2))
    print(f"Saved game log to {path}.")


def result_label(stores) -> str:
    if stores[0] == stores[1]:
        return "draw"
    return "player_1" if stores[0] > stores[1] else "player_2"


def replay_moves(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    metadata = data.get("metadata", {})
    moves = data.get("moves", [])
    env = MancalaEnv(starting_seeds=metadata.get("starting_seeds", 4), render_mode="ansi")
    env.reset()
    if verbose:
        print(env.render())
    terminated = False
    for entry in moves:
        if terminated:
            raise ValueError("Log contains moves after the game ended.")
        _, _, terminated, _, _ = env.step(int(entry["pit"]))
        if verbose:
            print(f"{entry.get('actor', 'unknown')} sowed pit {entry['pit']}")
            print(env.render())
    stores = env.stores()
    summary = {
        "moves": len(moves),
        "finished": terminated,
        "stores": list(stores),
        "result": result_label(stores) if terminated else "ongoing",
        "board": env.state.slots.tolist(),
    }
    if verbose:
        print(f"Result: {summary['result']}")
    return summary


def play_interactive(args: argparse.Namespace) -> None:
    policy_ai = train_policy(args.train_episodes, args.starting_seeds, args.seed)
    env = MancalaEnv(starting_seeds=args.starting_seeds, render_mode="ansi")
    _, info = env.reset()
    human_player = 0 if args.human_first else 1
    log_records: List[Dict] = []

    terminated = False
    while not terminated:
        player = env.current_player
        print(f"\n{PLAYER_NAMES[player]} to move (your pits are on the bottom row):")
        print(env.render())
        if player == human_player:
            pit = prompt_human_move(info["legal_action_mask"])
            actor = "human"
        else:
            pit = policy_ai.select(env.state).action.pop_action()
            actor = "ai"
            print(f"AI sows pit {pit}")
        log_records.append({"move_index": env.ply_count, "actor": actor, "player": player, "pit": pit})
        _, _, terminated, _, info = env.step(pit)

    print("\nFinal board:")
    print(env.render())
    stores = env.stores()
    print(f"Stores: {PLAYER_NAMES[0]} {stores[0]}, {PLAYER_NAMES[1]} {stores[1]}")
    result = result_label(stores)
    print("Draw." if result == "draw" else f"{PLAYER_NAMES[0 if result == 'player_1' else 1]} wins!")

    if args.log_file:
        metadata = {
            "starting_seeds": args.starting_seeds,
            "train_episodes": args.train_episodes,
            "human_first": args.human_first,
            "result": result,
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(args.log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Mancala in the console against the AI.")
    parser.add_argument("--train-episodes", type=int, default=1000)
    parser.add_argument("--starting-seeds", type=int, default=4)
    parser.add_argument("--human-first", action="store_true")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.replay_log:
        replay_moves(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    play_interactive(args)


if __name__ == "__main__":
    main()
