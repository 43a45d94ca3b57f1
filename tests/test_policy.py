import numpy as np
import pytest

from mancala.core import Action, GameState, evaluate_action, evaluate_to_new_state, initialize_game_state
from mancala.selfplay import GreedyPolicy, RandomPolicy, ValueTable, pick_action


def test_pick_action_prefers_high_value_state():
    table = ValueTable()
    state = initialize_game_state(4)
    action = Action.singleton(3)
    table.set(evaluate_to_new_state(state, action), 10.0)

    choice = pick_action(state, table)
    assert choice.action == action
    assert choice.value == 10.0


def test_learned_preference_follows_literal_board_after_swap():
    table = ValueTable()
    state = initialize_game_state(4)
    action = Action.singleton(3)
    table.set(evaluate_to_new_state(state, action), 10.0)
    assert pick_action(state, table).action == action

    # After the move and a swap none of the stored boards is reachable,
    # so only the value learned for the new mover's boards matters.
    evaluate_action(state, action)
    state.swap_board()
    table.set(evaluate_to_new_state(state, Action.singleton(1)), 4.0)

    choice = pick_action(state, table)
    assert choice.action == Action.singleton(1)
    assert choice.value == 4.0


def test_ties_go_to_first_generated_action():
    state = initialize_game_state(4)
    choice = pick_action(state, ValueTable())
    assert choice.action == Action.singleton(0)
    assert choice.value == pytest.approx(0.1)

    table = ValueTable()
    table.set(evaluate_to_new_state(state, Action.singleton(2)), 0.5)
    table.set(evaluate_to_new_state(state, Action.singleton(4)), 0.5)
    assert pick_action(state, table).action == Action.singleton(2)


def test_lower_values_lose_to_default():
    state = initialize_game_state(4)
    table = ValueTable()
    for pit in range(3):
        table.set(evaluate_to_new_state(state, Action.singleton(pit)), -1.0)
    assert pick_action(state, table).action == Action.singleton(3)


def test_greedy_policy_does_not_mutate_board():
    state = initialize_game_state(4)
    GreedyPolicy(ValueTable()).select(state)
    assert state == initialize_game_state(4)


def test_policies_refuse_terminal_board():
    board = np.zeros(14, dtype=np.uint8)
    board[8] = 4
    state = GameState(board)
    with pytest.raises(ValueError):
        pick_action(state, ValueTable())
    with pytest.raises(ValueError):
        RandomPolicy(np.random.default_rng(0)).select(state)


def test_random_policy_only_picks_non_empty_pits():
    board = np.zeros(14, dtype=np.uint8)
    board[2] = 1
    board[5] = 3
    board[9] = 2
    state = GameState(board)
    policy = RandomPolicy(np.random.default_rng(7))
    picks = {policy.select(state).action.pop_action() for _ in range(50)}
    assert picks <= {2, 5}
