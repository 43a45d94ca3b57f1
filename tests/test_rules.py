import numpy as np
import pytest

from mancala.core import (
    Action,
    GameState,
    enumerate_legal_actions,
    evaluate_action,
    evaluate_subaction,
    evaluate_to_new_state,
    initialize_game_state,
    mirror_pit,
)
from mancala.selfplay import RandomPolicy


def make_state(**slots) -> GameState:
    board = np.zeros(14, dtype=np.uint8)
    for name, seeds in slots.items():
        board[int(name.lstrip("s"))] = seeds
    return GameState(board)


def test_initial_board_layout():
    state = initialize_game_state(4)
    assert state.slots.tolist() == [4] * 6 + [0] + [4] * 6 + [0]
    assert state.total_seeds == 48
    assert not state.is_ended()


def test_initial_board_rejects_overflowing_seed_count():
    initialize_game_state(21)
    with pytest.raises(ValueError):
        initialize_game_state(22)
    with pytest.raises(ValueError):
        initialize_game_state(-1)


def test_action_iter_matches_pit_order():
    state = initialize_game_state(4)
    action = Action()
    actions = list(enumerate_legal_actions(state))
    assert len(actions) == 6
    for subaction, state_action in zip(range(6), actions):
        action.push_action(subaction)
        assert action == state_action
        assert action.pop_action() == subaction


def test_generator_skips_empty_pits():
    state = make_state(s1=2, s4=1, s8=3)
    assert list(enumerate_legal_actions(state)) == [Action.singleton(1), Action.singleton(4)]


def test_generator_is_lazy():
    actions = enumerate_legal_actions(initialize_game_state(4))
    assert next(actions) == Action.singleton(0)
    assert next(actions) == Action.singleton(1)


def test_sow_without_capture_and_swap():
    state = initialize_game_state(4)
    evaluate_action(state, Action.singleton(4))
    assert state.slots[4] == 0
    assert state.slots[5] == 5
    state.swap_board()
    assert state.pits[10] == 0
    assert state.pits[11] == 5


def test_sow_passes_store_into_opponent_pits():
    state = initialize_game_state(4)
    evaluate_subaction(state, 3)
    assert state.slots.tolist() == [4, 4, 4, 0, 5, 5, 1, 5, 4, 4, 4, 4, 4, 0]
    assert state.mover_store == 1


def test_capture_takes_landing_pit_and_mirror():
    state = make_state(s1=2, s10=5)
    assert mirror_pit(3) == 10
    evaluate_subaction(state, 1)
    assert state.slots[2] == 1
    assert state.slots[3] == 0
    assert state.slots[10] == 0
    assert state.mover_store == 6
    assert state.total_seeds == 7


def test_no_capture_when_landing_pit_was_occupied():
    state = make_state(s1=2, s3=1, s10=5)
    evaluate_subaction(state, 1)
    assert state.slots[3] == 2
    assert state.slots[10] == 5
    assert state.mover_store == 0


def test_capture_with_empty_mirror_still_banks_landing_seed():
    state = make_state(s0=1, s9=2)
    evaluate_subaction(state, 0)
    assert state.slots[1] == 0
    assert state.mover_store == 1


def test_sow_wraps_around_both_stores_and_captures():
    state = make_state(s5=10, s8=3)
    evaluate_subaction(state, 5)
    assert state.slots.tolist() == [1, 0, 0, 0, 0, 0, 6, 1, 0, 1, 1, 1, 1, 1]
    assert state.opponent_store == 1
    assert state.total_seeds == 13


def test_full_lap_lands_back_on_source_pit():
    state = make_state(s0=14)
    evaluate_subaction(state, 0)
    assert state.slots.tolist() == [0, 1, 1, 1, 1, 1, 3, 0, 1, 1, 1, 1, 1, 1]
    assert state.total_seeds == 14


def test_subaction_rejects_store_and_empty_pit():
    state = make_state(s1=3)
    with pytest.raises(ValueError):
        evaluate_subaction(state, 6)
    with pytest.raises(ValueError):
        evaluate_subaction(state, 0)
    assert state.slots[1] == 3


def test_empty_action_raises():
    with pytest.raises(ValueError):
        evaluate_action(initialize_game_state(4), Action())


def test_evaluate_action_applies_chain_in_order():
    state = initialize_game_state(4)
    chain = Action()
    chain.push_action(0)
    chain.push_action(4)
    evaluate_action(state, chain)
    expected = initialize_game_state(4)
    evaluate_subaction(expected, 0)
    evaluate_subaction(expected, 4)
    assert state == expected
    assert len(chain) == 2


def test_evaluate_to_new_state_leaves_source_untouched():
    state = initialize_game_state(4)
    action = Action.singleton(2)
    new_state = evaluate_to_new_state(state, action)
    assert state == initialize_game_state(4)
    assert new_state != state
    assert action == Action.singleton(2)


def test_swap_twice_restores_board_and_exchanges_stores():
    state = make_state(s0=1, s2=3, s6=4, s9=2, s13=7)
    original = state.copy()
    state.swap_board()
    assert state.mover_store == 7
    assert state.opponent_store == 4
    assert state.slots[7] == 1
    assert state.slots[9] == 3
    assert state.slots[2] == 2
    assert state.total_seeds == original.total_seeds
    state.swap_board()
    assert state == original


def test_is_ended_ignores_stores():
    assert make_state(s7=1, s6=20).is_ended()
    assert make_state(s0=1, s13=20).is_ended()
    assert not make_state(s0=1, s7=1).is_ended()


def test_equal_boards_hash_equally():
    first = initialize_game_state(4)
    second = initialize_game_state(4)
    assert first == second
    assert hash(first) == hash(second)
    assert {first: 1.0}[second] == 1.0
    assert GameState.from_key(first.key()) == first


def test_render_matches_ascii_box():
    state = initialize_game_state(4)
    evaluate_subaction(state, 3)
    assert state.render() == (
        "+-------------------------------+\n"
        "|   | 4 | 4 | 4 | 4 | 4 | 5 |   |\n"
        "| 0 |                       | 1 |\n"
        "|   | 4 | 4 | 4 | 0 | 5 | 5 |   |\n"
        "+-------------------------------+\n"
    )
    assert str(state) == state.render()


@pytest.mark.parametrize("seed", range(5))
def test_seeds_are_conserved_through_random_games(seed):
    policy = RandomPolicy(np.random.default_rng(seed))
    state = initialize_game_state(4)
    turns = 0
    while not state.is_ended():
        before = state.total_seeds
        store_before = state.mover_store
        evaluate_action(state, policy.select(state).action)
        assert state.total_seeds == before
        assert state.mover_store >= store_before
        turns += 1
        if not state.is_ended():
            state.swap_board()
    assert turns > 0
