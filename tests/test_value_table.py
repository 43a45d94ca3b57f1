import pytest

from mancala.core import Action, evaluate_action, initialize_game_state
from mancala.selfplay import DEFAULT_STATE_VALUE, ValueTable


def test_lookup_defaults_without_inserting():
    table = ValueTable()
    state = initialize_game_state(4)
    assert table.lookup(state) == DEFAULT_STATE_VALUE
    assert state not in table
    assert len(table) == 0


def test_update_inserts_at_default_then_adds():
    table = ValueTable()
    state = initialize_game_state(4)
    assert table.update(state, 0.25) == pytest.approx(0.35)
    assert table.update(state, -0.05) == pytest.approx(0.30)
    assert table.lookup(state) == pytest.approx(0.30)
    assert len(table) == 1


def test_custom_default_value():
    table = ValueTable(default_value=0.0)
    assert table.lookup(initialize_game_state(4)) == 0.0


def test_mutating_state_after_write_does_not_touch_table():
    table = ValueTable()
    state = initialize_game_state(4)
    table.set(state, 3.0)
    evaluate_action(state, Action.singleton(0))
    assert table.lookup(state) == DEFAULT_STATE_VALUE
    assert table.lookup(initialize_game_state(4)) == 3.0


def test_items_and_summary():
    table = ValueTable()
    first = initialize_game_state(4)
    second = initialize_game_state(3)
    table.set(first, 1.0)
    table.set(second, 3.0)

    items = dict(table.items())
    assert items[first] == 1.0
    assert items[second] == 3.0
    assert sorted(table.values()) == [1.0, 3.0]

    summary = table.summary()
    assert summary["states"] == 2
    assert summary["min"] == 1.0
    assert summary["max"] == 3.0
    assert summary["mean"] == pytest.approx(2.0)


def test_summary_of_empty_table():
    summary = ValueTable().summary()
    assert summary["states"] == 0


def test_clear():
    table = ValueTable()
    table.set(initialize_game_state(4), 1.0)
    table.clear()
    assert len(table) == 0
