from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

import numpy as np

from mancala.core import GameState

DEFAULT_STATE_VALUE = 0.1


class ValueTable:
    """Expected value per exact board, defaulting for boards never seen.

    Boards are stored as byte snapshots, so mutating a ``GameState`` after
    it has been written never changes the table.
    """

    def __init__(self, default_value: float = DEFAULT_STATE_VALUE) -> None:
        self.default_value = float(default_value)
        self._values: Dict[bytes, float] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, state: GameState) -> bool:
        return state.key() in self._values

    def lookup(self, state: GameState) -> float:
        return self._values.get(state.key(), self.default_value)

    def set(self, state: GameState, value: float) -> None:
        self._values[state.key()] = float(value)

    def update(self, state: GameState, delta: float) -> float:
        key = state.key()
        value = self._values.get(key, self.default_value) + float(delta)
        self._values[key] = value
        return value

    def clear(self) -> None:
        self._values.clear()

    def values(self) -> List[float]:
        return list(self._values.values())

    def items(self) -> Iterator[Tuple[GameState, float]]:
        for key, value in self._values.items():
            yield GameState.from_key(key), value

    def summary(self) -> Dict[str, float]:
        if not self._values:
            return {"states": 0, "min": self.default_value, "max": self.default_value, "mean": self.default_value}
        values = np.fromiter(self._values.values(), dtype=np.float64, count=len(self._values))
        return {
            "states": len(values),
            "min": float(values.min()),
            "max": float(values.max()),
            "mean": float(values.mean()),
        }
