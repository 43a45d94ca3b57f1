from __future__ import annotations

from typing import Iterator

PITS_PER_SIDE = 6
SUBACTION_BITS = 3
SUBACTION_MASK = (1 << SUBACTION_BITS) - 1
MAX_SUBACTIONS = 10

SubAction = int


class Action:
    """Ordered queue of sub-moves making up one turn.

    Sub-moves are pit indices (0..5) on the mover's side, packed three bits
    apiece into a single integer. ``pop_action`` returns them in the order
    they were pushed, which is the order they are applied.
    """

    __slots__ = ("_packed", "_length")

    def __init__(self) -> None:
        self._packed = 0
        self._length = 0

    @classmethod
    def singleton(cls, index: SubAction) -> "Action":
        action = cls()
        action.push_action(index)
        return action

    @classmethod
    def from_packed(cls, packed: int, length: int) -> "Action":
        if not 0 <= length <= MAX_SUBACTIONS:
            raise ValueError(f"Action length {length} out of range.")
        if packed < 0 or packed >> (SUBACTION_BITS * length):
            raise ValueError("Packed value does not fit the given length.")
        action = cls()
        for offset in range(length):
            action.push_action((packed >> (SUBACTION_BITS * offset)) & SUBACTION_MASK)
        return action

    @property
    def packed(self) -> int:
        return self._packed

    def push_action(self, index: SubAction) -> None:
        if not 0 <= index < PITS_PER_SIDE:
            raise ValueError(f"Sub-move {index} is not a pit on the mover's side.")
        if self._length >= MAX_SUBACTIONS:
            raise OverflowError(f"Action already holds {MAX_SUBACTIONS} sub-moves.")
        self._packed |= int(index) << (SUBACTION_BITS * self._length)
        self._length += 1

    def pop_action(self) -> SubAction:
        if self._length == 0:
            raise IndexError("pop_action() called on an empty action.")
        index = self._packed & SUBACTION_MASK
        self._packed >>= SUBACTION_BITS
        self._length -= 1
        return index

    def is_empty(self) -> bool:
        return self._length == 0

    def copy(self) -> "Action":
        clone = Action()
        clone._packed = self._packed
        clone._length = self._length
        return clone

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[SubAction]:
        packed = self._packed
        for _ in range(self._length):
            yield packed & SUBACTION_MASK
            packed >>= SUBACTION_BITS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Action):
            return NotImplemented
        return self._length == other._length and self._packed == other._packed

    def __hash__(self) -> int:
        return hash((self._length, self._packed))

    def __repr__(self) -> str:
        return f"Action({list(self)})"

    def __str__(self) -> str:
        return "->".join(str(index) for index in self) or "<empty>"
