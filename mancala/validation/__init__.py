"""Runtime checks for board invariants."""

from .board_checks import BoardInvariantError, validate_state, validate_transition

__all__ = ["BoardInvariantError", "validate_state", "validate_transition"]
