"""Action-selection policies and the learned value table."""

from .policy import ActionChoice, GreedyPolicy, Policy, RandomPolicy, pick_action
from .value_table import DEFAULT_STATE_VALUE, ValueTable

__all__ = [
    "ActionChoice",
    "DEFAULT_STATE_VALUE",
    "GreedyPolicy",
    "Policy",
    "RandomPolicy",
    "ValueTable",
    "pick_action",
]
