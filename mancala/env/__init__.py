"""Gymnasium environment wrapping the sowing rules."""

from .gym_env import MancalaEnv

__all__ = ["MancalaEnv"]
