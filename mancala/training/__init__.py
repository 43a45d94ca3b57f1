"""Self-play SARSA training."""

from .loop import EpisodeResult, SarsaConfig, SarsaTrainer, StepRecord, TrainingSummary

__all__ = ["EpisodeResult", "SarsaConfig", "SarsaTrainer", "StepRecord", "TrainingSummary"]
