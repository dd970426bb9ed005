"""Configuration utilities for titanic_logreg."""

from .training import (
    ConfigError,
    ConfigOverrides,
    PathConfig,
    SolverConfig,
    TrainingConfig,
    build_training_config,
    load_training_config,
)

__all__ = [
    'ConfigError',
    'ConfigOverrides',
    'PathConfig',
    'SolverConfig',
    'TrainingConfig',
    'build_training_config',
    'load_training_config',
]
