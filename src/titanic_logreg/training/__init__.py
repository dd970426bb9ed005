"""Training orchestration for titanic_logreg."""

from .evaluation import FitMetrics, evaluate_training_fit
from .run import RunResult, run_training, train

__all__ = ['FitMetrics', 'RunResult', 'evaluate_training_fit', 'run_training', 'train']
