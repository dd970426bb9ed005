"""End-to-end training run: read records, solve, predict, write."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..config import TrainingConfig
from ..io import read_test_records, read_training_records, write_outcomes
from ..model.predict import predict_batch
from ..model.records import LabeledPassenger, Outcome
from ..model.solver import CancelToken, SolveResult, solve
from ..model.weights import WeightStore
from ..utils import get_logger, json_log
from .evaluation import FitMetrics, evaluate_training_fit

log = get_logger(__name__)


@dataclass
class RunResult:
    solve: SolveResult
    fit: FitMetrics | None = None
    outcomes: list[Outcome] | None = None
    output_path: Path | None = None


def train(
    records: Sequence[LabeledPassenger],
    config: TrainingConfig,
    cancel: CancelToken | None = None,
) -> SolveResult:
    """Fit a fresh weight store to ``records``."""
    solver_cfg = config.solver
    return solve(
        records,
        WeightStore(),
        learning_rate=solver_cfg.learning_rate,
        tolerance=solver_cfg.tolerance,
        shrink_factor=solver_cfg.shrink_factor,
        max_iterations=solver_cfg.max_iterations,
        cancel=cancel,
    )


def run_training(config: TrainingConfig, cancel: CancelToken | None = None) -> RunResult:
    """Run the full pipeline described by ``config``.

    Predictions are produced only when both ``paths.test_csv`` and
    ``paths.output_csv`` are set.
    """
    paths = config.paths
    log.info(
        json_log(
            'run.start',
            component='training',
            train_csv=str(paths.train_csv),
            test_csv=str(paths.test_csv) if paths.test_csv else None,
            output_csv=str(paths.output_csv) if paths.output_csv else None,
        )
    )

    training_records = read_training_records(paths.train_csv)
    solved = train(training_records, config, cancel=cancel)
    result = RunResult(solve=solved)

    if config.evaluate:
        result.fit = evaluate_training_fit(solved.weights, training_records)
        log.info(json_log('run.training_fit', component='training', **result.fit.to_dict()))

    if paths.test_csv is not None and paths.output_csv is not None:
        test_records = read_test_records(paths.test_csv)
        result.outcomes = predict_batch(solved.weights, test_records)
        result.output_path = write_outcomes(paths.output_csv, result.outcomes)

    log.info(
        json_log(
            'run.completed',
            component='training',
            iterations=solved.iterations,
            avg_cost=solved.avg_cost,
            predictions=len(result.outcomes) if result.outcomes is not None else 0,
        )
    )
    return result
