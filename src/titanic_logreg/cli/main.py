"""Command-line interface for titanic_logreg."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from ..config import (
    ConfigError,
    ConfigOverrides,
    TrainingConfig,
    build_training_config,
    load_training_config,
)
from ..model.errors import TitanicLogRegError
from ..training import run_training
from ..utils import get_logger, json_log, set_verbosity

app = typer.Typer(help='Titanic survival logistic regression', no_args_is_help=True)

log = get_logger(__name__)

LearningRateArg = Annotated[
    str | None,
    typer.Argument(help='Learning rate of gradient descent (positive number).', show_default=False),
]
ToleranceArg = Annotated[
    str | None,
    typer.Argument(
        help='Average cost at which training stops (positive number).',
        show_default=False,
    ),
]
TrainCsvArg = Annotated[
    Path | None,
    typer.Argument(help='Path to the labeled training CSV.', show_default=False),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        '--config',
        '-c',
        exists=True,
        readable=True,
        help='Optional training config YAML. Command-line values take precedence.',
    ),
]
ShrinkFactorOption = Annotated[
    float | None,
    typer.Option(
        '--shrink-factor',
        help='Divide the learning rate by this factor when the cost rises (default: 100).',
    ),
]
MaxIterationsOption = Annotated[
    int | None,
    typer.Option('--max-iterations', help='Stop with an error after this many passes.'),
]
VerboseOption = Annotated[
    bool,
    typer.Option('--verbose', '-v', help='Log every solver iteration.'),
]


def _load_config(config: Path | None, overrides: ConfigOverrides) -> TrainingConfig:
    base = load_training_config(config) if config is not None else None
    return build_training_config(overrides, base=base)


def _fail(exc: TitanicLogRegError) -> NoReturn:
    log.error(json_log('cli.failed', component='cli', error=type(exc).__name__, detail=str(exc)))
    typer.echo(f'Application error: {exc}', err=True)
    raise typer.Exit(code=1)


@app.command('train')
def train(
    learning_rate: LearningRateArg = None,
    tolerance: ToleranceArg = None,
    train_csv: TrainCsvArg = None,
    test_csv: Annotated[
        Path | None,
        typer.Argument(help='Path to the unlabeled test CSV.', show_default=False),
    ] = None,
    output_csv: Annotated[
        Path | None,
        typer.Argument(
            help='Where to write PassengerId,Survived predictions.',
            show_default=False,
        ),
    ] = None,
    config: ConfigOption = None,
    shrink_factor: ShrinkFactorOption = None,
    max_iterations: MaxIterationsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Train on TRAIN_CSV and write predictions for TEST_CSV to OUTPUT_CSV."""
    set_verbosity(verbose)
    try:
        cfg = _load_config(
            config,
            ConfigOverrides(
                learning_rate=learning_rate,
                tolerance=tolerance,
                shrink_factor=shrink_factor,
                max_iterations=max_iterations,
                train_csv=train_csv,
                test_csv=test_csv,
                output_csv=output_csv,
            ),
        )
        if cfg.paths.test_csv is None or cfg.paths.output_csv is None:
            raise ConfigError('not enough arguments: test and output paths are required')
        log.info(
            json_log('cli.train.start', component='cli', config=str(config) if config else None)
        )
        result = run_training(cfg)
    except TitanicLogRegError as exc:
        _fail(exc)

    typer.echo(
        f'Converged after {result.solve.iterations} iteration(s), '
        f'avg_cost={result.solve.avg_cost:.6f}'
    )
    if result.fit is not None:
        typer.echo(f'Training accuracy: {result.fit.accuracy:.4f}')
    typer.echo(f'Predictions written to: {result.output_path}')


@app.command('evaluate')
def evaluate(
    learning_rate: LearningRateArg = None,
    tolerance: ToleranceArg = None,
    train_csv: TrainCsvArg = None,
    config: ConfigOption = None,
    shrink_factor: ShrinkFactorOption = None,
    max_iterations: MaxIterationsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Train on TRAIN_CSV and report how well the model fits it."""
    set_verbosity(verbose)
    try:
        cfg = _load_config(
            config,
            ConfigOverrides(
                learning_rate=learning_rate,
                tolerance=tolerance,
                shrink_factor=shrink_factor,
                max_iterations=max_iterations,
                train_csv=train_csv,
            ),
        )
        cfg = replace(
            cfg,
            paths=replace(cfg.paths, test_csv=None, output_csv=None),
            evaluate=True,
        )
        result = run_training(cfg)
    except TitanicLogRegError as exc:
        _fail(exc)

    fit = result.fit
    assert fit is not None
    typer.echo(f'Iterations: {result.solve.iterations}')
    typer.echo(f'Average cost: {fit.avg_cost:.6f}')
    typer.echo(f'Accuracy: {fit.accuracy:.4f}')
    typer.echo(f'F1 (survived): {fit.f1_survived:.4f}')
    typer.echo(f'Confusion matrix (rows=true NO/YES): {fit.confusion_matrix}')


if __name__ == '__main__':
    app()
