from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from titanic_logreg.cli.main import app
from titanic_logreg.model import (
    NumericOverflowError,
    SolveResult,
    SolverState,
    TrainingCancelledError,
    WeightStore,
)
from titanic_logreg.training import FitMetrics, RunResult


def _fake_result(output: Path | None = None) -> RunResult:
    solved = SolveResult(
        weights=WeightStore(),
        state=SolverState.CONVERGED,
        iterations=12,
        avg_cost=0.004,
        learning_rate=0.1,
    )
    fit = FitMetrics(
        accuracy=0.75,
        f1_survived=0.8,
        avg_cost=0.004,
        support=4,
        confusion_matrix=[[1, 1], [0, 2]],
    )
    return RunResult(solve=solved, fit=fit, outcomes=[], output_path=output)


def test_cli_train_invokes_run_training(monkeypatch, tmp_path):
    runner = CliRunner()
    captured = {}

    def fake_run_training(config, cancel=None):  # noqa: ARG001
        captured['config'] = config
        return _fake_result(config.paths.output_csv)

    monkeypatch.setattr('titanic_logreg.cli.main.run_training', fake_run_training)

    result = runner.invoke(
        app,
        [
            'train',
            '0.1',
            '0.0001',
            str(tmp_path / 'train.csv'),
            str(tmp_path / 'test.csv'),
            str(tmp_path / 'output.csv'),
            '--shrink-factor',
            '10',
        ],
    )

    assert result.exit_code == 0, result.output
    assert 'Converged after 12 iteration(s)' in result.output
    assert 'Predictions written to' in result.output
    cfg = captured['config']
    assert cfg.solver.learning_rate == 0.1
    assert cfg.solver.tolerance == 0.0001
    assert cfg.solver.shrink_factor == 10.0
    assert cfg.paths.train_csv == (tmp_path / 'train.csv').resolve()
    assert cfg.paths.output_csv == (tmp_path / 'output.csv').resolve()


def test_cli_train_reads_config_file(monkeypatch, tmp_path):
    runner = CliRunner()
    config_file = tmp_path / 'training.yaml'
    config_file.write_text(
        'solver:\n  learning_rate: 0.2\n  tolerance: 0.01\n  max_iterations: 40\n'
        'paths:\n  train_csv: train.csv\n  test_csv: test.csv\n  output_csv: out.csv\n',
        encoding='utf-8',
    )
    captured = {}

    def fake_run_training(config, cancel=None):  # noqa: ARG001
        captured['config'] = config
        return _fake_result(config.paths.output_csv)

    monkeypatch.setattr('titanic_logreg.cli.main.run_training', fake_run_training)

    result = runner.invoke(app, ['train', '--config', str(config_file)])

    assert result.exit_code == 0, result.output
    cfg = captured['config']
    assert cfg.solver.learning_rate == 0.2
    assert cfg.solver.max_iterations == 40
    assert cfg.paths.test_csv == (tmp_path / 'test.csv').resolve()


def test_cli_train_rejects_unparseable_learning_rate(tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        app,
        ['train', 'fast', '0.01', str(tmp_path / 'a'), str(tmp_path / 'b'), str(tmp_path / 'c')],
    )

    assert result.exit_code == 1
    assert 'unable to parse learning_rate' in result.output


def test_cli_train_requires_all_paths(tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ['train', '0.1', '0.01', str(tmp_path / 'train.csv')])

    assert result.exit_code == 1
    assert 'not enough arguments' in result.output


def test_cli_train_reports_cancelled_training(monkeypatch, tmp_path):
    runner = CliRunner()

    def fake_run_training(config, cancel=None):  # noqa: ARG001
        raise TrainingCancelledError('Training stopped after 3 iteration(s)', _fake_result().solve)

    monkeypatch.setattr('titanic_logreg.cli.main.run_training', fake_run_training)

    result = runner.invoke(
        app,
        ['train', '0.1', '0.01', str(tmp_path / 'a'), str(tmp_path / 'b'), str(tmp_path / 'c')],
    )

    assert result.exit_code == 1
    assert 'Application error: Training stopped after 3 iteration(s)' in result.output


def test_cli_evaluate_prints_fit(monkeypatch, tmp_path):
    runner = CliRunner()
    captured = {}

    def fake_run_training(config, cancel=None):  # noqa: ARG001
        captured['config'] = config
        return _fake_result()

    monkeypatch.setattr('titanic_logreg.cli.main.run_training', fake_run_training)

    result = runner.invoke(app, ['evaluate', '0.1', '0.01', str(tmp_path / 'train.csv')])

    assert result.exit_code == 0, result.output
    assert 'Accuracy: 0.7500' in result.output
    assert 'Confusion matrix' in result.output
    assert captured['config'].paths.test_csv is None
    assert captured['config'].evaluate is True


def test_cli_evaluate_reports_undecodable_csv(tmp_path):
    runner = CliRunner()
    train_csv = tmp_path / 'train.csv'
    train_csv.write_bytes(
        b'PassengerId,Survived,Pclass,Name,Sex,Age,SibSp,Parch,Ticket,Fare,Cabin,Embarked\n'
        b'1,1,3,\xff\xfe,female,22,1,0,A/5 21171,7.25,,S\n'
    )

    result = runner.invoke(app, ['evaluate', '0.01', '0.5', str(train_csv)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert 'Application error' in result.output


def test_cli_train_reports_numeric_overflow(monkeypatch, tmp_path):
    runner = CliRunner()

    def fake_run_training(config, cancel=None):  # noqa: ARG001
        raise NumericOverflowError('Weights left the finite range after 1 iteration(s)')

    monkeypatch.setattr('titanic_logreg.cli.main.run_training', fake_run_training)

    result = runner.invoke(
        app,
        ['train', '1e308', '0.5', str(tmp_path / 'a'), str(tmp_path / 'b'), str(tmp_path / 'c')],
    )

    assert result.exit_code == 1
    assert 'Application error: Weights left the finite range' in result.output
