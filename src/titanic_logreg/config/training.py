"""Config models and loaders for training runs."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from ..model.errors import TitanicLogRegError
from ..model.solver import DEFAULT_SHRINK_FACTOR


class ConfigError(TitanicLogRegError, ValueError):
    """Raised when configuration values are missing or malformed."""


@dataclass(frozen=True)
class SolverConfig:
    learning_rate: float
    tolerance: float
    shrink_factor: float = DEFAULT_SHRINK_FACTOR
    max_iterations: int | None = None


@dataclass(frozen=True)
class PathConfig:
    train_csv: Path
    test_csv: Path | None = None
    output_csv: Path | None = None


@dataclass(frozen=True)
class TrainingConfig:
    solver: SolverConfig
    paths: PathConfig
    evaluate: bool = True


@dataclass(frozen=True)
class ConfigOverrides:
    """Values supplied on the command line; ``None`` keeps the file value."""

    learning_rate: float | str | None = None
    tolerance: float | str | None = None
    shrink_factor: float | None = None
    max_iterations: int | None = None
    train_csv: Path | None = None
    test_csv: Path | None = None
    output_csv: Path | None = None


def load_training_config(config_path: str | Path) -> TrainingConfig:
    """Load a training config YAML file."""
    cfg_path = Path(config_path).expanduser().resolve()
    if not cfg_path.exists():
        raise ConfigError(f'Config file not found: {cfg_path}')

    try:
        with cfg_path.open('r', encoding='utf-8') as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f'Invalid YAML in {cfg_path}: {exc}') from exc
    if not isinstance(data, dict):
        raise ConfigError(f'Config root must be a mapping: {cfg_path}')

    base_dir = cfg_path.parent

    solver_section = data.get('solver') or {}
    paths_section = data.get('paths') or {}

    train_csv = paths_section.get('train_csv')
    if not train_csv:
        raise ConfigError('paths.train_csv must be set in training config')

    solver = SolverConfig(
        learning_rate=parse_positive_float(solver_section.get('learning_rate'), 'learning_rate'),
        tolerance=parse_positive_float(solver_section.get('tolerance'), 'tolerance'),
        shrink_factor=parse_shrink_factor(
            solver_section.get('shrink_factor', DEFAULT_SHRINK_FACTOR)
        ),
        max_iterations=parse_max_iterations(solver_section.get('max_iterations')),
    )

    paths = PathConfig(
        train_csv=_resolve_path(base_dir, train_csv),
        test_csv=_resolve_optional_path(base_dir, paths_section.get('test_csv')),
        output_csv=_resolve_optional_path(base_dir, paths_section.get('output_csv')),
    )

    return TrainingConfig(
        solver=solver,
        paths=paths,
        evaluate=bool(data.get('evaluate', True)),
    )


def build_training_config(
    overrides: ConfigOverrides,
    base: TrainingConfig | None = None,
) -> TrainingConfig:
    """Merge command-line values over an optional file config.

    Raises:
        ConfigError: If a required value is missing after merging.
    """
    learning_rate = _pick(overrides.learning_rate, base.solver.learning_rate if base else None)
    tolerance = _pick(overrides.tolerance, base.solver.tolerance if base else None)
    train_csv = _pick(overrides.train_csv, base.paths.train_csv if base else None)
    if learning_rate is None:
        raise ConfigError('learning rate is required')
    if tolerance is None:
        raise ConfigError('tolerance is required')
    if train_csv is None:
        raise ConfigError('training data path is required')

    solver = SolverConfig(
        learning_rate=parse_positive_float(learning_rate, 'learning_rate'),
        tolerance=parse_positive_float(tolerance, 'tolerance'),
        shrink_factor=parse_shrink_factor(
            _pick(
                overrides.shrink_factor,
                base.solver.shrink_factor if base else DEFAULT_SHRINK_FACTOR,
            )
        ),
        max_iterations=parse_max_iterations(
            _pick(overrides.max_iterations, base.solver.max_iterations if base else None)
        ),
    )
    paths = PathConfig(
        train_csv=_absolute(train_csv),
        test_csv=_absolute_optional(
            _pick(overrides.test_csv, base.paths.test_csv if base else None)
        ),
        output_csv=_absolute_optional(
            _pick(overrides.output_csv, base.paths.output_csv if base else None)
        ),
    )
    if base is None:
        return TrainingConfig(solver=solver, paths=paths)
    return replace(base, solver=solver, paths=paths)


def parse_positive_float(value: Any, name: str) -> float:
    if value is None:
        raise ConfigError(f'{name} must be set')
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f'unable to parse {name}: {value!r}') from None
    if not math.isfinite(number) or number <= 0:
        raise ConfigError(f'{name} must be a positive finite number, got {value!r}')
    return number


def parse_shrink_factor(value: Any) -> float:
    factor = parse_positive_float(value, 'shrink_factor')
    if factor <= 1.0:
        raise ConfigError(f'shrink_factor must be greater than 1, got {value!r}')
    return factor


def parse_max_iterations(value: Any) -> int | None:
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f'unable to parse max_iterations: {value!r}') from None
    if number < 1:
        raise ConfigError(f'max_iterations must be positive, got {value!r}')
    return number


def _pick(primary: Any, fallback: Any) -> Any:
    if primary is not None:
        return primary
    return fallback


def _absolute(value: str | Path) -> Path:
    return Path(value).expanduser().resolve()


def _absolute_optional(value: str | Path | None) -> Path | None:
    if value is None:
        return None
    return _absolute(value)


def _resolve_path(base: Path, value: str | Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _resolve_optional_path(base: Path, value: str | Path | None) -> Path | None:
    if value is None:
        return None
    return _resolve_path(base, value)
