"""Batch gradient-descent loop with learning-rate shrinking."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import NoReturn, Protocol

from ..utils import get_logger, json_log
from .errors import NumericOverflowError, TrainingCancelledError
from .logistic import average_cost, gradient_descent_update
from .records import LabeledPassenger
from .weights import WeightStore

log = get_logger(__name__)

DEFAULT_SHRINK_FACTOR = 100.0


class CancelToken(Protocol):
    """Anything with an ``is_set()`` method, e.g. ``threading.Event``."""

    def is_set(self) -> bool: ...


class SolverState(str, Enum):
    INIT = 'init'
    ITERATING = 'iterating'
    CONVERGED = 'converged'
    CANCELLED = 'cancelled'
    FAILED = 'failed'


@dataclass
class SolveResult:
    """Outcome of a solver run."""

    weights: WeightStore
    state: SolverState
    iterations: int
    avg_cost: float
    learning_rate: float
    cost_history: list[float] = field(default_factory=list)
    shrink_events: list[int] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.state is SolverState.CONVERGED


def solve(
    records: Sequence[LabeledPassenger],
    weights: WeightStore,
    learning_rate: float,
    tolerance: float,
    shrink_factor: float = DEFAULT_SHRINK_FACTOR,
    max_iterations: int | None = None,
    cancel: CancelToken | None = None,
) -> SolveResult:
    """Train ``weights`` in place until the average cost drops to ``tolerance``.

    Whenever a pass makes the average cost worse, the learning rate is divided
    by ``shrink_factor`` and training continues.

    There is no iteration ceiling unless ``max_iterations`` is given. Both
    ``max_iterations`` and ``cancel`` are checked between passes.

    Raises:
        EmptyDatasetError: If ``records`` is empty.
        EncodingError: If the weight store is structurally corrupted.
        TrainingCancelledError: If cancelled or the iteration ceiling is hit.
            The partial result is attached as ``exc.result``.
        NumericOverflowError: If a pass leaves a weight or the average cost
            non-finite. The partial result is attached as ``exc.result``.
    """
    if shrink_factor <= 1.0:
        raise ValueError(f'shrink_factor must be greater than 1, got {shrink_factor}')
    if max_iterations is not None and max_iterations < 1:
        raise ValueError(f'max_iterations must be positive, got {max_iterations}')

    result = SolveResult(
        weights=weights,
        state=SolverState.INIT,
        iterations=0,
        avg_cost=math.nan,
        learning_rate=learning_rate,
    )
    result.avg_cost = _checked_cost(result, records)
    result.cost_history.append(result.avg_cost)
    log.info(
        json_log(
            'solver.start',
            component='solver',
            records=len(records),
            learning_rate=learning_rate,
            tolerance=tolerance,
            shrink_factor=shrink_factor,
            avg_cost=result.avg_cost,
        )
    )

    result.state = SolverState.ITERATING
    while result.avg_cost > tolerance:
        if cancel is not None and cancel.is_set():
            _cancel(result, 'cancel requested')
        if max_iterations is not None and result.iterations >= max_iterations:
            _cancel(result, f'max_iterations={max_iterations} reached')

        try:
            gradient_descent_update(weights, result.learning_rate, records)
        except NumericOverflowError:
            _overflow(result)
        result.iterations += 1
        new_cost = _checked_cost(result, records)
        if new_cost > result.avg_cost:
            result.learning_rate /= shrink_factor
            result.shrink_events.append(result.iterations)
            log.info(
                json_log(
                    'solver.learning_rate.shrink',
                    component='solver',
                    iteration=result.iterations,
                    previous_cost=result.avg_cost,
                    avg_cost=new_cost,
                    learning_rate=result.learning_rate,
                )
            )
        result.avg_cost = new_cost
        result.cost_history.append(new_cost)
        log.debug(
            json_log(
                'solver.iteration',
                component='solver',
                iteration=result.iterations,
                avg_cost=new_cost,
            )
        )

    result.state = SolverState.CONVERGED
    log.info(
        json_log(
            'solver.converged',
            component='solver',
            iterations=result.iterations,
            avg_cost=result.avg_cost,
            learning_rate=result.learning_rate,
            weights=weights.to_dict(),
        )
    )
    return result


def _cancel(result: SolveResult, reason: str) -> None:
    result.state = SolverState.CANCELLED
    log.warning(
        json_log(
            'solver.cancelled',
            component='solver',
            reason=reason,
            iterations=result.iterations,
            avg_cost=result.avg_cost,
        )
    )
    raise TrainingCancelledError(
        f'Training stopped after {result.iterations} iteration(s): {reason}', result
    )


def _checked_cost(result: SolveResult, records: Sequence[LabeledPassenger]) -> float:
    if result.weights.is_finite():
        try:
            avg_cost = average_cost(result.weights, records)
        except NumericOverflowError:
            avg_cost = math.nan
        if math.isfinite(avg_cost):
            return avg_cost
    _overflow(result)


def _overflow(result: SolveResult) -> NoReturn:
    result.state = SolverState.FAILED
    log.error(
        json_log(
            'solver.overflow',
            component='solver',
            iterations=result.iterations,
            learning_rate=result.learning_rate,
            last_finite_cost=result.cost_history[-1] if result.cost_history else None,
        )
    )
    raise NumericOverflowError(
        f'Weights left the finite range after {result.iterations} iteration(s); '
        f'try a smaller learning rate (was {result.learning_rate})',
        result,
    )
