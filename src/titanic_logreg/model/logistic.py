"""Hypothesis, cost and gradient updates for the passenger weight model.

The logistic function used here is ``1 / (1 + e^z)``, the mirror image of the
usual ``1 / (1 + e^-z)``. Hypothesis, cost and update all rely on the same
convention; do not flip one of them in isolation.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .encoding import iter_contributions
from .errors import EmptyDatasetError, NumericOverflowError
from .records import BinaryClass, LabeledPassenger, Passenger
from .weights import WeightStore

# Clamp bounds for the exponent. Above MAX_EXPONENT math.exp overflows; below
# MIN_EXPONENT 1 + e^z rounds to exactly 1.0 and the hypothesis would hit 1.0.
MAX_EXPONENT = 709.0
MIN_EXPONENT = -36.0


def sigmoid(z: float) -> float:
    """Return ``1 / (1 + e^z)`` with ``z`` clamped so the result stays inside (0, 1).

    Raises:
        NumericOverflowError: If ``z`` is NaN, which no clamp can repair.
    """
    if math.isnan(z):
        raise NumericOverflowError('weighted sum is NaN, weights are no longer finite')
    z = min(max(z, MIN_EXPONENT), MAX_EXPONENT)
    return 1.0 / (math.exp(z) + 1.0)


def weighted_sum(weights: WeightStore, record: Passenger, grow: bool = True) -> float:
    """Bias plus every field's ``weight[index] * scale`` in field order."""
    total = weights.bias
    for spec, contribution in iter_contributions(record):
        weight = weights.get(spec, contribution.index, record.record_id, grow=grow)
        total += weight * contribution.scale
    return total


def hypothesis(weights: WeightStore, record: Passenger, grow: bool = True) -> float:
    return sigmoid(weighted_sum(weights, record, grow=grow))


def cost(weights: WeightStore, record: LabeledPassenger) -> float:
    """Negative log-likelihood of the record's known outcome."""
    h = hypothesis(weights, record)
    if record.answer is BinaryClass.YES:
        return -math.log(h)
    return -math.log(1.0 - h)


def average_cost(weights: WeightStore, records: Sequence[LabeledPassenger]) -> float:
    """Mean cost over ``records``.

    Raises:
        EmptyDatasetError: If ``records`` is empty.
    """
    if not records:
        raise EmptyDatasetError('average_cost requires at least one record')
    total = 0.0
    for record in records:
        total += cost(weights, record)
    return total / len(records)


def diff_hypothesis(weights: WeightStore, record: LabeledPassenger) -> float:
    """Error term driving the update: ``1 - h`` for survivors, ``h`` otherwise."""
    h = hypothesis(weights, record)
    if record.answer is BinaryClass.YES:
        return 1.0 - h
    return h


def apply_update(weights: WeightStore, delta: float, record: Passenger) -> None:
    """Add ``delta`` to the bias and ``delta * scale`` to every slot the record reads."""
    weights.bias += delta
    for spec, contribution in iter_contributions(record):
        weights.add(spec, contribution.index, delta * contribution.scale, record.record_id)


def gradient_descent_update(
    weights: WeightStore,
    learning_rate: float,
    records: Sequence[LabeledPassenger],
) -> None:
    """Run one batch pass over ``records``.

    Every diff is computed against a single snapshot taken before the pass;
    only then are the updates applied to ``weights``. Reading live weights
    while updating would turn this into an online pass.
    """
    frozen = weights.snapshot()
    diffs = [diff_hypothesis(frozen, record) for record in records]
    for record, diff in zip(records, diffs, strict=True):
        apply_update(weights, -learning_rate * diff, record)
