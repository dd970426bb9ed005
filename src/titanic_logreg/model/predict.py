"""Apply a trained weight store to unseen records."""

from __future__ import annotations

from collections.abc import Iterable

from .logistic import hypothesis
from .records import BinaryClass, Outcome, Passenger
from .weights import WeightStore

DECISION_THRESHOLD = 0.5


def predict(weights: WeightStore, record: Passenger) -> Outcome:
    """Classify a single record. ``weights`` is never modified."""
    probability = hypothesis(weights, record, grow=False)
    prediction = BinaryClass.YES if probability > DECISION_THRESHOLD else BinaryClass.NO
    return Outcome(record_id=record.record_id, prediction=prediction)


def predict_batch(weights: WeightStore, records: Iterable[Passenger]) -> list[Outcome]:
    """Classify records independently, preserving input order."""
    return [predict(weights, record) for record in records]
