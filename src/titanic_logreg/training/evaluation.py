"""Fit diagnostics computed on labeled records."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np
from sklearn.metrics import accuracy_score, confusion_matrix, f1_score

from ..model.errors import EmptyDatasetError
from ..model.logistic import average_cost
from ..model.predict import predict_batch
from ..model.records import BinaryClass, LabeledPassenger
from ..model.weights import WeightStore

LABELS = [BinaryClass.NO.value, BinaryClass.YES.value]


@dataclass
class FitMetrics:
    """Metrics of a weight store on the records it was trained on."""

    accuracy: float
    f1_survived: float
    avg_cost: float
    support: int
    # Rows are true labels, columns predictions, both ordered (NO, YES).
    confusion_matrix: list[list[int]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def evaluate_training_fit(
    weights: WeightStore,
    records: Sequence[LabeledPassenger],
) -> FitMetrics:
    """Score ``weights`` against the known outcomes of ``records``.

    Raises:
        EmptyDatasetError: If ``records`` is empty.
    """
    if not records:
        raise EmptyDatasetError('evaluate_training_fit requires at least one record')

    y_true = np.array([record.answer.value for record in records])
    y_pred = np.array([outcome.prediction.value for outcome in predict_batch(weights, records)])

    return FitMetrics(
        accuracy=float(accuracy_score(y_true, y_pred)),
        f1_survived=float(
            f1_score(y_true, y_pred, pos_label=BinaryClass.YES.value, zero_division=0)
        ),
        avg_cost=average_cost(weights, records),
        support=len(records),
        confusion_matrix=confusion_matrix(y_true, y_pred, labels=LABELS).tolist(),
    )
